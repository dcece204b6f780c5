def _exception_from_packed_args(exception_cls, args=None, kwargs=None):
    # This is helpful for reducing Exceptions that only accept kwargs as
    # only positional arguments can be provided for __reduce__
    # Ideally, this would also be a class method on ServiceError
    # but instance methods cannot be pickled.
    if args is None:
        args = ()
    if kwargs is None:
        kwargs = {}
    return exception_cls(*args, **kwargs)


class ServiceError(Exception):
    """
    The base exception class for Service exceptions.

    :ivar msg: The descriptive message associated with the error.
    """

    fmt = "{msg}"

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.msg = self.fmt.format(**kwargs)
        super().__init__(self.msg)

    def __reduce__(self):
        return _exception_from_packed_args, (self.__class__, None, self.kwargs)


class InvalidJobNameError(ServiceError):
    """
    The job name is not a valid Kubernetes resource name segment.

    :ivar name: The offending job name.
    """

    fmt = "Invalid job name '{name}': expected lowercase alphanumerics and '-', at most 41 characters"


class MissingImageError(ServiceError):
    """
    :ivar job_name: Name of the job without a container image.
    """

    fmt = "Job '{job_name}' has no container image"


class ReservedEnvKeyError(ServiceError):
    """
    A job environment variable uses a name the job runner reserves for itself.

    :ivar job_name: Name of the job.
    :ivar key: The reserved environment variable name.
    """

    fmt = "Job '{job_name}' cannot set environment variable '{key}': the name is reserved"


class DecodeError(ServiceError):
    """
    A base64 payload could not be decoded.

    Never carries the payload itself, which may be secret data.

    :ivar value_name: What was being decoded.
    """

    fmt = "Unable to decode base64 payload of {value_name}"


class MalformedSecretError(ServiceError):
    """
    A project secret lacks a required field, or the field could not be decoded.

    :ivar secret_name: Name of the Kubernetes Secret.
    :ivar field: The missing or undecodable data field.
    """

    fmt = "Malformed project secret '{secret_name}': field '{field}' is missing or undecodable"


class MalformedSecretsBlobError(ServiceError):
    """
    :ivar secret_name: Name of the Kubernetes Secret.
    """

    fmt = "Malformed project secret '{secret_name}': field 'secrets' is not a JSON object"
