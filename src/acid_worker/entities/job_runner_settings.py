from typing import Final

from pydantic import BaseModel, ConfigDict

DEFAULT_MOUNT_PATH: Final = "/src"
DEFAULT_CACHE_PATH: Final = "/mnt/acid/cache"
DEFAULT_STORAGE_PATH: Final = "/mnt/acid/share"
DEFAULT_SCRIPTS_MOUNT_PATH: Final = "/hook"
DEFAULT_SIDECAR_ANNOTATION: Final = "pod.beta.kubernetes.io/init-containers"


class JobRunnerSettings(BaseModel):
    """Immutable paths and keys used when building a `JobRunner`"""

    default_mount_path: str = DEFAULT_MOUNT_PATH
    cache_path: str = DEFAULT_CACHE_PATH
    storage_path: str = DEFAULT_STORAGE_PATH
    scripts_mount_path: str = DEFAULT_SCRIPTS_MOUNT_PATH
    sidecar_annotation: str = DEFAULT_SIDECAR_ANNOTATION

    model_config = ConfigDict(frozen=True)
