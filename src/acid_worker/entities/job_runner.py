from kubernetes import client as k
from pydantic import BaseModel, ConfigDict, model_validator


class JobRunner(BaseModel):
    """The paired (Secret, Pod) bundle of one build attempt"""

    name: str
    secret: k.V1Secret  # type: ignore
    runner: k.V1Pod  # type: ignore

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @model_validator(mode="after")
    def _check_pairing(self) -> "JobRunner":
        assert self.secret.metadata and self.runner.metadata
        if not self.secret.metadata.name == self.runner.metadata.name == self.name:
            raise ValueError(
                f"Secret '{self.secret.metadata.name}' and runner '{self.runner.metadata.name}' "
                f"must both be named '{self.name}'"
            )
        secret_commit = (self.secret.metadata.labels or {}).get("commit")
        runner_commit = (self.runner.metadata.labels or {}).get("commit")
        if secret_commit != runner_commit:
            raise ValueError(f"Commit labels differ: '{secret_commit}' != '{runner_commit}'")
        return self
