from pydantic import BaseModel, ConfigDict, Field, computed_field

from acid_worker.utilities import naming_utilities


class ProjectRepo(BaseModel):
    name: str
    clone_url: str = Field(alias="cloneURL")
    ssh_key: str | None = Field(default=None, alias="sshKey", repr=False)
    token: str | None = Field(default=None, alias="githubToken", repr=False)

    model_config = ConfigDict(populate_by_name=True)


class ProjectKubernetes(BaseModel):
    namespace: str
    vcs_sidecar: str = Field(alias="vcsSidecar")

    model_config = ConfigDict(populate_by_name=True)


class Project(BaseModel):
    """Repository and cluster configuration a job runs under.

    Secret material (`repo.ssh_key`, `repo.token`, `secrets`) is excluded from `repr`.
    """

    name: str
    repo: ProjectRepo
    kubernetes: ProjectKubernetes
    secrets: dict[str, str] = Field(default_factory=dict, repr=False)

    model_config = ConfigDict(populate_by_name=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def id(self) -> str:
        """Derived from namespace and project name, never user supplied"""
        return naming_utilities.project_id(self.kubernetes.namespace, self.name)
