from pydantic import BaseModel, ConfigDict, Field


class JobCache(BaseModel):
    enabled: bool = False


class Job(BaseModel):
    """A build task set owned by a project's pipeline.

    `name` and `image` are checked when a `JobRunner` is built, not here.
    """

    name: str
    image: str = ""
    tasks: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict, repr=False)
    mount_path: str | None = Field(default=None, alias="mountPath")
    cache: JobCache = Field(default_factory=JobCache)
    privileged: bool = False

    model_config = ConfigDict(populate_by_name=True)
