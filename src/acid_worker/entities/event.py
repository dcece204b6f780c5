from pydantic import BaseModel, ConfigDict, Field


class AcidEvent(BaseModel):
    commit: str | None = None
    build_id: str = Field(alias="buildID")

    model_config = ConfigDict(populate_by_name=True)
