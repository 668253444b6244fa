"""
Publisher Pydantic Schemas
"""

from pydantic import BaseModel, ConfigDict, Field


class PublisherBase(BaseModel):
    publisher_name: str = Field(
        ...,
        description="Publishing house name",
        examples=["Humanitas", "Polirom"],
    )


class PublisherCreate(PublisherBase):
    pass


class PublisherUpdate(BaseModel):
    publisher_name: str | None = Field(default=None, description="Publishing house name")
    version: int = Field(..., ge=1, description="Version the edit is based on")


class PublisherResponse(PublisherBase):
    id: int = Field(..., description="Unique identifier")
    version: int = Field(..., description="Row version for optimistic concurrency")

    model_config = ConfigDict(from_attributes=True)
