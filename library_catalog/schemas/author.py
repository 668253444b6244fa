"""
Author Pydantic Schemas

These schemas define the shape of Author request and response bodies.
Length limits and other business rules are checked by
library_catalog.validation, so every problem comes back as one field map.
"""

from pydantic import BaseModel, ConfigDict, Field


class AuthorBase(BaseModel):
    """Shared author fields."""

    first_name: str = Field(
        ...,
        description="Author's first name",
        examples=["J.R.R.", "Mihai"],
    )

    last_name: str = Field(
        ...,
        description="Author's last name",
        examples=["Tolkien", "Eminescu"],
    )


class AuthorCreate(AuthorBase):
    """Schema for creating a new author."""
    pass


class AuthorUpdate(BaseModel):
    """
    Schema for editing an author.

    Only provided fields are changed. version is the value read with the
    author; a stale version is rejected with 409.
    """

    first_name: str | None = Field(default=None, description="Author's first name")
    last_name: str | None = Field(default=None, description="Author's last name")
    version: int = Field(..., ge=1, description="Version the edit is based on")


class AuthorResponse(AuthorBase):
    """Schema for author responses, including the derived full name."""

    id: int = Field(..., description="Unique identifier")
    full_name: str = Field(..., description="First and last name")
    version: int = Field(..., description="Row version for optimistic concurrency")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "first_name": "J.R.R.",
                "last_name": "Tolkien",
                "full_name": "J.R.R. Tolkien",
                "version": 1,
            }
        },
    )
