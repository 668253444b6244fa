"""
Category Pydantic Schemas

Schemas for category pages. Follows the same pattern as the Author schemas.
"""

from pydantic import BaseModel, ConfigDict, Field


class CategoryBase(BaseModel):
    category_name: str = Field(
        ...,
        description="Category name",
        examples=["Fantasy", "History", "Poetry"],
    )


class CategoryCreate(CategoryBase):
    """Schema for creating a new category."""
    pass


class CategoryUpdate(BaseModel):
    """Schema for editing a category."""

    category_name: str | None = Field(default=None, description="Category name")
    version: int = Field(..., ge=1, description="Version the edit is based on")


class CategoryResponse(CategoryBase):
    """Schema for category responses."""

    id: int = Field(..., description="Unique identifier")
    version: int = Field(..., description="Row version for optimistic concurrency")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {"id": 1, "category_name": "Fantasy", "version": 1}
        },
    )


class AssignedCategoryResponse(BaseModel):
    """One entry of a book's category checkbox list."""

    category_id: int
    category_name: str
    assigned: bool

    model_config = ConfigDict(from_attributes=True)
