"""
Book Pydantic Schemas

The most involved schemas, handling:
- Nested author, publisher and categories
- Category selection on create/edit (checkbox ids)
- The row version carried by edit forms
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from library_catalog.schemas.author import AuthorResponse
from library_catalog.schemas.category import CategoryResponse
from library_catalog.schemas.publisher import PublisherResponse


class BookBase(BaseModel):
    """
    Base schema with shared book fields.

    Title length (3-150) and price range (0.01-500) are enforced by the
    validation rules, not here.
    """

    title: str = Field(
        ...,
        description="Book title",
        examples=["The Hobbit", "Poezii"],
    )

    price: Decimal = Field(
        ...,
        description="Book price",
        examples=["39.90", "24.50"],
    )

    publishing_date: date = Field(
        ...,
        description="Date of publication",
        examples=["1937-09-21"],
    )

    author_id: int | None = Field(default=None, description="Author of the book")
    publisher_id: int | None = Field(default=None, description="Publisher of the book")


class BookCreate(BookBase):
    """
    Schema for creating a new book.

    Example request body:
    {
        "title": "The Hobbit",
        "price": "39.90",
        "publishing_date": "1937-09-21",
        "author_id": 1,
        "publisher_id": 2,
        "selected_categories": [1, 3]
    }
    """

    selected_categories: list[int] = Field(
        default=[],
        description="Ids of the categories checked on the form",
        examples=[[1, 3]],
    )


class BookUpdate(BaseModel):
    """
    Schema for editing an existing book.

    Only provided fields are changed. When selected_categories is given the
    book's categories become exactly that set; when omitted they are kept.
    """

    title: str | None = Field(default=None, description="Book title")
    price: Decimal | None = Field(default=None, description="Book price")
    publishing_date: date | None = Field(default=None, description="Date of publication")
    author_id: int | None = Field(default=None, description="Author of the book")
    publisher_id: int | None = Field(default=None, description="Publisher of the book")

    selected_categories: list[int] | None = Field(
        default=None,
        description="Ids of the categories checked on the form (replaces existing)",
    )

    version: int = Field(..., ge=1, description="Version the edit is based on")


class BookSummary(BaseModel):
    """Compact book row used inside category, publisher and author views."""

    id: int
    title: str
    price: Decimal
    publishing_date: date
    author: AuthorResponse | None = None

    model_config = ConfigDict(from_attributes=True)


class BookResponse(BookBase):
    """
    Schema for book responses.

    Includes the nested author, publisher and categories, so clients get the
    whole detail page in one call.
    """

    id: int = Field(..., description="Unique identifier")
    version: int = Field(..., description="Row version for optimistic concurrency")

    author: AuthorResponse | None = Field(default=None, description="Author")
    publisher: PublisherResponse | None = Field(default=None, description="Publisher")
    categories: list[CategoryResponse] = Field(default=[], description="Categories")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "The Hobbit",
                "price": "39.90",
                "publishing_date": "1937-09-21",
                "author_id": 1,
                "publisher_id": 1,
                "version": 1,
                "author": {
                    "id": 1,
                    "first_name": "J.R.R.",
                    "last_name": "Tolkien",
                    "full_name": "J.R.R. Tolkien",
                    "version": 1,
                },
                "publisher": {"id": 1, "publisher_name": "RAO", "version": 1},
                "categories": [{"id": 1, "category_name": "Fantasy", "version": 1}],
            }
        },
    )
