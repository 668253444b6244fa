"""
View Schemas

Response shapes for the index pages and edit forms. They mirror the
*IndexData structures built by the catalog service.
"""

from pydantic import BaseModel, ConfigDict

from library_catalog.schemas.author import AuthorResponse
from library_catalog.schemas.book import BookResponse, BookSummary
from library_catalog.schemas.category import AssignedCategoryResponse, CategoryResponse
from library_catalog.schemas.publisher import PublisherResponse
from library_catalog.services.catalog import SortKey


class CategoryIndexResponse(BaseModel):
    categories: list[CategoryResponse]
    category_id: int | None = None
    books: list[BookSummary] = []

    model_config = ConfigDict(from_attributes=True)


class BookIndexResponse(BaseModel):
    books: list[BookResponse]
    search_text: str | None = None
    sort_key: SortKey
    book_id: int | None = None
    categories: list[CategoryResponse] = []

    model_config = ConfigDict(from_attributes=True)


class PublisherIndexResponse(BaseModel):
    publishers: list[PublisherResponse]
    publisher_id: int | None = None
    books: list[BookSummary] = []

    model_config = ConfigDict(from_attributes=True)


class AuthorIndexResponse(BaseModel):
    authors: list[AuthorResponse]
    author_id: int | None = None
    books: list[BookSummary] = []

    model_config = ConfigDict(from_attributes=True)


class BookFormResponse(BaseModel):
    """Everything a create/edit book form needs: the book and its choices."""

    book: BookResponse | None = None
    authors: list[AuthorResponse]
    publishers: list[PublisherResponse]
    categories: list[AssignedCategoryResponse]
