"""
Books Router

Pages of the /Books folder.

Index and Details are public; every other page needs a signed-in caller
(enforced by the authorization middleware before these handlers run).

Demonstrates:
- Search and sort over title / author name
- Category checkboxes on the create and edit forms
- Optimistic concurrency on edit (version field)
"""

from fastapi import APIRouter, status

from library_catalog.dependencies import (
    CatalogGateway,
    RecordId,
    SearchText,
    SelectedId,
    SortKeyParam,
)
from library_catalog.models import Author, Book, Publisher
from library_catalog.schemas import (
    AssignedCategoryResponse,
    AuthorResponse,
    BookCreate,
    BookFormResponse,
    BookIndexResponse,
    BookResponse,
    BookUpdate,
    PublisherResponse,
)
from library_catalog.services import catalog
from library_catalog.services.catalog import SortKey
from library_catalog.services.gateway import Gateway

router = APIRouter(
    prefix="/Books",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
    },
)


def build_book_form(gateway: Gateway, book: Book | None = None) -> BookFormResponse:
    """Collect the book plus every author, publisher and category checkbox."""
    authors = gateway.list(Author, order_by=(Author.last_name, Author.first_name))
    publishers = gateway.list(Publisher, order_by=(Publisher.publisher_name,))

    return BookFormResponse(
        book=BookResponse.model_validate(book) if book else None,
        authors=[AuthorResponse.model_validate(a) for a in authors],
        publishers=[PublisherResponse.model_validate(p) for p in publishers],
        categories=[
            AssignedCategoryResponse.model_validate(c)
            for c in catalog.assigned_category_data(gateway, book)
        ],
    )


@router.get(
    "/Index",
    response_model=BookIndexResponse,
    summary="List books",
    description="Books filtered by title or author name and sorted by title or author.",
)
def index(
    gateway: CatalogGateway,
    search_text: SearchText = None,
    sort_key: SortKeyParam = SortKey.TITLE,
    book_id: SelectedId = None,
) -> BookIndexResponse:
    """
    Book listing page.

    Examples:
        GET /Books/Index?searchText=tolkien
        GET /Books/Index?sortKey=author
        GET /Books/Index?id=3   (also returns book 3's categories)
    """
    data = catalog.book_index(gateway, search_text, sort_key, book_id)
    return BookIndexResponse.model_validate(data)


@router.get(
    "/Details",
    response_model=BookResponse,
    summary="Get a book",
)
def details(book_id: RecordId, gateway: CatalogGateway) -> BookResponse:
    """A book with its author, publisher and categories."""
    return BookResponse.model_validate(catalog.get_book(gateway, book_id))


@router.get(
    "/Create",
    response_model=BookFormResponse,
    summary="Book creation form",
)
def create_form(gateway: CatalogGateway) -> BookFormResponse:
    """Authors, publishers and (unchecked) categories to pick from."""
    return build_book_form(gateway)


@router.post(
    "/Create",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a book",
)
def create(book_data: BookCreate, gateway: CatalogGateway) -> BookResponse:
    """
    Create a book and link it to the selected categories.

    Raises:
        ValidationFailed (422): Title/price out of bounds, unknown author/publisher
        NotFound (404): A selected category does not exist
    """
    values = book_data.model_dump(exclude={"selected_categories"})
    book = catalog.create_book(gateway, values, book_data.selected_categories)
    return BookResponse.model_validate(book)


@router.get(
    "/Edit",
    response_model=BookFormResponse,
    summary="Book edit form",
)
def edit_form(book_id: RecordId, gateway: CatalogGateway) -> BookFormResponse:
    """The book, its version, and the category checkboxes with current state."""
    book = catalog.get_book(gateway, book_id)
    return build_book_form(gateway, book)


@router.post(
    "/Edit",
    response_model=BookResponse,
    summary="Edit a book",
    responses={409: {"description": "Book was changed by someone else"}},
)
def edit(book_id: RecordId, book_data: BookUpdate, gateway: CatalogGateway) -> BookResponse:
    """
    Update a book's fields and categories.

    Only provided fields change. The version must match the stored one,
    otherwise 409 is returned and nothing is saved.
    """
    values = book_data.model_dump(
        exclude_unset=True,
        exclude={"selected_categories", "version"},
    )
    book = catalog.update_book(
        gateway,
        book_id,
        values,
        expected_version=book_data.version,
        selected_category_ids=book_data.selected_categories,
    )
    return BookResponse.model_validate(book)


@router.post(
    "/Delete",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a book",
)
def delete(book_id: RecordId, gateway: CatalogGateway) -> None:
    """Delete a book together with its category links and borrowings."""
    gateway.delete(Book, book_id)
