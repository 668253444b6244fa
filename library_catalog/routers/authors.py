"""
Authors Router

Pages of the /Authors folder (administrators only).

The Index page lists every author and, when an author is selected with
?id=N, that author's books.
"""

from fastapi import APIRouter, status

from library_catalog.dependencies import CatalogGateway, RecordId, SelectedId
from library_catalog.models import Author
from library_catalog.schemas import (
    AuthorCreate,
    AuthorIndexResponse,
    AuthorResponse,
    AuthorUpdate,
)
from library_catalog.services import catalog
from library_catalog.services.records import create_record, update_record

router = APIRouter(
    prefix="/Authors",
    tags=["Authors"],
    responses={
        404: {"description": "Author not found"},
    },
)


@router.get(
    "/Index",
    response_model=AuthorIndexResponse,
    summary="List authors",
    description="All authors by last name, plus the books of the selected author.",
)
def index(gateway: CatalogGateway, author_id: SelectedId = None) -> AuthorIndexResponse:
    return AuthorIndexResponse.model_validate(catalog.author_index(gateway, author_id))


@router.get("/Details", response_model=AuthorResponse, summary="Get an author")
def details(author_id: RecordId, gateway: CatalogGateway) -> AuthorResponse:
    return AuthorResponse.model_validate(gateway.find(Author, author_id))


@router.post(
    "/Create",
    response_model=AuthorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an author",
)
def create(author_data: AuthorCreate, gateway: CatalogGateway) -> AuthorResponse:
    """Create a new author. Both names are required (max 100 characters)."""
    author = create_record(gateway, Author, "author", author_data.model_dump())
    return AuthorResponse.model_validate(author)


@router.post(
    "/Edit",
    response_model=AuthorResponse,
    summary="Edit an author",
    responses={409: {"description": "Author was changed by someone else"}},
)
def edit(author_id: RecordId, author_data: AuthorUpdate, gateway: CatalogGateway) -> AuthorResponse:
    values = author_data.model_dump(exclude_unset=True, exclude={"version"})
    author = update_record(
        gateway, Author, "author", author_id, values, expected_version=author_data.version
    )
    return AuthorResponse.model_validate(author)


@router.post(
    "/Delete",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an author",
)
def delete(author_id: RecordId, gateway: CatalogGateway) -> None:
    """Delete an author. Their books stay, with no author."""
    gateway.delete(Author, author_id)
