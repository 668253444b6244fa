"""
Categories Router

Pages of the /Categories folder (administrators only).

The Index page lists every category; ?id=N also returns the books linked
to category N through the book/category junction table.
"""

from fastapi import APIRouter, status

from library_catalog.dependencies import CatalogGateway, RecordId, SelectedId
from library_catalog.models import Category
from library_catalog.schemas import (
    BookSummary,
    CategoryCreate,
    CategoryIndexResponse,
    CategoryResponse,
    CategoryUpdate,
)
from library_catalog.services import catalog
from library_catalog.services.records import create_record, update_record

router = APIRouter(
    prefix="/Categories",
    tags=["Categories"],
    responses={
        404: {"description": "Category not found"},
    },
)


@router.get(
    "/Index",
    response_model=CategoryIndexResponse,
    summary="List categories",
    description="All categories by name, plus the books of the selected category.",
)
def index(gateway: CatalogGateway, category_id: SelectedId = None) -> CategoryIndexResponse:
    """
    Category listing page.

    Examples:
        GET /Categories/Index
        GET /Categories/Index?id=2
    """
    return CategoryIndexResponse.model_validate(catalog.category_index(gateway, category_id))


@router.get("/Details", response_model=CategoryResponse, summary="Get a category")
def details(category_id: RecordId, gateway: CatalogGateway) -> CategoryResponse:
    return CategoryResponse.model_validate(gateway.find(Category, category_id))


@router.get(
    "/Books",
    response_model=list[BookSummary],
    summary="Books in a category",
)
def books(category_id: RecordId, gateway: CatalogGateway) -> list[BookSummary]:
    return [
        BookSummary.model_validate(book)
        for book in catalog.books_in_category(gateway, category_id)
    ]


@router.post(
    "/Create",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
)
def create(category_data: CategoryCreate, gateway: CatalogGateway) -> CategoryResponse:
    category = create_record(gateway, Category, "category", category_data.model_dump())
    return CategoryResponse.model_validate(category)


@router.post(
    "/Edit",
    response_model=CategoryResponse,
    summary="Edit a category",
    responses={409: {"description": "Category was changed by someone else"}},
)
def edit(
    category_id: RecordId,
    category_data: CategoryUpdate,
    gateway: CatalogGateway,
) -> CategoryResponse:
    values = category_data.model_dump(exclude_unset=True, exclude={"version"})
    category = update_record(
        gateway,
        Category,
        "category",
        category_id,
        values,
        expected_version=category_data.version,
    )
    return CategoryResponse.model_validate(category)


@router.post(
    "/Delete",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a category",
)
def delete(category_id: RecordId, gateway: CatalogGateway) -> None:
    """Delete a category and its book links. The books themselves stay."""
    gateway.delete(Category, category_id)
