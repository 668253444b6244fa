"""
Borrowings Router

Pages of the /Borrowings folder (any signed-in caller).

A borrowing is open while its return_date is empty; POST /Borrowings/Return
closes it. Borrowing is permissive: a member may hold any number of books
and a book that is already out can be lent again.
"""

from typing import Annotated

from fastapi import APIRouter, Query, status

from library_catalog.dependencies import CatalogGateway, RecordId, SelectedBookId
from library_catalog.models import Borrowing
from library_catalog.schemas import (
    BorrowingCreate,
    BorrowingResponse,
    BorrowingReturn,
)
from library_catalog.services import borrowing as borrowing_service

router = APIRouter(
    prefix="/Borrowings",
    tags=["Borrowings"],
    responses={
        404: {"description": "Borrowing, member or book not found"},
    },
)


@router.get(
    "/Index",
    response_model=list[BorrowingResponse],
    summary="List borrowings",
    description="Borrowings newest first, optionally for one member or book, or only open ones.",
)
def index(
    gateway: CatalogGateway,
    book_id: SelectedBookId = None,
    member_id: Annotated[int | None, Query(alias="memberID", ge=1)] = None,
    active_only: Annotated[bool, Query(alias="activeOnly")] = False,
) -> list[BorrowingResponse]:
    """
    Borrowing listing page.

    Examples:
        GET /Borrowings/Index?activeOnly=true
        GET /Borrowings/Index?bookID=3
        GET /Borrowings/Index?memberID=2
    """
    records = borrowing_service.list_borrowings(
        gateway,
        member_id=member_id,
        book_id=book_id,
        active_only=active_only,
    )
    return [BorrowingResponse.model_validate(b) for b in records]


@router.get("/Details", response_model=BorrowingResponse, summary="Get a borrowing")
def details(borrowing_id: RecordId, gateway: CatalogGateway) -> BorrowingResponse:
    return BorrowingResponse.model_validate(
        borrowing_service.get_borrowing(gateway, borrowing_id)
    )


@router.post(
    "/Create",
    response_model=BorrowingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Borrow a book",
)
def create(borrowing_data: BorrowingCreate, gateway: CatalogGateway) -> BorrowingResponse:
    """Lend a book to a member. The new borrowing has no return date."""
    record = borrowing_service.borrow(gateway, borrowing_data.member_id, borrowing_data.book_id)
    return BorrowingResponse.model_validate(record)


@router.post(
    "/Return",
    response_model=BorrowingResponse,
    summary="Return a book",
    responses={409: {"description": "Book already returned"}},
)
def return_book(
    borrowing_id: RecordId,
    gateway: CatalogGateway,
    return_data: BorrowingReturn | None = None,
) -> BorrowingResponse:
    """Close a borrowing. The return date defaults to today."""
    return_date = return_data.return_date if return_data else None
    record = borrowing_service.return_book(gateway, borrowing_id, return_date)
    return BorrowingResponse.model_validate(record)


@router.post(
    "/Delete",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a borrowing",
)
def delete(borrowing_id: RecordId, gateway: CatalogGateway) -> None:
    gateway.delete(Borrowing, borrowing_id)
