"""
Borrowing Pydantic Schemas
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from library_catalog.schemas.book import BookSummary


class BorrowingCreate(BaseModel):
    member_id: int = Field(..., description="Member borrowing the book")
    book_id: int = Field(..., description="Book being borrowed")


class BorrowingReturn(BaseModel):
    return_date: date | None = Field(
        default=None,
        description="Day the book came back (defaults to today)",
    )


class BorrowingMember(BaseModel):
    id: int
    full_name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class BorrowingResponse(BaseModel):
    """A borrowing with its member and book. return_date is null while borrowed."""

    id: int
    member_id: int
    book_id: int
    return_date: date | None = None
    is_returned: bool
    version: int

    member: BorrowingMember
    book: BookSummary

    model_config = ConfigDict(from_attributes=True)
