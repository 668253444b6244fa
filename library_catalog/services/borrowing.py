"""
Borrowing Service

Lends books to members and records their return.

There is deliberately no limit on how many books a member holds at once,
and a book that is already out can be borrowed again.
"""

import logging
from datetime import date

from library_catalog.errors import AlreadyReturned
from library_catalog.models import Book, Borrowing, Member
from library_catalog.services.gateway import Gateway

logger = logging.getLogger(__name__)

BORROWING_DETAIL = ("member", "book.author")


def borrow(gateway: Gateway, member_id: int, book_id: int) -> Borrowing:
    """
    Lend a book to a member.

    Returns:
        The new Borrowing, with return_date None

    Raises:
        NotFound: If the member or the book does not exist
    """
    gateway.find(Member, member_id)
    gateway.find(Book, book_id)

    borrowing = gateway.add(Borrowing(member_id=member_id, book_id=book_id))
    logger.info(f"Member {member_id} borrowed book {book_id}")
    return get_borrowing(gateway, borrowing.id)


def return_book(gateway: Gateway, borrowing_id: int, return_date: date | None = None) -> Borrowing:
    """
    Record that a borrowed book came back.

    Args:
        borrowing_id: Borrowing to close
        return_date: Day of return; today when omitted

    Raises:
        NotFound: If the borrowing does not exist
        AlreadyReturned: If it already has a return date
    """
    borrowing = gateway.find(Borrowing, borrowing_id)
    if borrowing.return_date is not None:
        raise AlreadyReturned(borrowing_id)

    return_date = return_date or date.today()
    gateway.update(
        Borrowing,
        borrowing_id,
        {"return_date": return_date},
        expected_version=borrowing.version,
    )
    logger.info(f"Borrowing {borrowing_id} returned on {return_date}")
    return get_borrowing(gateway, borrowing_id)


def get_borrowing(gateway: Gateway, borrowing_id: int) -> Borrowing:
    return gateway.find(Borrowing, borrowing_id, include=BORROWING_DETAIL)


def list_borrowings(
    gateway: Gateway,
    member_id: int | None = None,
    book_id: int | None = None,
    active_only: bool = False,
) -> list[Borrowing]:
    """
    Borrowings with their member and book, newest first.

    Args:
        member_id: Only this member's borrowings
        book_id: Only borrowings of this book
        active_only: Only books not yet returned
    """
    criteria = []
    if member_id is not None:
        criteria.append(Borrowing.member_id == member_id)
    if book_id is not None:
        criteria.append(Borrowing.book_id == book_id)
    if active_only:
        criteria.append(Borrowing.return_date.is_(None))

    return gateway.list(
        Borrowing,
        *criteria,
        include=BORROWING_DETAIL,
        order_by=(Borrowing.id.desc(),),
    )
