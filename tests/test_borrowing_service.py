"""
Tests for the Borrowing Service
"""

from datetime import date

import pytest

from library_catalog.errors import AlreadyReturned, NotFound
from library_catalog.services import borrowing as borrowing_service


class TestBorrow:
    def test_borrow_creates_open_borrowing(self, gateway, sample_member, sample_book):
        record = borrowing_service.borrow(gateway, sample_member.id, sample_book.id)

        assert record.id is not None
        assert record.return_date is None
        assert not record.is_returned
        assert record.member.email == "ana.pop@example.com"
        assert record.book.title == "The Hobbit"

    def test_borrow_unknown_member(self, gateway, sample_book):
        with pytest.raises(NotFound, match="Member"):
            borrowing_service.borrow(gateway, 999, sample_book.id)

    def test_borrow_unknown_book(self, gateway, sample_member):
        with pytest.raises(NotFound, match="Book"):
            borrowing_service.borrow(gateway, sample_member.id, 999)

    def test_book_already_out_can_be_borrowed_again(
        self, gateway, sample_member, sample_book, sample_borrowing
    ):
        record = borrowing_service.borrow(gateway, sample_member.id, sample_book.id)

        assert record.id != sample_borrowing.id
        assert len(borrowing_service.list_borrowings(gateway, active_only=True)) == 2


class TestReturn:
    def test_return_sets_date(self, gateway, sample_borrowing):
        record = borrowing_service.return_book(gateway, sample_borrowing.id, date(2024, 3, 1))

        assert record.return_date == date(2024, 3, 1)
        assert record.is_returned
        assert record.version == 2

    def test_return_defaults_to_today(self, gateway, sample_borrowing):
        record = borrowing_service.return_book(gateway, sample_borrowing.id)
        assert record.return_date == date.today()

    def test_second_return_fails(self, gateway, sample_borrowing):
        borrowing_service.return_book(gateway, sample_borrowing.id, date(2024, 3, 1))

        with pytest.raises(AlreadyReturned):
            borrowing_service.return_book(gateway, sample_borrowing.id, date(2024, 3, 2))

        assert borrowing_service.get_borrowing(gateway, sample_borrowing.id).return_date == date(
            2024, 3, 1
        )

    def test_return_unknown_borrowing(self, gateway):
        with pytest.raises(NotFound):
            borrowing_service.return_book(gateway, 404)


class TestListBorrowings:
    def test_filters(self, gateway, sample_member, sample_book, member_user, sample_borrowing):
        other = borrowing_service.borrow(gateway, member_user.member.id, sample_book.id)
        borrowing_service.return_book(gateway, sample_borrowing.id)

        assert [b.id for b in borrowing_service.list_borrowings(gateway)] == [
            other.id,
            sample_borrowing.id,
        ]
        assert [b.id for b in borrowing_service.list_borrowings(gateway, active_only=True)] == [
            other.id
        ]
        assert [
            b.id for b in borrowing_service.list_borrowings(gateway, member_id=sample_member.id)
        ] == [sample_borrowing.id]
        assert len(borrowing_service.list_borrowings(gateway, book_id=sample_book.id)) == 2
