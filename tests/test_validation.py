"""
Tests for the Validation Rule Table

validate_fields() returns a field → message map; empty means valid.
"""

from datetime import date
from decimal import Decimal

import pytest

from library_catalog.validation import validate_fields


def valid_book(**overrides) -> dict:
    values = {
        "title": "The Hobbit",
        "price": Decimal("14.99"),
        "publishing_date": date(1937, 9, 21),
    }
    values.update(overrides)
    return values


class TestBookRules:
    def test_valid_book(self):
        assert validate_fields("book", valid_book()) == {}

    @pytest.mark.parametrize(
        "title,valid",
        [
            ("Ab", False),
            ("Abc", True),
            ("A" * 150, True),
            ("A" * 151, False),
        ],
    )
    def test_title_length(self, title, valid):
        errors = validate_fields("book", valid_book(title=title))
        assert ("title" not in errors) is valid

    @pytest.mark.parametrize(
        "price,valid",
        [
            (Decimal("0"), False),
            (Decimal("0.01"), True),
            (Decimal("500"), True),
            (Decimal("500.01"), False),
        ],
    )
    def test_price_range(self, price, valid):
        errors = validate_fields("book", valid_book(price=price))
        assert ("price" not in errors) is valid

    def test_missing_fields_are_reported_together(self):
        errors = validate_fields("book", {"title": "  "})

        assert errors == {
            "title": "Title is required",
            "price": "Price is required",
            "publishing_date": "Publishing date is required",
        }

    def test_partial_only_checks_given_fields(self):
        assert validate_fields("book", {"price": Decimal("10")}, partial=True) == {}
        assert "title" in validate_fields("book", {"title": "No"}, partial=True)


class TestMemberRules:
    def valid_member(self, **overrides) -> dict:
        values = {
            "first_name": "Ana",
            "last_name": "Pop-Ionescu",
            "address": "Str. Memorandumului 28",
            "email": "ana.pop@example.com",
            "phone": "0722-123-123",
        }
        values.update(overrides)
        return values

    def test_valid_member(self):
        assert validate_fields("member", self.valid_member()) == {}

    @pytest.mark.parametrize("name", ["ana", "An", "Ana1", "A" + "b" * 30])
    def test_invalid_first_name(self, name):
        errors = validate_fields("member", self.valid_member(first_name=name))
        assert "first_name" in errors

    @pytest.mark.parametrize("phone", ["0722-123-123", "0722.123.123", "0722 123 123"])
    def test_accepted_phone_formats(self, phone):
        assert validate_fields("member", self.valid_member(phone=phone)) == {}

    @pytest.mark.parametrize("phone", ["0722123123", "722-123-123", "0722-123-1234"])
    def test_rejected_phone_formats(self, phone):
        errors = validate_fields("member", self.valid_member(phone=phone))
        assert "phone" in errors

    def test_optional_fields_may_be_empty(self):
        values = self.valid_member(address=None, phone="")
        assert validate_fields("member", values) == {}

    def test_address_max_length(self):
        errors = validate_fields("member", self.valid_member(address="x" * 71))
        assert errors == {"address": "Address cannot be longer than 70 characters"}


def test_unknown_entity_raises():
    with pytest.raises(KeyError):
        validate_fields("spaceship", {})
