"""
Validation Rules

Field rules for every entity, kept in one explicit table and evaluated by a
single function.

Pydantic schemas only check shape and types (is price a number, is the date
a date). Business constraints live here so services can validate data from
any source and return every problem at once as a field → message map:

    >>> validate_fields("member", {"first_name": "ana", ...})
    {'first_name': 'First name must start with a capital letter ...'}

An empty dict means the values are valid.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any


# =============================================================================
# Rule Types
# =============================================================================
@dataclass(frozen=True)
class Required:
    message: str

    def check(self, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, str):
            return bool(value.strip())
        return True


@dataclass(frozen=True)
class Length:
    min: int
    max: int
    message: str

    def check(self, value: Any) -> bool:
        return self.min <= len(str(value)) <= self.max


@dataclass(frozen=True)
class MaxLength:
    max: int
    message: str

    def check(self, value: Any) -> bool:
        return len(str(value)) <= self.max


@dataclass(frozen=True)
class Pattern:
    regex: str
    message: str

    def check(self, value: Any) -> bool:
        return re.fullmatch(self.regex, str(value)) is not None


@dataclass(frozen=True)
class Range:
    min: Decimal
    max: Decimal
    message: str

    def check(self, value: Any) -> bool:
        try:
            number = Decimal(str(value))
        except InvalidOperation:
            return False
        return self.min <= number <= self.max


# Rules other than Required are skipped for empty values, so optional
# fields may be left out.
Rule = Required | Length | MaxLength | Pattern | Range

NAME_PATTERN = r"[A-Z][a-zA-Z\s-]{2,29}"
PHONE_PATTERN = r"\d{4}[-. ]\d{3}[-. ]\d{3}"


# =============================================================================
# Rule Table
# =============================================================================
RULES: dict[str, dict[str, tuple[Rule, ...]]] = {
    "book": {
        "title": (
            Required("Title is required"),
            Length(3, 150, "Title must be between 3 and 150 characters"),
        ),
        "price": (
            Required("Price is required"),
            Range(Decimal("0.01"), Decimal("500"), "Price must be between 0.01 and 500"),
        ),
        "publishing_date": (
            Required("Publishing date is required"),
        ),
    },
    "author": {
        "first_name": (
            Required("First name is required"),
            MaxLength(100, "First name cannot be longer than 100 characters"),
        ),
        "last_name": (
            Required("Last name is required"),
            MaxLength(100, "Last name cannot be longer than 100 characters"),
        ),
    },
    "publisher": {
        "publisher_name": (
            Required("Publisher name is required"),
            MaxLength(150, "Publisher name cannot be longer than 150 characters"),
        ),
    },
    "category": {
        "category_name": (
            Required("Category name is required"),
            MaxLength(100, "Category name cannot be longer than 100 characters"),
        ),
    },
    "member": {
        "first_name": (
            Required("First name is required"),
            Pattern(
                NAME_PATTERN,
                "First name must start with a capital letter and have "
                "3 to 30 letters, spaces or hyphens",
            ),
        ),
        "last_name": (
            Required("Last name is required"),
            Pattern(
                NAME_PATTERN,
                "Last name must start with a capital letter and have "
                "3 to 30 letters, spaces or hyphens",
            ),
        ),
        "address": (
            MaxLength(70, "Address cannot be longer than 70 characters"),
        ),
        "email": (
            Required("Email is required"),
        ),
        "phone": (
            Pattern(
                PHONE_PATTERN,
                "Phone must look like '0722-123-123', '0722.123.123' or '0722 123 123'",
            ),
        ),
    },
    "borrowing": {
        "member_id": (Required("Member is required"),),
        "book_id": (Required("Book is required"),),
    },
}


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_fields(
    entity: str,
    values: Mapping[str, Any],
    partial: bool = False,
) -> dict[str, str]:
    """
    Check values against the rules registered for an entity.

    Args:
        entity: Key in RULES ("book", "member", ...)
        values: Field values, usually a schema's model_dump()
        partial: Only check fields present in values (edit forms)

    Returns:
        Field → message for the first rule each field breaks

    Raises:
        KeyError: If no rules are registered for the entity
    """
    errors: dict[str, str] = {}

    for field, rules in RULES[entity].items():
        if partial and field not in values:
            continue

        value = values.get(field)
        for rule in rules:
            if isinstance(rule, Required):
                passed = rule.check(value)
            elif _is_empty(value):
                passed = True
            else:
                passed = rule.check(value)

            if not passed:
                errors[field] = rule.message
                break

    return errors
