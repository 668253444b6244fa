"""
Record Service

Validated create/update for the simple page folders (authors, publishers,
categories, members). Each call checks the values against the entity's
rules before handing them to the gateway.
"""

from typing import Any, TypeVar

from library_catalog.database import Base
from library_catalog.errors import ValidationFailed
from library_catalog.services.gateway import Gateway
from library_catalog.validation import validate_fields

T = TypeVar("T", bound=Base)


def create_record(gateway: Gateway, model: type[T], entity: str, values: dict[str, Any]) -> T:
    """
    Validate and insert a new row.

    Raises:
        ValidationFailed: If any field breaks a rule
    """
    errors = validate_fields(entity, values)
    if errors:
        raise ValidationFailed(errors)
    return gateway.add(model(**values))


def update_record(
    gateway: Gateway,
    model: type[T],
    entity: str,
    entity_id: int,
    values: dict[str, Any],
    expected_version: int | None = None,
) -> T:
    """
    Validate the provided fields and update the row.

    Raises:
        ValidationFailed: If any provided field breaks a rule
        NotFound: If the row does not exist
        ConcurrencyConflict: If the row changed since expected_version
    """
    errors = validate_fields(entity, values, partial=True)
    if errors:
        raise ValidationFailed(errors)
    return gateway.update(model, entity_id, values, expected_version)
