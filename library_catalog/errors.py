"""
Catalog Errors

Exceptions raised by the gateway, the services and the authorization gate.
They carry no HTTP knowledge; main.py registers one exception handler per
class and turns them into responses.

Status mapping:
- ValidationFailed      → 422 (field → message map)
- NotFound              → 404
- ConcurrencyConflict   → 409 (reload and retry)
- AlreadyReturned       → 409
- PartialUpdateFailure  → 500 (generic message, change set rolled back)
- Unauthenticated       → 401
- Forbidden             → 403
"""


class CatalogError(Exception):
    """Base class for every error the catalog raises on purpose."""

    message = "Catalog error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationFailed(CatalogError):
    """One or more fields broke a validation rule."""

    message = "Validation failed"

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__()
        self.errors = dict(errors)


class NotFound(CatalogError):
    """An id matched no row (or a lookup did not match exactly one row)."""

    def __init__(self, entity: str, entity_id) -> None:
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConcurrencyConflict(CatalogError):
    """The row changed or disappeared since the caller read it."""

    def __init__(self, entity: str, entity_id) -> None:
        super().__init__(
            f"{entity} with id {entity_id} was modified by someone else. "
            "Reload it and try again."
        )
        self.entity = entity
        self.entity_id = entity_id


class AlreadyReturned(CatalogError):
    def __init__(self, borrowing_id: int) -> None:
        super().__init__(f"Borrowing with id {borrowing_id} was already returned")
        self.borrowing_id = borrowing_id


class PartialUpdateFailure(CatalogError):
    """A multi-row change could not be applied as a whole and was rolled back."""

    message = "The change could not be saved. No changes were applied."


class Unauthenticated(CatalogError):
    message = "Authentication required"


class Forbidden(CatalogError):
    message = "You do not have permission to access this page"
