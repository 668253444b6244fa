"""
FastAPI Dependencies Module

Dependencies are reusable components injected into page handlers.
FastAPI's Depends() function manages their lifecycle.

WHY Dependency Injection?
=========================
1. Reusability: Write once, use in many routes
2. Testing: Tests override get_db to use an in-memory database
3. Explicit handles: every handler receives the request's Gateway as a
   parameter instead of reaching for a global context

Common Dependency Patterns here:
- Database session and Gateway (per-request)
- The caller's Principal (resolved by the authorization middleware)
- Page query parameters (id, bookID, searchText, sortKey)
"""

from typing import Annotated

from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session

from library_catalog.database import get_db
from library_catalog.errors import Unauthenticated
from library_catalog.services.authorization import ANONYMOUS, Principal
from library_catalog.services.catalog import SortKey
from library_catalog.services.gateway import Gateway

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def list_books(db: Session = Depends(get_db)):
#
# You can write:
#   def list_books(gateway: CatalogGateway):

DbSession = Annotated[Session, Depends(get_db)]


def get_gateway(db: DbSession) -> Gateway:
    """Wrap the request's session in a Persistence Gateway."""
    return Gateway(db)


CatalogGateway = Annotated[Gateway, Depends(get_gateway)]


# =============================================================================
# Principal
# =============================================================================
def get_principal(request: Request) -> Principal:
    """
    The caller resolved by AuthorizationMiddleware.

    The middleware has already enforced the page policy; handlers use this
    only to know who is calling.
    """
    return getattr(request.state, "principal", ANONYMOUS)


def get_authenticated_principal(
    principal: Principal = Depends(get_principal),
) -> Principal:
    """
    Require a signed-in caller.

    Used by endpoints outside the gated page folders (e.g. /auth/me).

    Raises:
        Unauthenticated: If the request carries no valid token
    """
    if not principal.is_authenticated:
        raise Unauthenticated()
    return principal


AuthenticatedPrincipal = Annotated[Principal, Depends(get_authenticated_principal)]


# =============================================================================
# Page Query Parameters
# =============================================================================
# Query names follow the page URLs: ?id=3&bookID=7&searchText=tolkien&sortKey=author

RecordId = Annotated[int, Query(alias="id", ge=1, description="Record id")]

SelectedId = Annotated[
    int | None,
    Query(alias="id", ge=1, description="Selected record id"),
]

SelectedBookId = Annotated[
    int | None,
    Query(alias="bookID", ge=1, description="Selected book id"),
]

SearchText = Annotated[
    str | None,
    Query(
        alias="searchText",
        max_length=100,
        description="Matches title or author name (case-insensitive)",
        examples=["tolkien"],
    ),
]

SortKeyParam = Annotated[
    SortKey,
    Query(alias="sortKey", description="Sort by title or author"),
]
