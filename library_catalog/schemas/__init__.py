"""
Pydantic Schemas Package

This package contains Pydantic models for request/response bodies.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Security: Control exactly what data is exposed in responses
2. Shape: Different fields for create vs edit vs response
3. Decoupling: Database schema can evolve independently of the pages
4. Documentation: Schemas generate OpenAPI documentation

Schema Naming Convention:
- XxxBase: Shared fields between create/response
- XxxCreate: Fields accepted when creating a new record
- XxxUpdate: Fields accepted on the edit form (all optional + version)
- XxxResponse: Fields returned in responses
"""

from library_catalog.schemas.author import (
    AuthorBase,
    AuthorCreate,
    AuthorResponse,
    AuthorUpdate,
)
from library_catalog.schemas.book import (
    BookBase,
    BookCreate,
    BookResponse,
    BookSummary,
    BookUpdate,
)
from library_catalog.schemas.borrowing import (
    BorrowingCreate,
    BorrowingResponse,
    BorrowingReturn,
)
from library_catalog.schemas.category import (
    AssignedCategoryResponse,
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
)
from library_catalog.schemas.member import (
    MemberCreate,
    MemberResponse,
    MemberUpdate,
)
from library_catalog.schemas.publisher import (
    PublisherCreate,
    PublisherResponse,
    PublisherUpdate,
)
from library_catalog.schemas.user import (
    PrincipalResponse,
    TokenResponse,
    UserCreate,
)
from library_catalog.schemas.views import (
    AuthorIndexResponse,
    BookFormResponse,
    BookIndexResponse,
    CategoryIndexResponse,
    PublisherIndexResponse,
)

__all__ = [
    # Author schemas
    "AuthorBase",
    "AuthorCreate",
    "AuthorUpdate",
    "AuthorResponse",
    # Book schemas
    "BookBase",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    "BookSummary",
    # Borrowing schemas
    "BorrowingCreate",
    "BorrowingReturn",
    "BorrowingResponse",
    # Category schemas
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "AssignedCategoryResponse",
    # Member schemas
    "MemberCreate",
    "MemberUpdate",
    "MemberResponse",
    # Publisher schemas
    "PublisherCreate",
    "PublisherUpdate",
    "PublisherResponse",
    # Auth schemas
    "UserCreate",
    "TokenResponse",
    "PrincipalResponse",
    # View schemas
    "AuthorIndexResponse",
    "BookFormResponse",
    "BookIndexResponse",
    "CategoryIndexResponse",
    "PublisherIndexResponse",
]
