"""
Page Routers Package

One FastAPI router per page folder.

WHY Routers?
============
1. Organization: Group the pages of one folder together
2. Modularity: Each router has its own prefix and tags
3. Maintainability: Easy to find and modify page code

Router Structure:
- books.py: /Books/* pages (Index and Details are public)
- authors.py: /Authors/* pages (administrators)
- publishers.py: /Publishers/* pages (administrators)
- categories.py: /Categories/* pages (administrators)
- members.py: /Members/* pages (administrators)
- borrowings.py: /Borrowings/* pages (signed-in callers)
- auth.py: /auth/* endpoints (registration, login, current principal)

Each router is imported and registered in main.py.
"""

from library_catalog.routers.auth import router as auth_router
from library_catalog.routers.authors import router as authors_router
from library_catalog.routers.books import router as books_router
from library_catalog.routers.borrowings import router as borrowings_router
from library_catalog.routers.categories import router as categories_router
from library_catalog.routers.members import router as members_router
from library_catalog.routers.publishers import router as publishers_router

__all__ = [
    "books_router",
    "authors_router",
    "publishers_router",
    "categories_router",
    "members_router",
    "borrowings_router",
    "auth_router",
]
