"""
SQLAlchemy Models Package

This package contains all database models for the library catalog.

Model Relationships:
- Author    -> Book: One-to-Many
- Publisher -> Book: One-to-Many
- Book <-> Category: Many-to-Many through the BookCategory junction model
- Member    -> Borrowing <- Book
- User <-> Role: Many-to-Many through the user_roles table
- User      -- Member: One-to-One

Import all models here so they are registered on Base.metadata and
available as: from library_catalog.models import Book, Category
"""

from library_catalog.models.author import Author
from library_catalog.models.publisher import Publisher
from library_catalog.models.category import Category
from library_catalog.models.book import Book, BookCategory
from library_catalog.models.user import Role, User, user_roles
from library_catalog.models.member import Member
from library_catalog.models.borrowing import Borrowing

__all__ = [
    "Author",
    "Publisher",
    "Category",
    "Book",
    "BookCategory",
    "Member",
    "Borrowing",
    "Role",
    "User",
    "user_roles",
]
