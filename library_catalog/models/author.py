"""
Author Model

Represents an author in the catalog.

SQLAlchemy 2.0 Features Used:
- mapped_column(): New way to define columns with full type support
- Mapped[]: Type hint wrapper for SQLAlchemy columns
- relationship(): Define relationships between models
- version_id_col: Optimistic concurrency on UPDATE/DELETE
"""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_catalog.database import Base

# TYPE_CHECKING is True only during type checking (mypy, IDE)
# This prevents circular imports at runtime while enabling type hints
if TYPE_CHECKING:
    from library_catalog.models.book import Book


class Author(Base):
    """
    Author model representing writers in the catalog.

    Table: authors

    Relationships:
    - books: One-to-Many (an author writes many books)

    The full name is derived on access and never stored:

        author = Author(first_name="J.R.R.", last_name="Tolkien")
        author.full_name  # 'J.R.R. Tolkien'
    """

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)

    first_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Author's first name"
    )

    last_name: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Author's last name"
    )

    # Incremented by SQLAlchemy on every UPDATE; a stale value makes the
    # UPDATE match zero rows and raises StaleDataError
    version: Mapped[int] = mapped_column(nullable=False)

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    # No delete cascade: deleting an author leaves its books without one
    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="author",
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"Author(id={self.id}, name='{self.full_name}')"
