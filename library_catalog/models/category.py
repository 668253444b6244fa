"""
Category Model

Represents a book category in the catalog.

Categories allow books to be grouped for browsing. A book can belong to
several categories through the book_categories junction table.

Category names are unique only by convention; the table has no UNIQUE
constraint on category_name.
"""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_catalog.database import Base

if TYPE_CHECKING:
    from library_catalog.models.book import BookCategory


class Category(Base):
    """
    Category model.

    Table: categories

    Relationships:
    - book_categories: One-to-Many with the BookCategory junction model;
      follow .book on each row to reach the books
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True)

    category_name: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Category name (e.g., 'Fantasy', 'History')"
    )

    version: Mapped[int] = mapped_column(nullable=False)

    # Deleting a category removes its junction rows, never the books
    book_categories: Mapped[list["BookCategory"]] = relationship(
        "BookCategory",
        back_populates="category",
        cascade="all, delete-orphan",
    )

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"Category(id={self.id}, name='{self.category_name}')"
