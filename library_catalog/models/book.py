"""
Book Model

The central model of the catalog.

This file also contains the BookCategory junction model for the
Book <-> Category many-to-many relationship.

WHY a Junction Model (not a plain Table)?
=========================================
Category assignment works row by row: newly selected categories get a
junction row inserted, deselected ones get theirs deleted, and unchanged
ones are left alone. That needs the junction row as an object with its own
id, so it is mapped as a class instead of a bare association Table.
"""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_catalog.database import Base

if TYPE_CHECKING:
    from library_catalog.models.author import Author
    from library_catalog.models.borrowing import Borrowing
    from library_catalog.models.category import Category
    from library_catalog.models.publisher import Publisher


class Book(Base):
    """
    Book model representing titles in the library.

    Table: books

    Fields:
    - title: Book title (3-150 characters, checked by the validation rules)
    - price: Price with 2 decimal precision (0.01-500)
    - publishing_date: When the book was published
    - author_id / publisher_id: Optional references

    Relationships:
    - author: Many-to-One
    - publisher: Many-to-One
    - book_categories: One-to-Many junction rows (→ Category)
    - borrowings: One-to-Many

    Example:
        book = Book(
            title="The Hobbit",
            price=Decimal("39.90"),
            publishing_date=date(1937, 9, 21),
            author_id=tolkien.id,
        )
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(
        String(150),
        index=True,
        nullable=False,
        comment="Book title"
    )

    # Numeric(10, 2) with Decimal for exact money values
    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Book price"
    )

    publishing_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Date of publication"
    )

    author_id: Mapped[int | None] = mapped_column(
        ForeignKey("authors.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )

    publisher_id: Mapped[int | None] = mapped_column(
        ForeignKey("publishers.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )

    version: Mapped[int] = mapped_column(nullable=False)

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    author: Mapped[Optional["Author"]] = relationship(
        "Author",
        back_populates="books",
    )

    publisher: Mapped[Optional["Publisher"]] = relationship(
        "Publisher",
        back_populates="books",
    )

    book_categories: Mapped[list["BookCategory"]] = relationship(
        "BookCategory",
        back_populates="book",
        cascade="all, delete-orphan",
    )

    borrowings: Mapped[list["Borrowing"]] = relationship(
        "Borrowing",
        back_populates="book",
        cascade="all, delete-orphan",
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def categories(self) -> list["Category"]:
        """Categories reached through the junction rows."""
        return [bc.category for bc in self.book_categories]

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}')"


class BookCategory(Base):
    """
    Junction row linking one book to one category.

    Table: book_categories

    The (book_id, category_id) pair is unique.
    """

    __tablename__ = "book_categories"
    __table_args__ = (
        UniqueConstraint("book_id", "category_id", name="uq_book_category"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    book: Mapped["Book"] = relationship("Book", back_populates="book_categories")
    category: Mapped["Category"] = relationship(
        "Category",
        back_populates="book_categories",
    )

    def __repr__(self) -> str:
        return f"BookCategory(book_id={self.book_id}, category_id={self.category_id})"
