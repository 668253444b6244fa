"""
Borrowing Model

One member borrowing one book. A null return_date means the book is
still out.
"""

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_catalog.database import Base

if TYPE_CHECKING:
    from library_catalog.models.book import Book
    from library_catalog.models.member import Member


class Borrowing(Base):
    """
    Borrowing model.

    Table: borrowings

    Relationships:
    - member: Many-to-One
    - book: Many-to-One
    """

    __tablename__ = "borrowings"

    id: Mapped[int] = mapped_column(primary_key=True)

    member_id: Mapped[int] = mapped_column(
        ForeignKey("members.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    return_date: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
        comment="When the book came back; NULL while borrowed"
    )

    version: Mapped[int] = mapped_column(nullable=False)

    member: Mapped["Member"] = relationship("Member", back_populates="borrowings")
    book: Mapped["Book"] = relationship("Book", back_populates="borrowings")

    __mapper_args__ = {"version_id_col": version}

    @property
    def is_returned(self) -> bool:
        return self.return_date is not None

    def __repr__(self) -> str:
        return (
            f"Borrowing(id={self.id}, member_id={self.member_id}, "
            f"book_id={self.book_id}, return_date={self.return_date})"
        )
