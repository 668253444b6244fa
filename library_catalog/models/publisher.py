"""
Publisher Model

Represents a publishing house. A publisher owns many books.
"""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_catalog.database import Base

if TYPE_CHECKING:
    from library_catalog.models.book import Book


class Publisher(Base):
    """
    Publisher model.

    Table: publishers

    Relationships:
    - books: One-to-Many with Book
    """

    __tablename__ = "publishers"

    id: Mapped[int] = mapped_column(primary_key=True)

    publisher_name: Mapped[str] = mapped_column(
        String(150),
        index=True,
        nullable=False,
        comment="Publishing house name"
    )

    version: Mapped[int] = mapped_column(nullable=False)

    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="publisher",
    )

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"Publisher(id={self.id}, name='{self.publisher_name}')"
