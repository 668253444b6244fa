"""
Member Model

A library member: the person who borrows books. A member may be linked to
the User account they sign in with.

The email is written once, at registration, and never edited afterwards.
The edit schema does not accept it.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_catalog.database import Base

if TYPE_CHECKING:
    from library_catalog.models.borrowing import Borrowing
    from library_catalog.models.user import User


class Member(Base):
    """
    Member model.

    Table: members

    Relationships:
    - borrowings: One-to-Many (deleted with the member)
    - user: One-to-One link to the signed-in identity (optional)
    """

    __tablename__ = "members"

    id: Mapped[int] = mapped_column(primary_key=True)

    first_name: Mapped[str] = mapped_column(String(30), nullable=False)
    last_name: Mapped[str] = mapped_column(String(30), index=True, nullable=False)

    address: Mapped[str | None] = mapped_column(
        String(70),
        nullable=True,
        comment="Postal address"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
        comment="Contact email, set once at registration"
    )

    phone: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
        comment="Phone number formatted as NNNN-NNN-NNN"
    )

    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        unique=True,
        nullable=True,
    )

    version: Mapped[int] = mapped_column(nullable=False)

    borrowings: Mapped[list["Borrowing"]] = relationship(
        "Borrowing",
        back_populates="member",
        cascade="all, delete-orphan",
    )

    user: Mapped[Optional["User"]] = relationship("User", back_populates="member")

    __mapper_args__ = {"version_id_col": version}

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"Member(id={self.id}, email='{self.email}')"
