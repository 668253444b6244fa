"""
User and Role Models

The identity side of the application: accounts that sign in, and the roles
the authorization gate checks.

Role membership uses a plain association Table because the link carries no
data of its own.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_catalog.database import Base

if TYPE_CHECKING:
    from library_catalog.models.member import Member


user_roles = Table(
    "user_roles",
    Base.metadata,
    Column(
        "user_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "role_id",
        Integer,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    comment="Association table linking users to their roles",
)


class Role(Base):
    """
    Role model (e.g. 'Admin').

    Table: roles
    """

    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        comment="Role name checked by the authorization gate"
    )

    users: Mapped[list["User"]] = relationship(
        "User",
        secondary=user_roles,
        back_populates="roles",
    )

    def __repr__(self) -> str:
        return f"Role(id={self.id}, name='{self.name}')"


class User(Base):
    """
    User model representing accounts that can sign in.

    Table: users

    Relationships:
    - roles: Many-to-Many through user_roles
    - member: One-to-One with the Member record created at registration

    Example:
        user = User(
            email="ana.pop@example.com",
            hashed_password=hash_password("SecurePass123"),
        )
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="User's email address (used for login)"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="passlib hash of the password"
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
        comment="Whether the account is active"
    )

    roles: Mapped[list["Role"]] = relationship(
        "Role",
        secondary=user_roles,
        back_populates="users",
    )

    member: Mapped[Optional["Member"]] = relationship(
        "Member",
        back_populates="user",
        uselist=False,
    )

    @property
    def role_names(self) -> list[str]:
        return sorted(role.name for role in self.roles)

    def __repr__(self) -> str:
        return f"User(id={self.id}, email='{self.email}')"
