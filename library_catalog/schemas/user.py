"""
User Pydantic Schemas

Registration, token and principal shapes for the /auth endpoints.

Registration creates both the sign-in account and the member record, so it
carries the member fields too.
"""

import re

from pydantic import BaseModel, EmailStr, Field, field_validator


class UserCreate(BaseModel):
    """
    Schema for registration.

    Requires the sign-in email and password plus the member details.
    """

    email: EmailStr = Field(
        ...,
        description="Email used to sign in and to contact the member",
        examples=["ana.pop@example.com"],
    )

    password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="Password (min 8 chars, must include uppercase and number)",
        examples=["SecurePass123"],
    )

    first_name: str = Field(..., examples=["Ana"])
    last_name: str = Field(..., examples=["Pop"])
    address: str | None = Field(default=None)
    phone: str | None = Field(default=None, examples=["0722-123-123"])

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def password_must_be_strong(cls, v: str) -> str:
        """
        Validate password strength.

        Requirements:
        - At least 8 characters (enforced by min_length)
        - At least 1 uppercase letter
        - At least 1 lowercase letter
        - At least 1 number
        """
        if not re.search(r"[A-Z]", v):
            raise ValueError("Password must contain at least one uppercase letter")
        if not re.search(r"[a-z]", v):
            raise ValueError("Password must contain at least one lowercase letter")
        if not re.search(r"\d", v):
            raise ValueError("Password must contain at least one number")
        return v


class TokenResponse(BaseModel):
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer")
    expires_in: int = Field(..., description="Token lifetime in seconds")


class PrincipalResponse(BaseModel):
    """The signed-in caller as the authorization gate sees them."""

    user_id: int
    email: str | None = None
    roles: list[str] = []
    member_id: int | None = None
