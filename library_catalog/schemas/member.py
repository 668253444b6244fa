"""
Member Pydantic Schemas

Name and phone formats are checked by the validation rules. The email is
only accepted on creation: MemberUpdate forbids unknown fields, so an edit
that tries to change it is rejected.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class MemberBase(BaseModel):
    first_name: str = Field(..., description="First name", examples=["Ana"])
    last_name: str = Field(..., description="Last name", examples=["Pop"])
    address: str | None = Field(
        default=None,
        description="Postal address (max 70 characters)",
        examples=["Str. Memorandumului 28, Cluj-Napoca"],
    )
    phone: str | None = Field(
        default=None,
        description="Phone number formatted as NNNN-NNN-NNN",
        examples=["0722-123-123"],
    )


class MemberCreate(MemberBase):
    email: EmailStr = Field(..., description="Contact email", examples=["ana.pop@example.com"])

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Stored lower-cased, the same way /auth/register stores it."""
        return v.lower()


class MemberUpdate(BaseModel):
    """Schema for editing a member. The email cannot be changed."""

    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    phone: str | None = None
    version: int = Field(..., ge=1, description="Version the edit is based on")

    model_config = ConfigDict(extra="forbid")


class MemberResponse(MemberBase):
    id: int = Field(..., description="Unique identifier")
    email: str = Field(..., description="Contact email")
    full_name: str = Field(..., description="First and last name")
    user_id: int | None = Field(default=None, description="Linked user account")
    version: int = Field(..., description="Row version for optimistic concurrency")

    model_config = ConfigDict(from_attributes=True)
