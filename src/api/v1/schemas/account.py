"""Pydantic schemas for Account and token API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class AccountRegister(BaseModel):
    """Schema for registering an account."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    # bcrypt only looks at the first 72 bytes
    password: str = Field(..., min_length=6, max_length=72)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()


class Credentials(BaseModel):
    """Schema for exchanging credentials for a token."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)


class TokenResponse(BaseModel):
    """Schema for an issued identity token."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."}},
    )

    token: str


class AccountResponse(BaseModel):
    """Public view of an account. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    avatar: str | None = None
    created_at: datetime


class OwnerResponse(BaseModel):
    """Account fields embedded in other resources."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    avatar: str | None = None
