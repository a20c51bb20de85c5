"""Pydantic schemas for Post API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PostCreate(BaseModel):
    """Schema for creating a Post."""

    text: str = Field(..., min_length=1, max_length=5000)

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Text is required")
        return v


class CommentCreate(BaseModel):
    """Schema for adding a Comment."""

    text: str = Field(..., min_length=1, max_length=2000)

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Text is required")
        return v


class LikeResponse(BaseModel):
    """Schema for a Like."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    created_at: datetime


class CommentResponse(BaseModel):
    """Schema for a Comment."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    text: str
    name: str
    avatar: str | None = None
    created_at: datetime


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "456e4567-e89b-12d3-a456-426614174000",
                "user_id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "Ada",
                "avatar": "https://www.gravatar.com/avatar/0bc83cb571cd1c50ba6f3e8a78ef1346?s=200&r=pg&d=mm",
                "text": "Hello world",
                "likes": [],
                "comments": [],
                "created_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    user_id: UUID
    name: str
    avatar: str | None = None
    text: str
    likes: list[LikeResponse]
    comments: list[CommentResponse]
    created_at: datetime
