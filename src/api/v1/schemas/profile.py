"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from typing import Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from api.v1.schemas.account import OwnerResponse
from domain.entities.profile import ProfileUpdate, ProfileWithOwner, parse_skills


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile.

    ``skills`` is a comma-separated string. Omitted or empty optional fields
    leave the stored value unchanged.
    """

    status: str = Field(..., min_length=1, max_length=255)
    skills: str = Field(..., min_length=1, max_length=1000)
    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=255)
    bio: str | None = Field(None, max_length=5000)
    githubusername: str | None = Field(None, max_length=100)
    youtube: str | None = Field(None, max_length=500)
    twitter: str | None = Field(None, max_length=500)
    facebook: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Status is required")
        return v.strip()

    @field_validator("skills")
    @classmethod
    def validate_skills(cls, v: str) -> str:
        if not parse_skills(v):
            raise ValueError("Skills are required")
        return v

    def to_update(self) -> ProfileUpdate:
        return ProfileUpdate(**self.model_dump())


class _DatedEntry(BaseModel):
    from_date: date
    to_date: date | None = None
    current: bool = False
    description: str | None = Field(None, max_length=2000)

    @model_validator(mode="after")
    def check_dates(self) -> Self:
        if self.to_date and self.to_date < self.from_date:
            raise ValueError("to_date must not be before from_date")
        if self.current and self.to_date:
            raise ValueError("A current entry cannot have a to_date")
        return self


class ExperienceCreate(_DatedEntry):
    """Schema for adding an experience entry."""

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)


class EducationCreate(_DatedEntry):
    """Schema for adding an education entry."""

    school: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    fieldofstudy: str = Field(..., min_length=1, max_length=255)


class ExperienceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    company: str
    location: str | None = None
    from_date: date
    to_date: date | None = None
    current: bool
    description: str | None = None


class EducationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    school: str
    degree: str
    fieldofstudy: str
    from_date: date
    to_date: date | None = None
    current: bool
    description: str | None = None


class SocialResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response, with the owner's public fields."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user: OwnerResponse | None = None
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: str | None = None
    githubusername: str | None = None
    skills: list[str]
    social: SocialResponse
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: ProfileWithOwner) -> "ProfileResponse":
        response = cls.model_validate(view.profile)
        if view.owner is not None:
            response.user = OwnerResponse.model_validate(view.owner)
        return response
