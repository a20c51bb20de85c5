"""Profile domain entities."""

from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime
from uuid import UUID, uuid4

from domain.entities.account import Account

PROFILE_TEXT_FIELDS = (
    "company",
    "website",
    "location",
    "bio",
    "status",
    "githubusername",
)


def parse_skills(raw: str) -> list[str]:
    """Split a comma-delimited skills string into trimmed, non-empty tokens."""
    return [skill.strip() for skill in raw.split(",") if skill.strip()]


@dataclass
class SocialLinks:
    """Social network links shown on a profile."""

    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


SOCIAL_FIELDS = tuple(f.name for f in fields(SocialLinks))


@dataclass
class Experience:
    """A work experience entry."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class Education:
    """An education entry."""

    school: str
    degree: str
    fieldofstudy: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class ProfileUpdate:
    """Caller-supplied profile fields. Empty values mean "leave unchanged"."""

    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: str | None = None
    githubusername: str | None = None
    skills: str | None = None
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


@dataclass
class Profile:
    """Domain entity for a user's profile (one per account)."""

    user_id: UUID
    id: UUID = field(default_factory=uuid4)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: str | None = None
    githubusername: str | None = None
    skills: list[str] = field(default_factory=list)
    social: SocialLinks = field(default_factory=SocialLinks)
    experience: list[Experience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    version: int = 1
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def apply_update(self, update: ProfileUpdate) -> None:
        """Overwrite each recognized field the caller supplied a value for."""
        for name in PROFILE_TEXT_FIELDS:
            value = getattr(update, name)
            if value:
                setattr(self, name, value)

        if update.skills:
            skills = parse_skills(update.skills)
            if skills:
                self.skills = skills

        links = {name: getattr(update, name) for name in SOCIAL_FIELDS if getattr(update, name)}
        if links:
            self.social = replace(self.social, **links)

        self.updated_at = datetime.utcnow()


@dataclass(frozen=True, slots=True)
class ProfileWithOwner:
    """Read-only value object: a Profile bundled with its owner's account."""

    profile: Profile
    owner: Account | None
