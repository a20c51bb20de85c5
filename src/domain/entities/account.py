"""Account domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookup."""
    return email.strip().lower()


@dataclass
class Account:
    """Domain entity for a registered account.

    ``password_hash`` is opaque and must never reach a response schema.
    """

    name: str
    email: str
    password_hash: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        self.email = normalize_email(self.email)


@dataclass(frozen=True, slots=True)
class AccountToken:
    """Read-only value object: an account with a freshly issued token."""

    account: Account
    token: str
