"""Authentication provider protocols."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True)
class Identity:
    """The authenticated actor resolved from a verified token."""

    id: UUID


class ITokenService(Protocol):
    """Protocol for identity token issuers/verifiers."""

    def issue_token(self, account_id: UUID) -> str:
        """
        Create a signed, time-limited token for an account.

        Args:
            account_id: The account the token proves control of

        Returns:
            The encoded token string
        """
        ...

    def verify_token(self, token: str) -> UUID:
        """
        Verify a token and return the account ID it carries.

        Raises:
            MalformedTokenError: If the token is not a decodable identity token
            InvalidSignatureError: If the signature does not verify
            TokenExpiredError: If the token is past its expiry
        """
        ...


class IPasswordHasher(Protocol):
    """Protocol for one-way password hashing."""

    def hash(self, plaintext: str) -> str:
        """Hash a password with a fresh random salt."""
        ...

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Check a password against a stored hash."""
        ...
