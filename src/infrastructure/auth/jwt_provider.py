"""JWT identity token service.

Tokens are HS256-signed and stateless. Payload structure:
    {
        "user": { "id": "account-uuid" },
        "iat": 1234567800,
        "exp": 1234567890
    }
"""

from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

import structlog
from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

from core.config import settings
from core.exceptions import (
    InvalidSignatureError,
    MalformedTokenError,
    ServiceUnavailableError,
    TokenExpiredError,
)

logger = structlog.get_logger()


class JWTAuthProvider:
    """Issues and verifies signed, time-limited identity tokens.

    The signing secret is read once at construction and never logged.
    """

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    def issue_token(self, account_id: UUID) -> str:
        """
        Create a token for an account.

        Args:
            account_id: The account to create a token for

        Returns:
            The generated JWT string
        """
        issued_at = datetime.utcnow()
        payload: dict[str, Any] = {
            "user": {"id": str(account_id)},
            "iat": issued_at,
            "exp": issued_at + timedelta(minutes=self._expire_minutes),
        }

        try:
            return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        except JWTError as e:
            logger.error("token_signing_failed", error_type=type(e).__name__)
            raise ServiceUnavailableError() from e

    def verify_token(self, token: str) -> UUID:
        """
        Verify a token and extract the account ID.

        Args:
            token: The JWT to verify

        Returns:
            The account ID carried by the token

        Raises:
            MalformedTokenError: Not a decodable JWT, or no usable ``user.id``
            InvalidSignatureError: Signature (or algorithm) does not verify
            TokenExpiredError: Signature verifies but ``exp`` has passed
        """
        try:
            jwt.get_unverified_claims(token)
        except JWTError:
            raise MalformedTokenError() from None

        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            raise TokenExpiredError() from None
        except JWTClaimsError:
            raise MalformedTokenError() from None
        except JWTError:
            raise InvalidSignatureError() from None

        return self._account_id(payload)

    @staticmethod
    def _account_id(payload: dict[str, Any]) -> UUID:
        user = payload.get("user")
        raw_id = user.get("id") if isinstance(user, dict) else None
        if not raw_id:
            raise MalformedTokenError()
        try:
            return UUID(str(raw_id))
        except ValueError:
            raise MalformedTokenError() from None
