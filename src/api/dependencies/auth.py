"""Authentication dependencies for FastAPI."""

from typing import Annotated

import structlog
from fastapi import Depends
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer

from core.config import settings
from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import Identity

# Security schemes for OpenAPI docs: "Authorization: Bearer <token>" or the
# bare token in the configured header (x-auth-token by default)
bearer_scheme = HTTPBearer(auto_error=False)
token_header_scheme = APIKeyHeader(name=settings.auth_token_header, auto_error=False)

# Singleton token service
_token_service: JWTAuthProvider | None = None


def get_token_service() -> JWTAuthProvider:
    """Get or create the token service singleton."""
    global _token_service
    if _token_service is None:
        _token_service = JWTAuthProvider()
    return _token_service


def _extract_token(
    credentials: HTTPAuthorizationCredentials | None,
    header_token: str | None,
) -> str | None:
    if credentials and credentials.credentials:
        return credentials.credentials
    if header_token and header_token.strip():
        return header_token.strip()
    return None


async def get_current_identity(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(bearer_scheme),
    ],
    header_token: Annotated[str | None, Depends(token_header_scheme)],
    token_service: JWTAuthProvider = Depends(get_token_service),
) -> Identity:
    """
    Dependency to get the authenticated actor.

    Only verifies the token; never touches the database.

    Raises:
        AuthenticationError: If no token provided or the token does not verify
    """
    token = _extract_token(credentials, header_token)
    if not token:
        raise AuthenticationError(
            message="No token, authorization denied",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    account_id = token_service.verify_token(token)
    structlog.contextvars.bind_contextvars(account_id=str(account_id))
    return Identity(id=account_id)


# Type alias for convenience in route handlers
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
