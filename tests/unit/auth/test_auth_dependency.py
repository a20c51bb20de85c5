"""Unit tests for authentication dependencies."""

from uuid import UUID, uuid4

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from api.dependencies.auth import get_current_identity
from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider


@pytest.fixture
def mock_auth_provider() -> JWTAuthProvider:
    return JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)


@pytest.fixture
def account_id() -> UUID:
    return uuid4()


class TestGetCurrentIdentity:
    @pytest.mark.asyncio
    async def test_returns_identity_with_valid_bearer_token(
        self, mock_auth_provider: JWTAuthProvider, account_id: UUID
    ):
        token = mock_auth_provider.issue_token(account_id)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        result = await get_current_identity(credentials, None, mock_auth_provider)

        assert result.id == account_id

    @pytest.mark.asyncio
    async def test_accepts_token_header(
        self, mock_auth_provider: JWTAuthProvider, account_id: UUID
    ):
        token = mock_auth_provider.issue_token(account_id)

        result = await get_current_identity(None, token, mock_auth_provider)

        assert result.id == account_id

    @pytest.mark.asyncio
    async def test_bearer_takes_precedence_over_token_header(
        self, mock_auth_provider: JWTAuthProvider, account_id: UUID
    ):
        bearer = mock_auth_provider.issue_token(account_id)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=bearer)

        result = await get_current_identity(
            credentials, mock_auth_provider.issue_token(uuid4()), mock_auth_provider
        )

        assert result.id == account_id

    @pytest.mark.asyncio
    async def test_raises_when_no_credentials(self, mock_auth_provider: JWTAuthProvider):
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_identity(None, None, mock_auth_provider)

        assert exc_info.value.error_code == ErrorCode.UNAUTHORIZED
        assert exc_info.value.message == "No token, authorization denied"

    @pytest.mark.asyncio
    async def test_blank_token_header_counts_as_missing(
        self, mock_auth_provider: JWTAuthProvider
    ):
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_identity(None, "   ", mock_auth_provider)

        assert exc_info.value.error_code == ErrorCode.UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_raises_when_malformed_token(self, mock_auth_provider: JWTAuthProvider):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="invalid.jwt.token")

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_identity(credentials, None, mock_auth_provider)

        assert exc_info.value.error_code == ErrorCode.MALFORMED_TOKEN

    @pytest.mark.asyncio
    async def test_raises_when_expired_token(self, account_id: UUID):
        # Negative expiry produces tokens that are already expired
        provider = JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=-1)
        token = provider.issue_token(account_id)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        normal_provider = JWTAuthProvider(
            secret_key="test-secret", algorithm="HS256", expire_minutes=30
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_identity(credentials, None, normal_provider)

        assert exc_info.value.error_code == ErrorCode.TOKEN_EXPIRED
