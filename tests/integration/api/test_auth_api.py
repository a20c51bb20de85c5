"""Integration tests for registration, token issuance and identity lookup."""

from collections.abc import Awaitable, Callable
from uuid import uuid4

import pytest
from httpx import AsyncClient

from infrastructure.auth.jwt_provider import JWTAuthProvider
from tests.conftest import TEST_PASSWORD, bearer


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_returns_token_for_new_account(
        self, client: AsyncClient, auth_provider: JWTAuthProvider
    ) -> None:
        response = await client.post(
            "/api/v1/users",
            json={"name": "Ada", "email": "ada@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 201
        token = response.json()["token"]
        me = await client.get("/api/v1/auth", headers=bearer(token))
        assert me.status_code == 200
        assert str(auth_provider.verify_token(token)) == me.json()["data"]["id"]

    @pytest.mark.asyncio
    async def test_duplicate_email_is_409(
        self, client: AsyncClient, register: Callable[..., Awaitable[str]]
    ) -> None:
        await register(email="ada@example.com")

        response = await client.post(
            "/api/v1/users",
            json={"name": "Impostor", "email": "ADA@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_ENTRY"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "", "email": "a@example.com", "password": "secret1"},
            {"name": "Ada", "email": "not-an-email", "password": "secret1"},
            {"name": "Ada", "email": "a@example.com", "password": "short"},
        ],
    )
    async def test_invalid_registration_is_422(self, client: AsyncClient, payload: dict) -> None:
        response = await client.post("/api/v1/users", json=payload)

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestIssueToken:
    @pytest.mark.asyncio
    async def test_valid_credentials_issue_token(
        self, client: AsyncClient, register: Callable[..., Awaitable[str]]
    ) -> None:
        await register(email="grace@example.com")

        response = await client.post(
            "/api/v1/auth",
            json={"email": "grace@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        assert response.json()["token"]

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(
        self, client: AsyncClient, register: Callable[..., Awaitable[str]]
    ) -> None:
        await register(email="grace@example.com")

        wrong_password = await client.post(
            "/api/v1/auth", json={"email": "grace@example.com", "password": "nope-nope"}
        )
        unknown_email = await client.post(
            "/api/v1/auth", json={"email": "nobody@example.com", "password": TEST_PASSWORD}
        )

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()


class TestCurrentAccount:
    @pytest.mark.asyncio
    async def test_returns_account_without_password(
        self, client: AsyncClient, register: Callable[..., Awaitable[str]]
    ) -> None:
        token = await register(name="Ada", email="ada@example.com")

        response = await client.get("/api/v1/auth", headers=bearer(token))

        data = response.json()["data"]
        assert data["name"] == "Ada"
        assert data["email"] == "ada@example.com"
        assert data["avatar"].startswith("https://www.gravatar.com/avatar/")
        assert "password" not in data
        assert "password_hash" not in data

    @pytest.mark.asyncio
    async def test_accepts_x_auth_token_header(
        self, client: AsyncClient, register: Callable[..., Awaitable[str]]
    ) -> None:
        token = await register()

        response = await client.get("/api/v1/auth", headers={"x-auth-token": token})

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_no_token_is_401(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/auth")

        assert response.status_code == 401
        body = response.json()
        assert body["error_code"] == "UNAUTHORIZED"
        assert body["message"] == "No token, authorization denied"

    @pytest.mark.asyncio
    async def test_token_signed_elsewhere_is_401(self, client: AsyncClient) -> None:
        forged = JWTAuthProvider(secret_key="other", algorithm="HS256", expire_minutes=60)

        response = await client.get(
            "/api/v1/auth", headers=bearer(forged.issue_token(uuid4()))
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_TOKEN"
