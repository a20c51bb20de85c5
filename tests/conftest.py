"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from domain.services.account_service import AccountService
from domain.services.post_service import PostService
from domain.services.profile_service import ProfileService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.password_hasher import PasswordHasher
from infrastructure.avatar import gravatar_url
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

# Test database URL (SQLite in memory, one shared connection)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_PASSWORD = "secret1"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create token service for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=60,
    )


@pytest.fixture
def password_hasher() -> PasswordHasher:
    """bcrypt hasher at the minimum cost, to keep tests fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    auth_provider: JWTAuthProvider,
    password_hasher: PasswordHasher,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the in-memory database.

    This client:
    - Uses an in-memory SQLite database
    - Signs and verifies tokens with the test secret
    - Overrides every service factory to use the test Unit of Work
    """
    from api.dependencies.auth import get_token_service
    from api.v1.dependencies import (
        get_account_service,
        get_post_service,
        get_profile_service,
    )
    from infrastructure.database.session import get_async_session
    from main import create_app

    app = create_app()

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_token_service] = lambda: auth_provider
    app.dependency_overrides[get_account_service] = lambda: AccountService(
        uow_factory,
        password_hasher=password_hasher,
        token_service=auth_provider,
        avatar_for=gravatar_url,
    )
    app.dependency_overrides[get_post_service] = lambda: PostService(uow_factory)
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(uow_factory)
    app.dependency_overrides[get_async_session] = override_get_async_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def register(client: AsyncClient) -> Callable[..., Awaitable[str]]:
    """Register an account through the API and return its token."""

    async def _register(name: str = "Ada", email: str | None = None) -> str:
        response = await client.post(
            "/api/v1/users",
            json={
                "name": name,
                "email": email or f"{uuid4().hex[:10]}@example.com",
                "password": TEST_PASSWORD,
            },
        )
        assert response.status_code == 201, response.text
        return str(response.json()["token"])

    return _register


def bearer(token: str) -> dict[str, str]:
    """Authorization header for a token."""
    return {"Authorization": f"Bearer {token}"}
