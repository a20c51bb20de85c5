"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from api.dependencies.auth import get_token_service
from core.config import settings
from domain.services.account_service import AccountService
from domain.services.post_service import PostService
from domain.services.profile_service import ProfileService
from infrastructure.auth.password_hasher import PasswordHasher
from infrastructure.avatar import gravatar_url
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Get Password hasher instance."""
    return PasswordHasher()


@lru_cache
def get_account_service() -> AccountService:
    """Get Account service instance."""
    return AccountService(
        get_uow_factory(),
        password_hasher=get_password_hasher(),
        token_service=get_token_service(),
        avatar_for=gravatar_url,
    )


@lru_cache
def get_post_service() -> PostService:
    """Get Post service instance."""
    return PostService(
        get_uow_factory(),
        max_write_attempts=settings.collection_write_attempts,
    )


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(
        get_uow_factory(),
        max_write_attempts=settings.collection_write_attempts,
    )
