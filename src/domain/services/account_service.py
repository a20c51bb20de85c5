"""Account service: registration, credential checks and identity lookup."""

import asyncio
from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AccountNotFoundError,
    DuplicateEntryError,
    InvalidCredentialsError,
)
from domain.entities.account import Account, AccountToken, normalize_email
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import IPasswordHasher, ITokenService

logger = structlog.get_logger()


class AccountService:
    """Service layer for Account business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        password_hasher: IPasswordHasher,
        token_service: ITokenService,
        avatar_for: Callable[[str], str],
    ) -> None:
        self._uow_factory = uow_factory
        self._hasher = password_hasher
        self._tokens = token_service
        self._avatar_for = avatar_for

    async def register(self, name: str, email: str, password: str) -> AccountToken:
        """Create an account and issue its first token.

        Raises:
            DuplicateEntryError: If the email is already registered
        """
        email = normalize_email(email)
        async with self._uow_factory() as uow:
            if await uow.accounts.get_by_email(email):
                raise DuplicateEntryError("Email already registered", {"email": email})

            # bcrypt is CPU bound; keep it off the event loop
            password_hash = await asyncio.to_thread(self._hasher.hash, password)
            account = Account(
                name=name.strip(),
                email=email,
                password_hash=password_hash,
                avatar=self._avatar_for(email),
            )
            created = await uow.accounts.create(account)
            await uow.commit()

        logger.info("account_registered", account_id=str(created.id))
        return AccountToken(account=created, token=self._tokens.issue_token(created.id))

    async def authenticate(self, email: str, password: str) -> AccountToken:
        """Exchange an email/password pair for a token.

        Unknown email and wrong password fail identically.
        """
        async with self._uow_factory() as uow:
            account = await uow.accounts.get_by_email(normalize_email(email))

        if account is None:
            raise InvalidCredentialsError()

        matches = await asyncio.to_thread(self._hasher.verify, password, account.password_hash)
        if not matches:
            logger.info("authentication_failed", account_id=str(account.id))
            raise InvalidCredentialsError()

        return AccountToken(account=account, token=self._tokens.issue_token(account.id))

    async def get_current(self, account_id: UUID) -> Account:
        """Resolve the authenticated actor to its account."""
        async with self._uow_factory() as uow:
            account = await uow.accounts.get(account_id)
            if not account:
                raise AccountNotFoundError(str(account_id))
            return account
