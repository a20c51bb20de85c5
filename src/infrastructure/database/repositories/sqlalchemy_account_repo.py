"""SQLAlchemy implementation of Account repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DuplicateEntryError
from domain.entities.account import Account
from infrastructure.database.models import AccountModel


class SQLAlchemyAccountRepository:
    """SQLAlchemy implementation of IAccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Account | None:
        """Get an account by ID."""
        stmt = select(AccountModel).where(AccountModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> Account | None:
        """Get an account by its normalized email."""
        stmt = select(AccountModel).where(AccountModel.email == email)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_many(self, ids: list[UUID]) -> dict[UUID, Account]:
        """Get several accounts in a single query."""
        if not ids:
            return {}
        stmt = select(AccountModel).where(AccountModel.id.in_(set(ids)))
        result = await self._session.execute(stmt)
        return {model.id: self._to_entity(model) for model in result.scalars()}

    async def create(self, account: Account) -> Account:
        """Create a new account."""
        model = self._to_model(account)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise DuplicateEntryError(
                "Email already registered", {"email": account.email}
            ) from e
        await self._session.refresh(model)
        return self._to_entity(model)

    def _to_entity(self, model: AccountModel) -> Account:
        """Convert ORM model to domain entity."""
        return Account(
            id=model.id,
            name=model.name,
            email=model.email,
            password_hash=model.password_hash,
            avatar=model.avatar,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Account) -> AccountModel:
        """Convert domain entity to ORM model."""
        return AccountModel(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            password_hash=entity.password_hash,
            avatar=entity.avatar,
            created_at=entity.created_at,
        )
