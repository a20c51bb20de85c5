"""Account repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.account import Account


class IAccountRepository(Protocol):
    """Repository interface for Account entities."""

    async def get(self, id: UUID) -> Account | None:
        """Get an account by ID."""
        ...

    async def get_by_email(self, email: str) -> Account | None:
        """Get an account by its normalized email."""
        ...

    async def get_many(self, ids: list[UUID]) -> dict[UUID, Account]:
        """Get several accounts in a single query, keyed by ID."""
        ...

    async def create(self, account: Account) -> Account:
        """Create a new account. Raises DuplicateEntryError on a taken email."""
        ...
