"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile
from domain.repositories.collection_repository import ICollectionRepository


class IProfileRepository(ICollectionRepository, Protocol):
    """Repository interface for Profile entities."""

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by an account."""
        ...

    async def list_all(self) -> list[Profile]:
        """Get every profile."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a profile. Raises DuplicateEntryError if the owner has one."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Persist the profile's scalar fields (nested collections untouched)."""
        ...

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by an account."""
        ...
