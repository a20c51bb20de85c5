"""Post repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.post import Post
from domain.repositories.collection_repository import ICollectionRepository


class IPostRepository(ICollectionRepository, Protocol):
    """Repository interface for Post entities."""

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID, always reflecting the latest stored version."""
        ...

    async def list_recent(self) -> list[Post]:
        """Get all posts, newest first."""
        ...

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a post and return success status."""
        ...
