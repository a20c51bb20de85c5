"""SQLAlchemy implementation of Post repository."""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.post import Post
from infrastructure.database.documents import (
    POST_COLLECTION_ENCODERS,
    comment_from_document,
    comment_to_document,
    like_from_document,
    like_to_document,
)
from infrastructure.database.models import PostModel


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID, bypassing any stale copy in the identity map."""
        stmt = (
            select(PostModel)
            .where(PostModel.id == id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_recent(self) -> list[Post]:
        """Get all posts, newest first."""
        stmt = select(PostModel).order_by(PostModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        model = self._to_model(post)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a post."""
        stmt = select(PostModel).where(PostModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def replace_collection(
        self,
        id: UUID,
        attribute: str,
        entries: Sequence[Any],
        expected_version: int,
    ) -> bool:
        """Compare-and-swap write of the likes or comments array."""
        encode = POST_COLLECTION_ENCODERS[attribute]
        stmt = (
            update(PostModel)
            .where(PostModel.id == id, PostModel.version == expected_version)
            .values(
                {
                    attribute: [encode(entry) for entry in entries],
                    "version": PostModel.version + 1,
                }
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount == 1)

    def _to_entity(self, model: PostModel) -> Post:
        """Convert ORM model to domain entity."""
        return Post(
            id=model.id,
            user_id=model.user_id,
            text=model.text,
            name=model.name,
            avatar=model.avatar,
            likes=[like_from_document(doc) for doc in model.likes or []],
            comments=[comment_from_document(doc) for doc in model.comments or []],
            version=model.version,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Post) -> PostModel:
        """Convert domain entity to ORM model."""
        return PostModel(
            id=entity.id,
            user_id=entity.user_id,
            text=entity.text,
            name=entity.name,
            avatar=entity.avatar,
            likes=[like_to_document(like) for like in entity.likes],
            comments=[comment_to_document(comment) for comment in entity.comments],
            version=entity.version,
            created_at=entity.created_at,
        )
