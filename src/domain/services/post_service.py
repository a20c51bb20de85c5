"""Post service layer with business logic."""

from typing import Callable, List
from uuid import UUID

import structlog

from core.exceptions import (
    AccountNotFoundError,
    AuthorizationError,
    CommentNotFoundError,
    LikeNotFoundError,
    PostNotFoundError,
)
from domain.entities.post import Comment, Like, Post
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.identifiers import coerce_id
from domain.services.nested_collection import CollectionMutator, NestedCollection

logger = structlog.get_logger()

# One like per actor; only the liking actor can take it back. Removal is keyed
# by the actor, so the key passed in is the post id (used for error details).
LIKES: NestedCollection[Post, Like] = NestedCollection(
    attribute="likes",
    not_found=LikeNotFoundError,
    matches=lambda like, actor, _key: like.user_id == actor,
    may_remove=lambda _post, like, actor: like.user_id == actor,
    admit=lambda likes, actor: all(like.user_id != actor for like in likes),
    duplicate_message="Post already liked",
)

# A comment can be removed by whoever wrote it or by the post's author.
COMMENTS: NestedCollection[Post, Comment] = NestedCollection(
    attribute="comments",
    not_found=CommentNotFoundError,
    matches=lambda comment, _actor, comment_id: comment.id == comment_id,
    may_remove=lambda post, comment, actor: actor in (comment.user_id, post.user_id),
    forbidden_message="You are not authorized to remove this comment",
)


class PostService:
    """Service layer for Post business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        max_write_attempts: int = 3,
    ) -> None:
        self._uow_factory = uow_factory
        self._mutator = CollectionMutator(max_write_attempts)

    async def create(self, user_id: UUID, text: str) -> Post:
        """Create a post, snapshotting the author's name and avatar."""
        async with self._uow_factory() as uow:
            author = await uow.accounts.get(user_id)
            if not author:
                raise AccountNotFoundError(str(user_id))

            post = Post(
                user_id=user_id,
                text=text,
                name=author.name,
                avatar=author.avatar,
            )
            created = await uow.posts.create(post)
            await uow.commit()

        logger.info("post_created", post_id=str(created.id))
        return created

    async def get_all(self) -> List[Post]:
        """Get all posts, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.list_recent()

    async def get_by_id(self, post_id: UUID | str) -> Post:
        """Get a post. Malformed IDs are reported as not found."""
        post_uuid = coerce_id(post_id, PostNotFoundError)
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_uuid)
            if not post:
                raise PostNotFoundError(str(post_uuid))
            return post

    async def delete(self, post_id: UUID | str, user_id: UUID) -> None:
        """Delete a post. Only its author may do so."""
        post_uuid = coerce_id(post_id, PostNotFoundError)
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_uuid)
            if not post:
                raise PostNotFoundError(str(post_uuid))
            if post.user_id != user_id:
                raise AuthorizationError("You are not authorized to delete this post")

            await uow.posts.delete(post.id)
            await uow.commit()

        logger.info("post_deleted", post_id=str(post_uuid))

    async def like(self, post_id: UUID | str, user_id: UUID) -> List[Like]:
        """Like a post. A second like by the same actor is rejected."""
        post_uuid = coerce_id(post_id, PostNotFoundError)
        like = Like(user_id=user_id)
        async with self._uow_factory() as uow:
            post = await self._mutator.apply(
                uow,
                uow.posts,
                load=lambda: uow.posts.get(post_uuid),
                missing=lambda: PostNotFoundError(str(post_uuid)),
                collection=LIKES,
                operation=lambda p: LIKES.insert(p, user_id, like),
            )
        return post.likes

    async def unlike(self, post_id: UUID | str, user_id: UUID) -> List[Like]:
        """Remove the actor's like from a post."""
        post_uuid = coerce_id(post_id, PostNotFoundError)
        async with self._uow_factory() as uow:
            post = await self._mutator.apply(
                uow,
                uow.posts,
                load=lambda: uow.posts.get(post_uuid),
                missing=lambda: PostNotFoundError(str(post_uuid)),
                collection=LIKES,
                operation=lambda p: LIKES.remove(p, user_id, p.id),
            )
        return post.likes

    async def add_comment(self, post_id: UUID | str, user_id: UUID, text: str) -> List[Comment]:
        """Comment on a post, snapshotting the commenter's name and avatar."""
        post_uuid = coerce_id(post_id, PostNotFoundError)
        async with self._uow_factory() as uow:
            author = await uow.accounts.get(user_id)
            if not author:
                raise AccountNotFoundError(str(user_id))

            comment = Comment(
                user_id=user_id,
                text=text,
                name=author.name,
                avatar=author.avatar,
            )
            post = await self._mutator.apply(
                uow,
                uow.posts,
                load=lambda: uow.posts.get(post_uuid),
                missing=lambda: PostNotFoundError(str(post_uuid)),
                collection=COMMENTS,
                operation=lambda p: COMMENTS.insert(p, user_id, comment),
            )
        return post.comments

    async def remove_comment(
        self, post_id: UUID | str, comment_id: UUID | str, user_id: UUID
    ) -> List[Comment]:
        """Remove a comment. Allowed for the comment's author or the post's author."""
        post_uuid = coerce_id(post_id, PostNotFoundError)
        async with self._uow_factory() as uow:
            post = await self._mutator.apply(
                uow,
                uow.posts,
                load=lambda: uow.posts.get(post_uuid),
                missing=lambda: PostNotFoundError(str(post_uuid)),
                collection=COMMENTS,
                operation=lambda p: COMMENTS.remove(
                    p, user_id, coerce_id(comment_id, CommentNotFoundError)
                ),
            )
        return post.comments
