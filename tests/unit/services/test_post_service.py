"""Unit tests for Post service layer."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    AccountNotFoundError,
    AuthorizationError,
    CommentNotFoundError,
    DuplicateEntryError,
    LikeNotFoundError,
    PostNotFoundError,
)
from domain.entities.account import Account
from domain.entities.post import Comment, Like, Post
from domain.services.post_service import PostService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> PostService:
    """Create service with fake UoW."""
    uow.posts.replace_collection.return_value = True
    return PostService(lambda: uow)


@pytest.fixture
def author(user_id: UUID) -> Account:
    return Account(
        id=user_id,
        name="Ada",
        email="ada@example.com",
        password_hash="x",
        avatar="https://avatar/ada",
    )


@pytest.fixture
def sample_post(user_id: UUID) -> Post:
    return Post(user_id=user_id, text="Hello world", name="Ada")


class TestPostServiceCreate:
    @pytest.mark.asyncio
    async def test_snapshots_author_name_and_avatar(
        self, service: PostService, uow: FakeUnitOfWork, author: Account
    ) -> None:
        uow.accounts.get.return_value = author
        uow.posts.create.side_effect = lambda post: post

        result = await service.create(author.id, "Hello world")

        assert result.user_id == author.id
        assert result.name == "Ada"
        assert result.avatar == "https://avatar/ada"
        assert result.likes == []
        assert result.comments == []
        assert uow.committed

    @pytest.mark.asyncio
    async def test_missing_author_raises(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.accounts.get.return_value = None

        with pytest.raises(AccountNotFoundError):
            await service.create(user_id, "Hello")

        uow.posts.create.assert_not_called()


class TestPostServiceGet:
    @pytest.mark.asyncio
    async def test_get_all_returns_repository_order(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        posts = [Post(user_id=user_id, text="newer"), Post(user_id=user_id, text="older")]
        uow.posts.list_recent.return_value = posts

        assert await service.get_all() == posts

    @pytest.mark.asyncio
    async def test_get_by_id(
        self, service: PostService, uow: FakeUnitOfWork, sample_post: Post
    ) -> None:
        uow.posts.get.return_value = sample_post

        result = await service.get_by_id(str(sample_post.id))

        assert result is sample_post
        uow.posts.get.assert_called_once_with(sample_post.id)

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(
        self, service: PostService, uow: FakeUnitOfWork
    ) -> None:
        with pytest.raises(PostNotFoundError) as exc_info:
            await service.get_by_id("not-an-id")

        assert exc_info.value.status_code == 404
        uow.posts.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, service: PostService, uow: FakeUnitOfWork) -> None:
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.get_by_id(uuid4())


class TestPostServiceDelete:
    @pytest.mark.asyncio
    async def test_author_can_delete(
        self, service: PostService, uow: FakeUnitOfWork, sample_post: Post, user_id: UUID
    ) -> None:
        uow.posts.get.return_value = sample_post

        await service.delete(sample_post.id, user_id)

        uow.posts.delete.assert_called_once_with(sample_post.id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_other_actor_is_forbidden(
        self, service: PostService, uow: FakeUnitOfWork, sample_post: Post, actor_id: UUID
    ) -> None:
        uow.posts.get.return_value = sample_post

        with pytest.raises(AuthorizationError) as exc_info:
            await service.delete(sample_post.id, actor_id)

        assert exc_info.value.status_code == 403
        uow.posts.delete.assert_not_called()


class TestPostServiceLikes:
    @pytest.mark.asyncio
    async def test_like_prepends_actor(
        self, service: PostService, uow: FakeUnitOfWork, sample_post: Post, actor_id: UUID
    ) -> None:
        earlier = Like(user_id=uuid4())
        sample_post.likes.append(earlier)
        uow.posts.get.return_value = sample_post

        likes = await service.like(sample_post.id, actor_id)

        assert [like.user_id for like in likes] == [actor_id, earlier.user_id]
        assert uow.committed

    @pytest.mark.asyncio
    async def test_second_like_is_rejected(
        self, service: PostService, uow: FakeUnitOfWork, sample_post: Post, actor_id: UUID
    ) -> None:
        sample_post.likes.append(Like(user_id=actor_id))
        uow.posts.get.return_value = sample_post

        with pytest.raises(DuplicateEntryError) as exc_info:
            await service.like(sample_post.id, actor_id)

        assert exc_info.value.message == "Post already liked"
        assert len(sample_post.likes) == 1

    @pytest.mark.asyncio
    async def test_unlike_removes_only_the_actors_like(
        self, service: PostService, uow: FakeUnitOfWork, sample_post: Post, actor_id: UUID
    ) -> None:
        other = Like(user_id=uuid4())
        sample_post.likes.extend([Like(user_id=actor_id), other])
        uow.posts.get.return_value = sample_post

        likes = await service.unlike(sample_post.id, actor_id)

        assert likes == [other]

    @pytest.mark.asyncio
    async def test_unlike_without_like_is_not_found(
        self, service: PostService, uow: FakeUnitOfWork, sample_post: Post, actor_id: UUID
    ) -> None:
        uow.posts.get.return_value = sample_post

        with pytest.raises(LikeNotFoundError):
            await service.unlike(sample_post.id, actor_id)

        uow.posts.replace_collection.assert_not_called()

    @pytest.mark.asyncio
    async def test_like_missing_post_is_not_found(
        self, service: PostService, uow: FakeUnitOfWork, actor_id: UUID
    ) -> None:
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.like(uuid4(), actor_id)


class TestPostServiceComments:
    @pytest.mark.asyncio
    async def test_add_comment_snapshots_commenter(
        self, service: PostService, uow: FakeUnitOfWork, sample_post: Post
    ) -> None:
        commenter = Account(name="Grace", email="grace@example.com", password_hash="x")
        uow.accounts.get.return_value = commenter
        uow.posts.get.return_value = sample_post

        comments = await service.add_comment(sample_post.id, commenter.id, "Nice")

        assert comments[0].user_id == commenter.id
        assert comments[0].name == "Grace"
        assert comments[0].text == "Nice"

    @pytest.mark.asyncio
    async def test_comment_author_can_remove(
        self, service: PostService, uow: FakeUnitOfWork, sample_post: Post, actor_id: UUID
    ) -> None:
        comment = Comment(user_id=actor_id, text="mine")
        sample_post.comments.append(comment)
        uow.posts.get.return_value = sample_post

        comments = await service.remove_comment(sample_post.id, str(comment.id), actor_id)

        assert comments == []

    @pytest.mark.asyncio
    async def test_post_author_can_remove_any_comment(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        sample_post: Post,
        user_id: UUID,
        actor_id: UUID,
    ) -> None:
        comment = Comment(user_id=actor_id, text="theirs")
        sample_post.comments.append(comment)
        uow.posts.get.return_value = sample_post

        comments = await service.remove_comment(sample_post.id, comment.id, user_id)

        assert comments == []

    @pytest.mark.asyncio
    async def test_stranger_cannot_remove_comment(
        self, service: PostService, uow: FakeUnitOfWork, sample_post: Post, actor_id: UUID
    ) -> None:
        comment = Comment(user_id=actor_id, text="theirs")
        sample_post.comments.append(comment)
        uow.posts.get.return_value = sample_post

        with pytest.raises(AuthorizationError):
            await service.remove_comment(sample_post.id, comment.id, uuid4())

        assert sample_post.comments == [comment]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("comment_id", ["not-an-id", str(uuid4())])
    async def test_unknown_or_malformed_comment_is_not_found(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        sample_post: Post,
        user_id: UUID,
        comment_id: str,
    ) -> None:
        uow.posts.get.return_value = sample_post

        with pytest.raises(CommentNotFoundError):
            await service.remove_comment(sample_post.id, comment_id, user_id)
