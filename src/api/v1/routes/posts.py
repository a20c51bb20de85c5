"""Post API routes."""

from fastapi import APIRouter, Depends, status

from api.dependencies.auth import CurrentIdentity
from api.v1.dependencies import get_post_service
from api.v1.schemas.common import ERROR_RESPONSES, DataResponse, ErrorResponse, MessageResponse
from api.v1.schemas.post import (
    CommentCreate,
    CommentResponse,
    LikeResponse,
    PostCreate,
    PostResponse,
)
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Post not found"}}
FORBIDDEN = {403: {"model": ErrorResponse, "description": "Not the owner"}}
CONFLICT = {409: {"model": ErrorResponse, "description": "Duplicate or concurrent write"}}


@router.post(
    "",
    response_model=DataResponse[PostResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
    responses=ERROR_RESPONSES,
)
async def create_post(
    body: PostCreate,
    identity: CurrentIdentity,
    service: PostService = Depends(get_post_service),
) -> DataResponse[PostResponse]:
    """Create a post authored by the caller."""
    post = await service.create(identity.id, body.text)
    return DataResponse(data=PostResponse.model_validate(post))


@router.get(
    "",
    response_model=DataResponse[list[PostResponse]],
    summary="List all posts",
)
async def list_posts(
    service: PostService = Depends(get_post_service),
) -> DataResponse[list[PostResponse]]:
    """Get every post, newest first."""
    posts = await service.get_all()
    return DataResponse(data=[PostResponse.model_validate(post) for post in posts])


@router.get(
    "/{post_id}",
    response_model=DataResponse[PostResponse],
    summary="Get a post",
    responses=NOT_FOUND,
)
async def get_post(
    post_id: str,
    service: PostService = Depends(get_post_service),
) -> DataResponse[PostResponse]:
    """Get a single post by ID."""
    post = await service.get_by_id(post_id)
    return DataResponse(data=PostResponse.model_validate(post))


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    responses={**ERROR_RESPONSES, **NOT_FOUND, **FORBIDDEN},
)
async def delete_post(
    post_id: str,
    identity: CurrentIdentity,
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    """Delete a post. Only its author may do so."""
    await service.delete(post_id, identity.id)
    return MessageResponse(message="Post removed")


@router.put(
    "/{post_id}/like",
    response_model=DataResponse[list[LikeResponse]],
    summary="Like a post",
    responses={**ERROR_RESPONSES, **NOT_FOUND, **CONFLICT},
)
async def like_post(
    post_id: str,
    identity: CurrentIdentity,
    service: PostService = Depends(get_post_service),
) -> DataResponse[list[LikeResponse]]:
    """Like a post. Liking the same post twice fails with 409."""
    likes = await service.like(post_id, identity.id)
    return DataResponse(data=[LikeResponse.model_validate(like) for like in likes])


@router.put(
    "/{post_id}/unlike",
    response_model=DataResponse[list[LikeResponse]],
    summary="Unlike a post",
    responses={**ERROR_RESPONSES, **NOT_FOUND, **CONFLICT},
)
async def unlike_post(
    post_id: str,
    identity: CurrentIdentity,
    service: PostService = Depends(get_post_service),
) -> DataResponse[list[LikeResponse]]:
    """Withdraw the caller's like."""
    likes = await service.unlike(post_id, identity.id)
    return DataResponse(data=[LikeResponse.model_validate(like) for like in likes])


@router.post(
    "/{post_id}/comments",
    response_model=DataResponse[list[CommentResponse]],
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    responses={**ERROR_RESPONSES, **NOT_FOUND, **CONFLICT},
)
async def add_comment(
    post_id: str,
    body: CommentCreate,
    identity: CurrentIdentity,
    service: PostService = Depends(get_post_service),
) -> DataResponse[list[CommentResponse]]:
    """Add a comment to a post."""
    comments = await service.add_comment(post_id, identity.id, body.text)
    return DataResponse(data=[CommentResponse.model_validate(c) for c in comments])


@router.delete(
    "/{post_id}/comments/{comment_id}",
    response_model=DataResponse[list[CommentResponse]],
    summary="Remove a comment",
    responses={**ERROR_RESPONSES, **NOT_FOUND, **FORBIDDEN, **CONFLICT},
)
async def remove_comment(
    post_id: str,
    comment_id: str,
    identity: CurrentIdentity,
    service: PostService = Depends(get_post_service),
) -> DataResponse[list[CommentResponse]]:
    """Remove a comment. Allowed for the comment's author and the post's author."""
    comments = await service.remove_comment(post_id, comment_id, identity.id)
    return DataResponse(data=[CommentResponse.model_validate(c) for c in comments])
