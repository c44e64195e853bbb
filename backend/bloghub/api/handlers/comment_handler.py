"""
Comment Handler

Threaded comments, one level deep.

Endpoints:
==========
    POST   /posts/{ref}/comments         → Comment or reply on a post
    GET    /posts/{ref}/comments         → Threads for a post
    DELETE /comments/{comment_id}        → Delete a comment and its replies
    POST   /comments/{comment_id}/like   → Toggle the caller's like
"""

from uuid import UUID

from fastapi import APIRouter, status

from bloghub.api.dependencies.auth import CurrentUser, OptionalUser
from bloghub.api.dependencies.services import CommentServiceDep
from bloghub.shared.schemas.comment import (
    CommentCreate,
    CommentDeleteResponse,
    CommentEnvelope,
    CommentListResponse,
    CommentResponse,
    build_threads,
)
from bloghub.shared.schemas.post import LikeResponse


router = APIRouter()


@router.post(
    "/posts/{post_ref}/comments",
    response_model=CommentEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_ref: str,
    comment_data: CommentCreate,
    current_user: CurrentUser,
    comment_service: CommentServiceDep,
):
    """
    Add a comment, or a reply when parent_id is given.

    Raises:
        400: If the parent is missing, on another post, or itself a reply
        404: If the post does not exist or is hidden from the caller
    """
    comment = await comment_service.add_comment(post_ref, current_user, comment_data)
    return CommentEnvelope(comment=CommentResponse.model_validate(comment))


@router.get("/posts/{post_ref}/comments", response_model=CommentListResponse)
async def list_comments(
    post_ref: str,
    current_user: OptionalUser,
    comment_service: CommentServiceDep,
):
    threads = await comment_service.list_threads(post_ref, current_user)
    total = sum(1 + len(replies) for _, replies in threads)
    return CommentListResponse(comments=build_threads(threads), total=total)


@router.delete("/comments/{comment_id}", response_model=CommentDeleteResponse)
async def delete_comment(
    comment_id: UUID,
    current_user: CurrentUser,
    comment_service: CommentServiceDep,
):
    """
    Raises:
        403: If the caller is neither the comment author nor an admin
        404: If the comment does not exist
    """
    deleted = await comment_service.delete_comment(comment_id, current_user)
    return CommentDeleteResponse(deleted=deleted)


@router.post("/comments/{comment_id}/like", response_model=LikeResponse)
async def toggle_comment_like(
    comment_id: UUID,
    current_user: CurrentUser,
    comment_service: CommentServiceDep,
):
    is_liked, likes_count = await comment_service.toggle_like(comment_id, current_user)
    return LikeResponse(likes_count=likes_count, is_liked=is_liked)
