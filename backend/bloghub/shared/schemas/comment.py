"""
Comment Schemas

Request/response models for comment endpoints.
"""

from datetime import datetime
from typing import Annotated, Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, StringConstraints

from bloghub.shared.schemas.common import BaseSchema
from bloghub.shared.schemas.user import AuthorSummary


class CommentCreate(BaseModel):
    """
    Schema for adding a comment.

    parent_id, when given, must be a top-level comment of the same post.
    """

    body: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=2000)]
    parent_id: Optional[UUID] = None


class CommentResponse(BaseSchema):
    id: UUID
    post_id: UUID
    parent_id: Optional[UUID] = None
    body: str
    author: AuthorSummary
    likes_count: int
    created_at: datetime


class CommentThreadResponse(CommentResponse):
    """A top-level comment with its replies, oldest reply first."""

    replies: list[CommentResponse] = Field(default_factory=list)


class CommentEnvelope(BaseModel):
    success: bool = True
    comment: CommentResponse


class CommentListResponse(BaseModel):
    success: bool = True
    comments: list[CommentThreadResponse]
    total: int


class CommentDeleteResponse(BaseModel):
    """deleted is the number of comments removed (the comment plus its replies)."""

    success: bool = True
    deleted: int


def build_threads(threads: list[tuple[Any, list[Any]]]) -> list[CommentThreadResponse]:
    """Turn [(comment, [reply, ...]), ...] from the repository into responses."""
    responses = []
    for comment, replies in threads:
        thread = CommentThreadResponse.model_validate(comment)
        thread.replies = [CommentResponse.model_validate(reply) for reply in replies]
        responses.append(thread)
    return responses
