"""
Post Schemas

Request/response models for post, like and category endpoints.

Tags Input:
===========
Tags are accepted either as a list or as a comma-separated string:

    "tags": ["python", " fastapi ", "python", ""]
    "tags": "python, fastapi,python,"

Both normalize to ["python", "fastapi"]: trimmed, empties dropped,
duplicates removed keeping the first occurrence.
"""

from datetime import datetime
from typing import Annotated, Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, StringConstraints, field_validator

from bloghub.shared.models.enums import PostCategory, PostStatus
from bloghub.shared.schemas.comment import CommentThreadResponse
from bloghub.shared.schemas.common import BaseSchema
from bloghub.shared.schemas.user import AuthorSummary


MAX_TAGS = 20
MAX_TAG_LENGTH = 50

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
Body = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def normalize_tags(value: Any) -> Any:
    """Split, trim, drop empties and de-duplicate tags preserving order."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        return value

    tags: list[str] = []
    for item in value:
        if not isinstance(item, str):
            return value
        tag = item.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


# ═══════════════════════════════════════════════════════════════════════════════
# REQUESTS
# ═══════════════════════════════════════════════════════════════════════════════


class PostCreate(BaseModel):
    """Schema for creating a post. The author is always the caller."""

    title: Title
    body: Body
    category: PostCategory
    tags: list[Annotated[str, StringConstraints(max_length=MAX_TAG_LENGTH)]] = Field(
        default_factory=list,
        max_length=MAX_TAGS,
    )
    status: PostStatus = PostStatus.PUBLISHED
    cover_image: Optional[str] = Field(default=None, max_length=500)

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value: Any) -> Any:
        return normalize_tags(value)


class PostUpdate(BaseModel):
    """Partial update. Slug and author are not editable."""

    title: Optional[Title] = None
    body: Optional[Body] = None
    category: Optional[PostCategory] = None
    tags: Optional[list[Annotated[str, StringConstraints(max_length=MAX_TAG_LENGTH)]]] = Field(
        default=None,
        max_length=MAX_TAGS,
    )
    status: Optional[PostStatus] = None
    cover_image: Optional[str] = Field(default=None, max_length=500)

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value: Any) -> Any:
        return normalize_tags(value)


# ═══════════════════════════════════════════════════════════════════════════════
# RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class PostResponse(BaseSchema):
    """Schema for post response."""

    id: UUID
    title: str
    body: str
    slug: str
    category: PostCategory
    tags: list[str]
    status: PostStatus
    cover_image: Optional[str] = None
    author: AuthorSummary
    views: int
    likes_count: int
    comments_count: int
    created_at: datetime
    updated_at: datetime


class PostEnvelope(BaseModel):
    success: bool = True
    post: PostResponse


class PostListResponse(BaseModel):
    """One page of a post listing."""

    success: bool = True
    posts: list[PostResponse]
    total_pages: int = Field(serialization_alias="totalPages")
    current_page: int = Field(serialization_alias="currentPage")
    total: int


class PostsResponse(BaseModel):
    """Unpaginated list of posts (latest, search, own posts)."""

    success: bool = True
    posts: list[PostResponse]


class PostDetailResponse(BaseModel):
    """A single post with its discussion and related reading."""

    success: bool = True
    post: PostResponse
    comments: list[CommentThreadResponse]
    related: list[PostResponse]
    is_liked: bool = Field(serialization_alias="isLiked")


class PostStatsResponse(BaseModel):
    success: bool = True
    views: int
    likes: int
    comments: int


class LikeResponse(BaseModel):
    """Result of a like toggle on a post or comment."""

    success: bool = True
    likes_count: int = Field(serialization_alias="likesCount")
    is_liked: bool = Field(serialization_alias="isLiked")


class CategoryCount(BaseModel):
    name: PostCategory
    count: int


class CategoriesResponse(BaseModel):
    success: bool = True
    categories: list[CategoryCount]
