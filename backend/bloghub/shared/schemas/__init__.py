"""
Pydantic Schemas

Request and response models for the API.

Schema Categories:
==================
- common: Base schema, pagination, error and health responses
- user: Authentication and profile schemas
- post: Post, like and category schemas
- comment: Comment and thread schemas

Usage:
======
    from bloghub.shared.schemas.user import UserCreate, UserResponse, AuthResponse
    from bloghub.shared.schemas.post import PostCreate, PostListResponse
"""

from bloghub.shared.schemas.common import (
    BaseSchema,
    PaginationParams,
    MessageResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
)
from bloghub.shared.schemas.user import (
    UserCreate,
    UserLogin,
    UserUpdate,
    PasswordChange,
    AccountDelete,
    RoleUpdate,
    AuthorSummary,
    UserResponse,
    PublicUserResponse,
    UserEnvelope,
    AuthResponse,
    TokenRefreshResponse,
    CurrentIdentity,
)
from bloghub.shared.schemas.comment import (
    CommentCreate,
    CommentResponse,
    CommentThreadResponse,
    CommentEnvelope,
    CommentListResponse,
    CommentDeleteResponse,
)
from bloghub.shared.schemas.post import (
    PostCreate,
    PostUpdate,
    PostResponse,
    PostEnvelope,
    PostListResponse,
    PostsResponse,
    PostDetailResponse,
    PostStatsResponse,
    LikeResponse,
    CategoryCount,
    CategoriesResponse,
)

__all__ = [
    # Common
    "BaseSchema",
    "PaginationParams",
    "MessageResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    # User
    "UserCreate",
    "UserLogin",
    "UserUpdate",
    "PasswordChange",
    "AccountDelete",
    "RoleUpdate",
    "AuthorSummary",
    "UserResponse",
    "PublicUserResponse",
    "UserEnvelope",
    "AuthResponse",
    "TokenRefreshResponse",
    "CurrentIdentity",
    # Comment
    "CommentCreate",
    "CommentResponse",
    "CommentThreadResponse",
    "CommentEnvelope",
    "CommentListResponse",
    "CommentDeleteResponse",
    # Post
    "PostCreate",
    "PostUpdate",
    "PostResponse",
    "PostEnvelope",
    "PostListResponse",
    "PostsResponse",
    "PostDetailResponse",
    "PostStatsResponse",
    "LikeResponse",
    "CategoryCount",
    "CategoriesResponse",
]
