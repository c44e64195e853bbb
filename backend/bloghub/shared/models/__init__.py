"""
BlogHub SQLAlchemy Models

This package contains all database models for the BlogHub application.

Model Hierarchy:
================
    User
       ├── Post (author_id)
       │      ├── PostTag (post_id)
       │      ├── PostLike (post_id, user_id)
       │      └── Comment (post_id)
       │             ├── Comment (parent_id, depth 1)
       │             └── CommentLike (comment_id, user_id)
       └── Comment (author_id)

Models Overview:
================
- Base: Base class and timestamp mixin
- User: Registered account
- Post: Authored, categorized content with engagement counters
- PostTag: Ordered tag of a post
- PostLike: (post, user) like membership
- Comment: Top-level comment or reply on a post
- CommentLike: (comment, user) like membership

Usage:
======
    from bloghub.shared.models import User, Post, Comment

    post = await post_repo.get(post_id)
    post.tags           # ["python", "fastapi"]
    post.likes_count    # always equals the number of PostLike rows
"""

from bloghub.shared.models.base import Base, TimestampMixin
from bloghub.shared.models.enums import (
    UserRole,
    PostStatus,
    PostCategory,
    PostSort,
)
from bloghub.shared.models.user import User
from bloghub.shared.models.post import Post, PostTag, PostLike
from bloghub.shared.models.comment import Comment, CommentLike

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    # Enums
    "UserRole",
    "PostStatus",
    "PostCategory",
    "PostSort",
    # Core models
    "User",
    "Post",
    "PostTag",
    "PostLike",
    "Comment",
    "CommentLike",
]
