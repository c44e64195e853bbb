"""
Repository Pattern Implementations

This module provides the Repository pattern for database operations.
Repositories encapsulate database queries and provide a clean API for data access.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]           ← Generic CRUD, atomic counters, link toggles
         │
         ├── UserRepository             ← Lookups by email/username, roles
         ├── PostRepository             ← Listing, search, related, views, likes
         └── CommentRepository          ← Threads, thread deletion, comment likes

Usage Example:
==============
    from bloghub.shared.repositories import PostRepository

    async def like(session: AsyncSession, post_id: UUID, user_id: UUID):
        repo = PostRepository(session)
        is_liked, likes_count = await repo.toggle_like(post_id, user_id)
        return likes_count
"""

from bloghub.shared.repositories.base import BaseRepository
from bloghub.shared.repositories.user_repository import UserRepository
from bloghub.shared.repositories.post_repository import PostRepository
from bloghub.shared.repositories.comment_repository import CommentRepository

__all__ = [
    # Base class
    "BaseRepository",
    # Entity-specific repositories
    "UserRepository",
    "PostRepository",
    "CommentRepository",
]
