"""
Comment Repository

Database operations for comments, replies and comment likes. Every write
that adds or removes comment rows also moves the owning post's
comments_count by exactly the number of rows affected, in the same
transaction.

Thread Retrieval:
=================
    1. SELECT top-level comments of the post        (newest first)
    2. SELECT replies whose parent is one of those  (oldest first)
    3. Group replies under their parent in Python

Two queries regardless of the number of threads.
"""

from collections import defaultdict
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from bloghub.shared.models.comment import Comment, CommentLike
from bloghub.shared.repositories.base import BaseRepository
from bloghub.shared.repositories.post_repository import PostRepository


class CommentRepository(BaseRepository[Comment]):
    """Repository for Comment database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Comment, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # READ
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_threads(self, post_id: UUID) -> list[tuple[Comment, list[Comment]]]:
        """
        Threaded comments of a post.

        Returns:
            [(top_level_comment, [reply, ...]), ...] with top-level comments
            newest first and each reply list oldest first
        """
        top_level_result = await self.session.execute(
            select(Comment)
            .where(Comment.post_id == post_id, Comment.parent_id.is_(None))
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        top_level = list(top_level_result.scalars().all())
        if not top_level:
            return []

        replies_result = await self.session.execute(
            select(Comment)
            .where(Comment.parent_id.in_([comment.id for comment in top_level]))
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        replies: dict[UUID, list[Comment]] = defaultdict(list)
        for reply in replies_result.scalars().all():
            replies[reply.parent_id].append(reply)

        return [(comment, replies[comment.id]) for comment in top_level]

    async def ids_by_author(self, author_id: UUID) -> list[tuple[UUID, UUID]]:
        """(comment_id, post_id) for every comment written by author_id, top-level first."""
        result = await self.session.execute(
            select(Comment.id, Comment.post_id)
            .where(Comment.author_id == author_id)
            .order_by(Comment.parent_id.is_not(None), Comment.created_at)
        )
        return [(comment_id, post_id) for comment_id, post_id in result.all()]

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_for_post(
        self,
        *,
        post_id: UUID,
        author_id: UUID,
        body: str,
        parent_id: Optional[UUID] = None,
    ) -> Comment:
        """
        Insert a comment and increment the post's comments_count by one.

        SQL Generated:
            INSERT INTO comments (...) VALUES (...)
            UPDATE posts SET comments_count = comments_count + 1 WHERE id = :post_id
        """
        comment = await self.create(
            post_id=post_id,
            author_id=author_id,
            body=body,
            parent_id=parent_id,
        )
        await self._adjust_post_comments(post_id, 1)
        return comment

    async def delete_thread(self, comment_id: UUID, post_id: UUID) -> int:
        """
        Delete a comment together with its replies in one statement.

        For a reply the statement matches only the reply itself. Likes on the
        removed comments go first. The post's comments_count is decremented
        by the number of comment rows the DELETE reported.

        Returns:
            Number of comments removed (0 if the comment was already gone)

        SQL Generated:
            DELETE FROM comments WHERE id = :cid OR parent_id = :cid
            UPDATE posts SET comments_count = comments_count - :rowcount
        """
        thread = or_(Comment.id == comment_id, Comment.parent_id == comment_id)

        await self.session.execute(
            delete(CommentLike)
            .where(CommentLike.comment_id.in_(select(Comment.id).where(thread)))
            .execution_options(synchronize_session=False)
        )
        removed = await self.session.execute(
            delete(Comment).where(thread).execution_options(synchronize_session=False)
        )

        await self._adjust_post_comments(post_id, -removed.rowcount)
        return removed.rowcount

    # ═══════════════════════════════════════════════════════════════════════════
    # LIKES
    # ═══════════════════════════════════════════════════════════════════════════

    async def toggle_like(self, comment_id: UUID, user_id: UUID) -> tuple[bool, int]:
        """
        Toggle user_id's like on a comment.

        Returns:
            (is_liked, likes_count) after the toggle
        """
        return await self.toggle_link(
            CommentLike, comment_id, "likes_count", comment_id=comment_id, user_id=user_id
        )

    async def liked_comment_ids(self, user_id: UUID) -> list[UUID]:
        result = await self.session.execute(
            select(CommentLike.comment_id).where(CommentLike.user_id == user_id)
        )
        return list(result.scalars().all())

    async def remove_like(self, comment_id: UUID, user_id: UUID) -> int:
        removed = await self.session.execute(
            delete(CommentLike)
            .where(CommentLike.comment_id == comment_id, CommentLike.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        await self.adjust_counter(comment_id, "likes_count", -removed.rowcount)
        return removed.rowcount

    async def _adjust_post_comments(self, post_id: UUID, delta: int) -> None:
        await PostRepository(self.session).adjust_counter(post_id, "comments_count", delta)
