"""
Comment Service

Business logic for threaded comments and comment likes.

Threading Rules:
================
- A comment without parent_id is top-level.
- A reply's parent must be a top-level comment of the same post.
  Replying to a reply is rejected (ValidationError), never flattened.
- Deleting a top-level comment removes its replies as well; the post's
  comments_count drops by exactly the number of rows removed.

Usage:
======
    from bloghub.shared.services.comment_service import CommentService

    service = CommentService(db)
    comment = await service.add_comment(post_ref, identity, data)
    deleted = await service.delete_comment(comment.id, identity)
"""

from typing import Optional, Union
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from bloghub.shared.core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    ValidationError,
)
from bloghub.shared.core.logging import get_logger
from bloghub.shared.models.comment import Comment
from bloghub.shared.repositories.comment_repository import CommentRepository
from bloghub.shared.schemas.comment import CommentCreate
from bloghub.shared.schemas.user import CurrentIdentity
from bloghub.shared.services.post_service import PostService


logger = get_logger(__name__)


class CommentService:
    """
    Service for comment-related business logic.

    Post visibility is delegated to PostService, so comments on a draft are
    as invisible as the draft itself.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = CommentRepository(session)
        self.posts = PostService(session)

    async def _get_comment(self, comment_id: UUID, identity: Optional[CurrentIdentity]) -> Comment:
        comment = await self.repo.get(comment_id)
        if comment is None:
            raise CommentNotFoundError(str(comment_id))
        # Raises PostNotFoundError for comments on a draft the caller cannot see
        await self.posts.get_visible_post(comment.post_id, identity)
        return comment

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE / READ
    # ═══════════════════════════════════════════════════════════════════════════

    async def add_comment(
        self,
        post_ref: Union[str, UUID],
        identity: CurrentIdentity,
        data: CommentCreate,
    ) -> Comment:
        """
        Add a top-level comment or a reply.

        Raises:
            PostNotFoundError: Post missing or not visible to the caller
            ValidationError: parent_id is unknown, on another post, or a reply
        """
        post = await self.posts.get_visible_post(post_ref, identity)

        if data.parent_id is not None:
            parent = await self.repo.get(data.parent_id)
            if parent is None or parent.post_id != post.id:
                raise ValidationError(
                    "Parent comment not found on this post",
                    details={"parent_id": str(data.parent_id)},
                )
            if parent.is_reply:
                raise ValidationError(
                    "Replies can only be added to top-level comments",
                    details={"parent_id": str(data.parent_id)},
                )

        comment = await self.repo.create_for_post(
            post_id=post.id,
            author_id=identity.id,
            body=data.body,
            parent_id=data.parent_id,
        )
        logger.info(
            "Comment created",
            comment_id=str(comment.id),
            post_id=str(post.id),
            is_reply=comment.is_reply,
        )
        return comment

    async def list_threads(
        self,
        post_ref: Union[str, UUID],
        identity: Optional[CurrentIdentity] = None,
    ) -> list[tuple[Comment, list[Comment]]]:
        post = await self.posts.get_visible_post(post_ref, identity)
        return await self.repo.list_threads(post.id)

    # ═══════════════════════════════════════════════════════════════════════════
    # DELETE
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete_comment(self, comment_id: UUID, identity: CurrentIdentity) -> int:
        """
        Delete a comment (and, for a top-level comment, its replies).

        Returns:
            Number of comments removed

        Raises:
            CommentNotFoundError: Checked first
            AuthorizationError: Caller is neither the author nor an admin
        """
        comment = await self._get_comment(comment_id, identity)
        if not identity.can_modify(comment.author_id):
            logger.info("Comment deletion denied", comment_id=str(comment_id))
            raise AuthorizationError("Not authorized to delete this comment")

        deleted = await self.repo.delete_thread(comment.id, comment.post_id)
        logger.info("Comment deleted", comment_id=str(comment_id), deleted=deleted)
        return deleted

    # ═══════════════════════════════════════════════════════════════════════════
    # ENGAGEMENT
    # ═══════════════════════════════════════════════════════════════════════════

    async def toggle_like(self, comment_id: UUID, identity: CurrentIdentity) -> tuple[bool, int]:
        """
        Like or unlike a comment on behalf of the caller.

        Returns:
            (is_liked, likes_count) after the toggle
        """
        comment = await self._get_comment(comment_id, identity)
        is_liked, likes_count = await self.repo.toggle_like(comment.id, identity.id)
        logger.info("Comment like toggled", comment_id=str(comment.id), is_liked=is_liked)
        return is_liked, likes_count
