"""
Comment Entity Models

Threaded discussion attached to a post. Nesting is exactly one level deep:

    Post
       └── Comment (parent_id = NULL)       ← top-level
              └── Comment (parent_id = X)   ← reply, X is always top-level

A comment row counts towards its post's comments_count whether it is a
top-level comment or a reply.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import DateTime, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bloghub.shared.models.base import Base, TimestampMixin, utcnow


if TYPE_CHECKING:
    from bloghub.shared.models.user import User


class Comment(Base, TimestampMixin):
    """
    Comment model.

    Attributes:
        id: Unique identifier (UUID v4)
        post_id: Post the comment belongs to
        author_id: Authoring user
        parent_id: Top-level comment this is a reply to, NULL for top-level
        body: Comment text
        likes_count: Cardinality of comment_likes for this comment
    """

    __tablename__ = "comments"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # No ON DELETE action: a thread is removed by a single DELETE matching the
    # comment and its replies, and the statement rowcount must include both
    parent_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("comments.id"),
        nullable=True,
        index=True,
    )

    body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    likes_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    author: Mapped["User"] = relationship("User", lazy="joined")

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, post_id={self.post_id}, parent_id={self.parent_id})>"


class CommentLike(Base):
    """Membership of a user in a comment's like set."""

    __tablename__ = "comment_likes"

    comment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("comments.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
