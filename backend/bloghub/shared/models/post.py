"""
Post Entity Models

A blog post together with the two relations hanging off it:

    Post
       ├── author (User)          - immutable after creation
       ├── tag_rows (PostTag[])   - ordered, distinct tag names
       └── post_likes (PostLike)  - set of users who liked the post

Engagement counters (likes_count, comments_count) are denormalized. They are
only ever changed by atomic "SET n = n + k" statements issued in the same
transaction as the like/comment rows they summarize (see PostRepository).

SAMPLE POST RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 770e8400-e29b-41d4-a716-446655440000                      │
│ title            │ "Hidden Gems of Northeast India"                          │
│ slug             │ "hidden-gems-of-northeast-india-1712650000000"            │
│ category         │ "Travel"                                                  │
│ status           │ "published"                                               │
│ views            │ 200                                                       │
│ likes_count      │ 12                                                        │
│ comments_count   │ 4                                                         │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import (
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bloghub.shared.models.base import Base, TimestampMixin, utcnow
from bloghub.shared.models.enums import PostCategory, PostStatus, enum_values


if TYPE_CHECKING:
    from bloghub.shared.models.user import User


class Post(Base, TimestampMixin):
    """
    Post model - an authored, categorized piece of content.

    Attributes:
        id: Unique identifier (UUID v4)
        title: Post title
        body: Rich text body
        slug: URL-safe unique alternate identifier, written once
        category: One of PostCategory
        status: draft or published
        cover_image: Optional reference to a cover image
        author_id: Owning user, never changes
        views: Number of fetches of the published post
        likes_count: Cardinality of post_likes for this post
        comments_count: Number of comments (replies included) on this post
    """

    __tablename__ = "posts"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # CONTENT
    # ═══════════════════════════════════════════════════════════════════════════

    title: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )

    body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    slug: Mapped[str] = mapped_column(
        String(120),
        unique=True,
        nullable=False,
        index=True,
    )

    category: Mapped[PostCategory] = mapped_column(
        SQLEnum(PostCategory, native_enum=False, values_callable=enum_values, length=32),
        nullable=False,
        index=True,
    )

    status: Mapped[PostStatus] = mapped_column(
        SQLEnum(PostStatus, native_enum=False, values_callable=enum_values, length=16),
        nullable=False,
        default=PostStatus.PUBLISHED,
        index=True,
    )

    cover_image: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # OWNERSHIP
    # ═══════════════════════════════════════════════════════════════════════════

    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # ENGAGEMENT COUNTERS
    # ═══════════════════════════════════════════════════════════════════════════

    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    likes_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comments_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    # Many-to-One: joined so that async code never triggers a lazy load
    author: Mapped["User"] = relationship("User", lazy="joined")

    tag_rows: Mapped[list["PostTag"]] = relationship(
        "PostTag",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="PostTag.position",
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @property
    def tags(self) -> list[str]:
        return [row.name for row in self.tag_rows]

    def set_tags(self, names: list[str]) -> None:
        """
        Replace the tag list, keeping rows for names that stay.

        Reusing existing rows avoids deleting and re-inserting the same
        (post_id, name) key in one flush.
        """
        existing = {row.name: row for row in self.tag_rows}
        rows = []
        for position, name in enumerate(names):
            row = existing.get(name) or PostTag(name=name)
            row.position = position
            rows.append(row)
        self.tag_rows = rows

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, slug={self.slug})>"


class PostTag(Base):
    """One tag on one post. (post_id, name) is unique, position keeps order."""

    __tablename__ = "post_tags"

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    )
    name: Mapped[str] = mapped_column(String(50), primary_key=True, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<PostTag(post_id={self.post_id}, name={self.name})>"


class PostLike(Base):
    """
    Membership of a user in a post's like set.

    The composite primary key gives set semantics: a user can appear at most
    once per post, whatever the interleaving of concurrent toggles.
    """

    __tablename__ = "post_likes"

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("posts.id", ondelete="CASCADE"),
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
