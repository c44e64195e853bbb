"""
Post Service

Business logic for authoring, reading and engaging with posts.

Visibility Rules:
=================
┌──────────────────────┬─────────────────────┬──────────────────────────────┐
│ Post status          │ Caller              │ Result                       │
├──────────────────────┼─────────────────────┼──────────────────────────────┤
│ published            │ anybody             │ visible, fetch counts a view │
│ draft                │ author / admin      │ visible, no view counted     │
│ draft                │ anybody else        │ PostNotFoundError            │
└──────────────────────┴─────────────────────┴──────────────────────────────┘

Edits and deletes check existence (and visibility) first and ownership
second, so a caller who may not see a post always gets 404, never 403.

Usage:
======
    from bloghub.shared.services.post_service import PostService

    service = PostService(db)
    post = await service.create_post(identity, data)
    liked, likes_count = await service.toggle_like(post.id, identity)
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Union
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bloghub.config.settings import settings
from bloghub.shared.core.exceptions import (
    AuthorizationError,
    ConflictError,
    PostNotFoundError,
)
from bloghub.shared.core.logging import get_logger
from bloghub.shared.models.comment import Comment
from bloghub.shared.models.enums import PostCategory, PostSort, PostStatus
from bloghub.shared.models.post import Post
from bloghub.shared.repositories.comment_repository import CommentRepository
from bloghub.shared.repositories.post_repository import PostRepository
from bloghub.shared.schemas.common import PaginationParams
from bloghub.shared.schemas.post import PostCreate, PostUpdate
from bloghub.shared.schemas.user import CurrentIdentity
from bloghub.shared.utils.text import random_suffix, slugify


logger = get_logger(__name__)

SLUG_ATTEMPTS = 3


@dataclass
class PostPage:
    """One page of a post listing."""

    posts: list[Post]
    total: int
    page: int
    total_pages: int


@dataclass
class PostDetail:
    """A post as shown on its own page."""

    post: Post
    threads: list[tuple[Comment, list[Comment]]]
    related: list[Post]
    is_liked: bool


def parse_post_ref(ref: Union[str, UUID]) -> Union[UUID, str]:
    """A post is addressed by UUID or by slug; anything not a UUID is a slug."""
    if isinstance(ref, UUID):
        return ref
    try:
        return UUID(ref)
    except ValueError:
        return ref


class PostService:
    """
    Service for post-related business logic.

    Handles:
    - Post creation with slug generation
    - Listing, searching and related posts
    - Visibility of drafts
    - Author/admin authorization for edit and delete
    - Views and likes
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = PostRepository(session)
        self.comment_repo = CommentRepository(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP HELPERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_visible_post(
        self,
        ref: Union[str, UUID],
        identity: Optional[CurrentIdentity] = None,
    ) -> Post:
        """
        Resolve a post by id or slug and apply draft visibility.

        Raises:
            PostNotFoundError: Missing, or a draft the caller may not see
        """
        key = parse_post_ref(ref)
        if isinstance(key, UUID):
            post = await self.repo.get(key)
        else:
            post = await self.repo.get_by_slug(key)

        if post is None or not self._can_see(post, identity):
            raise PostNotFoundError(str(ref))
        return post

    async def get_modifiable_post(self, post_id: UUID, identity: CurrentIdentity) -> Post:
        """
        Post the caller is allowed to edit or delete.

        Raises:
            PostNotFoundError: Checked first
            AuthorizationError: Caller is neither the author nor an admin
        """
        post = await self.get_visible_post(post_id, identity)
        if not identity.can_modify(post.author_id):
            logger.info("Post modification denied", post_id=str(post_id))
            raise AuthorizationError("Not authorized to modify this post")
        return post

    @staticmethod
    def _can_see(post: Post, identity: Optional[CurrentIdentity]) -> bool:
        if post.status == PostStatus.PUBLISHED:
            return True
        return identity is not None and identity.can_modify(post.author_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE / UPDATE / DELETE
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_post(self, identity: CurrentIdentity, data: PostCreate) -> Post:
        """
        Create a post authored by the caller.

        The slug is the slugified title plus the creation time in
        milliseconds; if that is taken a random suffix is appended.

        Raises:
            ConflictError: If no unique slug could be allocated
        """
        created_at = datetime.now(timezone.utc)
        base_slug = f"{slugify(data.title, settings.SLUG_MAX_LENGTH)}-{int(created_at.timestamp() * 1000)}"

        slug = base_slug
        for _ in range(SLUG_ATTEMPTS):
            if not await self.repo.slug_exists(slug):
                post = Post(
                    title=data.title,
                    body=data.body,
                    slug=slug,
                    category=data.category,
                    status=data.status,
                    cover_image=data.cover_image,
                    author_id=identity.id,
                    created_at=created_at,
                    updated_at=created_at,
                )
                post.set_tags(data.tags)
                try:
                    async with self.session.begin_nested():
                        self.session.add(post)
                        await self.session.flush()
                except IntegrityError:
                    # Slug taken between the check and the insert; the
                    # savepoint rollback has already discarded the pending post
                    logger.warning("Slug collision on insert", slug=slug)
                else:
                    logger.info("Post created", post_id=str(post.id), slug=slug)
                    return await self.repo.reload(post)
            slug = f"{base_slug}-{random_suffix()}"

        raise ConflictError("Could not allocate a unique slug")

    async def update_post(self, post_id: UUID, identity: CurrentIdentity, data: PostUpdate) -> Post:
        """
        Partial update by the author or an admin.

        Only fields present in the request are changed. Slug, author and
        counters are never touched here.
        """
        post = await self.get_modifiable_post(post_id, identity)

        changes = data.model_dump(exclude_unset=True, exclude={"tags"})
        for field, value in changes.items():
            if value is not None or field == "cover_image":
                setattr(post, field, value)

        if data.tags is not None:
            post.set_tags(data.tags)

        await self.session.flush()
        logger.info("Post updated", post_id=str(post.id), fields=sorted(data.model_fields_set))
        return await self.repo.reload(post)

    async def delete_post(self, post_id: UUID, identity: CurrentIdentity) -> None:
        """Delete a post with its comments, replies, likes and tags."""
        post = await self.get_modifiable_post(post_id, identity)
        await self.repo.delete_cascade(post)
        logger.info("Post deleted", post_id=str(post_id))

    # ═══════════════════════════════════════════════════════════════════════════
    # READ
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_posts(
        self,
        pagination: PaginationParams,
        *,
        category: Optional[PostCategory] = None,
        tag: Optional[str] = None,
        search: Optional[str] = None,
        sort: PostSort = PostSort.RECENT,
    ) -> PostPage:
        # Blank filters are no filters
        tag = tag.strip() if tag else None
        search = search.strip() if search else None

        posts, total = await self.repo.list_published(
            category=category,
            tag=tag,
            search=search,
            sort=sort,
            offset=pagination.offset,
            limit=pagination.limit,
        )
        return PostPage(
            posts=posts,
            total=total,
            page=pagination.page,
            total_pages=pagination.total_pages(total),
        )

    async def latest_posts(self, limit: int) -> list[Post]:
        return await self.repo.latest(limit)

    async def search_posts(self, term: str) -> list[Post]:
        """Quick search over title, body and tags. Blank terms match nothing."""
        term = term.strip()
        if not term:
            return []
        return await self.repo.search(term, settings.SEARCH_RESULTS_LIMIT)

    async def posts_by_author(self, author_id: UUID, *, include_drafts: bool) -> list[Post]:
        return await self.repo.list_by_author(author_id, published_only=not include_drafts)

    async def view_post(
        self,
        ref: Union[str, UUID],
        identity: Optional[CurrentIdentity] = None,
    ) -> PostDetail:
        """
        Fetch a post for display.

        A published post gains exactly one view per fetch. Drafts, visible
        to their author and admins only, are not counted.
        """
        post = await self.get_visible_post(ref, identity)

        if post.status == PostStatus.PUBLISHED:
            await self.repo.increment_views(post.id)
            post = await self.repo.reload(post)

        threads = await self.comment_repo.list_threads(post.id)
        related = await self.repo.related(post, settings.RELATED_POSTS_LIMIT)
        is_liked = identity is not None and await self.repo.is_liked_by(post.id, identity.id)

        return PostDetail(post=post, threads=threads, related=related, is_liked=is_liked)

    async def post_stats(
        self,
        ref: Union[str, UUID],
        identity: Optional[CurrentIdentity] = None,
    ) -> Post:
        return await self.get_visible_post(ref, identity)

    async def category_counts(self) -> list[tuple[PostCategory, int]]:
        """Every category, in declaration order, with its published post count."""
        counts = await self.repo.category_counts()
        return [(category, counts.get(category, 0)) for category in PostCategory]

    # ═══════════════════════════════════════════════════════════════════════════
    # ENGAGEMENT
    # ═══════════════════════════════════════════════════════════════════════════

    async def toggle_like(self, ref: Union[str, UUID], identity: CurrentIdentity) -> tuple[bool, int]:
        """
        Like or unlike a post on behalf of the caller.

        Returns:
            (is_liked, likes_count) after the toggle
        """
        post = await self.get_visible_post(ref, identity)
        is_liked, likes_count = await self.repo.toggle_like(post.id, identity.id)
        logger.info("Post like toggled", post_id=str(post.id), is_liked=is_liked)
        return is_liked, likes_count
