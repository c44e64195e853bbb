"""
Post Repository

Database operations for posts, their tags and their likes.

Common Operations:
==================
- get_by_slug()          → Find post by slug
- list_published()       → Filter / search / sort / paginate published posts
- latest()               → Newest published posts
- search()               → Title, body or tag substring search
- related()              → Same-category published posts
- list_by_author()       → A user's posts (drafts optional)
- increment_views()      → Atomic views + 1
- toggle_like()          → Like/unlike with counter kept in step
- delete_cascade()       → Post with comments, replies and all likes
- category_counts()      → Published posts per category

Search Semantics:
=================
Search terms are matched as literal, case-insensitive substrings. LIKE
wildcards in user input ("%", "_") are escaped, so "50%" finds "50%" and
nothing else.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from bloghub.shared.models.comment import Comment, CommentLike
from bloghub.shared.models.enums import PostCategory, PostSort, PostStatus
from bloghub.shared.models.post import Post, PostLike, PostTag
from bloghub.shared.repositories.base import BaseRepository


LIKE_ESCAPE = "\\"


def like_pattern(term: str) -> str:
    """Wrap a literal term in % wildcards, escaping LIKE metacharacters."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


# Secondary keys make pagination deterministic when the primary key ties
SORT_ORDERS = {
    PostSort.RECENT: (Post.created_at.desc(), Post.id.desc()),
    PostSort.POPULAR: (Post.views.desc(), Post.created_at.desc(), Post.id.desc()),
    PostSort.MOST_LIKED: (Post.likes_count.desc(), Post.created_at.desc(), Post.id.desc()),
    PostSort.MOST_COMMENTED: (
        Post.comments_count.desc(),
        Post.created_at.desc(),
        Post.id.desc(),
    ),
}


class PostRepository(BaseRepository[Post]):
    """
    Repository for Post database operations.

    Author and tags are eager-loaded with every post (joined / selectin), so
    returned objects are safe to serialize outside of a query.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Post, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_by_slug(self, slug: str) -> Optional[Post]:
        result = await self.session.execute(select(Post).where(Post.slug == slug))
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str) -> bool:
        result = await self.session.execute(
            select(func.count()).select_from(Post).where(Post.slug == slug)
        )
        return (result.scalar() or 0) > 0

    # ═══════════════════════════════════════════════════════════════════════════
    # LISTING & SEARCH
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_published(
        self,
        *,
        category: Optional[PostCategory] = None,
        tag: Optional[str] = None,
        search: Optional[str] = None,
        sort: PostSort = PostSort.RECENT,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[Post], int]:
        """
        List published posts with filters, ordering and pagination.

        Args:
            category: Only posts in this category
            tag: Only posts carrying this tag (case-insensitive, exact name)
            search: Case-insensitive substring of title or body
            sort: Ordering, newest first breaks ties
            offset: Number of posts to skip
            limit: Page size

        Returns:
            (posts on the requested page, total number of matching posts)

        SQL Generated (category + search, sorted by views):
            SELECT * FROM posts
            WHERE status = 'published' AND category = 'Travel'
              AND (title ILIKE '%goa%' OR body ILIKE '%goa%')
            ORDER BY views DESC, created_at DESC
            OFFSET 0 LIMIT 10
        """
        conditions: list[ColumnElement[bool]] = [Post.status == PostStatus.PUBLISHED]

        if category is not None:
            conditions.append(Post.category == category)

        if tag:
            conditions.append(
                Post.tag_rows.any(func.lower(PostTag.name) == tag.strip().lower())
            )

        if search:
            pattern = like_pattern(search)
            conditions.append(
                or_(
                    Post.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Post.body.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        total_result = await self.session.execute(
            select(func.count()).select_from(Post).where(*conditions)
        )
        total = total_result.scalar() or 0

        result = await self.session.execute(
            select(Post)
            .where(*conditions)
            .order_by(*SORT_ORDERS[sort])
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def latest(self, limit: int) -> list[Post]:
        result = await self.session.execute(
            select(Post)
            .where(Post.status == PostStatus.PUBLISHED)
            .order_by(*SORT_ORDERS[PostSort.RECENT])
            .limit(limit)
        )
        return list(result.scalars().all())

    async def search(self, term: str, limit: int) -> list[Post]:
        """
        Published posts whose title, body or any tag contains term.

        Newest first, at most limit results.
        """
        pattern = like_pattern(term)
        result = await self.session.execute(
            select(Post)
            .where(
                Post.status == PostStatus.PUBLISHED,
                or_(
                    Post.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Post.body.ilike(pattern, escape=LIKE_ESCAPE),
                    Post.tag_rows.any(PostTag.name.ilike(pattern, escape=LIKE_ESCAPE)),
                ),
            )
            .order_by(*SORT_ORDERS[PostSort.RECENT])
            .limit(limit)
        )
        return list(result.scalars().all())

    async def related(self, post: Post, limit: int) -> list[Post]:
        result = await self.session.execute(
            select(Post)
            .where(
                Post.status == PostStatus.PUBLISHED,
                Post.category == post.category,
                Post.id != post.id,
            )
            .order_by(*SORT_ORDERS[PostSort.RECENT])
            .limit(limit)
        )
        return list(result.scalars().all())

    async def list_by_author(self, author_id: UUID, *, published_only: bool = False) -> list[Post]:
        query = select(Post).where(Post.author_id == author_id)
        if published_only:
            query = query.where(Post.status == PostStatus.PUBLISHED)
        result = await self.session.execute(query.order_by(*SORT_ORDERS[PostSort.RECENT]))
        return list(result.scalars().all())

    async def category_counts(self) -> dict[PostCategory, int]:
        """
        Number of published posts per category.

        SQL Generated:
            SELECT category, COUNT(*) FROM posts
            WHERE status = 'published' GROUP BY category
        """
        result = await self.session.execute(
            select(Post.category, func.count())
            .where(Post.status == PostStatus.PUBLISHED)
            .group_by(Post.category)
        )
        return {category: total for category, total in result.all()}

    # ═══════════════════════════════════════════════════════════════════════════
    # ENGAGEMENT
    # ═══════════════════════════════════════════════════════════════════════════

    async def increment_views(self, post_id: UUID) -> None:
        await self.adjust_counter(post_id, "views", 1)

    async def toggle_like(self, post_id: UUID, user_id: UUID) -> tuple[bool, int]:
        """
        Toggle user_id's like on a post.

        Returns:
            (is_liked, likes_count) after the toggle
        """
        return await self.toggle_link(
            PostLike, post_id, "likes_count", post_id=post_id, user_id=user_id
        )

    async def is_liked_by(self, post_id: UUID, user_id: UUID) -> bool:
        result = await self.session.execute(
            select(func.count())
            .select_from(PostLike)
            .where(PostLike.post_id == post_id, PostLike.user_id == user_id)
        )
        return (result.scalar() or 0) > 0

    async def liked_post_ids(self, user_id: UUID) -> list[UUID]:
        result = await self.session.execute(
            select(PostLike.post_id).where(PostLike.user_id == user_id)
        )
        return list(result.scalars().all())

    async def remove_like(self, post_id: UUID, user_id: UUID) -> int:
        """Remove one like row if present; returns the number of rows removed."""
        removed = await self.session.execute(
            delete(PostLike)
            .where(PostLike.post_id == post_id, PostLike.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        await self.adjust_counter(post_id, "likes_count", -removed.rowcount)
        return removed.rowcount

    # ═══════════════════════════════════════════════════════════════════════════
    # DELETE
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete_cascade(self, post: Post) -> None:
        """
        Delete a post with everything attached to it.

        Order: likes on its comments, its comments (replies included), likes
        on the post, then the post itself (its tags follow via the ORM
        cascade). Everything runs in the caller's transaction.
        """
        comment_ids = select(Comment.id).where(Comment.post_id == post.id)

        await self.session.execute(
            delete(CommentLike)
            .where(CommentLike.comment_id.in_(comment_ids))
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(
            delete(Comment)
            .where(Comment.post_id == post.id)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(
            delete(PostLike)
            .where(PostLike.post_id == post.id)
            .execution_options(synchronize_session=False)
        )

        await self.session.delete(post)
        await self.session.flush()
