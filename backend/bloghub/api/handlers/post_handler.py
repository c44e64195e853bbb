"""
Post Handler

Endpoints for writing, listing and reading posts.

Endpoints:
==========
    POST   /posts                → Create a post
    GET    /posts                → Published posts, filtered, sorted and paginated
    GET    /posts/latest         → Most recent published posts
    GET    /posts/search?q=      → Quick search over title, body and tags
    GET    /posts/mine           → Caller's own posts, drafts included
    GET    /posts/{ref}          → Post with comments and related posts (counts a view)
    PUT    /posts/{post_id}      → Update (author or admin)
    DELETE /posts/{post_id}      → Delete with comments and likes (author or admin)
    GET    /posts/{ref}/stats    → Views, likes and comments counters
    POST   /posts/{ref}/like     → Toggle the caller's like

{ref} is either the post id or its slug. Fixed paths are declared before
/{ref} so they are not swallowed by it.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from bloghub.api.dependencies.auth import CurrentUser, OptionalUser
from bloghub.api.dependencies.pagination import Pagination
from bloghub.api.dependencies.services import PostServiceDep
from bloghub.shared.models.enums import PostCategory, PostSort
from bloghub.shared.schemas.comment import build_threads
from bloghub.shared.schemas.common import MessageResponse
from bloghub.shared.schemas.post import (
    LikeResponse,
    PostCreate,
    PostDetailResponse,
    PostEnvelope,
    PostListResponse,
    PostResponse,
    PostStatsResponse,
    PostsResponse,
    PostUpdate,
)


router = APIRouter()


def _posts(posts) -> list[PostResponse]:
    return [PostResponse.model_validate(post) for post in posts]


@router.post("", response_model=PostEnvelope, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUser,
    post_service: PostServiceDep,
):
    """
    Create a post authored by the caller.

    The slug is generated from the title and is unique.
    """
    post = await post_service.create_post(current_user, post_data)
    return PostEnvelope(post=PostResponse.model_validate(post))


@router.get("", response_model=PostListResponse)
async def list_posts(
    pagination: Pagination,
    post_service: PostServiceDep,
    category: Optional[PostCategory] = Query(None),
    tag: Optional[str] = Query(None, max_length=50),
    search: Optional[str] = Query(None, max_length=200),
    sort: PostSort = Query(PostSort.RECENT),
):
    """
    List published posts.

    Filters combine: category is exact, tag is case-insensitive, search is
    a case-insensitive substring of title or body.
    """
    page = await post_service.list_posts(
        pagination,
        category=category,
        tag=tag,
        search=search,
        sort=sort,
    )
    return PostListResponse(
        posts=_posts(page.posts),
        total_pages=page.total_pages,
        current_page=page.page,
        total=page.total,
    )


@router.get("/latest", response_model=PostsResponse)
async def latest_posts(
    post_service: PostServiceDep,
    limit: int = Query(6, ge=1, le=50),
):
    posts = await post_service.latest_posts(limit)
    return PostsResponse(posts=_posts(posts))


@router.get("/search", response_model=PostsResponse)
async def search_posts(
    post_service: PostServiceDep,
    q: str = Query("", max_length=200),
):
    posts = await post_service.search_posts(q)
    return PostsResponse(posts=_posts(posts))


@router.get("/mine", response_model=PostsResponse)
async def my_posts(current_user: CurrentUser, post_service: PostServiceDep):
    posts = await post_service.posts_by_author(current_user.id, include_drafts=True)
    return PostsResponse(posts=_posts(posts))


@router.get("/{post_ref}", response_model=PostDetailResponse)
async def get_post(
    post_ref: str,
    current_user: OptionalUser,
    post_service: PostServiceDep,
):
    """
    Read a post by id or slug.

    Raises:
        404: If the post does not exist, or is a draft the caller may not see
    """
    detail = await post_service.view_post(post_ref, current_user)
    return PostDetailResponse(
        post=PostResponse.model_validate(detail.post),
        comments=build_threads(detail.threads),
        related=_posts(detail.related),
        is_liked=detail.is_liked,
    )


@router.put("/{post_id}", response_model=PostEnvelope)
async def update_post(
    post_id: UUID,
    update_data: PostUpdate,
    current_user: CurrentUser,
    post_service: PostServiceDep,
):
    """
    Raises:
        403: If the caller is neither the author nor an admin
        404: If the post does not exist
    """
    post = await post_service.update_post(post_id, current_user, update_data)
    return PostEnvelope(post=PostResponse.model_validate(post))


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: UUID,
    current_user: CurrentUser,
    post_service: PostServiceDep,
):
    await post_service.delete_post(post_id, current_user)
    return MessageResponse(message="Post deleted")


@router.get("/{post_ref}/stats", response_model=PostStatsResponse)
async def post_stats(
    post_ref: str,
    current_user: OptionalUser,
    post_service: PostServiceDep,
):
    """Counters only. Does not count as a view."""
    post = await post_service.post_stats(post_ref, current_user)
    return PostStatsResponse(
        views=post.views,
        likes=post.likes_count,
        comments=post.comments_count,
    )


@router.post("/{post_ref}/like", response_model=LikeResponse)
async def toggle_post_like(
    post_ref: str,
    current_user: CurrentUser,
    post_service: PostServiceDep,
):
    is_liked, likes_count = await post_service.toggle_like(post_ref, current_user)
    return LikeResponse(likes_count=likes_count, is_liked=is_liked)
