"""
Service Dependencies

FastAPI dependencies for service injection.

Services are created per-request with the request's db session. They hold
no state beyond that session, so nothing is shared between requests.

Usage:
======
    from bloghub.api.dependencies.services import PostServiceDep

    @router.get("/posts/latest")
    async def latest(post_service: PostServiceDep):
        return await post_service.latest_posts(6)
"""

from typing import Annotated

from fastapi import Depends

from bloghub.api.dependencies.database import DbSession
from bloghub.shared.services.auth_service import AuthService
from bloghub.shared.services.comment_service import CommentService
from bloghub.shared.services.post_service import PostService
from bloghub.shared.services.user_service import UserService


async def get_auth_service(db: DbSession) -> AuthService:
    """
    Dependency to get AuthService instance.

    Creates a new service instance per request with the request's db session.
    """
    return AuthService(db)


async def get_user_service(db: DbSession) -> UserService:
    return UserService(db)


async def get_post_service(db: DbSession) -> PostService:
    return PostService(db)


async def get_comment_service(db: DbSession) -> CommentService:
    return CommentService(db)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
