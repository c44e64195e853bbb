"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession, DatabaseDep
- Authentication: get_current_user(), CurrentUser, OptionalUser, AdminUser
- Services: get_*_service() functions and *ServiceDep aliases
- Pagination: get_pagination(), Pagination

Type Aliases:
=============
Type aliases provide cleaner route signatures:

    # Instead of this:
    async def handler(
        post_service: PostService = Depends(get_post_service),
        user: CurrentIdentity = Depends(get_current_user),
    ):

    # Write this:
    async def handler(post_service: PostServiceDep, user: CurrentUser):
"""

from bloghub.api.dependencies.database import (
    get_db,
    get_database,
    DbSession,
    DatabaseDep,
)
from bloghub.api.dependencies.auth import (
    get_current_user,
    get_current_user_token,
    get_optional_user,
    require_admin,
    CurrentUser,
    OptionalUser,
    AdminUser,
)
from bloghub.api.dependencies.services import (
    AuthServiceDep,
    UserServiceDep,
    PostServiceDep,
    CommentServiceDep,
)
from bloghub.api.dependencies.pagination import get_pagination, Pagination

__all__ = [
    # Database
    "get_db",
    "get_database",
    "DbSession",
    "DatabaseDep",
    # Authentication
    "get_current_user",
    "get_current_user_token",
    "get_optional_user",
    "require_admin",
    "CurrentUser",
    "OptionalUser",
    "AdminUser",
    # Services
    "AuthServiceDep",
    "UserServiceDep",
    "PostServiceDep",
    "CommentServiceDep",
    # Pagination
    "get_pagination",
    "Pagination",
]
