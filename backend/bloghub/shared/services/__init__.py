"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories
and domain rules.

Service Pattern:
================
    Handler → Service → Repository → Database

Services should:
- Contain business logic, authorization and validation
- Coordinate multiple repositories if needed
- Work inside the request transaction (via session)
- NOT handle HTTP concerns (that's for handlers)

Available Services:
===================
- AuthService: Registration, login and tokens
- UserService: Profiles, passwords, roles, account deletion
- PostService: Post authoring, listing, views and likes
- CommentService: Threaded comments and comment likes

Usage:
======
    from bloghub.shared.services import AuthService, PostService

    service = PostService(db)
    page = await service.list_posts(PaginationParams(page=1, limit=10))
"""

from bloghub.shared.services.auth_service import AuthService
from bloghub.shared.services.user_service import UserService
from bloghub.shared.services.post_service import PostService
from bloghub.shared.services.comment_service import CommentService

__all__ = [
    "AuthService",
    "UserService",
    "PostService",
    "CommentService",
]
