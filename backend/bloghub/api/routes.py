"""
Mounts every router on the app.

    /health, /live, /ready  → Health check endpoints
    /auth                   → Register, login, token verification
    /users                  → Profiles, password, roles, account deletion
    /posts                  → Posts, likes, stats
    /posts/{ref}/comments   → Comments on a post
    /comments               → Comment delete and likes
    /categories             → Category counts
"""

from fastapi import FastAPI

from bloghub.api.handlers import (
    auth_handler,
    category_handler,
    comment_handler,
    health_handler,
    post_handler,
    user_handler,
)


def register_routes(app: FastAPI) -> None:
    """Include the health, auth, user, comment, post and category routers."""
    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    app.include_router(
        auth_handler.router,
        prefix="/auth",
        tags=["Authentication"],
    )

    app.include_router(
        user_handler.router,
        prefix="/users",
        tags=["Users"],
    )

    # Spans /posts/{ref}/comments and /comments, so paths are absolute.
    app.include_router(
        comment_handler.router,
        tags=["Comments"],
    )

    app.include_router(
        post_handler.router,
        prefix="/posts",
        tags=["Posts"],
    )

    app.include_router(
        category_handler.router,
        prefix="/categories",
        tags=["Categories"],
    )
