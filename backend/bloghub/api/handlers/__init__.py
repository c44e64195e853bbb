"""
API Handlers

Route handlers for the BlogHub API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer.
"""

from bloghub.api.handlers import (
    auth_handler,
    category_handler,
    comment_handler,
    health_handler,
    post_handler,
    user_handler,
)

__all__ = [
    "auth_handler",
    "category_handler",
    "comment_handler",
    "health_handler",
    "post_handler",
    "user_handler",
]
