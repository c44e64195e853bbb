"""Logging setup and the exception hierarchy every layer raises from."""

from bloghub.shared.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BlogHubException,
    CommentNotFoundError,
    ConflictError,
    DuplicateResourceError,
    NotFoundError,
    PostNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from bloghub.shared.core.logging import clear_log_context, get_logger, log_context, logger

__all__ = [
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    "BlogHubException",
    "AuthenticationError",
    "AuthorizationError",
    "ValidationError",
    "ConflictError",
    "DuplicateResourceError",
    "NotFoundError",
    "UserNotFoundError",
    "PostNotFoundError",
    "CommentNotFoundError",
]
