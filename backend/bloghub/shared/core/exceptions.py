"""
Custom Exceptions

Application errors carry their own HTTP status and machine-readable code,
so services raise them directly and the error handler middleware renders
them without a lookup table.

Exception Hierarchy:
====================
    BlogHubException (500 INTERNAL_ERROR)
       │
       ├── AuthenticationError (401)    ← Missing/invalid/expired token, bad credentials
       ├── AuthorizationError (403)     ← Not the author and not an admin
       ├── NotFoundError (404)
       │      ├── UserNotFoundError
       │      ├── PostNotFoundError
       │      └── CommentNotFoundError
       ├── ValidationError (400)        ← Input breaks a domain rule
       └── ConflictError (409)          ← Slug could not be allocated
              └── DuplicateResourceError (400) ← Email/username already taken

Usage:
======
    from bloghub.shared.core.exceptions import PostNotFoundError, ValidationError

    raise PostNotFoundError(post_id)
    raise ValidationError("Replies can only be added to top-level comments",
                          details={"parent_id": str(parent_id)})

Wire format (see to_dict):
    {"success": false, "error": {"code": "NOT_FOUND", "message": "...", "details": {}}}
"""

from typing import Any, Optional


class BlogHubException(Exception):
    """
    Base exception for all BlogHub application errors.

    Subclasses set status_code and error_code as class attributes; the
    message and details are per instance.
    """

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Body of the JSON error response."""
        return {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            },
        }


class AuthenticationError(BlogHubException):
    """401. Raised for a missing, malformed or expired token, wrong
    credentials, or a token whose account no longer exists."""

    status_code = 401
    error_code = "AUTHENTICATION_ERROR"
    default_message = "Authentication failed"


class AuthorizationError(BlogHubException):
    """403. The caller is known but is neither the author nor an admin."""

    status_code = 403
    error_code = "AUTHORIZATION_ERROR"
    default_message = "Access denied"


class NotFoundError(BlogHubException):
    """
    404 with a message built from the resource name.

    Example:
        raise NotFoundError("Post", post_id)
        # "Post with id 'abc-123' not found"
    """

    status_code = 404
    error_code = "NOT_FOUND"

    resource = "Resource"

    def __init__(
        self,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        *,
        resource: Optional[str] = None,
    ) -> None:
        name = resource or self.resource
        if resource_id:
            message = f"{name} with id '{resource_id}' not found"
        else:
            message = f"{name} not found"
        super().__init__(message, details)


class UserNotFoundError(NotFoundError):
    resource = "User"


class PostNotFoundError(NotFoundError):
    resource = "Post"


class CommentNotFoundError(NotFoundError):
    resource = "Comment"


class ValidationError(BlogHubException):
    """
    400. Input that passed schema validation but breaks a domain rule,
    e.g. replying to a reply or giving the wrong current password.
    """

    status_code = 400
    error_code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class ConflictError(BlogHubException):
    status_code = 409
    error_code = "CONFLICT"
    default_message = "Resource conflict"


class DuplicateResourceError(ConflictError):
    """A unique field is taken. Reported as 400 so clients treat it as a form error."""

    status_code = 400
    error_code = "DUPLICATE_RESOURCE"
    default_message = "Resource already exists"
