"""
Authentication Dependencies

FastAPI dependencies for user authentication and authorization.

Dependency Hierarchy:
=====================
    get_bearer_token()        ← Pull the token out of "Authorization: Bearer"
           │
           ▼
    get_current_user_token()  ← Verify signature and expiry
           │
           ▼
    get_current_user()        ← Load the account, bind user_id to the log context
           │
           ├── require_admin()     ← Admin-only routes
           │
    get_optional_user()       ← Same, but anonymous callers get None

Type Aliases:
=============
    CurrentUser   - Authenticated identity (401 without a valid token)
    OptionalUser  - Identity or None (public routes that treat authors differently)
    AdminUser     - Authenticated identity with the admin role (403 otherwise)

Usage:
======
    from bloghub.api.dependencies.auth import CurrentUser

    @router.get("/me")
    async def get_me(current_user: CurrentUser):
        return current_user
"""

from typing import Annotated, Any, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bloghub.api.dependencies.services import AuthServiceDep
from bloghub.config.settings import settings
from bloghub.shared.core.exceptions import AuthenticationError, AuthorizationError
from bloghub.shared.core.logging import log_context
from bloghub.shared.schemas.user import CurrentIdentity
from bloghub.shared.utils.security import SecurityUtils


# auto_error=False: a missing or malformed header must surface as our own
# AuthenticationError (401 envelope), not FastAPI's 403
security = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> Optional[str]:
    """Raw bearer token, or None when no usable Authorization header was sent."""
    if credentials is None or not credentials.credentials:
        return None
    return credentials.credentials


async def get_current_user_token(
    token: Annotated[Optional[str], Depends(get_bearer_token)],
) -> dict[str, Any]:
    """
    Validate the bearer token.

    Returns:
        Decoded token payload

    Raises:
        AuthenticationError: If token is missing, expired or invalid
    """
    if token is None:
        raise AuthenticationError("Authorization header required")

    try:
        return SecurityUtils.decode_access_token(
            token,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    except ValueError as e:
        raise AuthenticationError(str(e)) from e


async def get_current_user(
    payload: Annotated[dict[str, Any], Depends(get_current_user_token)],
    auth_service: AuthServiceDep,
) -> CurrentIdentity:
    """
    Get current authenticated user.

    Raises:
        AuthenticationError: If the account behind the token no longer exists
    """
    identity = await auth_service.resolve_identity(payload)
    log_context(user_id=str(identity.id))
    return identity


async def get_optional_user(
    token: Annotated[Optional[str], Depends(get_bearer_token)],
    auth_service: AuthServiceDep,
) -> Optional[CurrentIdentity]:
    """
    Identity for routes that are public but personalize for signed-in callers.

    No header means anonymous. A header that is present but invalid is still
    rejected, so a client with an expired token finds out.
    """
    if token is None:
        return None

    payload = await get_current_user_token(token)
    return await get_current_user(payload, auth_service)


async def require_admin(
    identity: Annotated[CurrentIdentity, Depends(get_current_user)],
) -> CurrentIdentity:
    """
    Raises:
        AuthorizationError: If the caller is not an admin
    """
    if not identity.is_admin:
        raise AuthorizationError("Admin privileges required")
    return identity


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

CurrentUser = Annotated[CurrentIdentity, Depends(get_current_user)]
OptionalUser = Annotated[Optional[CurrentIdentity], Depends(get_optional_user)]
AdminUser = Annotated[CurrentIdentity, Depends(require_admin)]
