"""
/auth endpoints: register, login, current user and token refresh.

Thin HTTP layer over AuthService. DuplicateResourceError and
AuthenticationError raised below propagate to the global handlers as-is.
"""

from fastapi import APIRouter, status

from bloghub.api.dependencies.auth import CurrentUser
from bloghub.api.dependencies.services import AuthServiceDep, UserServiceDep
from bloghub.shared.schemas.user import (
    AuthResponse,
    TokenRefreshResponse,
    UserCreate,
    UserEnvelope,
    UserLogin,
    UserResponse,
)


router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(user_data: UserCreate, auth_service: AuthServiceDep):
    """
    Register a new user.

    Returns:
        AuthResponse with user data and bearer token

    Raises:
        400: If email or username is already taken
    """
    user, token, expires_in = await auth_service.register_user(user_data)

    return AuthResponse(
        token=token,
        expires_in=expires_in,
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(credentials: UserLogin, auth_service: AuthServiceDep):
    """
    Authenticate user and return a bearer token.

    Raises:
        401: If credentials are invalid
    """
    user, token, expires_in = await auth_service.login_user(
        email=credentials.email,
        password=credentials.password,
    )

    return AuthResponse(
        token=token,
        expires_in=expires_in,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserEnvelope)
async def me(current_user: CurrentUser, user_service: UserServiceDep):
    """Account behind the presented token."""
    user = await user_service.get_profile(current_user)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.get("/verify-token", response_model=TokenRefreshResponse)
async def verify_token(current_user: CurrentUser, auth_service: AuthServiceDep):
    """
    Check a token and hand back a fresh one with a new expiry.

    Raises:
        401: If the token is invalid or expired
    """
    user, token = await auth_service.refresh_token(current_user)
    return TokenRefreshResponse(token=token, user=UserResponse.model_validate(user))
