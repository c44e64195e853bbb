"""
User Handler

Profile, password, role and account endpoints.

Endpoints:
==========
    GET    /users/me            → Own profile
    PUT    /users/me            → Update name, email, bio, avatar
    PUT    /users/me/password   → Change password
    DELETE /users/me            → Delete account (password confirmation)
    GET    /users/{username}    → Public profile with published posts
    PATCH  /users/{user_id}/role → Promote/demote (admin only)
"""

from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel

from bloghub.api.dependencies.auth import AdminUser, CurrentUser
from bloghub.api.dependencies.services import UserServiceDep
from bloghub.shared.schemas.common import MessageResponse
from bloghub.shared.schemas.post import PostResponse
from bloghub.shared.schemas.user import (
    AccountDelete,
    PasswordChange,
    PublicUserResponse,
    RoleUpdate,
    UserEnvelope,
    UserResponse,
    UserUpdate,
)


router = APIRouter()


class PublicProfileResponse(BaseModel):
    success: bool = True
    user: PublicUserResponse
    posts: list[PostResponse]


@router.get("/me", response_model=UserEnvelope)
async def get_my_profile(current_user: CurrentUser, user_service: UserServiceDep):
    user = await user_service.get_profile(current_user)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.put("/me", response_model=UserEnvelope)
async def update_my_profile(
    update_data: UserUpdate,
    current_user: CurrentUser,
    user_service: UserServiceDep,
):
    """
    Update own profile. Only fields present in the body change.

    Raises:
        400: If the new email belongs to another account
    """
    user = await user_service.update_profile(current_user, update_data)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.put("/me/password", response_model=MessageResponse)
async def change_my_password(
    passwords: PasswordChange,
    current_user: CurrentUser,
    user_service: UserServiceDep,
):
    """
    Raises:
        400: If the current password is wrong
    """
    await user_service.change_password(
        current_user,
        current_password=passwords.current_password,
        new_password=passwords.new_password,
    )
    return MessageResponse(message="Password updated")


@router.delete("/me", response_model=MessageResponse)
async def delete_my_account(
    confirmation: AccountDelete,
    current_user: CurrentUser,
    user_service: UserServiceDep,
):
    """
    Delete own account together with own posts, comments and likes.

    Raises:
        400: If the password confirmation is wrong
    """
    await user_service.delete_account(current_user, confirmation.password)
    return MessageResponse(message="Account deleted")


@router.get("/{username}", response_model=PublicProfileResponse)
async def get_public_profile(username: str, user_service: UserServiceDep):
    """Anybody's public profile and published posts, newest first."""
    user, posts = await user_service.get_public_profile(username)
    return PublicProfileResponse(
        user=PublicUserResponse.model_validate(user),
        posts=[PostResponse.model_validate(post) for post in posts],
    )


@router.patch("/{user_id}/role", response_model=UserEnvelope)
async def update_role(
    user_id: UUID,
    role_update: RoleUpdate,
    _admin: AdminUser,
    user_service: UserServiceDep,
):
    """
    Raises:
        403: If the caller is not an admin
        404: If the target account does not exist
    """
    user = await user_service.set_role(user_id, role_update.role)
    return UserEnvelope(user=UserResponse.model_validate(user))
