"""
User Schemas

Request/response models for authentication and profile endpoints.
"""

from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, StringConstraints

from bloghub.shared.models.enums import UserRole
from bloghub.shared.schemas.common import BaseSchema


DisplayName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
Username = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=3,
        max_length=30,
        pattern=r"^[A-Za-z0-9_]+$",
    ),
]


# ═══════════════════════════════════════════════════════════════════════════════
# REQUESTS
# ═══════════════════════════════════════════════════════════════════════════════


class UserCreate(BaseModel):
    """Schema for user registration."""

    name: DisplayName
    username: Username = Field(description="Letters, digits and underscore")
    email: EmailStr
    password: str = Field(
        min_length=6,
        max_length=72,
        description="Password (minimum 6 characters)",
    )


class UserLogin(BaseModel):
    """Schema for user login."""

    email: EmailStr
    password: str = Field(min_length=1)


class UserUpdate(BaseModel):
    """Profile update. Omitted fields are left unchanged."""

    name: Optional[DisplayName] = None
    email: Optional[EmailStr] = None
    bio: Optional[Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]] = None
    avatar: Optional[Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]] = None


class PasswordChange(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=72)


class AccountDelete(BaseModel):
    """Account deletion must be confirmed with the current password."""

    password: str = Field(min_length=1)


class RoleUpdate(BaseModel):
    role: UserRole


# ═══════════════════════════════════════════════════════════════════════════════
# RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class AuthorSummary(BaseSchema):
    """Author as embedded in posts and comments."""

    id: UUID
    name: str
    username: str
    avatar: str


class UserResponse(BaseSchema):
    """Account as seen by its owner. Never carries the password hash."""

    id: UUID
    name: str
    username: str
    email: str
    bio: str
    avatar: str
    role: UserRole
    created_at: datetime


class PublicUserResponse(BaseSchema):
    """Profile as seen by anybody: no email."""

    id: UUID
    name: str
    username: str
    bio: str
    avatar: str
    created_at: datetime


class UserEnvelope(BaseModel):
    success: bool = True
    user: UserResponse


class AuthResponse(BaseModel):
    """Schema for authentication response."""

    success: bool = True
    token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user: UserResponse


class TokenRefreshResponse(BaseModel):
    success: bool = True
    message: str = "Token is valid"
    token: str
    user: UserResponse


# ═══════════════════════════════════════════════════════════════════════════════
# IDENTITY
# ═══════════════════════════════════════════════════════════════════════════════


class CurrentIdentity(BaseSchema):
    """
    The authenticated caller, as loaded from the database for this request.

    Services receive this instead of a raw token payload, so the role used
    for authorization is always the stored one.
    """

    id: UUID
    name: str
    username: str
    email: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def can_modify(self, author_id: UUID) -> bool:
        """Edit/delete rule for posts and comments: the author or an admin."""
        return self.id == author_id or self.is_admin
