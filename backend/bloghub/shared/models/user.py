"""
Registered accounts.

    users
    ─────
    id             550e8400-e29b-41d4-a716-446655440000
    name           "Priya Sharma"
    username       "priya_s"            unique, [A-Za-z0-9_]
    email          "priya@example.com"  unique, lowercased before it gets here
    password_hash  "$2b$12$..."
    bio            ""
    avatar         "default-avatar.jpg"
    role           "user" | "admin"
"""

import uuid

from sqlalchemy import Enum as SQLEnum, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from bloghub.shared.models.base import Base, TimestampMixin
from bloghub.shared.models.enums import UserRole, enum_values


DEFAULT_AVATAR = "default-avatar.jpg"


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(100))
    username: Mapped[str] = mapped_column(String(30), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)

    # Only the bcrypt hash is ever persisted
    password_hash: Mapped[str] = mapped_column(Text)
    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, native_enum=False, values_callable=enum_values, length=16),
        default=UserRole.USER,
    )

    bio: Mapped[str] = mapped_column(Text, default="")
    avatar: Mapped[str] = mapped_column(String(500), default=DEFAULT_AVATAR)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<User {self.username} ({self.role.value})>"
