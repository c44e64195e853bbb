"""
Account lookups.

Emails are stored lowercased and every lookup lowercases its input, so
"Priya@Example.com" and "priya@example.com" are the same account.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from bloghub.shared.models.enums import UserRole
from bloghub.shared.models.user import User
from bloghub.shared.repositories.base import BaseRepository


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(BaseRepository[User]):

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == normalize_email(email)))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def email_exists(self, email: str, exclude_id: Optional[UUID] = None) -> bool:
        """True if another account uses email. exclude_id skips the caller's own row."""
        clause = exists().where(User.email == normalize_email(email))
        if exclude_id is not None:
            clause = clause.where(User.id != exclude_id)
        return bool(await self.session.scalar(select(clause)))

    async def username_exists(self, username: str) -> bool:
        return bool(await self.session.scalar(select(exists().where(User.username == username))))

    async def set_role(self, user: User, role: UserRole) -> User:
        user.role = role
        await self.session.flush()
        return await self.reload(user)
