"""
User Service

Business logic for profiles, password changes, roles and account deletion.

Account Deletion Cascade:
=========================
All steps run in the caller's transaction, in this order:

    1. Posts authored by the user        → PostRepository.delete_cascade
    2. Remaining comments by the user    → CommentRepository.delete_thread
       (top-level ones take their replies along; each post's
        comments_count drops by the rows removed from it)
    3. The user's likes on posts/comments → remove_like, counter - 1 each
    4. The account itself

Usage:
======
    from bloghub.shared.services.user_service import UserService

    service = UserService(db)
    user = await service.update_profile(identity, data)
"""

from typing import Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bloghub.shared.core.exceptions import (
    DuplicateResourceError,
    UserNotFoundError,
    ValidationError,
)
from bloghub.shared.core.logging import get_logger
from bloghub.shared.models.enums import UserRole
from bloghub.shared.models.post import Post
from bloghub.shared.models.user import User
from bloghub.shared.repositories.comment_repository import CommentRepository
from bloghub.shared.repositories.post_repository import PostRepository
from bloghub.shared.repositories.user_repository import UserRepository
from bloghub.shared.schemas.user import CurrentIdentity, UserUpdate
from bloghub.shared.utils.security import SecurityUtils


logger = get_logger(__name__)


class UserService:
    """Service for user-related business logic."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = UserRepository(session)
        self.post_repo = PostRepository(session)
        self.comment_repo = CommentRepository(session)

    async def _get_user(self, user_id: UUID) -> User:
        user = await self.repo.get(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user

    # ═══════════════════════════════════════════════════════════════════════════
    # PROFILES
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_profile(self, identity: CurrentIdentity) -> User:
        return await self._get_user(identity.id)

    async def get_public_profile(self, username: str) -> Tuple[User, list[Post]]:
        """Profile by username together with the user's published posts."""
        user = await self.repo.get_by_username(username)
        if user is None:
            raise UserNotFoundError(username)

        posts = await self.post_repo.list_by_author(user.id, published_only=True)
        return user, posts

    async def update_profile(self, identity: CurrentIdentity, data: UserUpdate) -> User:
        """
        Update name, email, bio and avatar. Omitted fields stay as they are.

        Raises:
            DuplicateResourceError: New email belongs to another account
        """
        user = await self._get_user(identity.id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)

        if "email" in changes:
            changes["email"] = changes["email"].lower()
            if await self.repo.email_exists(changes["email"], exclude_id=user.id):
                raise DuplicateResourceError("Email already in use")

        try:
            async with self.session.begin_nested():
                user = await self.repo.update(user, **changes)
        except IntegrityError:
            raise DuplicateResourceError("Email already in use")

        logger.info("Profile updated", user_id=str(user.id), fields=sorted(changes))
        return user

    async def change_password(
        self,
        identity: CurrentIdentity,
        current_password: str,
        new_password: str,
    ) -> None:
        """
        Replace the password hash after checking the current password.

        Raises:
            ValidationError: Current password is wrong
        """
        user = await self._get_user(identity.id)
        if not SecurityUtils.verify_password(current_password, user.password_hash):
            raise ValidationError("Current password is incorrect")

        user.password_hash = SecurityUtils.hash_password(new_password)
        await self.session.flush()
        logger.info("Password changed", user_id=str(user.id))

    # ═══════════════════════════════════════════════════════════════════════════
    # ROLES
    # ═══════════════════════════════════════════════════════════════════════════

    async def set_role(self, user_id: UUID, role: UserRole) -> User:
        """Promote or demote an account. Callers must already be admins."""
        user = await self._get_user(user_id)
        user = await self.repo.set_role(user, role)
        logger.info("Role changed", target_user_id=str(user_id), role=role.value)
        return user

    async def promote_by_email(self, email: str) -> User:
        """Bootstrap path used by the promote_admin script."""
        user = await self.repo.get_by_email(email)
        if user is None:
            raise UserNotFoundError(email)
        return await self.set_role(user.id, UserRole.ADMIN)

    # ═══════════════════════════════════════════════════════════════════════════
    # ACCOUNT DELETION
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete_account(self, identity: CurrentIdentity, password: str) -> None:
        """
        Delete the caller's account and everything that hangs off it.

        Raises:
            ValidationError: Password confirmation is wrong
        """
        user = await self._get_user(identity.id)
        if not SecurityUtils.verify_password(password, user.password_hash):
            raise ValidationError("Password is incorrect")

        for post in await self.post_repo.list_by_author(user.id):
            await self.post_repo.delete_cascade(post)

        comments_removed = 0
        for comment_id, post_id in await self.comment_repo.ids_by_author(user.id):
            comments_removed += await self.comment_repo.delete_thread(comment_id, post_id)

        for post_id in await self.post_repo.liked_post_ids(user.id):
            await self.post_repo.remove_like(post_id, user.id)
        for comment_id in await self.comment_repo.liked_comment_ids(user.id):
            await self.comment_repo.remove_like(comment_id, user.id)

        await self.repo.delete(user.id)

        logger.info(
            "Account deleted",
            user_id=str(identity.id),
            comments_removed=comments_removed,
        )
