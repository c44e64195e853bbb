"""
Registration, login and bearer tokens.

A token is issued on register and login and re-issued by refresh_token().
Every authenticated request goes back through resolve_identity(), which
re-reads the account so deletions and role changes apply at once.
"""

from datetime import timedelta
from typing import Any, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bloghub.config.settings import settings
from bloghub.shared.core.exceptions import (
    AuthenticationError,
    DuplicateResourceError,
    UserNotFoundError,
)
from bloghub.shared.core.logging import get_logger
from bloghub.shared.models.user import User
from bloghub.shared.repositories.user_repository import UserRepository
from bloghub.shared.schemas.user import CurrentIdentity, UserCreate
from bloghub.shared.utils.security import SecurityUtils


logger = get_logger(__name__)

DUPLICATE_ACCOUNT_MESSAGE = "Email or username already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class AuthService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = UserRepository(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # REGISTRATION & LOGIN
    # ═══════════════════════════════════════════════════════════════════════════

    async def register_user(self, data: UserCreate) -> Tuple[User, str, int]:
        """
        Register a new user.

        Args:
            data: Validated registration payload

        Returns:
            Tuple of (user, access_token, expires_in_seconds)

        Raises:
            DuplicateResourceError: If email or username is already taken.
                No account is created in that case.
        """
        email = data.email.lower()

        if await self.repo.email_exists(email) or await self.repo.username_exists(data.username):
            raise DuplicateResourceError(DUPLICATE_ACCOUNT_MESSAGE)

        password_hash = SecurityUtils.hash_password(data.password)

        # Unique indexes settle races between concurrent registrations
        try:
            async with self.session.begin_nested():
                user = await self.repo.create(
                    name=data.name,
                    username=data.username,
                    email=email,
                    password_hash=password_hash,
                )
        except IntegrityError:
            raise DuplicateResourceError(DUPLICATE_ACCOUNT_MESSAGE)

        logger.info("User registered", user_id=str(user.id))

        access_token, expires_in = self.issue_token(user)
        return user, access_token, expires_in

    async def login_user(self, email: str, password: str) -> Tuple[User, str, int]:
        """
        Authenticate user and generate token.

        Unknown email and wrong password produce the same error.

        Raises:
            AuthenticationError: If credentials are invalid
        """
        user = await self.repo.get_by_email(email)
        if not user or not SecurityUtils.verify_password(password, user.password_hash):
            logger.info("Login failed")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        access_token, expires_in = self.issue_token(user)
        return user, access_token, expires_in

    # ═══════════════════════════════════════════════════════════════════════════
    # TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def issue_token(user: User) -> Tuple[str, int]:
        """
        Sign a token for user.

        Returns:
            (token, expires_in_seconds)
        """
        claims = {
            "id": str(user.id),
            "name": user.name,
            "username": user.username,
            "email": user.email,
            "role": user.role.value,
        }
        token = SecurityUtils.create_access_token(
            claims=claims,
            secret_key=settings.SECRET_KEY,
            expires_delta=timedelta(seconds=settings.access_token_expire_seconds),
            algorithm=settings.JWT_ALGORITHM,
        )
        return token, settings.access_token_expire_seconds

    async def resolve_identity(self, payload: dict[str, Any]) -> CurrentIdentity:
        """
        Turn a verified token payload into the caller's identity.

        The account is re-read so that a deleted account or a changed role
        takes effect immediately, without waiting for the token to expire.

        Raises:
            AuthenticationError: If the payload is malformed or the account is gone
        """
        try:
            user_id = UUID(str(payload["id"]))
        except (KeyError, ValueError):
            raise AuthenticationError("Invalid token payload")

        user = await self.repo.get(user_id)
        if not user:
            raise AuthenticationError("User no longer exists")

        return CurrentIdentity.model_validate(user)

    async def refresh_token(self, identity: CurrentIdentity) -> Tuple[User, str]:
        """
        Re-issue a token for a still-valid identity.

        Raises:
            UserNotFoundError: If the account disappeared in the meantime
        """
        user = await self.repo.get(identity.id)
        if not user:
            raise UserNotFoundError(str(identity.id))

        token, _ = self.issue_token(user)
        return user, token
