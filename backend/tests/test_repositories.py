# tests/test_repositories.py
"""
Savepoint recovery paths, driven against the repositories and services
directly.

SQLite serializes writers, so concurrent HTTP requests never reach these
branches. Each test stages the competing write itself, inside the same
transaction and right before the statement that has to lose.
"""

from collections.abc import AsyncIterator
from datetime import datetime, timezone

import pytest
from sqlalchemy import Delete, func, insert, select

from bloghub.shared.core.exceptions import DuplicateResourceError
from bloghub.shared.db import Database
from bloghub.shared.models.enums import PostCategory
from bloghub.shared.models.post import PostLike
from bloghub.shared.models.user import User
from bloghub.shared.repositories.post_repository import PostRepository
from bloghub.shared.repositories.user_repository import UserRepository
from bloghub.shared.schemas.post import PostCreate
from bloghub.shared.schemas.user import CurrentIdentity, UserCreate
from bloghub.shared.services import post_service
from bloghub.shared.services.auth_service import AuthService
from bloghub.shared.services.post_service import PostService


@pytest.fixture()
async def database(database_url: str) -> AsyncIterator[Database]:
    database = Database(database_url)
    await database.connect()
    await database.create_all()
    try:
        yield database
    finally:
        await database.close()


async def _identity(session, username: str) -> CurrentIdentity:
    user, _, _ = await AuthService(session).register_user(
        UserCreate(
            name=username.title(),
            username=username,
            email=f"{username}@example.com",
            password="secret123",
        )
    )
    return CurrentIdentity.model_validate(user)


async def test_like_insert_losing_race_leaves_counter(database: Database, monkeypatch) -> None:
    async with database.session() as session:
        author = await _identity(session, "alice")
        reader = await _identity(session, "bob")
        post = await PostService(session).create_post(
            author, PostCreate(title="Goa", body="Beaches", category=PostCategory.TRAVEL)
        )
        posts = PostRepository(session)

        execute = session.execute
        raced = []

        async def execute_with_competing_like(statement, *args, **kwargs):
            result = await execute(statement, *args, **kwargs)
            if not raced and isinstance(statement, Delete) and statement.table is PostLike.__table__:
                # Another toggle for the same (post, user) lands between our DELETE and INSERT
                raced.append(True)
                await execute(insert(PostLike).values(post_id=post.id, user_id=reader.id))
                await posts.adjust_counter(post.id, "likes_count", 1)
            return result

        with monkeypatch.context() as patch:
            patch.setattr(session, "execute", execute_with_competing_like)
            is_liked, likes_count = await posts.toggle_like(post.id, reader.id)

        assert raced
        assert is_liked is True
        # Counted once, by the toggle that won
        assert likes_count == 1
        rows = await session.scalar(
            select(func.count()).select_from(PostLike).where(PostLike.post_id == post.id)
        )
        assert rows == 1


async def test_slug_taken_at_insert_gets_suffix(database: Database, monkeypatch) -> None:
    created_at = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    class FrozenDatetime(datetime):
        @classmethod
        def now(cls, tz=None):
            return created_at

    monkeypatch.setattr(post_service, "datetime", FrozenDatetime)

    async with database.session() as session:
        author = await _identity(session, "alice")
        service = PostService(session)
        data = PostCreate(title="Monsoon Diaries", body="Rain.", category=PostCategory.TRAVEL)

        first = await service.create_post(author, data)
        first_slug = first.slug
        assert first_slug == f"monsoon-diaries-{int(created_at.timestamp() * 1000)}"

        # The pre-insert check misses the collision, so the unique index has to catch it
        async def never_taken(self, slug: str) -> bool:
            return False

        monkeypatch.setattr(PostRepository, "slug_exists", never_taken)
        second = await service.create_post(author, data)

        assert second.slug != first_slug
        assert second.slug.startswith(f"{first_slug}-")
        assert len(second.slug) == len(first_slug) + 7


async def test_registration_race_reports_duplicate(database: Database, monkeypatch) -> None:
    async def nobody_has_it(self, *args, **kwargs) -> bool:
        return False

    async with database.session() as session:
        await _identity(session, "alice")

        # Both pre-checks pass, as they would for two simultaneous sign-ups
        monkeypatch.setattr(UserRepository, "email_exists", nobody_has_it)
        monkeypatch.setattr(UserRepository, "username_exists", nobody_has_it)

        with pytest.raises(DuplicateResourceError):
            await _identity(session, "alice")

        accounts = await session.scalar(
            select(func.count()).select_from(User).where(User.username == "alice")
        )
        assert accounts == 1
