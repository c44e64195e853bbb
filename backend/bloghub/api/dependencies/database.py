"""
Database Dependency

FastAPI dependency for database sessions.

The Database object is created by the application lifespan and stored on
app.state.database. get_db borrows a transactional session from it for the
duration of the endpoint call: committed on success, rolled back on error.

The dependency is function-scoped, so the commit runs before the response
is sent. A failing commit reaches the exception handlers as a 500 instead
of arriving after the client already holds a 200.

Usage:
======
    from bloghub.api.dependencies.database import DbSession

    @router.get("/posts/{post_id}")
    async def get_post(post_id: UUID, db: DbSession):
        repo = PostRepository(db)
        return await repo.get(post_id)
"""

from typing import Annotated, AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from bloghub.shared.db import Database


def get_database(request: Request) -> Database:
    """The application's Database, as created in the lifespan."""
    return request.app.state.database


async def get_db(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency for database sessions.

    Yields:
        AsyncSession: Database session for the current request
    """
    async with database.session() as session:
        yield session


# Type aliases for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db, scope="function")]
DatabaseDep = Annotated[Database, Depends(get_database)]
