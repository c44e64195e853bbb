"""
The Database object: one async engine and its session factory.

Built once per process, never at import time. Per request:

    get_db() → database.session() → handler/services/repositories
             ← commit on return, rollback on exception, connection back to pool

PostgreSQL (asyncpg) in production, SQLite (aiosqlite) for development and
tests. On SQLite every transaction opens with BEGIN IMMEDIATE, so concurrent
writers wait for the file lock instead of failing mid-transaction when a
read lock cannot be upgraded, and foreign keys are switched on for every
new connection.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from bloghub.config.settings import Settings
from bloghub.shared.core.logging import get_logger
from bloghub.shared.models.base import Base


logger = get_logger(__name__)


class Database:
    """
    Engine and session factory with an explicit lifecycle.

    Example:
        database = Database.from_settings(settings)
        await database.connect()

        async with database.session() as session:
            repo = UserRepository(session)
            ...

        await database.close()
    """

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        pool_size: int = 10,
        max_overflow: int = 20,
    ) -> None:
        self.url = url
        self.is_sqlite = make_url(url).get_backend_name() == "sqlite"

        engine_kwargs: dict[str, Any] = {
            "echo": echo,
            "pool_pre_ping": True,
        }
        if self.is_sqlite:
            # Seconds a writer waits on the database lock before giving up
            engine_kwargs["connect_args"] = {"timeout": 30}
        else:
            engine_kwargs["pool_size"] = pool_size
            engine_kwargs["max_overflow"] = max_overflow

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)

        if self.is_sqlite:
            _configure_sqlite(self.engine)

        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            # Objects remain usable after commit
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.DATABASE_URL,
            echo=settings.DEBUG,
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # LIFECYCLE
    # ═══════════════════════════════════════════════════════════════════════════

    async def connect(self) -> None:
        """Round-trip a SELECT 1; raising here aborts application startup."""
        logger.info("Connecting to database", backend=self.engine.dialect.name)
        try:
            async with self.engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error("Failed to connect to database", error=str(e))
            raise

        logger.info("Database reachable")

    async def create_all(self) -> None:
        """Create all tables that do not exist yet (development and tests)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def close(self) -> None:
        """Dispose of the engine, closing all pooled connections."""
        await self.engine.dispose()
        logger.info("Database engine disposed")

    async def ping(self) -> bool:
        """Return True when a trivial query succeeds."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning("Database ping failed", error=str(e))
            return False

    # ═══════════════════════════════════════════════════════════════════════════
    # SESSIONS
    # ═══════════════════════════════════════════════════════════════════════════

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Transactional session scope.

        Commits when the block exits normally, rolls back and re-raises when
        it exits with an exception.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise


def _configure_sqlite(engine: AsyncEngine) -> None:
    """Take over transaction control from the sqlite3 driver."""

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        # Stop the driver from emitting its own (deferred) BEGIN
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")

