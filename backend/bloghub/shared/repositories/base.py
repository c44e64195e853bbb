"""
Base Repository

Generic data access shared by every entity repository, plus the two
primitives that keep denormalized counters honest.

    class PostRepository(BaseRepository[Post]):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(Post, session)

Repositories flush, they never commit. The session scope opened per request
by Database.session() owns the transaction.

A counter is only ever moved by a single UPDATE whose delta is the rowcount
of the relation INSERT/DELETE it accompanies, in the same transaction:

    DELETE FROM post_likes WHERE post_id = :p AND user_id = :u      -- rowcount 1
    UPDATE posts SET likes_count = likes_count - 1 WHERE id = :p
"""

from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bloghub.shared.core.logging import get_logger
from bloghub.shared.models.base import Base


logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def reload(self, instance: ModelType) -> ModelType:
        """
        Re-read a row over its identity-map copy.

        Counters moved by UPDATE statements, server defaults and eager
        relationships all come back fresh.
        """
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == instance.id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def create(self, **kwargs: Any) -> ModelType:
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        return await self.reload(instance)

    async def update(self, instance: ModelType, **kwargs: Any) -> ModelType:
        """
        Partial update: None means "leave as is".

        Counter columns never go through here, see adjust_counter().
        """
        for field, value in kwargs.items():
            if value is not None:
                setattr(instance, field, value)

        await self.session.flush()
        return await self.reload(instance)

    async def delete(self, record_id: UUID) -> bool:
        instance = await self.get(record_id)
        if instance is None:
            return False

        await self.session.delete(instance)
        await self.session.flush()
        return True

    # Counters

    async def adjust_counter(self, record_id: UUID, column: str, delta: int) -> None:
        """
        UPDATE ... SET <column> = <column> + delta, evaluated by the database.

        updated_at is written back to itself: a like or a comment is not an
        edit of the row it lands on.
        """
        if delta == 0:
            return

        values: dict[str, Any] = {column: getattr(self.model, column) + delta}
        if hasattr(self.model, "updated_at"):
            values["updated_at"] = self.model.updated_at

        await self.session.execute(
            update(self.model)
            .where(self.model.id == record_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

    async def read_counter(self, record_id: UUID, column: str) -> int:
        result = await self.session.execute(
            select(getattr(self.model, column)).where(self.model.id == record_id)
        )
        return result.scalar_one()

    async def toggle_link(
        self,
        link_model: Type[Base],
        record_id: UUID,
        counter: str,
        **keys: Any,
    ) -> tuple[bool, int]:
        """
        Flip membership of (keys) in link_model and move `counter` on the target.

        The DELETE's rowcount picks the direction. The INSERT runs in a
        savepoint: if an identical concurrent toggle got there first, the
        primary key rejects ours, the outer transaction survives and the
        counter is left alone.

        Returns:
            (member_after_toggle, counter_after_toggle)
        """
        conditions = [getattr(link_model, name) == value for name, value in keys.items()]

        removed = await self.session.execute(
            delete(link_model).where(*conditions).execution_options(synchronize_session=False)
        )
        if removed.rowcount:
            await self.adjust_counter(record_id, counter, -removed.rowcount)
            return False, await self.read_counter(record_id, counter)

        try:
            async with self.session.begin_nested():
                await self.session.execute(insert(link_model).values(**keys))
        except IntegrityError:
            logger.debug("Concurrent toggle already linked", table=link_model.__tablename__)
        else:
            await self.adjust_counter(record_id, counter, 1)

        return True, await self.read_counter(record_id, counter)
