"""Shared repository plumbing for the Record Store tables."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from grow.db.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Async repository over one table.

    Reads always refresh rows already held by the session, so a retry after a
    lost conditional write sees what the other writer stored.
    """

    def __init__(self, session: AsyncSession, model_class: type[T]):
        self.session = session
        self.model_class = model_class

    async def get_by_key(self, **key: Any) -> T | None:
        """Point read by (possibly composite) key columns."""
        stmt = (
            select(self.model_class)
            .where(*(getattr(self.model_class, column) == value for column, value in key.items()))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, **values: Any) -> T:
        row = self.model_class(**values)
        self.session.add(row)
        await self.session.flush()
        return row

    async def update(self, row: T, **values: Any) -> T:
        for column, value in values.items():
            setattr(row, column, value)
        await self.session.flush()
        return row

    async def merge(self, row: T) -> T:
        """Insert ``row`` or overwrite the stored row with the same primary key."""
        merged = await self.session.merge(row)
        await self.session.flush()
        return merged
