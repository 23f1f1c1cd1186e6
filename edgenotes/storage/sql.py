"""Durable key-value store backed by a single SQL table."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import delete, text
from sqlalchemy.exc import SQLAlchemyError

from edgenotes.exceptions import StoreUnavailableError
from edgenotes.models import Base, KeyValueEntry

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


class SqlKeyValueStore:
    """Key-value store on the ``kv_entries`` table.

    Each call opens its own session and commits before returning, so a
    single put or delete is durable once awaited. Nothing spans calls.
    Backend failures are re-raised as ``StoreUnavailableError``.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        self._engine = engine
        self._session_factory = session_factory

    async def create_schema(self) -> None:
        """Create the backing table if it does not exist."""
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Failed to create key-value table: {exc}") from exc

    async def get(self, key: str) -> str | None:
        try:
            async with self._session_factory() as session:
                entry = await session.get(KeyValueEntry, key)
                return entry.value if entry is not None else None
        except SQLAlchemyError as exc:
            logger.error("Key-value read failed for %s: %s", key, exc)
            raise StoreUnavailableError(f"Failed to read key {key!r}") from exc

    async def put(self, key: str, value: str) -> None:
        try:
            async with self._session_factory() as session:
                await session.merge(KeyValueEntry(key=key, value=value))
                await session.commit()
        except SQLAlchemyError as exc:
            logger.error("Key-value write failed for %s: %s", key, exc)
            raise StoreUnavailableError(f"Failed to write key {key!r}") from exc

    async def delete(self, key: str) -> None:
        try:
            async with self._session_factory() as session:
                await session.execute(delete(KeyValueEntry).where(KeyValueEntry.key == key))
                await session.commit()
        except SQLAlchemyError as exc:
            logger.error("Key-value delete failed for %s: %s", key, exc)
            raise StoreUnavailableError(f"Failed to delete key {key!r}") from exc

    async def ping(self) -> bool:
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.warning("Key-value store ping failed", exc_info=True)
            return False
        return True

    async def close(self) -> None:
        await self._engine.dispose()
