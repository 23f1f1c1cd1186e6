"""Key-value storage backends."""

from __future__ import annotations

from typing import TYPE_CHECKING

from edgenotes.database import create_engine, ensure_sqlite_dir
from edgenotes.storage.memory import MemoryKeyValueStore
from edgenotes.storage.protocol import KeyValueStore
from edgenotes.storage.sql import SqlKeyValueStore

if TYPE_CHECKING:
    from edgenotes.config import Settings

__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SqlKeyValueStore",
    "open_store",
]


async def open_store(settings: Settings) -> KeyValueStore:
    """Build the store selected by ``settings.store_backend`` and make it ready."""
    if settings.store_backend == "memory":
        return MemoryKeyValueStore()

    ensure_sqlite_dir(settings.database_url)
    engine, session_factory = create_engine(settings)
    store = SqlKeyValueStore(engine, session_factory)
    await store.create_schema()
    return store
