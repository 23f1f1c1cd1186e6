"""Key-value store protocol definition.

Every piece of persistent state (page list, page content and titles, appearance
settings) lives in one flat string-keyed namespace. The store offers no
multi-key transactions; callers must tolerate partially applied multi-key
updates.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Asynchronous string-to-string map.

    Implementations:
        - MemoryKeyValueStore: process-local dict, lost on restart
        - SqlKeyValueStore: one SQL table through async SQLAlchemy
    """

    async def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    async def put(self, key: str, value: str) -> None:
        """Create or overwrite a key."""
        ...

    async def delete(self, key: str) -> None:
        """Remove a key. Deleting an absent key is not an error."""
        ...

    async def ping(self) -> bool:
        """Return True if the backend is reachable."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...
