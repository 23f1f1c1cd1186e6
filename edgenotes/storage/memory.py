"""In-memory key-value store. State is lost on restart."""

from __future__ import annotations


class MemoryKeyValueStore:
    """Dict-backed store for tests and throwaway instances.

    Safe under asyncio's single-threaded cooperative model: no method awaits
    between reading and mutating the dict.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def put(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        return None

    def snapshot(self) -> dict[str, str]:
        """Return a copy of every stored key (test and debugging aid)."""
        return dict(self._data)
