"""In-memory persistence adapter.

Used by tests and by the `memory` backend (state lives for the process only).
"""

from storefront.stores.base import PersistenceError


class MemoryStorage:
    """Dict-backed PersistenceAdapter."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._closed = False

    async def get(self, key: str) -> str | None:
        if self._closed:
            raise PersistenceError("Memory storage is closed")
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        if self._closed:
            raise PersistenceError("Memory storage is closed")
        self._data[key] = value

    async def close(self) -> None:
        self._closed = True

    def dump(self) -> dict[str, str]:
        """Return a copy of every stored slot."""
        return dict(self._data)
