"""File-backed persistence adapter.

One JSON file per slot under a data directory:

  data/
    cart-storage.json
    wishlist-storage.json
    auth-storage.json

Writes go to a temp file that replaces the target, so a crash never leaves a
half-written slot. Blocking file I/O runs in a worker thread.
"""

import asyncio
import re
import threading
from pathlib import Path

from storefront.stores.base import PersistenceError

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileStorage:
    """PersistenceAdapter storing each slot in `<data_dir>/<key>.json`."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise PersistenceError(f"Invalid slot name: {key!r}")
        return self.data_dir / f"{key}.json"

    def _read(self, path: Path) -> str | None:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Cannot read {path.name}: {e}") from e

    def _write(self, path: Path, value: str) -> None:
        with self._lock:
            tmp = path.with_suffix(".tmp")
            try:
                tmp.write_text(value, encoding="utf-8")
                tmp.replace(path)
            except OSError as e:
                raise PersistenceError(f"Cannot write {path.name}: {e}") from e

    async def get(self, key: str) -> str | None:
        return await asyncio.to_thread(self._read, self._path(key))

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, self._path(key), value)

    async def close(self) -> None:
        return None
