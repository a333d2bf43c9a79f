"""Persistence contract and the persisted-store base class.

Every store:
- owns exactly one named slot on a PersistenceAdapter
- hydrates from that slot once per process (lazy, on first access)
- applies mutations synchronously to memory, then notifies subscribers
  and schedules a fire-and-forget write of the new snapshot

Persistence failures never propagate: they are logged and surface as
`persistence_stale`, while the in-memory state stays authoritative.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Generic, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger("uvicorn.error")

StateT = TypeVar("StateT")
SnapshotT = TypeVar("SnapshotT", bound=BaseModel)

Subscriber = Callable[[StateT], None]


class PersistenceError(RuntimeError):
    """Raised by adapters when the backing store cannot be read or written."""


class PersistenceAdapter(Protocol):
    """Async key-value string store keyed by slot name."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def close(self) -> None: ...


class PersistedStore(Generic[StateT, SnapshotT]):
    """Base class for a store backed by one persistence slot.

    Subclasses provide `snapshot_model`, `_to_snapshot()`, `_apply_snapshot()`
    and `state`. Mutating operations call `_ensure_hydrated()` first and
    `_commit()` last.
    """

    snapshot_model: type[SnapshotT]

    def __init__(self, storage: PersistenceAdapter, slot: str) -> None:
        self._storage = storage
        self._slot = slot
        self._subscribers: list[Subscriber] = []
        self._hydrated = False
        self._hydrate_lock = asyncio.Lock()
        self._pending: set[asyncio.Task[None]] = set()
        self._unflushed: str | None = None
        self.persistence_stale = False

    @property
    def slot(self) -> str:
        return self._slot

    @property
    def hydrated(self) -> bool:
        return self._hydrated

    @property
    def state(self) -> StateT:
        raise NotImplementedError

    # ------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback invoked with the new state after each mutation.

        Returns:
            A function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        state = self.state
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                logger.exception(f"Subscriber failed for slot {self._slot}")

    # ------------------------------------------------------------
    # Hydration
    # ------------------------------------------------------------

    async def hydrate(self) -> None:
        """Load the persisted snapshot once. Safe to call repeatedly."""
        if self._hydrated:
            return
        async with self._hydrate_lock:
            if self._hydrated:
                return
            self._set_loading(True)
            snapshot = await self._read_snapshot()
            if snapshot is not None:
                self._apply_snapshot(snapshot)
            self._set_loading(False)
            self._hydrated = True
        logger.info(f"Store hydrated from slot {self._slot} (found={snapshot is not None})")
        self._notify()

    async def _read_snapshot(self) -> SnapshotT | None:
        try:
            raw = await self._storage.get(self._slot)
        except PersistenceError as e:
            logger.warning(f"Rehydration of {self._slot} failed, using defaults: {e}")
            self.persistence_stale = True
            return None
        except Exception:
            logger.exception(f"Unexpected error rehydrating {self._slot}, using defaults")
            self.persistence_stale = True
            return None
        if not raw:
            return None
        try:
            return self.snapshot_model.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable snapshot in {self._slot}: {e.error_count()} errors")
            return None

    def _ensure_hydrated(self) -> None:
        if not self._hydrated:
            raise RuntimeError(f"Store {self._slot} not hydrated. Await hydrate() first.")

    # ------------------------------------------------------------
    # Commit & flush
    # ------------------------------------------------------------

    def _commit(self) -> None:
        """Notify subscribers and schedule a write of the current snapshot."""
        payload = self._to_snapshot().model_dump_json(by_alias=True)
        self._notify()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop (sync caller): keep the payload for the next flush().
            self._unflushed = payload
            return
        self._unflushed = None
        task = loop.create_task(self._write(payload))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write(self, payload: str) -> None:
        try:
            await self._storage.set(self._slot, payload)
        except PersistenceError as e:
            logger.warning(f"Persisting {self._slot} failed, in-memory state kept: {e}")
            self.persistence_stale = True
            return
        except Exception:
            logger.exception(f"Unexpected error persisting {self._slot}, in-memory state kept")
            self.persistence_stale = True
            return
        self.persistence_stale = False

    async def flush(self) -> None:
        """Wait for outstanding writes and write any payload left by sync callers."""
        if self._unflushed is not None:
            payload, self._unflushed = self._unflushed, None
            await self._write(payload)
        if self._pending:
            await asyncio.gather(*list(self._pending))

    # ------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------

    def _set_loading(self, loading: bool) -> None:
        """Hook for stores exposing an isLoading flag during hydration."""

    def _to_snapshot(self) -> SnapshotT:
        raise NotImplementedError

    def _apply_snapshot(self, snapshot: SnapshotT) -> None:
        raise NotImplementedError
