"""Process-wide store registry.

Exactly one instance of each store exists per process. `init_stores()`
builds them (explicitly, at startup); every consumer then shares them by
reference through `get_stores()`. Stores hydrate lazily on first access via
the async accessors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from storefront.services.auth_client import AuthBackend, HttpAuthBackend
from storefront.services.notifications import NotificationFeed
from storefront.settings import Settings, get_settings
from storefront.stores.base import PersistenceAdapter
from storefront.stores.cart import CartStore
from storefront.stores.file import FileStorage
from storefront.stores.memory import MemoryStorage
from storefront.stores.postgres import PostgresStorage
from storefront.stores.redis import RedisStorage
from storefront.stores.session import SessionStore
from storefront.stores.wishlist import WishlistStore

logger = logging.getLogger("uvicorn.error")


@dataclass
class StoreRegistry:
    storage: PersistenceAdapter
    auth_backend: AuthBackend
    notifications: NotificationFeed
    cart: CartStore
    wishlist: WishlistStore
    session: SessionStore

    async def cart_store(self) -> CartStore:
        await self.cart.hydrate()
        return self.cart

    async def wishlist_store(self) -> WishlistStore:
        await self.wishlist.hydrate()
        return self.wishlist

    async def session_store(self) -> SessionStore:
        await self.session.hydrate()
        return self.session

    async def flush(self) -> None:
        """Wait until every store's pending writes have landed."""
        for store in (self.cart, self.wishlist, self.session):
            await store.flush()


# Registry (initialized on startup)
_registry: StoreRegistry | None = None


async def build_storage(settings: Settings) -> PersistenceAdapter:
    """Create and connect the adapter selected by Settings.storage_backend."""
    backend = settings.storage_backend
    if backend == "memory":
        return MemoryStorage()
    if backend == "file":
        return FileStorage(settings.data_dir)
    if backend == "redis":
        redis_storage = RedisStorage(settings.redis_url, key_prefix=settings.redis_key_prefix)
        await redis_storage.connect()
        return redis_storage
    if backend == "postgres":
        pg_storage = PostgresStorage(settings.async_database_url, echo=settings.debug)
        await pg_storage.connect()
        return pg_storage
    raise ValueError(f"Unknown storage backend: {backend}")


async def init_stores(
    settings: Settings | None = None,
    *,
    storage: PersistenceAdapter | None = None,
    auth_backend: AuthBackend | None = None,
    notifications: NotificationFeed | None = None,
) -> StoreRegistry:
    """Build the process-wide stores. Returns the existing registry if already built."""
    global _registry
    if _registry is not None:
        return _registry

    settings = settings or get_settings()
    storage = storage or await build_storage(settings)
    auth_backend = auth_backend or HttpAuthBackend(
        settings.auth_api_url,
        timeout=settings.auth_timeout_seconds,
    )
    notifications = notifications or NotificationFeed(maxlen=settings.notification_buffer_size)

    _registry = StoreRegistry(
        storage=storage,
        auth_backend=auth_backend,
        notifications=notifications,
        cart=CartStore(storage, settings.cart_slot, notifier=notifications),
        wishlist=WishlistStore(storage, settings.wishlist_slot, notifier=notifications),
        session=SessionStore(storage, auth_backend, settings.session_slot),
    )
    logger.info(f"Stores initialized (backend={type(storage).__name__})")
    return _registry


def get_stores() -> StoreRegistry:
    """Get the store registry."""
    if _registry is None:
        raise RuntimeError("Stores not initialized. Call init_stores() first.")
    return _registry


async def close_stores() -> None:
    """Flush pending writes, then close the adapter and auth client."""
    global _registry
    if _registry is None:
        return
    registry, _registry = _registry, None
    await registry.flush()
    await registry.storage.close()
    await registry.auth_backend.aclose()
    logger.info("Stores closed")
