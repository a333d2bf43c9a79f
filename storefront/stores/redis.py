"""Redis persistence adapter.

Each slot is a plain string key (no TTL): `<prefix><slot>`.
The client is created on `connect()` and validated with a PING.
"""

import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from storefront.stores.base import PersistenceError

logger = logging.getLogger("uvicorn.error")


class RedisStorage:
    """PersistenceAdapter backed by redis.asyncio."""

    def __init__(self, url: str, *, key_prefix: str = "", client: redis.Redis | None = None) -> None:
        self._url = url
        self._key_prefix = key_prefix
        self._redis: redis.Redis | None = client

    async def connect(self) -> None:
        """Initialize Redis connection."""
        if self._redis is None:
            self._redis = redis.from_url(
                self._url,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            )
        # Validate connectivity early (especially for `rediss://` in production).
        await self._redis.ping()
        logger.info("Redis connected")

    async def close(self) -> None:
        """Close Redis connection."""
        if self._redis:
            await self._redis.aclose()
            self._redis = None

    def _get_redis(self) -> redis.Redis:
        if self._redis is None:
            raise PersistenceError("Redis not initialized. Call connect() first.")
        return self._redis

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    async def get(self, key: str) -> str | None:
        try:
            return await self._get_redis().get(self._key(key))
        except RedisError as e:
            raise PersistenceError(f"Redis GET {key} failed: {e}") from e

    async def set(self, key: str, value: str) -> None:
        try:
            await self._get_redis().set(self._key(key), value)
        except RedisError as e:
            raise PersistenceError(f"Redis SET {key} failed: {e}") from e
