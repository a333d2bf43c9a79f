"""PostgreSQL persistence adapter with async SQLAlchemy.

Slots live in a single `state_slots` table (key -> serialized snapshot),
written with an upsert so each slot has exactly one row.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from storefront.stores.base import PersistenceError

logger = logging.getLogger("uvicorn.error")


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""

    pass


class PostgresStorage:
    """PersistenceAdapter backed by the `state_slots` table."""

    def __init__(self, database_url: str, *, echo: bool = False) -> None:
        self._database_url = database_url
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    async def connect(self) -> None:
        """Initialize database connection pool."""
        self._engine = create_async_engine(
            self._database_url,
            echo=self._echo,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,
        )
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Postgres storage ready")

    async def close(self) -> None:
        """Close database connection pool."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

    async def create_tables(self) -> None:
        """Create all tables (for development/testing only)."""
        if self._engine is None:
            raise PersistenceError("Database not initialized. Call connect() first.")
        from storefront.models import StateSlot  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    def _get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            raise PersistenceError("Database not initialized. Call connect() first.")
        return self._session_factory

    async def get(self, key: str) -> str | None:
        from storefront.models import StateSlot

        try:
            async with self._get_session_factory()() as session:
                result = await session.execute(select(StateSlot.value).where(StateSlot.key == key))
                return result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError(f"Reading slot {key} failed: {e}") from e

    async def set(self, key: str, value: str) -> None:
        from storefront.models import StateSlot

        stmt = insert(StateSlot).values(key=key, value=value)
        stmt = stmt.on_conflict_do_update(
            index_elements=[StateSlot.key],
            set_={"value": stmt.excluded.value, "updated_at": datetime.now(timezone.utc)},
        )
        try:
            async with self._get_session_factory()() as session:
                await session.execute(stmt)
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError(f"Writing slot {key} failed: {e}") from e
