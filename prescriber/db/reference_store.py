"""
Prescriber - Reference Store Access
===================================

Async connection pool over the FDB reference dataset (PostgreSQL).

Every query checks out its own connection from the pool, so concurrent
callers never share a session handle.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional, Protocol, Sequence

import asyncpg
from asyncpg import Connection, Pool

from prescriber.config import get_settings
from prescriber.core.exceptions import (
    StoreQueryError,
    StoreTimeoutError,
    StoreUnavailableError,
)
from prescriber.core.logging import get_logger

logger = get_logger(__name__)


class ReferenceStore(Protocol):
    """What the interaction engine needs from the store."""

    async def fetch(self, category: str, query: str, *args: Any) -> Sequence[Any]:
        """Run ``query`` with bound ``args`` and return its rows in order."""
        ...


class PostgresReferenceStore:
    """
    Read-only access to the reference dataset through an asyncpg pool.

    Usage:
        store = PostgresReferenceStore(dsn)
        await store.connect()

        rows = await store.fetch("drug_search", "SELECT ...", "%ASPIRIN%")

        await store.close()
    """

    def __init__(
        self,
        connection_string: str,
        min_connections: int = 3,
        max_connections: int = 10,
        query_timeout: Optional[float] = None
    ):
        self.connection_string = connection_string
        self.min_connections = min_connections
        self.max_connections = max_connections
        self.query_timeout = query_timeout
        self._pool: Optional[Pool] = None

    async def connect(self) -> None:
        """Initialize connection pool."""
        if self._pool is not None:
            return

        try:
            self._pool = await asyncpg.create_pool(
                self.connection_string,
                min_size=self.min_connections,
                max_size=self.max_connections,
                command_timeout=self.query_timeout
            )
            logger.info(
                f"Reference store pool created: {self.min_connections}-{self.max_connections} connections"
            )
        except (asyncpg.PostgresError, OSError) as e:
            logger.error(f"Failed to create reference store pool: {e}")
            raise StoreUnavailableError() from e

    async def close(self) -> None:
        """Close connection pool."""
        if self._pool:
            await self._pool.close()
            self._pool = None
            logger.info("Reference store pool closed")

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    @property
    def pool(self) -> Pool:
        """Get connection pool."""
        if not self._pool:
            raise StoreUnavailableError()
        return self._pool

    @asynccontextmanager
    async def acquire(self) -> AsyncGenerator[Connection, None]:
        """Acquire a connection from the pool."""
        async with self.pool.acquire() as conn:
            yield conn

    async def fetch(self, category: str, query: str, *args: Any) -> list:
        """
        Fetch rows for one query on a dedicated connection.

        Args:
            category: Query category, used in errors, logs and metrics.
            query: SQL text with ``$n`` placeholders.
            *args: Bound parameters.

        Returns:
            Rows in the order the query produced them.

        Raises:
            StoreQueryError: The driver rejected or failed the query.
            StoreTimeoutError: The query exceeded ``query_timeout``.
        """
        try:
            async with self.acquire() as conn:
                return await conn.fetch(query, *args, timeout=self.query_timeout)
        except StoreUnavailableError as e:
            raise StoreUnavailableError(category) from e
        except asyncio.TimeoutError as e:
            raise StoreTimeoutError(category, self.query_timeout or 0.0) from e
        except asyncpg.PostgresError as e:
            logger.error(
                f"Reference store query failed: {category}",
                extra={"category": category, "sqlstate": e.sqlstate}
            )
            raise StoreQueryError(category, e.sqlstate) from e
        except (asyncpg.InterfaceError, OSError) as e:
            logger.error(
                f"Reference store connection failed: {category}",
                extra={"category": category}
            )
            raise StoreQueryError(category, None, "connection failure") from e

    async def health_check(self) -> bool:
        """Check reference store connectivity."""
        if not self._pool:
            return False
        try:
            async with self.acquire() as conn:
                return await conn.fetchval("SELECT 1") == 1
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error(f"Health check failed: {e}")
            return False

    def get_stats(self) -> dict:
        """Get connection pool statistics."""
        if not self._pool:
            return {"status": "disconnected"}

        return {
            "status": "connected",
            "size": self._pool.get_size(),
            "free_size": self._pool.get_idle_size(),
            "min_size": self._pool.get_min_size(),
            "max_size": self._pool.get_max_size()
        }


# Singleton instance
_store: Optional[PostgresReferenceStore] = None


async def get_reference_store() -> PostgresReferenceStore:
    """Get the global reference store, connecting on first use."""
    global _store
    if _store is None:
        settings = get_settings()
        store = PostgresReferenceStore(
            settings.DATABASE_URL,
            min_connections=settings.DB_MIN_CONNECTIONS,
            max_connections=settings.DB_MAX_CONNECTIONS,
            query_timeout=settings.QUERY_TIMEOUT
        )
        await store.connect()
        _store = store
    return _store


async def close_reference_store() -> None:
    """Close the global reference store."""
    global _store
    if _store is not None:
        await _store.close()
        _store = None


def current_reference_store() -> Optional[PostgresReferenceStore]:
    """The global reference store if it has been connected, else None."""
    return _store
