# ==============================================================================
# POSTGRESQL ADAPTER - asyncpg Connection Pool
# ==============================================================================
# Native $n placeholders; inserts return the generated id via RETURNING
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Optional

import asyncpg
from sqlalchemy.dialects import postgresql
from sqlalchemy.engine import Dialect

from quotecalc.core.constants import DatabaseConstants
from quotecalc.core.exceptions import DatabaseConnectionError, QueryError
from quotecalc.core.settings import DatabaseConfig, DatabaseType, settings
from quotecalc.database.adapters.base_adapter import (
    DBAdapter,
    Params,
    Row,
    TransactionContext,
)

logger = logging.getLogger(__name__)

_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError)
_CONNECT_ERRORS = (
    OSError,
    asyncio.TimeoutError,
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
)


def _returning_id(sql: str) -> str:
    return sql.rstrip().rstrip(";") + " RETURNING id"


async def _fetch(conn: Any, sql: str, params: Params) -> List[Row]:
    try:
        records = await conn.fetch(sql, *(params or ()))
    except _DRIVER_ERRORS as e:
        logger.error(f"PostgreSQL query failed: {e}")
        raise QueryError(
            f"PostgreSQL query failed: {e}", sql=sql, driver_message=str(e)
        ) from e
    return [dict(record) for record in records]


async def _insert(conn: Any, sql: str, params: Params) -> int:
    try:
        new_id = await conn.fetchval(_returning_id(sql), *(params or ()))
    except _DRIVER_ERRORS as e:
        logger.error(f"PostgreSQL insert failed: {e}")
        raise QueryError(
            f"PostgreSQL insert failed: {e}", sql=sql, driver_message=str(e)
        ) from e
    return int(new_id)


class PostgreSQLTransaction(TransactionContext):
    """Statements issued on the connection that owns the open transaction."""

    def __init__(self, conn: Any) -> None:
        self._conn = conn

    async def query(self, sql: str, params: Params = None) -> List[Row]:
        return await _fetch(self._conn, sql, params)

    async def insert(self, sql: str, params: Params = None) -> int:
        return await _insert(self._conn, sql, params)


class PostgreSQLAdapter(DBAdapter):
    """
    PostgreSQL adapter over an asyncpg connection pool.

    Statements pass through unchanged since PostgreSQL uses ``$n``
    placeholders natively. Rows come back as plain dicts keyed by
    column name.

    Attributes:
        _pool: asyncpg pool, created on first connect
        _min_size: Minimum pooled connections
        _max_size: Maximum pooled connections
        _command_timeout: Per-statement timeout in seconds

    Example:
        >>> adapter = PostgreSQLAdapter(DatabaseConfig(type="postgres", ...))
        >>> await adapter.connect()
        >>> quote_id = await adapter.insert(
        ...     "INSERT INTO quotes (client_name, email) VALUES ($1, $2)",
        ...     ["Ada", "ada@example.com"],
        ... )
    """

    db_type = DatabaseType.POSTGRES

    def __init__(
        self,
        config: DatabaseConfig,
        min_size: Optional[int] = None,
        max_size: Optional[int] = None,
        command_timeout: Optional[float] = None,
    ) -> None:
        super().__init__(config)
        self._pool: Optional[asyncpg.Pool] = None
        self._min_size = min_size or DatabaseConstants.MIN_POOL_SIZE
        self._max_size = max_size or settings.DB_POOL_SIZE
        self._command_timeout = command_timeout or settings.DB_COMMAND_TIMEOUT
        self._lock = asyncio.Lock()

    @property
    def dialect(self) -> Dialect:
        return postgresql.dialect()

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    async def connect(self) -> None:
        """
        Create the pool and check out one connection to verify it.

        Raises:
            DatabaseConnectionError: If the server is unreachable or
                rejects the credentials
        """
        async with self._lock:
            if self._pool is not None:
                return

            config = self._config
            pool = None
            try:
                pool = await asyncpg.create_pool(
                    host=config.host,
                    port=config.port,
                    database=config.database,
                    user=config.user,
                    password=config.password,
                    # "require" encrypts without verifying the server certificate
                    ssl="require" if config.ssl else False,
                    min_size=self._min_size,
                    max_size=max(self._max_size, self._min_size),
                    command_timeout=self._command_timeout,
                    max_inactive_connection_lifetime=settings.DB_POOL_RECYCLE,
                )
                async with pool.acquire():
                    pass
            except _CONNECT_ERRORS as e:
                logger.error(f"Failed to connect to PostgreSQL: {e}")
                if pool is not None:
                    pool.terminate()
                raise DatabaseConnectionError(
                    f"PostgreSQL connection failed: {e}", driver_message=str(e)
                ) from e

            self._pool = pool
            logger.info(
                f"PostgreSQL adapter connected to "
                f"{config.host}:{config.port}/{config.database}"
            )

    async def disconnect(self) -> None:
        """Close the pool. No-op when already closed."""
        async with self._lock:
            if self._pool is None:
                return
            pool, self._pool = self._pool, None
            await pool.close()
            logger.info("PostgreSQL adapter disconnected")

    async def test_connection(self) -> bool:
        try:
            async with self._connection() as conn:
                result = await conn.fetchval(DatabaseConstants.HEALTH_CHECK_QUERY)
            return result == 1
        except Exception as e:
            logger.warning(f"PostgreSQL connection test failed: {e}")
            return False

    # ==========================================================================
    # CONNECTION MANAGEMENT
    # ==========================================================================

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[Any]:
        if self._pool is None:
            await self.connect()
        pool = self._pool

        try:
            conn = await pool.acquire()
        except _CONNECT_ERRORS as e:
            raise DatabaseConnectionError(
                f"Could not acquire a PostgreSQL connection: {e}",
                driver_message=str(e),
            ) from e

        try:
            yield conn
        finally:
            await pool.release(conn)

    # ==========================================================================
    # STATEMENTS
    # ==========================================================================

    async def query(self, sql: str, params: Params = None) -> List[Row]:
        async with self._connection() as conn:
            return await _fetch(conn, sql, params)

    async def insert(self, sql: str, params: Params = None) -> int:
        async with self._connection() as conn:
            return await _insert(conn, sql, params)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[TransactionContext]:
        async with self._connection() as conn:
            tx = conn.transaction()
            await tx.start()
            try:
                yield PostgreSQLTransaction(conn)
            except BaseException:
                await tx.rollback()
                raise

            try:
                await tx.commit()
            except _DRIVER_ERRORS as e:
                logger.error(f"PostgreSQL commit failed: {e}")
                raise QueryError(
                    f"PostgreSQL commit failed: {e}", driver_message=str(e)
                ) from e
