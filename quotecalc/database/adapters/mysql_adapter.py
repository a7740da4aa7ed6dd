# ==============================================================================
# MYSQL ADAPTER - SQLAlchemy Pool over mysql-connector
# ==============================================================================
# Translates $n placeholders to ? for prepared cursors
# Blocking driver calls run in worker threads via asyncio.to_thread
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
import re
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence, Tuple

import mysql.connector
from sqlalchemy import create_engine
from sqlalchemy.dialects import mysql as mysql_dialect
from sqlalchemy.engine import URL, Dialect, Engine
from sqlalchemy.exc import SQLAlchemyError

from quotecalc.core.constants import DatabaseConstants
from quotecalc.core.exceptions import DatabaseConnectionError, QueryError
from quotecalc.core.settings import DatabaseConfig, DatabaseType, settings
from quotecalc.database.adapters.base_adapter import (
    DBAdapter,
    Params,
    Row,
    TransactionContext,
)
from quotecalc.database.schema import BOOLEAN_COLUMNS
from quotecalc.utils.helpers import to_bool

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\$(\d+)")


# ==============================================================================
# PLACEHOLDER TRANSLATION
# ==============================================================================

def convert_placeholders(sql: str) -> str:
    """
    Rewrite ``$1..$N`` placeholders as ``?``.

    Each ``$i`` is replaced only when not followed by another digit, so
    ``$1`` never matches inside ``$10``. A ``$`` not followed by a
    number is left alone.

    Example:
        >>> convert_placeholders("SELECT * FROM quotes WHERE id = $1 AND created_by = $2")
        'SELECT * FROM quotes WHERE id = ? AND created_by = ?'
    """
    numbers = [int(n) for n in _PLACEHOLDER.findall(sql)]
    if not numbers:
        return sql

    converted = sql
    for i in range(1, max(numbers) + 1):
        converted = re.sub(rf"\${i}(?!\d)", "?", converted)
    return converted


def bind_parameters(sql: str, params: Params) -> List[Any]:
    """
    Order parameters to match the ``?`` markers produced for ``sql``.

    ``$n`` may appear out of order or more than once; the driver binds
    ``?`` strictly by position, so each occurrence gets ``params[n - 1]``.

    Raises:
        QueryError: If a placeholder refers past the end of ``params``
    """
    values = list(params or ())
    refs = [int(n) for n in _PLACEHOLDER.findall(sql) if int(n) >= 1]
    if not refs:
        return values

    try:
        return [values[n - 1] for n in refs]
    except IndexError:
        raise QueryError(
            f"Statement references ${max(refs)} but only "
            f"{len(values)} parameter(s) were supplied",
            sql=sql,
        ) from None


def translate_query(sql: str, params: Params = None) -> Tuple[str, List[Any]]:
    """
    Translate a ``$n`` statement and its parameters for mysql-connector.

    Booleans are sent as 0/1.

    Returns:
        Tuple of (statement with ``?`` markers, positional parameters)
    """
    values = [
        int(value) if isinstance(value, bool) else value
        for value in bind_parameters(sql, params)
    ]
    return convert_placeholders(sql), values


def decode_row(columns: Sequence[str], values: Sequence[Any]) -> Row:
    """Build a row dict, decoding text and TINYINT boolean columns."""
    row: Dict[str, Any] = {}
    for column, value in zip(columns, values):
        if isinstance(value, (bytes, bytearray)):
            value = value.decode("utf-8")
        if column in BOOLEAN_COLUMNS and value is not None:
            value = to_bool(value)
        row[column] = value
    return row


# ==============================================================================
# STATEMENT EXECUTION (runs in a worker thread)
# ==============================================================================

def _execute(conn: Any, sql: str, params: Params) -> Tuple[List[Row], int]:
    statement, values = translate_query(sql, params)
    cursor = conn.cursor(prepared=True)
    try:
        cursor.execute(statement, values)
        if cursor.description:
            columns = [d[0] for d in cursor.description]
            rows = [decode_row(columns, r) for r in cursor.fetchall()]
        else:
            rows = []
        return rows, cursor.lastrowid or 0
    except (mysql.connector.Error, UnicodeDecodeError) as e:
        logger.error(f"MySQL query failed: {e}")
        raise QueryError(
            f"MySQL query failed: {e}", sql=sql, driver_message=str(e)
        ) from e
    finally:
        cursor.close()


class MySQLTransaction(TransactionContext):
    """Statements issued on the connection that owns the open transaction."""

    def __init__(self, conn: Any) -> None:
        self._conn = conn

    async def query(self, sql: str, params: Params = None) -> List[Row]:
        rows, _ = await asyncio.to_thread(_execute, self._conn, sql, params)
        return rows

    async def insert(self, sql: str, params: Params = None) -> int:
        _, new_id = await asyncio.to_thread(_execute, self._conn, sql, params)
        return int(new_id)


class MySQLAdapter(DBAdapter):
    """
    MySQL adapter over a SQLAlchemy QueuePool of mysql-connector connections.

    Callers write ``$n`` placeholders; the adapter rewrites them to ``?``
    and reorders parameters by occurrence before executing on a prepared
    cursor. The generated id of an insert is the cursor's ``lastrowid``.

    Pool behaviour (size, overflow, recycle, pre-ping) comes from the
    ``DB_POOL_*`` settings.

    Example:
        >>> adapter = MySQLAdapter(DatabaseConfig(type="mysql", port=3306, ...))
        >>> await adapter.connect()
        >>> rows = await adapter.query("SELECT * FROM pages WHERE is_active = $1", [True])
    """

    db_type = DatabaseType.MYSQL

    def __init__(self, config: DatabaseConfig, **engine_options: Any) -> None:
        super().__init__(config)
        self._engine: Optional[Engine] = None
        self._engine_options = engine_options
        self._lock = asyncio.Lock()

    @property
    def dialect(self) -> Dialect:
        return mysql_dialect.dialect()

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    def _create_engine(self) -> Engine:
        config = self._config
        url = URL.create(
            "mysql+mysqlconnector",
            username=config.user,
            password=config.password,
            host=config.host,
            port=config.port,
            database=config.database,
        )

        if config.ssl:
            # Encrypt without verifying the server certificate
            connect_args = {"ssl_disabled": False, "ssl_verify_cert": False}
        else:
            connect_args = {"ssl_disabled": True}

        options = {
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "pool_recycle": settings.DB_POOL_RECYCLE,
            "pool_pre_ping": True,
            "echo": settings.DEBUG,
            "connect_args": connect_args,
        }
        options.update(self._engine_options)
        return create_engine(url, **options)

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    async def connect(self) -> None:
        """
        Create the engine and check out one connection to verify it.

        Raises:
            DatabaseConnectionError: If the server is unreachable or
                rejects the credentials
        """
        async with self._lock:
            if self._engine is not None:
                return

            engine = self._create_engine()
            try:
                conn = await asyncio.to_thread(engine.raw_connection)
                await asyncio.to_thread(conn.close)
            except (SQLAlchemyError, mysql.connector.Error) as e:
                message = str(getattr(e, "orig", None) or e)
                logger.error(f"Failed to connect to MySQL: {message}")
                await asyncio.to_thread(engine.dispose)
                raise DatabaseConnectionError(
                    f"MySQL connection failed: {message}", driver_message=message
                ) from e

            self._engine = engine
            config = self._config
            logger.info(
                f"MySQL adapter connected to "
                f"{config.host}:{config.port}/{config.database}"
            )

    async def disconnect(self) -> None:
        """Dispose of the pool. No-op when already closed."""
        async with self._lock:
            if self._engine is None:
                return
            engine, self._engine = self._engine, None
            await asyncio.to_thread(engine.dispose)
            logger.info("MySQL adapter disconnected")

    async def test_connection(self) -> bool:
        try:
            rows = await self.query(DatabaseConstants.HEALTH_CHECK_QUERY)
            return bool(rows)
        except Exception as e:
            logger.warning(f"MySQL connection test failed: {e}")
            return False

    # ==========================================================================
    # CONNECTION MANAGEMENT
    # ==========================================================================

    async def _checkout(self) -> Any:
        if self._engine is None:
            await self.connect()
        try:
            return await asyncio.to_thread(self._engine.raw_connection)
        except (SQLAlchemyError, mysql.connector.Error) as e:
            message = str(getattr(e, "orig", None) or e)
            raise DatabaseConnectionError(
                f"Could not acquire a MySQL connection: {message}",
                driver_message=message,
            ) from e

    @staticmethod
    def _run_autocommit(conn: Any, sql: str, params: Params) -> Tuple[List[Row], int]:
        try:
            result = _execute(conn, sql, params)
            conn.commit()
            return result
        except BaseException:
            conn.rollback()
            raise
        finally:
            conn.close()

    # ==========================================================================
    # STATEMENTS
    # ==========================================================================

    async def query(self, sql: str, params: Params = None) -> List[Row]:
        conn = await self._checkout()
        rows, _ = await asyncio.to_thread(self._run_autocommit, conn, sql, params)
        return rows

    async def insert(self, sql: str, params: Params = None) -> int:
        conn = await self._checkout()
        _, new_id = await asyncio.to_thread(self._run_autocommit, conn, sql, params)
        return int(new_id)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[TransactionContext]:
        conn = await self._checkout()
        try:
            try:
                yield MySQLTransaction(conn)
            except BaseException:
                await asyncio.to_thread(conn.rollback)
                raise

            try:
                await asyncio.to_thread(conn.commit)
            except mysql.connector.Error as e:
                logger.error(f"MySQL commit failed: {e}")
                raise QueryError(
                    f"MySQL commit failed: {e}", driver_message=str(e)
                ) from e
        finally:
            await asyncio.to_thread(conn.close)
