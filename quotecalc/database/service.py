# ==============================================================================
# DATABASE SERVICE - Connection Lifecycle Facade
# ==============================================================================
# Wraps the active adapter, connects lazily and exposes the statement API
# to repositories
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from quotecalc.core.settings import DatabaseConfig
from quotecalc.database.adapters.base_adapter import (
    DBAdapter,
    Params,
    Row,
    TransactionContext,
)
from quotecalc.database.factory import create_adapter, create_adapter_from_env

logger = logging.getLogger(__name__)


class DatabaseService:
    """
    Facade over one DBAdapter with connection state tracking.

    Repositories depend on this class rather than on an adapter. The
    first statement connects automatically; concurrent first calls share
    a single connect.

    A process-wide instance is available through the classmethods for the
    application composition root; tests construct their own.

    Attributes:
        _adapter: Active backend adapter
        _connected: Whether connect() has completed

    Example:
        >>> service = DatabaseService(create_adapter(config))
        >>> rows = await service.query("SELECT * FROM quotes")
        >>> await service.disconnect()
    """

    _instance: Optional["DatabaseService"] = None

    def __init__(self, adapter: DBAdapter) -> None:
        self._adapter = adapter
        self._connected = False
        self._connect_lock = asyncio.Lock()

    # ==========================================================================
    # PROCESS-WIDE INSTANCE
    # ==========================================================================

    @classmethod
    def get_instance(cls) -> "DatabaseService":
        """
        Get the shared service, building it from the environment on first use.

        Raises:
            UnsupportedDatabaseTypeError: If DB_TYPE names another engine
        """
        if cls._instance is None:
            cls._instance = cls(create_adapter_from_env())
        return cls._instance

    @classmethod
    def init_with_config(cls, config: DatabaseConfig) -> "DatabaseService":
        """Replace the shared service with one for ``config``."""
        cls._instance = cls(create_adapter(config))
        logger.info(f"Database service configured for {config.type}")
        return cls._instance

    @classmethod
    def init_with_adapter(cls, adapter: DBAdapter) -> "DatabaseService":
        """Replace the shared service with one wrapping ``adapter``."""
        cls._instance = cls(adapter)
        return cls._instance

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._instance is not None

    @classmethod
    def reset(cls) -> None:
        """
        Forget the shared service without disconnecting it.

        Primarily for testing purposes.
        """
        cls._instance = None

    # ==========================================================================
    # LIFECYCLE
    # ==========================================================================

    @property
    def adapter(self) -> DBAdapter:
        return self._adapter

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        """
        Connect the adapter once.

        Raises:
            DatabaseConnectionError: If the adapter cannot connect
        """
        if self._connected:
            return
        async with self._connect_lock:
            if self._connected:
                return
            await self._adapter.connect()
            self._connected = True
            logger.info(f"Database service connected ({self._adapter!r})")

    async def disconnect(self) -> None:
        """
        Disconnect the adapter; a second call is a no-op.

        Also closes a pool the adapter opened on its own, e.g. through
        ``test_connection()`` before the service ever connected.
        """
        async with self._connect_lock:
            if not self._connected and not self._adapter.is_connected:
                return
            await self._adapter.disconnect()
            self._connected = False
        logger.info("Database service disconnected")

    async def test_connection(self) -> bool:
        """Check connectivity. Never raises."""
        try:
            return await self._adapter.test_connection()
        except Exception as e:
            logger.warning(f"Database connection test failed: {e}")
            return False

    # ==========================================================================
    # STATEMENTS
    # ==========================================================================

    async def query(self, sql: str, params: Params = None) -> List[Row]:
        await self.connect()
        return await self._adapter.query(sql, params)

    async def query_one(self, sql: str, params: Params = None) -> Optional[Row]:
        await self.connect()
        return await self._adapter.query_one(sql, params)

    async def insert(self, sql: str, params: Params = None) -> int:
        await self.connect()
        return await self._adapter.insert(sql, params)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[TransactionContext]:
        """
        Open a transaction on the adapter.

        Example:
            >>> async with service.transaction() as tx:
            ...     await tx.insert(sql, params)
        """
        await self.connect()
        async with self._adapter.transaction() as tx:
            yield tx
