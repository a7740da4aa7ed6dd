# ==============================================================================
# BASE DATABASE ADAPTER - Abstract Interface
# ==============================================================================
# Defines the contract for all database adapters
# Ensures consistent API across PostgreSQL and MySQL
# ==============================================================================

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import (
    Any,
    AsyncContextManager,
    ClassVar,
    Dict,
    List,
    Optional,
    Sequence,
)

from sqlalchemy.engine import Dialect

from quotecalc.core.settings import DatabaseConfig, DatabaseType

Row = Dict[str, Any]
Params = Optional[Sequence[Any]]


class QueryExecutor(ABC):
    """
    Statement execution surface shared by adapters and open transactions.

    Statements use ``$1, $2, ...`` placeholders with positional
    parameters; each backend translates as needed.
    """

    @abstractmethod
    async def query(self, sql: str, params: Params = None) -> List[Row]:
        """
        Execute a parameterized statement and return all rows.

        Statements that produce no result set return an empty list.

        Raises:
            QueryError: If the driver rejects the statement
        """
        pass

    async def query_one(self, sql: str, params: Params = None) -> Optional[Row]:
        """
        Execute a statement and return its first row.

        Returns:
            First row, or None when the statement returned no rows
        """
        rows = await self.query(sql, params)
        return rows[0] if rows else None

    @abstractmethod
    async def insert(self, sql: str, params: Params = None) -> int:
        """
        Execute an INSERT and return the generated ``id``.

        Raises:
            QueryError: If the driver rejects the statement
        """
        pass


class TransactionContext(QueryExecutor):
    """
    Executor bound to a single connection inside an open transaction.

    Obtained from ``DBAdapter.transaction()``; commit and rollback are
    handled by the context manager, not by callers.
    """


class DBAdapter(QueryExecutor):
    """
    Abstract Base Class for Database Adapters.

    Provides a unified interface over a pooled connection to one
    relational backend. Concrete adapters own their pool.

    Design Pattern:
        Implements the Adapter Pattern; the set of implementations is
        closed (one per DatabaseType member).

    Thread Safety:
        All methods are async and safe for concurrent use. Every call
        acquires a pooled connection and releases it before returning.

    Example:
        >>> adapter = PostgreSQLAdapter(config)
        >>> await adapter.connect()
        >>> row = await adapter.query_one("SELECT * FROM quotes WHERE id = $1", [7])
        >>> await adapter.disconnect()
    """

    db_type: ClassVar[DatabaseType]

    def __init__(self, config: DatabaseConfig) -> None:
        self._config = config

    @property
    def config(self) -> DatabaseConfig:
        return self._config

    @property
    @abstractmethod
    def dialect(self) -> Dialect:
        """SQLAlchemy dialect used to render DDL for this backend."""
        pass

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """True while the adapter holds an open pool."""
        pass

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    @abstractmethod
    async def connect(self) -> None:
        """
        Open the pool and verify a connection can be acquired.

        Idempotent.

        Raises:
            DatabaseConnectionError: If no connection can be established
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """
        Close the pool and release all connections.

        Idempotent.
        """
        pass

    @abstractmethod
    async def test_connection(self) -> bool:
        """
        Check connectivity with a trivial query.

        Never raises.

        Returns:
            True if a connection could run ``SELECT 1``
        """
        pass

    # ==========================================================================
    # TRANSACTIONS
    # ==========================================================================

    @abstractmethod
    def transaction(self) -> AsyncContextManager[TransactionContext]:
        """
        Provide a transactional scope on one connection.

        Commits on successful exit, rolls back and re-raises on any
        exception.

        Example:
            >>> async with adapter.transaction() as tx:
            ...     quote_id = await tx.insert("INSERT INTO quotes ...", params)
            ...     await tx.query("INSERT INTO quote_pages ...", params)
        """
        pass

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"host='{self._config.host}', "
            f"database='{self._config.database}')"
        )
