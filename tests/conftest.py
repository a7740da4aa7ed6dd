# ==============================================================================
# CONFTEST - Pytest Fixtures and Configuration
# ==============================================================================
# Shared fixtures; persistence runs on an in-memory aiosqlite database
# ==============================================================================

from __future__ import annotations

import asyncio
import os
import sqlite3
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator, Dict, List

import aiosqlite
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects import sqlite
from sqlalchemy.engine import Dialect

# Set test environment before importing the app
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from quotecalc.core.config_store import ConfigStore  # noqa: E402
from quotecalc.core.exceptions import DatabaseConnectionError, QueryError  # noqa: E402
from quotecalc.core.settings import DatabaseConfig  # noqa: E402
from quotecalc.database.adapters.base_adapter import (  # noqa: E402
    DBAdapter,
    Params,
    Row,
    TransactionContext,
)
from quotecalc.database.adapters.mysql_adapter import (  # noqa: E402
    decode_row,
    translate_query,
)
from quotecalc.database.schema import create_table_statements  # noqa: E402
from quotecalc.database.service import DatabaseService  # noqa: E402
from quotecalc.services.installation_service import InstallationService  # noqa: E402


# ==============================================================================
# SQLITE TEST ADAPTER
# ==============================================================================

async def _execute(conn: aiosqlite.Connection, sql: str, params: Params):
    statement, values = translate_query(sql, params)
    try:
        cursor = await conn.execute(statement, values)
    except sqlite3.Error as e:
        raise QueryError(f"SQLite query failed: {e}", sql=sql, driver_message=str(e)) from e
    try:
        rows = await cursor.fetchall()
        columns = [d[0] for d in cursor.description or ()]
        return [decode_row(columns, r) for r in rows], cursor.lastrowid or 0
    finally:
        await cursor.close()


class SQLiteTransaction(TransactionContext):
    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def query(self, sql: str, params: Params = None) -> List[Row]:
        rows, _ = await _execute(self._conn, sql, params)
        return rows

    async def insert(self, sql: str, params: Params = None) -> int:
        _, new_id = await _execute(self._conn, sql, params)
        return new_id


class SQLiteTestAdapter(DBAdapter):
    """
    In-memory stand-in for the production adapters.

    SQLite binds ``?`` markers like mysql-connector's prepared cursors,
    so statements go through the same placeholder translation.
    """

    def __init__(self, path: str = ":memory:") -> None:
        super().__init__(DatabaseConfig(type="sqlite", database=path))
        self._path = path
        self._conn = None
        self._lock = asyncio.Lock()
        self.connect_calls = 0

    @property
    def dialect(self) -> Dialect:
        return sqlite.dialect()

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    async def connect(self) -> None:
        if self._conn is not None:
            return
        self.connect_calls += 1
        self._conn = await aiosqlite.connect(self._path)
        await self._conn.execute("PRAGMA foreign_keys = ON")

    async def disconnect(self) -> None:
        if self._conn is not None:
            conn, self._conn = self._conn, None
            await conn.close()

    async def test_connection(self) -> bool:
        try:
            # Production adapters open their pool on demand
            await self.connect()
            return bool(await self.query("SELECT 1"))
        except Exception:
            return False

    def _require_conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise DatabaseConnectionError("SQLite test adapter is not connected")
        return self._conn

    async def query(self, sql: str, params: Params = None) -> List[Row]:
        async with self._lock:
            conn = self._require_conn()
            rows, _ = await _execute(conn, sql, params)
            await conn.commit()
            return rows

    async def insert(self, sql: str, params: Params = None) -> int:
        async with self._lock:
            conn = self._require_conn()
            _, new_id = await _execute(conn, sql, params)
            await conn.commit()
            return new_id

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[TransactionContext]:
        async with self._lock:
            conn = self._require_conn()
            try:
                yield SQLiteTransaction(conn)
            except BaseException:
                await conn.rollback()
                raise
            await conn.commit()


# ==============================================================================
# DATABASE FIXTURES
# ==============================================================================

@pytest_asyncio.fixture
async def adapter() -> AsyncGenerator[SQLiteTestAdapter, None]:
    """Connected in-memory adapter with the schema created."""
    test_adapter = SQLiteTestAdapter()
    await test_adapter.connect()
    for statement in create_table_statements(test_adapter.dialect):
        await test_adapter.query(statement)

    yield test_adapter

    await test_adapter.disconnect()


@pytest_asyncio.fixture
async def installed_adapter(tmp_path) -> AsyncGenerator[SQLiteTestAdapter, None]:
    """
    Unconnected file-backed adapter standing in for a freshly chosen database.

    Data survives a disconnect, so whatever the installer wrote can be read
    back after it closes its own connection.
    """
    test_adapter = SQLiteTestAdapter(str(tmp_path / "installed.db"))

    yield test_adapter

    await test_adapter.disconnect()


@pytest_asyncio.fixture
async def db_service(adapter: SQLiteTestAdapter) -> AsyncGenerator[DatabaseService, None]:
    """DatabaseService over the test adapter."""
    service = DatabaseService(adapter)
    yield service
    await service.disconnect()


@pytest_asyncio.fixture
async def catalog_ids(db_service: DatabaseService) -> Dict[str, int]:
    """
    Small catalog used across tests.

    Project type base 2000; fixed feature 500; hourly feature 100 x 5h;
    page 50 per page.
    """
    from quotecalc.database.repositories.catalog_repository import CatalogRepository

    catalog = CatalogRepository(db_service)
    project_type_id = await catalog.create_project_type(
        "New Website", 2000.0, "Brand new website development"
    )
    other_project_type_id = await catalog.create_project_type("Redesign", 750.0)
    design_id = await catalog.create_feature({
        "name": "Custom Design",
        "category": "Design",
        "pricing_type": "fixed",
        "flat_price": 500.0,
        "supports_quantity": False,
        "for_all_project_types": True,
    })
    development_id = await catalog.create_feature({
        "name": "Custom Development",
        "category": "Development",
        "pricing_type": "hourly",
        "hourly_rate": 100.0,
        "estimated_hours": 5.0,
        "supports_quantity": True,
        "for_all_project_types": False,
    })
    await catalog.link_feature_to_project_type(development_id, project_type_id)
    page_id = await catalog.create_page({
        "name": "Standard Page",
        "price_per_page": 50.0,
        "default_quantity": 1,
        "is_active": True,
        "supports_quantity": True,
    })
    return {
        "project_type": project_type_id,
        "other_project_type": other_project_type_id,
        "design": design_id,
        "development": development_id,
        "page": page_id,
    }


# ==============================================================================
# HTTP CLIENT FIXTURES
# ==============================================================================

@pytest.fixture
def installer(tmp_path) -> InstallationService:
    """Installer writing its config file under the test's tmp dir."""
    return InstallationService(ConfigStore(tmp_path / "config.json"))


@pytest_asyncio.fixture
async def client(
    db_service: DatabaseService,
    installer: InstallationService,
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the app, backed by the test database."""
    from quotecalc.api.dependencies import (
        get_database_service,
        get_installation_service,
    )
    from quotecalc.main import app

    app.dependency_overrides[get_database_service] = lambda: db_service
    app.dependency_overrides[get_installation_service] = lambda: installer

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        timeout=30.0,
    ) as async_client:
        yield async_client

    app.dependency_overrides.clear()
    DatabaseService.reset()


# ==============================================================================
# HELPER FIXTURES
# ==============================================================================

@pytest.fixture
def client_info() -> dict:
    """Client details for a saved quote."""
    return {
        "client_name": "Ada Lovelace",
        "email": "ada@example.com",
        "business_name": "Analytical Engines Ltd",
        "phone": "555-0100",
        "notes": "Wants a launch before spring",
    }
