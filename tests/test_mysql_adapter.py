# ==============================================================================
# MYSQL ADAPTER TESTS
# ==============================================================================
# Placeholder translation and driver interaction through mocked pools
# ==============================================================================

from unittest.mock import MagicMock

import mysql.connector
import pytest
from sqlalchemy.exc import OperationalError

from quotecalc.core.exceptions import DatabaseConnectionError, QueryError
from quotecalc.core.settings import DatabaseConfig, settings
from quotecalc.database.adapters import mysql_adapter
from quotecalc.database.adapters.mysql_adapter import (
    MySQLAdapter,
    bind_parameters,
    convert_placeholders,
    decode_row,
    translate_query,
)


@pytest.fixture
def mysql_config() -> DatabaseConfig:
    return DatabaseConfig(
        type="mysql",
        host="db.internal",
        port=3306,
        database="calculator",
        user="app",
        password="secret",
    )


def make_cursor(description=None, rows=(), lastrowid=0):
    cursor = MagicMock()
    cursor.description = description
    cursor.fetchall.return_value = list(rows)
    cursor.lastrowid = lastrowid
    return cursor


def attach_connection(adapter: MySQLAdapter, cursor) -> MagicMock:
    conn = MagicMock()
    conn.cursor.return_value = cursor
    engine = MagicMock()
    engine.raw_connection.return_value = conn
    adapter._engine = engine
    return conn


class TestPlaceholderTranslation:
    """$n to ? rewriting."""

    def test_two_placeholders(self):
        sql = "SELECT * FROM quotes WHERE id = $1 AND created_by = $2"
        assert convert_placeholders(sql) == (
            "SELECT * FROM quotes WHERE id = ? AND created_by = ?"
        )

    def test_no_placeholders_unchanged(self):
        sql = "SELECT * FROM project_types ORDER BY id"
        assert convert_placeholders(sql) == sql

    def test_two_digit_placeholders(self):
        columns = ", ".join(f"c{i}" for i in range(1, 13))
        values = ", ".join(f"${i}" for i in range(1, 13))
        converted = convert_placeholders(f"INSERT INTO t ({columns}) VALUES ({values})")

        assert "$" not in converted
        assert converted.endswith("VALUES (" + ", ".join(["?"] * 12) + ")")

    def test_dollar_without_digits_left_alone(self):
        sql = "SELECT '$' || name FROM pages WHERE id = $1"
        assert convert_placeholders(sql) == "SELECT '$' || name FROM pages WHERE id = ?"

    def test_parameters_follow_occurrence_order(self):
        sql = "UPDATE quotes SET notes = $2 WHERE id = $1 OR created_by = $2"
        assert bind_parameters(sql, [7, "ada"]) == ["ada", 7, "ada"]

    def test_ascending_parameters_unchanged(self):
        sql = "SELECT * FROM quotes WHERE id = $1 AND created_by = $2"
        assert bind_parameters(sql, [7, "ada"]) == [7, "ada"]

    def test_missing_parameter(self):
        with pytest.raises(QueryError):
            bind_parameters("SELECT * FROM quotes WHERE id = $2", [1])

    def test_booleans_sent_as_integers(self):
        sql, params = translate_query(
            "SELECT * FROM pages WHERE is_active = $1 AND id = $2", [True, 4]
        )
        assert sql == "SELECT * FROM pages WHERE is_active = ? AND id = ?"
        assert params == [1, 4]
        assert type(params[0]) is int


class TestRowDecoding:
    """TINYINT(1) and byte values coming back from the driver."""

    def test_boolean_columns_decoded(self):
        row = decode_row(
            ["id", "is_active", "supports_quantity", "default_quantity"],
            [3, 1, 0, 1],
        )
        assert row == {
            "id": 3,
            "is_active": True,
            "supports_quantity": False,
            "default_quantity": 1,
        }
        assert type(row["default_quantity"]) is int

    def test_bytes_decoded_to_text(self):
        row = decode_row(["name"], [bytearray(b"Home Page")])
        assert row["name"] == "Home Page"

    def test_null_boolean_stays_null(self):
        assert decode_row(["is_active"], [None]) == {"is_active": None}


class TestMySQLAdapter:
    """Statement execution with a mocked pool."""

    def test_dialect(self, mysql_config):
        assert MySQLAdapter(mysql_config).dialect.name == "mysql"

    def test_engine_uses_pool_settings(self, mysql_config):
        engine = MySQLAdapter(mysql_config)._create_engine()
        try:
            assert engine.url.drivername == "mysql+mysqlconnector"
            assert engine.url.host == "db.internal"
            assert engine.url.port == 3306
            assert engine.pool.size() == settings.DB_POOL_SIZE
        finally:
            engine.dispose()

    @pytest.mark.asyncio
    async def test_query_translates_and_returns_dicts(self, mysql_config):
        adapter = MySQLAdapter(mysql_config)
        cursor = make_cursor(
            description=[("id",), ("client_name",)],
            rows=[(7, "Ada")],
        )
        conn = attach_connection(adapter, cursor)

        rows = await adapter.query(
            "SELECT id, client_name FROM quotes WHERE id = $1 AND created_by = $2",
            [7, "sales"],
        )

        assert rows == [{"id": 7, "client_name": "Ada"}]
        conn.cursor.assert_called_once_with(prepared=True)
        cursor.execute.assert_called_once_with(
            "SELECT id, client_name FROM quotes WHERE id = ? AND created_by = ?",
            [7, "sales"],
        )
        conn.commit.assert_called_once()
        conn.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_statement_without_result_set(self, mysql_config):
        adapter = MySQLAdapter(mysql_config)
        attach_connection(adapter, make_cursor(description=None))

        assert await adapter.query("DELETE FROM quotes WHERE id = $1", [1]) == []

    @pytest.mark.asyncio
    async def test_query_one_without_rows(self, mysql_config):
        adapter = MySQLAdapter(mysql_config)
        attach_connection(adapter, make_cursor(description=[("id",)], rows=[]))

        assert await adapter.query_one("SELECT id FROM quotes WHERE id = $1", [99]) is None

    @pytest.mark.asyncio
    async def test_insert_returns_lastrowid(self, mysql_config):
        adapter = MySQLAdapter(mysql_config)
        cursor = make_cursor(lastrowid=42)
        attach_connection(adapter, cursor)

        new_id = await adapter.insert(
            "INSERT INTO project_types (name, base_price) VALUES ($1, $2)",
            ["New Website", 1000.0],
        )

        assert new_id == 42
        statement = cursor.execute.call_args.args[0]
        assert "RETURNING" not in statement

    @pytest.mark.asyncio
    async def test_driver_error_becomes_query_error(self, mysql_config):
        adapter = MySQLAdapter(mysql_config)
        cursor = make_cursor()
        cursor.execute.side_effect = mysql.connector.Error("Unknown column 'nope'")
        conn = attach_connection(adapter, cursor)

        with pytest.raises(QueryError) as exc_info:
            await adapter.query("SELECT nope FROM quotes")

        assert "nope" in exc_info.value.driver_message
        assert exc_info.value.sql == "SELECT nope FROM quotes"
        assert isinstance(exc_info.value.__cause__, mysql.connector.Error)
        conn.rollback.assert_called_once()
        conn.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_undecodable_value_becomes_query_error(self, mysql_config):
        adapter = MySQLAdapter(mysql_config)
        cursor = make_cursor(description=[("name",)], rows=[(b"\xff\xfe",)])
        conn = attach_connection(adapter, cursor)

        with pytest.raises(QueryError) as exc_info:
            await adapter.query("SELECT name FROM pages")

        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
        conn.rollback.assert_called_once()
        conn.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_transaction_commits_on_success(self, mysql_config):
        adapter = MySQLAdapter(mysql_config)
        conn = attach_connection(adapter, make_cursor(lastrowid=5))

        async with adapter.transaction() as tx:
            quote_id = await tx.insert("INSERT INTO quotes (client_name) VALUES ($1)", ["Ada"])
            await tx.query("INSERT INTO quote_pages (quote_id) VALUES ($1)", [quote_id])

        assert quote_id == 5
        conn.commit.assert_called_once()
        conn.rollback.assert_not_called()
        conn.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_transaction_rolls_back_on_error(self, mysql_config):
        adapter = MySQLAdapter(mysql_config)
        conn = attach_connection(adapter, make_cursor())

        with pytest.raises(RuntimeError):
            async with adapter.transaction() as tx:
                await tx.query("DELETE FROM quotes WHERE id = $1", [1])
                raise RuntimeError("abort")

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
        conn.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_connect_failure_carries_driver_message(self, mysql_config, monkeypatch):
        engine = MagicMock()
        engine.raw_connection.side_effect = OperationalError(
            "SELECT 1", {}, Exception("Access denied for user 'app'")
        )
        monkeypatch.setattr(mysql_adapter, "create_engine", lambda *a, **kw: engine)
        adapter = MySQLAdapter(mysql_config)

        with pytest.raises(DatabaseConnectionError) as exc_info:
            await adapter.connect()

        assert exc_info.value.driver_message == "Access denied for user 'app'"
        assert not adapter.is_connected
        engine.dispose.assert_called_once()

    @pytest.mark.asyncio
    async def test_connect_is_idempotent(self, mysql_config, monkeypatch):
        engines = []

        def fake_create_engine(*args, **kwargs):
            engine = MagicMock()
            engines.append(engine)
            return engine

        monkeypatch.setattr(mysql_adapter, "create_engine", fake_create_engine)
        adapter = MySQLAdapter(mysql_config)

        await adapter.connect()
        await adapter.connect()

        assert len(engines) == 1
        assert adapter.is_connected

        await adapter.disconnect()
        await adapter.disconnect()
        engines[0].dispose.assert_called_once()
        assert not adapter.is_connected

    @pytest.mark.asyncio
    async def test_test_connection_never_raises(self, mysql_config, monkeypatch):
        engine = MagicMock()
        engine.raw_connection.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
        monkeypatch.setattr(mysql_adapter, "create_engine", lambda *a, **kw: engine)

        assert await MySQLAdapter(mysql_config).test_connection() is False
