# ==============================================================================
# DATABASE FACTORY - Adapter Instantiation
# ==============================================================================
# Maps a DatabaseConfig onto the adapter for its engine
# ==============================================================================

from __future__ import annotations

import logging
from typing import Dict, Type

from quotecalc.core.exceptions import UnsupportedDatabaseTypeError
from quotecalc.core.settings import DatabaseConfig, DatabaseType, Settings
from quotecalc.database.adapters.base_adapter import DBAdapter
from quotecalc.database.adapters.mysql_adapter import MySQLAdapter
from quotecalc.database.adapters.postgresql_adapter import PostgreSQLAdapter

logger = logging.getLogger(__name__)

ADAPTERS: Dict[DatabaseType, Type[DBAdapter]] = {
    DatabaseType.POSTGRES: PostgreSQLAdapter,
    DatabaseType.MYSQL: MySQLAdapter,
}


def create_adapter(config: DatabaseConfig) -> DBAdapter:
    """
    Build the adapter for ``config.type``.

    The adapter is returned unconnected; the pool opens on ``connect()``
    or on first use.

    Args:
        config: Connection parameters

    Returns:
        PostgreSQLAdapter or MySQLAdapter

    Raises:
        UnsupportedDatabaseTypeError: If the engine is not postgres or mysql

    Example:
        >>> adapter = create_adapter(DatabaseConfig(type="mysql", port=3306))
        >>> isinstance(adapter, MySQLAdapter)
        True
    """
    try:
        db_type = DatabaseType(config.type)
    except ValueError:
        logger.error(f"Unsupported database type: {config.type!r}")
        raise UnsupportedDatabaseTypeError(config.type) from None

    adapter = ADAPTERS[db_type](config)
    logger.info(f"Created {adapter.__class__.__name__} for {config.host}:{config.port}")
    return adapter


def create_adapter_from_env() -> DBAdapter:
    """
    Build the adapter described by the ``DB_*`` environment variables.

    The environment is read at call time, not from the cached settings.

    Raises:
        UnsupportedDatabaseTypeError: If ``DB_TYPE`` names another engine
    """
    return create_adapter(Settings().database_config)
