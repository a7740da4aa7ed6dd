# ==============================================================================
# DATABASE ADAPTERS PACKAGE
# ==============================================================================

"""
Database Adapters
=================

One interface, two backends:
- DBAdapter: Abstract interface definition
- PostgreSQLAdapter: PostgreSQL using an asyncpg pool
- MySQLAdapter: MySQL using mysql-connector behind a SQLAlchemy pool
"""

from quotecalc.database.adapters.base_adapter import (
    DBAdapter,
    QueryExecutor,
    TransactionContext,
)
from quotecalc.database.adapters.mysql_adapter import MySQLAdapter
from quotecalc.database.adapters.postgresql_adapter import PostgreSQLAdapter

__all__ = [
    "DBAdapter",
    "QueryExecutor",
    "TransactionContext",
    "MySQLAdapter",
    "PostgreSQLAdapter",
]
