# ==============================================================================
# DATABASE PACKAGE INITIALIZATION
# ==============================================================================
# One statement API over PostgreSQL and MySQL
# ==============================================================================

"""
Database Module
===============

Key Components:
- Adapters: PostgreSQL (asyncpg) and MySQL (mysql-connector) implementations
- Factory: Adapter selection from a DatabaseConfig
- Service: Connection lifecycle and lazy connect
- Repositories: Quote and catalog data access
- Schema: CREATE TABLE statements for the active dialect
"""

from quotecalc.database.adapters.base_adapter import DBAdapter, TransactionContext
from quotecalc.database.factory import create_adapter, create_adapter_from_env
from quotecalc.database.service import DatabaseService

__all__ = [
    "DBAdapter",
    "TransactionContext",
    "DatabaseService",
    "create_adapter",
    "create_adapter_from_env",
]
