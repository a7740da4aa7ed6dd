# ==============================================================================
# SCHEMA - DDL Generation
# ==============================================================================
# Renders CREATE TABLE statements from the SQLAlchemy models for the
# dialect of the active adapter
# ==============================================================================

from __future__ import annotations

from typing import FrozenSet, List

from sqlalchemy import Boolean
from sqlalchemy.engine import Dialect
from sqlalchemy.schema import CreateTable

from quotecalc.domain_models import SQLBase


def create_table_statements(dialect: Dialect) -> List[str]:
    """
    Build idempotent CREATE TABLE statements in dependency order.

    Foreign keys, including the ON DELETE CASCADE from the quote line
    tables to ``quotes``, are part of each statement.

    Args:
        dialect: Target SQLAlchemy dialect

    Returns:
        One statement per table, parents before children
    """
    return [
        str(CreateTable(table, if_not_exists=True).compile(dialect=dialect)).strip()
        for table in SQLBase.metadata.sorted_tables
    ]


def table_names() -> List[str]:
    """Names of all application tables, parents first."""
    return [table.name for table in SQLBase.metadata.sorted_tables]


def boolean_columns() -> FrozenSet[str]:
    """Column names declared as Boolean in any table."""
    return frozenset(
        column.name
        for table in SQLBase.metadata.sorted_tables
        for column in table.columns
        if isinstance(column.type, Boolean)
    )


BOOLEAN_COLUMNS = boolean_columns()
