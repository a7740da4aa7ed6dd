# ==============================================================================
# BASE REPOSITORY - Shared SQL Helpers
# ==============================================================================
# Repository Pattern over DatabaseService; statements use $n placeholders
# ==============================================================================

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from quotecalc.database.adapters.base_adapter import QueryExecutor
from quotecalc.database.service import DatabaseService


def placeholders(count: int) -> str:
    """
    Comma-separated ``$n`` markers.

    Example:
        >>> placeholders(3)
        '$1, $2, $3'
    """
    return ", ".join(f"${i}" for i in range(1, count + 1))


def build_insert(
    table: str,
    data: Mapping[str, Any],
    columns: Iterable[str],
) -> Tuple[str, List[Any]]:
    """
    INSERT statement for the keys of ``data`` that are known columns.

    Returns:
        Tuple of (sql, params)
    """
    names = [c for c in columns if c in data]
    sql = (
        f"INSERT INTO {table} ({', '.join(names)}) "
        f"VALUES ({placeholders(len(names))})"
    )
    return sql, [data[c] for c in names]


class BaseRepository:
    """
    Base class for repositories that issue SQL through DatabaseService.

    Attributes:
        _db: Service wrapping the active adapter
    """

    def __init__(self, db: DatabaseService) -> None:
        self._db = db

    async def _insert_row(
        self,
        table: str,
        data: Mapping[str, Any],
        columns: Sequence[str],
        executor: Optional[QueryExecutor] = None,
    ) -> int:
        sql, params = build_insert(table, data, columns)
        return await (executor or self._db).insert(sql, params)
