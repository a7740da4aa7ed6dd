# ==============================================================================
# HELPER UTILITIES
# ==============================================================================
# Common utility functions used across the application
# ==============================================================================

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, List


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 text, the format timestamps are stored in."""
    return utc_now().isoformat()


def to_bool(value: Any) -> bool:
    """
    Decode a boolean column value.

    MySQL reports BOOLEAN columns as TINYINT 0/1; other drivers return
    real booleans.
    """
    if isinstance(value, (bytes, bytearray)):
        value = value.decode()
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "t", "yes"}
    return bool(value)


def dedupe(values: Iterable[Any]) -> List[Any]:
    """Drop repeated values, keeping first-seen order."""
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result
