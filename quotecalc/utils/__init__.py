"""Shared helpers and logging setup."""

from quotecalc.utils.helpers import dedupe, to_bool, utc_now, utc_now_iso
from quotecalc.utils.logger import setup_logger

__all__ = [
    "dedupe",
    "to_bool",
    "utc_now",
    "utc_now_iso",
    "setup_logger",
]
