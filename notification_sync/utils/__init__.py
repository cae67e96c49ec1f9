"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_timezone,
    get_app_timezone,
    local_day,
    parse_timestamp,
)

__all__ = [
    "ensure_app_timezone",
    "get_app_timezone",
    "local_day",
    "parse_timestamp",
]
