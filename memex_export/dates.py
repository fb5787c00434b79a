"""
Date helpers for output folders and front matter. All dates are UTC.
"""

from datetime import datetime, timedelta, timezone


def from_timestamp(timestamp: int) -> datetime:
    """Convert a millisecond timestamp to an aware UTC datetime."""
    return datetime.fromtimestamp(timestamp // 1000, tz=timezone.utc) + timedelta(milliseconds=timestamp % 1000)


def format_date_yyyy_mm_dd(timestamp: int) -> str:
    return from_timestamp(timestamp).strftime("%Y-%m-%d")


def format_date_yyyy_mm(timestamp: int) -> str:
    return format_date_yyyy_mm_dd(timestamp)[:7]


def format_iso(timestamp: int) -> str:
    """Format as ISO-8601 with milliseconds, e.g. ``2024-01-31T09:15:00.000Z``."""
    return from_timestamp(timestamp).isoformat(timespec="milliseconds").replace("+00:00", "Z")
