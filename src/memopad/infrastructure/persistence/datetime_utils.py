"""Datetime utilities for persistence layer."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def normalize_to_utc(dt: datetime) -> datetime:
    """Ensure datetime is UTC and timezone-aware.

    SQLite stores datetimes without timezone info. This function:
    - Adds UTC timezone to naive datetimes (treating them as UTC).
    - Converts timezone-aware datetimes to UTC.

    Args:
        dt: datetime to process

    Returns:
        timezone-aware datetime in UTC
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_datetime(value: datetime | str) -> datetime:
    """Parse an ISO-8601 string or datetime into a UTC datetime.

    Args:
        value: ISO-8601 string or datetime

    Returns:
        timezone-aware datetime in UTC
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return normalize_to_utc(value)
