# src/daily_shloka/db/time.py
"""Time utilities for database models."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def to_millis(moment: datetime) -> int:
    """Return epoch milliseconds for a timezone-aware datetime."""
    return int(moment.timestamp() * 1000)


def now_ms() -> int:
    """Return the current time as epoch milliseconds."""
    return to_millis(utcnow())
