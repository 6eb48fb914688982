"""Calendar-date helpers anchored to a user's IANA timezone.

Streak and daily-set logic compares ``YYYY-MM-DD`` strings, never elapsed
hours. Unknown or empty timezone identifiers fall back to UTC.
"""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime, timedelta, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from daily_shloka.db.time import utcnow

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"


@lru_cache(maxsize=256)
def resolve_timezone(name: str | None) -> tzinfo:
    """Return the tzinfo for ``name`` or UTC when it cannot be resolved."""
    if not name:
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, falling back to UTC", name)
        return UTC


def _aware(now: datetime | None) -> datetime:
    if now is None:
        return utcnow()
    if now.tzinfo is None:
        return now.replace(tzinfo=UTC)
    return now


def today_local_date(timezone: str | None, now: datetime | None = None) -> str:
    """Return today's calendar date in ``timezone`` as ``YYYY-MM-DD``.

    Args:
        timezone: IANA timezone identifier (e.g. ``Asia/Kolkata``).
        now: Instant to convert; defaults to the current time. Naive values
            are treated as UTC.
    """
    return _aware(now).astimezone(resolve_timezone(timezone)).strftime(DATE_FORMAT)


def yesterday_local_date(timezone: str | None, now: datetime | None = None) -> str:
    """Return the calendar date before today in ``timezone``."""
    return previous_calendar_date(today_local_date(timezone, now))


def previous_calendar_date(date_str: str) -> str:
    """Return the calendar date one day before ``date_str``."""
    return (date.fromisoformat(date_str) - timedelta(days=1)).isoformat()


def next_calendar_date(date_str: str) -> str:
    """Return the calendar date one day after ``date_str``."""
    return (date.fromisoformat(date_str) + timedelta(days=1)).isoformat()
