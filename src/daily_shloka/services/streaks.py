"""Streak accounting for daily reading.

A streak counts consecutive local calendar days with at least one read. All
comparisons are on ``YYYY-MM-DD`` strings: two reads on either side of a local
midnight are two days no matter how close together they happen.
"""
from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from daily_shloka.models import DailySet, ReadEvent, Streak, User
from daily_shloka.models.daily_set import READ_KIND_SEQUENCE
from daily_shloka.services import clock
from daily_shloka.services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreakUpdate:
    """Outcome of recording a read against the streak."""

    current_streak: int
    longest_streak: int
    is_new_record: bool


@dataclass(frozen=True)
class StreakCheck:
    """Outcome of the lazy expiry check run when the app comes to foreground."""

    current_streak: int
    longest_streak: int
    needs_reset: bool


@dataclass(frozen=True)
class StreakSummary:
    current_streak: int
    longest_streak: int
    last_completed_local_date: str
    last_read_local_date: str


@dataclass(frozen=True)
class StreakStats:
    current_streak: int
    longest_streak: int
    perfect_days: int
    read_days: int


@dataclass(frozen=True)
class CalendarDay:
    local_date: str
    verses_read: int
    completed: bool


def _get_row(db: Session, user_id: int) -> Streak | None:
    return db.get(Streak, user_id)


def _last_read(row: Streak) -> str:
    # Rows written before read tracking only carry the completion date.
    return row.last_read_local_date or row.last_completed_local_date or ""


def update_on_read(db: Session, user_id: int, local_date: str) -> StreakUpdate:
    """Record a read on ``local_date`` and return the resulting counters.

    ``local_date`` is the daily set's date, not a freshly computed "today",
    so a read that straddles midnight is credited to the day it belongs to.

    Transitions:
        - no row: create it with a streak of 1
        - last read on or after ``local_date``: no change, so a late read for
          an earlier day never restarts the streak
        - last read the day before: streak + 1
        - anything else: streak restarts at 1

    The caller owns the transaction; this only flushes.
    """
    row = _get_row(db, user_id)
    if row is None:
        row = Streak(
            user_id=user_id,
            current_streak=1,
            longest_streak=1,
            last_completed_local_date="",
            last_read_local_date=local_date,
        )
        db.add(row)
        db.flush()
        logger.info("Started first streak for user %s on %s", user_id, local_date)
        return StreakUpdate(current_streak=1, longest_streak=1, is_new_record=True)

    last_read = _last_read(row)
    if not row.last_read_local_date and last_read:
        row.last_read_local_date = last_read

    if last_read and local_date <= last_read:
        logger.debug("Streak for user %s already counts %s", user_id, local_date)
        return StreakUpdate(
            current_streak=row.current_streak,
            longest_streak=row.longest_streak,
            is_new_record=False,
        )

    if last_read == clock.previous_calendar_date(local_date):
        new_current = row.current_streak + 1
    else:
        new_current = 1

    is_new_record = new_current > row.longest_streak
    if is_new_record:
        row.longest_streak = new_current
        logger.info("User %s reached a new longest streak of %d", user_id, new_current)
    row.current_streak = new_current
    row.last_read_local_date = local_date
    db.flush()

    return StreakUpdate(
        current_streak=row.current_streak,
        longest_streak=row.longest_streak,
        is_new_record=is_new_record,
    )


def record_completion(db: Session, user_id: int, local_date: str) -> None:
    """Stamp the last fully completed day without touching the counters."""
    row = _get_row(db, user_id)
    if row is None:
        row = Streak(user_id=user_id, current_streak=0, longest_streak=0)
        db.add(row)
    row.last_completed_local_date = local_date
    db.flush()


def check_and_reset(db: Session, user_id: int, now: datetime | None = None) -> StreakCheck:
    """Zero a streak that lapsed while the app was closed.

    The streak survives while the last read is today or yesterday in the
    user's current timezone. Otherwise ``current_streak`` drops to 0; the
    longest streak is never touched. Calling this repeatedly is stable:
    ``needs_reset`` is only True on the call that actually reset.
    """
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    row = _get_row(db, user_id)
    if row is None:
        return StreakCheck(current_streak=0, longest_streak=0, needs_reset=False)

    today = clock.today_local_date(user.timezone, now)
    yesterday = clock.previous_calendar_date(today)
    last_read = _last_read(row)

    if last_read in (today, yesterday) or row.current_streak == 0:
        return StreakCheck(
            current_streak=row.current_streak,
            longest_streak=row.longest_streak,
            needs_reset=False,
        )

    logger.info(
        "Resetting streak of %d for user %s (last read %s, today %s)",
        row.current_streak,
        user_id,
        last_read or "never",
        today,
    )
    row.current_streak = 0
    db.commit()
    return StreakCheck(current_streak=0, longest_streak=row.longest_streak, needs_reset=True)


def get_streak(db: Session, user_id: int) -> StreakSummary:
    """Return the stored counters, or zeros when the user has never read."""
    row = _get_row(db, user_id)
    if row is None:
        return StreakSummary(0, 0, "", "")
    return StreakSummary(
        current_streak=row.current_streak,
        longest_streak=row.longest_streak,
        last_completed_local_date=row.last_completed_local_date,
        last_read_local_date=_last_read(row),
    )


def get_streak_stats(db: Session, user_id: int) -> StreakStats:
    """Return streak counters plus lifetime perfect and read day counts."""
    summary = get_streak(db, user_id)

    perfect_days = (
        db.query(func.count())
        .select_from(DailySet)
        .filter(DailySet.user_id == user_id, DailySet.completed_at.isnot(None))
        .scalar()
        or 0
    )
    read_days = (
        db.query(func.count(func.distinct(DailySet.local_date)))
        .select_from(ReadEvent)
        .join(DailySet, DailySet.id == ReadEvent.daily_set_id)
        .filter(ReadEvent.user_id == user_id)
        .scalar()
        or 0
    )

    return StreakStats(
        current_streak=summary.current_streak,
        longest_streak=summary.longest_streak,
        perfect_days=int(perfect_days),
        read_days=int(read_days),
    )


def get_reading_calendar(db: Session, user_id: int, month: str) -> list[CalendarDay]:
    """Return one entry per day of ``month`` (``YYYY-MM``) with read progress."""
    try:
        year_str, month_str = month.split("-")
        year, month_number = int(year_str), int(month_str)
        if not 1 <= month_number <= 12:
            raise ValueError(month)
    except ValueError as err:
        raise ValidationError("Month must use the YYYY-MM format") from err

    first_day = f"{year:04d}-{month_number:02d}-01"
    days_in_month = calendar.monthrange(year, month_number)[1]
    last_day = f"{year:04d}-{month_number:02d}-{days_in_month:02d}"

    rows = (
        db.query(
            DailySet.local_date,
            DailySet.completed_at,
            func.count(ReadEvent.id).label("verses_read"),
        )
        .outerjoin(
            ReadEvent,
            (ReadEvent.daily_set_id == DailySet.id) & (ReadEvent.kind == READ_KIND_SEQUENCE),
        )
        .filter(
            DailySet.user_id == user_id,
            DailySet.local_date >= first_day,
            DailySet.local_date <= last_day,
        )
        .group_by(DailySet.id, DailySet.local_date, DailySet.completed_at)
        .all()
    )
    by_date = {row.local_date: row for row in rows}

    days: list[CalendarDay] = []
    current = first_day
    for _ in range(days_in_month):
        row = by_date.get(current)
        days.append(
            CalendarDay(
                local_date=current,
                verses_read=int(row.verses_read) if row else 0,
                completed=bool(row and row.completed_at is not None),
            )
        )
        current = clock.next_calendar_date(current)
    return days
