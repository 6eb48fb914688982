"""Daily set assignment and in-order read progression.

Each user is handed a fixed-size, contiguous slice of the canonical verse
order per local calendar day. Verses must be read in the order the set was
generated; every confirmed sequence read moves the user's pointer forward by
one, so a half-finished set never skips unread verses.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from daily_shloka.core.settings import settings
from daily_shloka.db.time import to_millis, utcnow
from daily_shloka.models import DailySet, ReadEvent, User, UserReadingState, Verse
from daily_shloka.models.daily_set import READ_KIND_REREAD, READ_KIND_SEQUENCE
from daily_shloka.services import catalog, clock, reading_state, streaks
from daily_shloka.services.errors import ForbiddenError, NotFoundError, OutOfSequenceError
from daily_shloka.services.streaks import StreakUpdate

logger = logging.getLogger(__name__)


@dataclass
class TodaySet:
    """Today's set together with the verses and the reads logged so far."""

    daily_set: DailySet
    verses: list[Verse]
    read_verse_ids: list[int]
    is_complete: bool


@dataclass(frozen=True)
class MarkReadResult:
    already_read: bool
    verses_read: int
    total_verses: int
    is_complete: bool
    streak_update: StreakUpdate | None


@dataclass(frozen=True)
class RereadResult:
    streak_update: StreakUpdate | None


@dataclass(frozen=True)
class TodayProgress:
    verses_read: int
    total_verses: int
    is_complete: bool


@dataclass
class ReadVerse:
    """A verse from the user's reading history."""

    verse: Verse
    first_read_at: int
    last_read_at: int
    first_read_local_date: str
    read_count: int


def _get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def _sequence_reads(db: Session, daily_set_id: int) -> list[ReadEvent]:
    return (
        db.query(ReadEvent)
        .filter(
            ReadEvent.daily_set_id == daily_set_id,
            ReadEvent.kind == READ_KIND_SEQUENCE,
        )
        .order_by(ReadEvent.read_at, ReadEvent.id)
        .all()
    )


def _event_count(db: Session, daily_set_id: int) -> int:
    return (
        db.query(func.count())
        .select_from(ReadEvent)
        .filter(ReadEvent.daily_set_id == daily_set_id)
        .scalar()
        or 0
    )


def _resolve_today_set(
    db: Session,
    state: UserReadingState,
    today: str,
    now: datetime,
) -> DailySet:
    """Return the set for ``today``, creating it from the pointer if needed.

    Flushes but does not commit.
    """
    if state.current_daily_set_id is not None and state.last_daily_date == today:
        existing = db.get(DailySet, state.current_daily_set_id)
        if existing is not None:
            return existing

    # State can lag behind if a previous call died between writes.
    existing = (
        db.query(DailySet)
        .filter(DailySet.user_id == state.user_id, DailySet.local_date == today)
        .order_by(DailySet.id)
        .first()
    )
    if existing is not None:
        state.last_daily_date = today
        state.current_daily_set_id = existing.id
        db.flush()
        return existing

    ordered_ids = catalog.ordered_verse_ids(db)
    reading_state.ensure_sequence_initialized(db, state, ordered_ids)
    verse_ids = catalog.daily_slice(ordered_ids, state.sequential_pointer, settings.daily_verse_count)

    daily_set = DailySet(
        user_id=state.user_id,
        local_date=today,
        verse_ids=verse_ids,
        created_at=to_millis(now),
        completed_at=None,
    )
    db.add(daily_set)
    try:
        db.flush()
    except IntegrityError:
        # Another request built today's set first; adopt it.
        db.rollback()
        daily_set = (
            db.query(DailySet)
            .filter(DailySet.user_id == state.user_id, DailySet.local_date == today)
            .one()
        )
        state.last_daily_date = today
        state.current_daily_set_id = daily_set.id
        db.flush()
        logger.info("Reused daily set %s for user %s on %s", daily_set.id, state.user_id, today)
        return daily_set

    state.last_daily_date = today
    state.current_daily_set_id = daily_set.id
    db.flush()

    logger.info(
        "Created daily set %s for user %s on %s starting at pointer %d",
        daily_set.id,
        state.user_id,
        today,
        state.sequential_pointer,
    )
    return daily_set


def get_or_create_today_set(
    db: Session,
    user_id: int,
    now: datetime | None = None,
) -> TodaySet:
    """Return today's set for the user, creating it on the first call of the day.

    Only sequence reads count toward ``read_verse_ids``. Creating the set
    never moves the pointer.

    Raises:
        NotFoundError: If the user or their reading state is missing.
        CatalogEmptyError: If no verses have been seeded.
    """
    now = now or utcnow()
    user = _get_user(db, user_id)
    state = reading_state.get_state(db, user_id)
    today = clock.today_local_date(user.timezone, now)

    daily_set = _resolve_today_set(db, state, today, now)
    db.commit()

    reads = _sequence_reads(db, daily_set.id)
    return TodaySet(
        daily_set=daily_set,
        verses=catalog.get_verses(db, daily_set.verse_ids),
        read_verse_ids=[event.verse_id for event in reads],
        is_complete=daily_set.is_complete,
    )


def mark_verse_read(
    db: Session,
    user_id: int,
    daily_set_id: int,
    verse_id: int,
    now: datetime | None = None,
) -> MarkReadResult:
    """Log a sequence read of ``verse_id`` in the given set.

    Re-marking a verse that is already read is a no-op reported through
    ``already_read``. That includes losing a race to another request
    marking the same verse. The first read of the set feeds the streak engine with
    the set's own local date. The read that finishes the set stamps
    ``completed_at`` exactly once.

    Raises:
        NotFoundError: If the user or the set does not exist.
        ForbiddenError: If the set belongs to another user.
        OutOfSequenceError: If ``verse_id`` is not the next unread verse.
    """
    now = now or utcnow()
    _get_user(db, user_id)

    daily_set = db.get(DailySet, daily_set_id)
    if daily_set is None:
        raise NotFoundError("Daily set not found")
    if daily_set.user_id != user_id:
        raise ForbiddenError("Not your daily set")

    total = len(daily_set.verse_ids)
    reads = _sequence_reads(db, daily_set.id)
    if any(event.verse_id == verse_id for event in reads):
        logger.debug("Verse %s already read in set %s", verse_id, daily_set.id)
        return MarkReadResult(
            already_read=True,
            verses_read=len(reads),
            total_verses=total,
            is_complete=daily_set.is_complete,
            streak_update=None,
        )

    expected = daily_set.verse_ids[len(reads)] if len(reads) < total else None
    if verse_id != expected:
        raise OutOfSequenceError("Verse is not next in sequence")

    is_first_read = _event_count(db, daily_set.id) == 0
    db.add(
        ReadEvent(
            user_id=user_id,
            daily_set_id=daily_set.id,
            verse_id=verse_id,
            read_at=to_millis(now),
            kind=READ_KIND_SEQUENCE,
        )
    )
    try:
        db.flush()
    except IntegrityError:
        # A concurrent request logged the same verse between our check and insert.
        db.rollback()
        reads = _sequence_reads(db, daily_set.id)
        logger.debug("Verse %s already read in set %s", verse_id, daily_set.id)
        return MarkReadResult(
            already_read=True,
            verses_read=len(reads),
            total_verses=total,
            is_complete=daily_set.is_complete,
            streak_update=None,
        )

    streak_update = None
    if is_first_read:
        streak_update = streaks.update_on_read(db, user_id, daily_set.local_date)

    state = reading_state.get_state(db, user_id)
    # Older sets overlap the current one; only the current set moves the cursor.
    if state.current_daily_set_id == daily_set.id:
        reading_state.advance_pointer(state, catalog.verse_count(db))

    verses_read = len(reads) + 1
    if verses_read >= total and daily_set.completed_at is None:
        daily_set.completed_at = to_millis(now)
        streaks.record_completion(db, user_id, daily_set.local_date)
        logger.info("User %s completed daily set %s", user_id, daily_set.id)

    db.commit()
    return MarkReadResult(
        already_read=False,
        verses_read=verses_read,
        total_verses=total,
        is_complete=daily_set.is_complete,
        streak_update=streak_update,
    )


def log_reread(
    db: Session,
    user_id: int,
    verse_id: int,
    now: datetime | None = None,
) -> RereadResult:
    """Log a reread of a past verse so it keeps the streak alive.

    The event attaches to today's set (created lazily) but never counts toward
    set progress or the pointer.

    Raises:
        NotFoundError: If the user, their state or the verse does not exist.
    """
    now = now or utcnow()
    user = _get_user(db, user_id)
    if db.get(Verse, verse_id) is None:
        raise NotFoundError("Verse not found")

    state = reading_state.get_state(db, user_id)
    today = clock.today_local_date(user.timezone, now)
    daily_set = _resolve_today_set(db, state, today, now)

    is_first_read = _event_count(db, daily_set.id) == 0
    db.add(
        ReadEvent(
            user_id=user_id,
            daily_set_id=daily_set.id,
            verse_id=verse_id,
            read_at=to_millis(now),
            kind=READ_KIND_REREAD,
        )
    )

    streak_update = None
    if is_first_read:
        streak_update = streaks.update_on_read(db, user_id, daily_set.local_date)

    db.commit()
    return RereadResult(streak_update=streak_update)


def get_today_progress(
    db: Session,
    user_id: int,
    now: datetime | None = None,
) -> TodayProgress:
    """Return progress through today's set without creating one."""
    user = _get_user(db, user_id)
    state = reading_state.get_state(db, user_id)
    today = clock.today_local_date(user.timezone, now)

    daily_set = None
    if state.current_daily_set_id is not None and state.last_daily_date == today:
        daily_set = db.get(DailySet, state.current_daily_set_id)
    if daily_set is None:
        return TodayProgress(
            verses_read=0,
            total_verses=settings.daily_verse_count,
            is_complete=False,
        )

    return TodayProgress(
        verses_read=len(_sequence_reads(db, daily_set.id)),
        total_verses=len(daily_set.verse_ids),
        is_complete=daily_set.is_complete,
    )


def get_read_verses(db: Session, user_id: int) -> list[ReadVerse]:
    """Return every verse the user has read, most recently read first."""
    _get_user(db, user_id)
    rows = (
        db.query(ReadEvent, DailySet.local_date)
        .join(DailySet, DailySet.id == ReadEvent.daily_set_id)
        .filter(ReadEvent.user_id == user_id)
        .order_by(ReadEvent.read_at, ReadEvent.id)
        .all()
    )

    # verse_id -> [first_read_at, last_read_at, first local date, count]
    seen: dict[int, list] = {}
    for event, local_date in rows:
        stats = seen.get(event.verse_id)
        if stats is None:
            seen[event.verse_id] = [event.read_at, event.read_at, local_date, 1]
        else:
            stats[1] = event.read_at
            stats[3] += 1

    entries = [
        ReadVerse(
            verse=verse,
            first_read_at=seen[verse.id][0],
            last_read_at=seen[verse.id][1],
            first_read_local_date=seen[verse.id][2],
            read_count=seen[verse.id][3],
        )
        for verse in catalog.get_verses(db, list(seen))
    ]
    entries.sort(key=lambda entry: entry.last_read_at, reverse=True)
    return entries
