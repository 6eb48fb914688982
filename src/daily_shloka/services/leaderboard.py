"""Streak leaderboards, global and per community.

Ordering is current streak descending, then last read date descending
(``YYYY-MM-DD`` strings compare correctly as text), then user id ascending so
the result is stable across calls. Ranks are 1..N with no shared positions.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from sqlalchemy.orm import Session

from daily_shloka.core.settings import settings
from daily_shloka.models import Community, Streak, User
from daily_shloka.services.communities import member_ids
from daily_shloka.services.errors import NotFoundError

ANONYMOUS_NAME = "Anonymous"


@dataclass(frozen=True)
class LeaderboardEntry:
    user_id: int
    display_name: str
    avatar_url: str
    current_streak: int
    last_read_local_date: str | None
    rank: int = 0


@dataclass(frozen=True)
class Leaderboard:
    """Top window plus the requester's own row when it falls outside it."""

    top: list[LeaderboardEntry]
    current_user: LeaderboardEntry | None
    total: int


def rank_entries(entries: Iterable[LeaderboardEntry]) -> list[LeaderboardEntry]:
    """Sort entries and assign dense 1-based ranks."""
    ordered = sorted(entries, key=lambda entry: entry.user_id)
    ordered.sort(key=lambda entry: entry.last_read_local_date or "", reverse=True)
    ordered.sort(key=lambda entry: entry.current_streak, reverse=True)
    return [replace(entry, rank=index + 1) for index, entry in enumerate(ordered)]


def _build(
    entries: Sequence[LeaderboardEntry],
    current_user_id: int | None,
    total: int,
) -> Leaderboard:
    if not entries:
        return Leaderboard(top=[], current_user=None, total=total)

    ranked = rank_entries(entries)
    top = ranked[: settings.leaderboard_size]

    pinned = None
    if current_user_id is not None and all(entry.user_id != current_user_id for entry in top):
        pinned = next((entry for entry in ranked if entry.user_id == current_user_id), None)

    return Leaderboard(top=top, current_user=pinned, total=total)


def _entry(user_id: int, user: User | None, streak: Streak | None) -> LeaderboardEntry:
    last_read = None
    if streak is not None:
        last_read = streak.last_read_local_date or streak.last_completed_local_date or None
    return LeaderboardEntry(
        user_id=user_id,
        display_name=(user.display_name if user and user.display_name else ANONYMOUS_NAME),
        avatar_url=(user.avatar_url if user else "") or "",
        current_streak=streak.current_streak if streak is not None else 0,
        last_read_local_date=last_read,
    )


def get_global_leaderboard(db: Session, current_user_id: int | None = None) -> Leaderboard:
    """Rank every user that has a streak row."""
    rows = (
        db.query(Streak, User)
        .outerjoin(User, User.id == Streak.user_id)
        .all()
    )
    entries = [_entry(streak.user_id, user, streak) for streak, user in rows]
    return _build(entries, current_user_id, total=len(entries))


def get_community_leaderboard(
    db: Session,
    community_id: int,
    current_user_id: int | None = None,
) -> Leaderboard:
    """Rank the members of one community.

    Members who have never read appear with a streak of 0. ``total`` is the
    member count.

    Raises:
        NotFoundError: If the community does not exist.
    """
    if db.get(Community, community_id) is None:
        raise NotFoundError("Community not found")

    members = member_ids(db, community_id)
    if not members:
        return Leaderboard(top=[], current_user=None, total=0)

    rows = (
        db.query(User, Streak)
        .outerjoin(Streak, Streak.user_id == User.id)
        .filter(User.id.in_(members))
        .all()
    )
    entries = [_entry(user.id, user, streak) for user, streak in rows]
    return _build(entries, current_user_id, total=len(members))
