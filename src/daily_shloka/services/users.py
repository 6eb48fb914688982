"""Provisioning and profile helpers for readers."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from daily_shloka.core.settings import settings
from daily_shloka.models import Streak, User, UserReadingState
from daily_shloka.models.user import READING_MODE_SEQUENTIAL
from daily_shloka.services.errors import NotFoundError

logger = logging.getLogger(__name__)

__all__ = [
    "get_user",
    "get_user_by_auth_id",
    "get_or_create_user",
    "update_profile",
    "update_timezone",
    "update_reminder_time",
]

DEFAULT_DISPLAY_NAME = "Reader"


def get_user(db: Session, user_id: int) -> User:
    """Return a user by primary key.

    Raises:
        NotFoundError: If no such user exists.
    """
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_auth_id(db: Session, auth_id: str) -> User | None:
    """Return the user linked to an external auth identity, if any."""
    return db.query(User).filter(User.auth_id == auth_id).first()


def get_or_create_user(
    db: Session,
    auth_id: str,
    display_name: str | None = None,
    avatar_url: str | None = None,
    timezone: str | None = None,
) -> tuple[User, bool]:
    """Return the user for ``auth_id``, provisioning it on first sight.

    A new user gets a reading state at pointer 0 and an empty streak row in
    the same transaction, so the reading engines can assume both exist.

    Returns:
        ``(user, created)``
    """
    existing = get_user_by_auth_id(db, auth_id)
    if existing is not None:
        return existing, False

    user = User(
        auth_id=auth_id,
        display_name=display_name or DEFAULT_DISPLAY_NAME,
        avatar_url=avatar_url or "",
        timezone=timezone or settings.default_timezone,
    )
    user.reading_state = UserReadingState(
        mode=READING_MODE_SEQUENTIAL,
        sequential_pointer=0,
        last_daily_date="",
        current_daily_set_id=None,
        sequence_initialized=False,
    )
    db.add(user)
    db.flush()
    db.add(
        Streak(
            user_id=user.id,
            current_streak=0,
            longest_streak=0,
            last_completed_local_date="",
            last_read_local_date="",
        )
    )
    db.commit()
    db.refresh(user)
    logger.info("Provisioned user %s for auth id %s", user.id, auth_id)
    return user, True


def update_profile(db: Session, user: User, **changes: str | None) -> User:
    """Apply partial profile updates; ``None`` values are ignored."""
    for key in ("display_name", "avatar_url", "timezone", "reminder_time"):
        value = changes.get(key)
        if value is not None:
            setattr(user, key, value)

    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_timezone(db: Session, user: User, timezone: str) -> User:
    """Change the IANA timezone used to compute the user's local dates.

    Takes effect from the next local-date computation; existing sets keep
    the date they were created for.
    """
    return update_profile(db, user, timezone=timezone)


def update_reminder_time(db: Session, user: User, reminder_time: str | None) -> User:
    """Set the ``HH:mm`` reminder time, or clear it with ``None``."""
    user.reminder_time = reminder_time
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
