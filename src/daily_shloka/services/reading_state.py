"""Helpers for the per-user sequential reading cursor."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from daily_shloka.models import ReadEvent, UserReadingState
from daily_shloka.models.daily_set import READ_KIND_SEQUENCE
from daily_shloka.services.errors import NotFoundError

logger = logging.getLogger(__name__)


def get_state(db: Session, user_id: int) -> UserReadingState:
    """Return the reading state row for ``user_id``.

    Raises:
        NotFoundError: If the user was never provisioned.
    """
    state = db.get(UserReadingState, user_id)
    if state is None:
        raise NotFoundError("User state not found")
    return state


def ensure_sequence_initialized(
    db: Session,
    state: UserReadingState,
    ordered_ids: Sequence[int],
) -> bool:
    """Reconcile the pointer with read history, once per user.

    Moves ``state`` from uninitialized to initialized. When the user already
    has sequence reads, the pointer becomes the canonical index of the first
    verse they have not read (0 once everything has been read). Without any
    history the stored pointer is kept.

    Returns:
        True if the transition happened on this call, False if it had already
        happened before.
    """
    if state.sequence_initialized:
        return False

    read_ids = {
        row.verse_id
        for row in db.query(ReadEvent.verse_id)
        .filter(
            ReadEvent.user_id == state.user_id,
            ReadEvent.kind == READ_KIND_SEQUENCE,
        )
        .all()
    }

    total = len(ordered_ids)
    if read_ids and total:
        pointer = next(
            (index for index, verse_id in enumerate(ordered_ids) if verse_id not in read_ids),
            0,
        )
    elif total:
        pointer = state.sequential_pointer % total
    else:
        pointer = 0

    state.sequential_pointer = pointer
    state.sequence_initialized = True
    logger.info(
        "Initialized reading sequence for user %s at pointer %d (%d verses already read)",
        state.user_id,
        pointer,
        len(read_ids),
    )
    return True


def advance_pointer(state: UserReadingState, total_verses: int) -> int:
    """Move the pointer one verse forward, wrapping at the end of the catalog."""
    if total_verses <= 0:
        return state.sequential_pointer
    state.sequential_pointer = (state.sequential_pointer + 1) % total_verses
    return state.sequential_pointer
