"""Daily reading endpoints: today's set, in-order reads and rereads."""

from __future__ import annotations

from fastapi import APIRouter

from daily_shloka.schemas.reading import (
    MarkReadRequest,
    MarkReadResponse,
    ReadVerseResponse,
    RereadRequest,
    RereadResponse,
    TodayProgressResponse,
    TodaySetResponse,
)
from daily_shloka.services import daily_sets
from daily_shloka.services.errors import ReadingError

from ..dependencies import CurrentUserDep, SessionDep, to_http_exception

router = APIRouter(prefix="/daily-sets", tags=["daily-sets"])


@router.post("/today", response_model=TodaySetResponse)
async def get_today_set(current_user: CurrentUserDep, db: SessionDep) -> TodaySetResponse:
    """Return today's set, creating it on the first call of the local day."""
    try:
        today = daily_sets.get_or_create_today_set(db, current_user.id)
    except ReadingError as exc:
        raise to_http_exception(exc) from exc
    return TodaySetResponse.model_validate(today)


@router.get("/today/progress", response_model=TodayProgressResponse)
async def get_today_progress(
    current_user: CurrentUserDep,
    db: SessionDep,
) -> TodayProgressResponse:
    """Return progress through today's set without creating one."""
    try:
        progress = daily_sets.get_today_progress(db, current_user.id)
    except ReadingError as exc:
        raise to_http_exception(exc) from exc
    return TodayProgressResponse.model_validate(progress)


@router.post("/rereads", response_model=RereadResponse)
async def log_reread(
    payload: RereadRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> RereadResponse:
    """Count a reread of a past verse toward today's streak."""
    try:
        result = daily_sets.log_reread(db, current_user.id, payload.verse_id)
    except ReadingError as exc:
        raise to_http_exception(exc) from exc
    return RereadResponse.model_validate(result)


@router.get("/history", response_model=list[ReadVerseResponse])
async def get_read_history(
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[ReadVerseResponse]:
    """List verses the reader has read, most recent first."""
    try:
        history = daily_sets.get_read_verses(db, current_user.id)
    except ReadingError as exc:
        raise to_http_exception(exc) from exc
    return [ReadVerseResponse.model_validate(entry) for entry in history]


@router.post("/{daily_set_id}/reads", response_model=MarkReadResponse)
async def mark_verse_read(
    daily_set_id: int,
    payload: MarkReadRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MarkReadResponse:
    """Mark the next verse of a set as read."""
    try:
        result = daily_sets.mark_verse_read(db, current_user.id, daily_set_id, payload.verse_id)
    except ReadingError as exc:
        raise to_http_exception(exc) from exc
    return MarkReadResponse.model_validate(result)
