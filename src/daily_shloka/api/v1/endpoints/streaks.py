"""Streak endpoints for the authenticated reader."""

from __future__ import annotations

from fastapi import APIRouter, Query

from daily_shloka.schemas.streak import (
    CalendarDayResponse,
    StreakCheckResponse,
    StreakResponse,
    StreakStatsResponse,
)
from daily_shloka.services import streaks
from daily_shloka.services.errors import ReadingError

from ..dependencies import CurrentUserDep, SessionDep, to_http_exception

router = APIRouter(prefix="/streaks", tags=["streaks"])


@router.get("/me", response_model=StreakResponse)
async def get_my_streak(current_user: CurrentUserDep, db: SessionDep) -> StreakResponse:
    """Return the reader's streak counters."""
    return StreakResponse.model_validate(streaks.get_streak(db, current_user.id))


@router.post("/me/check", response_model=StreakCheckResponse)
async def check_my_streak(current_user: CurrentUserDep, db: SessionDep) -> StreakCheckResponse:
    """Zero the streak if it lapsed while the app was closed.

    Clients call this when the app comes to the foreground.
    """
    try:
        result = streaks.check_and_reset(db, current_user.id)
    except ReadingError as exc:
        raise to_http_exception(exc) from exc
    return StreakCheckResponse.model_validate(result)


@router.get("/me/stats", response_model=StreakStatsResponse)
async def get_my_stats(current_user: CurrentUserDep, db: SessionDep) -> StreakStatsResponse:
    """Return streak counters with perfect-day and read-day totals."""
    return StreakStatsResponse.model_validate(streaks.get_streak_stats(db, current_user.id))


@router.get("/me/calendar", response_model=list[CalendarDayResponse])
async def get_my_calendar(
    current_user: CurrentUserDep,
    db: SessionDep,
    month: str = Query(..., pattern=r"^\d{4}-\d{2}$", description="Month as YYYY-MM"),
) -> list[CalendarDayResponse]:
    """Return per-day reading progress for one month."""
    try:
        days = streaks.get_reading_calendar(db, current_user.id, month)
    except ReadingError as exc:
        raise to_http_exception(exc) from exc
    return [CalendarDayResponse.model_validate(day) for day in days]
