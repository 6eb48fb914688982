"""Streak leaderboard endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from daily_shloka.schemas.leaderboard import LeaderboardResponse
from daily_shloka.services import leaderboard
from daily_shloka.services.errors import ReadingError

from ..dependencies import OptionalUserDep, SessionDep, to_http_exception

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("/global", response_model=LeaderboardResponse)
async def get_global_leaderboard(
    db: SessionDep,
    current_user: OptionalUserDep,
) -> LeaderboardResponse:
    """Rank every reader by current streak.

    With a bearer token the caller's own entry is pinned when it falls
    outside the top window.
    """
    board = leaderboard.get_global_leaderboard(
        db,
        current_user_id=current_user.id if current_user else None,
    )
    return LeaderboardResponse.model_validate(board)


@router.get("/communities/{community_id}", response_model=LeaderboardResponse)
async def get_community_leaderboard(
    community_id: int,
    db: SessionDep,
    current_user: OptionalUserDep,
) -> LeaderboardResponse:
    """Rank the members of one community by current streak."""
    try:
        board = leaderboard.get_community_leaderboard(
            db,
            community_id,
            current_user_id=current_user.id if current_user else None,
        )
    except ReadingError as exc:
        raise to_http_exception(exc) from exc
    return LeaderboardResponse.model_validate(board)
