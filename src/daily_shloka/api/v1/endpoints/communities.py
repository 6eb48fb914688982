# src/daily_shloka/api/v1/endpoints/communities.py
"""Community endpoints: create, join, leave and pick the active one."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from daily_shloka.models import Community
from daily_shloka.schemas.community import (
    ActiveCommunityRequest,
    CommunityCreate,
    CommunityResponse,
    CommunitySummaryResponse,
    JoinByCodeRequest,
)
from daily_shloka.services import communities as community_service
from daily_shloka.services.errors import ReadingError

from ..dependencies import CurrentUserDep, SessionDep, to_http_exception

router = APIRouter(prefix="/communities", tags=["communities"])


@router.get("/", response_model=list[CommunitySummaryResponse])
async def list_public_communities(db: SessionDep) -> list[CommunitySummaryResponse]:
    """List public communities, newest first."""
    return [
        CommunitySummaryResponse.model_validate(summary)
        for summary in community_service.get_public_communities(db)
    ]


@router.get("/mine", response_model=list[CommunitySummaryResponse])
async def list_my_communities(
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[CommunitySummaryResponse]:
    """List the caller's communities with their role in each."""
    return [
        CommunitySummaryResponse.model_validate(summary)
        for summary in community_service.get_user_communities(db, current_user.id)
    ]


@router.post("/", response_model=CommunityResponse, status_code=status.HTTP_201_CREATED)
async def create_community(
    community_data: CommunityCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Community:
    """Create a community owned by the caller."""
    try:
        return community_service.create_community(
            db, current_user.id, community_data.name, community_data.type
        )
    except ReadingError as exc:
        raise to_http_exception(exc) from exc


@router.post("/join", response_model=CommunityResponse)
async def join_by_code(
    payload: JoinByCodeRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Community:
    """Join a private community with its invite code."""
    try:
        return community_service.join_by_invite_code(db, current_user.id, payload.invite_code)
    except ReadingError as exc:
        raise to_http_exception(exc) from exc


@router.get("/active", response_model=CommunityResponse | None)
async def get_active_community(current_user: CurrentUserDep, db: SessionDep) -> Community | None:
    """Return the caller's selected community, if any."""
    return community_service.get_active_community(db, current_user.id)


@router.put("/active", status_code=status.HTTP_204_NO_CONTENT)
async def set_active_community(
    payload: ActiveCommunityRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Response:
    """Select the community shown on the social tab; null clears it."""
    try:
        community_service.set_active_community(db, current_user.id, payload.community_id)
    except ReadingError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{community_id}/join", response_model=CommunityResponse)
async def join_public_community(
    community_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Community:
    """Join a public community."""
    try:
        return community_service.join_public_community(db, current_user.id, community_id)
    except ReadingError as exc:
        raise to_http_exception(exc) from exc


@router.delete("/{community_id}/members/me", status_code=status.HTTP_204_NO_CONTENT)
async def leave_community(
    community_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Response:
    """Leave a community the caller does not own."""
    try:
        community_service.leave_community(db, current_user.id, community_id)
    except ReadingError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
