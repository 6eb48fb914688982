# src/daily_shloka/api/v1/endpoints/users.py
"""User provisioning and profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from daily_shloka.core.security import create_access_token
from daily_shloka.models import User
from daily_shloka.schemas.user import (
    ProfileUpdateRequest,
    UserResponse,
    UserSyncRequest,
    UserSyncResponse,
)
from daily_shloka.services import users as user_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/sync", response_model=UserSyncResponse)
async def sync_user(payload: UserSyncRequest, db: SessionDep) -> UserSyncResponse:
    """Get or create the reader behind an auth identity and issue a token."""
    user, created = user_service.get_or_create_user(
        db,
        auth_id=payload.auth_id,
        display_name=payload.display_name,
        avatar_url=payload.avatar_url,
        timezone=payload.timezone,
    )
    return UserSyncResponse(
        user=UserResponse.model_validate(user),
        created=created,
        access_token=create_access_token(user.id),
    )


@router.get("/me", response_model=UserResponse)
async def read_me(current_user: CurrentUserDep) -> User:
    """Return the authenticated reader's profile."""
    return current_user


@router.patch("/me", response_model=UserResponse)
async def update_me(
    payload: ProfileUpdateRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> User:
    """Update display name, avatar, timezone or reminder time."""
    return user_service.update_profile(
        db,
        current_user,
        **payload.model_dump(exclude_unset=True),
    )


@router.delete("/me/reminder", response_model=UserResponse)
async def clear_reminder(current_user: CurrentUserDep, db: SessionDep) -> User:
    """Turn off the daily reminder."""
    return user_service.update_reminder_time(db, current_user, None)
