"""Leaderboard Pydantic schemas."""

from pydantic import BaseModel, ConfigDict


class LeaderboardEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    display_name: str
    avatar_url: str
    current_streak: int
    last_read_local_date: str | None
    rank: int


class LeaderboardResponse(BaseModel):
    """Top window plus the requester's pinned entry when outside it."""

    model_config = ConfigDict(from_attributes=True)

    top: list[LeaderboardEntryResponse]
    current_user: LeaderboardEntryResponse | None
    total: int
