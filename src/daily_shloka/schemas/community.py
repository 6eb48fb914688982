# src/daily_shloka/schemas/community.py
"""Community-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict


class CommunityCreate(BaseModel):
    """Schema for creating a new community."""

    name: str
    type: Literal["public", "private"] = "public"


class CommunityResponse(BaseModel):
    """Schema for community information returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: str
    invite_code: str | None
    created_by: int
    created_at: int


class CommunitySummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: str
    member_count: int
    invite_code: str | None = None
    role: str | None = None


class JoinByCodeRequest(BaseModel):
    invite_code: str


class ActiveCommunityRequest(BaseModel):
    community_id: int | None
