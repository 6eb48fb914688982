"""User-related Pydantic schemas."""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserSyncRequest(BaseModel):
    """Identity pushed by the client after signing in with the auth provider."""

    auth_id: str = Field(..., min_length=1, description="Subject from the auth provider")
    display_name: str | None = Field(None, max_length=100)
    avatar_url: str | None = None
    timezone: str | None = Field(None, description="IANA timezone, e.g. Asia/Kolkata")


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    auth_id: str
    display_name: str
    avatar_url: str
    timezone: str
    reminder_time: str | None
    created_at: int


class UserSyncResponse(BaseModel):
    """Provisioned user plus a bearer token for subsequent calls."""

    user: UserResponse
    created: bool = Field(..., description="True if a new record was inserted")
    access_token: str
    token_type: str = "bearer"


class ProfileUpdateRequest(BaseModel):
    """Schema for updating user profile information."""

    display_name: str | None = Field(
        None,
        min_length=1,
        max_length=100,
        description="Optional display name (1-100 characters)",
    )
    avatar_url: str | None = None
    timezone: str | None = None
    reminder_time: str | None = Field(None, description="Daily reminder as HH:mm (24h)")

    @field_validator("reminder_time")
    @classmethod
    def validate_reminder_time(cls, v: str | None) -> str | None:
        """Validate reminder time is a 24h HH:mm string."""
        if v is None:
            return v
        if not re.match(r"^([01]\d|2[0-3]):[0-5]\d$", v):
            raise ValueError("Reminder time must use the HH:mm 24h format")
        return v
