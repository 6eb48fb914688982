"""Daily set and read-event Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from daily_shloka.schemas.streak import StreakUpdateResponse
from daily_shloka.schemas.verse import VerseResponse


class DailySetResponse(BaseModel):
    """A stored daily set."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    local_date: str
    verse_ids: list[int]
    created_at: int
    completed_at: int | None


class TodaySetResponse(BaseModel):
    """Today's set with its verses and read progress."""

    model_config = ConfigDict(from_attributes=True)

    daily_set: DailySetResponse
    verses: list[VerseResponse]
    read_verse_ids: list[int]
    is_complete: bool


class MarkReadRequest(BaseModel):
    verse_id: int = Field(..., description="Verse being marked as read")


class MarkReadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    already_read: bool
    verses_read: int
    total_verses: int
    is_complete: bool
    streak_update: StreakUpdateResponse | None


class RereadRequest(BaseModel):
    verse_id: int = Field(..., description="Previously read verse being read again")


class RereadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    streak_update: StreakUpdateResponse | None


class TodayProgressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    verses_read: int
    total_verses: int
    is_complete: bool


class ReadVerseResponse(BaseModel):
    """One entry of the reading history."""

    model_config = ConfigDict(from_attributes=True)

    verse: VerseResponse
    first_read_at: int
    last_read_at: int
    first_read_local_date: str
    read_count: int
