"""Streak-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict


class StreakUpdateResponse(BaseModel):
    """Counters after a read was credited to the streak."""

    model_config = ConfigDict(from_attributes=True)

    current_streak: int
    longest_streak: int
    is_new_record: bool


class StreakResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current_streak: int
    longest_streak: int
    last_completed_local_date: str
    last_read_local_date: str


class StreakCheckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current_streak: int
    longest_streak: int
    needs_reset: bool


class StreakStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current_streak: int
    longest_streak: int
    perfect_days: int
    read_days: int


class CalendarDayResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    local_date: str
    verses_read: int
    completed: bool
