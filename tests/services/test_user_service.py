"""Tests for reader provisioning."""

from daily_shloka.models import Streak, UserReadingState
from daily_shloka.services import users


def test_first_sync_provisions_state_and_streak(db_session) -> None:
    user, created = users.get_or_create_user(db_session, auth_id="auth|123")

    assert created is True
    assert user.display_name == users.DEFAULT_DISPLAY_NAME
    assert user.timezone == "UTC"

    state = db_session.get(UserReadingState, user.id)
    assert state.sequential_pointer == 0
    assert state.sequence_initialized is False
    assert state.current_daily_set_id is None

    streak = db_session.get(Streak, user.id)
    assert (streak.current_streak, streak.longest_streak) == (0, 0)


def test_repeat_sync_returns_the_existing_user(db_session) -> None:
    first, _ = users.get_or_create_user(db_session, auth_id="auth|123", display_name="Maya")
    again, created = users.get_or_create_user(db_session, auth_id="auth|123", display_name="Other")

    assert created is False
    assert again.id == first.id
    assert again.display_name == "Maya"


def test_update_profile_ignores_missing_fields(db_session, reader) -> None:
    updated = users.update_profile(
        db_session,
        reader,
        timezone="Asia/Kolkata",
        reminder_time="06:30",
        display_name=None,
    )

    assert updated.timezone == "Asia/Kolkata"
    assert updated.reminder_time == "06:30"
    assert updated.display_name == "Test Reader"


def test_timezone_and_reminder_helpers(db_session, reader) -> None:
    users.update_timezone(db_session, reader, "America/Chicago")
    users.update_reminder_time(db_session, reader, "21:00")
    assert (reader.timezone, reader.reminder_time) == ("America/Chicago", "21:00")

    cleared = users.update_reminder_time(db_session, reader, None)
    assert cleared.reminder_time is None
