"""Tests for timezone-aware calendar date helpers."""

from datetime import UTC, datetime

from daily_shloka.services import clock


def test_today_in_utc() -> None:
    now = datetime(2024, 1, 10, 23, 59, tzinfo=UTC)
    assert clock.today_local_date("UTC", now) == "2024-01-10"


def test_today_ahead_of_utc() -> None:
    # 20:00 UTC is 01:30 the next day in India.
    now = datetime(2024, 1, 10, 20, 0, tzinfo=UTC)
    assert clock.today_local_date("Asia/Kolkata", now) == "2024-01-11"


def test_today_behind_utc() -> None:
    now = datetime(2024, 1, 10, 3, 0, tzinfo=UTC)
    assert clock.today_local_date("America/New_York", now) == "2024-01-09"


def test_unknown_timezone_falls_back_to_utc() -> None:
    now = datetime(2024, 1, 10, 20, 0, tzinfo=UTC)
    assert clock.today_local_date("Mars/Olympus_Mons", now) == "2024-01-10"
    assert clock.today_local_date("", now) == "2024-01-10"
    assert clock.today_local_date(None, now) == "2024-01-10"


def test_naive_datetime_is_treated_as_utc() -> None:
    naive = datetime(2024, 1, 10, 20, 0)
    assert clock.today_local_date("Asia/Kolkata", naive) == "2024-01-11"


def test_yesterday_local_date() -> None:
    now = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
    assert clock.yesterday_local_date("UTC", now) == "2024-02-29"


def test_previous_and_next_calendar_date_cross_boundaries() -> None:
    assert clock.previous_calendar_date("2024-01-01") == "2023-12-31"
    assert clock.previous_calendar_date("2023-03-01") == "2023-02-28"
    assert clock.next_calendar_date("2023-12-31") == "2024-01-01"
    assert clock.next_calendar_date("2024-02-28") == "2024-02-29"
