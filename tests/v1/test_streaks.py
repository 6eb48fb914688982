"""Tests for the streak endpoints."""

from fastapi import status


def _read_first_verse(client, headers):
    data = client.post("/api/v1/daily-sets/today", headers=headers).json()
    client.post(
        f"/api/v1/daily-sets/{data['daily_set']['id']}/reads",
        json={"verse_id": data["daily_set"]["verse_ids"][0]},
        headers=headers,
    )


def test_streak_before_and_after_reading(client, auth_headers, verses) -> None:
    before = client.get("/api/v1/streaks/me", headers=auth_headers)
    assert before.status_code == status.HTTP_200_OK
    assert before.json()["current_streak"] == 0

    _read_first_verse(client, auth_headers)

    after = client.get("/api/v1/streaks/me", headers=auth_headers).json()
    assert (after["current_streak"], after["longest_streak"]) == (1, 1)
    assert after["last_read_local_date"] != ""


def test_check_keeps_a_fresh_streak(client, auth_headers, verses) -> None:
    _read_first_verse(client, auth_headers)

    response = client.post("/api/v1/streaks/me/check", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"current_streak": 1, "longest_streak": 1, "needs_reset": False}


def test_stats(client, auth_headers, verses) -> None:
    _read_first_verse(client, auth_headers)

    stats = client.get("/api/v1/streaks/me/stats", headers=auth_headers).json()
    assert stats["read_days"] == 1
    assert stats["perfect_days"] == 0


def test_calendar(client, auth_headers) -> None:
    response = client.get("/api/v1/streaks/me/calendar?month=2024-02", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    days = response.json()
    assert len(days) == 29
    assert days[0] == {"local_date": "2024-02-01", "verses_read": 0, "completed": False}


def test_calendar_validates_month(client, auth_headers) -> None:
    malformed = client.get("/api/v1/streaks/me/calendar?month=feb", headers=auth_headers)
    assert malformed.status_code == 422

    out_of_range = client.get("/api/v1/streaks/me/calendar?month=2024-13", headers=auth_headers)
    assert out_of_range.status_code == status.HTTP_400_BAD_REQUEST
