"""API tests for the analytics blueprint."""

from __future__ import annotations

from datetime import timedelta

import pytest

from habitpulse.infra.repositories import SQLModelHabitRepository, SQLModelUserRepository
from habitpulse.services import habits as habit_service


@pytest.fixture
def seed(app, auth_headers, today):
    """Create habits with history directly in the app's database."""

    session_factory = app.extensions["habitpulse"]["session_factory"]
    users = SQLModelUserRepository(session_factory)
    habits = SQLModelHabitRepository(session_factory)
    owner = users.get_or_create(auth_headers["X-User-Id"])

    def _seed(name, category, offsets):
        habit = habit_service.create_habit(habits, user_id=owner.id, name=name, category=category)
        for offset in offsets:
            habits.upsert_completion(habit.id, today - timedelta(days=offset), user_id=owner.id)
        return habit

    return _seed


def test_summary(client, auth_headers, seed):
    seed("Run", "Health", [0, 1, 2])
    seed("Inbox zero", "Work", [3])

    payload = client.get("/api/analytics/summary", headers=auth_headers).get_json()

    assert payload["totalHabits"] == 2
    assert payload["completedToday"] == 1
    assert payload["activeStreaks"] == 1
    assert payload["longestStreak"] == 3
    assert payload["todayCompletionRate"] == 50


def test_heatmap_default_window(client, auth_headers, seed):
    seed("Run", "Health", [0, 2])
    seed("Read", "Personal", [2])

    payload = client.get("/api/analytics/heatmap", headers=auth_headers).get_json()

    assert len(payload["days"]) == 84
    assert payload["end"] == "2024-01-15"
    assert payload["start"] == "2023-10-24"
    assert [day["count"] for day in payload["days"][-3:]] == [2, 0, 1]


def test_heatmap_custom_window(client, auth_headers, seed):
    seed("Run", "Health", [0])

    payload = client.get("/api/analytics/heatmap?days=7", headers=auth_headers).get_json()

    assert len(payload["days"]) == 7
    assert payload["days"][-1] == {"date": "2024-01-15", "count": 1, "intensity": 1}


@pytest.mark.parametrize("days", ["0", "abc", "400"])
def test_invalid_window_is_rejected(client, auth_headers, days):
    response = client.get(f"/api/analytics/heatmap?days={days}", headers=auth_headers)
    assert response.status_code == 400
    assert "error" in response.get_json()


def test_category_performance(client, auth_headers, seed):
    for name in ("Run", "Swim", "Stretch"):
        seed(name, "Health", range(15))

    payload = client.get("/api/analytics/categories", headers=auth_headers).get_json()

    assert payload["windowDays"] == 30
    by_category = {row["category"]: row for row in payload["categories"]}
    assert by_category["Health"] == {
        "category": "Health",
        "completionRate": 50,
        "totalHabits": 3,
        "actualCompletions": 45,
        "totalPossibleCompletions": 90,
    }
    assert by_category["Work"]["completionRate"] == 0
    assert by_category["Personal"]["totalHabits"] == 0


def test_analytics_require_identity(client):
    for path in ("/api/analytics/summary", "/api/analytics/heatmap", "/api/analytics/categories"):
        assert client.get(path).status_code == 401
