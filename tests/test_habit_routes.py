"""API tests for the habits blueprint."""

from __future__ import annotations

import json

import pytest


def _create(client, headers, **payload):
    body = {"name": "Drink water", "category": "Health", "difficulty": "Easy"}
    body.update(payload)
    return client.post("/api/habits/", json=body, headers=headers)


def test_requires_identity_header(client):
    response = client.get("/api/habits/")
    assert response.status_code == 401
    assert response.get_json() == {"error": "Unauthorized"}


def test_create_and_list(client, auth_headers):
    created = _create(client, auth_headers)
    assert created.status_code == 201
    habit = created.get_json()
    assert habit["name"] == "Drink water"
    assert habit["category"] == "Health"
    assert habit["difficulty"] == "Easy"
    assert habit["streak"] == 0
    assert habit["completions"] == []

    listed = client.get("/api/habits/", headers=auth_headers).get_json()
    assert [item["id"] for item in listed] == [habit["id"]]


def test_create_accepts_uppercase_enums(client, auth_headers):
    response = _create(client, auth_headers, category="WORK", difficulty="HARD")
    assert response.status_code == 201
    assert response.get_json()["category"] == "Work"
    assert response.get_json()["difficulty"] == "Hard"


@pytest.mark.parametrize(
    "payload,field",
    [
        ({"name": "   "}, "name"),
        ({"category": "Hobbies"}, "category"),
        ({"difficulty": "Legendary"}, "difficulty"),
        ({"weeklyGoal": 9}, "weeklyGoal"),
    ],
)
def test_create_validation_errors(client, auth_headers, payload, field):
    response = _create(client, auth_headers, **payload)
    assert response.status_code == 400
    assert field in response.get_json()["fields"]


def test_toggle_marks_and_unmarks_today(client, auth_headers):
    habit_id = _create(client, auth_headers).get_json()["id"]

    first = client.post(f"/api/habits/{habit_id}", headers=auth_headers)
    assert first.get_json() == {"completed": True}

    listed = client.get("/api/habits/", headers=auth_headers).get_json()
    assert listed[0]["completedToday"] is True
    assert listed[0]["streak"] == 1
    assert listed[0]["completions"][0]["date"] == "2024-01-15"

    second = client.post(f"/api/habits/{habit_id}", headers=auth_headers)
    assert second.get_json() == {"completed": False}
    assert client.get("/api/habits/", headers=auth_headers).get_json()[0]["completions"] == []


def test_habits_are_private_to_their_owner(client, auth_headers):
    habit_id = _create(client, auth_headers).get_json()["id"]
    bob = {"X-User-Id": "user_bob"}

    assert client.get("/api/habits/", headers=bob).get_json() == []
    toggle = client.post(f"/api/habits/{habit_id}", headers=bob)
    assert toggle.status_code == 404
    assert toggle.get_json() == {"error": "Habit not found"}
    assert client.delete(f"/api/habits/{habit_id}", headers=bob).status_code == 404


def test_delete(client, auth_headers):
    habit_id = _create(client, auth_headers).get_json()["id"]
    client.post(f"/api/habits/{habit_id}", headers=auth_headers)

    response = client.delete(f"/api/habits/{habit_id}", headers=auth_headers)

    assert response.get_json() == {"success": True}
    assert client.get("/api/habits/", headers=auth_headers).get_json() == []
    assert client.delete(f"/api/habits/{habit_id}", headers=auth_headers).status_code == 404


def test_export_download(client, auth_headers):
    habit_id = _create(client, auth_headers, name="Meditate").get_json()["id"]
    client.post(f"/api/habits/{habit_id}", headers=auth_headers)

    response = client.get("/api/habits/export", headers=auth_headers)

    assert response.status_code == 200
    assert response.mimetype == "application/json"
    assert "habits_export_2024-01-15.json" in response.headers["Content-Disposition"]
    data = json.loads(response.data)
    assert data[0]["name"] == "Meditate"
    assert data[0]["completions"][0]["date"] == "2024-01-15"


def test_unknown_route_returns_json_404(client, auth_headers):
    response = client.get("/api/nope", headers=auth_headers)
    assert response.status_code == 404
    assert "error" in response.get_json()
