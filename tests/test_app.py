"""Application factory, health probe and clock wiring."""

from __future__ import annotations

from datetime import date

from habitpulse import create_app
from habitpulse.clock import fixed_clock, local_today, system_clock
from habitpulse.extensions import set_clock


def test_registers_api_blueprints(app):
    rules = {rule.rule for rule in app.url_map.iter_rules()}

    assert "/api/habits/" in rules
    assert "/api/habits/export" in rules
    assert "/api/analytics/heatmap" in rules
    assert "/api/profile" in rules
    assert "/api/verify-phone" in rules
    assert "/api/health" in rules


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok", "database": "ok"}


def test_reference_day_comes_from_the_clock(auth_headers):
    app = create_app("testing")
    set_clock(app, fixed_clock(date(2024, 3, 1)))
    client = app.test_client()

    habit_id = client.post("/api/habits/", json={"name": "Floss"}, headers=auth_headers).get_json()["id"]
    client.post(f"/api/habits/{habit_id}", headers=auth_headers)

    (habit,) = client.get("/api/habits/", headers=auth_headers).get_json()
    assert habit["completions"][0]["date"] == "2024-03-01"


def test_week_start_setting_changes_weekly_progress(monkeypatch, auth_headers):
    monkeypatch.setenv("HABITPULSE_WEEK_START", "monday")
    app = create_app("testing")
    client = app.test_client()

    set_clock(app, fixed_clock(date(2024, 1, 14)))  # Sunday
    habit_id = client.post("/api/habits/", json={"name": "Stretch"}, headers=auth_headers).get_json()["id"]
    client.post(f"/api/habits/{habit_id}", headers=auth_headers)

    set_clock(app, fixed_clock(date(2024, 1, 15)))  # Monday starts a new week
    (habit,) = client.get("/api/habits/", headers=auth_headers).get_json()
    assert habit["weeklyProgress"] == 0
    assert habit["streak"] == 0


def test_clock_helpers():
    assert fixed_clock(date(2024, 1, 15))() == date(2024, 1, 15)
    assert system_clock("UTC")() == local_today("UTC")
