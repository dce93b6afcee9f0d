"""Aggregate analytics routes: summary, heat map and category performance."""

from __future__ import annotations

from flask import current_app, jsonify

from ...auth import current_user, login_required
from ...config import BaseConfig
from ...extensions import get_session_factory, today
from ...infra.repositories import SQLModelHabitRepository
from ...services import analytics
from ...services import habits as habit_service
from ..common import window_days_arg
from . import bp


def _config() -> BaseConfig:
    return current_app.config["HABITPULSE_CONFIG"]


def _user_snapshots() -> list[analytics.HabitSnapshot]:
    repo = SQLModelHabitRepository(get_session_factory())
    return habit_service.snapshots(habit_service.list_habits(repo, user_id=current_user().id))


@bp.get("/summary")
@login_required
def summary():
    """Totals for today, this week and this month."""

    result = analytics.summary(_user_snapshots(), today(), _config().first_weekday)
    return jsonify(result.to_dict())


@bp.get("/heatmap")
@login_required
def heatmap():
    """Completions per day across all habits for the trailing window."""

    window = window_days_arg("days", _config().HEATMAP_WINDOW_DAYS)
    reference_day = today()
    days = analytics.heatmap(_user_snapshots(), reference_day, window)
    return jsonify(
        {
            "start": days[0].date.isoformat(),
            "end": reference_day.isoformat(),
            "days": [day.to_dict() for day in days],
        }
    )


@bp.get("/categories")
@login_required
def categories():
    """Completion rate per category for the trailing window."""

    window = window_days_arg("days", _config().CATEGORY_WINDOW_DAYS)
    results = analytics.category_performance(_user_snapshots(), today(), window)
    return jsonify({"windowDays": window, "categories": [item.to_dict() for item in results]})
