"""Habit routes."""

from __future__ import annotations

from flask import Response, current_app, jsonify

from ...auth import current_user, login_required
from ...config import BaseConfig
from ...extensions import get_session_factory, today
from ...infra.repositories import SQLModelHabitRepository
from ...services import habits as habit_service
from ..common import json_payload
from . import bp
from .forms import HabitForm


def _repo() -> SQLModelHabitRepository:
    return SQLModelHabitRepository(get_session_factory())


def _first_weekday() -> int:
    config: BaseConfig = current_app.config["HABITPULSE_CONFIG"]
    return config.first_weekday


@bp.get("/")
@login_required
def list_habits():
    """List the user's habits with streak and progress figures."""

    reference_day = today()
    habits = habit_service.list_habits(_repo(), user_id=current_user().id)
    return jsonify(
        [
            habit_service.serialize_habit(
                habit, today=reference_day, first_weekday=_first_weekday()
            )
            for habit in habits
        ]
    )


@bp.post("/")
@login_required
def create_habit():
    """Create a habit from a JSON payload."""

    form, errors = HabitForm.from_payload(json_payload())
    if form is None:
        return jsonify({"error": "Invalid habit", "fields": errors}), 400

    habit = habit_service.create_habit(
        _repo(),
        user_id=current_user().id,
        name=form.name,
        category=form.category,
        difficulty=form.difficulty,
        weekly_goal=form.weekly_goal,
        monthly_goal=form.monthly_goal,
    )
    payload = habit_service.serialize_habit(
        habit, today=today(), first_weekday=_first_weekday()
    )
    return jsonify(payload), 201


@bp.get("/export")
@login_required
def export_habits():
    """Download every habit and completion as a JSON file."""

    reference_day = today()
    habits = habit_service.list_habits(_repo(), user_id=current_user().id)
    body = habit_service.export_habits_json(habits, today=reference_day)
    filename = habit_service.export_filename(reference_day)
    return Response(
        body,
        mimetype="application/json",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@bp.post("/<string:habit_id>")
@login_required
def toggle_habit(habit_id: str):
    """Toggle habit completion state for today."""

    completed = habit_service.toggle_completion(
        _repo(), user_id=current_user().id, habit_id=habit_id, today=today()
    )
    return jsonify({"completed": completed})


@bp.delete("/<string:habit_id>")
@login_required
def delete_habit(habit_id: str):
    """Delete a habit and its completions."""

    habit_service.delete_habit(_repo(), user_id=current_user().id, habit_id=habit_id)
    return jsonify({"success": True})
