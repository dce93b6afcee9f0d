"""Habit lifecycle helpers: create, list, toggle, delete and export."""

from __future__ import annotations

import calendar
import json
from datetime import date, datetime
from typing import Iterable, Optional

from ..constants.habits import HabitCategory, HabitDifficulty
from ..domain.repositories.habit import HabitRepository
from ..exceptions import HabitNotFoundError
from ..logging_config import get_logger
from ..models.habit import Habit
from . import analytics

logger = get_logger(__name__)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def snapshot_from_model(habit: Habit) -> analytics.HabitSnapshot:
    """Freeze a persisted habit into the value the analytics engine consumes."""

    return analytics.HabitSnapshot(
        id=habit.id,
        name=habit.name,
        category=habit.category,
        difficulty=habit.difficulty,
        created_at=habit.created_at,
        completions=tuple(completion.completed_on for completion in habit.completions),
    )


def snapshots(habits: Iterable[Habit]) -> list[analytics.HabitSnapshot]:
    return [snapshot_from_model(habit) for habit in habits]


def serialize_habit(
    habit: Habit,
    *,
    today: date,
    first_weekday: int = calendar.SUNDAY,
    with_progress: bool = True,
) -> dict:
    """Return the JSON shape of a habit, optionally with its progress figures."""

    payload = {
        "id": habit.id,
        "name": habit.name,
        "category": habit.category,
        "difficulty": habit.difficulty,
        "weeklyGoal": habit.weekly_goal,
        "monthlyGoal": habit.monthly_goal,
        "createdAt": _isoformat(habit.created_at),
        "updatedAt": _isoformat(habit.updated_at),
        "completions": [
            {
                "date": completion.completed_on.isoformat(),
                "completedAt": _isoformat(completion.completed_at),
            }
            for completion in habit.completions
        ],
    }
    if with_progress:
        snapshot = snapshot_from_model(habit)
        payload.update(
            {
                "completedToday": analytics.is_completed_today(snapshot, today),
                "streak": analytics.current_streak(snapshot, today),
                "longestStreak": analytics.longest_streak(snapshot),
                "weeklyProgress": analytics.weekly_progress(snapshot, today, first_weekday),
                "monthlyProgress": analytics.monthly_progress(snapshot, today),
            }
        )
    return payload


def list_habits(repo: HabitRepository, *, user_id: int) -> list[Habit]:
    """Return the user's habits, newest first."""

    return repo.list_for_user(user_id=user_id)


def create_habit(
    repo: HabitRepository,
    *,
    user_id: int,
    name: str,
    category: HabitCategory | str = HabitCategory.PERSONAL,
    difficulty: HabitDifficulty | str = HabitDifficulty.MEDIUM,
    weekly_goal: Optional[int] = None,
    monthly_goal: Optional[int] = None,
) -> Habit:
    """Create a habit for ``user_id``."""

    name = (name or "").strip()
    if not name:
        raise ValueError("Please provide a habit name.")

    habit = Habit(
        user_id=user_id,
        name=name,
        category=HabitCategory.parse(category).value,
        difficulty=HabitDifficulty.parse(difficulty).value,
        weekly_goal=weekly_goal,
        monthly_goal=monthly_goal,
    )
    return repo.create(habit, user_id=user_id)


def toggle_completion(
    repo: HabitRepository, *, user_id: int, habit_id: str, today: date
) -> bool:
    """Mark the habit done for ``today`` or undo it; returns the new state."""

    completed = repo.toggle_completion(habit_id, today, user_id=user_id)
    if completed is None:
        raise HabitNotFoundError(habit_id)
    return completed


def delete_habit(repo: HabitRepository, *, user_id: int, habit_id: str) -> None:
    """Delete a habit and its completions."""

    if not repo.delete(habit_id, user_id=user_id):
        raise HabitNotFoundError(habit_id)


def export_filename(today: date) -> str:
    return f"habits_export_{today.isoformat()}.json"


def export_habits_json(habits: Iterable[Habit], *, today: date) -> str:
    """Serialize habits with their completions as pretty-printed JSON."""

    data = [serialize_habit(habit, today=today, with_progress=False) for habit in habits]
    logger.info("Habits exported", extra={"habit_count": len(data)})
    return json.dumps(data, indent=2)


__all__ = [
    "create_habit",
    "delete_habit",
    "export_filename",
    "export_habits_json",
    "list_habits",
    "serialize_habit",
    "snapshot_from_model",
    "snapshots",
    "toggle_completion",
]
