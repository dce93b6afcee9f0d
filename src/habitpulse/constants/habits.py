"""
Habit categories, difficulties and analytics defaults shared by forms,
models and the analytics engine.
"""

from __future__ import annotations

from enum import Enum


class _LabelEnum(str, Enum):
    """String enum whose members parse case-insensitively (`HEALTH`, `health`)."""

    @classmethod
    def parse(cls, value: object):
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        raise ValueError(f"{value!r} is not a valid {cls.__name__}")


class HabitCategory(_LabelEnum):
    """Life area a habit belongs to."""

    HEALTH = "Health"
    WORK = "Work"
    PERSONAL = "Personal"


class HabitDifficulty(_LabelEnum):
    """Self-assessed effort of a habit."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


DEFAULT_CATEGORY = HabitCategory.PERSONAL
DEFAULT_DIFFICULTY = HabitDifficulty.MEDIUM

# Trailing windows (in days) used by the analytics views.
HEATMAP_WINDOW_DAYS = 84  # 12 weeks
CATEGORY_WINDOW_DAYS = 30
MAX_WINDOW_DAYS = 366

# Heat-map intensity levels: 0, 1, 2, 3+ completions per day.
MAX_INTENSITY = 3
