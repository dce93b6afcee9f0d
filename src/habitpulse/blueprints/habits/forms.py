"""Habit form definitions."""

from __future__ import annotations

from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from ...constants.habits import (
    DEFAULT_CATEGORY,
    DEFAULT_DIFFICULTY,
    HabitCategory,
    HabitDifficulty,
)
from ..common import FormModel


class HabitForm(FormModel):
    """Payload for creating a habit."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    name: str = Field(default="", description="Short label for the habit", max_length=100)
    category: HabitCategory = Field(default=DEFAULT_CATEGORY, description="Life area")
    difficulty: HabitDifficulty = Field(default=DEFAULT_DIFFICULTY, description="Effort level")
    weekly_goal: Optional[int] = Field(
        default=None, ge=1, le=7, alias="weeklyGoal", description="Target completions per week"
    )
    monthly_goal: Optional[int] = Field(
        default=None, ge=1, le=31, alias="monthlyGoal", description="Target completions per month"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Ensure the habit name is present."""

        if not value or not value.strip():
            raise ValueError("Please provide a habit name.")
        return value

    @field_validator("category", mode="before")
    @classmethod
    def parse_category(cls, value):
        """Accept `Health`, `HEALTH` or `health`; blank means the default."""

        if value is None or value == "":
            return DEFAULT_CATEGORY
        return HabitCategory.parse(value)

    @field_validator("difficulty", mode="before")
    @classmethod
    def parse_difficulty(cls, value):
        if value is None or value == "":
            return DEFAULT_DIFFICULTY
        return HabitDifficulty.parse(value)


__all__ = ["HabitForm"]
