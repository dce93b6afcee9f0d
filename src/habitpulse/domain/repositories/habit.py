"""Habit repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.habit import Habit, HabitCompletion


class HabitRepository(Protocol):
    """Persistence contract for habits and their completions."""

    def list_for_user(self, *, user_id: int) -> list[Habit]:
        """List a user's habits, newest first, with completions loaded."""
        ...

    def get_by_id(self, habit_id: str, *, user_id: int) -> Optional[Habit]:
        """Retrieve one of the user's habits by ID."""
        ...

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        ...

    def delete(self, habit_id: str, *, user_id: int) -> bool:
        """Delete a habit and its completions; False when nothing matched."""
        ...

    # Completion operations
    def get_completion(
        self, habit_id: str, day: date, *, user_id: int
    ) -> Optional[HabitCompletion]:
        """Get the completion recorded for a habit on ``day``."""
        ...

    def upsert_completion(self, habit_id: str, day: date, *, user_id: int) -> Optional[HabitCompletion]:
        """Record a completion on ``day`` unless one already exists."""
        ...

    def delete_completion(self, habit_id: str, day: date, *, user_id: int) -> bool:
        """Remove the completion on ``day``; False when none existed."""
        ...

    def toggle_completion(self, habit_id: str, day: date, *, user_id: int) -> Optional[bool]:
        """Flip the completion on ``day``; returns the new state or None if not found."""
        ...
