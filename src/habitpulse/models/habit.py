"""Habit tracking data structures."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Optional
from uuid import uuid4

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from ..constants.habits import DEFAULT_CATEGORY, DEFAULT_DIFFICULTY

if TYPE_CHECKING:  # pragma: no cover
    from .user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Habit(SQLModel, table=True):
    """A user-defined habit the app tracks daily."""

    __tablename__: ClassVar[str] = "habit"

    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True, max_length=32)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=100, index=True)
    category: str = Field(default=DEFAULT_CATEGORY.value, nullable=False, max_length=16)
    difficulty: str = Field(default=DEFAULT_DIFFICULTY.value, nullable=False, max_length=16)
    weekly_goal: Optional[int] = Field(default=None)
    monthly_goal: Optional[int] = Field(default=None)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False, index=True)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)

    completions: list["HabitCompletion"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship(
            "HabitCompletion",
            back_populates="habit",
            cascade="all, delete-orphan",
            order_by="HabitCompletion.completed_at",
        ),
    )

    user: "User" = Relationship(sa_relationship=relationship("User", back_populates="habits"))


class HabitCompletion(SQLModel, table=True):
    """A habit marked done on one calendar day.

    The composite primary key keeps at most one completion per (habit, day).
    """

    __tablename__: ClassVar[str] = "habit_completion"

    habit_id: str = Field(foreign_key="habit.id", primary_key=True, max_length=32)
    completed_on: date = Field(primary_key=True, index=True)
    completed_at: datetime = Field(default_factory=_utcnow, nullable=False)

    habit: "Habit" = Relationship(
        back_populates="completions",
        sa_relationship=relationship("Habit", back_populates="completions"),
    )
