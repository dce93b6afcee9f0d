"""SQLModel implementation of the habit repository."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.habit import Habit, HabitCompletion
from ..database import SessionFactory

logger = get_logger(__name__)


def _detach(session: Session, habit: Habit) -> Habit:
    # Load completions while the session is open; expunge cascades to them.
    list(habit.completions)
    session.expunge(habit)
    return habit


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def _owned(self, session: Session, habit_id: str, user_id: int) -> Optional[Habit]:
        return session.exec(
            select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
        ).first()

    def list_for_user(self, *, user_id: int) -> list[Habit]:
        """List a user's habits, newest first, with completions loaded."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.user_id == user_id)
                .options(selectinload(Habit.completions))  # type: ignore[arg-type]
                .order_by(Habit.created_at.desc())  # type: ignore[attr-defined]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get_by_id(self, habit_id: str, *, user_id: int) -> Optional[Habit]:
        """Retrieve one of the user's habits by ID."""
        with self.session_factory() as session:
            habit = self._owned(session, habit_id, user_id)
            if habit is None:
                return None
            return _detach(session, habit)

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            habit.user_id = user_id
            session.add(habit)
            session.commit()
            session.refresh(habit)
            logger.info("Habit created", extra={"habit_id": habit.id, "user_id": user_id})
            return _detach(session, habit)

    def delete(self, habit_id: str, *, user_id: int) -> bool:
        """Delete a habit and its completions; False when nothing matched."""
        with self.session_factory() as session:
            habit = self._owned(session, habit_id, user_id)
            if habit is None:
                return False
            session.delete(habit)
            session.commit()
            logger.info("Habit deleted", extra={"habit_id": habit_id, "user_id": user_id})
            return True

    # Completion operations
    def get_completion(
        self, habit_id: str, day: date, *, user_id: int
    ) -> Optional[HabitCompletion]:
        """Get the completion recorded for a habit on ``day``."""
        with self.session_factory() as session:
            statement = (
                select(HabitCompletion)
                .join(Habit)
                .where(Habit.user_id == user_id)
                .where(HabitCompletion.habit_id == habit_id)
                .where(HabitCompletion.completed_on == day)
            )
            obj = session.exec(statement).first()
            if obj:
                session.expunge(obj)
            return obj

    def upsert_completion(
        self, habit_id: str, day: date, *, user_id: int
    ) -> Optional[HabitCompletion]:
        """Record a completion on ``day`` unless one already exists."""
        with self.session_factory() as session:
            habit = self._owned(session, habit_id, user_id)
            if habit is None:
                return None

            existing = session.get(HabitCompletion, (habit_id, day))
            if existing is None:
                existing = HabitCompletion(habit_id=habit_id, completed_on=day)
                session.add(existing)
            habit.updated_at = datetime.now(timezone.utc)
            session.add(habit)
            session.commit()
            session.refresh(existing)
            session.expunge(existing)
            return existing

    def delete_completion(self, habit_id: str, day: date, *, user_id: int) -> bool:
        """Remove the completion on ``day``; False when none existed."""
        with self.session_factory() as session:
            habit = self._owned(session, habit_id, user_id)
            if habit is None:
                return False
            existing = session.get(HabitCompletion, (habit_id, day))
            if existing is None:
                return False
            session.delete(existing)
            habit.updated_at = datetime.now(timezone.utc)
            session.add(habit)
            session.commit()
            return True

    def toggle_completion(self, habit_id: str, day: date, *, user_id: int) -> Optional[bool]:
        """Flip the completion on ``day``; returns the new state or None if not found."""
        with self.session_factory() as session:
            habit = self._owned(session, habit_id, user_id)
            if habit is None:
                return None

            existing = session.get(HabitCompletion, (habit_id, day))
            if existing is not None:
                session.delete(existing)
                completed = False
            else:
                session.add(HabitCompletion(habit_id=habit_id, completed_on=day))
                completed = True
            habit.updated_at = datetime.now(timezone.utc)
            session.add(habit)
            try:
                session.commit()
            except IntegrityError:
                # A concurrent toggle inserted the same (habit, day) first.
                session.rollback()
                logger.warning(
                    "Completion already recorded",
                    extra={"habit_id": habit_id, "day": day.isoformat()},
                )
                return True
            logger.info(
                "Completion toggled",
                extra={"habit_id": habit_id, "day": day.isoformat(), "completed": completed},
            )
            return completed
