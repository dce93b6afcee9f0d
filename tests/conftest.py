"""Pytest configuration and shared fixtures for HabitPulse tests.

Provides an isolated in-memory database, repository/session factories, data
factories and a Flask test client whose reference clock is pinned.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable

import pytest

from habitpulse import create_app
from habitpulse.clock import fixed_clock
from habitpulse.config import TestConfig
from habitpulse.extensions import set_clock
from habitpulse.infra.database import create_db_engine, create_session_factory, init_database
from habitpulse.infra.repositories import (
    SQLModelHabitRepository,
    SQLModelUserRepository,
    SQLModelVerificationCodeRepository,
)
from habitpulse.models import Habit, HabitCompletion, User

# Monday; the Sunday-based week is 2024-01-14 .. 2024-01-20.
TODAY = date(2024, 1, 15)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    """Keep data dir and database out of the working tree."""

    monkeypatch.setenv("HABITPULSE_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("HABITPULSE_DATABASE_URL", raising=False)
    monkeypatch.delenv("HABITPULSE_WEEK_START", raising=False)
    monkeypatch.delenv("HABITPULSE_TIMEZONE", raising=False)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def db_engine():
    """Create an isolated in-memory SQLite database for each test."""

    engine = create_db_engine(TestConfig())
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Session factory matching what repositories expect."""

    return create_session_factory(db_engine)


@pytest.fixture
def habit_repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def user_repo(session_factory) -> SQLModelUserRepository:
    return SQLModelUserRepository(session_factory)


@pytest.fixture
def code_repo(session_factory) -> SQLModelVerificationCodeRepository:
    return SQLModelVerificationCodeRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def user(user_repo) -> User:
    """Create a default user for scoping data."""

    return user_repo.get_or_create("user_tester", email="tester@example.com")


@pytest.fixture
def habit_factory(session_factory, user):
    """Factory for creating habits with completion days already recorded."""

    def _create_habit(
        name: str = "Test Habit",
        category: str = "Health",
        difficulty: str = "Medium",
        days: Iterable[date] = (),
        owner: User | None = None,
    ) -> Habit:
        owner = owner or user
        with session_factory() as session:
            habit = Habit(user_id=owner.id, name=name, category=category, difficulty=difficulty)
            session.add(habit)
            session.flush()
            for day in days:
                session.add(HabitCompletion(habit_id=habit.id, completed_on=day))
            session.commit()
            session.refresh(habit)
            list(habit.completions)
            session.expunge(habit)
            return habit

    return _create_habit


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def today() -> date:
    """The pinned reference date used by the app fixture."""

    return TODAY


@pytest.fixture
def app():
    app = create_app("testing")
    set_clock(app, fixed_clock(TODAY))
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-User-Id": "user_alice", "X-User-Email": "alice@example.com"}
