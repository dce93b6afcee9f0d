"""Database and clock wiring for the Flask application."""

from __future__ import annotations

from datetime import date

from flask import Flask, current_app

from .clock import Clock, system_clock
from .config import BaseConfig
from .exceptions import ConfigurationError
from .infra.database import SessionFactory, create_db_engine, create_session_factory, init_database

EXTENSION_KEY = "habitpulse"


def init_app(app: Flask) -> None:
    """Create the engine, schema, session factory and clock for ``app``."""

    config: BaseConfig = app.config["HABITPULSE_CONFIG"]
    engine = create_db_engine(config)
    init_database(engine)

    state = app.extensions.setdefault(EXTENSION_KEY, {})
    state["engine"] = engine
    state["session_factory"] = create_session_factory(engine)
    state.setdefault("today", system_clock(config.TIMEZONE))


def _state() -> dict:
    state = current_app.extensions.get(EXTENSION_KEY)
    if state is None:
        raise ConfigurationError("HabitPulse extensions were not initialised on this app")
    return state


def get_engine():
    """Return the engine bound to the current app."""

    return _state()["engine"]


def get_session_factory() -> SessionFactory:
    """Return the session factory bound to the current app."""

    return _state()["session_factory"]


def set_clock(app: Flask, clock: Clock) -> None:
    """Replace the reference clock; tests pin "today" with this."""

    app.extensions.setdefault(EXTENSION_KEY, {})["today"] = clock


def today() -> date:
    """Return the reference "today" for the current request."""

    clock = _state()["today"]
    return clock()
