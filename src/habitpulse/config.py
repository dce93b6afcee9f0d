"""Application configuration objects and helpers."""

from __future__ import annotations

import calendar
import os
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()

_WEEK_STARTS = {
    "sunday": calendar.SUNDAY,
    "monday": calendar.MONDAY,
}


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int, *, minimum: int = 1) -> int:
    """Read a positive integer from the environment."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}.")
    return value


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitPulse"
    DB_FILENAME = "habitpulse.db"
    ENV_PREFIX = "HABITPULSE_"

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("HABITPULSE_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("HABITPULSE_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("HABITPULSE_DATABASE_URL", self._build_sqlite_url())
        self.TIMEZONE = os.getenv("HABITPULSE_TIMEZONE", "UTC")
        self.WEEK_START = os.getenv("HABITPULSE_WEEK_START", "sunday").strip().lower()
        self.HEATMAP_WINDOW_DAYS = _env_int("HABITPULSE_HEATMAP_WINDOW_DAYS", 84)
        self.CATEGORY_WINDOW_DAYS = _env_int("HABITPULSE_CATEGORY_WINDOW_DAYS", 30)
        self.VERIFICATION_CODE_TTL_MINUTES = _env_int(
            "HABITPULSE_VERIFICATION_CODE_TTL_MINUTES", 10
        )
        self.AUTH_HEADER = os.getenv("HABITPULSE_AUTH_HEADER", "X-User-Id")

        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("HABITPULSE_SECRET_KEY must be set in non-dev mode.")
        if self.WEEK_START not in _WEEK_STARTS:
            raise ValueError(
                f"HABITPULSE_WEEK_START must be one of {sorted(_WEEK_STARTS)}, got {self.WEEK_START!r}."
            )
        try:
            ZoneInfo(self.TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown HABITPULSE_TIMEZONE {self.TIMEZONE!r}.") from exc

    @property
    def first_weekday(self) -> int:
        """Return the `calendar` weekday constant weeks start on."""

        return _WEEK_STARTS[self.WEEK_START]

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("HABITPULSE_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; defaults to an in-memory database."""

    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        if "HABITPULSE_DATABASE_URL" not in os.environ:
            self.DATABASE_URL = "sqlite://"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        from sqlalchemy.pool import StaticPool

        options = super().sqlalchemy_engine_options()
        if self.DATABASE_URL == "sqlite://":
            options["poolclass"] = StaticPool
        return options
