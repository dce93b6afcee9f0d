"""Reference clock used to decide which calendar day is "today"."""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable
from zoneinfo import ZoneInfo

Clock = Callable[[], date]


def local_today(tz_name: str = "UTC") -> date:
    """Return the current calendar date in ``tz_name``."""

    return datetime.now(ZoneInfo(tz_name)).date()


def system_clock(tz_name: str = "UTC") -> Clock:
    """Build a clock reading the wall time in ``tz_name``."""

    def _today() -> date:
        return local_today(tz_name)

    return _today


def fixed_clock(day: date) -> Clock:
    """Build a clock that always returns ``day``."""

    return lambda: day
