"""Blueprint exports."""

from . import analytics, habits, health, profile

__all__ = [
    "analytics",
    "habits",
    "health",
    "profile",
]
