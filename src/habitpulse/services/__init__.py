"""Service module exports."""

from . import analytics, habits, profile, verification

__all__ = [
    "analytics",
    "habits",
    "profile",
    "verification",
]
