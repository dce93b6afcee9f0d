"""
Exception classes for HabitPulse.
"""


class HabitPulseError(Exception):
    """Base exception for all HabitPulse errors."""
    pass


class ConfigurationError(HabitPulseError):
    """Raised when the application is wired incorrectly at runtime."""
    pass


class HabitNotFoundError(HabitPulseError):
    """Raised when a habit does not exist or belongs to another user."""

    def __init__(self, habit_id: str):
        super().__init__("Habit not found")
        self.habit_id = habit_id


class UserNotFoundError(HabitPulseError):
    """Raised when the authenticated user has no local record."""
    pass


class VerificationError(HabitPulseError):
    """Raised when a phone verification step is rejected."""
    pass
