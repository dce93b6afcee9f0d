"""SQLModel table exports."""

from .habit import Habit, HabitCompletion
from .profile import UserProfile, VerificationCode
from .user import User

__all__ = [
    "Habit",
    "HabitCompletion",
    "User",
    "UserProfile",
    "VerificationCode",
]
