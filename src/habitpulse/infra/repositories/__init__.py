"""Concrete repository implementations using SQLModel."""

from .habit import SQLModelHabitRepository
from .user import SQLModelUserRepository, SQLModelVerificationCodeRepository

__all__ = [
    "SQLModelHabitRepository",
    "SQLModelUserRepository",
    "SQLModelVerificationCodeRepository",
]
