"""Repository protocol definitions for domain layer."""

from .habit import HabitRepository
from .user import UserRepository, VerificationCodeRepository

__all__ = [
    "HabitRepository",
    "UserRepository",
    "VerificationCodeRepository",
]
