"""User, profile and verification code repository protocols."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol

from ...models.profile import UserProfile, VerificationCode
from ...models.user import User


class UserRepository(Protocol):
    """Persistence contract for users and their profiles."""

    def get_or_create(self, external_id: str, *, email: str = "") -> User:
        """Return the user mirrored from the identity provider, creating it if needed."""
        ...

    def get_by_external_id(self, external_id: str) -> Optional[User]:
        ...

    def get_profile(self, *, user_id: int) -> Optional[UserProfile]:
        ...

    def upsert_profile(self, *, user_id: int, values: dict[str, Any]) -> UserProfile:
        """Create or update the profile with the given column values."""
        ...


class VerificationCodeRepository(Protocol):
    """Persistence contract for phone verification codes."""

    def replace_code(self, code: VerificationCode) -> VerificationCode:
        """Delete the user's earlier codes of the same type and store ``code``."""
        ...

    def find_valid(
        self, *, user_id: int, code: str, code_type: str, now: datetime
    ) -> Optional[VerificationCode]:
        """Find an unverified, unexpired code."""
        ...

    def mark_verified(self, code_id: int) -> None:
        ...
