"""Profile read/update helpers."""

from __future__ import annotations

from typing import Any, Optional

from ..domain.repositories.user import UserRepository
from ..models.profile import UserProfile
from ..models.user import User

EDITABLE_FIELDS = ("nickname", "bio", "phone_number", "timezone", "theme", "language", "avatar")


def serialize_user(user: User) -> dict:
    return {
        "id": user.id,
        "externalId": user.external_id,
        "email": user.email,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }


def serialize_profile(profile: Optional[UserProfile]) -> Optional[dict]:
    if profile is None:
        return None
    return {
        "nickname": profile.nickname,
        "bio": profile.bio,
        "phoneNumber": profile.phone_number,
        "phoneVerified": profile.phone_verified,
        "timezone": profile.timezone,
        "theme": profile.theme,
        "language": profile.language,
        "avatar": profile.avatar,
        "updatedAt": profile.updated_at.isoformat() if profile.updated_at else None,
    }


def update_profile(users: UserRepository, *, user_id: int, changes: dict[str, Any]) -> UserProfile:
    """Apply the editable subset of ``changes`` to the user's profile.

    A changed phone number loses its verified status.
    """

    values = {key: value for key, value in changes.items() if key in EDITABLE_FIELDS}
    if "phone_number" in values:
        current = users.get_profile(user_id=user_id)
        if current is None or current.phone_number != values["phone_number"]:
            values["phone_verified"] = False
    return users.upsert_profile(user_id=user_id, values=values)
