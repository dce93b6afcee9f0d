"""Per-user profile and phone verification records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserProfile(SQLModel, table=True):
    """Editable profile details; one row per user."""

    __tablename__: ClassVar[str] = "user_profile"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, unique=True, index=True)
    nickname: Optional[str] = Field(default=None, max_length=64)
    bio: Optional[str] = Field(default=None, max_length=500)
    phone_number: Optional[str] = Field(default=None, max_length=20)
    phone_verified: bool = Field(default=False, nullable=False)
    timezone: Optional[str] = Field(default=None, max_length=64)
    theme: Optional[str] = Field(default=None, max_length=16)
    language: Optional[str] = Field(default=None, max_length=16)
    avatar: Optional[str] = Field(default=None, max_length=500)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)

    user: "User" = Relationship(
        back_populates="profile",
        sa_relationship=relationship("User", back_populates="profile"),
    )


class VerificationCode(SQLModel, table=True):
    """Short-lived code sent to confirm ownership of a phone number."""

    __tablename__: ClassVar[str] = "verification_code"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    code: str = Field(nullable=False, max_length=6)
    type: str = Field(default="phone", nullable=False, max_length=16, index=True)
    phone_number: Optional[str] = Field(default=None, max_length=20)
    expires_at: datetime = Field(nullable=False)
    verified: bool = Field(default=False, nullable=False)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)
