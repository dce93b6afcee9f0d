"""User model keyed by the identity provider's subject id."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .habit import Habit
    from .profile import UserProfile


class User(SQLModel, table=True):
    """Application user mirrored from the upstream identity provider."""

    __tablename__: ClassVar[str] = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    external_id: str = Field(nullable=False, unique=True, index=True, max_length=128)
    email: str = Field(default="", max_length=255)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    habits: list["Habit"] = Relationship(
        back_populates="user",
        sa_relationship=relationship(
            "Habit", back_populates="user", cascade="all, delete-orphan"
        ),
    )
    profile: Optional["UserProfile"] = Relationship(
        back_populates="user",
        sa_relationship=relationship("UserProfile", back_populates="user", uselist=False),
    )
