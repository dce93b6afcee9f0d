"""SQLModel implementations of the user, profile and verification repositories."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from ...models.profile import UserProfile, VerificationCode
from ...models.user import User
from ..database import SessionFactory


class SQLModelUserRepository:
    """SQLModel-based user/profile repository."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_external_id(self, external_id: str) -> Optional[User]:
        with self.session_factory() as session:
            user = session.exec(select(User).where(User.external_id == external_id)).first()
            if user:
                session.expunge(user)
            return user

    def get_or_create(self, external_id: str, *, email: str = "") -> User:
        """Return the user mirrored from the identity provider, creating it if needed."""
        existing = self.get_by_external_id(external_id)
        if existing is not None:
            return existing
        try:
            with self.session_factory() as session:
                user = User(external_id=external_id, email=email)
                session.add(user)
                session.commit()
                session.refresh(user)
                session.expunge(user)
                return user
        except IntegrityError:
            # Lost a race with another request creating the same user.
            user = self.get_by_external_id(external_id)
            if user is None:
                raise
            return user

    def get_profile(self, *, user_id: int) -> Optional[UserProfile]:
        with self.session_factory() as session:
            profile = session.exec(
                select(UserProfile).where(UserProfile.user_id == user_id)
            ).first()
            if profile:
                session.expunge(profile)
            return profile

    def upsert_profile(self, *, user_id: int, values: dict[str, Any]) -> UserProfile:
        """Create or update the profile with the given column values."""
        with self.session_factory() as session:
            profile = session.exec(
                select(UserProfile).where(UserProfile.user_id == user_id)
            ).first()
            if profile is None:
                profile = UserProfile(user_id=user_id)
            for key, value in values.items():
                setattr(profile, key, value)
            profile.updated_at = datetime.now(timezone.utc)
            session.add(profile)
            session.commit()
            session.refresh(profile)
            session.expunge(profile)
            return profile


class SQLModelVerificationCodeRepository:
    """SQLModel-based verification code repository."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def replace_code(self, code: VerificationCode) -> VerificationCode:
        """Delete the user's earlier codes of the same type and store ``code``."""
        with self.session_factory() as session:
            session.execute(
                delete(VerificationCode)
                .where(VerificationCode.user_id == code.user_id)
                .where(VerificationCode.type == code.type)
            )
            session.add(code)
            session.commit()
            session.refresh(code)
            session.expunge(code)
            return code

    def find_valid(
        self, *, user_id: int, code: str, code_type: str, now: datetime
    ) -> Optional[VerificationCode]:
        """Find an unverified, unexpired code."""
        with self.session_factory() as session:
            statement = (
                select(VerificationCode)
                .where(VerificationCode.user_id == user_id)
                .where(VerificationCode.code == code)
                .where(VerificationCode.type == code_type)
                .where(VerificationCode.verified == False)  # noqa: E712 - SQLAlchemy comparison
                .where(VerificationCode.expires_at > now)
            )
            obj = session.exec(statement).first()
            if obj:
                session.expunge(obj)
            return obj

    def mark_verified(self, code_id: int) -> None:
        with self.session_factory() as session:
            obj = session.get(VerificationCode, code_id)
            if obj is not None:
                obj.verified = True
                session.add(obj)
                session.commit()
