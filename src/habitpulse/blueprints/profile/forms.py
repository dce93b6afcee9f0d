"""Profile and phone verification payloads."""

from __future__ import annotations

from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ConfigDict, Field, field_validator

from ..common import FormModel


class ProfileForm(FormModel):
    """Editable profile fields; omitted keys are left untouched."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    nickname: Optional[str] = Field(default=None, max_length=64)
    bio: Optional[str] = Field(default=None, max_length=500)
    phone_number: Optional[str] = Field(default=None, max_length=20, alias="phoneNumber")
    timezone: Optional[str] = Field(default=None, max_length=64)
    theme: Optional[str] = Field(default=None, max_length=16)
    language: Optional[str] = Field(default=None, max_length=16)
    avatar: Optional[str] = Field(default=None, max_length=500)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value:
            try:
                ZoneInfo(value)
            except (ZoneInfoNotFoundError, ValueError) as exc:
                raise ValueError("Unknown timezone.") from exc
        return value

    def changes(self) -> dict:
        """Return only the fields present in the submitted payload."""

        return self.model_dump(include=self.model_fields_set)


class PhoneVerificationForm(FormModel):
    """Payload of the verify-phone endpoint."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    action: str = Field(default="")
    phone_number: str = Field(default="", alias="phoneNumber")
    code: str = Field(default="")


__all__ = ["PhoneVerificationForm", "ProfileForm"]
