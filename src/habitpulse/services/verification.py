"""Phone number verification with short-lived numeric codes.

Delivery is pluggable: the default sender only writes the code to the
application log so local development works without an SMS gateway.
"""

from __future__ import annotations

import re
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Protocol

from ..domain.repositories.user import UserRepository, VerificationCodeRepository
from ..exceptions import VerificationError
from ..logging_config import get_logger
from ..models.profile import UserProfile, VerificationCode

logger = get_logger(__name__)

PHONE_CODE_TYPE = "phone"
CODE_LENGTH = 6
DEFAULT_TTL_MINUTES = 10

# Romanian mobile/landline numbers with an optional +40 / 0040 / 40 prefix.
ROMANIAN_PHONE_RE = re.compile(r"^(\+40|0040|40)?[27][0-9]{8}$")
_PREFIX_RE = re.compile(r"^(0040|\+40|40)")


class CodeSender(Protocol):
    """Delivers a verification code to a phone number."""

    def __call__(self, phone_number: str, code: str, expires_at: datetime) -> None:  # pragma: no cover - interface
        ...


def log_code_sender(phone_number: str, code: str, expires_at: datetime) -> None:
    """Development sender: log the code instead of texting it."""

    logger.info(
        "SMS verification code issued",
        extra={"phone_number": phone_number, "code": code, "expires_at": expires_at.isoformat()},
    )


def clean_phone_number(raw: str) -> str:
    return re.sub(r"\s", "", raw or "")


def normalize_phone_number(raw: str) -> str:
    """Validate a Romanian number and rewrite its prefix to ``+40``.

    Raises:
        VerificationError: when the number is not a valid Romanian number.
    """

    cleaned = clean_phone_number(raw)
    if not ROMANIAN_PHONE_RE.match(cleaned):
        raise VerificationError("Please enter a valid Romanian phone number (+40 format)")
    return _PREFIX_RE.sub("+40", cleaned)


def generate_code() -> str:
    """Return a random 6-digit code (100000-999999)."""

    return str(100000 + secrets.randbelow(900000))


def send_code(
    codes: VerificationCodeRepository,
    *,
    user_id: int,
    phone_number: str,
    sender: CodeSender = log_code_sender,
    ttl_minutes: int = DEFAULT_TTL_MINUTES,
    now: Optional[datetime] = None,
    code_factory: Callable[[], str] = generate_code,
) -> VerificationCode:
    """Issue a fresh code for ``phone_number``, replacing earlier phone codes."""

    formatted = normalize_phone_number(phone_number)
    now = now or datetime.now(timezone.utc)
    record = VerificationCode(
        user_id=user_id,
        code=code_factory(),
        type=PHONE_CODE_TYPE,
        phone_number=formatted,
        expires_at=now + timedelta(minutes=ttl_minutes),
    )
    record = codes.replace_code(record)
    sender(formatted, record.code, record.expires_at)
    logger.info("Verification code sent", extra={"user_id": user_id})
    return record


def verify_code(
    codes: VerificationCodeRepository,
    users: UserRepository,
    *,
    user_id: int,
    code: str,
    now: Optional[datetime] = None,
) -> UserProfile:
    """Confirm ``code`` and mark the profile's phone number as verified."""

    now = now or datetime.now(timezone.utc)
    record = codes.find_valid(
        user_id=user_id, code=(code or "").strip(), code_type=PHONE_CODE_TYPE, now=now
    )
    if record is None or record.id is None:
        logger.warning("Verification code rejected", extra={"user_id": user_id})
        raise VerificationError("Invalid or expired verification code")

    codes.mark_verified(record.id)
    profile = users.upsert_profile(
        user_id=user_id,
        values={"phone_verified": True, "phone_number": record.phone_number},
    )
    logger.info("Phone number verified", extra={"user_id": user_id})
    return profile


__all__ = [
    "CodeSender",
    "PHONE_CODE_TYPE",
    "generate_code",
    "log_code_sender",
    "normalize_phone_number",
    "send_code",
    "verify_code",
]
