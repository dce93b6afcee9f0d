"""Profile and phone verification routes."""

from __future__ import annotations

from flask import current_app, jsonify

from ...auth import current_user, login_required
from ...config import BaseConfig
from ...extensions import get_session_factory
from ...infra.repositories import SQLModelUserRepository, SQLModelVerificationCodeRepository
from ...services import profile as profile_service
from ...services import verification
from ..common import json_payload
from . import bp
from .forms import PhoneVerificationForm, ProfileForm

SENDER_EXTENSION_KEY = "code_sender"


def _users() -> SQLModelUserRepository:
    return SQLModelUserRepository(get_session_factory())


def _code_sender() -> verification.CodeSender:
    state = current_app.extensions.get("habitpulse", {})
    sender = state.get(SENDER_EXTENSION_KEY)
    if callable(sender):
        return sender
    return verification.log_code_sender


@bp.get("/profile")
@login_required
def get_profile():
    """Return the user and their profile (null until first saved)."""

    user = current_user()
    profile = _users().get_profile(user_id=user.id)
    return jsonify(
        {
            "user": profile_service.serialize_user(user),
            "profile": profile_service.serialize_profile(profile),
        }
    )


@bp.post("/profile")
@login_required
def update_profile():
    """Create or update the user's profile."""

    form, errors = ProfileForm.from_payload(json_payload())
    if form is None:
        return jsonify({"error": "Invalid profile", "fields": errors}), 400

    profile = profile_service.update_profile(
        _users(), user_id=current_user().id, changes=form.changes()
    )
    return jsonify({"profile": profile_service.serialize_profile(profile)})


@bp.post("/verify-phone")
@login_required
def verify_phone():
    """Send a verification code (``action=send``) or confirm one (``action=verify``)."""

    form, errors = PhoneVerificationForm.from_payload(json_payload())
    if form is None:
        return jsonify({"error": "Invalid request", "fields": errors}), 400

    config: BaseConfig = current_app.config["HABITPULSE_CONFIG"]
    codes = SQLModelVerificationCodeRepository(get_session_factory())
    user = current_user()

    if form.action == "send":
        verification.send_code(
            codes,
            user_id=user.id,
            phone_number=form.phone_number,
            sender=_code_sender(),
            ttl_minutes=config.VERIFICATION_CODE_TTL_MINUTES,
        )
        return jsonify({"message": "Verification code sent!", "success": True})

    if form.action == "verify":
        verification.verify_code(codes, _users(), user_id=user.id, code=form.code)
        return jsonify({"message": "Phone number verified successfully!", "success": True})

    return jsonify({"error": "Invalid action"}), 400
