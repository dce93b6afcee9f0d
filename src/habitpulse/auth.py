"""Request authentication against the upstream identity proxy.

The identity provider itself lives outside this service; a trusted proxy in front
of it forwards the authenticated subject id in a request header (``X-User-Id`` by
default). The first request from a subject creates the local user row.
"""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar

from flask import current_app, g, jsonify, request

from .config import BaseConfig
from .extensions import get_session_factory
from .infra.repositories import SQLModelUserRepository
from .models.user import User

F = TypeVar("F", bound=Callable)

EMAIL_HEADER = "X-User-Email"


def _resolve_user() -> User | None:
    config: BaseConfig = current_app.config["HABITPULSE_CONFIG"]
    external_id = (request.headers.get(config.AUTH_HEADER) or "").strip()
    if not external_id:
        return None
    repo = SQLModelUserRepository(get_session_factory())
    return repo.get_or_create(external_id, email=request.headers.get(EMAIL_HEADER, ""))


def login_required(view: F) -> F:
    """Reject unauthenticated requests with 401 and expose ``g.user``."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        user = _resolve_user()
        if user is None:
            return jsonify({"error": "Unauthorized"}), 401
        g.user = user
        return view(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user() -> User:
    """Return the user attached by :func:`login_required`."""

    return g.user
