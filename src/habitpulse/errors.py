"""JSON error handlers registered on the Flask app."""

from __future__ import annotations

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .exceptions import HabitNotFoundError, UserNotFoundError, VerificationError
from .logging_config import get_logger

logger = get_logger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Render domain and HTTP errors as ``{"error": ...}`` JSON bodies."""

    @app.errorhandler(HabitNotFoundError)
    def _habit_not_found(exc: HabitNotFoundError):
        return jsonify({"error": str(exc)}), 404

    @app.errorhandler(UserNotFoundError)
    def _user_not_found(exc: UserNotFoundError):
        return jsonify({"error": "User not found"}), 404

    @app.errorhandler(VerificationError)
    def _verification_failed(exc: VerificationError):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return jsonify({"error": exc.description}), exc.code or 500

    @app.errorhandler(Exception)
    def _unhandled(exc: Exception):
        logger.exception("Unhandled error while processing request")
        return jsonify({"error": "Internal server error"}), 500
