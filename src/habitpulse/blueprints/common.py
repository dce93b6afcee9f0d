"""Request helpers shared by the API blueprints."""

from __future__ import annotations

from typing import Any, TypeVar

from flask import abort, request
from pydantic import BaseModel, ValidationError

from ..constants.habits import MAX_WINDOW_DAYS

FormT = TypeVar("FormT", bound="FormModel")


def structure_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by top-level field name."""

    structured: dict[str, list[str]] = {}
    for error in exc.errors(include_url=False):
        loc = error.get("loc", ())
        key = str(loc[0]) if loc else "__root__"
        message = error.get("msg", "Invalid value")
        # pydantic prefixes errors raised from validators with "Value error, ".
        structured.setdefault(key, []).append(message.removeprefix("Value error, "))
    return structured


class FormModel(BaseModel):
    """Base for request payload models."""

    def validation_errors(self) -> dict[str, list[str]]:
        """Return validation errors for the current payload."""

        try:
            type(self).model_validate(self.model_dump())
        except ValidationError as exc:
            return structure_errors(exc)
        return {}

    @classmethod
    def from_payload(cls: type[FormT], payload: dict[str, Any]) -> tuple[FormT | None, dict[str, list[str]]]:
        """Validate ``payload``; returns ``(form, {})`` or ``(None, errors)``."""

        try:
            return cls.model_validate(payload), {}
        except ValidationError as exc:
            return None, structure_errors(exc)


def json_payload() -> dict[str, Any]:
    """Return the JSON object body, or an empty dict for missing/invalid bodies."""

    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def window_days_arg(name: str, default: int) -> int:
    """Read a ``days`` style query argument constrained to 1..MAX_WINDOW_DAYS."""

    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        abort(400, description=f"'{name}' must be an integer")
    if not 1 <= value <= MAX_WINDOW_DAYS:
        abort(400, description=f"'{name}' must be between 1 and {MAX_WINDOW_DAYS}")
    return value
