"""HabitPulse application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask

from .config import BaseConfig, DevConfig, TestConfig

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths registered on every app."""

    yield "habitpulse.blueprints.habits"
    yield "habitpulse.blueprints.analytics"
    yield "habitpulse.blueprints.profile"
    yield "habitpulse.blueprints.health"


def create_app(config_name: str | None = None, config: BaseConfig | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_obj = config or _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["HABITPULSE_CONFIG"] = config_obj
    # Keep habit payloads in insertion order.
    app.json.sort_keys = False

    from .logging_config import setup_logging

    setup_logging(config_obj)

    # Imported lazily so importing the package does not register SQLModel tables.
    from . import extensions
    from .errors import register_error_handlers

    extensions.init_app(app)
    register_error_handlers(app)
    _register_blueprints(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
