from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.web import fail
from .container import build_container
from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateUsernameError,
    NotFoundError,
    ValidationError,
)
from .database.bootstrap import apply_schema
from .events.controller import register as register_events
from .users.controller import register as register_users
from .workspaces.controller import register as register_workspaces

logger = logging.getLogger(__name__)

_SETTING_NAMES = ("SECRET_KEY", "DEBUG", "TESTING", "LOG_LEVEL", "STORAGE_BACKEND", "DATA_DIR", "DB_CONFIG", "AUTO_INIT_DB")


def _load_settings(overrides: Optional[dict[str, Any]]) -> dict[str, Any]:
    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    settings = {name: getattr(module, name) for name in _SETTING_NAMES if hasattr(module, name)}
    settings["SETTINGS_MODULE"] = settings_module
    settings.update(overrides or {})
    return settings


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e):
        return fail(str(e), 400)

    @app.errorhandler(DuplicateUsernameError)
    def _duplicate(e):
        return fail(str(e), 409)

    @app.errorhandler(AuthenticationError)
    def _authentication(e):
        return fail(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _authorization(e):
        return fail(str(e), 403)

    @app.errorhandler(NotFoundError)
    def _not_found(e):
        return fail(str(e), 404)

    @app.errorhandler(500)
    def _internal(e):
        logger.error("unhandled_error", exc_info=getattr(e, "original_exception", None))
        return fail("Internal server error", 500)


def create_app(overrides: Optional[dict[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    settings = _load_settings(overrides)

    logging.basicConfig(level=str(settings.get("LOG_LEVEL", "INFO")).upper())

    app = Flask(__name__)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))

    storage_backend = str(settings.get("STORAGE_BACKEND", "json"))
    db_config = settings.get("DB_CONFIG") or {}

    if storage_backend == "mysql" and bool(settings.get("AUTO_INIT_DB", False)):
        apply_schema(db_config)

    container = build_container(
        storage_backend=storage_backend,
        data_dir=settings.get("DATA_DIR"),
        db_config=db_config,
    )
    app.extensions["attendly"] = container

    register_users(app, container)
    register_workspaces(app, container)
    register_events(app, container)
    _register_error_handlers(app)

    app.logger.info(
        "attendly started: settings=%s storage=%s", settings["SETTINGS_MODULE"], storage_backend
    )
    return app
