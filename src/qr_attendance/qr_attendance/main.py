from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .classes.controller import register as register_classes
from .common.web import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .reports.controller import register as register_reports
from .sessions.controller import register as register_sessions
from .subjects.controller import register as register_subjects
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _settings_dict(module) -> dict[str, Any]:
    return {name: getattr(module, name) for name in dir(module) if name.isupper()}


def create_app(overrides: Optional[dict[str, Any]] = None, **container_kwargs) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = _settings_dict(importlib.import_module(settings_module))
    settings.update(overrides or {})
    app.config.update(settings)
    app.secret_key = settings["SECRET_KEY"]

    logging.basicConfig(
        level=str(settings.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("settings=%s backend=%s", settings_module, settings.get("STORAGE_BACKEND"))

    if settings.get("STORAGE_BACKEND") == "mysql" and settings.get("AUTO_INIT_DB"):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(settings["DB_CONFIG"], schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(settings["DB_CONFIG"])))

    container = build_container(config=settings, **container_kwargs)
    app.extensions["qr_attendance"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_classes(app, container)
    register_subjects(app, container)
    register_sessions(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    if not app.config.get("TESTING") and float(settings.get("EXPIRY_POLL_SECONDS") or 0) > 0:
        container.poller.start()

    return app


def get_container(app: Flask) -> Container:
    return app.extensions["qr_attendance"]
