"""Helpers shared by the feature controllers."""

from __future__ import annotations

import dataclasses
import logging
from enum import Enum
from functools import wraps

from flask import Flask, jsonify, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    PersistenceError,
    RedemptionError,
    SessionNotFoundError,
)

logger = logging.getLogger(__name__)

_HIDDEN_FIELDS = {"password"}


def to_json(obj):
    """Dataclasses (and lists of them) as plain JSON-ready dicts."""
    if isinstance(obj, (list, tuple)):
        return [to_json(o) for o in obj]
    if dataclasses.is_dataclass(obj):
        out = {}
        for f in dataclasses.fields(obj):
            if f.name in _HIDDEN_FIELDS:
                continue
            out[f.name] = to_json(getattr(obj, f.name))
        return out
    if isinstance(obj, dict):
        return {k: to_json(v) for k, v in obj.items()}
    if isinstance(obj, Enum):
        return obj.value
    return obj


def ok(message: str = "", status: int = 200, **data):
    return jsonify({"success": True, "message": message, **{k: to_json(v) for k, v in data.items()}}), status


def fail(message: str, status: int = 400, **data):
    return jsonify({"success": False, "message": message, **data}), status


def current_user_id() -> str:
    return str(session["user_id"])


def current_role() -> Role:
    return Role(session.get("role"))


def role_required(*roles: Role):
    """Reject requests without a login, or from a role not listed."""

    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return fail("Please log in to continue", 401)
            if allowed and session.get("role") not in allowed:
                return fail("You do not have permission", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(RedemptionError)
    def _redemption(e: RedemptionError):
        status = 404 if isinstance(e, SessionNotFoundError) else 400
        return fail(str(e), status, code=e.code)

    @app.errorhandler(AuthenticationError)
    def _authentication(e):
        return fail(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _authorization(e):
        return fail(str(e), 403)

    @app.errorhandler(PersistenceError)
    def _persistence(e):
        logger.error("Persistence failure: %s", e)
        return fail("Could not save data, please retry", 503)

    @app.errorhandler(DomainError)
    def _domain(e):
        return fail(str(e), 400)

    @app.errorhandler(Exception)
    def _unexpected(e):
        if isinstance(e, HTTPException):
            return fail(e.description or e.name, e.code or 500)
        logger.exception("Unhandled error")
        if bool(app.config.get("DEBUG", False)):
            return fail(f"System error: {e}", 500)
        return fail("System error", 500)
