"""Small helpers shared by the JSON controllers."""

from __future__ import annotations

from functools import wraps
from typing import Any, Optional

from flask import g, jsonify, request, session

from ..core.exceptions import AuthenticationError, ValidationError


def ok(payload: Optional[dict] = None, status: int = 200):
    body: dict[str, Any] = {"success": True}
    body.update(payload or {})
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def unchanged():
    """Response for input that was ignored without touching any state."""
    return ok({"changed": False})


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def int_value(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def number_value(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a number")
    return int(number) if number.is_integer() else number


def login_required(container):
    """Decorator factory: loads the TrackerSession for the cookie into g.tracker."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return fail("Please log in to continue.", 401)
            try:
                g.tracker = container.auth_service.load_session(
                    session["user_id"], session.get("workspace_id")
                )
            except AuthenticationError as e:
                session.clear()
                return fail(str(e), 401)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def remember_active_workspace(tracker) -> None:
    session["workspace_id"] = tracker.active_workspace_id
