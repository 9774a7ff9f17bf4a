from __future__ import annotations

from flask import Flask, g, session

from ..common.web import fail, json_body, login_required, number_value, ok, remember_active_workspace
from ..container import Container
from ..core.enums import WeekStart
from ..core.exceptions import ValidationError
from .serializer import preferences_to_dict

_FLAG_KEYS = {
    "notificationsEnabled": "notifications_enabled",
    "notifyExams": "notify_exams",
    "notifyDeadlines": "notify_deadlines",
    "notifyEvents": "notify_events",
}
_NUMBER_KEYS = {
    "defaultTarget": "default_target",
    "dangerThreshold": "danger_threshold",
}


def _preference_changes(data: dict) -> dict:
    changes: dict = {}
    for key, name in _FLAG_KEYS.items():
        if key in data:
            changes[name] = bool(data[key])
    for key, name in _NUMBER_KEYS.items():
        if key in data:
            changes[name] = number_value(data[key], key)
    if "startOfWeek" in data:
        try:
            changes["start_of_week"] = WeekStart(data["startOfWeek"])
        except ValueError:
            raise ValidationError("startOfWeek must be SUNDAY or MONDAY")
    return changes


def register(app: Flask, container: Container) -> None:
    auth = login_required(container)

    def _start(tracker):
        session.clear()
        session["user_id"] = tracker.user.id
        remember_active_workspace(tracker)
        return {
            "user": {"id": tracker.user.id, "name": tracker.user.name},
            "activeWorkspaceId": tracker.active_workspace_id,
        }

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        data = json_body()
        tracker = container.auth_service.register(
            str(data.get("username", "")),
            str(data.get("password", "")),
            str(data.get("confirmPassword", "")),
        )
        return ok(_start(tracker), 201)

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        data = json_body()
        tracker = container.auth_service.authenticate(str(data.get("username", "")), str(data.get("password", "")))
        return ok(_start(tracker))

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        if "user_id" not in session:
            return fail("Not logged in.", 401)
        session.clear()
        return ok()

    @app.route("/api/me/preferences", methods=["GET"], endpoint="preferences_get")
    @auth
    def preferences_get():
        return ok({"preferences": preferences_to_dict(g.tracker.user.preferences)})

    @app.route("/api/me/preferences", methods=["PUT"], endpoint="preferences_update")
    @auth
    def preferences_update():
        prefs = g.tracker.update_preferences(**_preference_changes(json_body()))
        return ok({"preferences": preferences_to_dict(prefs)})
