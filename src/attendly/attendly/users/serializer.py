from __future__ import annotations

from typing import Any, Mapping

from ..core.constants import DEFAULT_DANGER_THRESHOLD, DEFAULT_TARGET_PERCENTAGE
from ..core.enums import WeekStart
from .model import UserPreferences, UserProfile


def preferences_to_dict(p: UserPreferences) -> dict[str, Any]:
    return {
        "notificationsEnabled": p.notifications_enabled,
        "notificationSettings": {
            "notifyExams": p.notify_exams,
            "notifyDeadlines": p.notify_deadlines,
            "notifyEvents": p.notify_events,
        },
        "startOfWeek": p.start_of_week.value,
        "defaultTarget": p.default_target,
        "dangerThreshold": p.danger_threshold,
    }


def preferences_from_dict(data: Mapping[str, Any]) -> UserPreferences:
    data = data or {}
    notif = data.get("notificationSettings") or {}
    try:
        week_start = WeekStart(data.get("startOfWeek") or WeekStart.MONDAY.value)
    except ValueError:
        week_start = WeekStart.MONDAY
    return UserPreferences(
        notifications_enabled=bool(data.get("notificationsEnabled", True)),
        notify_exams=bool(notif.get("notifyExams", True)),
        notify_deadlines=bool(notif.get("notifyDeadlines", True)),
        notify_events=bool(notif.get("notifyEvents", True)),
        start_of_week=week_start,
        default_target=data.get("defaultTarget", DEFAULT_TARGET_PERCENTAGE),
        danger_threshold=data.get("dangerThreshold", DEFAULT_DANGER_THRESHOLD),
    )


def user_to_dict(u: UserProfile) -> dict[str, Any]:
    return {
        "id": u.id,
        "name": u.name,
        "credentials": {"username": u.username, "passwordHash": u.password_hash},
        "preferences": preferences_to_dict(u.preferences),
        "createdAt": u.created_at,
    }


def user_from_dict(data: Mapping[str, Any]) -> UserProfile:
    creds = data.get("credentials") or {}
    return UserProfile(
        id=str(data["id"]),
        name=str(data.get("name") or creds.get("username", "")),
        username=str(creds.get("username", "")),
        password_hash=str(creds.get("passwordHash", "")),
        created_at=str(data.get("createdAt", "")),
        preferences=preferences_from_dict(data.get("preferences") or {}),
    )
