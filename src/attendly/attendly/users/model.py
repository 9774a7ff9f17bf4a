from __future__ import annotations

from dataclasses import dataclass, field

from ..core.constants import DEFAULT_DANGER_THRESHOLD, DEFAULT_TARGET_PERCENTAGE
from ..core.enums import WeekStart


@dataclass(frozen=True)
class UserPreferences:
    notifications_enabled: bool = True
    notify_exams: bool = True
    notify_deadlines: bool = True
    notify_events: bool = True
    start_of_week: WeekStart = WeekStart.MONDAY
    default_target: float = DEFAULT_TARGET_PERCENTAGE
    danger_threshold: float = DEFAULT_DANGER_THRESHOLD


@dataclass(frozen=True)
class UserProfile:
    """Domain entity: the owner of a set of workspaces.

    Note: Plain data object (no storage code). Only the password hash is kept.
    """

    id: str
    name: str
    username: str
    password_hash: str
    created_at: str
    preferences: UserPreferences = field(default_factory=UserPreferences)
