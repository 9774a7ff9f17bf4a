from __future__ import annotations

from enum import Enum


class ScheduleType(str, Enum):
    """Workspace template family."""

    ACADEMIC = "ACADEMIC"
    SABHA = "SABHA"
    CUSTOM = "CUSTOM"


class EventType(str, Enum):
    """Calendar milestone category."""

    EXAM = "EXAM"
    DEADLINE = "DEADLINE"
    EVENT = "EVENT"
    SUBMISSION = "SUBMISSION"


class AttendanceStanding(str, Enum):
    """Where the overall percentage sits relative to target and danger threshold."""

    NO_DATA = "NO_DATA"
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"
    HEALTHY = "HEALTHY"


class WeekStart(str, Enum):
    SUNDAY = "SUNDAY"
    MONDAY = "MONDAY"
