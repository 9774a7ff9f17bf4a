"""Built-in status sets for new workspaces."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from ..core.enums import ScheduleType
from ..core.exceptions import ValidationError
from .model import StatusDefinition
from .registry import StatusRegistry

SCHEDULE_TEMPLATES: dict[ScheduleType, dict] = {
    ScheduleType.ACADEMIC: {
        "unit_name": "Lecture",
        "statuses": {
            "PRESENT": {"label": "Present", "weight": 1},
            "ABSENT": {"label": "Absent", "weight": 0},
            "BUNK": {"label": "Bunk", "weight": 0},
            "LEAVE": {"label": "Leave", "weight": 1},
            "CANCELED": {"label": "Canceled", "weight": 1},
            "HOLIDAY": {"label": "Holiday", "weight": 1},
        },
    },
    ScheduleType.SABHA: {
        "unit_name": "Session",
        "statuses": {
            "PRESENT": {"label": "Attended", "weight": 1},
            "ABSENT": {"label": "Missed", "weight": 0},
        },
    },
    ScheduleType.CUSTOM: {
        "unit_name": "Activity",
        "statuses": {},
    },
}


def unit_name_for(schedule_type: ScheduleType) -> str:
    return SCHEDULE_TEMPLATES[schedule_type]["unit_name"]


def registry_for(
    schedule_type: ScheduleType,
    custom_statuses: Optional[Iterable[Mapping]] = None,
) -> StatusRegistry:
    """Build a fresh registry for a new workspace.

    CUSTOM statuses come from the user as (label, weight, color) entries and
    are keyed CUSTOM_0, CUSTOM_1, ...
    """
    if schedule_type != ScheduleType.CUSTOM:
        return StatusRegistry.from_mapping(SCHEDULE_TEMPLATES[schedule_type]["statuses"])

    definitions = [
        StatusDefinition(
            key=f"CUSTOM_{i}",
            label=str(s.get("label") or f"Status {i + 1}"),
            weight=s.get("weight", 0),
            color=s.get("color"),
        )
        for i, s in enumerate(custom_statuses or [])
    ]
    if not definitions:
        raise ValidationError("A custom workspace needs at least one status")
    return StatusRegistry(definitions)
