from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ScheduleType
from ..statuses.registry import StatusRegistry


@dataclass(frozen=True)
class ScheduleUnit:
    """A recurring unit (class/session) bound to one weekday (0 = Sunday)."""

    id: str
    title: str
    day_of_week: int
    start_time: Optional[str] = None
    end_time: Optional[str] = None


@dataclass
class ScheduleConfig:
    """Template family, unit label and status set of a workspace.

    A stored config may carry an empty status set; new and replaced
    status sets are checked for emptiness where they are built.
    """

    type: ScheduleType
    unit_name: str
    statuses: StatusRegistry
