from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..attendance.ledger import AttendanceLedger
from ..core.constants import DEFAULT_TARGET_PERCENTAGE
from ..events.model import CalendarEvent
from ..leaves.model import LeaveRecord
from ..schedules.model import ScheduleConfig, ScheduleUnit
from ..schedules.timetable import Timetable


@dataclass
class Workspace:
    """One user's timetable, ledger, leave log and calendar.

    Exclusively owned by `owner_id`; nothing in here is shared.
    """

    id: str
    owner_id: str
    name: str
    created_at: str
    config: ScheduleConfig
    target_percentage: float = DEFAULT_TARGET_PERCENTAGE
    timetable: Timetable = field(default_factory=Timetable)
    ledger: AttendanceLedger = field(default_factory=AttendanceLedger)
    leaves: list[LeaveRecord] = field(default_factory=list)
    events: list[CalendarEvent] = field(default_factory=list)


@dataclass(frozen=True)
class DaySlot:
    """A unit scheduled on a given date, with whatever is marked for it."""

    date: str
    unit: ScheduleUnit
    status: Optional[str]
