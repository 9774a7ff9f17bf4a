from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import day_of_week, to_date_string, try_parse_date
from ..common.ids import new_id
from ..common.validators import is_blank
from ..core.constants import LEAVE_STATUS
from ..core.enums import EventType
from ..core.exceptions import ValidationError
from ..events.model import CalendarEvent
from ..leaves.model import LeaveRecord
from ..leaves.propagator import LeavePropagator
from ..schedules.model import ScheduleConfig, ScheduleUnit
from ..stats import aggregator
from ..stats.model import AttendanceSummary, SubjectStat
from ..statuses.registry import StatusRegistry
from .model import DaySlot, Workspace

logger = logging.getLogger(__name__)

PersistFn = Callable[[Workspace], None]


def _normalize_date(value: str) -> Optional[str]:
    parsed = try_parse_date(value)
    return to_date_string(parsed) if parsed else None


class WorkspaceService:
    """Use cases over one workspace: marking, leave, timetable and stats.

    Every accepted mutation is handed to `persist` right away. A failing
    persist is logged and the in-memory state is kept as is; rejected or
    no-op calls never persist.
    """

    def __init__(
        self,
        workspace: Workspace,
        *,
        persist: Optional[PersistFn] = None,
        propagator: Optional[LeavePropagator] = None,
    ):
        self._ws = workspace
        self._persist = persist
        self._propagator = propagator or LeavePropagator()

    @property
    def workspace(self) -> Workspace:
        return self._ws

    def _commit(self) -> None:
        if self._persist is None:
            return
        try:
            self._persist(self._ws)
        except Exception:
            logger.exception("workspace_persist_failed", extra={"workspace_id": self._ws.id})

    # Attendance

    def toggle_attendance(self, date: str, unit_id: str, status: str) -> Optional[AttendanceRecord]:
        """Toggle a mark; None when it was cleared or the date is not a date."""
        date_str = _normalize_date(date)
        if date_str is None:
            return None
        record = self._ws.ledger.toggle(date_str, unit_id, status)
        self._commit()
        return record

    def set_attendance(self, date: str, unit_id: str, status: str) -> Optional[AttendanceRecord]:
        date_str = _normalize_date(date)
        if date_str is None:
            return None
        record = self._ws.ledger.set(date_str, unit_id, status)
        self._commit()
        return record

    def day_sheet(self, date: str) -> list[DaySlot]:
        """Units scheduled on the weekday of `date`, each with its mark."""
        parsed = try_parse_date(date)
        if parsed is None:
            return []
        date_str = to_date_string(parsed)
        return [
            DaySlot(date=date_str, unit=u, status=self._ws.ledger.get(date_str, u.id))
            for u in self._ws.timetable.units_for_day(day_of_week(parsed))
        ]

    def apply_leave(self, start_date: str, end_date: str, reason: str = "") -> Optional[LeaveRecord]:
        leave = self._propagator.apply_leave(start_date, end_date, reason, self._ws.timetable, self._ws.ledger)
        if leave is None:
            return None
        self._ws.leaves.append(leave)
        self._commit()
        return leave

    def leave_dates(self) -> list[str]:
        return sorted({r.date for r in self._ws.ledger if r.status == LEAVE_STATUS})

    # Stats

    def overall_percentage(self) -> int:
        return aggregator.overall_percentage(self._ws.ledger, self._ws.config.statuses)

    def subject_stats(self) -> list[SubjectStat]:
        return aggregator.subject_stats(self._ws.ledger, self._ws.timetable, self._ws.config.statuses)

    def summary(self, *, danger_threshold: float) -> AttendanceSummary:
        return aggregator.summarize(
            self._ws.ledger,
            self._ws.timetable,
            self._ws.config.statuses,
            target_percentage=self._ws.target_percentage,
            danger_threshold=danger_threshold,
        )

    def export_rows(self) -> list[dict]:
        """Flat ledger rows for CSV export, orphaned records included."""
        statuses = self._ws.config.statuses
        rows: list[dict] = []
        for r in sorted(self._ws.ledger, key=lambda r: r.date):
            unit = self._ws.timetable.get(r.unit_id)
            definition = statuses.lookup(r.status)
            rows.append(
                {
                    "date": r.date,
                    "unit_id": r.unit_id,
                    "title": unit.title if unit else "",
                    "status": r.status,
                    "label": definition.label if definition else "",
                    "weight": definition.weight if definition else "",
                }
            )
        return rows

    # Timetable

    def units_for_day(self, day_of_week: int) -> list[ScheduleUnit]:
        return self._ws.timetable.units_for_day(day_of_week)

    def add_unit(
        self,
        *,
        title: str,
        day_of_week: int,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
    ) -> Optional[ScheduleUnit]:
        unit = self._ws.timetable.add_unit(
            title=title, day_of_week=day_of_week, start_time=start_time, end_time=end_time
        )
        if unit is not None:
            self._commit()
        return unit

    def edit_unit(
        self,
        unit_id: str,
        *,
        title: str,
        day_of_week: int,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
    ) -> Optional[ScheduleUnit]:
        unit = self._ws.timetable.edit_unit(
            unit_id, title=title, day_of_week=day_of_week, start_time=start_time, end_time=end_time
        )
        if unit is not None:
            self._commit()
        return unit

    def remove_unit(self, unit_id: str) -> bool:
        removed = self._ws.timetable.remove_unit(unit_id)
        if removed:
            self._commit()
        return removed

    # Configuration

    def replace_statuses(self, statuses: Mapping[str, Mapping]) -> StatusRegistry:
        registry = StatusRegistry.from_mapping(statuses)
        if len(registry) == 0:
            raise ValidationError("A schedule needs at least one status")
        self._ws.config = ScheduleConfig(
            type=self._ws.config.type,
            unit_name=self._ws.config.unit_name,
            statuses=registry,
        )
        self._commit()
        return registry

    def set_target_percentage(self, value: float) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 <= value <= 100:
            raise ValidationError("Target percentage must be between 0 and 100")
        self._ws.target_percentage = value
        self._commit()
        return value

    # Calendar

    def add_event(
        self,
        *,
        date: str,
        title: str,
        event_type: EventType = EventType.EVENT,
        description: Optional[str] = None,
    ) -> Optional[CalendarEvent]:
        parsed = try_parse_date(date)
        if parsed is None or is_blank(title):
            return None
        try:
            event_type = EventType(event_type)
        except ValueError:
            raise ValidationError(f"Unknown event type: {event_type!r}")

        event = CalendarEvent(
            id=new_id(),
            date=to_date_string(parsed),
            title=title.strip(),
            type=event_type,
            description=(description or "").strip() or None,
        )
        self._ws.events.append(event)
        self._commit()
        return event

    def remove_event(self, event_id: str) -> bool:
        before = len(self._ws.events)
        self._ws.events = [e for e in self._ws.events if e.id != event_id]
        if len(self._ws.events) == before:
            return False
        self._commit()
        return True

    def events_on(self, date: str) -> list[CalendarEvent]:
        return [e for e in self._ws.events if e.date == date]
