"""Workspace snapshot codec.

Uses the camelCase JSON layout of the stored snapshots (ownerId,
targetPercentage, dayOfWeek, unitId, ...). Loading is lenient about
missing collections and keeps orphaned attendance records.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..attendance.ledger import AttendanceLedger
from ..attendance.model import AttendanceRecord
from ..core.constants import DEFAULT_TARGET_PERCENTAGE
from ..core.enums import EventType, ScheduleType
from ..core.exceptions import ValidationError
from ..events.model import CalendarEvent
from ..leaves.model import LeaveRecord
from ..schedules.model import ScheduleConfig, ScheduleUnit
from ..schedules.timetable import Timetable
from ..statuses.registry import StatusRegistry
from ..statuses.templates import unit_name_for
from .model import Workspace


def workspace_to_dict(ws: Workspace) -> dict[str, Any]:
    return {
        "id": ws.id,
        "ownerId": ws.owner_id,
        "createdAt": ws.created_at,
        "name": ws.name,
        "config": {
            "type": ws.config.type.value,
            "unitName": ws.config.unit_name,
            "statuses": ws.config.statuses.to_mapping(),
        },
        "targetPercentage": ws.target_percentage,
        "units": [unit_to_dict(u) for u in ws.timetable.units()],
        "attendance": [{"date": r.date, "unitId": r.unit_id, "status": r.status} for r in ws.ledger],
        "leaves": [leave_to_dict(lv) for lv in ws.leaves],
        "events": [event_to_dict(e) for e in ws.events],
    }


def unit_to_dict(u: ScheduleUnit) -> dict[str, Any]:
    out: dict[str, Any] = {"id": u.id, "title": u.title, "dayOfWeek": u.day_of_week}
    if u.start_time is not None:
        out["startTime"] = u.start_time
    if u.end_time is not None:
        out["endTime"] = u.end_time
    return out


def leave_to_dict(lv: LeaveRecord) -> dict[str, Any]:
    return {"id": lv.id, "startDate": lv.start_date, "endDate": lv.end_date, "reason": lv.reason}


def event_to_dict(e: CalendarEvent) -> dict[str, Any]:
    out: dict[str, Any] = {"id": e.id, "date": e.date, "title": e.title, "type": e.type.value}
    if e.description is not None:
        out["description"] = e.description
    if e.has_notified:
        out["hasNotified"] = True
    return out


def _schedule_type(value: Any) -> ScheduleType:
    try:
        return ScheduleType(value or ScheduleType.ACADEMIC.value)
    except ValueError:
        raise ValidationError(f"Unknown schedule type: {value!r}")


def _event_type(value: Any) -> EventType:
    try:
        return EventType(value)
    except ValueError:
        return EventType.EVENT


def workspace_from_dict(data: Mapping[str, Any]) -> Workspace:
    cfg = data.get("config") or {}
    schedule_type = _schedule_type(cfg.get("type"))
    config = ScheduleConfig(
        type=schedule_type,
        unit_name=str(cfg.get("unitName") or unit_name_for(schedule_type)),
        statuses=StatusRegistry.from_mapping(cfg.get("statuses") or {}),
    )

    units = [
        ScheduleUnit(
            id=str(u["id"]),
            title=str(u.get("title", "")),
            day_of_week=int(u.get("dayOfWeek", 0)),
            start_time=u.get("startTime") or None,
            end_time=u.get("endTime") or None,
        )
        for u in data.get("units") or []
    ]
    records = [
        AttendanceRecord(date=str(r["date"]), unit_id=str(r["unitId"]), status=str(r["status"]))
        for r in data.get("attendance") or []
    ]
    leaves = [
        LeaveRecord(
            id=str(lv["id"]),
            start_date=str(lv.get("startDate", "")),
            end_date=str(lv.get("endDate", "")),
            reason=str(lv.get("reason") or ""),
        )
        for lv in data.get("leaves") or []
    ]
    events = [
        CalendarEvent(
            id=str(e["id"]),
            date=str(e.get("date", "")),
            title=str(e.get("title", "")),
            type=_event_type(e.get("type")),
            description=e.get("description"),
            has_notified=bool(e.get("hasNotified", False)),
        )
        for e in data.get("events") or []
    ]

    return Workspace(
        id=str(data["id"]),
        owner_id=str(data.get("ownerId", "")),
        name=str(data.get("name", "")),
        created_at=str(data.get("createdAt", "")),
        config=config,
        target_percentage=data.get("targetPercentage", DEFAULT_TARGET_PERCENTAGE),
        timetable=Timetable(units),
        ledger=AttendanceLedger(records),
        leaves=leaves,
        events=events,
    )
