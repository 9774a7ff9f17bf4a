from __future__ import annotations

import csv
import io

from flask import Flask, current_app, g, request

from ..common.datetime_utils import today_local, to_date_string, try_parse_date
from ..common.web import (
    int_value,
    json_body,
    login_required,
    number_value,
    ok,
    remember_active_workspace,
    unchanged,
)
from ..container import Container
from ..core.enums import ScheduleType
from ..core.exceptions import ValidationError
from .model import Workspace
from .serializer import leave_to_dict, unit_to_dict

_EXPORT_FIELDS = ["date", "unit_id", "title", "status", "label", "weight"]


def _workspace_brief(ws: Workspace, active_id) -> dict:
    return {
        "id": ws.id,
        "name": ws.name,
        "type": ws.config.type.value,
        "unitName": ws.config.unit_name,
        "targetPercentage": ws.target_percentage,
        "statuses": ws.config.statuses.to_mapping(),
        "active": ws.id == active_id,
    }


def _schedule_type(value) -> ScheduleType:
    try:
        return ScheduleType(value or ScheduleType.ACADEMIC.value)
    except ValueError:
        raise ValidationError(f"Unknown schedule type: {value!r}")


def _require_date(value, field_name: str = "date") -> str:
    parsed = try_parse_date(value)
    if parsed is None:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")
    return to_date_string(parsed)


def _unit_fields(data: dict) -> dict:
    return {
        "title": str(data.get("title") or ""),
        "day_of_week": int_value(data.get("dayOfWeek"), "dayOfWeek"),
        "start_time": data.get("startTime"),
        "end_time": data.get("endTime"),
    }


def register(app: Flask, container: Container) -> None:
    auth = login_required(container)

    # Workspaces

    @app.route("/api/workspaces", methods=["GET"], endpoint="workspaces_list")
    @auth
    def workspaces_list():
        tracker = g.tracker
        return ok(
            {
                "workspaces": [_workspace_brief(ws, tracker.active_workspace_id) for ws in tracker.workspaces()],
                "activeWorkspaceId": tracker.active_workspace_id,
            }
        )

    @app.route("/api/workspaces", methods=["POST"], endpoint="workspaces_create")
    @auth
    def workspaces_create():
        data = json_body()
        ws = g.tracker.create_workspace(
            str(data.get("name") or ""),
            _schedule_type(data.get("type")),
            data.get("customStatuses") or [],
        )
        if ws is None:
            return unchanged()
        remember_active_workspace(g.tracker)
        return ok({"workspace": _workspace_brief(ws, ws.id)}, 201)

    @app.route("/api/workspaces/<workspace_id>/select", methods=["POST"], endpoint="workspaces_select")
    @auth
    def workspaces_select(workspace_id: str):
        ws = g.tracker.select_workspace(workspace_id)
        remember_active_workspace(g.tracker)
        return ok({"workspace": _workspace_brief(ws, ws.id)})

    @app.route("/api/workspace/statuses", methods=["PUT"], endpoint="workspace_statuses")
    @auth
    def workspace_statuses():
        statuses = json_body().get("statuses")
        if not isinstance(statuses, dict):
            raise ValidationError("statuses must be an object keyed by status")
        registry = g.tracker.service().replace_statuses(statuses)
        return ok({"statuses": registry.to_mapping()})

    @app.route("/api/workspace/target", methods=["PUT"], endpoint="workspace_target")
    @auth
    def workspace_target():
        value = number_value(json_body().get("targetPercentage"), "targetPercentage")
        return ok({"targetPercentage": g.tracker.service().set_target_percentage(value)})

    # Timetable

    @app.route("/api/schedule", methods=["GET"], endpoint="schedule_day")
    @auth
    def schedule_day():
        day = int_value(request.args.get("day"), "day")
        return ok({"day": day, "units": [unit_to_dict(u) for u in g.tracker.service().units_for_day(day)]})

    @app.route("/api/schedule/units", methods=["POST"], endpoint="schedule_add_unit")
    @auth
    def schedule_add_unit():
        unit = g.tracker.service().add_unit(**_unit_fields(json_body()))
        if unit is None:
            return unchanged()
        return ok({"unit": unit_to_dict(unit)}, 201)

    @app.route("/api/schedule/units/<unit_id>", methods=["PUT"], endpoint="schedule_edit_unit")
    @auth
    def schedule_edit_unit(unit_id: str):
        unit = g.tracker.service().edit_unit(unit_id, **_unit_fields(json_body()))
        if unit is None:
            return unchanged()
        return ok({"unit": unit_to_dict(unit)})

    @app.route("/api/schedule/units/<unit_id>", methods=["DELETE"], endpoint="schedule_remove_unit")
    @auth
    def schedule_remove_unit(unit_id: str):
        if not g.tracker.service().remove_unit(unit_id):
            return unchanged()
        return ok({"removed": unit_id})

    # Attendance

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_day")
    @auth
    def attendance_day():
        date_str = _require_date(request.args.get("date") or to_date_string(today_local()))
        svc = g.tracker.service()
        return ok(
            {
                "date": date_str,
                "slots": [{"unit": unit_to_dict(s.unit), "status": s.status} for s in svc.day_sheet(date_str)],
            }
        )

    @app.route("/api/attendance/toggle", methods=["POST"], endpoint="attendance_toggle")
    @auth
    def attendance_toggle():
        data = json_body()
        date_str = _require_date(data.get("date"))
        unit_id = str(data.get("unitId") or "")
        status = str(data.get("status") or "")
        if not unit_id or not status:
            raise ValidationError("unitId and status are required")

        record = g.tracker.service().toggle_attendance(date_str, unit_id, status)
        return ok({"date": date_str, "unitId": unit_id, "status": record.status if record else None})

    @app.route("/api/attendance.csv", methods=["GET"], endpoint="attendance_csv")
    @auth
    def attendance_csv():
        svc = g.tracker.service()
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=_EXPORT_FIELDS)
        writer.writeheader()
        for row in svc.export_rows():
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        filename = f"attendance_{svc.workspace.id}_{today_local().strftime('%Y%m%d')}.csv"
        return current_app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/leaves", methods=["GET"], endpoint="leaves_list")
    @auth
    def leaves_list():
        svc = g.tracker.service()
        return ok(
            {
                "leaves": [leave_to_dict(lv) for lv in svc.workspace.leaves],
                "leaveDates": svc.leave_dates(),
            }
        )

    @app.route("/api/leaves", methods=["POST"], endpoint="leaves_apply")
    @auth
    def leaves_apply():
        data = json_body()
        leave = g.tracker.service().apply_leave(
            str(data.get("startDate") or ""),
            str(data.get("endDate") or ""),
            str(data.get("reason") or ""),
        )
        if leave is None:
            return unchanged()
        return ok({"leave": leave_to_dict(leave)}, 201)

    # Stats

    @app.route("/api/stats", methods=["GET"], endpoint="stats")
    @auth
    def stats():
        threshold = g.tracker.user.preferences.danger_threshold
        summary = g.tracker.service().summary(danger_threshold=threshold)
        return ok(
            {
                "overallPercentage": summary.overall_percentage,
                "targetPercentage": summary.target_percentage,
                "dangerThreshold": summary.danger_threshold,
                "totalRecords": summary.total_records,
                "countedRecords": summary.counted_records,
                "standing": summary.standing.value,
                "subjects": [
                    {"title": s.title, "percentage": s.percentage, "totalClasses": s.total_classes}
                    for s in summary.subjects
                ],
            }
        )
