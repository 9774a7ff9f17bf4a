from __future__ import annotations

from flask import Flask, g, request

from ..common.datetime_utils import try_parse_date
from ..common.web import json_body, login_required, ok, unchanged
from ..container import Container
from ..core.enums import EventType
from ..core.exceptions import ValidationError
from ..workspaces.serializer import event_to_dict


def register(app: Flask, container: Container) -> None:
    auth = login_required(container)

    @app.route("/api/events", methods=["GET"], endpoint="events_list")
    @auth
    def events_list():
        svc = g.tracker.service()
        date_str = request.args.get("date")
        events = svc.events_on(date_str) if date_str else svc.workspace.events
        return ok({"events": [event_to_dict(e) for e in events]})

    @app.route("/api/events", methods=["POST"], endpoint="events_add")
    @auth
    def events_add():
        data = json_body()
        event = g.tracker.service().add_event(
            date=str(data.get("date") or ""),
            title=str(data.get("title") or ""),
            event_type=data.get("type") or EventType.EVENT.value,
            description=data.get("description"),
        )
        if event is None:
            return unchanged()
        return ok({"event": event_to_dict(event)}, 201)

    @app.route("/api/events/<event_id>", methods=["DELETE"], endpoint="events_remove")
    @auth
    def events_remove(event_id: str):
        if not g.tracker.service().remove_event(event_id):
            return unchanged()
        return ok({"removed": event_id})

    @app.route("/api/events/reminders", methods=["GET"], endpoint="events_reminders")
    @auth
    def events_reminders():
        today = None
        if request.args.get("today"):
            today = try_parse_date(request.args["today"])
            if today is None:
                raise ValidationError("today must be YYYY-MM-DD")
        return ok({"events": [event_to_dict(e) for e in g.tracker.reminders(today=today)]})

    @app.route("/api/events/reminders/ack", methods=["POST"], endpoint="events_reminders_ack")
    @auth
    def events_reminders_ack():
        ids = json_body().get("ids")
        if not isinstance(ids, list):
            raise ValidationError("ids must be a list")
        return ok({"marked": g.tracker.mark_events_notified(str(i) for i in ids)})
