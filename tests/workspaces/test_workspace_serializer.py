from __future__ import annotations

import pytest

from src.attendly.attendly.core.enums import EventType, ScheduleType
from src.attendly.attendly.core.exceptions import ValidationError
from src.attendly.attendly.stats.aggregator import overall_percentage, subject_stats
from src.attendly.attendly.workspaces.serializer import workspace_from_dict, workspace_to_dict

SNAPSHOT = {
    "id": "ws1",
    "ownerId": "usr_1",
    "createdAt": "2024-01-01T08:00:00",
    "name": "Semester 2",
    "config": {
        "type": "ACADEMIC",
        "unitName": "Lecture",
        "statuses": {
            "PRESENT": {"label": "Present", "weight": 1},
            "ABSENT": {"label": "Absent", "weight": 0},
            "CANCELED": {"label": "Canceled", "weight": 1, "color": "#999"},
        },
    },
    "targetPercentage": 80,
    "units": [
        {"id": "u1", "title": "Math", "dayOfWeek": 1, "startTime": "09:00", "endTime": "10:00"},
        {"id": "u2", "title": "Physics", "dayOfWeek": 2},
    ],
    "attendance": [
        {"date": "2024-01-01", "unitId": "u1", "status": "PRESENT"},
        {"date": "2024-01-02", "unitId": "u2", "status": "ABSENT"},
        {"date": "2024-01-03", "unitId": "deleted-unit", "status": "PRESENT"},
        {"date": "2024-01-08", "unitId": "u1", "status": "CANCELED"},
    ],
    "leaves": [{"id": "lv1", "startDate": "2024-01-10", "endDate": "2024-01-12", "reason": "flu"}],
    "events": [
        {"id": "e1", "date": "2024-02-01", "title": "Midterm", "type": "EXAM", "description": "Room 4"},
        {"id": "e2", "date": "2024-02-02", "title": "Essay", "type": "SUBMISSION", "hasNotified": True},
    ],
}


def test_snapshot_round_trip():
    ws = workspace_from_dict(SNAPSHOT)
    assert workspace_to_dict(ws) == SNAPSHOT


def test_loaded_snapshot_with_orphans_aggregates():
    ws = workspace_from_dict(SNAPSHOT)
    assert ws.config.type == ScheduleType.ACADEMIC
    assert ws.target_percentage == 80
    assert len(ws.ledger) == 4
    assert overall_percentage(ws.ledger, ws.config.statuses) == 75
    assert [(s.title, s.percentage, s.total_classes) for s in subject_stats(ws.ledger, ws.timetable, ws.config.statuses)] == [
        ("Math", 100, 1),
        ("Physics", 0, 1),
    ]


def test_missing_collections_default_to_empty():
    ws = workspace_from_dict(
        {"id": "ws2", "ownerId": "usr_1", "name": "Sabha", "config": {"type": "SABHA", "statuses": {"PRESENT": {"weight": 1}}}}
    )
    assert ws.config.unit_name == "Session"
    assert ws.target_percentage == 75
    assert len(ws.timetable) == 0
    assert len(ws.ledger) == 0
    assert ws.leaves == []
    assert ws.events == []


def test_unknown_event_type_falls_back_to_event():
    data = dict(SNAPSHOT, events=[{"id": "e9", "date": "2024-02-01", "title": "Party", "type": "PARTY"}])
    ws = workspace_from_dict(data)
    assert ws.events[0].type == EventType.EVENT


def test_unknown_schedule_type_is_rejected():
    data = dict(SNAPSHOT, config={"type": "WEEKLY", "statuses": {"PRESENT": {"weight": 1}}})
    with pytest.raises(ValidationError):
        workspace_from_dict(data)


def test_custom_snapshot_without_statuses_loads():
    data = {
        "id": "ws3",
        "ownerId": "usr_1",
        "createdAt": "2024-01-01T08:00:00",
        "name": "Gym",
        "config": {"type": "CUSTOM", "unitName": "Activity", "statuses": {}},
        "targetPercentage": 75,
        "units": [{"id": "u1", "title": "Run", "dayOfWeek": 2}],
        "attendance": [{"date": "2024-01-02", "unitId": "u1", "status": "CUSTOM_0"}],
        "leaves": [],
        "events": [],
    }
    ws = workspace_from_dict(data)
    assert len(ws.config.statuses) == 0
    assert overall_percentage(ws.ledger, ws.config.statuses) == 0
    assert subject_stats(ws.ledger, ws.timetable, ws.config.statuses) == []
    assert workspace_to_dict(ws) == data
