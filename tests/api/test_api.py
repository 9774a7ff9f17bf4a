from __future__ import annotations

import json

import pytest

from src.attendly.attendly.main import create_app


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(overrides={"STORAGE_BACKEND": "memory", "SECRET_KEY": "test-secret", "TESTING": True})


@pytest.fixture
def client(app):
    return app.test_client()


def _register(client, username="ana", password="pw123"):
    return client.post(
        "/api/auth/register",
        json={"username": username, "password": password, "confirmPassword": password},
    )


def test_requires_login(client):
    res = client.get("/api/stats")
    assert res.status_code == 401
    assert res.get_json()["success"] is False


def test_register_login_logout(client):
    res = _register(client)
    assert res.status_code == 201
    body = res.get_json()
    assert body["user"]["name"] == "ana"
    assert body["activeWorkspaceId"]

    assert _register(client).status_code == 409
    assert client.post("/api/auth/logout").status_code == 200
    assert client.post("/api/auth/logout").status_code == 401

    assert client.post("/api/auth/login", json={"username": "ana", "password": "bad"}).status_code == 401
    assert client.post("/api/auth/login", json={"username": "ANA", "password": "pw123"}).status_code == 200


def test_attendance_flow(client):
    _register(client)

    unit = client.post("/api/schedule/units", json={"title": "Math", "dayOfWeek": 1, "startTime": "09:00"}).get_json()["unit"]
    assert unit["dayOfWeek"] == 1

    res = client.post("/api/attendance/toggle", json={"date": "2024-01-01", "unitId": unit["id"], "status": "PRESENT"})
    assert res.get_json()["status"] == "PRESENT"

    day = client.get("/api/attendance?date=2024-01-01").get_json()
    assert day["slots"] == [{"unit": unit, "status": "PRESENT"}]

    res = client.post("/api/leaves", json={"startDate": "2024-01-08", "endDate": "2024-01-08", "reason": "sick"})
    assert res.status_code == 201
    assert res.get_json()["leave"]["startDate"] == "2024-01-08"

    res = client.post("/api/leaves", json={"startDate": "2024-01-09", "endDate": ""})
    assert res.status_code == 200
    assert res.get_json()["changed"] is False

    leaves = client.get("/api/leaves").get_json()
    assert leaves["leaveDates"] == ["2024-01-08"]
    assert len(leaves["leaves"]) == 1

    stats = client.get("/api/stats").get_json()
    assert stats["overallPercentage"] == 100
    assert stats["standing"] == "HEALTHY"
    assert stats["subjects"] == [{"title": "Math", "percentage": 100, "totalClasses": 2}]

    res = client.get("/api/attendance.csv")
    assert res.mimetype == "text/csv"
    text = res.data.decode("utf-8-sig")
    assert text.splitlines()[0] == "date,unit_id,title,status,label,weight"
    assert len(text.splitlines()) == 3


def test_blank_unit_title_is_ignored(client):
    _register(client)
    res = client.post("/api/schedule/units", json={"title": " ", "dayOfWeek": 1})
    assert res.status_code == 200
    assert res.get_json()["changed"] is False
    assert client.get("/api/schedule?day=1").get_json()["units"] == []


def test_bad_inputs_are_rejected(client):
    _register(client)
    assert client.post("/api/attendance/toggle", json={"date": "2024-02-31", "unitId": "u", "status": "PRESENT"}).status_code == 400
    assert client.get("/api/schedule?day=monday").status_code == 400
    assert client.put("/api/workspace/target", json={"targetPercentage": 150}).status_code == 400
    assert client.post("/api/workspaces", json={"name": "Gym", "type": "CUSTOM", "customStatuses": []}).status_code == 400


def test_workspaces_are_private(app):
    ana = app.test_client()
    bob = app.test_client()
    ana_ws = _register(ana, "ana").get_json()["activeWorkspaceId"]
    _register(bob, "bob")

    res = bob.post(f"/api/workspaces/{ana_ws}/select")
    assert res.status_code == 403
    assert bob.post("/api/workspaces/nope/select").status_code == 404


def test_create_and_switch_workspace(client):
    first = _register(client).get_json()["activeWorkspaceId"]

    res = client.post("/api/workspaces", json={"name": "Sabha", "type": "SABHA"})
    assert res.status_code == 201
    created = res.get_json()["workspace"]
    assert created["unitName"] == "Session"

    listing = client.get("/api/workspaces").get_json()
    assert listing["activeWorkspaceId"] == created["id"]
    assert len(listing["workspaces"]) == 2

    client.post(f"/api/workspaces/{first}/select")
    assert client.get("/api/workspaces").get_json()["activeWorkspaceId"] == first


def test_statuses_and_target(client):
    _register(client)
    res = client.put("/api/workspace/statuses", json={"statuses": {"PRESENT": {"label": "Here", "weight": 1}}})
    assert res.get_json()["statuses"] == {"PRESENT": {"label": "Here", "weight": 1}}
    assert client.put("/api/workspace/target", json={"targetPercentage": 85}).get_json()["targetPercentage"] == 85
    assert client.get("/api/stats").get_json()["targetPercentage"] == 85

    res = client.put("/api/workspace/statuses", json={"statuses": {"PRESENT": 1}})
    assert res.status_code == 400
    assert client.put("/api/workspace/statuses", json={"statuses": {}}).status_code == 400


def test_events_and_reminders(client):
    _register(client)
    res = client.post("/api/events", json={"date": "2024-05-02", "title": "Finals", "type": "EXAM"})
    assert res.status_code == 201
    event_id = res.get_json()["event"]["id"]

    due = client.get("/api/events/reminders?today=2024-05-01").get_json()["events"]
    assert [e["id"] for e in due] == [event_id]

    assert client.post("/api/events/reminders/ack", json={"ids": [event_id]}).get_json()["marked"] == 1
    assert client.get("/api/events/reminders?today=2024-05-01").get_json()["events"] == []
    assert client.get("/api/events?date=2024-05-02").get_json()["events"][0]["hasNotified"] is True

    assert client.post("/api/events", json={"date": "2024-05-02", "title": "X", "type": "PARTY"}).status_code == 400
    assert client.delete(f"/api/events/{event_id}").get_json()["removed"] == event_id


def test_preferences(client):
    _register(client)
    prefs = client.get("/api/me/preferences").get_json()["preferences"]
    assert prefs["dangerThreshold"] == 60

    res = client.put("/api/me/preferences", json={"notifyExams": False, "dangerThreshold": 40, "startOfWeek": "SUNDAY"})
    prefs = res.get_json()["preferences"]
    assert prefs["notificationSettings"]["notifyExams"] is False
    assert prefs["startOfWeek"] == "SUNDAY"
    assert client.get("/api/stats").get_json()["dangerThreshold"] == 40

    assert client.put("/api/me/preferences", json={"startOfWeek": "FRIDAY"}).status_code == 400


def test_login_with_stored_custom_workspace_without_statuses(monkeypatch, tmp_path):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(overrides={"STORAGE_BACKEND": "json", "DATA_DIR": str(tmp_path), "SECRET_KEY": "test-secret"})
    client = app.test_client()
    user_id = _register(client).get_json()["user"]["id"]
    client.post("/api/auth/logout")

    path = tmp_path / "workspaces.json"
    docs = json.loads(path.read_text(encoding="utf-8"))
    docs.append(
        {
            "id": "gym1",
            "ownerId": user_id,
            "createdAt": "2024-01-01T08:00:00",
            "name": "Gym",
            "config": {"type": "CUSTOM", "unitName": "Activity", "statuses": {}},
            "targetPercentage": 75,
            "units": [],
            "attendance": [],
            "leaves": [],
            "events": [],
        }
    )
    path.write_text(json.dumps(docs), encoding="utf-8")

    assert client.post("/api/auth/login", json={"username": "ana", "password": "pw123"}).status_code == 200
    assert len(client.get("/api/workspaces").get_json()["workspaces"]) == 2
    client.post("/api/workspaces/gym1/select")
    stats = client.get("/api/stats").get_json()
    assert stats["overallPercentage"] == 0
    assert stats["standing"] == "NO_DATA"
