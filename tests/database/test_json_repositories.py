from __future__ import annotations

import json

from src.attendly.attendly.database.json_store import JsonDocumentStore
from src.attendly.attendly.users.json_user_repository import JsonUserRepository
from src.attendly.attendly.users.model import UserPreferences, UserProfile
from src.attendly.attendly.workspaces.factory import create_workspace
from src.attendly.attendly.workspaces.json_workspace_repository import JsonWorkspaceRepository


def test_store_reads_default_when_missing(tmp_path):
    store = JsonDocumentStore(tmp_path / "nested" / "doc.json")
    assert store.read(default=[]) == []
    store.write([{"a": 1}])
    assert store.read(default=[]) == [{"a": 1}]
    assert list(store.path.parent.iterdir()) == [store.path]


def test_user_repository(tmp_path):
    repo = JsonUserRepository(JsonDocumentStore(tmp_path / "users.json"))
    user = UserProfile(id="usr_1", name="Ana", username="Ana", password_hash="h", created_at="2024-01-01T00:00:00")
    repo.create_user(user)

    assert repo.get_by_username("ana") == user
    assert repo.get_by_id("usr_1") == user
    assert repo.get_by_id("usr_2") is None

    updated = UserProfile(
        id="usr_1",
        name="Ana",
        username="Ana",
        password_hash="h",
        created_at="2024-01-01T00:00:00",
        preferences=UserPreferences(notify_events=False, default_target=80),
    )
    assert repo.update_user(updated) is True
    assert repo.get_by_id("usr_1").preferences.default_target == 80

    raw = json.loads((tmp_path / "users.json").read_text(encoding="utf-8"))
    assert raw[0]["credentials"] == {"username": "Ana", "passwordHash": "h"}
    assert raw[0]["preferences"]["notificationSettings"]["notifyEvents"] is False


def test_workspace_repository_keeps_other_owners(tmp_path):
    repo = JsonWorkspaceRepository(JsonDocumentStore(tmp_path / "workspaces.json"))
    a = create_workspace(owner_id="usr_a", name="A")
    b = create_workspace(owner_id="usr_b", name="B")
    repo.save_for_owner("usr_a", [a])
    repo.save_for_owner("usr_b", [b])

    a.ledger.set("2024-01-01", "u1", "PRESENT")
    repo.save_for_owner("usr_a", [a])

    assert [w.id for w in repo.list_for_owner("usr_b")] == [b.id]
    loaded = repo.get(a.id)
    assert loaded.ledger.get("2024-01-01", "u1") == "PRESENT"
    assert repo.get("missing") is None
