from __future__ import annotations

import pytest

from src.attendly.attendly.core.enums import ScheduleType
from src.attendly.attendly.core.exceptions import AuthenticationError, DuplicateUsernameError, ValidationError
from src.attendly.attendly.users.memory_user_repository import InMemoryUserRepository
from src.attendly.attendly.users.service import AuthService
from src.attendly.attendly.workspaces.memory_workspace_repository import InMemoryWorkspaceRepository


def _service():
    users = InMemoryUserRepository()
    workspaces = InMemoryWorkspaceRepository()
    return AuthService(users, workspaces), users, workspaces


def test_register_creates_user_and_default_workspace():
    auth, users, workspaces = _service()
    tracker = auth.register("ana", "secret1", "secret1")

    stored = users.get_by_username("ANA")
    assert stored is not None
    assert stored.password_hash != "secret1"

    ws = tracker.active_workspace()
    assert ws.name == "Main Schedule"
    assert ws.config.type == ScheduleType.ACADEMIC
    assert [w.id for w in workspaces.list_for_owner(stored.id)] == [ws.id]


def test_register_validation():
    auth, _, _ = _service()
    with pytest.raises(ValidationError):
        auth.register("", "pw", "pw")
    with pytest.raises(ValidationError):
        auth.register("ana", "pw", "other")


def test_duplicate_username_is_distinguishable():
    auth, users, _ = _service()
    auth.register("ana", "pw", "pw")
    with pytest.raises(DuplicateUsernameError):
        auth.register("Ana", "pw2", "pw2")
    assert users.get_by_username("ana") is not None


def test_authenticate():
    auth, _, _ = _service()
    created = auth.register("ana", "pw", "pw")

    tracker = auth.authenticate("ana", "pw")
    assert tracker.user.id == created.user.id
    assert tracker.active_workspace_id == created.active_workspace_id

    with pytest.raises(AuthenticationError):
        auth.authenticate("ana", "wrong")
    with pytest.raises(AuthenticationError):
        auth.authenticate("bob", "pw")


def test_load_session_keeps_selected_workspace():
    auth, _, _ = _service()
    tracker = auth.register("ana", "pw", "pw")
    gym = tracker.create_workspace("Gym", ScheduleType.SABHA)

    reloaded = auth.load_session(tracker.user.id, gym.id)
    assert reloaded.active_workspace_id == gym.id
    assert len(reloaded.workspaces()) == 2

    with pytest.raises(AuthenticationError):
        auth.load_session("usr_missing")
