from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..core.constants import DEFAULT_WORKSPACE_NAME
from ..core.enums import ScheduleType
from ..core.exceptions import AuthenticationError, DuplicateUsernameError, ValidationError
from ..workspaces.factory import create_workspace
from ..workspaces.repository import WorkspaceRepository
from ..workspaces.session import TrackerSession
from .model import UserPreferences, UserProfile
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: register, log in and rebuild sessions for a user."""

    def __init__(self, users: UserRepository, workspaces: WorkspaceRepository):
        self._users = users
        self._workspaces = workspaces

    def _session(self, user: UserProfile, active_workspace_id: Optional[str] = None) -> TrackerSession:
        return TrackerSession(
            user,
            self._workspaces.list_for_owner(user.id),
            active_workspace_id,
            workspace_store=self._workspaces,
            user_store=self._users,
        )

    def register(self, username: str, password: str, confirm_password: str) -> TrackerSession:
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Fill all fields.")
        if password != confirm_password:
            raise ValidationError("Passwords do not match.")
        if self._users.get_by_username(username):
            raise DuplicateUsernameError("Username already taken.")

        user = UserProfile(
            id=new_id("usr_"),
            name=username,
            username=username,
            password_hash=generate_password_hash(password),
            created_at=now_local().isoformat(timespec="seconds"),
            preferences=UserPreferences(),
        )
        self._users.create_user(user)

        default_ws = create_workspace(
            owner_id=user.id,
            name=DEFAULT_WORKSPACE_NAME,
            schedule_type=ScheduleType.ACADEMIC,
            target_percentage=user.preferences.default_target,
        )
        self._workspaces.save_for_owner(user.id, [default_ws])
        logger.info("user_registered", extra={"user_id": user.id})
        return self._session(user, default_ws.id)

    def authenticate(self, username: str, password: str) -> TrackerSession:
        if not (username or "").strip() or not password:
            raise ValidationError("Fill all fields.")

        user = self._users.get_by_username(username.strip())
        if not user:
            raise AuthenticationError("Invalid username or password.")

        try:
            ok = check_password_hash(user.password_hash, password)
        except Exception:
            # e.g. a corrupted or foreign hash format in an imported snapshot
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password.")
        return self._session(user)

    def load_session(self, user_id: str, active_workspace_id: Optional[str] = None) -> TrackerSession:
        user = self._users.get_by_id(user_id)
        if not user:
            raise AuthenticationError("Session expired, please log in again.")
        return self._session(user, active_workspace_id)
