from __future__ import annotations

import logging
from dataclasses import fields, replace
from datetime import date
from typing import Iterable, Mapping, Optional, Sequence

from ..core.enums import ScheduleType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..events.model import CalendarEvent
from ..events.reminders import events_due_for_reminder
from ..users.model import UserPreferences, UserProfile
from ..users.repository import UserRepository
from .factory import create_workspace
from .model import Workspace
from .repository import WorkspaceRepository
from .service import WorkspaceService

logger = logging.getLogger(__name__)

_PREFERENCE_FIELDS = {f.name for f in fields(UserPreferences)}


class TrackerSession:
    """A logged-in user with their workspaces and the active one.

    Passed around explicitly instead of living in global state. Every
    accepted change is written through to the stores.
    """

    def __init__(
        self,
        user: UserProfile,
        workspaces: Sequence[Workspace],
        active_workspace_id: Optional[str] = None,
        *,
        workspace_store: WorkspaceRepository,
        user_store: UserRepository,
    ):
        self._user = user
        # never hold another owner's workspace, whatever the store returned
        self._workspaces = [ws for ws in workspaces if ws.owner_id == user.id]
        self._workspace_store = workspace_store
        self._user_store = user_store

        ids = {ws.id for ws in self._workspaces}
        if active_workspace_id not in ids:
            active_workspace_id = self._workspaces[0].id if self._workspaces else None
        self._active_id = active_workspace_id

    @property
    def user(self) -> UserProfile:
        return self._user

    @property
    def active_workspace_id(self) -> Optional[str]:
        return self._active_id

    def workspaces(self) -> list[Workspace]:
        return list(self._workspaces)

    def active_workspace(self) -> Optional[Workspace]:
        for ws in self._workspaces:
            if ws.id == self._active_id:
                return ws
        return None

    def service(self) -> WorkspaceService:
        ws = self.active_workspace()
        if ws is None:
            raise NotFoundError("No active workspace")
        return WorkspaceService(ws, persist=self._persist)

    def create_workspace(
        self,
        name: str,
        schedule_type: ScheduleType = ScheduleType.ACADEMIC,
        custom_statuses: Optional[Iterable[Mapping]] = None,
    ) -> Optional[Workspace]:
        ws = create_workspace(
            owner_id=self._user.id,
            name=name,
            schedule_type=schedule_type,
            custom_statuses=custom_statuses,
            target_percentage=self._user.preferences.default_target,
        )
        if ws is None:
            return None

        self._workspaces.append(ws)
        self._active_id = ws.id
        self._persist(ws)
        logger.info("workspace_created", extra={"workspace_id": ws.id, "owner_id": self._user.id})
        return ws

    def select_workspace(self, workspace_id: str) -> Workspace:
        for ws in self._workspaces:
            if ws.id == workspace_id:
                self._active_id = ws.id
                return ws

        if self._workspace_store.get(workspace_id) is not None:
            raise AuthorizationError("Workspace belongs to another user")
        raise NotFoundError("Workspace not found")

    def update_preferences(self, **changes) -> UserPreferences:
        unknown = set(changes) - _PREFERENCE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown preference(s): {', '.join(sorted(unknown))}")
        for name in ("default_target", "danger_threshold"):
            value = changes.get(name)
            if value is not None and (isinstance(value, bool) or not 0 <= value <= 100):
                raise ValidationError(f"{name} must be between 0 and 100")

        prefs = replace(self._user.preferences, **changes)
        self._user = replace(self._user, preferences=prefs)
        if not self._user_store.update_user(self._user):
            logger.warning("preferences_not_saved", extra={"user_id": self._user.id})
        return prefs

    def reminders(self, *, today: Optional[date] = None) -> list[CalendarEvent]:
        ws = self.active_workspace()
        if ws is None:
            return []
        return events_due_for_reminder(ws.events, self._user.preferences, today=today)

    def mark_events_notified(self, event_ids: Iterable[str]) -> int:
        ws = self.active_workspace()
        if ws is None:
            return 0

        wanted = set(event_ids)
        marked = 0
        updated: list[CalendarEvent] = []
        for e in ws.events:
            if e.id in wanted and not e.has_notified:
                e = replace(e, has_notified=True)
                marked += 1
            updated.append(e)
        if marked:
            ws.events = updated
            self._persist(ws)
        return marked

    def _persist(self, changed: Workspace) -> None:
        # Fire-and-forget: a failed write does not undo the in-memory change.
        try:
            self._workspace_store.save_for_owner(self._user.id, self._workspaces)
        except Exception:
            logger.exception("workspace_persist_failed", extra={"workspace_id": changed.id, "owner_id": self._user.id})
