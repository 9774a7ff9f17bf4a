from __future__ import annotations

from typing import Optional, Sequence

from ..database.json_store import JsonDocumentStore
from .model import Workspace
from .repository import WorkspaceRepository
from .serializer import workspace_from_dict, workspace_to_dict


class JsonWorkspaceRepository(WorkspaceRepository):
    """All workspaces of all owners in a single JSON list."""

    def __init__(self, store: JsonDocumentStore):
        self._store = store

    def _all(self) -> list[dict]:
        return list(self._store.read(default=[]))

    def list_for_owner(self, owner_id: str) -> Sequence[Workspace]:
        return [workspace_from_dict(d) for d in self._all() if d.get("ownerId") == owner_id]

    def get(self, workspace_id: str) -> Optional[Workspace]:
        for d in self._all():
            if d.get("id") == workspace_id:
                return workspace_from_dict(d)
        return None

    def save_for_owner(self, owner_id: str, workspaces: Sequence[Workspace]) -> None:
        others = [d for d in self._all() if d.get("ownerId") != owner_id]
        mine = [workspace_to_dict(ws) for ws in workspaces if ws.owner_id == owner_id]
        self._store.write(others + mine)
