from __future__ import annotations

from typing import Optional, Sequence

from .model import Workspace
from .repository import WorkspaceRepository
from .serializer import workspace_from_dict, workspace_to_dict


class InMemoryWorkspaceRepository(WorkspaceRepository):
    """Keeps serialized snapshots, so loads never alias live objects."""

    def __init__(self):
        self._docs: list[dict] = []
        self.save_count = 0

    def list_for_owner(self, owner_id: str) -> Sequence[Workspace]:
        return [workspace_from_dict(d) for d in self._docs if d["ownerId"] == owner_id]

    def get(self, workspace_id: str) -> Optional[Workspace]:
        for d in self._docs:
            if d["id"] == workspace_id:
                return workspace_from_dict(d)
        return None

    def save_for_owner(self, owner_id: str, workspaces: Sequence[Workspace]) -> None:
        others = [d for d in self._docs if d["ownerId"] != owner_id]
        self._docs = others + [workspace_to_dict(ws) for ws in workspaces if ws.owner_id == owner_id]
        self.save_count += 1
