from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Workspace


class WorkspaceRepository(Protocol):
    """Storage port for workspace snapshots.

    Note (DIP): services depend on this interface, not on a concrete store.
    """

    def list_for_owner(self, owner_id: str) -> Sequence[Workspace]:
        raise NotImplementedError

    def get(self, workspace_id: str) -> Optional[Workspace]:
        raise NotImplementedError

    def save_for_owner(self, owner_id: str, workspaces: Sequence[Workspace]) -> None:
        """Replace everything stored for `owner_id` with `workspaces`.

        Workspaces whose owner_id differs are not written; other owners'
        data is left untouched.
        """

        raise NotImplementedError
