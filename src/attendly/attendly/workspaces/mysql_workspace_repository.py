from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_column, fetchall, fetchone, load_json_column
from .model import Workspace
from .repository import WorkspaceRepository
from .serializer import workspace_from_dict, workspace_to_dict


class MySQLWorkspaceRepository(WorkspaceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_owner(self, owner_id: str) -> Sequence[Workspace]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT payload
                FROM workspaces
                WHERE owner_id=%s
                ORDER BY position ASC
                """,
                (owner_id,),
            )
            return [workspace_from_dict(load_json_column(r["payload"])) for r in fetchall(cur)]

    def get(self, workspace_id: str) -> Optional[Workspace]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT payload FROM workspaces WHERE workspace_id=%s", (workspace_id,))
            r = fetchone(cur)
            if not r:
                return None
            return workspace_from_dict(load_json_column(r["payload"]))

    def save_for_owner(self, owner_id: str, workspaces: Sequence[Workspace]) -> None:
        rows = [
            (ws.id, owner_id, position, dump_json_column(workspace_to_dict(ws)))
            for position, ws in enumerate(w for w in workspaces if w.owner_id == owner_id)
        ]
        # Single transaction: readers see either the old or the new set.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM workspaces WHERE owner_id=%s", (owner_id,))
            if rows:
                cur.executemany(
                    """
                    INSERT INTO workspaces(workspace_id, owner_id, position, payload)
                    VALUES(%s,%s,%s,%s)
                    """,
                    rows,
                )
