from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .database.json_store import JsonDocumentStore
from .users.json_user_repository import JsonUserRepository
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService
from .workspaces.json_workspace_repository import JsonWorkspaceRepository
from .workspaces.memory_workspace_repository import InMemoryWorkspaceRepository
from .workspaces.mysql_workspace_repository import MySQLWorkspaceRepository
from .workspaces.repository import WorkspaceRepository

STORAGE_BACKENDS = ("json", "mysql", "memory")


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    workspaces_repo: WorkspaceRepository

    auth_service: AuthService


def _build_repositories(
    storage_backend: str,
    *,
    data_dir: Optional[str],
    db_config: Optional[dict],
) -> tuple[UserRepository, WorkspaceRepository]:
    if storage_backend == "memory":
        return InMemoryUserRepository(), InMemoryWorkspaceRepository()

    if storage_backend == "json":
        base = Path(data_dir or "data")
        return (
            JsonUserRepository(JsonDocumentStore(base / "users.json")),
            JsonWorkspaceRepository(JsonDocumentStore(base / "workspaces.json")),
        )

    if storage_backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
        return MySQLUserRepository(conn), MySQLWorkspaceRepository(conn)

    raise ValueError(f"Unknown STORAGE_BACKEND {storage_backend!r}; expected one of {STORAGE_BACKENDS}")


def build_container(
    *,
    storage_backend: str = "json",
    data_dir: Optional[str] = None,
    db_config: Optional[dict] = None,
) -> Container:
    users_repo, workspaces_repo = _build_repositories(storage_backend, data_dir=data_dir, db_config=db_config)
    auth_service = AuthService(users_repo, workspaces_repo)

    return Container(
        users_repo=users_repo,
        workspaces_repo=workspaces_repo,
        auth_service=auth_service,
    )
