from __future__ import annotations

from typing import Optional

import mysql.connector

from ..core.exceptions import DuplicateUsernameError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_column, fetchone, load_json_column
from .model import UserProfile
from .repository import UserRepository
from .serializer import preferences_from_dict, preferences_to_dict

_COLUMNS = "user_id, name, username, password_hash, preferences, created_at"


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _row_to_user(r: dict) -> UserProfile:
        return UserProfile(
            id=str(r["user_id"]),
            name=r["name"],
            username=r["username"],
            password_hash=r["password_hash"],
            created_at=str(r["created_at"]),
            preferences=preferences_from_dict(load_json_column(r["preferences"]) or {}),
        )

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            r = fetchone(cur)
            return self._row_to_user(r) if r else None

    def get_by_username(self, username: str) -> Optional[UserProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE username_key=%s", ((username or "").lower(),))
            r = fetchone(cur)
            return self._row_to_user(r) if r else None

    def create_user(self, user: UserProfile) -> str:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(user_id, name, username, username_key, password_hash, preferences, created_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        user.id,
                        user.name,
                        user.username,
                        user.username.lower(),
                        user.password_hash,
                        dump_json_column(preferences_to_dict(user.preferences)),
                        user.created_at,
                    ),
                )
        except mysql.connector.IntegrityError as e:
            # unique username_key lost a race with another registration
            raise DuplicateUsernameError("Username already taken.") from e
        return user.id

    def update_user(self, user: UserProfile) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET name=%s, password_hash=%s, preferences=%s
                WHERE user_id=%s
                """,
                (user.name, user.password_hash, dump_json_column(preferences_to_dict(user.preferences)), user.id),
            )
            return cur.rowcount > 0
