from __future__ import annotations

from typing import Optional

from ..database.json_store import JsonDocumentStore
from .model import UserProfile
from .repository import UserRepository
from .serializer import user_from_dict, user_to_dict


def _username_of(doc: dict) -> str:
    return str((doc.get("credentials") or {}).get("username", "")).lower()


class JsonUserRepository(UserRepository):
    def __init__(self, store: JsonDocumentStore):
        self._store = store

    def _all(self) -> list[dict]:
        return list(self._store.read(default=[]))

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        for d in self._all():
            if d.get("id") == user_id:
                return user_from_dict(d)
        return None

    def get_by_username(self, username: str) -> Optional[UserProfile]:
        key = (username or "").lower()
        for d in self._all():
            if _username_of(d) == key:
                return user_from_dict(d)
        return None

    def create_user(self, user: UserProfile) -> str:
        docs = self._all()
        docs.append(user_to_dict(user))
        self._store.write(docs)
        return user.id

    def update_user(self, user: UserProfile) -> bool:
        docs = self._all()
        for i, d in enumerate(docs):
            if d.get("id") == user.id:
                docs[i] = user_to_dict(user)
                self._store.write(docs)
                return True
        return False
