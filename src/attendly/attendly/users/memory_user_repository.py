from __future__ import annotations

from typing import Optional

from .model import UserProfile
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self._by_id: dict[str, UserProfile] = {}

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        return self._by_id.get(user_id)

    def get_by_username(self, username: str) -> Optional[UserProfile]:
        key = (username or "").lower()
        for u in self._by_id.values():
            if u.username.lower() == key:
                return u
        return None

    def create_user(self, user: UserProfile) -> str:
        self._by_id[user.id] = user
        return user.id

    def update_user(self, user: UserProfile) -> bool:
        if user.id not in self._by_id:
            return False
        self._by_id[user.id] = user
        return True
