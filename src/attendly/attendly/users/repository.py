from __future__ import annotations

from typing import Optional, Protocol

from .model import UserProfile


class UserRepository(Protocol):
    """Repository interface for user profiles.

    Note (DIP): the service layer depends on this interface, not on a
    concrete store. Username lookups are case-insensitive.
    """

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[UserProfile]:
        raise NotImplementedError

    def create_user(self, user: UserProfile) -> str:
        """Store a new profile; returns its id."""

        raise NotImplementedError

    def update_user(self, user: UserProfile) -> bool:
        raise NotImplementedError
