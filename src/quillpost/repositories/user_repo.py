"""Data access helpers for user accounts."""
from __future__ import annotations

from sqlalchemy import select

from quillpost.models.user import User

from .base import Repository

__all__ = ["UserRepository"]


class UserRepository(Repository):
    """Lookups and writes for ``User`` rows."""

    def find_user_by_id(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def find_user_by_username(self, username: str) -> User | None:
        result = self.session.execute(select(User).where(User.username == username))
        return result.scalars().first()

    def save_user(self, user: User) -> User:
        """Insert or update ``user`` and return the refreshed instance."""
        with self.atomic("Username is already taken"):
            self.session.add(user)
        self.session.refresh(user)
        return user
