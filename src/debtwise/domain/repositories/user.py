"""User repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.user import User


class UserRepository(Protocol):
    def get_by_id(self, user_id: int) -> Optional[User]:
        ...

    def get_by_username(self, username: str) -> Optional[User]:
        ...

    def create(self, user: User) -> User:
        ...
