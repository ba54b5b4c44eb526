"""Repository protocol for users."""

from __future__ import annotations

from typing import Any, Protocol

from .models import User


class UserRepository(Protocol):
    async def get_by_id(self, user_id: str) -> User | None:
        ...

    async def get_by_username(self, username: str) -> User | None:
        ...

    async def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        full_name: str | None,
        email: str | None,
        phone: str | None = None,
        address: str | None = None,
        wallet_balance_cents: int = 0,
    ) -> User:
        ...

    async def update_profile(self, user_id: str, changes: dict[str, Any]) -> User | None:
        ...
