"""Domain services for user accounts."""

from __future__ import annotations

import logging

from meterpay.core.config import DemoUserSettings
from meterpay.core.security import hash_password, verify_password
from meterpay.modules.common.money import to_cents
from meterpay.modules.common.repository import Repositories

from .exceptions import InvalidCredentialsError, UserAlreadyExistsError, UserNotFoundError
from .models import ProfileUpdateInput, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Encapsulates registration, login and profile use cases."""

    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    @classmethod
    def from_repositories(cls, repositories: Repositories) -> "UserService":
        return cls(repositories.users)

    async def get_by_id(self, user_id: str) -> User | None:
        return await self._repository.get_by_id(user_id)

    async def get_profile(self, user_id: str) -> User:
        user = await self._repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"user {user_id} not found")
        return user

    async def register(
        self,
        *,
        username: str,
        password: str,
        full_name: str | None = None,
        email: str | None = None,
    ) -> User:
        existing = await self._repository.get_by_username(username)
        if existing is not None:
            raise UserAlreadyExistsError(f"username already exists: {username}")
        user = await self._repository.create_user(
            username=username,
            password_hash=hash_password(password),
            full_name=full_name,
            email=email,
        )
        logger.info("Registered user %s", user.username)
        return user

    async def authenticate(self, username: str, password: str) -> User:
        user = await self._repository.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError("invalid username or password")
        return user

    async def ensure_demo_user(self, demo: DemoUserSettings) -> User:
        """Return the demo user, provisioning it with its opening balance on first access."""
        user = await self._repository.get_by_username(demo.username)
        if user is not None:
            return user
        user = await self._repository.create_user(
            username=demo.username,
            password_hash=hash_password(demo.password),
            full_name=demo.full_name,
            email=demo.email,
            wallet_balance_cents=to_cents(demo.initial_balance),
        )
        logger.info("Provisioned demo user %s with balance %s", user.username, user.wallet_balance)
        return user

    async def update_profile(self, user_id: str, payload: ProfileUpdateInput) -> User:
        changes = payload.changes()
        if not changes:
            return await self.get_profile(user_id)
        user = await self._repository.update_profile(user_id, changes)
        if user is None:
            raise UserNotFoundError(f"user {user_id} not found")
        return user
