"""SQLAlchemy implementation of the user repository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from meterpay.db.models import User as UserModel
from meterpay.modules.accounts.models import User
from meterpay.modules.accounts.repository import UserRepository

PROFILE_FIELDS = {"full_name", "email", "phone", "address"}


class SqlUserRepository(UserRepository):
    """User repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, user_id: str) -> User | None:
        stmt = select(UserModel).where(UserModel.id == user_id).execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def get_by_username(self, username: str) -> User | None:
        stmt = select(UserModel).where(UserModel.username == username)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

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
        model = UserModel(
            username=username,
            password_hash=password_hash,
            full_name=full_name,
            email=email,
            phone=phone,
            address=address,
            wallet_balance_cents=wallet_balance_cents,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def update_profile(self, user_id: str, changes: dict[str, Any]) -> User | None:
        model = await self._session.get(UserModel, user_id)
        if model is None:
            return None
        for name, value in changes.items():
            if name in PROFILE_FIELDS:
                setattr(model, name, value)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: UserModel | None) -> User | None:
        if model is None:
            return None
        return User(
            id=str(model.id),
            username=model.username,
            password_hash=model.password_hash,
            full_name=model.full_name,
            email=model.email,
            phone=model.phone,
            address=model.address,
            wallet_balance_cents=int(model.wallet_balance_cents or 0),
            created_at=model.created_at,
        )
