"""SQLAlchemy implementation for wallet domain"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from meterpay.db.models import User as UserModel
from meterpay.db.models import WalletTransaction
from meterpay.modules.wallets.models import WalletEntry
from meterpay.modules.wallets.repository import WalletRepository


class SqlWalletRepository(WalletRepository):
    """Balance lives on ``users.wallet_balance_cents``; entries in ``wallet_transactions``."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_balance(self, user_id: str) -> int | None:
        stmt = select(UserModel.wallet_balance_cents).where(UserModel.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def debit_if_sufficient(self, user_id: str, amount_cents: int) -> int | None:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id, UserModel.wallet_balance_cents >= amount_cents)
            .values(wallet_balance_cents=UserModel.wallet_balance_cents - amount_cents)
            .execution_options(synchronize_session=False)
            .returning(UserModel.wallet_balance_cents)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def credit(self, user_id: str, amount_cents: int) -> int | None:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(wallet_balance_cents=UserModel.wallet_balance_cents + amount_cents)
            .execution_options(synchronize_session=False)
            .returning(UserModel.wallet_balance_cents)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def add_entry(
        self,
        *,
        user_id: str,
        amount_cents: int,
        type: str,
        description: str | None,
        reference: str | None,
    ) -> WalletEntry:
        tx = WalletTransaction(
            user_id=user_id,
            amount_cents=amount_cents,
            type=type,
            description=description,
            reference=reference,
        )
        self.session.add(tx)
        await self.session.flush()
        await self.session.refresh(tx)
        return self._to_domain(tx)

    async def list_entries(self, user_id: str, limit: int, offset: int) -> Sequence[WalletEntry]:
        stmt = (
            select(WalletTransaction)
            .where(WalletTransaction.user_id == user_id)
            .order_by(desc(WalletTransaction.created_at))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(tx) for tx in result.scalars().all()]

    @staticmethod
    def _to_domain(tx: WalletTransaction) -> WalletEntry:
        return WalletEntry(
            id=str(tx.id),
            user_id=tx.user_id,
            amount_cents=int(tx.amount_cents),
            type=tx.type,
            description=tx.description,
            reference=tx.reference,
            created_at=tx.created_at,
        )
