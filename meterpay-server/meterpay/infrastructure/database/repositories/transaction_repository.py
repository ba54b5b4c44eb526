"""SQLAlchemy implementation of the transaction repository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import case, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from meterpay.db.models import Transaction as TransactionModel
from meterpay.modules.transactions.models import Transaction, TransactionStats, TransactionStatus
from meterpay.modules.transactions.repository import TransactionRepository


class SqlTransactionRepository(TransactionRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        user_id: str,
        meter_number: str | None,
        amount_cents: int,
        total_cents: int,
        status: str,
        payment_method: str,
        transaction_type: str,
        reference: str | None,
        token: str | None = None,
        units: str | None = None,
    ) -> Transaction:
        model = TransactionModel(
            user_id=user_id,
            meter_number=meter_number,
            amount_cents=amount_cents,
            total_cents=total_cents,
            status=status,
            payment_method=payment_method,
            transaction_type=transaction_type,
            reference=reference,
            token=token,
            units=units,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def get(self, transaction_id: str) -> Transaction | None:
        model = await self._session.get(TransactionModel, transaction_id)
        return self._to_domain(model)

    async def list_for_user(
        self,
        user_id: str,
        *,
        status: str | None = None,
        transaction_type: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[Transaction]:
        stmt = select(TransactionModel).where(TransactionModel.user_id == user_id)
        if status:
            stmt = stmt.where(TransactionModel.status == status)
        if transaction_type:
            stmt = stmt.where(TransactionModel.transaction_type == transaction_type)
        stmt = stmt.order_by(desc(TransactionModel.created_at)).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def stats_for_user(self, user_id: str) -> TransactionStats:
        succeeded = TransactionModel.status == TransactionStatus.SUCCESS.value
        stmt = select(
            func.coalesce(func.sum(case((succeeded, TransactionModel.amount_cents), else_=0)), 0),
            func.count(TransactionModel.id),
            func.coalesce(func.sum(case((succeeded, 1), else_=0)), 0),
        ).where(TransactionModel.user_id == user_id)
        total_cents, total_count, success_count = (await self._session.execute(stmt)).one()
        return TransactionStats(
            total_amount_cents=int(total_cents),
            total_count=int(total_count),
            success_count=int(success_count),
        )

    @staticmethod
    def _to_domain(model: TransactionModel | None) -> Transaction | None:
        if model is None:
            return None
        return Transaction(
            id=str(model.id),
            user_id=model.user_id,
            meter_number=model.meter_number,
            amount_cents=int(model.amount_cents),
            total_cents=int(model.total_cents),
            status=model.status,
            payment_method=model.payment_method,
            transaction_type=model.transaction_type,
            reference=model.reference,
            token=model.token,
            units=model.units,
            created_at=model.created_at,
        )
