"""SQLAlchemy implementation of the debt repository."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from meterpay.db.models import Debt as DebtModel
from meterpay.modules.debts.models import Debt
from meterpay.modules.debts.repository import DebtRepository


class SqlDebtRepository(DebtRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        user_id: str,
        meter_number: str,
        amount_cents: int,
        category: str,
        due_date: datetime,
        description: str | None,
    ) -> Debt:
        model = DebtModel(
            user_id=user_id,
            meter_number=meter_number,
            amount_cents=amount_cents,
            category=category,
            due_date=due_date,
            description=description,
            is_paid=False,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def get(self, debt_id: str) -> Debt | None:
        stmt = select(DebtModel).where(DebtModel.id == debt_id).execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def list_for_user(self, user_id: str, include_paid: bool = True) -> Sequence[Debt]:
        stmt = select(DebtModel).where(DebtModel.user_id == user_id)
        if not include_paid:
            stmt = stmt.where(DebtModel.is_paid.is_(False))
        stmt = stmt.order_by(DebtModel.due_date)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def mark_paid(self, debt_id: str, paid_at: datetime) -> Debt | None:
        stmt = (
            update(DebtModel)
            .where(DebtModel.id == debt_id, DebtModel.is_paid.is_(False))
            .values(is_paid=True, paid_at=paid_at, updated_at=paid_at)
            .execution_options(synchronize_session=False)
            .returning(DebtModel.id)
        )
        result = await self._session.execute(stmt)
        if result.scalar_one_or_none() is None:
            return None
        return await self.get(debt_id)

    @staticmethod
    def _to_domain(model: DebtModel | None) -> Debt | None:
        if model is None:
            return None
        return Debt(
            id=str(model.id),
            user_id=model.user_id,
            meter_number=model.meter_number,
            amount_cents=int(model.amount_cents),
            category=model.category,
            due_date=model.due_date,
            description=model.description,
            is_paid=bool(model.is_paid),
            paid_at=model.paid_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
