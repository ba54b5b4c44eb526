"""SQLAlchemy implementation of the meter repository."""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from meterpay.db.models import Meter as MeterModel
from meterpay.modules.meters.models import Meter
from meterpay.modules.meters.repository import MeterRepository

EDITABLE_FIELDS = {"nickname", "address", "customer_name", "type", "status"}


class SqlMeterRepository(MeterRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, meter_id: str) -> Meter | None:
        model = await self._session.get(MeterModel, meter_id)
        return self._to_domain(model)

    async def get_by_number(self, meter_number: str) -> Meter | None:
        stmt = select(MeterModel).where(MeterModel.meter_number == meter_number)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def list_for_user(self, user_id: str, limit: int | None = None) -> Sequence[Meter]:
        stmt = select(MeterModel).where(MeterModel.user_id == user_id).order_by(desc(MeterModel.created_at))
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def create(
        self,
        *,
        user_id: str,
        meter_number: str,
        nickname: str | None,
        address: str | None,
        customer_name: str | None,
        type: str,
        status: str,
    ) -> Meter:
        model = MeterModel(
            user_id=user_id,
            meter_number=meter_number,
            nickname=nickname,
            address=address,
            customer_name=customer_name,
            type=type,
            status=status,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def update(self, meter_id: str, changes: dict[str, Any]) -> Meter | None:
        model = await self._session.get(MeterModel, meter_id)
        if model is None:
            return None
        for name, value in changes.items():
            if name in EDITABLE_FIELDS:
                setattr(model, name, value)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: MeterModel | None) -> Meter | None:
        if model is None:
            return None
        return Meter(
            id=str(model.id),
            user_id=model.user_id,
            meter_number=model.meter_number,
            nickname=model.nickname,
            address=model.address,
            customer_name=model.customer_name,
            type=model.type or "STS",
            status=model.status or "active",
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
