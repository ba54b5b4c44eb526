"""SQLAlchemy implementation of the scheduled notification repository.

``schedule`` and ``personalizations`` are stored as JSON text.
"""

from __future__ import annotations

import json
from typing import Sequence

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from meterpay.db.models import ScheduledNotification as ScheduledNotificationModel
from meterpay.modules.notifications.models import ScheduledNotification
from meterpay.modules.notifications.repository import ScheduledNotificationRepository
from meterpay.modules.notifications.schedule import Schedule


class SqlScheduledNotificationRepository(ScheduledNotificationRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        user_id: str,
        template_id: str,
        schedule: Schedule,
        personalizations: dict[str, str],
        enabled: bool,
    ) -> ScheduledNotification:
        model = ScheduledNotificationModel(
            user_id=user_id,
            template_id=template_id,
            schedule=json.dumps(schedule.to_mapping()),
            personalizations=json.dumps(personalizations),
            enabled=enabled,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def get(self, notification_id: str) -> ScheduledNotification | None:
        model = await self._session.get(ScheduledNotificationModel, notification_id)
        return self._to_domain(model)

    async def list_for_user(self, user_id: str) -> Sequence[ScheduledNotification]:
        stmt = (
            select(ScheduledNotificationModel)
            .where(ScheduledNotificationModel.user_id == user_id)
            .order_by(desc(ScheduledNotificationModel.created_at))
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def update(
        self,
        notification_id: str,
        *,
        schedule: Schedule | None = None,
        personalizations: dict[str, str] | None = None,
        enabled: bool | None = None,
    ) -> ScheduledNotification | None:
        model = await self._session.get(ScheduledNotificationModel, notification_id)
        if model is None:
            return None
        if schedule is not None:
            model.schedule = json.dumps(schedule.to_mapping())
        if personalizations is not None:
            model.personalizations = json.dumps(personalizations)
        if enabled is not None:
            model.enabled = enabled
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def delete(self, notification_id: str) -> bool:
        model = await self._session.get(ScheduledNotificationModel, notification_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    @staticmethod
    def _to_domain(model: ScheduledNotificationModel | None) -> ScheduledNotification | None:
        if model is None:
            return None
        return ScheduledNotification(
            id=str(model.id),
            user_id=model.user_id,
            template_id=model.template_id,
            schedule=Schedule.from_mapping(json.loads(model.schedule)),
            personalizations=json.loads(model.personalizations or "{}"),
            enabled=bool(model.enabled),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
