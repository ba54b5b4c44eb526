"""Repository protocol for scheduled notifications."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import ScheduledNotification
from .schedule import Schedule


class ScheduledNotificationRepository(Protocol):
    async def create(
        self,
        *,
        user_id: str,
        template_id: str,
        schedule: Schedule,
        personalizations: dict[str, str],
        enabled: bool,
    ) -> ScheduledNotification:
        ...

    async def get(self, notification_id: str) -> ScheduledNotification | None:
        ...

    async def list_for_user(self, user_id: str) -> Sequence[ScheduledNotification]:
        ...

    async def update(
        self,
        notification_id: str,
        *,
        schedule: Schedule | None = None,
        personalizations: dict[str, str] | None = None,
        enabled: bool | None = None,
    ) -> ScheduledNotification | None:
        ...

    async def delete(self, notification_id: str) -> bool:
        ...
