"""Scheduled notification use cases."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Mapping

from meterpay.modules.common.exceptions import InputValidationError
from meterpay.modules.common.repository import Repositories

from .exceptions import ScheduledNotificationNotFoundError, TemplateNotFoundError
from .models import NotificationPreview, ScheduledNotification
from .repository import ScheduledNotificationRepository
from .schedule import Schedule, compute_next_trigger, format_schedule_text, validate_schedule
from .templates import (
    DAILY_TIP_TEMPLATE_ID,
    NOTIFICATION_TEMPLATES,
    NotificationTemplate,
    get_template,
    personalize,
    random_energy_tip,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScheduledNotificationService:
    repository: ScheduledNotificationRepository
    tip_picker: Callable[[], str] = random_energy_tip

    @classmethod
    def from_repositories(cls, repositories: Repositories) -> "ScheduledNotificationService":
        return cls(repositories.notifications)

    @staticmethod
    def list_templates() -> tuple[NotificationTemplate, ...]:
        return NOTIFICATION_TEMPLATES

    @staticmethod
    def get_template(template_id: str) -> NotificationTemplate:
        template = get_template(template_id)
        if template is None:
            raise TemplateNotFoundError(f"template {template_id} not found")
        return template

    async def create(
        self,
        *,
        user_id: str,
        template_id: str,
        schedule: Schedule,
        personalizations: Mapping[str, str] | None = None,
    ) -> ScheduledNotification:
        template = self.get_template(template_id)
        if not template.can_be_scheduled:
            raise InputValidationError("templateId", f"template {template_id} cannot be scheduled")
        validate_schedule(schedule)
        values = self._check_personalizations(template, personalizations or {})

        notification = await self.repository.create(
            user_id=user_id,
            template_id=template.id,
            schedule=schedule,
            personalizations=values,
            enabled=True,
        )
        logger.info(
            "Scheduled notification %s created for user %s: %s",
            notification.id,
            user_id,
            format_schedule_text(schedule),
        )
        return notification

    async def list(self, user_id: str) -> list[ScheduledNotification]:
        return list(await self.repository.list_for_user(user_id))

    async def get(self, user_id: str, notification_id: str) -> ScheduledNotification:
        notification = await self.repository.get(notification_id)
        if notification is None or notification.user_id != user_id:
            raise ScheduledNotificationNotFoundError(f"scheduled notification {notification_id} not found")
        return notification

    async def update(
        self,
        user_id: str,
        notification_id: str,
        *,
        schedule: Schedule | None = None,
        personalizations: Mapping[str, str] | None = None,
        enabled: bool | None = None,
    ) -> ScheduledNotification:
        current = await self.get(user_id, notification_id)
        if schedule is not None:
            validate_schedule(schedule)
        values = None
        if personalizations is not None:
            template = self.get_template(current.template_id)
            values = self._check_personalizations(template, personalizations)
        updated = await self.repository.update(
            notification_id,
            schedule=schedule,
            personalizations=values,
            enabled=enabled,
        )
        if updated is None:
            raise ScheduledNotificationNotFoundError(f"scheduled notification {notification_id} not found")
        return updated

    async def toggle(self, user_id: str, notification_id: str) -> ScheduledNotification:
        current = await self.get(user_id, notification_id)
        return await self.update(user_id, notification_id, enabled=not current.enabled)

    async def delete(self, user_id: str, notification_id: str) -> None:
        await self.get(user_id, notification_id)
        await self.repository.delete(notification_id)

    def describe(self, notification: ScheduledNotification, now: datetime) -> NotificationPreview:
        template = self.get_template(notification.template_id)
        title, body = personalize(template, notification.personalizations)
        next_trigger = compute_next_trigger(notification.schedule, now) if notification.enabled else None
        return NotificationPreview(
            notification=notification,
            schedule_text=format_schedule_text(notification.schedule),
            title=title,
            body=body,
            next_trigger_at=next_trigger,
        )

    def _check_personalizations(
        self, template: NotificationTemplate, personalizations: Mapping[str, str]
    ) -> dict[str, str]:
        values = {str(key): str(value) for key, value in personalizations.items()}
        for name in template.personalization_fields:
            if name != "tip" and not values.get(name):
                raise InputValidationError("personalizations", f"missing personalization field: {name}")
        if template.id == DAILY_TIP_TEMPLATE_ID and not values.get("tip"):
            values["tip"] = self.tip_picker()
        return values
