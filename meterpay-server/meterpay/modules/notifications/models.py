"""Domain models for scheduled notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .schedule import Schedule


@dataclass(slots=True)
class ScheduledNotification:
    id: str
    user_id: str
    template_id: str
    schedule: Schedule
    personalizations: dict[str, str] = field(default_factory=dict)
    enabled: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class NotificationPreview:
    """What an external delivery mechanism needs to fire a notification."""

    notification: ScheduledNotification
    schedule_text: str
    title: str
    body: str
    next_trigger_at: Optional[datetime]
