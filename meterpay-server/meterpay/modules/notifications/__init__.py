"""Scheduled notification exports"""

from .exceptions import ScheduledNotificationNotFoundError, ScheduleValidationError, TemplateNotFoundError
from .models import NotificationPreview, ScheduledNotification
from .schedule import (
    Schedule,
    ScheduleType,
    compute_next_trigger,
    format_schedule_text,
    format_time_string,
    ordinal_suffix,
    validate_schedule,
)
from .service import ScheduledNotificationService
from .templates import NOTIFICATION_TEMPLATES, NotificationTemplate, get_template, personalize

__all__ = [
    "ScheduledNotificationNotFoundError",
    "ScheduleValidationError",
    "TemplateNotFoundError",
    "NotificationPreview",
    "ScheduledNotification",
    "Schedule",
    "ScheduleType",
    "compute_next_trigger",
    "format_schedule_text",
    "format_time_string",
    "ordinal_suffix",
    "validate_schedule",
    "ScheduledNotificationService",
    "NOTIFICATION_TEMPLATES",
    "NotificationTemplate",
    "get_template",
    "personalize",
]
