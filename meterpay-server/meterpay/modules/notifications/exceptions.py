"""Notification domain specific exceptions."""

from meterpay.modules.common.exceptions import InputValidationError, NotFoundError


class ScheduleValidationError(InputValidationError):
    """Raised when a schedule definition is malformed; ``field`` names the culprit."""


class TemplateNotFoundError(NotFoundError):
    """Raised when a notification template id is unknown."""


class ScheduledNotificationNotFoundError(NotFoundError):
    """Raised when a scheduled notification does not exist for the user."""
