"""Meter domain specific exceptions."""

from meterpay.modules.common.exceptions import ConflictError, NotFoundError


class MeterNotFoundError(NotFoundError):
    """Raised when the requested meter could not be found."""


class MeterOwnershipError(ConflictError):
    """Raised when a meter number is already registered to another user."""
