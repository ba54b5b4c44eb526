"""Debt domain specific exceptions."""

from meterpay.modules.common.exceptions import ConflictError, NotFoundError


class DebtNotFoundError(NotFoundError):
    """Raised when the debt does not exist or belongs to another user."""


class DebtAlreadyPaidError(ConflictError):
    """Raised when paying a debt that has already been settled."""
