"""Transaction domain specific exceptions."""

from meterpay.modules.common.exceptions import NotFoundError


class TransactionNotFoundError(NotFoundError):
    """Raised when the requested transaction could not be found."""
