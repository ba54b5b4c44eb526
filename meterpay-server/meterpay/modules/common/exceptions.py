"""Error taxonomy shared by every domain module.

Each module's ``exceptions.py`` subclasses one of these. The HTTP layer maps
the base classes onto status codes, so services only need to raise.
"""


class MeterPayError(Exception):
    """Base class for all domain errors."""

    code = "error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class InputValidationError(MeterPayError):
    """Raised when caller input is malformed or out of range."""

    code = "validation_error"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(MeterPayError):
    """Raised when a referenced entity does not exist for the caller."""

    code = "not_found"


class ConflictError(MeterPayError):
    """Raised when an operation conflicts with the entity's current state."""

    code = "conflict"


class InsufficientFundsError(MeterPayError):
    """Raised before any write when the wallet cannot cover a debit."""

    code = "insufficient_funds"
