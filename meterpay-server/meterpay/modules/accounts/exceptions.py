"""Account domain specific exceptions."""

from meterpay.modules.common.exceptions import ConflictError, MeterPayError, NotFoundError


class UserAlreadyExistsError(ConflictError):
    """Raised when registering a username that is already taken."""


class UserNotFoundError(NotFoundError):
    """Raised when the requested user cannot be found."""


class InvalidCredentialsError(MeterPayError):
    """Raised when a login attempt fails."""

    code = "invalid_credentials"
