"""Account domain exports"""

from .exceptions import InvalidCredentialsError, UserAlreadyExistsError, UserNotFoundError
from .models import UNSET, ProfileUpdateInput, User
from .service import UserService

__all__ = [
    "InvalidCredentialsError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "UNSET",
    "ProfileUpdateInput",
    "User",
    "UserService",
]
