"""Meter domain exports"""

from .exceptions import MeterNotFoundError, MeterOwnershipError
from .models import Meter, MeterUpdateInput
from .service import MeterService

__all__ = [
    "MeterNotFoundError",
    "MeterOwnershipError",
    "Meter",
    "MeterUpdateInput",
    "MeterService",
]
