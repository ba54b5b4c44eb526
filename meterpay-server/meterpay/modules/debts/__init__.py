"""Debt domain exports"""

from .exceptions import DebtAlreadyPaidError, DebtNotFoundError
from .models import Debt, DebtCategory, DebtPayment
from .service import DebtService

__all__ = [
    "DebtAlreadyPaidError",
    "DebtNotFoundError",
    "Debt",
    "DebtCategory",
    "DebtPayment",
    "DebtService",
]
