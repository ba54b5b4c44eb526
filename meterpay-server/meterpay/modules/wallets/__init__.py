"""Wallet domain exports"""

from .exceptions import InsufficientBalanceError
from .models import WalletEntry, WalletEntryType, WalletSnapshot
from .service import WalletService

__all__ = [
    "InsufficientBalanceError",
    "WalletEntry",
    "WalletEntryType",
    "WalletSnapshot",
    "WalletService",
]
