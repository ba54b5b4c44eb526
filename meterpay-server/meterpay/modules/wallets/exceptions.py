"""Wallet domain specific exceptions."""

from meterpay.modules.common.exceptions import InsufficientFundsError


class InsufficientBalanceError(InsufficientFundsError):
    """Raised when a wallet debit exceeds the current balance."""

    def __init__(self, message: str, *, balance_cents: int, requested_cents: int) -> None:
        super().__init__(message)
        self.balance_cents = balance_cents
        self.requested_cents = requested_cents
