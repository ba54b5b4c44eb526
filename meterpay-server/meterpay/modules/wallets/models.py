"""Domain models for wallet operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from meterpay.modules.common.money import from_cents


class WalletEntryType(str, Enum):
    DEPOSIT = "deposit"
    PAYMENT = "payment"


@dataclass(slots=True)
class WalletSnapshot:
    user_id: str
    balance_cents: int

    @property
    def balance(self) -> Decimal:
        return from_cents(self.balance_cents)


@dataclass(slots=True)
class WalletEntry:
    id: str
    user_id: str
    amount_cents: int
    type: str
    description: Optional[str]
    reference: Optional[str]
    created_at: Optional[datetime]

    @property
    def amount(self) -> Decimal:
        return from_cents(self.amount_cents)
