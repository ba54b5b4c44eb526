"""Domain models for payment transactions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from meterpay.modules.common.money import from_cents


class TransactionStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class PaymentMethod(str, Enum):
    CARD = "card"
    WALLET = "wallet"
    MOBILE = "mobile"


class TransactionType(str, Enum):
    RECHARGE = "recharge"
    DEBT_PAYMENT = "debt_payment"
    TOPUP = "topup"


@dataclass(slots=True)
class Transaction:
    id: str
    user_id: str
    meter_number: Optional[str]
    amount_cents: int
    total_cents: int
    status: str
    payment_method: str
    transaction_type: str
    reference: Optional[str]
    token: Optional[str] = None
    units: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def amount(self) -> Decimal:
        return from_cents(self.amount_cents)

    @property
    def total(self) -> Decimal:
        return from_cents(self.total_cents)


@dataclass(slots=True)
class TransactionStats:
    total_amount_cents: int
    total_count: int
    success_count: int

    @property
    def total_amount(self) -> Decimal:
        return from_cents(self.total_amount_cents)

    @property
    def average_amount(self) -> Decimal:
        if self.success_count == 0:
            return from_cents(0)
        return from_cents(round(self.total_amount_cents / self.success_count))
