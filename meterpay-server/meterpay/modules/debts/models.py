"""Domain models for outstanding utility bills."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Optional

from meterpay.modules.common.money import from_cents

if TYPE_CHECKING:
    from meterpay.modules.transactions.models import Transaction
    from meterpay.modules.wallets.models import WalletSnapshot


class DebtCategory(str, Enum):
    ELECTRICITY = "electricity"
    WATER = "water"
    MAINTENANCE = "maintenance"
    TRASH = "trash"
    OTHER = "other"


@dataclass(slots=True)
class Debt:
    id: str
    user_id: str
    meter_number: str
    amount_cents: int
    category: str
    due_date: datetime
    description: Optional[str] = None
    is_paid: bool = False
    paid_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def amount(self) -> Decimal:
        return from_cents(self.amount_cents)

    @property
    def status(self) -> str:
        return "paid" if self.is_paid else "pending"


@dataclass(slots=True)
class DebtPayment:
    debt: Debt
    transaction: Transaction
    wallet: Optional[WalletSnapshot] = None
