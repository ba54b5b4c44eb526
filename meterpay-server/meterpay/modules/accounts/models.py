"""Domain models for users."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from meterpay.modules.common.money import from_cents


@dataclass(slots=True)
class User:
    id: str
    username: str
    password_hash: str = field(repr=False)
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    wallet_balance_cents: int = 0
    created_at: Optional[datetime] = None

    @property
    def wallet_balance(self) -> Decimal:
        return from_cents(self.wallet_balance_cents)


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class ProfileUpdateInput:
    full_name: Optional[str] | object = UNSET
    email: Optional[str] | object = UNSET
    phone: Optional[str] | object = UNSET
    address: Optional[str] | object = UNSET

    def changes(self) -> dict[str, Optional[str]]:
        return {
            name: getattr(self, name)
            for name in ("full_name", "email", "phone", "address")
            if getattr(self, name) is not UNSET
        }
