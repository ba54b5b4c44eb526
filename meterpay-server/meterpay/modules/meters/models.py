"""Domain models for prepaid meters."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from meterpay.modules.accounts.models import UNSET


@dataclass(slots=True)
class Meter:
    id: str
    user_id: str
    meter_number: str
    nickname: Optional[str] = None
    address: Optional[str] = None
    customer_name: Optional[str] = None
    type: str = "STS"
    status: str = "active"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class MeterUpdateInput:
    nickname: Optional[str] | object = UNSET
    address: Optional[str] | object = UNSET
    customer_name: Optional[str] | object = UNSET
    type: Optional[str] | object = UNSET
    status: Optional[str] | object = UNSET

    def changes(self) -> dict[str, Optional[str]]:
        return {
            name: getattr(self, name)
            for name in ("nickname", "address", "customer_name", "type", "status")
            if getattr(self, name) is not UNSET
        }
