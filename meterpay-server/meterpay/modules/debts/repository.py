"""Repository protocol for debts."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .models import Debt


class DebtRepository(Protocol):
    async def create(
        self,
        *,
        user_id: str,
        meter_number: str,
        amount_cents: int,
        category: str,
        due_date: datetime,
        description: str | None,
    ) -> Debt:
        ...

    async def get(self, debt_id: str) -> Debt | None:
        ...

    async def list_for_user(self, user_id: str, include_paid: bool = True) -> Sequence[Debt]:
        """Ordered by due date, earliest first."""
        ...

    async def mark_paid(self, debt_id: str, paid_at: datetime) -> Debt | None:
        """Flip ``is_paid`` only if it is still false; ``None`` when no row changed."""
        ...
