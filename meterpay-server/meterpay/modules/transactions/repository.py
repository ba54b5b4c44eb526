"""Repository protocol for transactions."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import Transaction, TransactionStats


class TransactionRepository(Protocol):
    async def create(
        self,
        *,
        user_id: str,
        meter_number: str | None,
        amount_cents: int,
        total_cents: int,
        status: str,
        payment_method: str,
        transaction_type: str,
        reference: str | None,
        token: str | None = None,
        units: str | None = None,
    ) -> Transaction:
        ...

    async def get(self, transaction_id: str) -> Transaction | None:
        ...

    async def list_for_user(
        self,
        user_id: str,
        *,
        status: str | None = None,
        transaction_type: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[Transaction]:
        """Newest first."""
        ...

    async def stats_for_user(self, user_id: str) -> TransactionStats:
        ...
