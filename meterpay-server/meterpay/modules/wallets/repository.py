"""Repository protocol for wallet balances and the wallet ledger."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import WalletEntry


class WalletRepository(Protocol):
    async def get_balance(self, user_id: str) -> int | None:
        ...

    async def debit_if_sufficient(self, user_id: str, amount_cents: int) -> int | None:
        """Atomically subtract ``amount_cents`` when the balance covers it.

        Returns the new balance, or ``None`` when nothing was changed.
        """
        ...

    async def credit(self, user_id: str, amount_cents: int) -> int | None:
        ...

    async def add_entry(
        self,
        *,
        user_id: str,
        amount_cents: int,
        type: str,
        description: str | None,
        reference: str | None,
    ) -> WalletEntry:
        ...

    async def list_entries(self, user_id: str, limit: int, offset: int) -> Sequence[WalletEntry]:
        ...
