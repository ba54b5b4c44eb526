"""Wallet domain service"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from meterpay.modules.accounts.exceptions import UserNotFoundError
from meterpay.modules.common.references import make_reference
from meterpay.modules.common.repository import Repositories

from .exceptions import InsufficientBalanceError
from .models import WalletEntry, WalletEntryType, WalletSnapshot
from .repository import WalletRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class WalletService:
    repository: WalletRepository

    @classmethod
    def from_repositories(cls, repositories: Repositories) -> "WalletService":
        return cls(repositories.wallet)

    async def get_snapshot(self, user_id: str) -> WalletSnapshot:
        balance = await self.repository.get_balance(user_id)
        if balance is None:
            raise UserNotFoundError(f"user {user_id} not found")
        return WalletSnapshot(user_id=user_id, balance_cents=balance)

    async def debit(
        self,
        *,
        user_id: str,
        amount_cents: int,
        description: str,
        reference: str | None = None,
    ) -> tuple[WalletSnapshot, WalletEntry]:
        """Take ``amount_cents`` from the wallet and record a ``payment`` entry.

        The balance check and the decrement are one conditional update. When
        it does not apply, nothing has been written.
        """
        new_balance = await self.repository.debit_if_sufficient(user_id, amount_cents)
        if new_balance is None:
            current = await self.repository.get_balance(user_id)
            if current is None:
                raise UserNotFoundError(f"user {user_id} not found")
            logger.warning(
                "Insufficient wallet balance for user %s: balance=%s requested=%s",
                user_id,
                current,
                amount_cents,
            )
            raise InsufficientBalanceError(
                "Insufficient wallet balance",
                balance_cents=current,
                requested_cents=amount_cents,
            )
        entry = await self.repository.add_entry(
            user_id=user_id,
            amount_cents=amount_cents,
            type=WalletEntryType.PAYMENT.value,
            description=description,
            reference=reference or make_reference("PAY"),
        )
        logger.info("Wallet debit user=%s amount=%s balance=%s", user_id, amount_cents, new_balance)
        return WalletSnapshot(user_id=user_id, balance_cents=new_balance), entry

    async def deposit(
        self,
        *,
        user_id: str,
        amount_cents: int,
        description: str = "Wallet top-up",
        reference: str | None = None,
    ) -> tuple[WalletSnapshot, WalletEntry]:
        new_balance = await self.repository.credit(user_id, amount_cents)
        if new_balance is None:
            raise UserNotFoundError(f"user {user_id} not found")
        entry = await self.repository.add_entry(
            user_id=user_id,
            amount_cents=amount_cents,
            type=WalletEntryType.DEPOSIT.value,
            description=description,
            reference=reference or make_reference("DEP"),
        )
        logger.info("Wallet credit user=%s amount=%s balance=%s", user_id, amount_cents, new_balance)
        return WalletSnapshot(user_id=user_id, balance_cents=new_balance), entry

    async def list_entries(self, user_id: str, limit: int = 50, offset: int = 0) -> list[WalletEntry]:
        return list(await self.repository.list_entries(user_id, limit, offset))
