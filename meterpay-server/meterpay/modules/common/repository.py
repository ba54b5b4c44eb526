"""The per-request bundle of repositories handed to domain services.

Both storage backends (SQL and in-memory) produce a :class:`Repositories`
instance, so services never know which one they are talking to.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from meterpay.modules.accounts.repository import UserRepository
    from meterpay.modules.debts.repository import DebtRepository
    from meterpay.modules.meters.repository import MeterRepository
    from meterpay.modules.notifications.repository import ScheduledNotificationRepository
    from meterpay.modules.transactions.repository import TransactionRepository
    from meterpay.modules.wallets.repository import WalletRepository


@dataclass(slots=True)
class Repositories:
    users: UserRepository
    meters: MeterRepository
    transactions: TransactionRepository
    debts: DebtRepository
    wallet: WalletRepository
    notifications: ScheduledNotificationRepository


__all__ = ["Repositories"]
