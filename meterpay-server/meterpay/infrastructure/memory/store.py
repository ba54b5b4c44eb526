"""In-process storage backend.

Records live in plain dicts on a :class:`MemoryStore`. Repositories hand out
copies so callers never mutate stored state by accident. None of the methods
await between reading and writing a record, so each call is atomic with
respect to other coroutines on the same event loop.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Sequence

from meterpay.modules.accounts.models import User
from meterpay.modules.common.repository import Repositories
from meterpay.modules.debts.models import Debt
from meterpay.modules.meters.models import Meter
from meterpay.modules.notifications.models import ScheduledNotification
from meterpay.modules.notifications.schedule import Schedule
from meterpay.modules.transactions.models import Transaction, TransactionStats, TransactionStatus
from meterpay.modules.wallets.models import WalletEntry


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class MemoryStore:
    users: dict[str, User] = field(default_factory=dict)
    meters: dict[str, Meter] = field(default_factory=dict)
    transactions: dict[str, Transaction] = field(default_factory=dict)
    debts: dict[str, Debt] = field(default_factory=dict)
    wallet_entries: dict[str, WalletEntry] = field(default_factory=dict)
    notifications: dict[str, ScheduledNotification] = field(default_factory=dict)

    def repositories(self) -> Repositories:
        return Repositories(
            users=MemoryUserRepository(self),
            meters=MemoryMeterRepository(self),
            transactions=MemoryTransactionRepository(self),
            debts=MemoryDebtRepository(self),
            wallet=MemoryWalletRepository(self),
            notifications=MemoryScheduledNotificationRepository(self),
        )

    def clear(self) -> None:
        for table in (
            self.users,
            self.meters,
            self.transactions,
            self.debts,
            self.wallet_entries,
            self.notifications,
        ):
            table.clear()


class MemoryUserRepository:
    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    async def get_by_id(self, user_id: str) -> User | None:
        user = self._store.users.get(user_id)
        return replace(user) if user else None

    async def get_by_username(self, username: str) -> User | None:
        for user in self._store.users.values():
            if user.username == username:
                return replace(user)
        return None

    async def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        full_name: str | None,
        email: str | None,
        phone: str | None = None,
        address: str | None = None,
        wallet_balance_cents: int = 0,
    ) -> User:
        user = User(
            id=_new_id(),
            username=username,
            password_hash=password_hash,
            full_name=full_name,
            email=email,
            phone=phone,
            address=address,
            wallet_balance_cents=wallet_balance_cents,
            created_at=_utcnow(),
        )
        self._store.users[user.id] = user
        return replace(user)

    async def update_profile(self, user_id: str, changes: dict[str, Any]) -> User | None:
        user = self._store.users.get(user_id)
        if user is None:
            return None
        for name in ("full_name", "email", "phone", "address"):
            if name in changes:
                setattr(user, name, changes[name])
        return replace(user)


class MemoryMeterRepository:
    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    async def get(self, meter_id: str) -> Meter | None:
        meter = self._store.meters.get(meter_id)
        return replace(meter) if meter else None

    async def get_by_number(self, meter_number: str) -> Meter | None:
        for meter in self._store.meters.values():
            if meter.meter_number == meter_number:
                return replace(meter)
        return None

    async def list_for_user(self, user_id: str, limit: int | None = None) -> Sequence[Meter]:
        rows = [replace(m) for m in reversed(self._store.meters.values()) if m.user_id == user_id]
        return rows if limit is None else rows[:limit]

    async def create(
        self,
        *,
        user_id: str,
        meter_number: str,
        nickname: str | None,
        address: str | None,
        customer_name: str | None,
        type: str,
        status: str,
    ) -> Meter:
        now = _utcnow()
        meter = Meter(
            id=_new_id(),
            user_id=user_id,
            meter_number=meter_number,
            nickname=nickname,
            address=address,
            customer_name=customer_name,
            type=type,
            status=status,
            created_at=now,
            updated_at=now,
        )
        self._store.meters[meter.id] = meter
        return replace(meter)

    async def update(self, meter_id: str, changes: dict[str, Any]) -> Meter | None:
        meter = self._store.meters.get(meter_id)
        if meter is None:
            return None
        for name in ("nickname", "address", "customer_name", "type", "status"):
            if name in changes:
                setattr(meter, name, changes[name])
        meter.updated_at = _utcnow()
        return replace(meter)


class MemoryTransactionRepository:
    def __init__(self, store: MemoryStore) -> None:
        self._store = store

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
        transaction = Transaction(
            id=_new_id(),
            user_id=user_id,
            meter_number=meter_number,
            amount_cents=amount_cents,
            total_cents=total_cents,
            status=status,
            payment_method=payment_method,
            transaction_type=transaction_type,
            reference=reference,
            token=token,
            units=units,
            created_at=_utcnow(),
        )
        self._store.transactions[transaction.id] = transaction
        return replace(transaction)

    async def get(self, transaction_id: str) -> Transaction | None:
        transaction = self._store.transactions.get(transaction_id)
        return replace(transaction) if transaction else None

    async def list_for_user(
        self,
        user_id: str,
        *,
        status: str | None = None,
        transaction_type: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[Transaction]:
        rows = [
            replace(tx)
            for tx in reversed(self._store.transactions.values())
            if tx.user_id == user_id
            and (not status or tx.status == status)
            and (not transaction_type or tx.transaction_type == transaction_type)
        ]
        rows = rows[offset:]
        return rows if limit is None else rows[:limit]

    async def stats_for_user(self, user_id: str) -> TransactionStats:
        rows = [tx for tx in self._store.transactions.values() if tx.user_id == user_id]
        succeeded = [tx for tx in rows if tx.status == TransactionStatus.SUCCESS.value]
        return TransactionStats(
            total_amount_cents=sum(tx.amount_cents for tx in succeeded),
            total_count=len(rows),
            success_count=len(succeeded),
        )


class MemoryDebtRepository:
    def __init__(self, store: MemoryStore) -> None:
        self._store = store

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
        now = _utcnow()
        debt = Debt(
            id=_new_id(),
            user_id=user_id,
            meter_number=meter_number,
            amount_cents=amount_cents,
            category=category,
            due_date=due_date,
            description=description,
            created_at=now,
            updated_at=now,
        )
        self._store.debts[debt.id] = debt
        return replace(debt)

    async def get(self, debt_id: str) -> Debt | None:
        debt = self._store.debts.get(debt_id)
        return replace(debt) if debt else None

    async def list_for_user(self, user_id: str, include_paid: bool = True) -> Sequence[Debt]:
        rows = [
            replace(debt)
            for debt in self._store.debts.values()
            if debt.user_id == user_id and (include_paid or not debt.is_paid)
        ]
        return sorted(rows, key=lambda debt: debt.due_date)

    async def mark_paid(self, debt_id: str, paid_at: datetime) -> Debt | None:
        debt = self._store.debts.get(debt_id)
        if debt is None or debt.is_paid:
            return None
        debt.is_paid = True
        debt.paid_at = paid_at
        debt.updated_at = paid_at
        return replace(debt)


class MemoryWalletRepository:
    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    async def get_balance(self, user_id: str) -> int | None:
        user = self._store.users.get(user_id)
        return user.wallet_balance_cents if user else None

    async def debit_if_sufficient(self, user_id: str, amount_cents: int) -> int | None:
        user = self._store.users.get(user_id)
        if user is None or user.wallet_balance_cents < amount_cents:
            return None
        user.wallet_balance_cents -= amount_cents
        return user.wallet_balance_cents

    async def credit(self, user_id: str, amount_cents: int) -> int | None:
        user = self._store.users.get(user_id)
        if user is None:
            return None
        user.wallet_balance_cents += amount_cents
        return user.wallet_balance_cents

    async def add_entry(
        self,
        *,
        user_id: str,
        amount_cents: int,
        type: str,
        description: str | None,
        reference: str | None,
    ) -> WalletEntry:
        entry = WalletEntry(
            id=_new_id(),
            user_id=user_id,
            amount_cents=amount_cents,
            type=type,
            description=description,
            reference=reference,
            created_at=_utcnow(),
        )
        self._store.wallet_entries[entry.id] = entry
        return replace(entry)

    async def list_entries(self, user_id: str, limit: int, offset: int) -> Sequence[WalletEntry]:
        rows = [replace(e) for e in reversed(self._store.wallet_entries.values()) if e.user_id == user_id]
        return rows[offset : offset + limit]


class MemoryScheduledNotificationRepository:
    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    @staticmethod
    def _copy(notification: ScheduledNotification) -> ScheduledNotification:
        return replace(notification, personalizations=dict(notification.personalizations))

    async def create(
        self,
        *,
        user_id: str,
        template_id: str,
        schedule: Schedule,
        personalizations: dict[str, str],
        enabled: bool,
    ) -> ScheduledNotification:
        now = _utcnow()
        notification = ScheduledNotification(
            id=_new_id(),
            user_id=user_id,
            template_id=template_id,
            schedule=schedule,
            personalizations=dict(personalizations),
            enabled=enabled,
            created_at=now,
            updated_at=now,
        )
        self._store.notifications[notification.id] = notification
        return self._copy(notification)

    async def get(self, notification_id: str) -> ScheduledNotification | None:
        notification = self._store.notifications.get(notification_id)
        return self._copy(notification) if notification else None

    async def list_for_user(self, user_id: str) -> Sequence[ScheduledNotification]:
        return [
            self._copy(n) for n in reversed(self._store.notifications.values()) if n.user_id == user_id
        ]

    async def update(
        self,
        notification_id: str,
        *,
        schedule: Schedule | None = None,
        personalizations: dict[str, str] | None = None,
        enabled: bool | None = None,
    ) -> ScheduledNotification | None:
        notification = self._store.notifications.get(notification_id)
        if notification is None:
            return None
        if schedule is not None:
            notification.schedule = schedule
        if personalizations is not None:
            notification.personalizations = dict(personalizations)
        if enabled is not None:
            notification.enabled = enabled
        notification.updated_at = _utcnow()
        return self._copy(notification)

    async def delete(self, notification_id: str) -> bool:
        return self._store.notifications.pop(notification_id, None) is not None
