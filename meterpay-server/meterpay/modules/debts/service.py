"""Debt domain service: listing bills and settling them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

from meterpay.core.config import LimitSettings
from meterpay.modules.common.exceptions import InputValidationError
from meterpay.modules.common.money import to_cents
from meterpay.modules.common.references import make_reference
from meterpay.modules.common.repository import Repositories
from meterpay.modules.common.validators import validate_meter_number, validate_positive_amount
from meterpay.modules.transactions.models import PaymentMethod, TransactionStatus, TransactionType
from meterpay.modules.transactions.service import parse_payment_method
from meterpay.modules.wallets.service import WalletService

from .exceptions import DebtAlreadyPaidError, DebtNotFoundError
from .models import Debt, DebtCategory, DebtPayment

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class DebtService:
    repositories: Repositories
    limits: LimitSettings = field(default_factory=LimitSettings)
    clock: Callable[[], datetime] = _utcnow

    @classmethod
    def from_repositories(cls, repositories: Repositories, limits: LimitSettings | None = None) -> "DebtService":
        return cls(repositories, limits or LimitSettings())

    async def list_debts(self, user_id: str, include_paid: bool = True) -> list[Debt]:
        return list(await self.repositories.debts.list_for_user(user_id, include_paid=include_paid))

    async def get_debt(self, user_id: str, debt_id: str) -> Debt:
        debt = await self.repositories.debts.get(debt_id)
        if debt is None or debt.user_id != user_id:
            raise DebtNotFoundError(f"debt {debt_id} not found")
        return debt

    async def create_debt(
        self,
        *,
        user_id: str,
        meter_number: str,
        amount: Any,
        due_date: datetime,
        category: str = DebtCategory.ELECTRICITY.value,
        description: str | None = None,
    ) -> Debt:
        try:
            category = DebtCategory(category).value
        except ValueError as exc:
            raise InputValidationError("category", f"unknown debt category: {category}") from exc
        return await self.repositories.debts.create(
            user_id=user_id,
            meter_number=validate_meter_number(meter_number, self.limits.meter_number_pattern),
            amount_cents=to_cents(validate_positive_amount(amount)),
            category=category,
            due_date=due_date,
            description=description,
        )

    async def pay_debt(self, user_id: str, debt_id: str, payment_method: Any) -> DebtPayment:
        """Settle a pending debt.

        All checks run before the first write: a missing debt, an already paid
        debt or an uncovered wallet debit leave balance and ledgers untouched.
        """
        method = parse_payment_method(payment_method)
        debt = await self.get_debt(user_id, debt_id)
        if debt.is_paid:
            raise DebtAlreadyPaidError(f"debt {debt_id} has already been paid")

        snapshot = None
        if method is PaymentMethod.WALLET:
            snapshot, _ = await WalletService.from_repositories(self.repositories).debit(
                user_id=user_id,
                amount_cents=debt.amount_cents,
                description=f"Debt payment - {debt.meter_number}",
            )

        paid = await self.repositories.debts.mark_paid(debt.id, self.clock())
        if paid is None:
            # Lost a race with a concurrent payment; the session rollback undoes the debit.
            raise DebtAlreadyPaidError(f"debt {debt_id} has already been paid")

        transaction = await self.repositories.transactions.create(
            user_id=user_id,
            meter_number=debt.meter_number,
            amount_cents=debt.amount_cents,
            total_cents=debt.amount_cents,
            status=TransactionStatus.SUCCESS.value,
            payment_method=method.value,
            transaction_type=TransactionType.DEBT_PAYMENT.value,
            reference=make_reference("DEBT"),
        )
        logger.info("Debt %s paid by user %s via %s", debt.id, user_id, method.value)
        return DebtPayment(debt=paid, transaction=transaction, wallet=snapshot)
