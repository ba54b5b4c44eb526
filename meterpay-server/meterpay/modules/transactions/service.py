"""Transaction queries and the recharge / top-up payment flows."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from meterpay.core.config import LimitSettings, TariffSettings
from meterpay.modules.common.exceptions import InputValidationError
from meterpay.modules.common.money import to_cents
from meterpay.modules.common.references import make_reference
from meterpay.modules.common.repository import Repositories
from meterpay.modules.common.validators import (
    validate_meter_number,
    validate_recharge_amount,
    validate_topup_amount,
)
from meterpay.modules.meters.service import MeterService
from meterpay.modules.wallets.models import WalletSnapshot
from meterpay.modules.wallets.service import WalletService

from .exceptions import TransactionNotFoundError
from .models import PaymentMethod, Transaction, TransactionStats, TransactionStatus, TransactionType
from .outcomes import ApprovedOutcome, RechargeOutcomeProvider
from .repository import TransactionRepository
from .tokens import estimate_units, format_units, generate_recharge_token

logger = logging.getLogger(__name__)


def parse_payment_method(value: Any) -> PaymentMethod:
    try:
        return PaymentMethod(value)
    except ValueError as exc:
        allowed = ", ".join(method.value for method in PaymentMethod)
        raise InputValidationError("paymentMethod", f"payment method must be one of: {allowed}") from exc


@dataclass(slots=True)
class TransactionService:
    repository: TransactionRepository

    @classmethod
    def from_repositories(cls, repositories: Repositories) -> "TransactionService":
        return cls(repositories.transactions)

    async def list_transactions(
        self,
        user_id: str,
        *,
        status: str | None = None,
        transaction_type: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Transaction]:
        rows = await self.repository.list_for_user(
            user_id,
            status=status,
            transaction_type=transaction_type,
            limit=limit,
            offset=offset,
        )
        return list(rows)

    async def recent_transactions(self, user_id: str, limit: int = 5) -> list[Transaction]:
        return await self.list_transactions(user_id, limit=limit)

    async def get_transaction(self, user_id: str, transaction_id: str) -> Transaction:
        transaction = await self.repository.get(transaction_id)
        if transaction is None or transaction.user_id != user_id:
            raise TransactionNotFoundError(f"transaction {transaction_id} not found")
        return transaction

    async def stats(self, user_id: str) -> TransactionStats:
        return await self.repository.stats_for_user(user_id)


@dataclass(slots=True)
class RechargeResult:
    transaction: Transaction
    wallet: WalletSnapshot | None = None


@dataclass(slots=True)
class TopupResult:
    transaction: Transaction
    wallet: WalletSnapshot


@dataclass(slots=True)
class RechargeService:
    """Creates recharge and wallet top-up transactions."""

    repositories: Repositories
    tariff: TariffSettings = field(default_factory=TariffSettings)
    limits: LimitSettings = field(default_factory=LimitSettings)
    outcomes: RechargeOutcomeProvider = field(default_factory=ApprovedOutcome)

    @property
    def wallet(self) -> WalletService:
        return WalletService.from_repositories(self.repositories)

    @property
    def meters(self) -> MeterService:
        return MeterService.from_repositories(self.repositories, self.limits)

    def quote(self, amount: Decimal) -> tuple[Decimal, Decimal]:
        """Return ``(total, units)`` for a recharge of ``amount``."""
        return amount + self.tariff.service_fee, estimate_units(amount, self.tariff.price_per_unit)

    def display_units(self, amount: Decimal) -> str:
        return format_units(amount, self.tariff.price_per_unit, self.tariff.units_display_places)

    async def create_recharge(
        self,
        *,
        user_id: str,
        meter_number: str,
        amount: Any,
        payment_method: Any,
    ) -> RechargeResult:
        number = validate_meter_number(meter_number, self.limits.meter_number_pattern)
        value = validate_recharge_amount(amount, self.limits)
        method = parse_payment_method(payment_method)
        # registered only after the payment step
        await self.meters.check_available(user_id, number)

        total, units = self.quote(value)
        amount_cents, total_cents = to_cents(value), to_cents(total)

        if not self.outcomes.approve(meter_number=number, amount_cents=amount_cents):
            transaction = await self.repositories.transactions.create(
                user_id=user_id,
                meter_number=number,
                amount_cents=amount_cents,
                total_cents=total_cents,
                status=TransactionStatus.FAILED.value,
                payment_method=method.value,
                transaction_type=TransactionType.RECHARGE.value,
                reference=make_reference("TRX"),
                units=str(units),
            )
            await self.meters.ensure_meter(user_id, number)
            logger.warning("Recharge for meter %s declined (transaction %s)", number, transaction.id)
            return RechargeResult(transaction=transaction)

        snapshot = None
        if method is PaymentMethod.WALLET:
            snapshot, _ = await self.wallet.debit(
                user_id=user_id,
                amount_cents=total_cents,
                description=f"Meter recharge - {number}",
            )
        await self.meters.ensure_meter(user_id, number)

        transaction = await self.repositories.transactions.create(
            user_id=user_id,
            meter_number=number,
            amount_cents=amount_cents,
            total_cents=total_cents,
            status=TransactionStatus.SUCCESS.value,
            payment_method=method.value,
            transaction_type=TransactionType.RECHARGE.value,
            reference=make_reference("TRX"),
            token=generate_recharge_token(),
            units=str(units),
        )
        logger.info(
            "Recharge for meter %s succeeded: amount=%s method=%s transaction=%s",
            number,
            value,
            method.value,
            transaction.id,
        )
        return RechargeResult(transaction=transaction, wallet=snapshot)

    async def add_funds(self, *, user_id: str, amount: Any, payment_method: Any = "card") -> TopupResult:
        value = validate_topup_amount(amount, self.limits)
        method = parse_payment_method(payment_method)
        if method is PaymentMethod.WALLET:
            raise InputValidationError("paymentMethod", "wallet cannot be topped up from itself")
        reference = make_reference("TOP")
        snapshot, _ = await self.wallet.deposit(
            user_id=user_id,
            amount_cents=to_cents(value),
            reference=reference,
        )
        transaction = await self.repositories.transactions.create(
            user_id=user_id,
            meter_number=None,
            amount_cents=to_cents(value),
            total_cents=to_cents(value),
            status=TransactionStatus.SUCCESS.value,
            payment_method=method.value,
            transaction_type=TransactionType.TOPUP.value,
            reference=reference,
        )
        return TopupResult(transaction=transaction, wallet=snapshot)
