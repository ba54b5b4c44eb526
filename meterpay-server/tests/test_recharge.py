"""Recharge and wallet top-up flows on the in-memory backend."""
import random
import re
from decimal import Decimal

import pytest

from conftest import METER_NUMBER, OTHER_METER_NUMBER
from meterpay.core.config import TariffSettings
from meterpay.modules.common.exceptions import ConflictError, InputValidationError, InsufficientFundsError
from meterpay.modules.meters import MeterService
from meterpay.modules.transactions import (
    RechargeService,
    SimulatedOutcome,
    TransactionNotFoundError,
    TransactionService,
)


@pytest.fixture
def recharges(repositories) -> RechargeService:
    return RechargeService(repositories)


async def test_wallet_recharge_debits_total(recharges, repositories, store, user):
    result = await recharges.create_recharge(
        user_id=user.id, meter_number=METER_NUMBER, amount="20", payment_method="wallet"
    )

    tx = result.transaction
    assert tx.status == "success"
    assert tx.amount == Decimal("20.00")
    assert tx.total == Decimal("20.50")
    assert tx.units == "44.44"
    assert re.fullmatch(r"[A-Z0-9]{4}(-[A-Z0-9]{4}){4}", tx.token)
    assert tx.reference.startswith("TRX-")
    assert result.wallet.balance == Decimal("79.50")
    assert store.users[user.id].wallet_balance_cents == 7950

    [entry] = await repositories.wallet.list_entries(user.id, limit=10, offset=0)
    assert entry.type == "payment"
    assert entry.amount == Decimal("20.50")
    assert entry.description == f"Meter recharge - {METER_NUMBER}"


async def test_recharge_registers_unknown_meter(recharges, repositories, user):
    await recharges.create_recharge(user_id=user.id, meter_number=METER_NUMBER, amount=10, payment_method="card")

    meters = await MeterService.from_repositories(repositories).list_meters(user.id)
    assert [m.meter_number for m in meters] == [METER_NUMBER]
    assert meters[0].type == "STS"


async def test_card_recharge_does_not_touch_wallet(recharges, store, user):
    result = await recharges.create_recharge(
        user_id=user.id, meter_number=METER_NUMBER, amount="50", payment_method="card"
    )

    assert result.wallet is None
    assert result.transaction.payment_method == "card"
    assert store.users[user.id].wallet_balance_cents == 10_000
    assert store.wallet_entries == {}


async def test_tariff_comes_from_settings(repositories, user):
    service = RechargeService(repositories, tariff=TariffSettings(price_per_unit=Decimal("0.50"), service_fee=Decimal("1.00")))

    result = await service.create_recharge(user_id=user.id, meter_number=METER_NUMBER, amount="20", payment_method="card")

    assert result.transaction.total == Decimal("21.00")
    assert result.transaction.units == "40.00"


async def test_declined_recharge_is_recorded_as_failed(repositories, store, user):
    service = RechargeService(repositories, outcomes=SimulatedOutcome(success_rate=0.0))

    result = await service.create_recharge(
        user_id=user.id, meter_number=METER_NUMBER, amount="20", payment_method="wallet"
    )

    assert result.transaction.status == "failed"
    assert result.transaction.token is None
    assert result.wallet is None
    assert store.users[user.id].wallet_balance_cents == 10_000
    assert store.wallet_entries == {}
    assert len(store.transactions) == 1


def test_simulated_outcome_is_reproducible_with_a_seed():
    first = SimulatedOutcome(0.5, random.Random(7))
    second = SimulatedOutcome(0.5, random.Random(7))
    runs = [(first.approve(meter_number=METER_NUMBER, amount_cents=100), second.approve(meter_number=METER_NUMBER, amount_cents=100)) for _ in range(20)]
    assert all(a == b for a, b in runs)


def test_simulated_outcome_rejects_bad_rate():
    with pytest.raises(ValueError):
        SimulatedOutcome(1.5)


async def test_insufficient_wallet_balance(recharges, store, user):
    store.users[user.id].wallet_balance_cents = 1_000

    with pytest.raises(InsufficientFundsError):
        await recharges.create_recharge(user_id=user.id, meter_number=METER_NUMBER, amount="20", payment_method="wallet")

    assert store.users[user.id].wallet_balance_cents == 1_000
    assert store.transactions == {}
    assert store.wallet_entries == {}
    assert store.meters == {}


@pytest.mark.parametrize(
    "meter_number, amount, method, field",
    [
        ("123", "20", "card", "meterNumber"),
        (METER_NUMBER, "4", "card", "amount"),
        (METER_NUMBER, "1001", "card", "amount"),
        (METER_NUMBER, "abc", "card", "amount"),
        (METER_NUMBER, "20", "bitcoin", "paymentMethod"),
    ],
)
async def test_recharge_input_is_validated(recharges, store, user, meter_number, amount, method, field):
    with pytest.raises(InputValidationError) as excinfo:
        await recharges.create_recharge(user_id=user.id, meter_number=meter_number, amount=amount, payment_method=method)

    assert excinfo.value.field == field
    assert store.transactions == {}


async def test_meter_of_another_user_is_a_conflict(recharges, repositories, user, other_user):
    await MeterService.from_repositories(repositories).add_meter(other_user.id, OTHER_METER_NUMBER)

    with pytest.raises(ConflictError):
        await recharges.create_recharge(user_id=user.id, meter_number=OTHER_METER_NUMBER, amount="20", payment_method="card")


async def test_add_funds(recharges, repositories, store, user):
    result = await recharges.add_funds(user_id=user.id, amount="25.00")

    assert result.wallet.balance == Decimal("125.00")
    assert result.transaction.transaction_type == "topup"
    assert result.transaction.status == "success"
    assert result.transaction.reference.startswith("TOP-")
    [entry] = await repositories.wallet.list_entries(user.id, limit=10, offset=0)
    assert entry.type == "deposit"
    assert entry.reference == result.transaction.reference


async def test_add_funds_rejects_wallet_and_non_positive(recharges, store, user):
    with pytest.raises(InputValidationError):
        await recharges.add_funds(user_id=user.id, amount="10", payment_method="wallet")
    with pytest.raises(InputValidationError):
        await recharges.add_funds(user_id=user.id, amount="-1")
    with pytest.raises(InputValidationError):
        await recharges.add_funds(user_id=user.id, amount="100000000000000000")
    assert store.users[user.id].wallet_balance_cents == 10_000


async def test_transaction_queries(repositories, user, other_user):
    approved = RechargeService(repositories)
    declined = RechargeService(repositories, outcomes=SimulatedOutcome(success_rate=0.0))
    await approved.create_recharge(user_id=user.id, meter_number=METER_NUMBER, amount="20", payment_method="card")
    await approved.create_recharge(user_id=user.id, meter_number=METER_NUMBER, amount="40", payment_method="card")
    failed = await declined.create_recharge(user_id=user.id, meter_number=METER_NUMBER, amount="10", payment_method="card")
    service = TransactionService.from_repositories(repositories)

    stats = await service.stats(user.id)
    assert stats.total_count == 3
    assert stats.success_count == 2
    assert stats.total_amount == Decimal("60.00")
    assert stats.average_amount == Decimal("30.00")

    recent = await service.recent_transactions(user.id, limit=2)
    assert [tx.status for tx in recent] == ["failed", "success"]
    assert len(await service.list_transactions(user.id, status="success")) == 2

    assert (await service.get_transaction(user.id, failed.transaction.id)).status == "failed"
    with pytest.raises(TransactionNotFoundError):
        await service.get_transaction(other_user.id, failed.transaction.id)
