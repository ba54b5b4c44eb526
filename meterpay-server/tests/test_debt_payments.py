"""Debt payment flows on the in-memory backend."""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from conftest import METER_NUMBER
from meterpay.modules.common.exceptions import ConflictError, InputValidationError, InsufficientFundsError
from meterpay.modules.debts import DebtAlreadyPaidError, DebtNotFoundError, DebtService
from meterpay.modules.transactions import TransactionService

DUE = datetime(2024, 4, 1, tzinfo=timezone.utc)


@pytest.fixture
def debts(repositories) -> DebtService:
    return DebtService.from_repositories(repositories)


async def _create_debt(debts, user, amount="35.50", **kwargs):
    return await debts.create_debt(
        user_id=user.id,
        meter_number=kwargs.pop("meter_number", METER_NUMBER),
        amount=amount,
        due_date=kwargs.pop("due_date", DUE),
        **kwargs,
    )


async def test_wallet_payment_settles_debt(debts, repositories, store, user):
    debt = await _create_debt(debts, user)

    payment = await debts.pay_debt(user.id, debt.id, "wallet")

    assert payment.wallet.balance == Decimal("64.50")
    assert store.users[user.id].wallet_balance_cents == 6450
    assert payment.debt.is_paid is True
    assert payment.debt.status == "paid"
    assert payment.debt.paid_at is not None

    entries = await repositories.wallet.list_entries(user.id, limit=10, offset=0)
    assert len(entries) == 1
    assert entries[0].type == "payment"
    assert entries[0].amount == Decimal("35.50")
    assert entries[0].description == f"Debt payment - {METER_NUMBER}"

    transactions = await TransactionService.from_repositories(repositories).list_transactions(user.id)
    assert len(transactions) == 1
    assert transactions[0].transaction_type == "debt_payment"
    assert transactions[0].status == "success"
    assert transactions[0].amount == transactions[0].total == Decimal("35.50")
    assert transactions[0].reference.startswith("DEBT-")


async def test_insufficient_funds_changes_nothing(debts, repositories, store, user):
    debt = await _create_debt(debts, user, amount="150.00")

    with pytest.raises(InsufficientFundsError):
        await debts.pay_debt(user.id, debt.id, "wallet")

    assert store.users[user.id].wallet_balance_cents == 10_000
    assert store.wallet_entries == {}
    assert store.transactions == {}
    assert (await debts.get_debt(user.id, debt.id)).is_paid is False


async def test_exact_balance_can_be_spent(debts, store, user):
    debt = await _create_debt(debts, user, amount="100.00")

    payment = await debts.pay_debt(user.id, debt.id, "wallet")

    assert payment.wallet.balance_cents == 0


async def test_paying_twice_is_a_conflict(debts, store, user):
    debt = await _create_debt(debts, user)
    await debts.pay_debt(user.id, debt.id, "wallet")

    with pytest.raises(DebtAlreadyPaidError) as excinfo:
        await debts.pay_debt(user.id, debt.id, "wallet")

    assert isinstance(excinfo.value, ConflictError)
    assert store.users[user.id].wallet_balance_cents == 6450
    assert len(store.transactions) == 1
    assert len(store.wallet_entries) == 1


async def test_card_payment_leaves_wallet_alone(debts, store, user):
    debt = await _create_debt(debts, user)

    payment = await debts.pay_debt(user.id, debt.id, "card")

    assert payment.wallet is None
    assert payment.transaction.payment_method == "card"
    assert store.users[user.id].wallet_balance_cents == 10_000
    assert store.wallet_entries == {}


async def test_other_users_debt_is_not_found(debts, user, other_user):
    debt = await _create_debt(debts, other_user)

    with pytest.raises(DebtNotFoundError):
        await debts.pay_debt(user.id, debt.id, "card")


async def test_unknown_debt_is_not_found(debts, user):
    with pytest.raises(DebtNotFoundError):
        await debts.pay_debt(user.id, "missing", "card")


async def test_unknown_payment_method_is_rejected(debts, store, user):
    debt = await _create_debt(debts, user)

    with pytest.raises(InputValidationError) as excinfo:
        await debts.pay_debt(user.id, debt.id, "cash")

    assert excinfo.value.field == "paymentMethod"
    assert store.transactions == {}


async def test_debts_are_listed_by_due_date(debts, user):
    later = await _create_debt(debts, user, due_date=DUE + timedelta(days=10))
    sooner = await _create_debt(debts, user, due_date=DUE)
    await debts.pay_debt(user.id, later.id, "card")

    assert [d.id for d in await debts.list_debts(user.id)] == [sooner.id, later.id]
    assert [d.id for d in await debts.list_debts(user.id, include_paid=False)] == [sooner.id]


async def test_create_debt_validates_input(debts, user):
    with pytest.raises(InputValidationError) as excinfo:
        await _create_debt(debts, user, category="gas")
    assert excinfo.value.field == "category"

    with pytest.raises(InputValidationError) as excinfo:
        await _create_debt(debts, user, amount="0")
    assert excinfo.value.field == "amount"
