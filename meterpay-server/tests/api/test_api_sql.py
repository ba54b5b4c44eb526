"""HTTP API tests against a throwaway SQLite database."""
from datetime import datetime, timezone

from fastapi.testclient import TestClient

from conftest import METER_NUMBER
from meterpay.infrastructure.database.repositories import sql_repositories
from meterpay.infrastructure.database.session import session_scope
from meterpay.modules.debts import DebtService


def _demo_user_id(client: TestClient) -> str:
    return client.get("/api/user/profile").json()["id"]


def _seed_debt(client: TestClient, user_id: str, amount: str) -> str:
    async def create():
        async with session_scope() as session:
            debt = await DebtService.from_repositories(sql_repositories(session)).create_debt(
                user_id=user_id,
                meter_number=METER_NUMBER,
                amount=amount,
                due_date=datetime(2024, 4, 1, tzinfo=timezone.utc),
                category="water",
            )
            return debt.id

    return client.portal.call(create)


def test_demo_user_is_persisted(sql_client):
    first = sql_client.get("/api/user/profile").json()
    second = sql_client.get("/api/user/profile").json()

    assert first["id"] == second["id"]
    assert second["wallet_balance"] == "100.00"


def test_pay_debt_from_wallet(sql_client):
    debt_id = _seed_debt(sql_client, _demo_user_id(sql_client), "35.50")

    response = sql_client.post(f"/api/debts/{debt_id}/pay", json={"paymentMethod": "wallet"})

    assert response.status_code == 200
    assert response.json()["wallet_balance"] == "64.50"
    assert response.json()["debt"]["is_paid"] is True

    again = sql_client.post(f"/api/debts/{debt_id}/pay", json={"paymentMethod": "wallet"})
    assert again.status_code == 409
    assert sql_client.get("/api/wallet").json()["balance"] == "64.50"

    ledger = sql_client.get("/api/wallet/transactions").json()
    assert ledger["total"] == 1
    assert ledger["transactions"][0]["description"] == f"Debt payment - {METER_NUMBER}"


def test_insufficient_funds_leaves_balance(sql_client):
    debt_id = _seed_debt(sql_client, _demo_user_id(sql_client), "150.00")

    response = sql_client.post(f"/api/debts/{debt_id}/pay", json={"paymentMethod": "wallet"})

    assert response.status_code == 400
    assert response.json()["error"] == "insufficient_funds"
    assert sql_client.get("/api/wallet").json()["balance"] == "100.00"
    assert sql_client.get(f"/api/debts/{debt_id}").json()["status"] == "pending"
    assert sql_client.get("/api/transactions").json()["total"] == 0


def test_failed_recharge_rolls_back_implicit_meter(sql_client):
    _demo_user_id(sql_client)

    response = sql_client.post(
        "/api/transactions",
        json={"meterNumber": METER_NUMBER, "amount": 500, "paymentMethod": "wallet"},
    )

    assert response.status_code == 400
    assert sql_client.get("/api/meters").json()["total"] == 0


def test_top_up_above_the_limit_is_rejected(sql_client):
    response = sql_client.post("/api/wallet/add-funds", json={"amount": "100000000000000000"})

    assert response.status_code == 400
    assert response.json()["field"] == "amount"
    assert sql_client.get("/api/wallet").json()["balance"] == "100.00"


def test_recharge_and_stats(sql_client):
    created = sql_client.post(
        "/api/transactions",
        json={"meterNumber": METER_NUMBER, "amount": "20.00", "paymentMethod": "wallet"},
    )
    assert created.status_code == 201
    assert created.json()["wallet_balance"] == "79.50"

    sql_client.post("/api/wallet/add-funds", json={"amount": 10, "paymentMethod": "mobile"})

    stats = sql_client.get("/api/transactions/stats").json()
    assert stats["total_count"] == 2
    assert stats["success_count"] == 2
    assert stats["total_amount"] == "30.00"
    assert sql_client.get("/api/wallet").json()["balance"] == "89.50"
    assert sql_client.get("/api/meters").json()["meters"][0]["meter_number"] == METER_NUMBER


def test_scheduled_notification_round_trip(sql_client):
    created = sql_client.post(
        "/api/notifications/scheduled",
        json={
            "templateId": "payment-reminder",
            "schedule": {"type": "monthly", "time": "09:00", "date": 25},
            "personalizations": {"date": "March 31", "amount": "$35.50"},
        },
    )
    assert created.status_code == 201

    fetched = sql_client.get(f"/api/notifications/scheduled/{created.json()['id']}").json()
    assert fetched["schedule"]["date"] == 25
    assert fetched["schedule_text"] == "Monthly on the 25th at 9:00 AM"
    assert fetched["body"] == "You have an upcoming payment due on March 31. The amount due is $35.50."
