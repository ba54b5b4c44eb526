"""HTTP API tests against the in-memory backend."""
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from conftest import METER_NUMBER, make_settings
from meterpay.main import create_app
from meterpay.modules.debts import DebtService


def _seed_debt(client: TestClient, user_id: str, amount: str) -> str:
    repositories = client.app.state.container.memory_store.repositories()

    async def create():
        debt = await DebtService.from_repositories(repositories).create_debt(
            user_id=user_id,
            meter_number=METER_NUMBER,
            amount=amount,
            due_date=datetime(2024, 4, 1, tzinfo=timezone.utc),
        )
        return debt.id

    return client.portal.call(create)


def _profile(client: TestClient) -> dict:
    response = client.get("/api/user/profile")
    assert response.status_code == 200
    return response.json()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_anonymous_requests_use_the_demo_user(client):
    profile = _profile(client)

    assert profile["username"] == "demo"
    assert profile["wallet_balance"] == "100.00"
    assert _profile(client)["id"] == profile["id"]


def test_update_profile_only_touches_sent_fields(client):
    response = client.put("/api/user/profile", json={"phone": "555-0100"})

    assert response.status_code == 200
    body = response.json()
    assert body["phone"] == "555-0100"
    assert body["full_name"] == "Demo Customer"


def test_meter_registration(client):
    created = client.post("/api/meters", json={"meterNumber": METER_NUMBER, "nickname": "Home"})
    assert created.status_code == 201
    assert created.json()["type"] == "STS"

    again = client.post("/api/meters", json={"meter_number": METER_NUMBER})
    assert again.status_code == 200
    assert again.json()["id"] == created.json()["id"]

    listing = client.get("/api/meters").json()
    assert listing["total"] == 1

    renamed = client.put(f"/api/meters/{created.json()['id']}", json={"nickname": "Flat"})
    assert renamed.json()["nickname"] == "Flat"


def test_bad_meter_number_is_a_field_error(client):
    response = client.post("/api/meters", json={"meterNumber": "12345"})

    assert response.status_code == 400
    assert response.json() == {
        "error": "validation_error",
        "detail": "meter number must be 11 digits",
        "field": "meterNumber",
    }


def test_unknown_meter_is_404(client):
    response = client.get("/api/meters/missing")

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_wallet_recharge(client):
    response = client.post(
        "/api/transactions",
        json={"meterNumber": METER_NUMBER, "amount": 20, "paymentMethod": "wallet"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["transaction"]["status"] == "success"
    assert body["transaction"]["amount"] == "20.00"
    assert body["transaction"]["total"] == "20.50"
    assert body["transaction"]["units"] == "44.44"
    assert body["units_display"] == "44.4"
    assert body["wallet_balance"] == "79.50"

    assert client.get("/api/wallet").json() == {"balance": "79.50", "currency": "USD"}
    ledger = client.get("/api/wallet/transactions").json()
    assert ledger["total"] == 1
    assert ledger["transactions"][0]["type"] == "payment"
    assert client.get("/api/meters").json()["meters"][0]["meter_number"] == METER_NUMBER

    tx_id = body["transaction"]["id"]
    assert client.get(f"/api/transactions/{tx_id}").json()["token"] == body["transaction"]["token"]


def test_recharge_amount_out_of_range(client):
    response = client.post(
        "/api/transactions",
        json={"meterNumber": METER_NUMBER, "amount": "4.99", "paymentMethod": "card"},
    )

    assert response.status_code == 400
    assert response.json()["field"] == "amount"


@pytest.mark.parametrize("path, extra", [("/api/transactions", {"meterNumber": METER_NUMBER, "paymentMethod": "card"}), ("/api/wallet/add-funds", {})])
def test_enormous_amount_is_a_field_error(client, path, extra):
    response = client.post(path, json={"amount": "1e30", **extra})

    assert response.status_code == 400
    assert response.json()["field"] == "amount"


def test_recharge_beyond_wallet_balance(client):
    response = client.post(
        "/api/transactions",
        json={"meterNumber": METER_NUMBER, "amount": 100, "paymentMethod": "wallet"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "insufficient_funds"
    assert _profile(client)["wallet_balance"] == "100.00"
    assert client.get("/api/transactions").json()["total"] == 0
    assert client.get("/api/meters").json()["total"] == 0


def test_transaction_history_and_stats(client):
    for amount in (10, 30):
        client.post("/api/transactions", json={"meterNumber": METER_NUMBER, "amount": amount, "paymentMethod": "card"})

    history = client.get("/api/transactions", params={"type": "recharge"}).json()
    assert history["total"] == 2
    assert history["transactions"][0]["amount"] == "30.00"
    assert client.get("/api/transactions/recent", params={"limit": 1}).json()["total"] == 1

    stats = client.get("/api/transactions/stats").json()
    assert stats == {"total_amount": "40.00", "total_count": 2, "success_count": 2, "average_amount": "20.00"}


def test_pay_debt_from_wallet(client):
    debt_id = _seed_debt(client, _profile(client)["id"], "35.50")

    debts = client.get("/api/debts").json()
    assert debts["total_due"] == "35.50"

    response = client.post(f"/api/debts/{debt_id}/pay", json={"paymentMethod": "wallet"})
    assert response.status_code == 200
    body = response.json()
    assert body["wallet_balance"] == "64.50"
    assert body["debt"]["status"] == "paid"
    assert body["transaction"]["transaction_type"] == "debt_payment"

    again = client.post(f"/api/debts/{debt_id}/pay", json={"paymentMethod": "wallet"})
    assert again.status_code == 409
    assert _profile(client)["wallet_balance"] == "64.50"
    assert client.get("/api/debts", params={"include_paid": "false"}).json()["total"] == 0


def test_pay_debt_with_insufficient_funds(client):
    debt_id = _seed_debt(client, _profile(client)["id"], "150.00")

    response = client.post(f"/api/debts/{debt_id}/pay", json={"paymentMethod": "wallet"})

    assert response.status_code == 400
    assert response.json()["error"] == "insufficient_funds"
    assert client.get(f"/api/debts/{debt_id}").json()["is_paid"] is False
    assert client.get("/api/wallet/transactions").json()["total"] == 0


def test_add_funds(client):
    response = client.post("/api/wallet/add-funds", json={"amount": "25"})

    assert response.status_code == 201
    assert response.json()["balance"] == "125.00"
    assert response.json()["transaction"]["transaction_type"] == "topup"

    bad = client.post("/api/wallet/add-funds", json={"amount": "lots"})
    assert bad.status_code == 400
    assert bad.json()["field"] == "amount"


def test_notification_templates(client):
    templates = client.get("/api/notifications/templates").json()["templates"]

    assert len(templates) == 8
    reminder = next(t for t in templates if t["id"] == "payment-reminder")
    assert reminder["default_schedule"]["date"] == 25


def test_scheduled_notification_lifecycle(client):
    created = client.post(
        "/api/notifications/scheduled",
        json={"templateId": "daily-energy-tip", "schedule": {"type": "daily", "time": "08:00"}},
    )
    assert created.status_code == 201
    body = created.json()
    assert body["schedule_text"] == "Daily at 8:00 AM"
    assert body["personalizations"]["tip"]
    assert body["next_trigger_at"] is not None
    notification_id = body["id"]

    toggled = client.post(f"/api/notifications/scheduled/{notification_id}/toggle").json()
    assert toggled["enabled"] is False
    assert toggled["next_trigger_at"] is None

    bad = client.patch(
        f"/api/notifications/scheduled/{notification_id}",
        json={"schedule": {"type": "daily", "time": "8am"}},
    )
    assert bad.status_code == 400
    assert bad.json()["field"] == "time"

    weekly = client.patch(
        f"/api/notifications/scheduled/{notification_id}",
        json={"schedule": {"type": "weekly", "time": "18:30", "days": [5, 1]}, "enabled": True},
    )
    assert weekly.status_code == 200
    assert weekly.json()["schedule_text"] == "Weekly on Mon, Fri at 6:30 PM"

    assert client.get("/api/notifications/scheduled").json()["total"] == 1
    assert client.delete(f"/api/notifications/scheduled/{notification_id}").status_code == 204
    assert client.get(f"/api/notifications/scheduled/{notification_id}").status_code == 404


def test_register_and_login():
    settings = make_settings(storage={"backend": "memory"}, security={"auth_required": True})
    with TestClient(create_app(settings)) as client:
        assert client.get("/api/user/profile").status_code == 401

        registered = client.post("/api/auth/register", json={"username": "carol", "password": "secret123"})
        assert registered.status_code == 201
        assert registered.json()["user"]["wallet_balance"] == "0.00"

        assert client.post("/api/auth/register", json={"username": "carol", "password": "secret123"}).status_code == 409

        wrong = client.post("/api/auth/login", json={"username": "carol", "password": "nope"})
        assert wrong.status_code == 401
        assert wrong.json()["error"] == "invalid_credentials"

        token = client.post("/api/auth/login", json={"username": "carol", "password": "secret123"}).json()["access_token"]
        profile = client.get("/api/user/profile", headers={"Authorization": f"Bearer {token}"})
        assert profile.status_code == 200
        assert profile.json()["username"] == "carol"

        garbage = client.get("/api/user/profile", headers={"Authorization": "Bearer not-a-token"})
        assert garbage.status_code == 401


@pytest.mark.parametrize("success_rate, expected", [(0.0, "failed"), (1.0, "success")])
def test_simulated_failures(success_rate, expected):
    settings = make_settings(
        storage={"backend": "memory"},
        payments={"simulate_failures": True, "success_rate": success_rate},
    )
    with TestClient(create_app(settings)) as client:
        response = client.post(
            "/api/transactions",
            json={"meterNumber": METER_NUMBER, "amount": 20, "paymentMethod": "wallet"},
        )
        assert response.status_code == 201
        assert response.json()["transaction"]["status"] == expected
        balance = "100.00" if expected == "failed" else "79.50"
        assert _profile(client)["wallet_balance"] == balance
