"""
Pytest configuration and fixtures for MeterPay tests.

Service tests run against the in-memory backend. API tests build a fresh app
per test, either on the memory backend or on a throwaway SQLite file.
"""
import pathlib
import sys

import pytest
from fastapi.testclient import TestClient

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from meterpay.core.config import Settings  # noqa: E402
from meterpay.infrastructure.memory import MemoryStore  # noqa: E402
from meterpay.main import create_app  # noqa: E402

METER_NUMBER = "45700012345"
OTHER_METER_NUMBER = "45700067890"


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def repositories(store):
    return store.repositories()


@pytest.fixture
async def user(repositories):
    """A user holding 100.00 in the wallet."""
    return await repositories.users.create_user(
        username="alice",
        password_hash="not-a-real-hash",
        full_name="Alice Example",
        email="alice@example.com",
        wallet_balance_cents=10_000,
    )


@pytest.fixture
async def other_user(repositories):
    return await repositories.users.create_user(
        username="bob",
        password_hash="not-a-real-hash",
        full_name="Bob Example",
        email=None,
    )


@pytest.fixture
def memory_settings() -> Settings:
    return make_settings(storage={"backend": "memory"})


@pytest.fixture
def client(memory_settings):
    app = create_app(memory_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sql_client(tmp_path):
    settings = make_settings(database={"url": f"sqlite+aiosqlite:///{tmp_path / 'meterpay-test.db'}"})
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
