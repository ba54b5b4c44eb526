"""Reusable FastAPI dependencies."""

from .account import get_current_user, get_user_service
from .database import get_app_container, get_repositories
from .services import (
    get_clock,
    get_debt_service,
    get_meter_service,
    get_notification_service,
    get_recharge_service,
    get_transaction_service,
    get_wallet_service,
)

__all__ = [
    "get_app_container",
    "get_repositories",
    "get_current_user",
    "get_user_service",
    "get_clock",
    "get_debt_service",
    "get_meter_service",
    "get_notification_service",
    "get_recharge_service",
    "get_transaction_service",
    "get_wallet_service",
]
