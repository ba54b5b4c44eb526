"""Domain service providers wired from the request repositories and the container."""

from datetime import datetime
from typing import Callable

from fastapi import Depends

from meterpay.core.container import ApplicationContainer
from meterpay.modules.common.repository import Repositories
from meterpay.modules.debts import DebtService
from meterpay.modules.meters import MeterService
from meterpay.modules.notifications import ScheduledNotificationService
from meterpay.modules.transactions import RechargeService, TransactionService
from meterpay.modules.wallets import WalletService

from .database import get_app_container, get_repositories


def get_clock(container: ApplicationContainer = Depends(get_app_container)) -> Callable[[], datetime]:
    return container.clock


def get_meter_service(
    repositories: Repositories = Depends(get_repositories),
    container: ApplicationContainer = Depends(get_app_container),
) -> MeterService:
    return MeterService.from_repositories(repositories, container.settings.limits)


def get_transaction_service(repositories: Repositories = Depends(get_repositories)) -> TransactionService:
    return TransactionService.from_repositories(repositories)


def get_recharge_service(
    repositories: Repositories = Depends(get_repositories),
    container: ApplicationContainer = Depends(get_app_container),
) -> RechargeService:
    settings = container.settings
    return RechargeService(
        repositories,
        tariff=settings.tariff,
        limits=settings.limits,
        outcomes=container.outcomes,
    )


def get_debt_service(
    repositories: Repositories = Depends(get_repositories),
    container: ApplicationContainer = Depends(get_app_container),
) -> DebtService:
    return DebtService.from_repositories(repositories, container.settings.limits)


def get_wallet_service(repositories: Repositories = Depends(get_repositories)) -> WalletService:
    return WalletService.from_repositories(repositories)


def get_notification_service(repositories: Repositories = Depends(get_repositories)) -> ScheduledNotificationService:
    return ScheduledNotificationService.from_repositories(repositories)


__all__ = [
    "get_clock",
    "get_meter_service",
    "get_transaction_service",
    "get_recharge_service",
    "get_debt_service",
    "get_wallet_service",
    "get_notification_service",
]
