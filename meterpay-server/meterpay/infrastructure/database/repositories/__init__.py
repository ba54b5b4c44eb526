"""SQLAlchemy-backed repository implementations."""

from sqlalchemy.ext.asyncio import AsyncSession

from meterpay.modules.common.repository import Repositories

from .debt_repository import SqlDebtRepository
from .meter_repository import SqlMeterRepository
from .notification_repository import SqlScheduledNotificationRepository
from .transaction_repository import SqlTransactionRepository
from .user_repository import SqlUserRepository
from .wallet_repository import SqlWalletRepository


def sql_repositories(session: AsyncSession) -> Repositories:
    """Bundle every SQL repository around one request session."""
    return Repositories(
        users=SqlUserRepository(session),
        meters=SqlMeterRepository(session),
        transactions=SqlTransactionRepository(session),
        debts=SqlDebtRepository(session),
        wallet=SqlWalletRepository(session),
        notifications=SqlScheduledNotificationRepository(session),
    )


__all__ = [
    "SqlDebtRepository",
    "SqlMeterRepository",
    "SqlScheduledNotificationRepository",
    "SqlTransactionRepository",
    "SqlUserRepository",
    "SqlWalletRepository",
    "sql_repositories",
]
