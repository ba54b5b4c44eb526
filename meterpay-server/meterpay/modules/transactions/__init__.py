"""Transaction domain exports"""

from .exceptions import TransactionNotFoundError
from .models import PaymentMethod, Transaction, TransactionStats, TransactionStatus, TransactionType
from .outcomes import ApprovedOutcome, RechargeOutcomeProvider, SimulatedOutcome
from .service import RechargeService, RechargeResult, TopupResult, TransactionService

__all__ = [
    "TransactionNotFoundError",
    "PaymentMethod",
    "Transaction",
    "TransactionStats",
    "TransactionStatus",
    "TransactionType",
    "ApprovedOutcome",
    "RechargeOutcomeProvider",
    "SimulatedOutcome",
    "RechargeService",
    "RechargeResult",
    "TopupResult",
    "TransactionService",
]
