"""Simple dependency container for wiring core services."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime
from functools import lru_cache
from typing import Callable
from zoneinfo import ZoneInfo

from meterpay.core.config import Settings, get_settings
from meterpay.infrastructure.database.session import get_engine
from meterpay.infrastructure.memory import MemoryStore
from meterpay.modules.transactions.outcomes import (
    ApprovedOutcome,
    RechargeOutcomeProvider,
    SimulatedOutcome,
)


def build_outcome_provider(settings: Settings) -> RechargeOutcomeProvider:
    payments = settings.payments
    if not payments.simulate_failures:
        return ApprovedOutcome()
    return SimulatedOutcome(success_rate=payments.success_rate, rng=random.Random(payments.seed))


def build_clock(settings: Settings) -> Callable[[], datetime]:
    tz = ZoneInfo(settings.notifications.timezone)
    return lambda: datetime.now(tz)


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    outcomes: RechargeOutcomeProvider = field(default_factory=ApprovedOutcome)
    clock: Callable[[], datetime] = field(default=datetime.now)
    memory_store: MemoryStore = field(default_factory=MemoryStore)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApplicationContainer":
        return cls(
            settings=settings,
            outcomes=build_outcome_provider(settings),
            clock=build_clock(settings),
        )

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (database engine, etc.) are initialised."""
        if not self.settings.uses_memory_storage:
            get_engine(self.settings)


@lru_cache()
def get_container() -> ApplicationContainer:
    container = ApplicationContainer.from_settings(get_settings())
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "build_clock", "build_outcome_provider", "get_container"]
