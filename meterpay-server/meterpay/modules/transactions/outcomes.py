"""Outcome providers deciding whether a card/mobile recharge is approved.

Production wiring always uses :class:`ApprovedOutcome`. The random
:class:`SimulatedOutcome` exists for demos and is only selected when
``payments.simulate_failures`` is switched on.
"""

from __future__ import annotations

import random
from typing import Protocol


class RechargeOutcomeProvider(Protocol):
    def approve(self, *, meter_number: str, amount_cents: int) -> bool:
        ...


class ApprovedOutcome:
    def approve(self, *, meter_number: str, amount_cents: int) -> bool:
        return True


class SimulatedOutcome:
    """Approves with probability ``success_rate``."""

    def __init__(self, success_rate: float = 0.9, rng: random.Random | None = None) -> None:
        if not 0.0 <= success_rate <= 1.0:
            raise ValueError("success_rate must be within [0, 1]")
        self.success_rate = success_rate
        self._rng = rng or random.Random()

    def approve(self, *, meter_number: str, amount_cents: int) -> bool:
        return self._rng.random() < self.success_rate


__all__ = ["RechargeOutcomeProvider", "ApprovedOutcome", "SimulatedOutcome"]
