"""Input validation shared by every entry point (HTTP handlers, services, seeding)."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from meterpay.core.config import LimitSettings

from .exceptions import InputValidationError
from .money import quantize

# far above any real balance, and small enough that cents fit a 64-bit column
AMOUNT_CEILING = Decimal("1e15")


def validate_meter_number(value: str, pattern: str = LimitSettings().meter_number_pattern) -> str:
    candidate = (value or "").strip()
    if not re.fullmatch(pattern, candidate):
        raise InputValidationError("meterNumber", "meter number must be 11 digits")
    return candidate


def parse_amount(value: Any, field: str = "amount") -> Decimal:
    if isinstance(value, bool) or value is None:
        raise InputValidationError(field, "amount is required")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise InputValidationError(field, f"invalid amount: {value!r}") from exc
    if not amount.is_finite():
        raise InputValidationError(field, f"invalid amount: {value!r}")
    if abs(amount) >= AMOUNT_CEILING:
        raise InputValidationError(field, "amount is too large")
    return quantize(amount)


def validate_positive_amount(value: Any, field: str = "amount") -> Decimal:
    amount = parse_amount(value, field)
    if amount <= 0:
        raise InputValidationError(field, "amount must be greater than zero")
    return amount


def validate_recharge_amount(value: Any, limits: LimitSettings) -> Decimal:
    amount = parse_amount(value)
    if amount < limits.min_amount or amount > limits.max_amount:
        raise InputValidationError(
            "amount",
            f"amount must be between {limits.min_amount} and {limits.max_amount}",
        )
    return amount


def validate_topup_amount(value: Any, limits: LimitSettings) -> Decimal:
    amount = validate_positive_amount(value)
    if amount > limits.max_topup:
        raise InputValidationError("amount", f"top-up cannot exceed {limits.max_topup}")
    return amount


__all__ = [
    "validate_meter_number",
    "parse_amount",
    "validate_positive_amount",
    "validate_recharge_amount",
    "validate_topup_amount",
]
