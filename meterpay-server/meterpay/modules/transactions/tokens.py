"""Recharge token generation and unit estimates."""

from __future__ import annotations

import secrets
import string
from decimal import ROUND_HALF_UP, Decimal

TOKEN_ALPHABET = string.ascii_uppercase + string.digits
TOKEN_LENGTH = 20
TOKEN_GROUP = 4


def generate_recharge_token(length: int = TOKEN_LENGTH) -> str:
    """Return an opaque token such as ``ABCD-1234-EFGH-5678-IJKL``."""
    raw = "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))
    return "-".join(raw[i : i + TOKEN_GROUP] for i in range(0, length, TOKEN_GROUP))


def estimate_units(amount: Decimal, price_per_unit: Decimal) -> Decimal:
    """Units bought for ``amount``; display only, not metering data."""
    return (amount / price_per_unit).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_units(amount: Decimal, price_per_unit: Decimal, places: int = 1) -> str:
    exponent = Decimal(1).scaleb(-places)
    return str((amount / price_per_unit).quantize(exponent, rounding=ROUND_HALF_UP))


__all__ = [
    "TOKEN_ALPHABET",
    "generate_recharge_token",
    "estimate_units",
    "format_units",
]
