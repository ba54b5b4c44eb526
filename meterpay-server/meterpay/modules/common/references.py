"""Human-facing references attached to ledger entries and transactions."""

from __future__ import annotations

import secrets


def make_reference(prefix: str) -> str:
    """Return ``PREFIX-nnnnnn`` with a random six-digit suffix."""
    return f"{prefix}-{100000 + secrets.randbelow(900000)}"


__all__ = ["make_reference"]
