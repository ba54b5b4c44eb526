"""Repository protocol for meters."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from .models import Meter


class MeterRepository(Protocol):
    async def get(self, meter_id: str) -> Meter | None:
        ...

    async def get_by_number(self, meter_number: str) -> Meter | None:
        ...

    async def list_for_user(self, user_id: str, limit: int | None = None) -> Sequence[Meter]:
        """Newest first."""
        ...

    async def create(
        self,
        *,
        user_id: str,
        meter_number: str,
        nickname: str | None,
        address: str | None,
        customer_name: str | None,
        type: str,
        status: str,
    ) -> Meter:
        ...

    async def update(self, meter_id: str, changes: dict[str, Any]) -> Meter | None:
        ...
