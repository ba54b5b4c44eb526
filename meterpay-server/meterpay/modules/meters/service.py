"""Meter domain service."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from meterpay.core.config import LimitSettings
from meterpay.modules.common.exceptions import InputValidationError
from meterpay.modules.common.repository import Repositories
from meterpay.modules.common.validators import validate_meter_number

from .exceptions import MeterNotFoundError, MeterOwnershipError
from .models import Meter, MeterUpdateInput
from .repository import MeterRepository

logger = logging.getLogger(__name__)

METER_STATUSES = {"active", "inactive"}


@dataclass(slots=True)
class MeterService:
    repository: MeterRepository
    limits: LimitSettings = field(default_factory=LimitSettings)

    @classmethod
    def from_repositories(cls, repositories: Repositories, limits: LimitSettings | None = None) -> "MeterService":
        return cls(repositories.meters, limits or LimitSettings())

    async def list_meters(self, user_id: str) -> list[Meter]:
        return list(await self.repository.list_for_user(user_id))

    async def recent_meters(self, user_id: str, limit: int = 5) -> list[Meter]:
        return list(await self.repository.list_for_user(user_id, limit=limit))

    async def get_meter(self, user_id: str, meter_id: str) -> Meter:
        meter = await self.repository.get(meter_id)
        if meter is None or meter.user_id != user_id:
            raise MeterNotFoundError(f"meter {meter_id} not found")
        return meter

    async def add_meter(
        self,
        user_id: str,
        meter_number: str,
        *,
        nickname: str | None = None,
        address: str | None = None,
        customer_name: str | None = None,
        type: str | None = None,
        status: str | None = None,
    ) -> tuple[Meter, bool]:
        """Register a meter; returns ``(meter, created)``.

        Adding a number that is already registered to the same user returns the
        existing meter, filling in its nickname if it had none.
        """
        number = validate_meter_number(meter_number, self.limits.meter_number_pattern)
        existing = await self.check_available(user_id, number)
        if existing is not None:
            if not existing.nickname and nickname:
                existing = await self.repository.update(existing.id, {"nickname": nickname}) or existing
            return existing, False

        meter = await self.repository.create(
            user_id=user_id,
            meter_number=number,
            nickname=nickname,
            address=address,
            customer_name=customer_name,
            type=type or "STS",
            status=self._check_status(status or "active"),
        )
        logger.info("Meter %s added for user %s", meter.meter_number, user_id)
        return meter, True

    async def check_available(self, user_id: str, meter_number: str) -> Meter | None:
        """Return the caller's meter with this number, if any, without registering it."""
        existing = await self.repository.get_by_number(meter_number)
        if existing is not None and existing.user_id != user_id:
            raise MeterOwnershipError(f"meter {meter_number} is registered to another account")
        return existing

    async def ensure_meter(self, user_id: str, meter_number: str) -> Meter:
        meter, _ = await self.add_meter(user_id, meter_number)
        return meter

    async def update_meter(self, user_id: str, meter_id: str, payload: MeterUpdateInput) -> Meter:
        await self.get_meter(user_id, meter_id)
        changes = payload.changes()
        if "status" in changes:
            changes["status"] = self._check_status(changes["status"])
        if "type" in changes and not changes["type"]:
            raise InputValidationError("type", "meter type cannot be empty")
        if not changes:
            return await self.get_meter(user_id, meter_id)
        meter = await self.repository.update(meter_id, changes)
        if meter is None:
            raise MeterNotFoundError(f"meter {meter_id} not found")
        return meter

    @staticmethod
    def _check_status(status: str | None) -> str:
        if status not in METER_STATUSES:
            raise InputValidationError("status", f"status must be one of {sorted(METER_STATUSES)}")
        return status
