"""Notification schedules: value model, validation, next-trigger calculation and display text.

Everything here is pure. The current instant is always passed in by the
caller, so identical ``(schedule, now)`` inputs always produce identical output.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Mapping, Optional

from .exceptions import ScheduleValidationError

WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MIN_LEAD = timedelta(seconds=1)

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


class ScheduleType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


@dataclass(frozen=True, slots=True)
class Schedule:
    """A recurrence rule; ``days`` use 0=Sunday..6=Saturday."""

    type: str
    time: str
    days: Optional[tuple[int, ...]] = None
    date: Optional[int] = None
    next_trigger_date: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Schedule":
        days = data.get("days")
        if isinstance(days, list):
            days = tuple(days)
        next_trigger = data.get("nextTriggerDate", data.get("next_trigger_date"))
        return cls(
            type=str(data.get("type", "")),
            time=str(data.get("time", "")),
            days=days,
            date=data.get("date"),
            next_trigger_date=next_trigger or None,
        )

    def to_mapping(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type, "time": self.time}
        if self.days is not None:
            data["days"] = list(self.days)
        if self.date is not None:
            data["date"] = self.date
        if self.next_trigger_date is not None:
            data["nextTriggerDate"] = self.next_trigger_date
        return data


def parse_time(value: str) -> tuple[int, int]:
    match = _TIME_RE.match(value or "")
    if match is None:
        raise ScheduleValidationError("time", f"time must use HH:MM format, got {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ScheduleValidationError("time", f"time out of range: {value!r}")
    return hours, minutes


def parse_timestamp(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except (AttributeError, ValueError) as exc:
        raise ScheduleValidationError("nextTriggerDate", f"invalid timestamp: {value!r}") from exc


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_schedule(schedule: Schedule) -> Schedule:
    try:
        kind = ScheduleType(schedule.type)
    except ValueError as exc:
        raise ScheduleValidationError("type", f"unknown schedule type: {schedule.type!r}") from exc

    parse_time(schedule.time)

    if kind is ScheduleType.WEEKLY:
        days = schedule.days
        if not isinstance(days, tuple) or not days:
            raise ScheduleValidationError("days", "weekly schedule requires at least one weekday")
        if not all(_is_int(day) and 0 <= day <= 6 for day in days):
            raise ScheduleValidationError("days", "weekdays must be integers between 0 and 6")
    elif kind is ScheduleType.MONTHLY:
        if not _is_int(schedule.date) or not 1 <= schedule.date <= 31:
            raise ScheduleValidationError("date", "monthly schedule requires a day between 1 and 31")
    elif kind is ScheduleType.CUSTOM and schedule.next_trigger_date:
        parse_timestamp(schedule.next_trigger_date)
    return schedule


def _weekday(moment: datetime) -> int:
    return (moment.weekday() + 1) % 7


def _day_in_month(reference: datetime, year: int, month: int, day: int) -> datetime:
    last_day = calendar.monthrange(year, month)[1]
    return reference.replace(year=year, month=month, day=min(day, last_day))


def _align(trigger: datetime, now: datetime) -> datetime:
    if trigger.tzinfo is None and now.tzinfo is not None:
        return trigger.replace(tzinfo=now.tzinfo)
    if trigger.tzinfo is not None and now.tzinfo is None:
        return trigger.astimezone(timezone.utc).replace(tzinfo=None)
    return trigger


def compute_next_trigger(schedule: Schedule, now: datetime) -> datetime:
    """Return the earliest instant strictly after ``now`` at which ``schedule`` fires."""
    validate_schedule(schedule)
    hours, minutes = parse_time(schedule.time)
    at_time = now.replace(hour=hours, minute=minutes, second=0, microsecond=0)
    kind = ScheduleType(schedule.type)

    if kind is ScheduleType.DAILY:
        trigger = at_time if at_time > now else at_time + timedelta(days=1)
    elif kind is ScheduleType.WEEKLY:
        wanted = set(schedule.days or ())
        trigger = next(
            candidate
            for candidate in (at_time + timedelta(days=offset) for offset in range(8))
            if _weekday(candidate) in wanted and candidate > now
        )
    elif kind is ScheduleType.MONTHLY:
        trigger = _day_in_month(at_time, now.year, now.month, schedule.date)
        if trigger <= now:
            year, month = (now.year + 1, 1) if now.month == 12 else (now.year, now.month + 1)
            trigger = _day_in_month(at_time, year, month, schedule.date)
    elif schedule.next_trigger_date:
        trigger = _align(parse_timestamp(schedule.next_trigger_date), now)
    else:
        trigger = at_time + timedelta(days=1)

    return max(trigger, now + MIN_LEAD)


def ordinal_suffix(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def format_time_string(value: str) -> str:
    """``"21:05"`` -> ``"9:05 PM"``; malformed input is returned unchanged."""
    try:
        hours, minutes = parse_time(value)
    except ScheduleValidationError:
        return value
    period = "PM" if hours >= 12 else "AM"
    return f"{hours % 12 or 12}:{minutes:02d} {period}"


def format_schedule_text(schedule: Schedule) -> str:
    time_text = format_time_string(schedule.time)

    if schedule.type == ScheduleType.DAILY.value:
        return f"Daily at {time_text}"

    if schedule.type == ScheduleType.WEEKLY.value:
        days = sorted({day for day in schedule.days or () if _is_int(day) and 0 <= day <= 6})
        if not days:
            return f"Weekly at {time_text}"
        names = ", ".join(WEEKDAY_NAMES[day] for day in days)
        return f"Weekly on {names} at {time_text}"

    if schedule.type == ScheduleType.MONTHLY.value:
        if not schedule.date:
            return f"Monthly at {time_text}"
        return f"Monthly on the {schedule.date}{ordinal_suffix(schedule.date)} at {time_text}"

    if schedule.type == ScheduleType.CUSTOM.value:
        if schedule.next_trigger_date:
            try:
                when = parse_timestamp(schedule.next_trigger_date)
            except ScheduleValidationError:
                return f"Custom schedule at {time_text}"
            return f"{when.month}/{when.day}/{when.year} at {time_text}"
        return f"Custom schedule at {time_text}"

    return "Unknown schedule"


__all__ = [
    "WEEKDAY_NAMES",
    "ScheduleType",
    "Schedule",
    "parse_time",
    "parse_timestamp",
    "validate_schedule",
    "compute_next_trigger",
    "ordinal_suffix",
    "format_time_string",
    "format_schedule_text",
]
