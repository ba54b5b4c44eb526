"""Scheduled notification use cases on the in-memory backend."""
from datetime import datetime

import pytest

from meterpay.modules.common.exceptions import InputValidationError
from meterpay.modules.notifications import (
    Schedule,
    ScheduledNotificationNotFoundError,
    ScheduledNotificationService,
    ScheduleValidationError,
    TemplateNotFoundError,
)

NOW = datetime(2024, 3, 10, 12, 0)  # a Sunday
REMINDER = {"date": "March 31", "amount": "$35.50"}


@pytest.fixture
def notifications(repositories) -> ScheduledNotificationService:
    return ScheduledNotificationService(repositories.notifications, tip_picker=lambda: "Switch it off.")


def test_catalogue_has_every_template(notifications):
    templates = notifications.list_templates()

    assert len(templates) == 8
    assert notifications.get_template("payment-reminder").personalization_fields == ("date", "amount")
    with pytest.raises(TemplateNotFoundError):
        notifications.get_template("nope")


async def test_daily_tip_is_filled_in(notifications, user):
    created = await notifications.create(
        user_id=user.id,
        template_id="daily-energy-tip",
        schedule=Schedule(type="daily", time="08:00"),
    )

    assert created.enabled is True
    assert created.personalizations == {"tip": "Switch it off."}
    preview = notifications.describe(created, NOW)
    assert preview.body == "Switch it off."
    assert preview.schedule_text == "Daily at 8:00 AM"
    assert preview.next_trigger_at == datetime(2024, 3, 11, 8, 0)


async def test_payment_reminder_preview(notifications, user):
    created = await notifications.create(
        user_id=user.id,
        template_id="payment-reminder",
        schedule=Schedule(type="monthly", time="09:00", date=25),
        personalizations=REMINDER,
    )

    preview = notifications.describe(created, NOW)

    assert preview.title == "Payment Due Reminder"
    assert preview.body == "You have an upcoming payment due on March 31. The amount due is $35.50."
    assert preview.schedule_text == "Monthly on the 25th at 9:00 AM"
    assert preview.next_trigger_at == datetime(2024, 3, 25, 9, 0)


async def test_missing_personalization_is_rejected(notifications, user, store):
    with pytest.raises(InputValidationError) as excinfo:
        await notifications.create(
            user_id=user.id,
            template_id="payment-reminder",
            schedule=Schedule(type="monthly", time="09:00", date=25),
            personalizations={"date": "March 31"},
        )

    assert excinfo.value.field == "personalizations"
    assert store.notifications == {}


async def test_alert_templates_cannot_be_scheduled(notifications, user):
    with pytest.raises(InputValidationError) as excinfo:
        await notifications.create(
            user_id=user.id,
            template_id="low-balance-alert",
            schedule=Schedule(type="daily", time="08:00"),
        )

    assert excinfo.value.field == "templateId"


async def test_unknown_template(notifications, user):
    with pytest.raises(TemplateNotFoundError):
        await notifications.create(user_id=user.id, template_id="nope", schedule=Schedule(type="daily", time="08:00"))


async def test_invalid_schedule_is_rejected(notifications, user, store):
    with pytest.raises(ScheduleValidationError) as excinfo:
        await notifications.create(
            user_id=user.id,
            template_id="daily-energy-tip",
            schedule=Schedule(type="weekly", time="08:00", days=()),
        )

    assert excinfo.value.field == "days"
    assert store.notifications == {}


async def test_toggle_pauses_the_schedule(notifications, user):
    created = await notifications.create(
        user_id=user.id, template_id="daily-energy-tip", schedule=Schedule(type="daily", time="08:00")
    )

    paused = await notifications.toggle(user.id, created.id)
    assert paused.enabled is False
    assert notifications.describe(paused, NOW).next_trigger_at is None

    resumed = await notifications.toggle(user.id, created.id)
    assert resumed.enabled is True


async def test_notifications_are_private(notifications, user, other_user):
    created = await notifications.create(
        user_id=user.id, template_id="daily-energy-tip", schedule=Schedule(type="daily", time="08:00")
    )

    with pytest.raises(ScheduledNotificationNotFoundError):
        await notifications.get(other_user.id, created.id)
    with pytest.raises(ScheduledNotificationNotFoundError):
        await notifications.delete(other_user.id, created.id)
    assert await notifications.list(other_user.id) == []


async def test_invalid_update_leaves_record_unchanged(notifications, user):
    created = await notifications.create(
        user_id=user.id, template_id="daily-energy-tip", schedule=Schedule(type="daily", time="08:00")
    )

    with pytest.raises(ScheduleValidationError):
        await notifications.update(user.id, created.id, schedule=Schedule(type="daily", time="25:00"))

    assert (await notifications.get(user.id, created.id)).schedule.time == "08:00"

    moved = await notifications.update(user.id, created.id, schedule=Schedule(type="daily", time="18:30"))
    assert moved.schedule.time == "18:30"


async def test_delete(notifications, user):
    created = await notifications.create(
        user_id=user.id, template_id="daily-energy-tip", schedule=Schedule(type="daily", time="08:00")
    )

    await notifications.delete(user.id, created.id)

    assert await notifications.list(user.id) == []
    with pytest.raises(ScheduledNotificationNotFoundError):
        await notifications.get(user.id, created.id)
