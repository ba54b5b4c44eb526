"""Built-in notification templates and energy-saving tips."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .schedule import Schedule

DAILY_TIP_TEMPLATE_ID = "daily-energy-tip"


@dataclass(frozen=True, slots=True)
class NotificationTemplate:
    id: str
    name: str
    type: str
    title: str
    body: str
    description: str
    can_be_scheduled: bool
    personalization_fields: tuple[str, ...] = field(default_factory=tuple)
    default_schedule: Optional[Schedule] = None

    @property
    def needs_personalization(self) -> bool:
        return bool(self.personalization_fields)


NOTIFICATION_TEMPLATES: tuple[NotificationTemplate, ...] = (
    NotificationTemplate(
        id="low-balance-alert",
        name="Low Balance Alert",
        type="low_balance",
        title="Wallet Balance Alert",
        body=(
            "Your wallet balance has fallen below your set threshold. "
            "Consider adding funds to avoid service interruption."
        ),
        description="Alert sent when your wallet balance falls below a specified threshold.",
        can_be_scheduled=False,
    ),
    NotificationTemplate(
        id="payment-reminder",
        name="Payment Reminder",
        type="payment_reminder",
        title="Payment Due Reminder",
        body="You have an upcoming payment due on {date}. The amount due is {amount}.",
        description="Reminds you about upcoming bill payments before they are due.",
        can_be_scheduled=True,
        personalization_fields=("date", "amount"),
        default_schedule=Schedule(type="monthly", time="09:00", date=25),
    ),
    NotificationTemplate(
        id="monthly-consumption-report",
        name="Monthly Consumption Report",
        type="consumption_alert",
        title="Your Monthly Energy Report",
        body=(
            "Your energy consumption for the month of {month} was {amount} kWh. "
            "This is {percent}% {change} compared to last month."
        ),
        description="Monthly summary of your energy consumption with comparison to previous month.",
        can_be_scheduled=True,
        personalization_fields=("month", "amount", "percent", "change"),
        default_schedule=Schedule(type="monthly", time="10:00", date=1),
    ),
    NotificationTemplate(
        id="weekly-usage-summary",
        name="Weekly Usage Summary",
        type="consumption_alert",
        title="Weekly Energy Usage Summary",
        body=(
            "Your energy usage this week: {amount} kWh. Peak usage day: {peak_day}. "
            "You're on track to {trend} your monthly usage goal."
        ),
        description="Weekly summary of your energy usage patterns with peak day information.",
        can_be_scheduled=True,
        personalization_fields=("amount", "peak_day", "trend"),
        default_schedule=Schedule(type="weekly", time="09:00", days=(1,)),
    ),
    NotificationTemplate(
        id="meter-credit-low",
        name="Meter Credit Low",
        type="meter_recharge",
        title="Meter Credit Running Low",
        body="Your meter {meter_number} is running low on credit. Estimated days remaining: {days_left}.",
        description="Alert when your prepaid meter is running low on credit and needs recharging.",
        can_be_scheduled=False,
        personalization_fields=("meter_number", "days_left"),
    ),
    NotificationTemplate(
        id="price-change-alert",
        name="Price Change Alert",
        type="price_update",
        title="Electricity Price Update",
        body=(
            "Electricity rates will change effective {effective_date}. New rate: {new_rate} per kWh, "
            "a {change}% {direction} from current rates."
        ),
        description="Notifications about changes to electricity pricing and rates.",
        can_be_scheduled=False,
        personalization_fields=("effective_date", "new_rate", "change", "direction"),
    ),
    NotificationTemplate(
        id="maintenance-reminder",
        name="Scheduled Maintenance",
        type="service_outage",
        title="Scheduled Maintenance Notice",
        body=(
            "There will be a scheduled maintenance in your area on {date} from {start_time} "
            "to {end_time}. Please make necessary arrangements."
        ),
        description="Information about planned maintenance that may affect your electricity service.",
        can_be_scheduled=True,
        personalization_fields=("date", "start_time", "end_time"),
        default_schedule=Schedule(type="custom", time="08:00"),
    ),
    NotificationTemplate(
        id=DAILY_TIP_TEMPLATE_ID,
        name="Daily Energy Saving Tip",
        type="consumption_alert",
        title="Today's Energy Saving Tip",
        body="{tip}",
        description="Receive daily tips on how to save energy and reduce your electricity bills.",
        can_be_scheduled=True,
        personalization_fields=("tip",),
        default_schedule=Schedule(type="daily", time="08:00"),
    ),
)

ENERGY_SAVING_TIPS: tuple[str, ...] = (
    "Turn off lights when leaving a room to save electricity.",
    "Use natural lighting during the day instead of artificial lighting.",
    "Set your refrigerator temperature to 3-5°C (38-41°F) for optimal efficiency.",
    "Unplug chargers and appliances when not in use to avoid phantom power usage.",
    "Replace incandescent bulbs with LED bulbs to use 75% less energy.",
    "Use a programmable thermostat to adjust temperature when you're away or asleep.",
    "Clean or replace air filters regularly to improve HVAC efficiency.",
    "Use power strips to easily turn off multiple devices at once.",
    "Wash clothes in cold water to save on water heating costs.",
    "Air-dry clothes instead of using a dryer when possible.",
    "Use ceiling fans to circulate air and reduce air conditioning needs.",
    "Seal gaps around doors and windows to prevent air leaks.",
    "Keep your freezer full - it runs more efficiently when well-stocked.",
    "Use a microwave instead of an oven for small meals to save energy.",
    "Turn off your computer or put it to sleep when not in use.",
    "Use smart power strips that cut power to devices in standby mode.",
    "Lower your water heater temperature to 120°F (49°C) to save energy.",
    "Use natural ventilation on mild days instead of air conditioning.",
    "Clean refrigerator coils annually to maintain efficiency.",
    "Use energy-efficient settings on dishwashers and washing machines.",
    "Install dimmer switches to reduce electricity usage for lighting.",
    "Cook with lids on pots to reduce cooking time and energy use.",
    "Open blinds on sunny winter days to use solar heat; close them in summer.",
    "Use a laptop instead of a desktop computer - they use less energy.",
    "Run dishwashers and washing machines only when full for maximum efficiency.",
    "Keep heating and cooling vents unblocked by furniture or curtains.",
    "Defrost freezers regularly to maintain efficiency.",
    "Use task lighting instead of lighting an entire room.",
    "Install water-efficient showerheads to reduce water heating costs.",
    "Use a toaster oven or air fryer instead of a conventional oven for small meals.",
)

_TEMPLATES_BY_ID = {template.id: template for template in NOTIFICATION_TEMPLATES}


def get_template(template_id: str) -> NotificationTemplate | None:
    return _TEMPLATES_BY_ID.get(template_id)


def random_energy_tip(rng: random.Random | None = None) -> str:
    return (rng or random).choice(ENERGY_SAVING_TIPS)


def personalize(template: NotificationTemplate, personalizations: Mapping[str, str]) -> tuple[str, str]:
    """Fill ``{key}`` placeholders in the template title and body."""
    title, body = template.title, template.body
    for key, value in personalizations.items():
        placeholder = "{" + key + "}"
        title = title.replace(placeholder, value)
        body = body.replace(placeholder, value)
    return title, body


__all__ = [
    "DAILY_TIP_TEMPLATE_ID",
    "NotificationTemplate",
    "NOTIFICATION_TEMPLATES",
    "ENERGY_SAVING_TIPS",
    "get_template",
    "random_energy_tip",
    "personalize",
]
