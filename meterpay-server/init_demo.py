"""
Seed the demo user with a few meters and outstanding bills.

Usage: python init_demo.py
"""
import asyncio
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from meterpay.core.config import get_settings
from meterpay.core.log_config import configure_logging
from meterpay.infrastructure.database.repositories import sql_repositories
from meterpay.infrastructure.database.session import dispose_engine, init_db, session_scope
from meterpay.modules.accounts import UserService
from meterpay.modules.debts import DebtService
from meterpay.modules.meters import MeterService

DEMO_METERS = (
    ("45700012345", "Home", "12 Palm Street"),
    ("45700067890", "Shop", "4 Market Road"),
)

DEMO_DEBTS = (
    ("45700012345", Decimal("35.50"), "electricity", 7, "September electricity bill"),
    ("45700012345", Decimal("18.20"), "water", 14, "Water service charge"),
    ("45700067890", Decimal("12.00"), "trash", 21, "Waste collection"),
)


async def seed_demo_data() -> None:
    settings = get_settings()
    configure_logging(settings)
    await init_db()

    async with session_scope() as session:
        repositories = sql_repositories(session)
        user = await UserService.from_repositories(repositories).ensure_demo_user(settings.demo_user)

        meters = MeterService.from_repositories(repositories, settings.limits)
        for number, nickname, address in DEMO_METERS:
            await meters.add_meter(user.id, number, nickname=nickname, address=address, customer_name=user.full_name)

        debts = DebtService.from_repositories(repositories, settings.limits)
        if await debts.list_debts(user.id):
            print(f"Demo data already present for {user.username}")
        else:
            now = datetime.now(timezone.utc)
            for number, amount, category, days, description in DEMO_DEBTS:
                await debts.create_debt(
                    user_id=user.id,
                    meter_number=number,
                    amount=amount,
                    due_date=now + timedelta(days=days),
                    category=category,
                    description=description,
                )
            print(f"Demo data created: {settings.demo_user.username} / {settings.demo_user.password}")

    await dispose_engine()


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
