"""Meter registration rules."""
import pytest

from conftest import METER_NUMBER, OTHER_METER_NUMBER
from meterpay.modules.common.exceptions import InputValidationError
from meterpay.modules.meters import MeterNotFoundError, MeterOwnershipError, MeterService, MeterUpdateInput


@pytest.fixture
def meters(repositories) -> MeterService:
    return MeterService.from_repositories(repositories)


async def test_add_meter_defaults(meters, user):
    meter, created = await meters.add_meter(user.id, f"  {METER_NUMBER} ", nickname="Home")

    assert created is True
    assert meter.meter_number == METER_NUMBER
    assert (meter.type, meter.status) == ("STS", "active")


async def test_adding_again_returns_existing_and_fills_nickname(meters, user):
    first, _ = await meters.add_meter(user.id, METER_NUMBER)

    again, created = await meters.add_meter(user.id, METER_NUMBER, nickname="Home")

    assert created is False
    assert again.id == first.id
    assert again.nickname == "Home"
    assert len(await meters.list_meters(user.id)) == 1


async def test_number_owned_by_someone_else(meters, user, other_user):
    await meters.add_meter(other_user.id, METER_NUMBER)

    with pytest.raises(MeterOwnershipError):
        await meters.add_meter(user.id, METER_NUMBER)


@pytest.mark.parametrize("number", ["", "4570001234", "457000123456", "4570001234a"])
async def test_meter_number_must_be_eleven_digits(meters, user, number):
    with pytest.raises(InputValidationError) as excinfo:
        await meters.add_meter(user.id, number)
    assert excinfo.value.field == "meterNumber"


async def test_recent_meters_are_newest_first(meters, user):
    await meters.add_meter(user.id, METER_NUMBER)
    await meters.add_meter(user.id, OTHER_METER_NUMBER)

    recent = await meters.recent_meters(user.id, limit=1)

    assert [m.meter_number for m in recent] == [OTHER_METER_NUMBER]


async def test_update_meter(meters, user, other_user):
    meter, _ = await meters.add_meter(user.id, METER_NUMBER)

    updated = await meters.update_meter(user.id, meter.id, MeterUpdateInput(nickname="Shop", status="inactive"))
    assert (updated.nickname, updated.status) == ("Shop", "inactive")

    with pytest.raises(InputValidationError):
        await meters.update_meter(user.id, meter.id, MeterUpdateInput(status="broken"))
    with pytest.raises(MeterNotFoundError):
        await meters.update_meter(other_user.id, meter.id, MeterUpdateInput(nickname="Mine"))
