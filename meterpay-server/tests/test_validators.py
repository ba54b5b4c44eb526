"""Tests for the shared input validation, money helpers and recharge token helpers."""
import re
from decimal import Decimal

import pytest

from meterpay.core.config import LimitSettings
from meterpay.modules.common.exceptions import InputValidationError
from meterpay.modules.common.money import from_cents, to_cents
from meterpay.modules.common.references import make_reference
from meterpay.modules.common.validators import (
    parse_amount,
    validate_meter_number,
    validate_positive_amount,
    validate_recharge_amount,
    validate_topup_amount,
)
from meterpay.modules.transactions.tokens import estimate_units, format_units, generate_recharge_token


class TestMeterNumber:
    def test_accepts_eleven_digits(self):
        assert validate_meter_number("45700012345") == "45700012345"

    def test_strips_whitespace(self):
        assert validate_meter_number(" 45700012345 ") == "45700012345"

    @pytest.mark.parametrize("value", ["", "1234", "4570001234a", "457000123456", None])
    def test_rejects_malformed(self, value):
        with pytest.raises(InputValidationError) as excinfo:
            validate_meter_number(value)
        assert excinfo.value.field == "meterNumber"

    def test_pattern_is_configurable(self):
        assert validate_meter_number("1234", pattern=r"^\d{4}$") == "1234"


class TestAmounts:
    def test_parse_amount_quantizes_to_cents(self):
        assert parse_amount("20") == Decimal("20.00")
        assert parse_amount(12.345) == Decimal("12.35")

    @pytest.mark.parametrize("value", ["abc", "", None, True, "NaN", "Infinity"])
    def test_parse_amount_rejects_non_numbers(self, value):
        with pytest.raises(InputValidationError) as excinfo:
            parse_amount(value)
        assert excinfo.value.field == "amount"

    @pytest.mark.parametrize("value", ["0", "-5", "0.001"])
    def test_positive_amount_rejects_zero_and_negative(self, value):
        with pytest.raises(InputValidationError):
            validate_positive_amount(value)

    @pytest.mark.parametrize("value", ["5", "5.00", "250.50", "1000"])
    def test_recharge_amount_within_bounds(self, value):
        assert validate_recharge_amount(value, LimitSettings()) == Decimal(value).quantize(Decimal("0.01"))

    @pytest.mark.parametrize("value", ["4.99", "1000.01", "0"])
    def test_recharge_amount_outside_bounds(self, value):
        with pytest.raises(InputValidationError) as excinfo:
            validate_recharge_amount(value, LimitSettings())
        assert excinfo.value.field == "amount"

    @pytest.mark.parametrize("value", ["1e30", "1000000000000000", "-1e20"])
    def test_parse_amount_rejects_huge_values(self, value):
        with pytest.raises(InputValidationError) as excinfo:
            parse_amount(value)
        assert excinfo.value.field == "amount"

    def test_topup_amount_is_capped(self):
        limits = LimitSettings(max_topup=Decimal("500"))
        assert validate_topup_amount("500", limits) == Decimal("500.00")
        with pytest.raises(InputValidationError) as excinfo:
            validate_topup_amount("500.01", limits)
        assert excinfo.value.field == "amount"

    def test_cents_conversion(self):
        assert to_cents(Decimal("64.50")) == 6450
        assert from_cents(6450) == Decimal("64.50")
        assert to_cents(Decimal("0.005")) == 1


class TestRechargeTokens:
    def test_token_shape(self):
        token = generate_recharge_token()
        assert re.fullmatch(r"[A-Z0-9]{4}(-[A-Z0-9]{4}){4}", token)

    def test_tokens_differ(self):
        assert len({generate_recharge_token() for _ in range(20)}) == 20

    def test_units_estimate(self):
        assert estimate_units(Decimal("20"), Decimal("0.45")) == Decimal("44.44")

    def test_units_display(self):
        assert format_units(Decimal("20"), Decimal("0.45")) == "44.4"
        assert format_units(Decimal("20"), Decimal("0.45"), places=2) == "44.44"


def test_reference_format():
    assert re.fullmatch(r"TRX-\d{6}", make_reference("TRX"))
