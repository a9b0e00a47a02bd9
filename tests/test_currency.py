"""Amount parsing and peso formatting tests."""

from __future__ import annotations

from decimal import Decimal

import pytest

from debtwise.errors import ValidationError
from debtwise.services.currency import (
    format_php,
    format_php_compact,
    parse_amount,
    parse_due_day,
    parse_interest_rate,
)


class TestParseAmount:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("1500", Decimal("1500.00")),
            ("₱12,500.50", Decimal("12500.50")),
            (" 99.9 ", Decimal("99.90")),
            (Decimal("0.01"), Decimal("0.01")),
            (250, Decimal("250.00")),
        ],
    )
    def test_accepts_common_inputs(self, raw, expected):
        assert parse_amount(raw) == expected

    def test_result_is_quantized_to_cents(self):
        assert parse_amount("7").as_tuple().exponent == -2

    @pytest.mark.parametrize("raw", ["abc", "12.3.4", "", None, "NaN", "Infinity", True])
    def test_rejects_non_numeric(self, raw):
        with pytest.raises(ValidationError) as excinfo:
            parse_amount(raw, field="balance")
        assert excinfo.value.field == "balance"

    @pytest.mark.parametrize("raw", ["0", "-5", "0.00"])
    def test_rejects_non_positive(self, raw):
        with pytest.raises(ValidationError, match="greater than zero"):
            parse_amount(raw)

    def test_rejects_more_than_two_decimals(self):
        with pytest.raises(ValidationError, match="two decimal places"):
            parse_amount("10.001")

    def test_trailing_zeros_are_not_extra_precision(self):
        assert parse_amount("10.500") == Decimal("10.50")

    def test_rejects_above_upper_limit(self):
        with pytest.raises(ValidationError, match="exceed"):
            parse_amount("1000000000.00")

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_amount("oops")


class TestParseInterestRate:
    def test_bounds_are_inclusive(self):
        assert parse_interest_rate("0") == Decimal("0.00")
        assert parse_interest_rate("100") == Decimal("100.00")

    @pytest.mark.parametrize("raw", ["-0.01", "100.01", "150"])
    def test_out_of_range(self, raw):
        with pytest.raises(ValidationError, match="between 0 and 100"):
            parse_interest_rate(raw)


class TestParseDueDay:
    @pytest.mark.parametrize(("raw", "expected"), [("1", 1), (31, 31), ("15.0", 15)])
    def test_valid_days(self, raw, expected):
        assert parse_due_day(raw) == expected

    @pytest.mark.parametrize("raw", ["0", "32", "-1"])
    def test_out_of_range(self, raw):
        with pytest.raises(ValidationError, match="between 1 and 31"):
            parse_due_day(raw)

    def test_fractional_day(self):
        with pytest.raises(ValidationError, match="whole number"):
            parse_due_day("2.5")


def test_format_php():
    assert format_php(Decimal("1234.5")) == "₱1,234.50"
    assert format_php(Decimal("-20")) == "-₱20.00"
    assert format_php("not a number") == "₱0.00"


def test_format_php_compact():
    assert format_php_compact(Decimal("1250000")) == "₱1.2M"
    assert format_php_compact(Decimal("12500")) == "₱12.5K"
    assert format_php_compact(Decimal("999")) == "₱999.00"
