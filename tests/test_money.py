"""Tests for currency coercion and rounding."""

from decimal import Decimal

import pytest

from scaffold_finance.calculators.money import (
    format_currency,
    round_to_cents,
    sum_to_cents,
    to_decimal,
)


class TestToDecimal:
    """Test raw amount coercion."""

    def test_float_goes_through_str(self):
        """0.1 must not carry its binary expansion."""
        assert to_decimal(0.1) == Decimal("0.1")

    @pytest.mark.parametrize("raw", [None, "", "abc", float("nan"), float("inf")])
    def test_missing_or_invalid_is_zero(self, raw):
        assert to_decimal(raw) == Decimal("0")

    def test_numeric_string(self):
        assert to_decimal(" 12.50 ") == Decimal("12.50")


class TestRounding:
    """Test rounding to cents."""

    def test_float_drift_rounds_away(self):
        assert round_to_cents(0.1 + 0.2) == Decimal("0.30")

    def test_half_up(self):
        assert round_to_cents("2.345") == Decimal("2.35")
        assert round_to_cents("2.344") == Decimal("2.34")

    def test_sum_rounds_total_once(self):
        assert sum_to_cents(["0.004", "0.004", "0.004"]) == Decimal("0.01")

    def test_sum_of_nothing(self):
        assert sum_to_cents([]) == Decimal("0.00")


class TestFormatCurrency:
    def test_two_decimals(self):
        assert format_currency(Decimal("1234.5")) == "$1234.50"

    def test_custom_symbol(self):
        assert format_currency(7, symbol="€") == "€7.00"
