"""Tests for pay period date arithmetic."""

from datetime import date, datetime, timedelta

import pytest

from scaffold_finance.calculators.pay_period import PayPeriodCalculator, to_date
from scaffold_finance.calculators.types import PayPeriod
from tests.fakes import Config


class TestPeriodLength:
    """Test cadence lengths."""

    @pytest.mark.parametrize(
        "period_type,expected",
        [("weekly", 7), ("biweekly", 14), ("monthly", 30)],
    )
    def test_lengths(self, period_type, expected):
        assert PayPeriodCalculator.period_length(period_type) == expected

    def test_unknown_cadence_raises(self):
        with pytest.raises(ValueError):
            PayPeriodCalculator.period_length("fortnightly")


class TestCurrentPeriod:
    """Test the period containing a date."""

    def test_biweekly_scenario(self):
        """Anchor 2024-01-01, biweekly, as of 2024-01-20 falls in the second window."""
        config = Config(period_type="biweekly", start_date=date(2024, 1, 1))

        period = PayPeriodCalculator.current_period(config, date(2024, 1, 20))

        assert period == PayPeriod(start=date(2024, 1, 15), end=date(2024, 1, 28))
        assert period.label == "2024-01-15 to 2024-01-28"

    def test_anchor_day_starts_first_period(self):
        config = Config(period_type="weekly", start_date=date(2024, 1, 1))

        period = PayPeriodCalculator.current_period(config, date(2024, 1, 1))

        assert period.start == date(2024, 1, 1)
        assert period.end == date(2024, 1, 7)

    def test_last_day_of_period(self):
        config = Config(period_type="weekly", start_date=date(2024, 1, 1))

        period = PayPeriodCalculator.current_period(config, date(2024, 1, 7))

        assert period.start == date(2024, 1, 1)

    def test_before_anchor_uses_floor(self):
        """Dates before the anchor land in the window that precedes it."""
        config = Config(period_type="biweekly", start_date=date(2024, 1, 1))

        period = PayPeriodCalculator.current_period(config, date(2023, 12, 31))

        assert period.start == date(2023, 12, 18)
        assert period.end == date(2023, 12, 31)

    def test_monthly_is_thirty_days(self):
        config = Config(period_type="monthly", start_date=date(2024, 1, 1))

        period = PayPeriodCalculator.current_period(config, date(2024, 2, 15))

        assert period.start == date(2024, 1, 31)
        assert period.end == date(2024, 2, 29)

    def test_accepts_iso_strings(self):
        config = Config(period_type="weekly", start_date="2024-01-01")

        period = PayPeriodCalculator.current_period(config, "2024-01-10")

        assert period.start == date(2024, 1, 8)

    def test_contains_as_of_for_many_dates(self):
        config = Config(period_type="biweekly", start_date=date(2024, 3, 6))
        for offset in range(-60, 60, 5):
            day = date(2024, 3, 6) + timedelta(days=offset)
            period = PayPeriodCalculator.current_period(config, day)
            assert period.contains(day)
            assert period.length_days == 14


class TestRecentPeriods:
    """Test recent period listing."""

    @pytest.mark.parametrize("period_type", ["weekly", "biweekly", "monthly"])
    def test_contiguous_and_decreasing(self, period_type):
        """Windows abut, never overlap and go back in time."""
        config = Config(period_type=period_type, start_date=date(2024, 1, 1))
        length = PayPeriodCalculator.period_length(period_type)

        periods = PayPeriodCalculator.recent_periods(config, 6, date(2024, 6, 15))

        assert len(periods) == 6
        for period in periods:
            assert period.length_days == length
        for newer, older in zip(periods, periods[1:]):
            assert older.end + timedelta(days=1) == newer.start

    def test_most_recent_contains_today(self):
        config = Config(period_type="weekly", start_date=date(2024, 1, 1))

        periods = PayPeriodCalculator.recent_periods(config, 3, date(2024, 1, 20))

        assert [p.label for p in periods] == [
            "2024-01-15 to 2024-01-21",
            "2024-01-08 to 2024-01-14",
            "2024-01-01 to 2024-01-07",
        ]

    def test_result_is_restartable(self):
        config = Config(period_type="weekly", start_date=date(2024, 1, 1))

        periods = PayPeriodCalculator.recent_periods(config, 2, date(2024, 1, 20))

        assert list(periods) == list(periods)

    def test_no_config_no_periods(self):
        assert PayPeriodCalculator.recent_periods(None, 6) == []

    def test_zero_count(self):
        config = Config(period_type="weekly", start_date=date(2024, 1, 1))
        assert PayPeriodCalculator.recent_periods(config, 0) == []


class TestToDate:
    def test_datetime_is_truncated(self):
        assert to_date(datetime(2024, 1, 2, 15, 30)) == date(2024, 1, 2)

    def test_timestamp_string(self):
        assert to_date("2024-01-02T10:00:00Z") == date(2024, 1, 2)
