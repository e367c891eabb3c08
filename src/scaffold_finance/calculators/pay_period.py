"""Pay period date arithmetic."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Protocol

from scaffold_finance.calculators.types import PayPeriod, PeriodType

# Monthly is a fixed 30-day window, not a calendar month.
PERIOD_LENGTHS: dict[PeriodType, int] = {
    PeriodType.WEEKLY: 7,
    PeriodType.BIWEEKLY: 14,
    PeriodType.MONTHLY: 30,
}


class PeriodConfig(Protocol):
    """Anything carrying a cadence and an anchor date."""

    period_type: Any
    start_date: Any


def to_date(value: Any) -> date:
    """Normalize a date, datetime or ``YYYY-MM-DD`` string to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


class PayPeriodCalculator:
    """Converts an anchor date and cadence into pay period boundaries.

    Periods are laid end to end from the anchor: period ``n`` starts
    ``n * length`` days after the anchor and is ``length`` days long, both
    ends inclusive. ``n`` may be negative for dates before the anchor.
    """

    @staticmethod
    def period_length(period_type: PeriodType | str) -> int:
        """Number of days in a period of the given cadence.

        Raises:
            ValueError: If the cadence is not weekly, biweekly or monthly
        """
        return PERIOD_LENGTHS[PeriodType(period_type)]

    @classmethod
    def current_period(
        cls,
        config: PeriodConfig,
        as_of: date | str | None = None,
    ) -> PayPeriod:
        """Return the period containing ``as_of`` (default: today)."""
        anchor = to_date(config.start_date)
        day = to_date(as_of) if as_of is not None else date.today()
        length = cls.period_length(config.period_type)

        days_since_anchor = (day - anchor).days
        # Floor division keeps dates before the anchor in a valid window
        elapsed = days_since_anchor // length

        period_start = anchor + timedelta(days=elapsed * length)
        period_end = period_start + timedelta(days=length - 1)
        return PayPeriod(start=period_start, end=period_end)

    @classmethod
    def recent_periods(
        cls,
        config: PeriodConfig | None,
        count: int = 6,
        today: date | str | None = None,
    ) -> list[PayPeriod]:
        """Return the ``count`` most recent periods, most recent first.

        An absent config yields no periods.
        """
        if config is None or count <= 0:
            return []

        length = cls.period_length(config.period_type)
        reference = to_date(today) if today is not None else date.today()

        return [
            cls.current_period(config, reference - timedelta(days=i * length))
            for i in range(count)
        ]
