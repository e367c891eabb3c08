"""Staff wage aggregation with one-wage-per-day deduplication."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from datetime import date
from decimal import Decimal
from typing import Any

from scaffold_finance.calculators.money import ZERO, round_to_cents, to_decimal
from scaffold_finance.calculators.pay_period import to_date
from scaffold_finance.calculators.types import PayPeriod, WageSummary
from scaffold_finance.store.base import RecordStore

logger = logging.getLogger(__name__)


class WageAggregator:
    """Sums the wages owed to staff from their task assignments.

    A staff member is paid once per calendar day no matter how many tasks
    they performed that day. When several assignments share a staff/day,
    the first one seen sets the rate; later ones are ignored even if their
    rate differs. The rate always comes from the assignment, never from the
    staff member's current rate.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    async def aggregate(self, staff_id: Any, period: PayPeriod) -> WageSummary:
        """Fetch and summarize one staff member's assignments in a period."""
        assignments = await self.fetch_assignments(staff_id, period)
        return self.summarize(assignments)

    async def fetch_assignments(self, staff_id: Any, period: PayPeriod) -> list[Any]:
        """Get all assignments for a staff member in a period (inclusive).

        Store failures are logged and yield an empty list.
        """
        if not staff_id:
            return []
        try:
            records = await self.store.query_assignments(
                staff_id=staff_id,
                start_date=period.start,
                end_date=period.end,
            )
            return list(records)
        except Exception:
            logger.exception(
                "Error getting assignments for staff %s in %s", staff_id, period.label
            )
            return []

    @staticmethod
    def _dated(assignments: Iterable[Any]) -> Iterator[tuple[Any, date]]:
        for assignment in assignments:
            try:
                day = to_date(assignment.date)
            except (TypeError, ValueError):
                logger.warning(
                    "Skipping assignment %s with unreadable date %r",
                    getattr(assignment, "id", None),
                    assignment.date,
                )
                continue
            yield assignment, day

    @classmethod
    def daily_wages(cls, assignments: Iterable[Any]) -> dict[tuple[Any, date], Decimal]:
        """Map each (staff, day) to the first daily rate seen for it.

        Assignments whose date cannot be read are skipped with a warning.
        """
        wages: dict[tuple[Any, date], Decimal] = {}
        for assignment, day in cls._dated(assignments):
            key = (assignment.staff_id, day)
            if key not in wages:
                wages[key] = to_decimal(assignment.daily_rate)
        return wages

    @classmethod
    def calculate_wages(cls, assignments: Iterable[Any]) -> Decimal:
        return round_to_cents(sum(cls.daily_wages(assignments).values(), ZERO))

    @classmethod
    def calculate_days_worked(cls, assignments: Iterable[Any]) -> int:
        return len(cls.daily_wages(assignments))

    @classmethod
    def summarize(cls, assignments: Iterable[Any]) -> WageSummary:
        assignments = [assignment for assignment, _ in cls._dated(assignments)]
        wages = cls.daily_wages(assignments)
        return WageSummary(
            days_worked=len(wages),
            total_wages=round_to_cents(sum(wages.values(), ZERO)),
            assignments=assignments,
        )
