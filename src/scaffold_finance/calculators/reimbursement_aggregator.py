"""Approved reimbursement aggregation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from decimal import Decimal
from typing import Any

from scaffold_finance.calculators.money import sum_to_cents
from scaffold_finance.calculators.pay_period import to_date
from scaffold_finance.calculators.types import (
    PayPeriod,
    ReimbursementStatus,
    ReimbursementSummary,
)
from scaffold_finance.store.base import RecordStore

logger = logging.getLogger(__name__)

RecordPredicate = Callable[[Any], bool]


def within_period(period: PayPeriod) -> RecordPredicate:
    """Predicate matching records dated inside the period.

    Records with an unreadable date never match.
    """

    def predicate(record: Any) -> bool:
        try:
            return period.contains(to_date(record.date))
        except (TypeError, ValueError):
            return False

    return predicate


class ReimbursementAggregator:
    """Sums approved reimbursements for a staff member within a window.

    The store is asked only for equality filters (staff and status); the
    date window is applied afterwards as an additional predicate. Pass a
    different ``period_filter`` (e.g. one that accepts everything) when the
    store already narrows by date.
    """

    def __init__(
        self,
        store: RecordStore,
        period_filter: Callable[[PayPeriod], RecordPredicate] = within_period,
    ):
        self.store = store
        self.period_filter = period_filter

    async def aggregate(self, staff_id: Any, period: PayPeriod) -> ReimbursementSummary:
        """Fetch and summarize one staff member's approved reimbursements."""
        reimbursements = await self.fetch_approved(staff_id, period)
        return self.summarize(reimbursements)

    async def fetch_approved(self, staff_id: Any, period: PayPeriod) -> list[Any]:
        """Get approved reimbursements for a staff member dated in the period.

        Store failures are logged and yield an empty list.
        """
        if not staff_id:
            return []
        try:
            records = await self.store.query_reimbursements(
                staff_id=staff_id,
                status=ReimbursementStatus.APPROVED.value,
            )
            matches = self.period_filter(period)
            return [record for record in records if matches(record)]
        except Exception:
            logger.exception(
                "Error getting reimbursements for staff %s in %s", staff_id, period.label
            )
            return []

    @staticmethod
    def calculate_reimbursements(reimbursements: Iterable[Any]) -> Decimal:
        return sum_to_cents(r.amount for r in reimbursements)

    @classmethod
    def summarize(cls, reimbursements: Iterable[Any]) -> ReimbursementSummary:
        reimbursements = list(reimbursements)
        return ReimbursementSummary(
            total_reimbursements=cls.calculate_reimbursements(reimbursements),
            reimbursements=reimbursements,
        )
