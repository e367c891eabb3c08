"""Payroll report generation and CSV export."""

from __future__ import annotations

import asyncio
import csv
import io
import logging
from collections.abc import Iterable
from typing import Any

from scaffold_finance.calculators.money import format_currency, round_to_cents
from scaffold_finance.calculators.pay_period import to_date
from scaffold_finance.calculators.reimbursement_aggregator import ReimbursementAggregator
from scaffold_finance.calculators.types import PayPeriod, StaffPayrollSummary
from scaffold_finance.calculators.wage_aggregator import WageAggregator
from scaffold_finance.store.base import RecordStore

logger = logging.getLogger(__name__)


class PayrollReportBuilder:
    """Builds per-staff payroll summaries for a period.

    Each staff member is summarized independently and concurrently; staff
    with neither assignments nor reimbursements in the period are left out
    of the report rather than shown as zero rows.
    """

    HEADERS = [
        "Staff Name",
        "Days Worked",
        "Total Wages",
        "Reimbursements",
        "Total Payout",
        "Assignments",
        "Reimbursement Details",
    ]
    DETAIL_SEPARATOR = "; "

    def __init__(self, store: RecordStore, currency_symbol: str = "$"):
        self.store = store
        self.currency_symbol = currency_symbol
        self.wages = WageAggregator(store)
        self.reimbursements = ReimbursementAggregator(store)

    async def build(
        self,
        period: PayPeriod,
        roster: Iterable[Any] | None = None,
    ) -> list[StaffPayrollSummary]:
        """Summarize every roster member with activity in the period.

        The roster defaults to the store's staff list.
        """
        members = list(roster) if roster is not None else await self._load_roster()
        summaries = await asyncio.gather(
            *(self._summarize_member(member, period) for member in members)
        )
        report = [summary for summary in summaries if summary.has_activity]
        logger.info(
            "Built payroll report for %s: %d of %d staff with activity",
            period.label,
            len(report),
            len(members),
        )
        return report

    async def _summarize_member(self, member: Any, period: PayPeriod) -> StaffPayrollSummary:
        wage_summary, reimbursement_summary = await asyncio.gather(
            self.wages.aggregate(member.id, period),
            self.reimbursements.aggregate(member.id, period),
        )
        total_payout = round_to_cents(
            wage_summary.total_wages + reimbursement_summary.total_reimbursements
        )
        return StaffPayrollSummary(
            staff_id=member.id,
            staff_name=member.name,
            daily_rate=round_to_cents(getattr(member, "daily_rate", None)),
            assignments=wage_summary.assignments,
            reimbursements=reimbursement_summary.reimbursements,
            days_worked=wage_summary.days_worked,
            total_wages=wage_summary.total_wages,
            total_reimbursements=reimbursement_summary.total_reimbursements,
            total_payout=total_payout,
        )

    async def _load_roster(self) -> list[Any]:
        try:
            return list(await self.store.query_staff_roster())
        except Exception:
            logger.exception("Error loading staff roster")
            return []

    # === Export ===

    def to_csv(self, summaries: Iterable[StaffPayrollSummary]) -> str:
        """Render summaries as CSV.

        The header row is plain; every data cell is double-quoted. Rows are
        newline-joined after the header with no newline after the last one.
        """
        output = io.StringIO()
        csv.writer(output, lineterminator="\n").writerow(self.HEADERS)

        writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
        for summary in summaries:
            writer.writerow([
                summary.staff_name,
                str(summary.days_worked),
                self._money(summary.total_wages),
                self._money(summary.total_reimbursements),
                self._money(summary.total_payout),
                self.DETAIL_SEPARATOR.join(
                    self.describe_assignment(a) for a in summary.assignments
                ),
                self.DETAIL_SEPARATOR.join(
                    self.describe_reimbursement(r) for r in summary.reimbursements
                ),
            ])

        return output.getvalue().removesuffix("\n")

    def describe_assignment(self, assignment: Any) -> str:
        """``2024-02-01: Framing (Site A) - $100.00``"""
        description = assignment.task_description or ""
        if assignment.project_name:
            description = f"{description} ({assignment.project_name})"
        return (
            f"{to_date(assignment.date).isoformat()}: {description} - "
            f"{self._money(assignment.daily_rate)}"
        )

    def describe_reimbursement(self, reimbursement: Any) -> str:
        """``2024-02-01: Lumber - $42.10``"""
        return (
            f"{to_date(reimbursement.date).isoformat()}: {reimbursement.item_description} - "
            f"{self._money(reimbursement.amount)}"
        )

    @staticmethod
    def filename(period: PayPeriod) -> str:
        return f"payroll_{period.start.isoformat()}_to_{period.end.isoformat()}.csv"

    def _money(self, amount: Any) -> str:
        return format_currency(amount, self.currency_symbol)
