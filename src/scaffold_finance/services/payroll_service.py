"""Payroll use cases: pay period configuration, periods and reports."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from scaffold_finance.calculators.pay_period import PayPeriodCalculator, to_date
from scaffold_finance.calculators.types import PayPeriod, PeriodType, StaffPayrollSummary
from scaffold_finance.config import Settings, get_settings
from scaffold_finance.models import PayPeriodConfig
from scaffold_finance.services.report_builder import PayrollReportBuilder
from scaffold_finance.store.base import RecordStore

logger = logging.getLogger(__name__)


class PayrollService:
    """Entry point for everything on the payroll page."""

    def __init__(self, store: RecordStore, settings: Settings | None = None):
        self.store = store
        self.settings = settings or get_settings()
        self.report_builder = PayrollReportBuilder(store, self.settings.currency_symbol)

    # === Configuration ===

    async def get_pay_period_config(self) -> Any | None:
        """Return the pay period config, or None if absent or unreadable."""
        try:
            return await self.store.query_pay_period_config()
        except Exception:
            logger.exception("Error getting pay period config")
            return None

    async def save_pay_period_config(
        self,
        period_type: PeriodType | str,
        start_date: date | str,
    ) -> Any:
        """Create the config on first use, otherwise update it in place.

        Raises:
            ValueError: If the cadence is unknown
            StoreWriteError: If the store rejects the write
        """
        cadence = PeriodType(period_type)
        anchor = to_date(start_date)

        config = await self.get_pay_period_config()
        if config is None:
            config = PayPeriodConfig(period_type=cadence.value, start_date=anchor)
        else:
            config.period_type = cadence.value
            config.start_date = anchor

        try:
            return await self.store.persist_pay_period_config(config)
        except Exception:
            logger.exception("Error saving pay period config")
            raise

    # === Periods ===

    async def current_period(self, as_of: date | str | None = None) -> PayPeriod | None:
        config = await self.get_pay_period_config()
        if config is None:
            return None
        return PayPeriodCalculator.current_period(config, as_of)

    async def recent_periods(
        self,
        count: int | None = None,
        today: date | str | None = None,
    ) -> list[PayPeriod]:
        config = await self.get_pay_period_config()
        if count is None:
            count = self.settings.recent_period_count
        return PayPeriodCalculator.recent_periods(config, count, today)

    # === Per-staff detail ===

    async def get_assignments_for_period(
        self, staff_id: Any, start_date: date | str, end_date: date | str
    ) -> list[Any]:
        period = PayPeriod(start=to_date(start_date), end=to_date(end_date))
        return await self.report_builder.wages.fetch_assignments(staff_id, period)

    async def get_reimbursements_for_period(
        self, staff_id: Any, start_date: date | str, end_date: date | str
    ) -> list[Any]:
        period = PayPeriod(start=to_date(start_date), end=to_date(end_date))
        return await self.report_builder.reimbursements.fetch_approved(staff_id, period)

    # === Reports ===

    async def generate_report(
        self, start_date: date | str, end_date: date | str
    ) -> list[StaffPayrollSummary]:
        period = PayPeriod(start=to_date(start_date), end=to_date(end_date))
        return await self.report_builder.build(period)

    async def export_report_csv(
        self, start_date: date | str, end_date: date | str
    ) -> tuple[str, str]:
        """Return ``(filename, csv_text)`` for the period's payroll report."""
        period = PayPeriod(start=to_date(start_date), end=to_date(end_date))
        summaries = await self.report_builder.build(period)
        return PayrollReportBuilder.filename(period), self.report_builder.to_csv(summaries)
