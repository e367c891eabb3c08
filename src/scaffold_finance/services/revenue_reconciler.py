"""Project actual-revenue reconciliation."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from scaffold_finance.calculators.money import ZERO, round_to_cents, to_decimal
from scaffold_finance.calculators.types import IncomeStatus, RevenueBreakdown
from scaffold_finance.services.cost_reconciler import read_or_empty
from scaffold_finance.store.base import ProjectNotFoundError, RecordStore

logger = logging.getLogger(__name__)


class RevenueReconciler:
    """Buckets a project's income by status.

    Only received income counts as actual revenue and is persisted; pending
    and cancelled totals are reported by the breakdown alone.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    @staticmethod
    def bucket_totals(incomes: Iterable[Any]) -> dict[IncomeStatus, Decimal]:
        """Sum income per status, each bucket rounded to cents.

        Rows with an unknown status fall into no bucket.
        """
        totals: dict[IncomeStatus, Decimal] = {status: ZERO for status in IncomeStatus}
        for income in incomes:
            try:
                status = IncomeStatus(income.status)
            except ValueError:
                logger.warning(
                    "Ignoring income %s with status %r",
                    getattr(income, "id", None),
                    income.status,
                )
                continue
            totals[status] += to_decimal(income.amount)
        return {status: round_to_cents(total) for status, total in totals.items()}

    async def breakdown(self, project_id: Any) -> RevenueBreakdown:
        """Received, pending and cancelled totals for a project."""
        result = RevenueBreakdown(project_id=project_id)
        if not project_id:
            return result

        incomes = await read_or_empty(
            "income",
            project_id,
            lambda: self.store.query_income(project_id),
            result.errors,
        )
        totals = self.bucket_totals(incomes)
        result.total_revenue = totals[IncomeStatus.RECEIVED]
        result.pending_revenue = totals[IncomeStatus.PENDING]
        result.cancelled_revenue = totals[IncomeStatus.CANCELLED]
        return result

    async def reconcile(self, project_id: Any) -> RevenueBreakdown:
        """Compute received revenue and write it back as actual revenue.

        Read failures degrade to zero; write failures are re-raised.

        Raises:
            ProjectNotFoundError: If the store has no such project
            StoreWriteError: If the store rejects the write
        """
        result = await self.breakdown(project_id)
        if not project_id:
            logger.warning("Skipping revenue reconciliation: no project id")
            return result

        try:
            await self.store.persist_project_financials(
                project_id, actual_revenue=result.total_revenue
            )
        except ProjectNotFoundError:
            logger.warning("Cannot update actual revenue: project %s not found", project_id)
            raise
        except Exception:
            logger.exception("Error updating project actual revenue for %s", project_id)
            raise

        logger.info("Updated project %s actualRevenue to %s", project_id, result.total_revenue)
        return result

    async def reconcile_all(self) -> list[RevenueBreakdown]:
        """Reconcile revenue for every project, one after another."""
        try:
            project_ids = list(await self.store.query_project_ids())
        except Exception:
            logger.exception("Error listing projects for revenue reconciliation")
            return []

        results = [await self.reconcile(project_id) for project_id in project_ids]
        logger.info("Updated actual revenue for %d projects", len(results))
        return results
