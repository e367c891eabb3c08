"""Project actual-cost reconciliation."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from decimal import Decimal
from typing import Any

from scaffold_finance.calculators.money import ZERO, round_to_cents, sum_to_cents
from scaffold_finance.calculators.types import CostBreakdown, ProjectCosts, ReimbursementStatus
from scaffold_finance.store.base import ProjectNotFoundError, RecordStore

logger = logging.getLogger(__name__)


async def read_or_empty(
    source: str,
    project_id: Any,
    fetch: Callable[[], Awaitable[Iterable[Any]]],
    errors: list[str],
) -> list[Any]:
    """Materialize one source; on failure log, note it in ``errors`` and return []."""
    try:
        return list(await fetch())
    except Exception:
        logger.exception("Error reading %s for project %s", source, project_id)
        errors.append(f"{source} unavailable")
        return []


class CostReconciler:
    """Computes and persists a project's actual cost.

    actual cost = labor + approved reimbursements + expenses

    Each component is rounded to cents before the final sum. Labor here is
    every assignment's rate with no per-day dedup: project cost tracks total
    labor spend, while payroll (see WageAggregator) tracks what a person is
    owed.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    async def calculate(self, project_id: Any) -> ProjectCosts:
        """Compute the project's cost components without persisting."""
        costs = ProjectCosts(project_id=project_id)
        if not project_id:
            return costs
        await self._fill(costs)
        return costs

    async def reconcile(self, project_id: Any) -> ProjectCosts:
        """Compute actual cost and write it back onto the project.

        Read failures degrade to zero; write failures are re-raised.

        Raises:
            ProjectNotFoundError: If the store has no such project
            StoreWriteError: If the store rejects the write
        """
        costs = await self.calculate(project_id)
        if not project_id:
            logger.warning("Skipping cost reconciliation: no project id")
            return costs

        try:
            await self.store.persist_project_financials(project_id, **costs.to_financials())
        except ProjectNotFoundError:
            logger.warning("Cannot update actual cost: project %s not found", project_id)
            raise
        except Exception:
            logger.exception("Error updating project actual cost for %s", project_id)
            raise

        if costs.degraded:
            logger.warning(
                "Project %s cost persisted with missing sources: %s",
                project_id,
                ", ".join(costs.errors),
            )
        logger.info(
            "Updated project %s actualCost to %s (wages %s, reimbursements %s, expenses %s)",
            project_id,
            costs.total_actual_cost,
            costs.total_wages,
            costs.total_reimbursements,
            costs.total_expenses,
        )
        return costs

    async def reconcile_all(self) -> list[ProjectCosts]:
        """Reconcile every project, one after another."""
        try:
            project_ids = list(await self.store.query_project_ids())
        except Exception:
            logger.exception("Error listing projects for cost reconciliation")
            return []

        results = [await self.reconcile(project_id) for project_id in project_ids]
        logger.info("Updated actual costs for %d projects", len(results))
        return results

    async def breakdown(self, project_id: Any) -> CostBreakdown:
        """Actual cost plus budget, remaining and percent used.

        Raises:
            ProjectNotFoundError: If the store has no such project
        """
        result = CostBreakdown(project_id=project_id)
        if not project_id:
            return result

        try:
            project = await self.store.query_project(project_id)
        except Exception:
            logger.exception("Error reading project %s", project_id)
            result.errors.append("project unavailable")
            project = None
        else:
            if project is None:
                raise ProjectNotFoundError(project_id)

        await self._fill(result)
        budget = round_to_cents(getattr(project, "budget", None))
        result.budget = budget
        result.remaining = round_to_cents(budget - result.total_actual_cost)
        result.percent_used = self.percent_used(result.total_actual_cost, budget)
        return result

    @staticmethod
    def percent_used(actual_cost: Decimal, budget: Decimal) -> Decimal:
        """Share of budget consumed, as a percentage. Zero when there is no budget."""
        if budget <= 0:
            return ZERO
        return actual_cost / budget * 100

    @staticmethod
    def total_labor(assignments: Iterable[Any]) -> Decimal:
        """Sum every assignment's rate (no per-day dedup)."""
        return sum_to_cents(a.daily_rate for a in assignments)

    @staticmethod
    def total_amounts(records: Iterable[Any]) -> Decimal:
        return sum_to_cents(r.amount for r in records)

    async def _fill(self, costs: ProjectCosts) -> None:
        """Read the three cost sources and set the rounded totals."""
        project_id = costs.project_id

        assignments = await read_or_empty(
            "assignments",
            project_id,
            lambda: self.store.query_assignments(project_id=project_id),
            costs.errors,
        )
        reimbursements = await read_or_empty(
            "reimbursements",
            project_id,
            lambda: self.store.query_reimbursements(
                project_id=project_id,
                status=ReimbursementStatus.APPROVED.value,
            ),
            costs.errors,
        )
        expenses = await read_or_empty(
            "expenses",
            project_id,
            lambda: self.store.query_expenses(project_id),
            costs.errors,
        )

        costs.total_wages = self.total_labor(assignments)
        costs.total_reimbursements = self.total_amounts(reimbursements)
        costs.total_expenses = self.total_amounts(expenses)
        costs.total_actual_cost = round_to_cents(
            costs.total_wages + costs.total_reimbursements + costs.total_expenses
        )
