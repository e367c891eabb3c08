"""Reconciliation and payroll services."""

from scaffold_finance.services.cost_reconciler import CostReconciler
from scaffold_finance.services.payroll_service import PayrollService
from scaffold_finance.services.report_builder import PayrollReportBuilder
from scaffold_finance.services.revenue_reconciler import RevenueReconciler
from scaffold_finance.store.base import ProjectNotFoundError

__all__ = [
    "CostReconciler",
    "ProjectNotFoundError",
    "PayrollReportBuilder",
    "PayrollService",
    "RevenueReconciler",
]
