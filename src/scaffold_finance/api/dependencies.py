"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from scaffold_finance.config import Settings
from scaffold_finance.services import CostReconciler, PayrollService, RevenueReconciler
from scaffold_finance.store import RecordStore


def get_store(request: Request) -> RecordStore:
    """Record store owned by the application."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_payroll_service(
    store: Annotated[RecordStore, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> PayrollService:
    return PayrollService(store, settings)


def get_cost_reconciler(store: Annotated[RecordStore, Depends(get_store)]) -> CostReconciler:
    return CostReconciler(store)


def get_revenue_reconciler(
    store: Annotated[RecordStore, Depends(get_store)],
) -> RevenueReconciler:
    return RevenueReconciler(store)


# Type aliases for cleaner dependency injection
Store = Annotated[RecordStore, Depends(get_store)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
Payroll = Annotated[PayrollService, Depends(get_payroll_service)]
Costs = Annotated[CostReconciler, Depends(get_cost_reconciler)]
Revenue = Annotated[RevenueReconciler, Depends(get_revenue_reconciler)]
