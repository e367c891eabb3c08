"""Project cost and revenue reconciliation endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Path, status

from scaffold_finance.api.dependencies import Costs, Revenue
from scaffold_finance.api.schemas import (
    BulkReconcileResponse,
    CostBreakdownResponse,
    ErrorResponse,
    ProjectCostResponse,
    RevenueBreakdownResponse,
)
from scaffold_finance.services import ProjectNotFoundError

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post(
    "/reconcile",
    response_model=BulkReconcileResponse,
    responses={503: {"model": ErrorResponse}},
)
async def reconcile_all_projects(costs: Costs, revenue: Revenue) -> BulkReconcileResponse:
    """Recompute and persist cost and revenue for every project."""
    cost_results = await costs.reconcile_all()
    revenue_results = await revenue.reconcile_all()
    return BulkReconcileResponse(
        costs=[ProjectCostResponse.model_validate(c) for c in cost_results],
        revenue=[RevenueBreakdownResponse.model_validate(r) for r in revenue_results],
    )


# ============================================================================
# Cost
# ============================================================================


@router.post(
    "/{project_id}/reconcile-cost",
    response_model=ProjectCostResponse,
    responses={404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def reconcile_project_cost(
    costs: Costs,
    project_id: Annotated[UUID, Path()],
) -> ProjectCostResponse:
    """Recompute the project's actual cost and write it back."""
    try:
        result = await costs.reconcile(project_id)
    except ProjectNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )
    return ProjectCostResponse.model_validate(result)


@router.get(
    "/{project_id}/cost-breakdown",
    response_model=CostBreakdownResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_cost_breakdown(
    costs: Costs,
    project_id: Annotated[UUID, Path()],
) -> CostBreakdownResponse:
    """Actual cost against budget."""
    try:
        result = await costs.breakdown(project_id)
    except ProjectNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )
    return CostBreakdownResponse.model_validate(result)


# ============================================================================
# Revenue
# ============================================================================


@router.post(
    "/{project_id}/reconcile-revenue",
    response_model=RevenueBreakdownResponse,
    responses={404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def reconcile_project_revenue(
    revenue: Revenue,
    project_id: Annotated[UUID, Path()],
) -> RevenueBreakdownResponse:
    """Recompute the project's received revenue and write it back."""
    try:
        result = await revenue.reconcile(project_id)
    except ProjectNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )
    return RevenueBreakdownResponse.model_validate(result)


@router.get(
    "/{project_id}/revenue-breakdown",
    response_model=RevenueBreakdownResponse,
)
async def get_revenue_breakdown(
    revenue: Revenue,
    project_id: Annotated[UUID, Path()],
) -> RevenueBreakdownResponse:
    """Received, pending and cancelled income for a project."""
    result = await revenue.breakdown(project_id)
    return RevenueBreakdownResponse.model_validate(result)
