"""Pydantic schemas for API request/response models."""

import datetime as dt
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from scaffold_finance.calculators.types import PeriodType


# ============================================================================
# Pay period schemas
# ============================================================================


class PayPeriodConfigUpdate(BaseModel):
    """Schema for creating or updating the pay period config."""

    period_type: PeriodType
    start_date: dt.date


class PayPeriodConfigResponse(BaseModel):
    """Schema for the stored pay period config."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    period_type: PeriodType
    start_date: dt.date


class PayPeriodResponse(BaseModel):
    """Schema for one pay period window."""

    model_config = ConfigDict(from_attributes=True)

    start: dt.date
    end: dt.date
    label: str


class PayPeriodListResponse(BaseModel):
    """Schema for recent pay periods, most recent first."""

    items: list[PayPeriodResponse]
    period_type: PeriodType


# ============================================================================
# Payroll report schemas
# ============================================================================


class AssignmentLine(BaseModel):
    """Schema for a task assignment included in a report."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    project_id: UUID | None = None
    project_name: str | None = None
    date: dt.date
    task_description: str | None = None
    daily_rate: Decimal


class ReimbursementLine(BaseModel):
    """Schema for an approved reimbursement included in a report."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    project_id: UUID | None = None
    date: dt.date
    item_description: str | None = None
    amount: Decimal


class StaffPayrollResponse(BaseModel):
    """Schema for one staff member's payroll summary."""

    model_config = ConfigDict(from_attributes=True)

    staff_id: UUID
    staff_name: str
    daily_rate: Decimal
    days_worked: int
    total_wages: Decimal
    total_reimbursements: Decimal
    total_payout: Decimal
    assignments: list[AssignmentLine]
    reimbursements: list[ReimbursementLine]


class PayrollReportResponse(BaseModel):
    """Schema for a payroll report."""

    period: PayPeriodResponse
    staff: list[StaffPayrollResponse]
    total_payout: Decimal


# ============================================================================
# Project reconciliation schemas
# ============================================================================


class ProjectCostResponse(BaseModel):
    """Schema for reconciled project cost."""

    model_config = ConfigDict(from_attributes=True)

    project_id: UUID
    total_wages: Decimal
    total_reimbursements: Decimal
    total_expenses: Decimal
    total_actual_cost: Decimal
    errors: list[str] = Field(default_factory=list)


class CostBreakdownResponse(ProjectCostResponse):
    """Schema for project cost with budget variance."""

    budget: Decimal
    remaining: Decimal
    percent_used: Decimal


class RevenueBreakdownResponse(BaseModel):
    """Schema for project revenue by income status."""

    model_config = ConfigDict(from_attributes=True)

    project_id: UUID
    total_revenue: Decimal
    pending_revenue: Decimal
    cancelled_revenue: Decimal
    errors: list[str] = Field(default_factory=list)


class BulkReconcileResponse(BaseModel):
    """Schema for reconciling every project."""

    costs: list[ProjectCostResponse]
    revenue: list[RevenueBreakdownResponse]


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    detail: str
    code: str | None = None
