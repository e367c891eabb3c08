"""Type definitions for the aggregation and reconciliation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any


class PeriodType(str, Enum):
    """Pay period cadences."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class ReimbursementStatus(str, Enum):
    """Reimbursement approval states."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class IncomeStatus(str, Enum):
    """Income collection states."""

    RECEIVED = "received"
    PENDING = "pending"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class PayPeriod:
    """Inclusive calendar window over which wages are totaled."""

    start: date
    end: date

    @property
    def label(self) -> str:
        return f"{self.start.isoformat()} to {self.end.isoformat()}"

    @property
    def length_days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass
class WageSummary:
    """Deduplicated wages for one staff member in a window."""

    days_worked: int = 0
    total_wages: Decimal = Decimal("0.00")
    assignments: list[Any] = field(default_factory=list)


@dataclass
class ReimbursementSummary:
    """Approved reimbursements for one staff member in a window."""

    total_reimbursements: Decimal = Decimal("0.00")
    reimbursements: list[Any] = field(default_factory=list)


@dataclass
class StaffPayrollSummary:
    """One row of the payroll report."""

    staff_id: Any
    staff_name: str
    daily_rate: Decimal  # Display fallback only
    assignments: list[Any]
    reimbursements: list[Any]
    days_worked: int
    total_wages: Decimal
    total_reimbursements: Decimal
    total_payout: Decimal

    @property
    def has_activity(self) -> bool:
        return len(self.assignments) > 0 or len(self.reimbursements) > 0


@dataclass
class ProjectCosts:
    """Reconciled actual cost for a project.

    ``errors`` lists the sources that could not be read and were counted as
    zero.
    """

    project_id: Any
    total_wages: Decimal = Decimal("0.00")
    total_reimbursements: Decimal = Decimal("0.00")
    total_expenses: Decimal = Decimal("0.00")
    total_actual_cost: Decimal = Decimal("0.00")
    errors: list[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return len(self.errors) > 0

    def to_financials(self) -> dict[str, Decimal]:
        """Fields written back onto the project record."""
        return {
            "actual_cost": self.total_actual_cost,
            "labor_cost": self.total_wages,
            "reimbursement_cost": self.total_reimbursements,
            "expense_cost": self.total_expenses,
        }


@dataclass
class CostBreakdown(ProjectCosts):
    """Actual cost plus budget variance."""

    budget: Decimal = Decimal("0.00")
    remaining: Decimal = Decimal("0.00")
    percent_used: Decimal = Decimal("0")


@dataclass
class RevenueBreakdown:
    """Income bucketed by status. Only ``total_revenue`` is persisted."""

    project_id: Any
    total_revenue: Decimal = Decimal("0.00")
    pending_revenue: Decimal = Decimal("0.00")
    cancelled_revenue: Decimal = Decimal("0.00")
    errors: list[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return len(self.errors) > 0

    @property
    def total_all(self) -> Decimal:
        return self.total_revenue + self.pending_revenue + self.cancelled_revenue
