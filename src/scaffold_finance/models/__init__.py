"""SQLAlchemy ORM models."""

from scaffold_finance.models.base import Base, TimestampMixin
from scaffold_finance.models.payroll import (
    PayPeriodConfig,
    Reimbursement,
    StaffMember,
    TaskAssignment,
)
from scaffold_finance.models.project import Expense, Income, Project

__all__ = [
    "Base",
    "TimestampMixin",
    "PayPeriodConfig",
    "StaffMember",
    "TaskAssignment",
    "Reimbursement",
    "Project",
    "Expense",
    "Income",
]
