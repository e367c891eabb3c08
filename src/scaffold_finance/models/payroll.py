"""Pay period configuration, staff, assignment and reimbursement models."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from scaffold_finance.models.base import Base, TimestampMixin, utcnow


class PayPeriodConfig(Base, TimestampMixin):
    """Organization-wide pay period cadence.

    There is a single row per organization; it is created lazily the first
    time the cadence is configured and updated in place afterwards.
    """

    __tablename__ = "pay_period_config"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    period_type: Mapped[str] = mapped_column("type", String, nullable=False)
    start_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    updated_at: Mapped[dt.datetime | None] = mapped_column(default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint(
            "type IN ('weekly', 'biweekly', 'monthly')",
            name="pay_period_config_type_check",
        ),
    )


class StaffMember(Base, TimestampMixin):
    """Non-user staff member who is assigned daily tasks."""

    __tablename__ = "staff_member"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String, nullable=False)
    # Display fallback only; wages use the rate captured on each assignment
    daily_rate: Mapped[Decimal] = mapped_column(
        Numeric(14, 4), nullable=False, default=Decimal("0")
    )


class TaskAssignment(Base, TimestampMixin):
    """One task performed by a staff member on one calendar day."""

    __tablename__ = "task_assignment"

    # Integer key keeps insertion order, which defines "first seen"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    staff_id: Mapped[UUID] = mapped_column(
        ForeignKey("staff_member.id", ondelete="CASCADE"), nullable=False
    )
    project_id: Mapped[UUID] = mapped_column(
        ForeignKey("project.id", ondelete="CASCADE"), nullable=False
    )
    project_name: Mapped[str] = mapped_column(String, nullable=False, default="")
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    task_description: Mapped[str] = mapped_column(String, nullable=False, default="")
    daily_rate: Mapped[Decimal] = mapped_column(Numeric(14, 4), nullable=False)

    __table_args__ = (
        Index("ix_task_assignment_staff_date", "staff_id", "date"),
        Index("ix_task_assignment_project", "project_id"),
    )


class Reimbursement(Base, TimestampMixin):
    """Material purchase claimed back by a staff member."""

    __tablename__ = "reimbursement"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    staff_id: Mapped[UUID] = mapped_column(
        ForeignKey("staff_member.id", ondelete="CASCADE"), nullable=False
    )
    project_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("project.id", ondelete="SET NULL"), nullable=True
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    item_description: Mapped[str] = mapped_column(String, nullable=False, default="")
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 4), nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="pending")

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="reimbursement_status_check",
        ),
        Index("ix_reimbursement_staff_status", "staff_id", "status"),
    )
