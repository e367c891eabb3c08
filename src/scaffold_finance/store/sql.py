"""SQLAlchemy implementation of the record store."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from scaffold_finance.database import get_session
from scaffold_finance.models import (
    Expense,
    Income,
    PayPeriodConfig,
    Project,
    Reimbursement,
    StaffMember,
    TaskAssignment,
)
from scaffold_finance.store.base import ProjectNotFoundError, StoreQueryError, StoreWriteError

logger = logging.getLogger(__name__)

FINANCIAL_FIELDS = frozenset({
    "actual_cost",
    "labor_cost",
    "reimbursement_cost",
    "expense_cost",
    "actual_revenue",
})


def _as_uuid(value: Any) -> UUID | None:
    """Coerce an identifier to UUID, or None if it is not one."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


class SqlRecordStore:
    """Record store backed by an async SQLAlchemy session factory.

    Every call opens its own session, so concurrent callers (the per-staff
    report fan-out) never share one. Rows are returned detached with all
    columns loaded.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    # === Reads ===

    async def query_assignments(
        self,
        *,
        staff_id: Any | None = None,
        project_id: Any | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[TaskAssignment]:
        query = select(TaskAssignment)

        if staff_id is not None:
            staff_uuid = _as_uuid(staff_id)
            if staff_uuid is None:
                return []
            query = query.where(TaskAssignment.staff_id == staff_uuid)
        if project_id is not None:
            project_uuid = _as_uuid(project_id)
            if project_uuid is None:
                return []
            query = query.where(TaskAssignment.project_id == project_uuid)
        if start_date is not None:
            query = query.where(TaskAssignment.date >= start_date)
        if end_date is not None:
            query = query.where(TaskAssignment.date <= end_date)

        # Insertion order within a day decides which rate is "first seen"
        query = query.order_by(TaskAssignment.date, TaskAssignment.id)
        return await self._scalars("query_assignments", query)

    async def query_reimbursements(
        self,
        *,
        staff_id: Any | None = None,
        project_id: Any | None = None,
        status: str | None = None,
    ) -> list[Reimbursement]:
        query = select(Reimbursement)

        if staff_id is not None:
            staff_uuid = _as_uuid(staff_id)
            if staff_uuid is None:
                return []
            query = query.where(Reimbursement.staff_id == staff_uuid)
        if project_id is not None:
            project_uuid = _as_uuid(project_id)
            if project_uuid is None:
                return []
            query = query.where(Reimbursement.project_id == project_uuid)
        if status is not None:
            query = query.where(Reimbursement.status == str(getattr(status, "value", status)))

        query = query.order_by(Reimbursement.date, Reimbursement.id)
        return await self._scalars("query_reimbursements", query)

    async def query_expenses(self, project_id: Any) -> list[Expense]:
        project_uuid = _as_uuid(project_id)
        if project_uuid is None:
            return []
        query = (
            select(Expense)
            .where(Expense.project_id == project_uuid)
            .order_by(Expense.date, Expense.id)
        )
        return await self._scalars("query_expenses", query)

    async def query_income(self, project_id: Any) -> list[Income]:
        project_uuid = _as_uuid(project_id)
        if project_uuid is None:
            return []
        query = select(Income).where(Income.project_id == project_uuid).order_by(Income.id)
        return await self._scalars("query_income", query)

    async def query_staff_roster(self) -> list[StaffMember]:
        query = select(StaffMember).order_by(StaffMember.name, StaffMember.id)
        return await self._scalars("query_staff_roster", query)

    async def query_pay_period_config(self) -> PayPeriodConfig | None:
        query = select(PayPeriodConfig).order_by(PayPeriodConfig.created_at).limit(1)
        rows = await self._scalars("query_pay_period_config", query)
        return rows[0] if rows else None

    async def query_project(self, project_id: Any) -> Project | None:
        project_uuid = _as_uuid(project_id)
        if project_uuid is None:
            return None
        try:
            async with self.session_factory() as session:
                return await session.get(Project, project_uuid)
        except SQLAlchemyError as e:
            raise StoreQueryError("query_project", str(e)) from e

    async def query_project_ids(self) -> list[UUID]:
        query = select(Project.id).order_by(Project.name, Project.id)
        return await self._scalars("query_project_ids", query)

    # === Writes ===

    async def persist_project_financials(self, project_id: Any, **fields: Decimal) -> None:
        unknown = set(fields) - FINANCIAL_FIELDS
        if unknown:
            raise StoreWriteError(project_id, f"unknown fields {sorted(unknown)}")

        project_uuid = _as_uuid(project_id)
        if project_uuid is None:
            raise ProjectNotFoundError(project_id)

        try:
            async with get_session(self.session_factory) as session:
                project = await session.get(Project, project_uuid)
                if project is None:
                    raise ProjectNotFoundError(project_id)
                for name, value in fields.items():
                    setattr(project, name, value)
                project.updated_at = datetime.now(timezone.utc)
        except SQLAlchemyError as e:
            raise StoreWriteError(project_id, str(e)) from e

    async def persist_pay_period_config(self, config: PayPeriodConfig) -> PayPeriodConfig:
        try:
            async with get_session(self.session_factory) as session:
                stored = await session.merge(config)
                await session.flush()
        except SQLAlchemyError as e:
            raise StoreWriteError("pay_period_config", str(e)) from e
        logger.info(
            "Saved pay period config %s (%s from %s)",
            stored.id,
            stored.period_type,
            stored.start_date,
        )
        return stored

    async def _scalars(self, operation: str, query: Select[Any]) -> list[Any]:
        """Run a select and return all scalar rows."""
        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise StoreQueryError(operation, str(e)) from e
