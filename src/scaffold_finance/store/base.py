"""Record store protocol consumed by the aggregators and reconcilers.

The engine only needs two capabilities from persistence: return the records
matching a filter, and accept a record to write. Query methods may return any
iterable (including a one-shot generator); callers materialize it once.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from typing import Any, Protocol, runtime_checkable


class StoreError(Exception):
    """Base class for record store failures."""


class StoreQueryError(StoreError):
    """Raised when a read against the store fails."""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Store query '{operation}' failed: {reason}")


class StoreWriteError(StoreError):
    """Raised when a write against the store fails."""

    def __init__(self, target: Any, reason: str):
        self.target = target
        self.reason = reason
        super().__init__(f"Store write for {target} failed: {reason}")


class ProjectNotFoundError(LookupError):
    """Raised when an operation names a project the store does not hold."""

    def __init__(self, project_id: Any):
        self.project_id = project_id
        super().__init__(f"Project {project_id} not found")


@runtime_checkable
class RecordStore(Protocol):
    """Protocol for the persistence collaborator."""

    async def query_assignments(
        self,
        *,
        staff_id: Any | None = None,
        project_id: Any | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Iterable[Any]:
        """Task assignments, optionally scoped to staff, project and an inclusive date range."""
        ...

    async def query_reimbursements(
        self,
        *,
        staff_id: Any | None = None,
        project_id: Any | None = None,
        status: str | None = None,
    ) -> Iterable[Any]:
        """Reimbursements filtered by equality on staff, project and status."""
        ...

    async def query_expenses(self, project_id: Any) -> Iterable[Any]:
        ...

    async def query_income(self, project_id: Any) -> Iterable[Any]:
        ...

    async def query_staff_roster(self) -> Iterable[Any]:
        ...

    async def query_pay_period_config(self) -> Any | None:
        ...

    async def query_project(self, project_id: Any) -> Any | None:
        ...

    async def query_project_ids(self) -> Iterable[Any]:
        ...

    async def persist_project_financials(self, project_id: Any, **fields: Decimal) -> None:
        """Write derived cost/revenue fields onto a project.

        Raises ProjectNotFoundError when no such project exists.
        """
        ...

    async def persist_pay_period_config(self, config: Any) -> Any:
        """Create or update the pay period config; returns the stored row."""
        ...
