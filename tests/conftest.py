"""Pytest fixtures for finance engine tests."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from scaffold_finance.config import Settings
from scaffold_finance.database import create_all, get_engine, get_session, get_session_factory
from scaffold_finance.models import (
    Expense,
    Income,
    Project,
    Reimbursement,
    StaffMember,
    TaskAssignment,
)
from scaffold_finance.store import SqlRecordStore
from tests.fakes import FakeRecordStore


def make_settings(**overrides) -> Settings:
    values = dict(
        database_url="sqlite+aiosqlite:///:memory:",
        engine_version="1.0.0",
        host="127.0.0.1",
        port=8000,
        debug=False,
        recent_period_count=6,
        log_level="INFO",
        currency_symbol="$",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_store() -> FakeRecordStore:
    return FakeRecordStore()


# =============================================================================
# SQL store
# =============================================================================


@pytest.fixture
def database_url(tmp_path) -> str:
    # A file database so every session sees the same tables
    return f"sqlite+aiosqlite:///{tmp_path / 'finance.db'}"


@pytest.fixture
async def engine(database_url) -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine with all tables."""
    engine = get_engine(database_url)
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return get_session_factory(engine)


@pytest.fixture
def sql_store(session_factory) -> SqlRecordStore:
    return SqlRecordStore(session_factory)


@pytest.fixture
async def seeded(session_factory):
    """Two staff, one project and a week of activity in February 2024.

    Alice works Site A on 02-01 (twice, at 100 then 150) and 02-02 (100),
    and has one approved and one pending claim. Bob has no activity.
    """
    async with get_session(session_factory) as session:
        alice = StaffMember(name="Alice", daily_rate=Decimal("120"))
        bob = StaffMember(name="Bob", daily_rate=Decimal("90"))
        site = Project(name="Site A", budget=Decimal("1000.00"))
        session.add_all([alice, bob, site])
        await session.flush()

        session.add_all([
            TaskAssignment(
                staff_id=alice.id,
                project_id=site.id,
                project_name="Site A",
                date=date(2024, 2, 1),
                task_description="Framing",
                daily_rate=Decimal("100"),
            ),
        ])
        await session.flush()
        session.add_all([
            TaskAssignment(
                staff_id=alice.id,
                project_id=site.id,
                project_name="Site A",
                date=date(2024, 2, 1),
                task_description="Cleanup",
                daily_rate=Decimal("150"),
            ),
        ])
        await session.flush()
        session.add_all([
            TaskAssignment(
                staff_id=alice.id,
                project_id=site.id,
                project_name="Site A",
                date=date(2024, 2, 2),
                task_description="Drywall",
                daily_rate=Decimal("100"),
            ),
            Reimbursement(
                staff_id=alice.id,
                project_id=site.id,
                date=date(2024, 2, 1),
                item_description="Lumber",
                amount=Decimal("42.10"),
                status="approved",
            ),
            Reimbursement(
                staff_id=alice.id,
                project_id=site.id,
                date=date(2024, 2, 2),
                item_description="Nails",
                amount=Decimal("9.99"),
                status="pending",
            ),
            Expense(
                project_id=site.id,
                amount=Decimal("250.00"),
                date=date(2024, 2, 3),
                category="equipment",
            ),
            Income(project_id=site.id, amount=Decimal("500.00"), status="received"),
            Income(project_id=site.id, amount=Decimal("300.00"), status="pending"),
        ])

    return {"alice": alice, "bob": bob, "site": site}
