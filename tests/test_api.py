"""Tests for the HTTP API."""

from datetime import date
from typing import AsyncGenerator
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from scaffold_finance.api.app import create_app
from tests.conftest import make_settings
from tests.fakes import Config


@pytest.fixture
async def client(fake_store, settings) -> AsyncGenerator[AsyncClient, None]:
    app = create_app(store=fake_store, settings=settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def configured(fake_store):
    fake_store.config = Config(period_type="biweekly", start_date=date(2024, 1, 1))
    return fake_store.config


@pytest.fixture
def site(fake_store):
    site = fake_store.add_project("Site A", budget="400")
    alice = fake_store.add_staff("Alice")
    fake_store.add_assignment(alice.id, date(2024, 2, 1), "100", project_id=site.id)
    fake_store.add_assignment(alice.id, date(2024, 2, 1), "100", project_id=site.id)
    fake_store.add_claim(alice.id, date(2024, 2, 2), "25.5", project_id=site.id)
    fake_store.add_income(site.id, "1000")
    fake_store.add_income(site.id, "250", status="cancelled")
    return site


class TestHealth:
    """Test health endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["store"] == "healthy"

    @pytest.mark.asyncio
    async def test_health_reports_engine_version(self, fake_store):
        app = create_app(store=fake_store, settings=make_settings(engine_version="2.3.0"))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/health")

        assert response.json()["version"] == "2.3.0"

    @pytest.mark.asyncio
    async def test_health_degraded_when_store_fails(self, client, fake_store):
        fake_store.fail_on.add("query_pay_period_config")

        response = await client.get("/health")

        assert response.json()["status"] == "degraded"

    @pytest.mark.asyncio
    async def test_live_and_ready(self, client):
        assert (await client.get("/live")).json() == {"status": "alive"}
        assert (await client.get("/ready")).json() == {"status": "ready"}


class TestPayrollConfig:
    """Test pay period config endpoints."""

    @pytest.mark.asyncio
    async def test_missing_config_is_404(self, client):
        response = await client.get("/api/v1/payroll/config")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_put_then_get(self, client):
        response = await client.put(
            "/api/v1/payroll/config",
            json={"period_type": "weekly", "start_date": "2024-01-01"},
        )
        assert response.status_code == 200

        response = await client.get("/api/v1/payroll/config")
        assert response.json()["period_type"] == "weekly"
        assert response.json()["start_date"] == "2024-01-01"

    @pytest.mark.asyncio
    async def test_unknown_cadence_is_422(self, client):
        response = await client.put(
            "/api/v1/payroll/config",
            json={"period_type": "daily", "start_date": "2024-01-01"},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_write_failure_is_503(self, client, fake_store):
        fake_store.fail_writes = True

        response = await client.put(
            "/api/v1/payroll/config",
            json={"period_type": "weekly", "start_date": "2024-01-01"},
        )

        assert response.status_code == 503
        assert response.json()["code"] == "STORE_WRITE_FAILED"


class TestPeriods:
    """Test period endpoints."""

    @pytest.mark.asyncio
    async def test_no_config_is_404(self, client):
        response = await client.get("/api/v1/payroll/periods")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_recent_periods(self, client, configured):
        response = await client.get("/api/v1/payroll/periods", params={"count": 3})

        body = response.json()
        assert response.status_code == 200
        assert body["period_type"] == "biweekly"
        assert len(body["items"]) == 3

    @pytest.mark.asyncio
    async def test_count_bounds(self, client, configured):
        response = await client.get("/api/v1/payroll/periods", params={"count": 0})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_current_period(self, client, configured):
        response = await client.get(
            "/api/v1/payroll/periods/current", params={"as_of": "2024-01-20"}
        )

        assert response.json() == {
            "start": "2024-01-15",
            "end": "2024-01-28",
            "label": "2024-01-15 to 2024-01-28",
        }


class TestReports:
    """Test payroll report endpoints."""

    @pytest.mark.asyncio
    async def test_json_report(self, client, site):
        response = await client.get(
            "/api/v1/payroll/report", params={"start": "2024-02-01", "end": "2024-02-14"}
        )

        body = response.json()
        assert response.status_code == 200
        assert body["period"]["label"] == "2024-02-01 to 2024-02-14"
        assert len(body["staff"]) == 1
        assert body["staff"][0]["days_worked"] == 1
        assert body["total_payout"] == "125.50"

    @pytest.mark.asyncio
    async def test_inverted_window_is_400(self, client):
        response = await client.get(
            "/api/v1/payroll/report", params={"start": "2024-02-14", "end": "2024-02-01"}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_csv_download(self, client, site):
        response = await client.get(
            "/api/v1/payroll/report.csv", params={"start": "2024-02-01", "end": "2024-02-14"}
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.headers["content-disposition"] == (
            'attachment; filename="payroll_2024-02-01_to_2024-02-14.csv"'
        )
        assert response.text.startswith("Staff Name,Days Worked,")
        assert '"Alice","1","$100.00","$25.50","$125.50"' in response.text


class TestProjects:
    """Test reconciliation endpoints."""

    @pytest.mark.asyncio
    async def test_reconcile_cost(self, client, fake_store, site):
        response = await client.post(f"/api/v1/projects/{site.id}/reconcile-cost")

        assert response.status_code == 200
        assert response.json()["total_actual_cost"] == "225.50"
        assert str(fake_store.persisted[site.id]["actual_cost"]) == "225.50"

    @pytest.mark.asyncio
    async def test_cost_breakdown(self, client, site):
        response = await client.get(f"/api/v1/projects/{site.id}/cost-breakdown")

        body = response.json()
        assert body["budget"] == "400.00"
        assert body["remaining"] == "174.50"

    @pytest.mark.asyncio
    async def test_cost_breakdown_unknown_project(self, client):
        response = await client.get(f"/api/v1/projects/{uuid4()}/cost-breakdown")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_reconcile_cost_unknown_project(self, client, fake_store):
        response = await client.post(f"/api/v1/projects/{uuid4()}/reconcile-cost")

        assert response.status_code == 404
        assert fake_store.persisted == {}

    @pytest.mark.asyncio
    async def test_reconcile_revenue(self, client, fake_store, site):
        response = await client.post(f"/api/v1/projects/{site.id}/reconcile-revenue")

        body = response.json()
        assert body["total_revenue"] == "1000.00"
        assert body["cancelled_revenue"] == "250.00"
        assert str(fake_store.persisted[site.id]["actual_revenue"]) == "1000.00"

    @pytest.mark.asyncio
    async def test_reconcile_revenue_unknown_project(self, client, fake_store):
        response = await client.post(f"/api/v1/projects/{uuid4()}/reconcile-revenue")

        assert response.status_code == 404
        assert response.json()["detail"] == "Project not found"
        assert fake_store.persisted == {}

    @pytest.mark.asyncio
    async def test_revenue_breakdown_does_not_persist(self, client, fake_store, site):
        await client.get(f"/api/v1/projects/{site.id}/revenue-breakdown")

        assert fake_store.persisted == {}

    @pytest.mark.asyncio
    async def test_write_failure_is_503(self, client, fake_store, site):
        fake_store.fail_writes = True

        response = await client.post(f"/api/v1/projects/{site.id}/reconcile-cost")

        assert response.status_code == 503

    @pytest.mark.asyncio
    async def test_bulk_reconcile(self, client, fake_store, site):
        fake_store.add_project("Site B")

        response = await client.post("/api/v1/projects/reconcile")

        body = response.json()
        assert len(body["costs"]) == 2
        assert len(body["revenue"]) == 2
        assert len(fake_store.persisted) == 2
