"""Payroll API endpoints: pay period config, periods and reports."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, Response, status

from scaffold_finance.api.dependencies import Payroll
from scaffold_finance.api.schemas import (
    ErrorResponse,
    PayPeriodConfigResponse,
    PayPeriodConfigUpdate,
    PayPeriodListResponse,
    PayPeriodResponse,
    PayrollReportResponse,
    StaffPayrollResponse,
)
from scaffold_finance.calculators.money import round_to_cents
from scaffold_finance.calculators.types import PayPeriod

router = APIRouter(prefix="/payroll", tags=["payroll"])


def _period_or_400(start: date, end: date) -> PayPeriod:
    if start > end:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start must be on or before end",
        )
    return PayPeriod(start=start, end=end)


# ============================================================================
# Pay period configuration
# ============================================================================


@router.get(
    "/config",
    response_model=PayPeriodConfigResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_pay_period_config(payroll: Payroll) -> PayPeriodConfigResponse:
    """Get the organization's pay period config."""
    config = await payroll.get_pay_period_config()
    if config is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Pay period config not set",
        )
    return PayPeriodConfigResponse.model_validate(config)


@router.put(
    "/config",
    response_model=PayPeriodConfigResponse,
    responses={503: {"model": ErrorResponse}},
)
async def save_pay_period_config(
    payroll: Payroll,
    payload: PayPeriodConfigUpdate,
) -> PayPeriodConfigResponse:
    """Create or update the pay period config."""
    config = await payroll.save_pay_period_config(payload.period_type, payload.start_date)
    return PayPeriodConfigResponse.model_validate(config)


# ============================================================================
# Periods
# ============================================================================


@router.get(
    "/periods",
    response_model=PayPeriodListResponse,
    responses={404: {"model": ErrorResponse}},
)
async def list_recent_periods(
    payroll: Payroll,
    count: Annotated[int | None, Query(ge=1, le=52)] = None,
) -> PayPeriodListResponse:
    """List the most recent pay periods, most recent first."""
    config = await payroll.get_pay_period_config()
    if config is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Pay period config not set",
        )
    periods = await payroll.recent_periods(count)
    return PayPeriodListResponse(
        items=[PayPeriodResponse.model_validate(p) for p in periods],
        period_type=config.period_type,
    )


@router.get(
    "/periods/current",
    response_model=PayPeriodResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_current_period(
    payroll: Payroll,
    as_of: date | None = None,
) -> PayPeriodResponse:
    """Get the pay period containing ``as_of`` (default today)."""
    period = await payroll.current_period(as_of)
    if period is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Pay period config not set",
        )
    return PayPeriodResponse.model_validate(period)


# ============================================================================
# Reports
# ============================================================================


@router.get(
    "/report",
    response_model=PayrollReportResponse,
    responses={400: {"model": ErrorResponse}},
)
async def get_payroll_report(
    payroll: Payroll,
    start: date,
    end: date,
) -> PayrollReportResponse:
    """Per-staff wages and reimbursements for a period."""
    period = _period_or_400(start, end)
    summaries = await payroll.generate_report(period.start, period.end)
    return PayrollReportResponse(
        period=PayPeriodResponse.model_validate(period),
        staff=[StaffPayrollResponse.model_validate(s) for s in summaries],
        total_payout=round_to_cents(sum(s.total_payout for s in summaries)),
    )


@router.get(
    "/report.csv",
    response_class=Response,
    responses={
        200: {"content": {"text/csv": {}}},
        400: {"model": ErrorResponse},
    },
)
async def export_payroll_report(
    payroll: Payroll,
    start: date,
    end: date,
) -> Response:
    """Download the period's payroll report as CSV."""
    period = _period_or_400(start, end)
    filename, content = await payroll.export_report_csv(period.start, period.end)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
