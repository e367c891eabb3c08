"""Pay period arithmetic and record aggregation."""

from scaffold_finance.calculators.money import format_currency, round_to_cents, to_decimal
from scaffold_finance.calculators.pay_period import PayPeriodCalculator
from scaffold_finance.calculators.reimbursement_aggregator import ReimbursementAggregator
from scaffold_finance.calculators.types import (
    IncomeStatus,
    PayPeriod,
    PeriodType,
    ReimbursementStatus,
)
from scaffold_finance.calculators.wage_aggregator import WageAggregator

__all__ = [
    "PayPeriodCalculator",
    "WageAggregator",
    "ReimbursementAggregator",
    "PayPeriod",
    "PeriodType",
    "ReimbursementStatus",
    "IncomeStatus",
    "format_currency",
    "round_to_cents",
    "to_decimal",
]
