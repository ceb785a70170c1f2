"""Calculator modules for the werkuren calculator."""

from werkuren.calculators.billing_calculator import (
    STANDARD_FEE,
    CostBreakdown,
    compute_billed_hours,
    compute_breakdown,
    compute_labour_cost,
    compute_standard_fee,
    compute_total,
    compute_travel_cost,
    compute_worked_hours,
)
from werkuren.calculators.time_utils import (
    half_hour_increment,
    interval_seconds,
    seconds_to_decimal_hours,
    split_interval,
    timedelta_to_seconds,
)

__all__ = [
    # billing_calculator
    "STANDARD_FEE",
    "CostBreakdown",
    "compute_billed_hours",
    "compute_breakdown",
    "compute_labour_cost",
    "compute_standard_fee",
    "compute_total",
    "compute_travel_cost",
    "compute_worked_hours",
    # time_utils
    "half_hour_increment",
    "interval_seconds",
    "seconds_to_decimal_hours",
    "split_interval",
    "timedelta_to_seconds",
]
