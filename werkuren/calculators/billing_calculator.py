"""Billing calculator for a single work session.

This module turns a session snapshot and a rate configuration into an
itemized cost breakdown:
- Worked hours (actual interval, not rounded)
- Billed hours (rounded up to half-hour increments)
- Labour cost, travel cost and the optional standard fee
- The total, which is only charged once the session is closed

Every function is pure and total: missing instants and reversed intervals
degrade to zero instead of raising. Amounts are exact Decimal values;
rounding to cents is left to the presentation layer.
"""

from dataclasses import dataclass
from decimal import Decimal

from werkuren.calculators.time_utils import (
    half_hour_increment,
    interval_seconds,
    seconds_to_decimal_hours,
    split_interval,
)
from werkuren.models.rates import RateConfig
from werkuren.models.session import ClosedSession, Session

STANDARD_FEE = Decimal("5.00")
ZERO = Decimal("0")


@dataclass(frozen=True)
class CostBreakdown:
    """Complete cost breakdown for a single session.

    Attributes:
        worked_hours: Actual hours between start and end
        billed_hours: Hours charged after half-hour rounding
        labour_cost: Labour charge (billed_hours × hourly_rate)
        travel_cost: Travel charge (distance_km × travel_rate_per_km)
        standard_fee: Flat fee, when enabled
        total: Sum of the charges, or zero while the session is not closed
        is_closed: Whether the session had both a start and an end

    Example:
        >>> breakdown = CostBreakdown(
        ...     worked_hours=Decimal("1.25"),
        ...     billed_hours=Decimal("1.5"),
        ...     labour_cost=Decimal("67.50"),
        ...     travel_cost=Decimal("7.00"),
        ...     standard_fee=Decimal("5.00"),
        ...     total=Decimal("79.50"),
        ...     is_closed=True,
        ... )
        >>> breakdown.total
        Decimal('79.50')
    """

    worked_hours: Decimal
    billed_hours: Decimal
    labour_cost: Decimal
    travel_cost: Decimal
    standard_fee: Decimal
    total: Decimal
    is_closed: bool


def compute_worked_hours(session: Session) -> Decimal:
    """Calculate the actual worked hours of a session.

    Args:
        session: Session snapshot

    Returns:
        Hours between start and end as a continuous value; zero when the
        session is not closed or the end lies before the start
    """
    if not isinstance(session, ClosedSession):
        return ZERO
    return seconds_to_decimal_hours(interval_seconds(session.start, session.end))


def compute_billed_hours(session: Session) -> Decimal:
    """Calculate the billed hours of a session.

    Full hours are billed as they are. The minutes past the last full hour
    round up: 1-30 minutes bill half an hour, 31-59 minutes a full hour.
    Seconds past the last full minute are ignored.

    Args:
        session: Session snapshot

    Returns:
        Billed hours; zero when the session is not closed

    Example:
        >>> import datetime as dt
        >>> session = ClosedSession(
        ...     start=dt.datetime(2024, 5, 6, 9, 0),
        ...     end=dt.datetime(2024, 5, 6, 10, 31),
        ... )
        >>> compute_billed_hours(session)
        Decimal('2.0')
    """
    if not isinstance(session, ClosedSession):
        return ZERO
    seconds = interval_seconds(session.start, session.end)
    full_hours, remainder_minutes = split_interval(seconds)
    return Decimal(full_hours) + half_hour_increment(remainder_minutes)


def compute_labour_cost(billed_hours: Decimal, rates: RateConfig) -> Decimal:
    """Calculate the labour charge (billed hours × hourly rate)."""
    return billed_hours * rates.hourly_rate


def compute_travel_cost(session: Session, rates: RateConfig) -> Decimal:
    """Calculate the travel charge (distance × travel rate per km).

    Travel is charged independently of the session state.
    """
    return session.distance_km * rates.travel_rate_per_km


def compute_standard_fee(rates: RateConfig) -> Decimal:
    """Return the flat standard fee when enabled, otherwise zero."""
    return STANDARD_FEE if rates.apply_standard_fee else ZERO


def compute_total(session: Session, rates: RateConfig) -> Decimal:
    """Calculate the total amount for a session.

    The total is meaningless until the session is stopped, so it is zero for
    idle and open sessions. A closed session with a reversed interval still
    carries its travel cost and standard fee.

    Args:
        session: Session snapshot
        rates: Rate configuration

    Returns:
        Labour cost + travel cost + standard fee, or zero when not closed
    """
    if not isinstance(session, ClosedSession):
        return ZERO
    labour_cost = compute_labour_cost(compute_billed_hours(session), rates)
    return (
        labour_cost
        + compute_travel_cost(session, rates)
        + compute_standard_fee(rates)
    )


def compute_breakdown(session: Session, rates: RateConfig) -> CostBreakdown:
    """Calculate the complete cost breakdown for a session.

    This is the entry point for callers: it evaluates every charge in a
    fixed order and packages the results. It holds no state, so calling it
    again with the same inputs returns an equal breakdown.

    Args:
        session: Session snapshot
        rates: Rate configuration

    Returns:
        CostBreakdown with hours, itemized charges and total

    Example:
        >>> import datetime as dt
        >>> session = ClosedSession(
        ...     start=dt.datetime(2024, 5, 6, 9, 0),
        ...     end=dt.datetime(2024, 5, 6, 10, 15),
        ...     distance_km=20,
        ... )
        >>> rates = RateConfig(
        ...     hourly_rate="45.00",
        ...     travel_rate_per_km="0.35",
        ...     apply_standard_fee=True,
        ... )
        >>> compute_breakdown(session, rates).total
        Decimal('79.500')
    """
    worked_hours = compute_worked_hours(session)
    billed_hours = compute_billed_hours(session)
    labour_cost = compute_labour_cost(billed_hours, rates)
    travel_cost = compute_travel_cost(session, rates)
    standard_fee = compute_standard_fee(rates)
    total = compute_total(session, rates)

    return CostBreakdown(
        worked_hours=worked_hours,
        billed_hours=billed_hours,
        labour_cost=labour_cost,
        travel_cost=travel_cost,
        standard_fee=standard_fee,
        total=total,
        is_closed=session.is_closed,
    )
