"""Output formatting utilities for CLI."""

import datetime as dt
from typing import List, Optional

import click

from werkuren.calculators.billing_calculator import CostBreakdown
from werkuren.models.rates import RateConfig
from werkuren.models.session import Session
from werkuren.utils.number_format import format_currency, format_number

MISSING_INSTANT = "–"


def format_success(message: str) -> str:
    """Format a success message with green color."""
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    """Format an error message with red color."""
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    """Format a warning message with yellow color."""
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    """Format an info message with blue color."""
    return click.style(f"ℹ {message}", fg="blue")


def format_instant(instant: Optional[dt.datetime]) -> str:
    """Format an instant as local wall-clock time.

    Timezone-aware instants are converted to the local timezone first.
    A missing instant is shown as a dash.

    Args:
        instant: The instant to format, or None

    Returns:
        Time as HH:MM:SS, or the placeholder dash

    Example:
        >>> format_instant(dt.datetime(2024, 5, 6, 9, 5, 0))
        '09:05:00'
        >>> format_instant(None)
        '–'
    """
    if instant is None:
        return MISSING_INSTANT
    if instant.tzinfo is not None:
        instant = instant.astimezone()
    return instant.strftime("%H:%M:%S")


def format_key_values(rows: List[List[str]]) -> str:
    """Format label/value pairs as aligned lines.

    Args:
        rows: List of [label, value] pairs

    Returns:
        One line per pair, values aligned after the longest label
    """
    if not rows:
        return ""
    width = max(len(label) for label, _ in rows)
    return "\n".join(f"{label:<{width}}  {value}" for label, value in rows)


def format_breakdown_lines(
    breakdown: CostBreakdown,
    session: Session,
    rates: RateConfig,
    currency: str = "EUR",
    locale: str = "nl_BE",
    hours_precision: int = 2,
    distance_precision: int = 1,
) -> List[str]:
    """Describe how the total was built up.

    For a closed session this returns one line per charge: hours × hourly
    rate, kilometres × travel rate and the standard fee. Until the session
    is stopped there is nothing to itemize, so a hint is returned instead.

    Args:
        breakdown: Calculated cost breakdown
        session: The session the breakdown was calculated for
        rates: The rates the breakdown was calculated with
        currency: ISO currency code for amounts
        locale: Locale identifier for separators
        hours_precision: Decimal places for hours
        distance_precision: Decimal places for kilometres

    Returns:
        Lines of text, without trailing newlines
    """
    if not breakdown.is_closed:
        return ["Press STOP to calculate."]

    def money(amount):
        return format_currency(amount, currency, locale)

    worked = format_number(breakdown.worked_hours, hours_precision, locale)
    billed = format_number(breakdown.billed_hours, hours_precision, locale)
    distance = format_number(session.distance_km, distance_precision, locale)

    return [
        f"Hours × hourly rate: {worked} h (billed: {billed} h) "
        f"× {money(rates.hourly_rate)} = {money(breakdown.labour_cost)}",
        f"Km × travel rate: {distance} km "
        f"× {money(rates.travel_rate_per_km)} = {money(breakdown.travel_cost)}",
        f"Standard fee: {money(breakdown.standard_fee)}",
    ]
