"""Time calculation utilities for the calculator.

This module provides low-level utilities for interval calculations:
- Exact seconds between two instants (clamped at zero)
- Converting seconds to decimal hours
- Splitting an interval into full hours and remaining minutes
- The half-hour billing increment table

Durations are computed as Decimal from the integer parts of the timedelta,
so results do not depend on float rounding.
"""

import datetime as dt
from decimal import Decimal
from typing import Tuple

SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60

# Extra billed hours for the minutes left after the last full hour
NO_INCREMENT = Decimal("0.0")
HALF_HOUR_INCREMENT = Decimal("0.5")
FULL_HOUR_INCREMENT = Decimal("1.0")
HALF_HOUR_THRESHOLD_MINUTES = 30


def timedelta_to_seconds(td: dt.timedelta) -> Decimal:
    """Convert a timedelta to exact seconds.

    Args:
        td: Timedelta to convert

    Returns:
        Seconds as Decimal, including microseconds

    Example:
        >>> timedelta_to_seconds(dt.timedelta(hours=1, microseconds=500000))
        Decimal('3600.500000')
    """
    whole_seconds = td.days * 86400 + td.seconds
    return Decimal(whole_seconds) + Decimal(td.microseconds).scaleb(-6)


def interval_seconds(start: dt.datetime, end: dt.datetime) -> Decimal:
    """Calculate the seconds elapsed from start to end, never below zero.

    An end before the start (clock skew) yields zero rather than a
    negative interval.

    Example:
        >>> start = dt.datetime(2024, 5, 6, 9, 0)
        >>> interval_seconds(start, dt.datetime(2024, 5, 6, 10, 15))
        Decimal('4500.000000')
        >>> interval_seconds(start, dt.datetime(2024, 5, 6, 8, 0))
        Decimal('0')
    """
    seconds = timedelta_to_seconds(end - start)
    if seconds < 0:
        return Decimal("0")
    return seconds


def seconds_to_decimal_hours(seconds: Decimal) -> Decimal:
    """Convert seconds to hours without rounding.

    Example:
        >>> seconds_to_decimal_hours(Decimal("5400"))
        Decimal('1.5')
    """
    return seconds / Decimal(SECONDS_PER_HOUR)


def split_interval(seconds: Decimal) -> Tuple[int, int]:
    """Split an interval into full hours and whole remaining minutes.

    Seconds beyond the last full minute are dropped.

    Args:
        seconds: Non-negative interval length in seconds

    Returns:
        Tuple of (full_hours, remainder_minutes), minutes in range 0-59

    Example:
        >>> split_interval(Decimal("4559"))
        (1, 15)
    """
    full_hours = int(seconds // SECONDS_PER_HOUR)
    remainder_minutes = int((seconds - full_hours * SECONDS_PER_HOUR) // SECONDS_PER_MINUTE)
    return full_hours, remainder_minutes


def half_hour_increment(remainder_minutes: int) -> Decimal:
    """Return the extra billed hours for the minutes past the last full hour.

    - 0 minutes: nothing extra
    - 1 to 30 minutes: half an hour
    - 31 to 59 minutes: a full hour

    Example:
        >>> half_hour_increment(0)
        Decimal('0.0')
        >>> half_hour_increment(30)
        Decimal('0.5')
        >>> half_hour_increment(31)
        Decimal('1.0')
    """
    if remainder_minutes <= 0:
        return NO_INCREMENT
    if remainder_minutes <= HALF_HOUR_THRESHOLD_MINUTES:
        return HALF_HOUR_INCREMENT
    return FULL_HOUR_INCREMENT
