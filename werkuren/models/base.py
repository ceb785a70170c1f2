"""Base model for all data models in the calculator.

This module provides a base Pydantic model with common configuration
shared by the rate configuration and the session variants.
"""

from decimal import Decimal
from typing import Union

from pydantic import BaseModel, ConfigDict


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration:
    - Validation with type checking
    - Serialization to/from dictionaries
    - Immutability (frozen models), so a calculation always reads a snapshot
    - Arbitrary types support for datetimes and decimals

    Example:
        >>> class Rate(BaseDataModel):
        ...     name: str
        ...     amount: Decimal
        >>> rate = Rate(name="hourly", amount=Decimal("45"))
        >>> rate.name
        'hourly'
    """

    model_config = ConfigDict(
        # Allow arbitrary types like Decimal, datetime
        arbitrary_types_allowed=True,
        # Use strict type checking
        strict=False,
        # Reject unknown fields
        extra="forbid",
        # Frozen models are immutable after creation
        frozen=True,
    )


def to_decimal(v: Union[str, int, float, Decimal]) -> Decimal:
    """Convert a numeric value to Decimal for precision.

    Floats go through ``str`` first so ``0.35`` becomes ``Decimal("0.35")``
    rather than its binary expansion.

    Args:
        v: The value to convert

    Returns:
        The value as a Decimal

    Raises:
        ValueError: If the value cannot be converted to Decimal
    """
    if isinstance(v, Decimal):
        return v
    if isinstance(v, bool):
        raise ValueError(f"Cannot convert boolean {v} to Decimal")
    try:
        result = Decimal(str(v).strip().replace(",", "."))
    except (ValueError, TypeError, ArithmeticError) as e:
        raise ValueError(f"Cannot convert {v!r} to Decimal: {e}")
    if not result.is_finite():
        raise ValueError(f"Cannot convert {v!r} to a finite Decimal")
    return result
