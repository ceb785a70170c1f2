"""Rate configuration model.

RateConfig holds the persisted billing settings: the hourly rate, the
travel rate per kilometre and whether the flat standard fee applies.
"""

from decimal import Decimal
from typing import Union

from pydantic import Field, field_validator

from werkuren.models.base import BaseDataModel, to_decimal


class RateConfig(BaseDataModel):
    """Billing rates applied to a session.

    All fields default to zero / off, matching a fresh installation with no
    saved settings. The model is frozen: one calculation always sees a
    consistent set of rates.

    Attributes:
        hourly_rate: Rate per billed hour in currency units
        travel_rate_per_km: Rate per travelled kilometre in currency units
        apply_standard_fee: Whether the flat standard fee is charged

    Example:
        >>> rates = RateConfig(hourly_rate="45", travel_rate_per_km=0.35)
        >>> rates.travel_rate_per_km
        Decimal('0.35')
        >>> rates.apply_standard_fee
        False
    """

    hourly_rate: Decimal = Field(
        default=Decimal("0"), ge=0, description="Rate per billed hour"
    )
    travel_rate_per_km: Decimal = Field(
        default=Decimal("0"), ge=0, description="Rate per travelled kilometre"
    )
    apply_standard_fee: bool = Field(
        default=False, description="Whether the flat standard fee is charged"
    )

    @field_validator("hourly_rate", "travel_rate_per_km", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Union[str, int, float, Decimal]) -> Decimal:
        """Convert numeric values to Decimal for precision."""
        return to_decimal(v)
