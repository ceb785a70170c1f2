"""
Persistence of the billing rates.

Rates live in the key-value settings store under stable keys, so values
saved by earlier versions keep loading. Decimals are stored as strings to
round-trip exactly.
"""

import logging
from typing import Any

from werkuren.models.rates import RateConfig
from werkuren.services.settings_store import SettingsStore
from werkuren.utils.logging_utils import log_function_call

logger = logging.getLogger(__name__)

HOURLY_RATE_KEY = "vih_rate_hour"
TRAVEL_RATE_KEY = "vih_rate_travel"
STANDARD_FEE_KEY = "vih_std_cost"


class RateConfigStore:
    """
    Load and save a RateConfig through a SettingsStore.

    The calculator never writes rates; only this store does.

    Example:
        >>> store = RateConfigStore(SettingsStore("/tmp/werkuren-rates.json"))
        >>> rates = store.update(hourly_rate="45")
        >>> rates.hourly_rate
        Decimal('45')
    """

    def __init__(self, settings_store: SettingsStore):
        self.settings_store = settings_store

    def load(self) -> RateConfig:
        """
        Read the current rates; missing keys fall back to the defaults.

        Raises:
            ValidationError: If a stored value is not a valid rate
            SettingsStoreError: If the settings file cannot be read
        """
        values = {}
        hourly_rate = self.settings_store.get(HOURLY_RATE_KEY)
        travel_rate = self.settings_store.get(TRAVEL_RATE_KEY)
        standard_fee = self.settings_store.get(STANDARD_FEE_KEY)

        if hourly_rate is not None:
            values["hourly_rate"] = hourly_rate
        if travel_rate is not None:
            values["travel_rate_per_km"] = travel_rate
        if standard_fee is not None:
            values["apply_standard_fee"] = standard_fee

        return RateConfig(**values)

    @log_function_call
    def save(self, rates: RateConfig) -> None:
        """Persist every rate field."""
        self.settings_store.set_many(
            {
                HOURLY_RATE_KEY: str(rates.hourly_rate),
                TRAVEL_RATE_KEY: str(rates.travel_rate_per_km),
                STANDARD_FEE_KEY: rates.apply_standard_fee,
            }
        )
        logger.info(
            f"Saved rates: hourly={rates.hourly_rate}, "
            f"travel={rates.travel_rate_per_km}, "
            f"standard_fee={rates.apply_standard_fee}"
        )

    def update(self, **changes: Any) -> RateConfig:
        """
        Apply a partial change to the stored rates and save the result.

        Keyword arguments set to ``None`` are ignored.

        Returns:
            The saved RateConfig

        Raises:
            ValidationError: If a changed value is not a valid rate
        """
        current = self.load()
        changes = {k: v for k, v in changes.items() if v is not None}
        updated = RateConfig(**{**current.model_dump(), **changes})
        self.save(updated)
        return updated
