"""Shared setup for commands: settings, logging and the stores."""

from typing import Tuple

from pydantic import ValidationError

from werkuren.cli.error_handlers import ConfigurationError, describe_validation_error
from werkuren.config.settings import WerkurenConfig, get_config
from werkuren.services.rate_store import RateConfigStore
from werkuren.services.session_store import SessionStore
from werkuren.services.settings_store import SettingsStore


def load_settings() -> WerkurenConfig:
    """Load the application settings for a command.

    Raises:
        ConfigurationError: If the environment holds invalid settings
    """
    try:
        return get_config()
    except ValidationError as e:
        raise ConfigurationError(
            describe_validation_error(e),
            recovery_hint=(
                "Check CURRENCY, LOCALE, ENVIRONMENT and the LOG_ settings "
                "in your environment or .env file"
            ),
        )


def open_stores(settings: WerkurenConfig) -> Tuple[RateConfigStore, SessionStore]:
    """Open the rate and session stores on the configured settings file."""
    settings_store = SettingsStore(settings.settings_path)
    return RateConfigStore(settings_store), SessionStore(settings_store=settings_store)
