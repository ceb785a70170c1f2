"""Stores for the current session, the rates and the raw settings file."""

from werkuren.services.rate_store import RateConfigStore
from werkuren.services.session_store import SessionStore, utc_now
from werkuren.services.settings_store import SettingsStore, SettingsStoreError

__all__ = [
    "RateConfigStore",
    "SessionStore",
    "SettingsStore",
    "SettingsStoreError",
    "utc_now",
]
