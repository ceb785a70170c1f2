"""
Global pytest configuration and fixtures.
"""
import datetime as dt
from decimal import Decimal
from typing import Dict

import pytest

from werkuren.config import WerkurenConfig, reload_config
from werkuren.config.logging_config import reset_logging
from werkuren.models import ClosedSession, RateConfig


@pytest.fixture
def test_env_vars(tmp_path) -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        'SETTINGS_FILE': str(tmp_path / 'werkuren' / 'settings.json'),
        'CURRENCY': 'EUR',
        'LOCALE': 'nl_BE',
        'ENVIRONMENT': 'testing',
        'DEBUG': 'false',
        'LOG_LEVEL': 'WARNING',
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)
    for key in ("LOG_FORMAT", "LOG_FILE"):
        monkeypatch.delenv(key, raising=False)

    # Clear the global config to force reload with test values
    import werkuren.config.settings
    werkuren.config.settings._config = None

    yield test_env_vars

    # Clean up
    werkuren.config.settings._config = None


@pytest.fixture
def test_config(mock_env) -> WerkurenConfig:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def sample_rates() -> RateConfig:
    """Rates used throughout the examples: 45/h, 0.35/km, fee on."""
    return RateConfig(
        hourly_rate=Decimal('45.00'),
        travel_rate_per_km=Decimal('0.35'),
        apply_standard_fee=True,
    )


@pytest.fixture
def session_start() -> dt.datetime:
    return dt.datetime(2024, 5, 6, 9, 0, 0)


def make_closed_session(start: dt.datetime, minutes: int, seconds: int = 0,
                        distance_km='0') -> ClosedSession:
    """Build a closed session lasting the given minutes (and seconds)."""
    return ClosedSession(
        start=start,
        end=start + dt.timedelta(minutes=minutes, seconds=seconds),
        distance_km=distance_km,
    )


@pytest.fixture
def closed_session_factory(session_start):
    """Factory for closed sessions starting at ``session_start``."""
    def factory(minutes: int, seconds: int = 0, distance_km='0') -> ClosedSession:
        return make_closed_session(session_start, minutes, seconds, distance_km)
    return factory


@pytest.fixture(autouse=True)
def cleanup_logging():
    """Remove handlers installed by configure_logging during a test."""
    yield
    reset_logging()


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "cli: mark test as exercising the command line"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        # Add unit marker for tests in tests/unit/
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Add cli marker for tests in tests/unit/cli/
        if "tests/unit/cli/" in str(item.fspath):
            item.add_marker(pytest.mark.cli)
