"""Unit tests for the session commands (start, stop, reset, km, status)."""

import datetime as dt
import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from werkuren.cli import cli


class FakeClock:
    """Clock returning a fixed instant that tests move forward by hand."""

    def __init__(self):
        self.now = dt.datetime(2024, 5, 6, 9, 0, tzinfo=dt.timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += dt.timedelta(**kwargs)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def clock():
    fake = FakeClock()
    with patch("werkuren.services.session_store.utc_now", fake):
        yield fake


@pytest.fixture
def settings_file(mock_env) -> Path:
    return Path(mock_env["SETTINGS_FILE"])


def _set_rates(runner):
    result = runner.invoke(
        cli,
        ["rates", "set", "--hourly", "45", "--travel", "0.35", "--standard-fee", "on"],
    )
    assert result.exit_code == 0, result.output


class TestStartCommand:
    def test_start_idle_session(self, runner, clock, settings_file):
        result = runner.invoke(cli, ["start"])

        assert result.exit_code == 0
        assert "Session started at" in result.output

        stored = json.loads(settings_file.read_text())
        assert stored["vih_session_start"] == clock.now.isoformat()
        assert stored["vih_session_end"] is None

    def test_start_while_running_is_ignored(self, runner, clock, settings_file):
        runner.invoke(cli, ["start"])
        first = json.loads(settings_file.read_text())["vih_session_start"]
        clock.advance(minutes=10)

        result = runner.invoke(cli, ["start"])

        assert result.exit_code == 0
        assert "already running" in result.output
        assert json.loads(settings_file.read_text())["vih_session_start"] == first

    def test_restart_after_stop_clears_end(self, runner, clock, settings_file):
        runner.invoke(cli, ["start"])
        clock.advance(minutes=30)
        runner.invoke(cli, ["stop"])
        clock.advance(minutes=5)

        result = runner.invoke(cli, ["start"])

        assert result.exit_code == 0
        stored = json.loads(settings_file.read_text())
        assert stored["vih_session_start"] == clock.now.isoformat()
        assert stored["vih_session_end"] is None


class TestStopCommand:
    def test_stop_without_start_is_ignored(self, runner, clock, mock_env):
        result = runner.invoke(cli, ["stop"])

        assert result.exit_code == 0
        assert "No session is running" in result.output

    def test_stop_shows_total(self, runner, clock, mock_env):
        _set_rates(runner)
        runner.invoke(cli, ["km", "20"])
        runner.invoke(cli, ["start"])
        clock.advance(hours=1, minutes=15)

        result = runner.invoke(cli, ["stop"])

        assert result.exit_code == 0
        assert "Session stopped at" in result.output
        assert "€ 79,50" in result.output
        assert "billed: 1,50 h" in result.output
        assert "Standard fee: € 5,00" in result.output

    def test_stop_twice_keeps_first_end(self, runner, clock, settings_file):
        runner.invoke(cli, ["start"])
        clock.advance(minutes=45)
        runner.invoke(cli, ["stop"])
        end = json.loads(settings_file.read_text())["vih_session_end"]
        clock.advance(minutes=45)

        result = runner.invoke(cli, ["stop"])

        assert "No session is running" in result.output
        assert json.loads(settings_file.read_text())["vih_session_end"] == end


class TestStatusCommand:
    def test_idle_status(self, runner, clock, mock_env):
        result = runner.invoke(cli, ["status"])

        assert result.exit_code == 0
        assert "Session is idle" in result.output
        assert "Total:" in result.output
        assert "€ 0,00" in result.output
        assert "Press STOP to calculate." in result.output

    def test_open_status_has_no_total_yet(self, runner, clock, mock_env):
        _set_rates(runner)
        runner.invoke(cli, ["km", "20"])
        runner.invoke(cli, ["start"])
        clock.advance(hours=2)

        result = runner.invoke(cli, ["status"])

        assert "Session is open" in result.output
        assert "€ 0,00" in result.output
        assert "Press STOP to calculate." in result.output

    def test_closed_status_itemizes_charges(self, runner, clock, mock_env):
        _set_rates(runner)
        runner.invoke(cli, ["km", "20"])
        runner.invoke(cli, ["start"])
        clock.advance(hours=1, minutes=15)
        runner.invoke(cli, ["stop"])

        result = runner.invoke(cli, ["status"])

        assert "Session is closed" in result.output
        assert "Hours × hourly rate: 1,25 h (billed: 1,50 h)" in result.output
        assert "Km × travel rate: 20,0 km × € 0,35 = € 7,00" in result.output
        assert "€ 79,50" in result.output


class TestDistanceCommand:
    def test_set_distance_with_comma(self, runner, clock, settings_file):
        result = runner.invoke(cli, ["km", "12,5"])

        assert result.exit_code == 0
        assert "Distance set to 12,5 km" in result.output
        assert json.loads(settings_file.read_text())["vih_session_km"] == "12.5"

    def test_negative_distance_rejected(self, runner, clock, mock_env):
        result = runner.invoke(cli, ["km", "--", "-3"])

        assert result.exit_code == 3
        assert "Invalid Input" in result.output

    def test_bare_negative_distance_reaches_validation(self, runner, clock, mock_env):
        result = runner.invoke(cli, ["km", "-5"])

        assert result.exit_code == 3
        assert "Invalid Input" in result.output
        assert "distance_km" in result.output

    def test_non_numeric_distance_rejected(self, runner, clock, mock_env):
        result = runner.invoke(cli, ["km", "far"])

        assert result.exit_code == 3

    def test_distance_survives_start(self, runner, clock, settings_file):
        runner.invoke(cli, ["km", "20"])
        runner.invoke(cli, ["start"])

        assert json.loads(settings_file.read_text())["vih_session_km"] == "20"


class TestResetCommand:
    def test_reset_clears_session(self, runner, clock, settings_file):
        runner.invoke(cli, ["km", "20"])
        runner.invoke(cli, ["start"])

        result = runner.invoke(cli, ["reset"])

        assert result.exit_code == 0
        assert "Session cleared" in result.output
        stored = json.loads(settings_file.read_text())
        assert "vih_session_start" not in stored
        assert "vih_session_km" not in stored

        status = runner.invoke(cli, ["status"])
        assert "Session is idle" in status.output


class TestCorruptedStorage:
    def test_invalid_json_is_storage_error(self, runner, clock, settings_file):
        settings_file.parent.mkdir(parents=True, exist_ok=True)
        settings_file.write_text("{not json")

        result = runner.invoke(cli, ["status"])

        assert result.exit_code == 4
        assert "Storage Error" in result.output

    def test_invalid_stored_instant_is_storage_error(self, runner, clock, settings_file):
        settings_file.parent.mkdir(parents=True, exist_ok=True)
        settings_file.write_text(json.dumps({"vih_session_start": "yesterday"}))

        result = runner.invoke(cli, ["stop"])

        assert result.exit_code == 4
        assert "invalid" in result.output
