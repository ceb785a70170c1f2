"""Unit tests for the session store lifecycle."""

import datetime as dt
import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from werkuren.models.session import ClosedSession, IdleSession, OpenSession
from werkuren.services.session_store import (
    SESSION_DISTANCE_KEY,
    SESSION_END_KEY,
    SESSION_START_KEY,
    SessionStore,
    utc_now,
)
from werkuren.services.settings_store import SettingsStore, SettingsStoreError


class FakeClock:
    """Clock returning a fixed instant that tests advance by hand."""

    def __init__(self, now: dt.datetime):
        self.now = now

    def __call__(self) -> dt.datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += dt.timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(dt.datetime(2024, 5, 6, 9, 0, tzinfo=dt.timezone.utc))


@pytest.fixture
def store(clock):
    return SessionStore(clock=clock)


class TestSessionLifecycle:
    """Test start/stop/reset transitions."""

    def test_starts_idle(self, store):
        assert isinstance(store.current, IdleSession)
        assert store.can_start is True
        assert store.can_stop is False

    def test_start_opens_session(self, store, clock):
        assert store.start() is True

        assert isinstance(store.current, OpenSession)
        assert store.current.start == clock.now
        assert store.can_start is False
        assert store.can_stop is True

    def test_start_while_open_is_ignored(self, store, clock):
        store.start()
        first_start = store.current.start
        clock.advance(minutes=5)

        assert store.start() is False
        assert store.current.start == first_start

    def test_stop_closes_session(self, store, clock):
        store.start()
        clock.advance(hours=1, minutes=15)

        assert store.stop() is True

        session = store.current
        assert isinstance(session, ClosedSession)
        assert session.end - session.start == dt.timedelta(hours=1, minutes=15)
        assert store.can_stop is False
        assert store.can_start is True

    def test_stop_while_idle_is_ignored(self, store):
        assert store.stop() is False
        assert isinstance(store.current, IdleSession)

    def test_stop_while_closed_is_ignored(self, store, clock):
        store.start()
        clock.advance(minutes=30)
        store.stop()
        end = store.current.end
        clock.advance(minutes=30)

        assert store.stop() is False
        assert store.current.end == end

    def test_start_after_stop_clears_end(self, store, clock):
        store.start()
        clock.advance(minutes=30)
        store.stop()
        clock.advance(minutes=10)

        assert store.start() is True

        assert isinstance(store.current, OpenSession)
        assert store.current.end_instant is None
        assert store.current.start == clock.now

    def test_distance_survives_start_and_stop(self, store):
        store.set_distance("20")
        store.start()
        store.stop()

        assert store.current.distance_km == Decimal("20")

    def test_reset_returns_to_idle(self, store):
        store.set_distance("20")
        store.start()

        store.reset()

        assert store.current == IdleSession()

    def test_set_distance_rejects_negative(self, store):
        with pytest.raises(ValidationError):
            store.set_distance("-3")

        assert store.current.distance_km == Decimal("0")

    def test_current_is_a_snapshot(self, store, clock):
        """Test a snapshot taken earlier is not changed by later actions."""
        store.start()
        snapshot = store.current
        clock.advance(minutes=20)
        store.stop()

        assert isinstance(snapshot, OpenSession)

    def test_default_clock_is_timezone_aware(self):
        assert utc_now().tzinfo is not None
        store = SessionStore()
        store.start()
        assert store.current.start.tzinfo is not None


class TestSessionPersistence:
    """Test keeping the session in the settings file."""

    @pytest.fixture
    def settings_path(self, tmp_path):
        return tmp_path / "settings.json"

    def test_session_survives_new_store(self, settings_path, clock):
        first = SessionStore(clock=clock, settings_store=SettingsStore(settings_path))
        first.set_distance("12.5")
        first.start()

        second = SessionStore(clock=clock, settings_store=SettingsStore(settings_path))

        assert isinstance(second.current, OpenSession)
        assert second.current.start == clock.now
        assert second.current.distance_km == Decimal("12.5")

    def test_stop_in_new_store(self, settings_path, clock):
        SessionStore(clock=clock, settings_store=SettingsStore(settings_path)).start()
        clock.advance(hours=2)

        second = SessionStore(clock=clock, settings_store=SettingsStore(settings_path))
        assert second.stop() is True

        third = SessionStore(clock=clock, settings_store=SettingsStore(settings_path))
        assert isinstance(third.current, ClosedSession)
        assert third.current.end - third.current.start == dt.timedelta(hours=2)

    def test_stored_keys(self, settings_path, clock):
        store = SessionStore(clock=clock, settings_store=SettingsStore(settings_path))
        store.start()

        data = json.loads(settings_path.read_text())
        assert data[SESSION_START_KEY] == clock.now.isoformat()
        assert data[SESSION_END_KEY] is None
        assert data[SESSION_DISTANCE_KEY] == "0"

    def test_reset_clears_stored_instants(self, settings_path, clock):
        store = SessionStore(clock=clock, settings_store=SettingsStore(settings_path))
        store.start()
        store.reset()

        reloaded = SessionStore(settings_store=SettingsStore(settings_path))
        assert isinstance(reloaded.current, IdleSession)

    def test_reset_removes_session_keys_only(self, settings_path, clock):
        settings_path.write_text(json.dumps({"vih_rate_hour": "45"}))
        store = SessionStore(clock=clock, settings_store=SettingsStore(settings_path))
        store.set_distance("20")
        store.start()

        store.reset()

        assert json.loads(settings_path.read_text()) == {"vih_rate_hour": "45"}

    def test_rates_in_same_file_are_kept(self, settings_path, clock):
        settings_path.write_text(json.dumps({"vih_rate_hour": "45"}))

        SessionStore(clock=clock, settings_store=SettingsStore(settings_path)).start()

        assert json.loads(settings_path.read_text())["vih_rate_hour"] == "45"

    def test_invalid_stored_instant_raises(self, settings_path):
        settings_path.write_text(json.dumps({SESSION_START_KEY: "yesterday"}))

        with pytest.raises(SettingsStoreError, match="invalid"):
            SessionStore(settings_store=SettingsStore(settings_path))
