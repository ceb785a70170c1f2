"""
Current work session and its start/stop transitions.

The store owns the session lifecycle (idle -> open -> closed, and back to
idle on reset). Callers read ``current`` as an immutable snapshot and hand it
to the billing calculator. With a SettingsStore attached, the session survives
process restarts so separate ``start`` and ``stop`` commands see the same
session.
"""

import datetime as dt
import logging
from decimal import Decimal
from typing import Callable, Optional, Union

from pydantic import ValidationError

from werkuren.models.session import (
    ClosedSession,
    IdleSession,
    OpenSession,
    Session,
    session_from_instants,
)
from werkuren.services.settings_store import SettingsStore, SettingsStoreError

logger = logging.getLogger(__name__)

SESSION_START_KEY = "vih_session_start"
SESSION_END_KEY = "vih_session_end"
SESSION_DISTANCE_KEY = "vih_session_km"

Clock = Callable[[], dt.datetime]


def utc_now() -> dt.datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return dt.datetime.now(dt.timezone.utc)


class SessionStore:
    """
    Holds the current session and applies start/stop/reset actions.

    ``start`` is disabled while a session is open; ``stop`` is enabled only
    while a session is open. A disabled action leaves the session unchanged
    and returns False.

    Example:
        >>> store = SessionStore()
        >>> store.start()
        True
        >>> store.start()
        False
        >>> store.stop()
        True
        >>> store.current.state
        'closed'
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        settings_store: Optional[SettingsStore] = None,
    ):
        """
        Initialize the session store.

        Args:
            clock: Callable returning "now"; defaults to UTC wall-clock time
            settings_store: Optional persistence for the current session

        Raises:
            SettingsStoreError: If a persisted session cannot be read back
        """
        self.clock = clock or utc_now
        self.settings_store = settings_store
        self._session: Session = IdleSession()

        if settings_store is not None:
            self._session = self._load()
            logger.debug(f"Restored {self._session.state} session")

    @property
    def current(self) -> Session:
        """The current session snapshot."""
        return self._session

    @property
    def can_start(self) -> bool:
        return not isinstance(self._session, OpenSession)

    @property
    def can_stop(self) -> bool:
        return isinstance(self._session, OpenSession)

    def start(self) -> bool:
        """
        Start a new interval, clearing any previous end instant.

        The travelled distance is kept.

        Returns:
            True if the session was started, False if one is already open
        """
        if not self.can_start:
            logger.debug("Start ignored: session already open")
            return False

        self._replace(
            OpenSession(start=self.clock(), distance_km=self._session.distance_km)
        )
        logger.info(f"Session started at {self._session.start_instant.isoformat()}")
        return True

    def stop(self) -> bool:
        """
        Stop the open session at the current time.

        Returns:
            True if the session was stopped, False if no session is open
        """
        if not isinstance(self._session, OpenSession):
            logger.debug(f"Stop ignored: session is {self._session.state}")
            return False

        self._replace(
            ClosedSession(
                start=self._session.start,
                end=self.clock(),
                distance_km=self._session.distance_km,
            )
        )
        logger.info(f"Session stopped at {self._session.end_instant.isoformat()}")
        return True

    def reset(self) -> None:
        """Return to an idle session with no distance.

        A persisted session is removed from the settings file.
        """
        self._session = IdleSession()
        if self.settings_store is not None:
            self.settings_store.delete(
                SESSION_START_KEY, SESSION_END_KEY, SESSION_DISTANCE_KEY
            )
        logger.info("Session reset")

    def set_distance(self, distance_km: Union[str, int, float, Decimal]) -> Session:
        """
        Replace the travelled distance of the current session.

        Returns:
            The updated session

        Raises:
            ValidationError: If the distance is negative or not numeric
        """
        self._replace(self._session.with_distance(distance_km))
        logger.info(f"Session distance set to {self._session.distance_km} km")
        return self._session

    def _replace(self, session: Session) -> None:
        self._session = session
        if self.settings_store is not None:
            self._save()

    def _load(self) -> Session:
        values = self.settings_store.as_dict()
        try:
            start = _parse_instant(values.get(SESSION_START_KEY))
            end = _parse_instant(values.get(SESSION_END_KEY))
            return session_from_instants(
                start, end, values.get(SESSION_DISTANCE_KEY) or Decimal("0")
            )
        except (ValueError, ValidationError) as e:
            raise SettingsStoreError(
                f"Stored session in {self.settings_store.path} is invalid: {e}",
                self.settings_store.path,
            ) from e

    def _save(self) -> None:
        session = self._session
        self.settings_store.set_many(
            {
                SESSION_START_KEY: _format_instant(session.start_instant),
                SESSION_END_KEY: _format_instant(session.end_instant),
                SESSION_DISTANCE_KEY: str(session.distance_km),
            }
        )


def _parse_instant(value: Optional[str]) -> Optional[dt.datetime]:
    if not value:
        return None
    return dt.datetime.fromisoformat(value)


def _format_instant(instant: Optional[dt.datetime]) -> Optional[str]:
    if instant is None:
        return None
    return instant.isoformat()
