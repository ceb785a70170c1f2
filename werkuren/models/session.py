"""Session data models.

A work session is one of three explicit states:

- ``IdleSession``: nothing recorded yet
- ``OpenSession``: started, not yet stopped
- ``ClosedSession``: started and stopped

Modelling the states as separate classes makes "stopped but never started"
unrepresentable. The models are frozen snapshots; state transitions are
owned by the session store.
"""

import datetime as dt
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import Field, field_validator, model_validator

from werkuren.models.base import BaseDataModel, to_decimal


class _SessionBase(BaseDataModel):
    """Fields shared by every session state."""

    distance_km: Decimal = Field(
        default=Decimal("0"), ge=0, description="Travelled distance in km"
    )

    @field_validator("distance_km", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Union[str, int, float, Decimal]) -> Decimal:
        """Convert numeric values to Decimal for precision."""
        return to_decimal(v)

    @property
    def start_instant(self) -> Optional[dt.datetime]:
        return None

    @property
    def end_instant(self) -> Optional[dt.datetime]:
        return None

    @property
    def is_closed(self) -> bool:
        return False

    def with_distance(self, distance_km: Union[str, int, float, Decimal]):
        """Return a copy of this session with a new distance.

        Raises:
            ValidationError: If the distance is negative or not numeric
        """
        return self.__class__.model_validate(
            {**self.model_dump(), "distance_km": distance_km}
        )


class IdleSession(_SessionBase):
    """A session with no recorded instants.

    Example:
        >>> IdleSession().state
        'idle'
    """

    state: Literal["idle"] = "idle"


class OpenSession(_SessionBase):
    """A started session that has not been stopped yet.

    Attributes:
        start: Instant the session was started
    """

    state: Literal["open"] = "open"
    start: dt.datetime = Field(..., description="Session start instant")

    @property
    def start_instant(self) -> Optional[dt.datetime]:
        return self.start


class ClosedSession(_SessionBase):
    """A session with both a start and an end instant.

    ``end`` earlier than ``start`` is accepted (clock skew or a manual
    correction); the calculator treats such an interval as zero hours.

    Attributes:
        start: Instant the session was started
        end: Instant the session was stopped

    Example:
        >>> session = ClosedSession(
        ...     start=dt.datetime(2024, 5, 6, 9, 0),
        ...     end=dt.datetime(2024, 5, 6, 10, 15),
        ...     distance_km=20,
        ... )
        >>> session.is_closed
        True
    """

    state: Literal["closed"] = "closed"
    start: dt.datetime = Field(..., description="Session start instant")
    end: dt.datetime = Field(..., description="Session end instant")

    @model_validator(mode="after")
    def validate_comparable_instants(self) -> "ClosedSession":
        """Require both instants to be timezone-aware, or both naive.

        Raises:
            ValueError: If only one of the instants carries a timezone
        """
        if (self.start.tzinfo is None) != (self.end.tzinfo is None):
            raise ValueError(
                "start and end must both be timezone-aware or both be naive"
            )
        return self

    @property
    def start_instant(self) -> Optional[dt.datetime]:
        return self.start

    @property
    def end_instant(self) -> Optional[dt.datetime]:
        return self.end

    @property
    def is_closed(self) -> bool:
        return True


Session = Annotated[
    Union[IdleSession, OpenSession, ClosedSession], Field(discriminator="state")
]


def session_from_instants(
    start: Optional[dt.datetime],
    end: Optional[dt.datetime],
    distance_km: Union[str, int, float, Decimal] = Decimal("0"),
) -> Union[IdleSession, OpenSession, ClosedSession]:
    """Build a session from two optional instants.

    An end instant without a start instant has no meaning and yields an idle
    session.

    Example:
        >>> session_from_instants(None, None).state
        'idle'
        >>> session_from_instants(dt.datetime(2024, 1, 1, 9), None).state
        'open'
    """
    if start is None:
        return IdleSession(distance_km=distance_km)
    if end is None:
        return OpenSession(start=start, distance_km=distance_km)
    return ClosedSession(start=start, end=end, distance_km=distance_km)
