"""Data models for the calculator.

This package contains Pydantic models for all business entities:
- BaseDataModel: Base class with common configuration
- RateConfig: Hourly/travel rates and the standard fee toggle
- IdleSession, OpenSession, ClosedSession: The three session states
"""

from werkuren.models.base import BaseDataModel
from werkuren.models.rates import RateConfig
from werkuren.models.session import (
    ClosedSession,
    IdleSession,
    OpenSession,
    Session,
    session_from_instants,
)

__all__ = [
    "BaseDataModel",
    "RateConfig",
    "IdleSession",
    "OpenSession",
    "ClosedSession",
    "Session",
    "session_from_instants",
]
