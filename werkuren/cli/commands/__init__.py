"""CLI commands."""

from werkuren.cli.commands.calculate import calculate
from werkuren.cli.commands.rates import rates_group
from werkuren.cli.commands.session import (
    reset_session,
    set_distance,
    show_status,
    start_session,
    stop_session,
)

__all__ = [
    "calculate",
    "rates_group",
    "reset_session",
    "set_distance",
    "show_status",
    "start_session",
    "stop_session",
]
