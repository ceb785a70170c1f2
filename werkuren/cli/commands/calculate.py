"""One-off calculation from explicit start and end times."""

import datetime as dt
from typing import Optional

import click

from werkuren.cli.commands.rates import parse_toggle
from werkuren.cli.commands.session import render_session
from werkuren.cli.error_handlers import DataValidationError, with_error_handling
from werkuren.cli.utils.stores import load_settings, open_stores
from werkuren.models.rates import RateConfig
from werkuren.models.session import session_from_instants


def parse_instant(value: str, option: str) -> dt.datetime:
    """Parse an ISO 8601 date-time such as 2024-05-06T09:00.

    Raises:
        DataValidationError: If the value is not an ISO date-time
    """
    try:
        return dt.datetime.fromisoformat(value)
    except ValueError:
        raise DataValidationError(
            f"Invalid {option} time: {value}",
            recovery_hint="Use ISO format, e.g. 2024-05-06T09:00",
        )


@click.command(name="calculate")
@click.option("--start", "start", required=True, type=str, help="Start time (ISO)")
@click.option("--end", "end", required=True, type=str, help="End time (ISO)")
@click.option("--km", type=str, default="0", help="Travelled distance in km")
@click.option("--hourly", type=str, default=None, help="Hourly rate override")
@click.option("--travel", type=str, default=None, help="Travel rate override")
@click.option(
    "--standard-fee",
    type=click.Choice(["on", "off"], case_sensitive=False),
    default=None,
    help="Standard fee override (on/off)",
)
@click.pass_context
def calculate(
    ctx: click.Context,
    start: str,
    end: str,
    km: str,
    hourly: Optional[str],
    travel: Optional[str],
    standard_fee: Optional[str],
):
    """Calculate the total for a session given its start and end.

    Rates not given as options come from the stored rates. Nothing is saved.

    Example:
        werkuren calculate --start 2024-05-06T09:00 --end 2024-05-06T10:15 --km 20
    """
    with with_error_handling(ctx.ensure_object(dict).get("debug", False)):
        session = session_from_instants(
            parse_instant(start, "start"), parse_instant(end, "end"), km
        )

        settings = load_settings()
        rate_store, _ = open_stores(settings)
        overrides = {
            "hourly_rate": hourly,
            "travel_rate_per_km": travel,
            "apply_standard_fee": parse_toggle(standard_fee),
        }
        stored = rate_store.load().model_dump()
        rates = RateConfig(
            **{**stored, **{k: v for k, v in overrides.items() if v is not None}}
        )

        click.echo(render_session(session, rates, settings))
