"""Rate commands: show and change the stored billing rates."""

from typing import Optional

import click

from werkuren.calculators.billing_calculator import STANDARD_FEE
from werkuren.cli.error_handlers import DataValidationError, with_error_handling
from werkuren.cli.utils.formatters import format_info, format_key_values, format_success
from werkuren.cli.utils.stores import load_settings, open_stores
from werkuren.config.settings import WerkurenConfig
from werkuren.models.rates import RateConfig
from werkuren.utils.logging_utils import LogContext
from werkuren.utils.number_format import format_currency


def parse_toggle(value: Optional[str]) -> Optional[bool]:
    """Map an on/off option value to a bool, keeping None for "not given"."""
    if value is None:
        return None
    return value.lower() == "on"


def render_rates(rates: RateConfig, settings: WerkurenConfig) -> str:
    """Render the rates as aligned label/value lines."""

    def money(amount):
        return format_currency(amount, settings.currency, settings.locale)

    fee = f"yes ({money(STANDARD_FEE)})" if rates.apply_standard_fee else "no"
    return format_key_values(
        [
            ["Hourly rate:", money(rates.hourly_rate)],
            ["Travel rate per km:", money(rates.travel_rate_per_km)],
            ["Standard fee:", fee],
        ]
    )


@click.group(name="rates")
def rates_group():
    """Show or change the billing rates."""
    pass


@rates_group.command(name="show")
@click.pass_context
def show_rates(ctx: click.Context):
    """Show the stored rates.

    Example:
        werkuren rates show
    """
    with with_error_handling(ctx.ensure_object(dict).get("debug", False)):
        settings = load_settings()
        rate_store, _ = open_stores(settings)
        click.echo(render_rates(rate_store.load(), settings))


@rates_group.command(name="set")
@click.option("--hourly", type=str, default=None, help="Hourly rate, e.g. 45")
@click.option("--travel", type=str, default=None, help="Travel rate per km, e.g. 0.35")
@click.option(
    "--standard-fee",
    type=click.Choice(["on", "off"], case_sensitive=False),
    default=None,
    help=f"Charge the flat standard fee of {STANDARD_FEE} (on/off)",
)
@click.pass_context
def set_rates(
    ctx: click.Context,
    hourly: Optional[str],
    travel: Optional[str],
    standard_fee: Optional[str],
):
    """Change one or more rates; options left out keep their value.

    Example:
        werkuren rates set --hourly 45 --travel 0,35 --standard-fee on
    """
    with with_error_handling(ctx.ensure_object(dict).get("debug", False)):
        if hourly is None and travel is None and standard_fee is None:
            raise DataValidationError(
                "No rate given",
                recovery_hint="Pass --hourly, --travel or --standard-fee",
            )

        settings = load_settings()
        rate_store, _ = open_stores(settings)

        with LogContext(command="rates set"):
            rates = rate_store.update(
                hourly_rate=hourly,
                travel_rate_per_km=travel,
                apply_standard_fee=parse_toggle(standard_fee),
            )

        click.echo(format_success("Rates saved"))
        click.echo(format_info("Current rates:"))
        click.echo(render_rates(rates, settings))
