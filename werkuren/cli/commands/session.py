"""Session commands: start, stop, reset, km and status."""

import click

from werkuren.calculators.billing_calculator import compute_breakdown
from werkuren.cli.error_handlers import with_error_handling
from werkuren.cli.utils.formatters import (
    format_breakdown_lines,
    format_info,
    format_instant,
    format_key_values,
    format_success,
    format_warning,
)
from werkuren.cli.utils.stores import load_settings, open_stores
from werkuren.config.settings import WerkurenConfig
from werkuren.models.rates import RateConfig
from werkuren.models.session import Session
from werkuren.utils.logging_utils import LogContext
from werkuren.utils.number_format import format_currency, format_number


def _debug(ctx: click.Context) -> bool:
    return bool(ctx.ensure_object(dict).get("debug", False))


def render_session(session: Session, rates: RateConfig, settings: WerkurenConfig) -> str:
    """Render the session times, total and itemized charges.

    Args:
        session: Session snapshot
        rates: Current rates
        settings: Display settings (currency, locale, precision)

    Returns:
        Multi-line text for the terminal
    """
    breakdown = compute_breakdown(session, rates)
    distance = format_number(
        session.distance_km, settings.distance_precision, settings.locale
    )
    total = format_currency(breakdown.total, settings.currency, settings.locale)
    summary = format_key_values(
        [
            ["Start time:", format_instant(session.start_instant)],
            ["End time:", format_instant(session.end_instant)],
            ["Distance:", f"{distance} km"],
            ["Total:", total],
        ]
    )
    details = format_breakdown_lines(
        breakdown,
        session,
        rates,
        currency=settings.currency,
        locale=settings.locale,
        hours_precision=settings.hours_precision,
        distance_precision=settings.distance_precision,
    )
    return "\n".join([summary, ""] + details)


@click.command(name="start")
@click.pass_context
def start_session(ctx: click.Context):
    """Start timing a work session.

    Starting clears the end time of a previous session and keeps the
    distance. Ignored while a session is already running.

    Example:
        werkuren start
    """
    with with_error_handling(_debug(ctx)):
        settings = load_settings()
        _, session_store = open_stores(settings)

        with LogContext(command="start", session_state=session_store.current.state):
            if not session_store.start():
                click.echo(
                    format_warning(
                        "A session is already running since "
                        f"{format_instant(session_store.current.start_instant)}. "
                        "Use 'werkuren stop' first."
                    )
                )
                return

        click.echo(
            format_success(
                f"Session started at {format_instant(session_store.current.start_instant)}"
            )
        )


@click.command(name="stop")
@click.pass_context
def stop_session(ctx: click.Context):
    """Stop the running session and show the total.

    Example:
        werkuren stop
    """
    with with_error_handling(_debug(ctx)):
        settings = load_settings()
        rate_store, session_store = open_stores(settings)

        with LogContext(command="stop", session_state=session_store.current.state):
            if not session_store.stop():
                click.echo(
                    format_warning(
                        "No session is running. Use 'werkuren start' first."
                    )
                )
                return

        click.echo(
            format_success(
                f"Session stopped at {format_instant(session_store.current.end_instant)}"
            )
        )
        click.echo()
        click.echo(render_session(session_store.current, rate_store.load(), settings))


@click.command(name="reset")
@click.pass_context
def reset_session(ctx: click.Context):
    """Clear the session times and distance.

    Example:
        werkuren reset
    """
    with with_error_handling(_debug(ctx)):
        settings = load_settings()
        _, session_store = open_stores(settings)

        with LogContext(command="reset", session_state=session_store.current.state):
            session_store.reset()

        click.echo(format_success("Session cleared"))


@click.command(name="km", context_settings={"ignore_unknown_options": True})
@click.argument("distance", type=str)
@click.pass_context
def set_distance(ctx: click.Context, distance: str):
    """Set the travelled distance of the session in km.

    Accepts both 12.5 and 12,5.

    Example:
        werkuren km 20
    """
    with with_error_handling(_debug(ctx)):
        settings = load_settings()
        _, session_store = open_stores(settings)

        with LogContext(command="km", session_state=session_store.current.state):
            session = session_store.set_distance(distance)

        formatted = format_number(
            session.distance_km, settings.distance_precision, settings.locale
        )
        click.echo(format_success(f"Distance set to {formatted} km"))


@click.command(name="status")
@click.pass_context
def show_status(ctx: click.Context):
    """Show the session times, total and breakdown.

    Example:
        werkuren status
    """
    with with_error_handling(_debug(ctx)):
        settings = load_settings()
        rate_store, session_store = open_stores(settings)
        session = session_store.current

        click.echo(format_info(f"Session is {session.state}"))
        click.echo(render_session(session, rate_store.load(), settings))
