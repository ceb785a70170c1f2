"""Werkuren CLI.

This module provides the command-line front end of the calculator: start and
stop a session, record the distance, manage the rates and show the total.
"""

import click

from werkuren import __version__
from werkuren.cli.commands.calculate import calculate
from werkuren.cli.commands.rates import rates_group
from werkuren.cli.commands.session import (
    reset_session,
    set_distance,
    show_status,
    start_session,
    stop_session,
)
from werkuren.cli.error_handlers import ConfigurationError, with_error_handling
from werkuren.cli.utils.stores import load_settings
from werkuren.config.logging_config import LoggingConfig, configure_logging


@click.group(help="Werkuren CLI - Time work sessions and calculate the amount due")
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, default=False, help="Verbose logging and tracebacks")
@click.pass_context
def cli(ctx: click.Context, debug: bool):
    """Werkuren CLI main entry point."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    with with_error_handling(debug):
        settings = load_settings()
        try:
            configure_logging(LoggingConfig.from_settings(settings, debug=debug))
        except OSError as e:
            raise ConfigurationError(
                f"Cannot open log file {settings.log_file}: {e}",
                recovery_hint="Point LOG_FILE to a writable location or unset it",
            ) from e


# Register commands
cli.add_command(start_session)
cli.add_command(stop_session)
cli.add_command(reset_session)
cli.add_command(set_distance)
cli.add_command(show_status)
cli.add_command(rates_group)
cli.add_command(calculate)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
