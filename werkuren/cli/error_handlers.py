"""Error handling for CLI commands."""

import logging
import sys
import traceback
from typing import Optional

import click
from pydantic import ValidationError

from werkuren.cli.utils.formatters import format_error, format_warning
from werkuren.services.settings_store import SettingsStoreError

logger = logging.getLogger(__name__)


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize CLI error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Error related to configuration issues."""

    pass


class DataValidationError(CLIError):
    """Error related to invalid user input (rates, distance, instants)."""

    pass


class StorageError(CLIError):
    """Error reading or writing the settings file."""

    pass


def describe_validation_error(error: ValidationError) -> str:
    """Summarize a pydantic ValidationError as one line per field."""
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ())) or "value"
        parts.append(f"{location}: {detail.get('msg', 'invalid value')}")
    return "; ".join(parts)


def _echo_error(title: str, error: CLIError) -> None:
    click.echo(format_error(f"{title}: {error.message}"), err=True)
    if error.recovery_hint:
        click.echo(format_warning(f"Hint: {error.recovery_hint}"), err=True)


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """
    Report an error to the user and choose the exit code.

    Args:
        error: The exception that occurred
        debug: Whether to show full stack trace

    Returns:
        Exit code (1-4 for known error types, 130 for cancellation,
        255 otherwise)
    """
    if isinstance(error, ConfigurationError):
        _echo_error("Configuration Error", error)
        return 1

    elif isinstance(error, DataValidationError):
        _echo_error("Invalid Input", error)
        return 3

    elif isinstance(error, StorageError):
        _echo_error("Storage Error", error)
        return 4

    # Errors raised below the CLI layer
    elif isinstance(error, ValidationError):
        return handle_cli_error(
            DataValidationError(describe_validation_error(error)), debug
        )

    elif isinstance(error, SettingsStoreError):
        return handle_cli_error(
            StorageError(
                error.message,
                recovery_hint="Fix or remove the settings file, then retry",
            ),
            debug,
        )

    elif isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"), err=True)
        return 130  # Standard exit code for SIGINT

    else:
        logger.error(f"Unexpected error: {type(error).__name__}: {error}")
        click.echo(format_error(f"Unexpected Error: {type(error).__name__}"), err=True)
        click.echo(str(error), err=True)

        if debug:
            click.echo("\nFull stack trace:", err=True)
            click.echo(
                "".join(
                    traceback.format_exception(
                        type(error), error, error.__traceback__
                    )
                ),
                err=True,
            )
        else:
            click.echo(
                format_warning("\nRun with --debug flag for full stack trace"),
                err=True,
            )

        return 255


def with_error_handling(debug: bool = False):
    """
    Context manager adding standardized error handling to CLI commands.

    Any exception raised inside the block is reported through
    ``handle_cli_error`` and turned into a process exit code.

    Args:
        debug: Whether to show full stack traces

    Example:
        @click.command()
        @click.pass_context
        def my_command(ctx):
            with with_error_handling(ctx.obj["debug"]):
                # Command implementation
                pass
    """

    class ErrorHandler:
        """Context manager for error handling."""

        def __init__(self, show_debug: bool):
            self.show_debug = show_debug

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if exc_val is not None and isinstance(exc_val, Exception):
                exit_code = handle_cli_error(exc_val, self.show_debug)
                sys.exit(exit_code)
            return False

    return ErrorHandler(debug)
