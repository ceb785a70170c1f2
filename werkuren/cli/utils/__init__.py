"""CLI utility functions."""

from werkuren.cli.utils.formatters import (
    format_breakdown_lines,
    format_error,
    format_info,
    format_instant,
    format_key_values,
    format_success,
    format_warning,
)

__all__ = [
    "format_breakdown_lines",
    "format_error",
    "format_info",
    "format_instant",
    "format_key_values",
    "format_success",
    "format_warning",
]
