"""CLI utility functions."""

from ticktock.cli.utils.formatters import (
    format_error,
    format_hours,
    format_info,
    format_status,
    format_success,
    format_table,
    format_warning,
)

__all__ = [
    "format_error",
    "format_hours",
    "format_info",
    "format_status",
    "format_success",
    "format_table",
    "format_warning",
]
