"""Output formatting utilities for CLI."""

from typing import List

import click

from ticktock.models.timesheet import TimesheetStatus

_STATUS_COLORS = {
    TimesheetStatus.COMPLETED: "green",
    TimesheetStatus.INCOMPLETE: "yellow",
    TimesheetStatus.MISSING: "red",
}


def format_success(message: str) -> str:
    """Format a success message in green."""
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    """Format an error message in red."""
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    """Format a warning message in yellow."""
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    """Format an info message in blue."""
    return click.style(f"ℹ {message}", fg="blue")


def format_status(status: TimesheetStatus) -> str:
    """Color a status label the way the dashboard badges do."""
    return click.style(status.value, fg=_STATUS_COLORS[status])


def format_hours(hours: float) -> str:
    """Format hours without a trailing ``.0``.

    Example:
        >>> format_hours(40.0)
        '40h'
        >>> format_hours(7.5)
        '7.5h'
    """
    return f"{hours:g}h"


def format_table(headers: List[str], rows: List[List[str]], max_width: int = 80) -> str:
    """Format data as an ASCII table.

    Column widths come from the plain text; cells are truncated to
    ``max_width``.

    Args:
        headers: List of column headers
        rows: List of data rows (each row is a list of cell values)
        max_width: Maximum width for each column (default: 80)

    Returns:
        Formatted table as a string
    """
    if not headers:
        return ""

    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            if i < len(col_widths):
                col_widths[i] = max(col_widths[i], len(click.unstyle(str(cell))))

    col_widths = [min(w, max_width) for w in col_widths]

    separator = "+" + "+".join("-" * (w + 2) for w in col_widths) + "+"

    def _format_row(cells: List[str]) -> str:
        formatted = []
        for i, cell in enumerate(cells[: len(col_widths)]):
            text = str(cell)
            plain = click.unstyle(text)
            if len(plain) > col_widths[i]:
                text = plain = plain[: col_widths[i]]
            formatted.append(f" {text}{' ' * (col_widths[i] - len(plain))} ")
        return "|" + "|".join(formatted) + "|"

    table_lines = [separator, _format_row(headers), separator]
    if rows:
        table_lines.extend(_format_row(row) for row in rows)
        table_lines.append(separator)

    return "\n".join(table_lines)
