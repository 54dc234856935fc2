"""Date utilities for timesheet weeks.

This module provides:
- Display labels for a week's date range
- Monday-to-Friday bounds for newly created weeks
"""

import datetime as dt
from typing import Tuple


def _month_day(date: dt.date) -> str:
    return f"{date:%b} {date.day}"


def format_date_range(start_date: dt.date, end_date: dt.date) -> str:
    """Format a week's date range for display.

    Args:
        start_date: First day of the week
        end_date: Last day of the week

    Returns:
        Label such as ``Jun 30 - Jul 6, 2024``; the start year is added
        when the range crosses a year boundary.

    Example:
        >>> format_date_range(dt.date(2024, 6, 30), dt.date(2024, 7, 6))
        'Jun 30 - Jul 6, 2024'
        >>> format_date_range(dt.date(2024, 12, 30), dt.date(2025, 1, 3))
        'Dec 30, 2024 - Jan 3, 2025'
    """
    if start_date.year != end_date.year:
        return (
            f"{_month_day(start_date)}, {start_date.year} - "
            f"{_month_day(end_date)}, {end_date.year}"
        )
    return f"{_month_day(start_date)} - {_month_day(end_date)}, {end_date.year}"


def monday_of(date: dt.date) -> dt.date:
    """Return the Monday of the ISO week containing ``date``."""
    return date - dt.timedelta(days=date.weekday())


def next_monday_after(date: dt.date) -> dt.date:
    """Return the first Monday strictly after ``date``.

    Example:
        >>> next_monday_after(dt.date(2024, 7, 27))
        datetime.date(2024, 7, 29)
        >>> next_monday_after(dt.date(2024, 7, 29))
        datetime.date(2024, 8, 5)
    """
    return monday_of(date) + dt.timedelta(days=7)


def work_week_bounds(start: dt.date) -> Tuple[dt.date, dt.date]:
    """Return (Monday, Friday) for the work week starting at ``start``'s Monday."""
    monday = monday_of(start)
    return monday, monday + dt.timedelta(days=4)
