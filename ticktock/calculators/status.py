"""Status classification for timesheet weeks.

A week's status is derived solely from its total logged hours:

- ``missing``: nothing logged (total <= 0, negative totals included)
- ``incomplete``: something logged, below the completion threshold
- ``completed``: total at or above the completion threshold (40h)

Totals above the threshold count as ``completed``. Earlier versions of the
dashboard used an exact ``== 40`` comparison in one place and ``>= 40`` in
another; every call site now goes through :func:`classify_status`.
"""

from decimal import Decimal
from typing import Iterable

from ticktock.models.timesheet import TimesheetEntry, TimesheetStatus

COMPLETED_HOURS_THRESHOLD = 40.0

_STATUS_ACTIONS = {
    TimesheetStatus.COMPLETED: "view",
    TimesheetStatus.INCOMPLETE: "update",
    TimesheetStatus.MISSING: "create",
}


def calculate_total_hours(entries: Iterable[TimesheetEntry]) -> float:
    """Sum ``hours_worked`` over entries without float drift.

    Each value is summed as a Decimal of its shortest repr, so half-hour
    entries add up to exact totals.

    Args:
        entries: Entries to sum

    Returns:
        Total hours

    Example:
        >>> calculate_total_hours([])
        0.0
    """
    total = sum((Decimal(str(entry.hours_worked)) for entry in entries), Decimal("0"))
    return float(total)


def classify_status(
    total_hours: float, threshold: float = COMPLETED_HOURS_THRESHOLD
) -> TimesheetStatus:
    """Map a week's total hours to its status.

    Args:
        total_hours: Total hours logged for the week
        threshold: Hours at which a week counts as completed

    Returns:
        The week's TimesheetStatus

    Example:
        >>> classify_status(40)
        <TimesheetStatus.COMPLETED: 'completed'>
        >>> classify_status(32).value
        'incomplete'
        >>> classify_status(0).value
        'missing'
    """
    # NaN fails every comparison and lands here too
    if not total_hours > 0:
        return TimesheetStatus.MISSING
    if total_hours >= threshold:
        return TimesheetStatus.COMPLETED
    return TimesheetStatus.INCOMPLETE


def status_action(status: TimesheetStatus) -> str:
    """Dashboard action offered for a week in the given status."""
    return _STATUS_ACTIONS[status]
