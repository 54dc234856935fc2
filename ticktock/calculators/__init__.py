"""Calculator modules for ticktock."""

from ticktock.calculators.status import (
    COMPLETED_HOURS_THRESHOLD,
    calculate_total_hours,
    classify_status,
    status_action,
)
from ticktock.calculators.time_utils import (
    format_date_range,
    monday_of,
    next_monday_after,
    work_week_bounds,
)

__all__ = [
    # status
    "COMPLETED_HOURS_THRESHOLD",
    "calculate_total_hours",
    "classify_status",
    "status_action",
    # time_utils
    "format_date_range",
    "monday_of",
    "next_monday_after",
    "work_week_bounds",
]
