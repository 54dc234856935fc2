"""Baseline (seed) timesheet data.

The baseline is built once at startup and shared read-only by every
session. It is either the built-in demo dataset or a JSON file named by
the ``BASELINE_FILE`` setting, containing a list of weeks::

    [
      {
        "id": "week-1",
        "weekNumber": 27,
        "startDate": "2024-06-30",
        "endDate": "2024-07-06",
        "entries": [
          {"id": "entry-1-1", "date": "2024-06-30", "hoursWorked": 8,
           "description": "...", "project": "...", "projectId": "P001"}
        ]
      }
    ]
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import TypeAdapter, ValidationError

from ticktock.exceptions import BaselineError
from ticktock.models.timesheet import TimesheetWeek

logger = logging.getLogger(__name__)

Baseline = Tuple[TimesheetWeek, ...]

_WEEKS_ADAPTER = TypeAdapter(Tuple[TimesheetWeek, ...])


def _entry(
    entry_id: str, project_id: str, project: str, date: str, hours: float, description: str
) -> Dict[str, Any]:
    return {
        "id": entry_id,
        "projectId": project_id,
        "project": project,
        "date": date,
        "hoursWorked": hours,
        "description": description,
    }


SEED_WEEKS: List[Dict[str, Any]] = [
    {
        "id": "week-1",
        "weekNumber": 27,
        "startDate": "2024-06-30",
        "endDate": "2024-07-06",
        "entries": [
            _entry("entry-1-1", "P001", "Website Redesign", "2024-06-30", 8, "Worked on homepage layout."),
            _entry("entry-1-2", "P002", "Mobile App Feature", "2024-07-01", 7, "Implemented user profile screen."),
            _entry("entry-1-3", "P001", "Website Redesign", "2024-07-01", 1, "Bug fixing on contact form."),
        ],
    },
    {
        "id": "week-2",
        "weekNumber": 28,
        "startDate": "2024-07-07",
        "endDate": "2024-07-13",
        "entries": [
            _entry("entry-2-1", "P003", "CRM Integration", "2024-07-07", 8, "Configured Salesforce API."),
            _entry("entry-2-2", "P001", "Website Redesign", "2024-07-08", 6, "Developed product detail page."),
        ],
    },
    {
        "id": "week-3",
        "weekNumber": 29,
        "startDate": "2024-07-14",
        "endDate": "2024-07-20",
        "entries": [
            _entry("entry-3-1", "P004", "Internal Tools", "2024-07-14", 8, "Built data import script."),
            _entry("entry-3-2", "P003", "CRM Integration", "2024-07-15", 4, "Debugging sync issues."),
        ],
    },
    {
        "id": "week-4",
        "weekNumber": 30,
        "startDate": "2024-07-21",
        "endDate": "2024-07-27",
        "entries": [
            _entry("entry-4-1", "P005", "Marketing Campaign", "2024-07-21", 8, "Designed email templates."),
            _entry("entry-4-2", "P005", "Marketing Campaign", "2024-07-22", 8, "Set up A/B tests."),
        ],
    },
]


def parse_baseline(data: Any) -> Baseline:
    """Validate raw week data into an immutable baseline.

    Args:
        data: List of week mappings

    Returns:
        Tuple of frozen TimesheetWeek models

    Raises:
        BaselineError: If the data is not a valid list of weeks or
            week ids are duplicated
    """
    try:
        weeks = _WEEKS_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise BaselineError(f"Invalid baseline data: {e}") from e

    seen = set()
    for week in weeks:
        if week.id in seen:
            raise BaselineError(f"Duplicate week id in baseline: {week.id}")
        seen.add(week.id)

    return weeks


def load_baseline(path: Optional[Union[str, Path]] = None) -> Baseline:
    """Load the baseline from a JSON file, or the built-in seed data.

    Args:
        path: Optional JSON file path

    Returns:
        Tuple of frozen TimesheetWeek models

    Raises:
        BaselineError: If the file cannot be read or is invalid
    """
    if path is None:
        weeks = parse_baseline(SEED_WEEKS)
        logger.debug(f"Loaded built-in baseline with {len(weeks)} weeks")
        return weeks

    file_path = Path(path)
    try:
        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise BaselineError(f"Cannot read baseline file {file_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise BaselineError(f"Baseline file {file_path} is not valid JSON: {e}") from e

    weeks = parse_baseline(data)
    logger.info(f"Loaded baseline with {len(weeks)} weeks from {file_path}")
    return weeks
