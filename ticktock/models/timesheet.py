"""Timesheet data models for ticktock.

This module defines the entities the reconciler works with:

- TimesheetEntry: one logged unit of work (immutable)
- TimesheetWeek: a calendar week of entries (immutable)
- EntryDraft: a candidate entry as submitted by the client, every field optional
- EntryUpdate / EntryOverride: partial changes applied on top of an entry
- SessionAdditions: everything the current session added or changed
- WeekSummary: the reconciled view of a week, with derived total and status

Totals and statuses are never stored on TimesheetWeek; they only exist on
WeekSummary, which is rebuilt on every read.
"""

import datetime as dt
import logging
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import (
    AliasChoices,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from ticktock.models.base import BaseDataModel

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "User Project"
DEFAULT_PROJECT_ID = "USER_PROJECT"


class TimesheetStatus(str, Enum):
    """Completion status of a week, derived from its total hours."""

    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    MISSING = "missing"


class TimesheetEntry(BaseDataModel):
    """A single logged unit of work.

    Attributes:
        id: Opaque unique identifier
        date: Day the work occurred
        hours_worked: Hours logged, never negative
        description: Free-text task description
        project: Project name
        project_id: Project identifier, if known

    Example:
        >>> entry = TimesheetEntry(
        ...     id="entry-1-1",
        ...     date=dt.date(2024, 6, 30),
        ...     hoursWorked=8,
        ...     description="Worked on homepage layout.",
        ...     project="Website Redesign",
        ... )
        >>> entry.hours_worked
        8.0
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Entry identifier")
    date: dt.date = Field(..., description="Date of work")
    hours_worked: float = Field(..., ge=0, allow_inf_nan=False)
    description: str = Field("", description="Task description")
    project: str = Field("", description="Project name")
    project_id: Optional[str] = Field(None, description="Project identifier")


class TimesheetWeek(BaseDataModel):
    """A calendar week of timesheet entries.

    Baseline weeks are immutable: the model is frozen and entries are held
    in a tuple, so a shared baseline cannot be changed by accident.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    week_number: int = Field(..., ge=0)
    start_date: dt.date
    end_date: dt.date
    entries: Tuple[TimesheetEntry, ...] = ()

    @model_validator(mode="after")
    def validate_date_range(self) -> "TimesheetWeek":
        """Ensure the week does not end before it starts."""
        if self.end_date < self.start_date:
            raise ValueError(
                f"end_date ({self.end_date}) must not be before "
                f"start_date ({self.start_date})"
            )
        return self


def _blank_to_none(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return value


class EntryUpdate(BaseDataModel):
    """Partial change to an entry; only the fields that were sent apply.

    Accepts the alternate field names older clients send
    (``hours``, ``taskDescription``, ``projectName``).
    """

    model_config = ConfigDict(extra="ignore")

    date: Optional[dt.date] = None
    hours_worked: Optional[float] = Field(
        None,
        ge=0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("hoursWorked", "hours_worked", "hours"),
    )
    description: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("description", "taskDescription"),
    )
    project: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("project", "projectName"),
    )
    project_id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("projectId", "project_id"),
    )

    @field_validator("date", "hours_worked", mode="before")
    @classmethod
    def blank_is_missing(cls, v):
        """Treat empty form values as not supplied."""
        return _blank_to_none(v)

    def changed_fields(self) -> Dict[str, Any]:
        """Return the entry fields this update sets, by field name."""
        return {
            name: value
            for name, value in self.model_dump(exclude_none=True).items()
            if name in TimesheetEntry.model_fields and name != "id"
        }


class EntryDraft(EntryUpdate):
    """A candidate entry as submitted; any field may be missing.

    Missing values are filled in by the reconciler when the entry is
    appended (fresh id, zero hours, placeholder text).
    """

    id: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def blank_id_is_missing(cls, v):
        """An empty id means "assign one"."""
        return _blank_to_none(v)


class EntryOverride(EntryUpdate):
    """Stored session override for an entry; ``deleted`` marks a tombstone."""

    model_config = ConfigDict(extra="forbid")

    deleted: Optional[bool] = None

    def merge(self, update: EntryUpdate) -> "EntryOverride":
        """Return a new override with ``update``'s fields layered on top."""
        fields = self.model_dump(exclude_none=True)
        fields.update(update.changed_fields())
        return EntryOverride(**fields)


def _read_legacy_entries(week_id: str, items: List[Any]) -> List[Dict[str, Any]]:
    entries = []
    for item in items:
        try:
            draft = EntryDraft.model_validate(item)
        except ValidationError as e:
            logger.warning(
                f"Skipping unreadable entry in week {week_id}: "
                f"{e.error_count()} error(s)"
            )
            continue
        if draft.id is None or draft.date is None:
            logger.warning(f"Skipping entry without id or date in week {week_id}")
            continue
        fields = draft.model_dump(mode="json", exclude_none=True)
        fields.setdefault("hours_worked", 0)
        entries.append(fields)
    return entries


class SessionAdditions(BaseDataModel):
    """Everything the current session contributed on top of the baseline.

    Attributes:
        new_entries: Week id -> entries appended by the user, in order
        modified_entries: Week id -> entry id -> override (or tombstone)
        new_weeks: Weeks created by the user in this session
    """

    new_entries: Dict[str, List[TimesheetEntry]] = Field(default_factory=dict)
    modified_entries: Dict[str, Dict[str, EntryOverride]] = Field(
        default_factory=dict
    )
    new_weeks: List[TimesheetWeek] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def accept_plain_mapping(cls, data: Any) -> Any:
        """Accept the bare ``{week_id: [entries]}`` layout as new entries.

        Entries in that layout may carry legacy duplicates of their fields
        (``hours``, ``taskDescription``, ``projectName``); they are read
        through EntryDraft. Entries without an id or date are skipped.
        """
        known = {
            "newEntries",
            "new_entries",
            "modifiedEntries",
            "modified_entries",
            "newWeeks",
            "new_weeks",
        }
        if (
            isinstance(data, dict)
            and data
            and not known.intersection(data)
            and all(isinstance(v, list) for v in data.values())
        ):
            return {
                "newEntries": {
                    week_id: _read_legacy_entries(week_id, entries)
                    for week_id, entries in data.items()
                }
            }
        return data

    def is_empty(self) -> bool:
        """Whether the session holds no additions at all."""
        return not (
            any(self.new_entries.values())
            or any(self.modified_entries.values())
            or self.new_weeks
        )


class WeekSummary(BaseDataModel):
    """Reconciled, read-only view of a week.

    ``total_hours`` and ``status`` are computed from ``entries`` when the
    summary is built and are never carried over from an earlier read.
    """

    id: str
    week_number: int
    start_date: dt.date
    end_date: dt.date
    week: str = Field(..., description="Display label, e.g. 'Jun 30 - Jul 6, 2024'")
    entries: List[TimesheetEntry]
    total_hours: float
    status: TimesheetStatus
    action: Literal["view", "update", "create"]
    source: Literal["baseline", "session"] = "baseline"
