"""Data models for ticktock.

This package contains Pydantic models for all business entities:
- BaseDataModel: Base class with common configuration
- TimesheetEntry / TimesheetWeek: baseline and session timesheet data
- EntryDraft / EntryUpdate / EntryOverride: submitted and stored changes
- SessionAdditions: the session-scoped additions blob
- WeekSummary / TimesheetStatus: reconciled view of a week
- Principal / LoginCredentials: identity
"""

from ticktock.models.base import BaseDataModel
from ticktock.models.timesheet import (
    EntryDraft,
    EntryOverride,
    EntryUpdate,
    SessionAdditions,
    TimesheetEntry,
    TimesheetStatus,
    TimesheetWeek,
    WeekSummary,
)
from ticktock.models.user import LoginCredentials, Principal

__all__ = [
    "BaseDataModel",
    "EntryDraft",
    "EntryOverride",
    "EntryUpdate",
    "SessionAdditions",
    "TimesheetEntry",
    "TimesheetStatus",
    "TimesheetWeek",
    "WeekSummary",
    "LoginCredentials",
    "Principal",
]
