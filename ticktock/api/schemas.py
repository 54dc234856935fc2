"""Request and response bodies of the HTTP API."""

from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from ticktock.models.base import BaseDataModel
from ticktock.models.timesheet import EntryDraft


class EntriesSubmission(BaseDataModel):
    """New entries for a week (``POST /api/timesheets``)."""

    model_config = ConfigDict(extra="ignore")

    week_id: str = Field(..., min_length=1)
    entries: List[EntryDraft]


class WeekEntriesSubmission(BaseDataModel):
    """Complete entry list for a week (``PUT /api/timesheets/{id}``)."""

    model_config = ConfigDict(extra="ignore")

    entries: List[EntryDraft]


class SubmissionResult(BaseDataModel):
    message: str
    week_id: str
    entries_count: int


class ErrorResponse(BaseDataModel):
    error: str
    details: Optional[List[Dict[str, Any]]] = None
