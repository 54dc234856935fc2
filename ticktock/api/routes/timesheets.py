"""Timesheet routes.

Every route requires a signed-in principal and works on the reconciled
view: the shared baseline merged with the caller's session additions.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ticktock.aggregators.reconciler import TimesheetReconciler
from ticktock.api.dependencies import get_reconciler, require_principal
from ticktock.api.schemas import (
    EntriesSubmission,
    ErrorResponse,
    SubmissionResult,
    WeekEntriesSubmission,
)
from ticktock.models.timesheet import EntryUpdate, TimesheetEntry, WeekSummary

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/timesheets",
    tags=["timesheets"],
    dependencies=[Depends(require_principal)],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)

NOT_FOUND = "Timesheet not found"


@router.get("", response_model=List[WeekSummary])
def list_timesheets(
    reconciler: TimesheetReconciler = Depends(get_reconciler),
) -> List[WeekSummary]:
    """List every week with its total hours and status."""
    weeks = reconciler.reconcile()
    logger.info(f"Returning {len(weeks)} weeks")
    return weeks


@router.post("", response_model=SubmissionResult)
def submit_entries(
    submission: EntriesSubmission,
    reconciler: TimesheetReconciler = Depends(get_reconciler),
) -> SubmissionResult:
    """Append entries to a week."""
    if not reconciler.week_exists(submission.week_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    created = reconciler.append_entries(submission.week_id, submission.entries)
    return SubmissionResult(
        message="Entries added successfully!",
        week_id=submission.week_id,
        entries_count=len(created),
    )


@router.post("/weeks", response_model=WeekSummary, status_code=status.HTTP_201_CREATED)
def create_week(
    reconciler: TimesheetReconciler = Depends(get_reconciler),
) -> WeekSummary:
    """Create an empty week after the latest existing one."""
    return reconciler.create_week()


@router.get("/{week_id}", response_model=WeekSummary)
def get_timesheet(
    week_id: str,
    reconciler: TimesheetReconciler = Depends(get_reconciler),
) -> WeekSummary:
    """Return one week."""
    week = reconciler.get_week(week_id)
    if week is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return week


@router.put("/{week_id}", response_model=WeekSummary)
def replace_timesheet(
    week_id: str,
    submission: WeekEntriesSubmission,
    reconciler: TimesheetReconciler = Depends(get_reconciler),
) -> WeekSummary:
    """Replace a week's entries with the submitted list."""
    week = reconciler.replace_entries(week_id, submission.entries)
    if week is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return week


@router.put("/{week_id}/entries/{entry_id}", response_model=TimesheetEntry)
def update_entry(
    week_id: str,
    entry_id: str,
    update: EntryUpdate,
    reconciler: TimesheetReconciler = Depends(get_reconciler),
) -> TimesheetEntry:
    """Change fields of one entry."""
    entry = reconciler.update_entry(week_id, entry_id, update)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found")
    return entry


@router.delete("/{week_id}/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(
    week_id: str,
    entry_id: str,
    reconciler: TimesheetReconciler = Depends(get_reconciler),
) -> Response:
    """Delete one entry for this session."""
    if not reconciler.delete_entry(week_id, entry_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
