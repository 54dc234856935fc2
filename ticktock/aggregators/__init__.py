"""Aggregators module for combining baseline and session timesheet data.

This module merges the immutable baseline with each session's additions
and derives per-week totals and statuses.
"""

from ticktock.aggregators.reconciler import (
    TimesheetReconciler,
    effective_entries,
    reconcile,
    summarize_week,
)

__all__ = [
    "TimesheetReconciler",
    "effective_entries",
    "reconcile",
    "summarize_week",
]
