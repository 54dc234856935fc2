"""Reconciliation of baseline weeks with session additions.

This module produces the per-session view of all weeks. The baseline is
shared and never changes; each session contributes new entries, per-entry
overrides (including deletion tombstones) and new weeks through its
SessionAdditions blob. Every read rebuilds the view from scratch, so totals
and statuses always reflect the current entries.
"""

import datetime as dt
import logging
from typing import Dict, Iterable, List, Optional, Sequence

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
from ticktock.models.timesheet import (
    DEFAULT_PROJECT_ID,
    DEFAULT_PROJECT_NAME,
    EntryDraft,
    EntryOverride,
    EntryUpdate,
    SessionAdditions,
    TimesheetEntry,
    TimesheetWeek,
    WeekSummary,
)
from ticktock.services.additions_repository import AdditionsRepository
from ticktock.utils.identifiers import generate_entry_id, generate_week_id
from ticktock.utils.logging_utils import LogContext, log_function_call

logger = logging.getLogger(__name__)


def effective_entries(
    week: TimesheetWeek, additions: SessionAdditions
) -> List[TimesheetEntry]:
    """Return the entries of ``week`` as the session sees them.

    Baseline entries come first, followed by the session's new entries in
    stored order. Overrides are then applied and tombstoned entries dropped.

    Args:
        week: Baseline or session-created week
        additions: The session's additions

    Returns:
        New list of entries; ``week`` itself is left untouched
    """
    entries = list(week.entries)
    added = additions.new_entries.get(week.id)
    if added:
        entries.extend(added)

    overrides = additions.modified_entries.get(week.id)
    if not overrides:
        return entries

    result: List[TimesheetEntry] = []
    for entry in entries:
        override = overrides.get(entry.id)
        if override is None:
            result.append(entry)
        elif override.deleted:
            continue
        else:
            result.append(entry.model_copy(update=override.changed_fields()))
    return result


def summarize_week(
    week: TimesheetWeek,
    entries: Sequence[TimesheetEntry],
    threshold: float = COMPLETED_HOURS_THRESHOLD,
    source: str = "baseline",
) -> WeekSummary:
    """Build the reconciled view of a week from its effective entries."""
    total_hours = calculate_total_hours(entries)
    status = classify_status(total_hours, threshold)
    return WeekSummary(
        id=week.id,
        week_number=week.week_number,
        start_date=week.start_date,
        end_date=week.end_date,
        week=format_date_range(week.start_date, week.end_date),
        entries=list(entries),
        total_hours=total_hours,
        status=status,
        action=status_action(status),
        source=source,
    )


def reconcile(
    baseline: Iterable[TimesheetWeek],
    additions: SessionAdditions,
    threshold: float = COMPLETED_HOURS_THRESHOLD,
) -> List[WeekSummary]:
    """Merge the baseline with a session's additions.

    Session-created weeks are appended after the baseline weeks, then the
    result is sorted by week number. The sort is stable, so weeks sharing
    a number keep baseline-first order.

    Args:
        baseline: Immutable baseline weeks
        additions: The session's additions
        threshold: Hours at which a week counts as completed

    Returns:
        One WeekSummary per week, ordered by week number

    Example:
        >>> from ticktock.data import load_baseline
        >>> weeks = reconcile(load_baseline(), SessionAdditions())
        >>> [(w.id, w.total_hours) for w in weeks][:2]
        [('week-1', 16.0), ('week-2', 14.0)]
    """
    summaries = [
        summarize_week(week, effective_entries(week, additions), threshold)
        for week in baseline
    ]
    summaries.extend(
        summarize_week(week, effective_entries(week, additions), threshold, "session")
        for week in additions.new_weeks
    )
    summaries.sort(key=lambda summary: summary.week_number)
    return summaries


class TimesheetReconciler:
    """Session-bound access to reconciled timesheets.

    Reads rebuild the view from the baseline plus the additions loaded from
    the repository. Writes are whole-blob read-modify-write operations on
    the session's additions; the baseline is never modified.

    Attributes:
        baseline: Immutable baseline weeks
        repository: Repository holding this session's additions
        completed_threshold: Hours at which a week counts as completed

    Example:
        >>> from ticktock.data import load_baseline
        >>> from ticktock.services import AdditionsRepository, InMemoryKeyValueStore
        >>> reconciler = TimesheetReconciler(
        ...     load_baseline(), AdditionsRepository(InMemoryKeyValueStore())
        ... )
        >>> reconciler.get_week("week-1").status.value
        'incomplete'
        >>> reconciler.get_week("no-such-week") is None
        True
    """

    def __init__(
        self,
        baseline: Sequence[TimesheetWeek],
        repository: AdditionsRepository,
        completed_threshold: float = COMPLETED_HOURS_THRESHOLD,
    ):
        self.baseline = tuple(baseline)
        self.repository = repository
        self.completed_threshold = completed_threshold

    # Reads

    def reconcile(self) -> List[WeekSummary]:
        """Return every week as this session sees it."""
        return reconcile(
            self.baseline, self.repository.load(), self.completed_threshold
        )

    def get_week(self, week_id: str) -> Optional[WeekSummary]:
        """Return the reconciled week with ``week_id``, or None if unknown."""
        for summary in self.reconcile():
            if summary.id == week_id:
                return summary
        logger.debug(f"Week {week_id} not found")
        return None

    def week_exists(self, week_id: str) -> bool:
        """Whether ``week_id`` names a baseline or session-created week."""
        return self._find_week(week_id, self.repository.load()) is not None

    # Writes

    def append_entry(
        self, week_id: str, draft: Optional[EntryDraft] = None
    ) -> TimesheetEntry:
        """Append one entry to a week's session additions.

        Missing fields are defaulted: a fresh id, zero hours, empty
        description, a placeholder project and the week's start date.

        Args:
            week_id: Target week id
            draft: Candidate entry; None appends an all-default entry

        Returns:
            The stored entry
        """
        return self.append_entries(week_id, [draft or EntryDraft()])[0]

    @log_function_call
    def append_entries(
        self, week_id: str, drafts: Iterable[EntryDraft]
    ) -> List[TimesheetEntry]:
        """Append several entries in a single read-modify-write.

        Args:
            week_id: Target week id
            drafts: Candidate entries, appended in order

        Returns:
            The stored entries, in order
        """
        with LogContext(week_id=week_id):
            additions = self.repository.load()
            week = self._find_week(week_id, additions)
            created = [self._append(additions, week_id, week, d) for d in drafts]
            self.repository.save(additions)
            logger.info(f"Appended {len(created)} entries to week {week_id}")
            return created

    @log_function_call
    def update_entry(
        self, week_id: str, entry_id: str, update: EntryUpdate
    ) -> Optional[TimesheetEntry]:
        """Record a session override for an existing entry.

        Works for baseline and session entries alike.

        Returns:
            The updated effective entry, or None if the week or entry
            does not exist
        """
        with LogContext(week_id=week_id, entry_id=entry_id):
            additions = self.repository.load()
            week = self._find_week(week_id, additions)
            if week is None or not self._has_entry(week, entry_id, additions):
                logger.info(f"Cannot update missing entry {entry_id} in week {week_id}")
                return None

            self._override(additions, week_id, entry_id, update)
            self.repository.save(additions)

            for entry in effective_entries(week, additions):
                if entry.id == entry_id:
                    return entry
            return None

    @log_function_call
    def delete_entry(self, week_id: str, entry_id: str) -> bool:
        """Delete an entry for this session.

        Session entries are removed from the additions; every deletion also
        records a tombstone, so baseline entries disappear from the view
        while the baseline itself stays intact.

        Returns:
            True if the entry existed, False otherwise
        """
        with LogContext(week_id=week_id, entry_id=entry_id):
            additions = self.repository.load()
            week = self._find_week(week_id, additions)
            if week is None or not self._has_entry(week, entry_id, additions):
                logger.info(f"Cannot delete missing entry {entry_id} in week {week_id}")
                return False

            self._tombstone(additions, week_id, entry_id)
            self.repository.save(additions)
            logger.info(f"Deleted entry {entry_id} from week {week_id}")
            return True

    @log_function_call
    def replace_entries(
        self, week_id: str, drafts: Sequence[EntryDraft]
    ) -> Optional[WeekSummary]:
        """Make a week's effective entries match a submitted list.

        Drafts whose id matches a current entry update that entry, other
        drafts are appended, and current entries absent from the list are
        deleted.

        Returns:
            The reconciled week, or None if the week does not exist
        """
        with LogContext(week_id=week_id):
            additions = self.repository.load()
            week = self._find_week(week_id, additions)
            if week is None:
                return None

            current_ids = {entry.id for entry in effective_entries(week, additions)}
            submitted_ids = {draft.id for draft in drafts if draft.id}

            for entry_id in current_ids - submitted_ids:
                self._tombstone(additions, week_id, entry_id)
            for draft in drafts:
                if draft.id in current_ids:
                    self._override(additions, week_id, draft.id, draft)
                else:
                    self._append(additions, week_id, week, draft)

            self.repository.save(additions)
            logger.info(
                f"Replaced entries of week {week_id}: "
                f"{len(drafts)} submitted, {len(current_ids - submitted_ids)} removed"
            )
            return summarize_week(
                week,
                effective_entries(week, additions),
                self.completed_threshold,
                self._source(week_id, additions),
            )

    @log_function_call
    def create_week(self, today: Optional[dt.date] = None) -> WeekSummary:
        """Create an empty week following the latest existing week.

        The week runs Monday to Friday, starting on the first Monday after
        the latest existing week ends, numbered one above the highest week
        number. Without any weeks it is the current week of ``today``.

        Args:
            today: Reference date when there are no weeks (default: today)

        Returns:
            Reconciled view of the new week
        """
        additions = self.repository.load()
        weeks = list(self.baseline) + list(additions.new_weeks)

        if weeks:
            latest_end = max(week.end_date for week in weeks)
            start_date, end_date = work_week_bounds(next_monday_after(latest_end))
            week_number = max(week.week_number for week in weeks) + 1
        else:
            reference = today or dt.date.today()
            start_date, end_date = work_week_bounds(monday_of(reference))
            week_number = reference.isocalendar()[1]

        week = TimesheetWeek(
            id=generate_week_id(),
            week_number=week_number,
            start_date=start_date,
            end_date=end_date,
        )
        additions.new_weeks.append(week)
        self.repository.save(additions)
        logger.info(f"Created week {week.id} ({start_date} to {end_date})")
        return summarize_week(week, [], self.completed_threshold, "session")

    def clear(self) -> bool:
        """Discard all of this session's additions (sign-out)."""
        return self.repository.clear()

    # Helpers

    def _find_week(
        self, week_id: str, additions: SessionAdditions
    ) -> Optional[TimesheetWeek]:
        for week in self.baseline:
            if week.id == week_id:
                return week
        for week in additions.new_weeks:
            if week.id == week_id:
                return week
        return None

    def _source(self, week_id: str, additions: SessionAdditions) -> str:
        if any(week.id == week_id for week in additions.new_weeks):
            return "session"
        return "baseline"

    @staticmethod
    def _has_entry(
        week: TimesheetWeek, entry_id: str, additions: SessionAdditions
    ) -> bool:
        return any(e.id == entry_id for e in effective_entries(week, additions))

    @staticmethod
    def _known_entry_ids(
        week: Optional[TimesheetWeek], week_id: str, additions: SessionAdditions
    ) -> set:
        # Includes tombstoned ids, so a reused id cannot be hidden by one
        ids = {entry.id for entry in week.entries} if week is not None else set()
        ids.update(entry.id for entry in additions.new_entries.get(week_id, []))
        ids.update(additions.modified_entries.get(week_id, {}))
        return ids

    @staticmethod
    def _append(
        additions: SessionAdditions,
        week_id: str,
        week: Optional[TimesheetWeek],
        draft: EntryDraft,
    ) -> TimesheetEntry:
        if week is not None:
            default_date = week.start_date
        else:
            logger.warning(f"Appending to unknown week {week_id}")
            default_date = dt.date.today()

        entry_id = draft.id
        if entry_id and entry_id in TimesheetReconciler._known_entry_ids(
            week, week_id, additions
        ):
            logger.info(f"Entry id {entry_id} already used in week {week_id}, reassigning")
            entry_id = None

        entry = TimesheetEntry(
            id=entry_id or generate_entry_id(),
            date=draft.date or default_date,
            hours_worked=draft.hours_worked if draft.hours_worked is not None else 0,
            description=draft.description or "",
            project=draft.project or DEFAULT_PROJECT_NAME,
            project_id=draft.project_id or DEFAULT_PROJECT_ID,
        )
        additions.new_entries.setdefault(week_id, []).append(entry)
        return entry

    @staticmethod
    def _override(
        additions: SessionAdditions,
        week_id: str,
        entry_id: str,
        update: EntryUpdate,
    ) -> None:
        overrides: Dict[str, EntryOverride] = additions.modified_entries.setdefault(
            week_id, {}
        )
        overrides[entry_id] = overrides.get(entry_id, EntryOverride()).merge(update)

    @staticmethod
    def _tombstone(additions: SessionAdditions, week_id: str, entry_id: str) -> None:
        added = additions.new_entries.get(week_id)
        if added:
            additions.new_entries[week_id] = [e for e in added if e.id != entry_id]
        overrides = additions.modified_entries.setdefault(week_id, {})
        existing = overrides.get(entry_id, EntryOverride())
        overrides[entry_id] = existing.model_copy(update={"deleted": True})
