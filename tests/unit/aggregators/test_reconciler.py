"""Tests for baseline/session reconciliation."""

import datetime as dt
import json

import pytest

from ticktock.aggregators.reconciler import (
    TimesheetReconciler,
    effective_entries,
    reconcile,
)
from ticktock.data.baseline import parse_baseline
from ticktock.models.timesheet import (
    DEFAULT_PROJECT_ID,
    DEFAULT_PROJECT_NAME,
    EntryDraft,
    EntryOverride,
    EntryUpdate,
    SessionAdditions,
    TimesheetEntry,
    TimesheetStatus,
    TimesheetWeek,
)
from ticktock.services.additions_repository import STORAGE_KEY, AdditionsRepository
from ticktock.services.key_value_store import InMemoryKeyValueStore


def _entry(entry_id: str, hours: float, date=dt.date(2024, 7, 1)) -> TimesheetEntry:
    return TimesheetEntry(
        id=entry_id,
        date=date,
        hours_worked=hours,
        description="Task",
        project="Project",
    )


@pytest.fixture
def thirty_two_hour_baseline():
    """A single week with 32 logged hours."""
    return parse_baseline(
        [
            {
                "id": "week-32",
                "weekNumber": 27,
                "startDate": "2024-07-01",
                "endDate": "2024-07-05",
                "entries": [
                    {
                        "id": f"entry-{day}",
                        "date": f"2024-07-0{day}",
                        "hoursWorked": 8,
                        "description": "Work",
                        "project": "Project",
                    }
                    for day in range(1, 5)
                ],
            }
        ]
    )


class TestReconcile:
    """Test the pure reconcile function."""

    def test_empty_additions_return_baseline(self, baseline):
        """Test that no additions leave every week as in the baseline."""
        weeks = reconcile(baseline, SessionAdditions())

        assert [w.id for w in weeks] == ["week-1", "week-2", "week-3", "week-4"]
        assert [w.total_hours for w in weeks] == [16.0, 14.0, 12.0, 16.0]
        assert all(w.status == TimesheetStatus.INCOMPLETE for w in weeks)
        assert all(w.action == "update" for w in weeks)
        assert all(w.source == "baseline" for w in weeks)
        for summary, week in zip(weeks, baseline):
            assert tuple(summary.entries) == week.entries

    def test_week_label(self, baseline):
        """Test that summaries carry a display label."""
        weeks = reconcile(baseline, SessionAdditions())
        assert weeks[0].week == "Jun 30 - Jul 6, 2024"

    def test_new_entries_follow_baseline_entries(self, baseline):
        """Test that appended entries come after baseline entries."""
        additions = SessionAdditions(new_entries={"week-2": [_entry("mine", 3)]})

        week = reconcile(baseline, additions)[1]

        assert [e.id for e in week.entries] == ["entry-2-1", "entry-2-2", "mine"]
        assert week.total_hours == 17.0

    def test_additions_for_unknown_week_are_ignored(self, baseline):
        """Test that additions for weeks that do not exist are not shown."""
        additions = SessionAdditions(new_entries={"week-99": [_entry("x", 50)]})

        weeks = reconcile(baseline, additions)

        assert [w.id for w in weeks] == ["week-1", "week-2", "week-3", "week-4"]
        assert [w.total_hours for w in weeks] == [16.0, 14.0, 12.0, 16.0]

    def test_overrides_and_tombstones(self, baseline):
        """Test that overrides replace fields and tombstones drop entries."""
        additions = SessionAdditions(
            modified_entries={
                "week-1": {
                    "entry-1-1": EntryOverride(hours_worked=10, description="Longer"),
                    "entry-1-3": EntryOverride(deleted=True),
                }
            }
        )

        week = reconcile(baseline, additions)[0]

        assert [e.id for e in week.entries] == ["entry-1-1", "entry-1-2"]
        assert week.entries[0].hours_worked == 10
        assert week.entries[0].description == "Longer"
        assert week.entries[0].project == "Website Redesign"
        assert week.total_hours == 17.0

    def test_session_weeks_sorted_by_number(self, baseline):
        """Test that session weeks are merged in week-number order."""
        early = TimesheetWeek(
            id="week-early",
            week_number=20,
            start_date=dt.date(2024, 5, 13),
            end_date=dt.date(2024, 5, 17),
        )
        additions = SessionAdditions(new_weeks=[early])

        weeks = reconcile(baseline, additions)

        assert weeks[0].id == "week-early"
        assert weeks[0].source == "session"
        assert weeks[0].status == TimesheetStatus.MISSING
        assert weeks[0].action == "create"

    def test_effective_entries_do_not_mutate_week(self, baseline):
        """Test that reconciling leaves baseline weeks untouched."""
        week = baseline[0]
        additions = SessionAdditions(
            new_entries={"week-1": [_entry("mine", 3)]},
            modified_entries={"week-1": {"entry-1-1": EntryOverride(deleted=True)}},
        )

        entries = effective_entries(week, additions)

        assert [e.id for e in entries] == ["entry-1-2", "entry-1-3", "mine"]
        assert [e.id for e in week.entries] == ["entry-1-1", "entry-1-2", "entry-1-3"]


class TestTimesheetReconcilerReads:
    """Test read operations of TimesheetReconciler."""

    def test_get_week(self, reconciler):
        """Test fetching a known week."""
        week = reconciler.get_week("week-3")

        assert week is not None
        assert week.total_hours == 12.0
        assert week.status == TimesheetStatus.INCOMPLETE

    def test_get_unknown_week_returns_none(self, reconciler):
        """Test that an unknown id is not an error."""
        assert reconciler.get_week("week-missing") is None

    def test_week_exists(self, reconciler):
        """Test week existence checks."""
        assert reconciler.week_exists("week-1")
        assert not reconciler.week_exists("week-missing")

    def test_unreadable_blob_falls_back_to_baseline(self, baseline):
        """Test that a corrupt session blob yields the baseline view."""
        store = InMemoryKeyValueStore({"additional_timesheet_data": "{not json"})
        reconciler = TimesheetReconciler(baseline, AdditionsRepository(store))

        weeks = reconciler.reconcile()

        assert [w.total_hours for w in weeks] == [16.0, 14.0, 12.0, 16.0]

    def test_unavailable_store_falls_back_to_baseline(self, baseline):
        """Test reads without a usable session store."""
        store = InMemoryKeyValueStore(available=False)
        reconciler = TimesheetReconciler(baseline, AdditionsRepository(store))

        weeks = reconciler.reconcile()

        assert [w.total_hours for w in weeks] == [16.0, 14.0, 12.0, 16.0]

    def test_reads_entries_stored_by_week(self, baseline):
        """Test a blob keyed by week id whose entries repeat older field names."""
        stored = {
            "week-1": [
                {
                    "id": "entry-x",
                    "projectId": "USER_PROJECT",
                    "projectName": "User Project",
                    "date": "2024-07-01",
                    "hours": 8,
                    "description": "Client call",
                    "hoursWorked": 8,
                    "taskDescription": "Client call",
                    "project": "User Project",
                }
            ]
        }
        store = InMemoryKeyValueStore({STORAGE_KEY: json.dumps(stored)})
        reconciler = TimesheetReconciler(baseline, AdditionsRepository(store))

        week = reconciler.get_week("week-1")

        assert week.total_hours == 24.0
        assert [e.id for e in week.entries].count("entry-x") == 1

        reconciler.append_entry("week-1", EntryDraft(hours_worked=2))

        assert reconciler.get_week("week-1").total_hours == 26.0


class TestTimesheetReconcilerAppend:
    """Test appending entries."""

    def test_append_adds_hours(self, reconciler):
        """Test that a new entry raises the week total by its hours."""
        reconciler.append_entry("week-1", EntryDraft(hours_worked=4.5))

        assert reconciler.get_week("week-1").total_hours == 20.5

    def test_append_completes_thirty_two_hour_week(self, thirty_two_hour_baseline):
        """Test that 32 + 8 hours completes the week."""
        reconciler = TimesheetReconciler(
            thirty_two_hour_baseline, AdditionsRepository(InMemoryKeyValueStore())
        )
        assert reconciler.get_week("week-32").status == TimesheetStatus.INCOMPLETE

        reconciler.append_entry("week-32", EntryDraft(hours_worked=8))

        week = reconciler.get_week("week-32")
        assert week.total_hours == 40.0
        assert week.status == TimesheetStatus.COMPLETED
        assert week.action == "view"

    def test_appended_entry_present_exactly_once(self, reconciler):
        """Test that a stored entry shows up once in its week."""
        entry = reconciler.append_entry(
            "week-2", EntryDraft(description="Review", hours_worked=2)
        )

        week = reconciler.get_week("week-2")
        assert [e.id for e in week.entries].count(entry.id) == 1
        assert week.entries[-1] == entry

    def test_append_does_not_touch_baseline(self, reconciler, baseline):
        """Test that appends never modify the shared baseline."""
        before = [w.model_dump() for w in baseline]

        reconciler.append_entry("week-1", EntryDraft(hours_worked=30))

        assert [w.model_dump() for w in baseline] == before
        fresh = TimesheetReconciler(baseline, AdditionsRepository(InMemoryKeyValueStore()))
        assert fresh.get_week("week-1").total_hours == 16.0

    def test_defaults_for_missing_fields(self, reconciler):
        """Test that an empty draft is filled with defaults."""
        entry = reconciler.append_entry("week-3")

        assert entry.id.startswith("entry-")
        assert entry.date == dt.date(2024, 7, 14)
        assert entry.hours_worked == 0
        assert entry.description == ""
        assert entry.project == DEFAULT_PROJECT_NAME
        assert entry.project_id == DEFAULT_PROJECT_ID

    def test_zero_hour_entry_keeps_week_missing(self, reconciler):
        """Test that zero-hour entries do not count as logged work."""
        week = reconciler.create_week()
        reconciler.append_entry(week.id, EntryDraft(hours_worked=0))

        summary = reconciler.get_week(week.id)
        assert len(summary.entries) == 1
        assert summary.status == TimesheetStatus.MISSING

    def test_append_entries_in_order(self, reconciler):
        """Test appending several entries at once."""
        created = reconciler.append_entries(
            "week-4",
            [
                EntryDraft(id="a", hours_worked=1),
                EntryDraft(id="b", hours_worked=2),
            ],
        )

        assert [e.id for e in created] == ["a", "b"]
        week = reconciler.get_week("week-4")
        assert [e.id for e in week.entries][-2:] == ["a", "b"]
        assert week.total_hours == 19.0

    def test_colliding_id_is_reassigned(self, reconciler):
        """Test that an id already used in the week gets a fresh one."""
        entry = reconciler.append_entry(
            "week-1", EntryDraft(id="entry-1-1", hours_worked=1)
        )

        assert entry.id != "entry-1-1"
        ids = [e.id for e in reconciler.get_week("week-1").entries]
        assert len(ids) == len(set(ids)) == 4

    def test_append_to_unknown_week_is_not_shown(self, reconciler):
        """Test that entries for an unknown week never reach the view."""
        reconciler.append_entry("week-missing", EntryDraft(hours_worked=5))

        assert reconciler.get_week("week-missing") is None
        assert [w.total_hours for w in reconciler.reconcile()] == [16.0, 14.0, 12.0, 16.0]

    def test_append_without_store_is_not_persisted(self, baseline):
        """Test writes when no session store exists."""
        reconciler = TimesheetReconciler(baseline, AdditionsRepository(None))

        entry = reconciler.append_entry("week-1", EntryDraft(hours_worked=5))

        assert entry.hours_worked == 5
        assert reconciler.get_week("week-1").total_hours == 16.0


class TestTimesheetReconcilerEdits:
    """Test updating, deleting and replacing entries."""

    def test_update_baseline_entry(self, reconciler, baseline):
        """Test overriding a baseline entry for the session."""
        entry = reconciler.update_entry(
            "week-1", "entry-1-2", EntryUpdate(hours_worked=3)
        )

        assert entry.hours_worked == 3
        assert entry.description == "Implemented user profile screen."
        assert reconciler.get_week("week-1").total_hours == 12.0
        assert baseline[0].entries[1].hours_worked == 7

    def test_updates_accumulate(self, reconciler):
        """Test that successive updates layer on each other."""
        reconciler.update_entry("week-1", "entry-1-1", EntryUpdate(hours_worked=6))
        entry = reconciler.update_entry(
            "week-1", "entry-1-1", EntryUpdate(description="New text")
        )

        assert entry.hours_worked == 6
        assert entry.description == "New text"

    def test_update_session_entry(self, reconciler):
        """Test overriding an entry created in this session."""
        created = reconciler.append_entry("week-2", EntryDraft(hours_worked=1))

        entry = reconciler.update_entry(
            "week-2", created.id, EntryUpdate(project="Other")
        )

        assert entry.id == created.id
        assert entry.project == "Other"

    def test_update_unknown_entry(self, reconciler):
        """Test that unknown entries cannot be updated."""
        assert (
            reconciler.update_entry("week-1", "nope", EntryUpdate(hours_worked=1))
            is None
        )
        assert (
            reconciler.update_entry("week-x", "entry-1-1", EntryUpdate(hours_worked=1))
            is None
        )

    def test_delete_baseline_entry(self, reconciler, baseline):
        """Test deleting a baseline entry for the session."""
        assert reconciler.delete_entry("week-1", "entry-1-1") is True

        week = reconciler.get_week("week-1")
        assert [e.id for e in week.entries] == ["entry-1-2", "entry-1-3"]
        assert week.total_hours == 8.0
        assert len(baseline[0].entries) == 3

    def test_delete_session_entry(self, reconciler, repository):
        """Test deleting an entry created in this session."""
        created = reconciler.append_entry("week-2", EntryDraft(hours_worked=2))

        assert reconciler.delete_entry("week-2", created.id) is True

        assert reconciler.get_week("week-2").total_hours == 14.0
        assert repository.load().new_entries["week-2"] == []

    def test_delete_twice(self, reconciler):
        """Test that a deleted entry cannot be deleted again."""
        assert reconciler.delete_entry("week-1", "entry-1-1") is True
        assert reconciler.delete_entry("week-1", "entry-1-1") is False

    def test_deleted_entry_cannot_be_updated(self, reconciler):
        """Test that tombstoned entries stay gone."""
        reconciler.delete_entry("week-1", "entry-1-1")

        assert (
            reconciler.update_entry("week-1", "entry-1-1", EntryUpdate(hours_worked=1))
            is None
        )

    def test_delete_all_entries_makes_week_missing(self, reconciler):
        """Test that a week with no entries left is missing."""
        for entry_id in ("entry-3-1", "entry-3-2"):
            reconciler.delete_entry("week-3", entry_id)

        week = reconciler.get_week("week-3")
        assert week.entries == []
        assert week.status == TimesheetStatus.MISSING

    def test_replace_entries(self, reconciler):
        """Test making a week match a submitted list."""
        summary = reconciler.replace_entries(
            "week-2",
            [
                EntryDraft(id="entry-2-1", hours_worked=10),
                EntryDraft(hours_worked=30, description="New"),
            ],
        )

        assert [e.id for e in summary.entries][0] == "entry-2-1"
        assert len(summary.entries) == 2
        assert summary.total_hours == 40.0
        assert summary.status == TimesheetStatus.COMPLETED
        assert reconciler.get_week("week-2") == summary

    def test_replace_entries_unknown_week(self, reconciler):
        """Test replacing entries of a week that does not exist."""
        assert reconciler.replace_entries("week-missing", []) is None


class TestTimesheetReconcilerWeeks:
    """Test week creation and clearing."""

    def test_create_week_follows_latest(self, reconciler):
        """Test that a new week starts on the Monday after the latest week."""
        week = reconciler.create_week()

        assert week.week_number == 31
        assert week.start_date == dt.date(2024, 7, 29)
        assert week.end_date == dt.date(2024, 8, 2)
        assert week.status == TimesheetStatus.MISSING
        assert week.source == "session"
        assert reconciler.get_week(week.id) == week

    def test_create_consecutive_weeks(self, reconciler):
        """Test creating two weeks in a row."""
        first = reconciler.create_week()
        second = reconciler.create_week()

        assert second.week_number == first.week_number + 1
        assert second.start_date == dt.date(2024, 8, 5)
        assert [w.id for w in reconciler.reconcile()][-2:] == [first.id, second.id]

    def test_create_week_without_baseline(self):
        """Test the first week when nothing exists yet."""
        reconciler = TimesheetReconciler((), AdditionsRepository(InMemoryKeyValueStore()))

        week = reconciler.create_week(today=dt.date(2024, 9, 12))

        assert week.start_date == dt.date(2024, 9, 9)
        assert week.end_date == dt.date(2024, 9, 13)
        assert week.week_number == 37

    def test_entries_in_session_week(self, reconciler):
        """Test appending to a week created in this session."""
        week = reconciler.create_week()

        entry = reconciler.append_entry(week.id, EntryDraft(hours_worked=40))

        assert entry.date == week.start_date
        assert reconciler.get_week(week.id).status == TimesheetStatus.COMPLETED

    def test_clear_restores_baseline(self, reconciler):
        """Test that clearing the session discards every addition."""
        reconciler.append_entry("week-1", EntryDraft(hours_worked=24))
        reconciler.delete_entry("week-2", "entry-2-1")
        reconciler.create_week()

        assert reconciler.clear() is True

        weeks = reconciler.reconcile()
        assert [w.id for w in weeks] == ["week-1", "week-2", "week-3", "week-4"]
        assert [w.total_hours for w in weeks] == [16.0, 14.0, 12.0, 16.0]
