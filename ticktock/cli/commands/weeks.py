"""Commands that print reconciled weeks."""

import json
from typing import Optional

import click

from ticktock.cli.commands.common import build_reconciler, setup_command
from ticktock.cli.error_handlers import ErrorHandler, NotFoundError
from ticktock.cli.utils.formatters import (
    format_hours,
    format_info,
    format_status,
    format_success,
    format_table,
)

_source_options = [
    click.option(
        "--baseline-file",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="Baseline JSON file (default: BASELINE_FILE or built-in seed data)",
    ),
    click.option(
        "--additions",
        "additions_file",
        type=click.Path(dir_okay=False),
        default=None,
        help="Session additions JSON blob to merge with the baseline",
    ),
    click.option(
        "--format",
        "output_format",
        type=click.Choice(["table", "json"]),
        default="table",
        show_default=True,
        help="Output format",
    ),
    click.option("--debug", is_flag=True, help="Enable debug logging and stack traces"),
]


def source_options(func):
    for option in reversed(_source_options):
        func = option(func)
    return func


@click.command(name="list-weeks")
@source_options
def list_weeks(
    baseline_file: Optional[str],
    additions_file: Optional[str],
    output_format: str,
    debug: bool,
):
    """List all weeks with total hours and status.

    Example:
        ticktock list-weeks
        ticktock list-weeks --additions session.json --format json
    """
    with ErrorHandler(debug):
        config = setup_command(debug)
        reconciler = build_reconciler(config, baseline_file, additions_file)
        weeks = reconciler.reconcile()

        if output_format == "json":
            click.echo(json.dumps([w.to_json_dict() for w in weeks], indent=2))
            return

        if not weeks:
            click.echo(format_info("No timesheets found."))
            return

        headers = ["Week #", "Date", "Hours", "Status", "Action"]
        rows = [
            [
                str(week.week_number),
                week.week,
                format_hours(week.total_hours),
                format_status(week.status),
                week.action.capitalize(),
            ]
            for week in weeks
        ]
        click.echo(format_table(headers, rows))
        click.echo()
        click.echo(format_success(f"Found {len(weeks)} week(s)"))


@click.command(name="show-week")
@click.argument("week_id")
@source_options
def show_week(
    week_id: str,
    baseline_file: Optional[str],
    additions_file: Optional[str],
    output_format: str,
    debug: bool,
):
    """Show the entries of one week.

    Example:
        ticktock show-week week-1
    """
    with ErrorHandler(debug):
        config = setup_command(debug)
        reconciler = build_reconciler(config, baseline_file, additions_file)
        week = reconciler.get_week(week_id)

        if week is None:
            raise NotFoundError(
                f"No timesheet with id {week_id!r}",
                recovery_hint="Run 'ticktock list-weeks --format json' to see week ids",
            )

        if output_format == "json":
            click.echo(json.dumps(week.to_json_dict(), indent=2))
            return

        click.echo(
            f"Week {week.week_number} ({week.week}): "
            f"{format_hours(week.total_hours)} {format_status(week.status)}"
        )
        if not week.entries:
            click.echo(format_info("No entries logged for this week."))
            return

        headers = ["Date", "Project", "Hours", "Description"]
        rows = [
            [
                entry.date.isoformat(),
                entry.project,
                format_hours(entry.hours_worked),
                entry.description,
            ]
            for entry in week.entries
        ]
        click.echo(format_table(headers, rows, max_width=50))
