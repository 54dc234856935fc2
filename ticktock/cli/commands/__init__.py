"""CLI commands."""

from ticktock.cli.commands.serve import serve
from ticktock.cli.commands.weeks import list_weeks, show_week

__all__ = ["list_weeks", "serve", "show_week"]
