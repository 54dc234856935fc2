"""ticktock: weekly timesheets with session-scoped edits over a shared baseline."""

__version__ = "1.0.0"
