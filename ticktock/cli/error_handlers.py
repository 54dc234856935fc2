"""Error handling for CLI commands."""

import sys
import traceback
from typing import Optional

import click
from pydantic import ValidationError

from ticktock.cli.utils.formatters import format_error, format_warning
from ticktock.exceptions import BaselineError


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize CLI error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Error related to configuration issues."""


class NotFoundError(CLIError):
    """A requested week or entry does not exist."""


def _echo_cli_error(label: str, error: CLIError) -> None:
    click.echo(format_error(f"{label}: {error.message}"), err=True)
    if error.recovery_hint:
        click.echo(format_warning(f"Hint: {error.recovery_hint}"), err=True)


def handle_cli_error(error: BaseException, debug: bool = False) -> int:
    """
    Report an error to the user and choose an exit code.

    Args:
        error: The exception that occurred
        debug: Whether to show full stack trace

    Returns:
        Exit code: 1 configuration, 2 not found, 130 cancelled, 255 other
    """
    if isinstance(error, ConfigurationError):
        _echo_cli_error("Configuration Error", error)
        return 1

    elif isinstance(error, NotFoundError):
        _echo_cli_error("Not Found", error)
        return 2

    elif isinstance(error, (BaselineError, ValidationError)):
        click.echo(format_error(f"Configuration Error: {error}"), err=True)
        click.echo(
            format_warning("Hint: Check your .env file and BASELINE_FILE"), err=True
        )
        return 1

    elif isinstance(error, (click.Abort, KeyboardInterrupt)):
        click.echo(format_warning("\nOperation cancelled by user"), err=True)
        return 130

    click.echo(format_error(f"Unexpected Error: {type(error).__name__}"), err=True)
    click.echo(str(error), err=True)

    if debug:
        click.echo("\nFull stack trace:", err=True)
        click.echo(
            "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            ),
            err=True,
        )
    else:
        click.echo(format_warning("\nRun with --debug flag for full stack trace"), err=True)

    return 255


class ErrorHandler:
    """Context manager that turns exceptions into a reported exit code.

    Example:
        @click.command()
        @click.option('--debug', is_flag=True)
        def my_command(debug):
            with ErrorHandler(debug):
                ...
    """

    def __init__(self, show_debug: bool = False):
        self.show_debug = show_debug

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_val is not None and not isinstance(exc_val, SystemExit):
            sys.exit(handle_cli_error(exc_val, self.show_debug))
        return False
