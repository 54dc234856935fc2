"""ticktock CLI.

This module provides a command-line interface for ticktock.
It includes commands for serving the web API and inspecting timesheets.
"""

import click

from ticktock import __version__
from ticktock.cli.commands.serve import serve
from ticktock.cli.commands.weeks import list_weeks, show_week


@click.group(help="ticktock CLI - Weekly timesheets with derived completion status")
@click.version_option(version=__version__)
def cli():
    """ticktock CLI main entry point."""
    pass


# Register commands
cli.add_command(serve)
cli.add_command(list_weeks)
cli.add_command(show_week)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
