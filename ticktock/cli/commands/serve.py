"""Serve command."""

from typing import Optional

import click
import uvicorn

from ticktock.api.app import create_app
from ticktock.cli.commands.common import setup_command
from ticktock.cli.error_handlers import ErrorHandler
from ticktock.cli.utils.formatters import format_info


@click.command(name="serve")
@click.option("--host", type=str, default=None, help="Bind address (default: HOST)")
@click.option("--port", type=int, default=None, help="Port (default: PORT)")
@click.option("--debug", is_flag=True, help="Enable debug logging and stack traces")
def serve(host: Optional[str], port: Optional[int], debug: bool):
    """Run the ticktock web API.

    Example:
        ticktock serve
        ticktock serve --host 0.0.0.0 --port 8080
    """
    with ErrorHandler(debug):
        config = setup_command(debug)
        app = create_app(config)

        bind_host = host or config.host
        bind_port = port or config.port
        click.echo(format_info(f"Serving ticktock on http://{bind_host}:{bind_port}"))
        uvicorn.run(app, host=bind_host, port=bind_port, log_config=None)
