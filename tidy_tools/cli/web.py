"""
CLI for launching the web interface.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click
import uvicorn
from pydantic import ValidationError
from rich.console import Console

from ..organization import OrganizerConfig
from ..shared import setup_logging
from ..version import get_version_string
from ..web.api import DEFAULT_PORT, app, init_config

console = Console()


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON configuration file (categories, log file name, ...)",
)
@click.option(
    "--host",
    default="127.0.0.1",
    help="Host to bind to (default: 127.0.0.1)",
)
@click.option(
    "--port",
    default=DEFAULT_PORT,
    type=int,
    help=f"Port to bind to (default: {DEFAULT_PORT})",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose output")
def web(config_path: Optional[str], host: str, port: int, verbose: bool) -> None:
    """
    Launch the browser interface for organizing directories.

    The server acts on any directory path it is given, so keep it bound to
    localhost.
    """
    setup_logging(verbose=verbose, console=console)

    config = OrganizerConfig()
    if config_path:
        try:
            config = OrganizerConfig.load(Path(config_path))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            console.print(f"[red]Error: Invalid configuration {config_path}: {e}[/red]")
            sys.exit(1)

    version_str = get_version_string()
    console.print(f"\n[bold cyan]Tidy Tools - Web[/bold cyan] [dim]v{version_str}[/dim]\n")
    console.print(f"Server: http://{host}:{port}\n")

    init_config(config)

    console.print("[green]Starting web server...[/green]")
    console.print(f"[yellow]Open http://{host}:{port} in your browser[/yellow]\n")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="debug" if verbose else "info",
    )


if __name__ == "__main__":
    web()
