"""
CLI commands for organizing a directory and undoing it.

Provides ``list``, ``organize``, ``undo`` and ``history`` subcommands.
"""

import json
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, List, Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
)
from rich.table import Table

from ..core.errors import LogIOError, NotFoundError, TidyError
from ..core.types import OrganizeResult, UndoResult
from ..organization import FileOrganizer, OrganizerConfig, UndoManager
from ..shared import format_bytes, setup_logging
from ..version import get_version_string

console = Console()


@contextmanager
def progress_bar(description: str) -> Iterator[Callable[[int, int], None]]:
    """Yield a (processed, total) callback that drives a rich progress bar."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(description, total=None)

        def update(processed: int, total: int) -> None:
            progress.update(task, completed=processed, total=total)

        yield update


def _fail(message: str, verbose: bool = False) -> None:
    console.print(f"\n[red]✗ Error: {message}[/red]")
    if verbose:
        console.print_exception()
    sys.exit(1)


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON configuration file (categories, log file name, ...)",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose output")
@click.option("-q", "--quiet", is_flag=True, default=False, help="Only show warnings")
@click.option("--version", is_flag=True, help="Show version and exit")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[str],
    verbose: bool,
    quiet: bool,
    version: bool,
) -> None:
    """
    Sort files into category folders, with undo.

    \b
    Examples:
        # See where files would go
        tidy list ~/Downloads

        # Organize, then undo that session
        tidy organize ~/Downloads
        tidy undo ~/Downloads --session 20250101_120000

        # Show what has been organized so far
        tidy history ~/Downloads

    \b
    Categories:
        Documents, Images, Videos, Audio, Others

    \b
    IMPORTANT:
        • Only one process should organize a given directory at a time
        • Moves are recorded in a hidden log file inside the directory
    """
    if version:
        console.print(f"tidy-tools version {get_version_string()}")
        sys.exit(0)

    setup_logging(verbose=verbose, quiet=quiet, console=console)

    config = OrganizerConfig()
    if config_path:
        try:
            config = OrganizerConfig.load(Path(config_path))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            _fail(f"Invalid configuration {config_path}: {e}")

    ctx.obj = {"config": config, "verbose": verbose}

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command(name="list")
@click.argument("directory", type=click.Path())
@click.pass_context
def list_files(ctx: click.Context, directory: str) -> None:
    """List the files in DIRECTORY and the category each would go to."""
    organizer = FileOrganizer(config=ctx.obj["config"])

    try:
        preview = organizer.preview(directory)
    except TidyError as e:
        _fail(str(e), ctx.obj["verbose"])
        return

    if not preview.entries:
        console.print(f"No files to organize in {preview.directory}")
        return

    table = Table(title=f"Files in {preview.directory}")
    table.add_column("File", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Size", justify="right")
    for entry in preview.entries:
        table.add_row(entry.name, entry.category, format_bytes(entry.size_bytes))
    console.print(table)

    summary = Table(title="Summary")
    summary.add_column("Category", style="cyan")
    summary.add_column("Files", style="green", justify="right")
    for category, count in sorted(preview.category_counts.items()):
        summary.add_row(category, str(count))
    summary.add_row("Total", str(preview.total_files), style="bold")
    console.print(summary)


@cli.command()
@click.argument("directory", type=click.Path())
@click.pass_context
def organize(ctx: click.Context, directory: str) -> None:
    """Move the files of DIRECTORY into category folders."""
    organizer = FileOrganizer(config=ctx.obj["config"])
    verbose = ctx.obj["verbose"]

    console.print(f"\n[cyan]Organizing:[/cyan] {directory}")

    try:
        with progress_bar("Organizing files...") as update:
            result = organizer.organize(directory, progress_callback=update)
    except NotFoundError as e:
        _fail(str(e), verbose)
        return
    except LogIOError as e:
        if e.result is not None:
            _display_organize_result(e.result)
        console.print(
            "\n[red]⚠ WARNING: files were moved but could not be logged. "
            "They cannot be undone automatically.[/red]"
        )
        _fail(str(e), verbose)
        return
    except Exception as e:
        _fail(str(e), verbose)
        return

    _display_organize_result(result)

    if result.moved:
        console.print(f"\n[dim]Session ID: {result.session_id}[/dim]")
        console.print("[dim]You can undo this operation with:[/dim]")
        console.print(
            f'[dim]  tidy undo "{result.directory}" --session {result.session_id}[/dim]'
        )


@cli.command()
@click.argument("directory", type=click.Path())
@click.option("-s", "--session", "session_id", type=str, help="Session ID to undo")
@click.option(
    "--latest",
    is_flag=True,
    default=False,
    help="Undo only the most recent session (default without --session: all)",
)
@click.pass_context
def undo(
    ctx: click.Context, directory: str, session_id: Optional[str], latest: bool
) -> None:
    """Move files organized in DIRECTORY back to where they were."""
    manager = UndoManager(config=ctx.obj["config"])
    verbose = ctx.obj["verbose"]

    if session_id:
        console.print(f"\n[yellow]Undoing session {session_id}...[/yellow]")
    elif latest or manager.config.undo_latest_only:
        console.print("\n[yellow]Undoing the latest session...[/yellow]")
    else:
        console.print("\n[yellow]Undoing every logged session...[/yellow]")

    try:
        with progress_bar("Restoring files...") as update:
            result = manager.undo(
                directory,
                session_id=session_id,
                latest_only=latest or None,
                progress_callback=update,
            )
    except LogIOError as e:
        if e.result is not None:
            _display_undo_result(e.result)
        _fail(str(e), verbose)
        return
    except Exception as e:
        _fail(str(e), verbose)
        return

    if not result.attempted:
        console.print("No operations found to undo.")
        return

    _display_undo_result(result)


@cli.command()
@click.argument("directory", type=click.Path())
@click.pass_context
def history(ctx: click.Context, directory: str) -> None:
    """Show the organize sessions logged for DIRECTORY."""
    manager = UndoManager(config=ctx.obj["config"])

    try:
        sessions = manager.history(directory)
    except TidyError as e:
        _fail(str(e), ctx.obj["verbose"])
        return

    if not sessions:
        console.print("No organization history found for this directory.")
        return

    table = Table(title=f"Organization history for {directory}")
    table.add_column("Session", style="cyan")
    table.add_column("Files moved", style="green", justify="right")
    table.add_column("Status")
    for session in sessions:
        status = "complete" if session.complete else "[red]incomplete[/red]"
        table.add_row(session.session_id, str(session.operation_count), status)
    console.print(table)


def _display_organize_result(result: OrganizeResult) -> None:
    """Display organization result."""
    console.print("\n[green]✓ Organization complete![/green]\n")

    table = Table(title="Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="green", justify="right")

    table.add_row("Total files", str(result.total_files))
    table.add_row("Moved", str(result.moved))
    table.add_row("Failed", str(result.failed))
    if result.directory_errors:
        table.add_row("Directory errors", str(result.directory_errors))

    console.print(table)
    _print_messages("Errors", result.errors, "red")


def _display_undo_result(result: UndoResult) -> None:
    """Display undo result."""
    console.print("\n[green]✓ Undo complete![/green]\n")

    table = Table(title="Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="green", justify="right")

    table.add_row("Attempted", str(result.attempted))
    table.add_row("Restored", str(result.restored))
    table.add_row("Warnings", str(len(result.warnings)))
    table.add_row("Removed directories", str(len(result.removed_directories)))

    console.print(table)
    _print_messages("Warnings", result.warnings, "yellow")


def _print_messages(title: str, messages: List[str], color: str) -> None:
    if not messages:
        return
    console.print(f"\n[{color}]{title}:[/{color}]")
    for message in messages[:10]:  # Show first 10
        console.print(f"  [{color}]• {message}[/{color}]")
    if len(messages) > 10:
        console.print(f"  [dim]... and {len(messages) - 10} more[/dim]")


if __name__ == "__main__":
    cli()
