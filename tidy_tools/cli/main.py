"""
Main CLI entry point for tidy-tools.

Provides an interactive menu interface for accessing all commands.
"""

import sys
from pathlib import Path

import click
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from ..version import get_version_string
from ..organization import DEFAULT_CATEGORIES, DEFAULT_CATEGORY
from . import organize as organize_cli
from .organize import console


def print_banner() -> None:
    """Print the application banner."""
    banner = f"""
[bold cyan]╔═══════════════════════════════════════════════════════════════╗
║                      TIDY TOOLS v{get_version_string():<29}║
║                                                               ║
║        Sort files into category folders, and undo it          ║
╚═══════════════════════════════════════════════════════════════╝[/bold cyan]
"""
    console.print(banner)


def print_menu() -> None:
    """Print the main menu."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Option", style="bold cyan", width=5)
    table.add_column("Command", style="bold")
    table.add_column("Description")

    table.add_row("1", "List files", "Show which category each file would go to")
    table.add_row("2", "Organize directory", "Move files into category folders")
    table.add_row("3", "Undo organization", "Move files back to where they were")
    table.add_row("4", "Show history", "List the logged organize sessions")
    table.add_row("5", "Help", "Show supported categories and tips")
    table.add_row("0", "Exit", "Quit the application")

    console.print(Panel(table, title="Main Menu", border_style="cyan"))


def get_directory_input(prompt_text: str = "Enter directory path") -> Path:
    """Get and validate directory input from user."""
    while True:
        path_str = Prompt.ask(prompt_text)

        path = Path(path_str).expanduser().resolve()

        if not path.exists():
            console.print(f"[red]Directory '{path}' does not exist.[/red]")
            if not Confirm.ask("Try again?", default=True):
                sys.exit(0)
            continue

        if not path.is_dir():
            console.print(f"[red]'{path}' is not a directory.[/red]")
            if not Confirm.ask("Try again?", default=True):
                sys.exit(0)
            continue

        return path


def _run(args: list) -> None:
    # Commands exit through sys.exit; keep the menu running afterwards
    try:
        organize_cli.cli.main(args=args, standalone_mode=False)
    except SystemExit:
        pass
    except click.ClickException as e:
        e.show()


def list_files() -> None:
    """Preview the organization of a directory."""
    directory = get_directory_input("Enter directory to list")
    _run(["list", str(directory)])


def organize_directory() -> None:
    """Organize a directory."""
    directory = get_directory_input("Enter directory to organize")
    _run(["list", str(directory)])

    if not Confirm.ask("\nMove these files into category folders?", default=False):
        console.print("[yellow]Cancelled[/yellow]")
        return

    _run(["organize", str(directory)])


def undo_organization() -> None:
    """Undo one or all sessions of a directory."""
    directory = get_directory_input("Enter directory to restore")
    _run(["history", str(directory)])

    session_id = Prompt.ask(
        "\nSession ID to undo (empty for the latest session)", default=""
    )

    args = ["undo", str(directory)]
    if session_id:
        args.extend(["--session", session_id])
    else:
        args.append("--latest")
    _run(args)


def show_history() -> None:
    """Show the organization history of a directory."""
    directory = get_directory_input("Enter directory")
    _run(["history", str(directory)])


def show_help() -> None:
    """Show detailed help information."""
    console.print("\n[bold cyan]Help & Documentation[/bold cyan]\n")

    console.print("[bold]Supported Categories[/bold]\n")
    for category, extensions in DEFAULT_CATEGORIES.items():
        console.print(f"[cyan]{category}:[/cyan] {', '.join(extensions)}")
    console.print(f"[cyan]{DEFAULT_CATEGORY}:[/cyan] all other file types")

    console.print("\n[bold]Tips[/bold]\n")
    for tip in [
        "List a directory first to preview where files will go",
        "Only files directly in the directory are moved, not subfolders",
        "Hidden files are never moved",
        "Note the session ID printed after organizing to undo exactly that run",
        "Undo never overwrites a file that has taken an original file's place",
    ]:
        console.print(f"  • {tip}")


def interactive_mode() -> None:
    """Run the interactive CLI mode."""
    print_banner()

    actions = {
        "1": list_files,
        "2": organize_directory,
        "3": undo_organization,
        "4": show_history,
        "5": show_help,
    }

    while True:
        console.print()
        print_menu()
        console.print()

        try:
            choice = Prompt.ask(
                "Select an option",
                choices=["0", "1", "2", "3", "4", "5"],
                default="0",
            )

            if choice == "0":
                console.print("\n[cyan]Thank you for using Tidy Tools![/cyan]")
                break

            actions[choice]()

            console.print()
            Prompt.ask("Press Enter to continue", default="")

        except KeyboardInterrupt:
            console.print("\n\n[cyan]Goodbye![/cyan]")
            break
        except Exception as e:
            console.print(f"\n[red]Unexpected error: {e}[/red]")
            if Confirm.ask("Continue?", default=True):
                continue
            else:
                break


@click.command()
@click.option(
    "--version",
    is_flag=True,
    help="Show version and exit",
)
def cli(version: bool) -> None:
    """
    Tidy Tools - sort files into category folders, reversibly.

    Launches an interactive menu to access all commands.
    """
    if version:
        console.print(f"Tidy Tools version {get_version_string()}")
        sys.exit(0)

    interactive_mode()


if __name__ == "__main__":
    cli()
