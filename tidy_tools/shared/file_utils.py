"""
File utilities for tidy-tools.

Path helpers, size formatting and logging setup shared by the engines and
the CLI.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from ..core.errors import ExhaustedError

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10_000


def get_extension(file_path: Union[str, Path]) -> str:
    """
    Get the lowercase extension of a file, without the leading dot.

    Args:
        file_path: File path or name

    Returns:
        Extension such as "pdf", or "" if the file has none
    """
    return Path(file_path).suffix.lower().lstrip(".")


def make_unique_path(
    desired_path: Union[str, Path], max_attempts: int = DEFAULT_MAX_ATTEMPTS
) -> Path:
    """
    Return a path that does not exist yet.

    ``desired_path`` is returned unchanged when it is free. Otherwise
    ``stem_1.ext``, ``stem_2.ext``, ... are probed in the same directory.

    Args:
        desired_path: Preferred target path
        max_attempts: Highest suffix to try

    Returns:
        A path that did not exist when probed

    Raises:
        ExhaustedError: If every candidate up to ``max_attempts`` exists
    """
    path = Path(desired_path)
    if not path.exists():
        return path

    stem = path.stem
    suffix = path.suffix
    parent = path.parent

    for counter in range(1, max_attempts + 1):
        candidate = parent / f"{stem}_{counter}{suffix}"
        if not candidate.exists():
            logger.debug(f"Renamed {path.name} -> {candidate.name} to avoid conflict")
            return candidate

    raise ExhaustedError(path, max_attempts)


def format_bytes(size_bytes: int) -> str:
    """
    Format bytes in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string (e.g., "2.5 GB")
    """
    if size_bytes == 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB", "TB"]
    unit_index = 0
    size = float(size_bytes)

    while size >= 1024.0 and unit_index < len(units) - 1:
        size /= 1024.0
        unit_index += 1

    if unit_index == 0:
        return f"{size_bytes} B"
    return f"{size:.2f} {units[unit_index]}"


def setup_logging(
    verbose: bool = False, quiet: bool = False, console: Optional[Console] = None
) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: If True, set logging level to DEBUG
        quiet: If True, set logging level to WARNING
        console: Console the rich handler writes to
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, console=console)],
        force=True,
    )
