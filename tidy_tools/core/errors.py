"""
Error kinds raised by tidy-tools.

Per-file problems (``MoveError``) are recovered inside the organizer and only
show up in the result summary. ``NotFoundError`` and ``LogIOError`` reach the
caller.
"""

from pathlib import Path
from typing import Any, Optional, Union


class TidyError(Exception):
    """Base class for all tidy-tools errors."""


class NotFoundError(TidyError):
    """The target directory does not exist or is not a directory."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Directory does not exist: {self.path}")


class LogIOError(TidyError):
    """Reading, appending to or rewriting the operation log failed.

    When raised after files were already moved or restored, ``result`` holds
    the (otherwise complete) result of the run so callers can report it.
    """

    def __init__(self, message: str, result: Optional[Any] = None):
        super().__init__(message)
        self.result = result


class MoveError(TidyError):
    """A single file could not be moved into its category directory."""

    def __init__(self, source: Union[str, Path], target: Union[str, Path], reason: str):
        self.source = Path(source)
        self.target = Path(target)
        self.reason = reason
        super().__init__(f"{self.source.name}: {reason}")


class ExhaustedError(TidyError):
    """No free ``stem_N`` name was found below the attempt limit."""

    def __init__(self, path: Union[str, Path], attempts: int):
        self.path = Path(path)
        self.attempts = attempts
        super().__init__(f"Too many naming conflicts for {self.path} ({attempts} tried)")
