"""Core types and errors shared by the organizer and undo engines."""

from .errors import ExhaustedError, LogIOError, MoveError, NotFoundError, TidyError
from .types import (
    FileOperation,
    OrganizeResult,
    PreviewEntry,
    PreviewResult,
    SessionSummary,
    UndoResult,
)

__all__ = [
    "TidyError",
    "NotFoundError",
    "LogIOError",
    "MoveError",
    "ExhaustedError",
    "FileOperation",
    "OrganizeResult",
    "PreviewEntry",
    "PreviewResult",
    "SessionSummary",
    "UndoResult",
]
