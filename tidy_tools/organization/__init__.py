"""
Organization module for sorting files into category directories.

This module moves files into per-category folders, logs every move per
session, and can undo a session by replaying its log backwards.
"""

from .strategy import DEFAULT_CATEGORIES, DEFAULT_CATEGORY, CategoryStrategy
from .config import OrganizerConfig
from .transaction import OperationLog
from .file_organizer import FileOrganizer, generate_session_id
from .undo import UndoManager

__all__ = [
    "DEFAULT_CATEGORIES",
    "DEFAULT_CATEGORY",
    "CategoryStrategy",
    "OrganizerConfig",
    "OperationLog",
    "FileOrganizer",
    "generate_session_id",
    "UndoManager",
]
