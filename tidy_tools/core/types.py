"""
Type definitions for organize and undo runs.
"""

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class FileOperation(BaseModel):
    """A single logged move."""

    source_path: str = Field(description="Path before the move")
    destination_path: str = Field(description="Path after the move")
    session_id: str = Field(default="", description="Session the move belongs to")

    @property
    def source(self) -> Path:
        return Path(self.source_path)

    @property
    def destination(self) -> Path:
        return Path(self.destination_path)


class SessionSummary(BaseModel):
    """One session block of the operation log."""

    session_id: str
    operation_count: int = 0
    complete: bool = Field(
        default=True, description="False if the block has no end marker"
    )


class OrganizeResult(BaseModel):
    """Result of an organize run."""

    directory: Path
    session_id: str
    total_files: int = 0
    moved: int = 0
    failed: int = 0
    directory_errors: int = 0
    operations: List[FileOperation] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


class UndoResult(BaseModel):
    """Result of an undo run."""

    directory: Path
    session_id: Optional[str] = None
    attempted: int = 0
    restored: int = 0
    failed: int = 0
    warnings: List[str] = Field(default_factory=list)
    removed_directories: List[str] = Field(default_factory=list)


class PreviewEntry(BaseModel):
    """A file that organize would move."""

    name: str
    category: str
    size_bytes: int = 0


class PreviewResult(BaseModel):
    """Result of listing a directory without moving anything."""

    directory: Path
    entries: List[PreviewEntry] = Field(default_factory=list)
    category_counts: Dict[str, int] = Field(default_factory=dict)

    @property
    def total_files(self) -> int:
        return len(self.entries)
