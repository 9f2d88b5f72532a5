"""
Pytest configuration and fixtures for tidy_tools tests.
"""

from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable

import pytest

from tidy_tools.organization import FileOrganizer, OrganizerConfig, UndoManager


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """A clock that advances one second per call, so session ids differ."""
    state = {"now": datetime(2024, 3, 1, 12, 0, 0)}

    def tick() -> datetime:
        current = state["now"]
        state["now"] = current + timedelta(seconds=1)
        return current

    return tick


@pytest.fixture
def config() -> OrganizerConfig:
    """Default organizer configuration."""
    return OrganizerConfig()


@pytest.fixture
def organizer(config: OrganizerConfig, clock: Callable[[], datetime]) -> FileOrganizer:
    """File organizer with a deterministic clock."""
    return FileOrganizer(config=config, clock=clock)


@pytest.fixture
def undo_manager(config: OrganizerConfig) -> UndoManager:
    """Undo manager sharing the organizer's configuration."""
    return UndoManager(config=config)


@pytest.fixture
def messy_dir(tmp_path: Path) -> Path:
    """Directory with one document, one image and one unknown file."""
    directory = tmp_path / "downloads"
    directory.mkdir()
    (directory / "report.pdf").write_text("report")
    (directory / "photo.jpg").write_text("photo")
    (directory / "unknown.xyz").write_text("unknown")
    return directory
