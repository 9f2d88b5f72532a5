"""
File organizer for sorting a directory into category folders.

Moves every top-level file of a directory into a category subdirectory and
records the moves in the directory's operation log so the run can be undone.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Union

from ..core.errors import ExhaustedError, LogIOError, MoveError, NotFoundError
from ..core.types import (
    FileOperation,
    OrganizeResult,
    PreviewEntry,
    PreviewResult,
)
from ..shared.file_utils import get_extension, make_unique_path
from .config import OrganizerConfig
from .strategy import CategoryStrategy
from .transaction import OperationLog

logger = logging.getLogger(__name__)

SESSION_ID_FORMAT = "%Y%m%d_%H%M%S"

ProgressCallback = Callable[[int, int], None]


def generate_session_id(now: Optional[datetime] = None) -> str:
    """
    Build a session id from wall-clock time.

    Args:
        now: Time to use (defaults to the current local time)

    Returns:
        Sortable id such as "20250101_120000"
    """
    return (now or datetime.now()).strftime(SESSION_ID_FORMAT)


def resolve_directory(directory: Union[str, Path]) -> Path:
    """
    Resolve a directory argument to an absolute path.

    Raises:
        NotFoundError: If the path does not exist or is not a directory
    """
    path = Path(directory).expanduser().resolve()
    if not path.is_dir():
        raise NotFoundError(path)
    return path


class FileOrganizer:
    """Organize the files of a directory into category folders."""

    def __init__(
        self,
        config: Optional[OrganizerConfig] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize file organizer.

        Args:
            config: Organizer configuration (defaults apply if omitted)
            clock: Source of the time used for session ids
        """
        self.config = config or OrganizerConfig()
        self.clock = clock

    @property
    def strategy(self) -> CategoryStrategy:
        return self.config.strategy

    def get_log(self, directory: Path) -> OperationLog:
        return OperationLog(self.config.log_path(directory))

    def is_eligible(self, file_path: Path) -> bool:
        """
        Check whether a file should be organized.

        Hidden files, the operation log and files that already sit in a
        category directory are left alone.
        """
        name = file_path.name
        if name.startswith("."):
            return False
        if name == self.config.log_filename:
            return False
        if self.strategy.is_category_name(file_path.parent.name):
            return False
        return True

    def collect_files(self, directory: Path) -> List[Path]:
        """
        List the eligible regular files directly inside a directory.

        Args:
            directory: Directory to scan (not recursive)

        Returns:
            Eligible files sorted by name
        """
        files = []
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if not entry.is_file():
                continue
            if not self.is_eligible(entry):
                logger.debug(f"Skipping {entry.name}")
                continue
            files.append(entry)
        return files

    def create_category_directories(self, directory: Path) -> List[str]:
        """
        Create one subdirectory per category.

        Returns:
            Error messages for directories that could not be created
        """
        errors = []
        for category in self.strategy.category_names:
            try:
                (directory / category).mkdir(exist_ok=True)
            except OSError as e:
                logger.error(f"Could not create {directory / category}: {e}")
                errors.append(f"{category}/: {e}")
        return errors

    def preview(self, directory: Union[str, Path]) -> PreviewResult:
        """
        Show where files would go without moving anything.

        Args:
            directory: Directory to inspect

        Returns:
            Preview with one entry per eligible file
        """
        path = resolve_directory(directory)
        result = PreviewResult(directory=path)

        for file_path in self.collect_files(path):
            category = self.strategy.category_for(get_extension(file_path))
            try:
                size = file_path.stat().st_size
            except OSError:
                size = 0
            result.entries.append(
                PreviewEntry(name=file_path.name, category=category, size_bytes=size)
            )
            result.category_counts[category] = result.category_counts.get(category, 0) + 1

        return result

    def organize(
        self,
        directory: Union[str, Path],
        progress_callback: Optional[ProgressCallback] = None,
    ) -> OrganizeResult:
        """
        Organize files into category directories.

        One file failing to move never aborts the run. The session is logged
        once all files have been processed.

        Args:
            directory: Directory to organize
            progress_callback: Called with (processed, total) after each file

        Returns:
            Organization result with statistics

        Raises:
            NotFoundError: If the directory does not exist
            LogIOError: If the moves could not be logged; ``error.result``
                holds the result of the run
        """
        path = resolve_directory(directory)
        log = self.get_log(path)

        dir_errors = self.create_category_directories(path)

        session_id = generate_session_id(self.clock())
        result = OrganizeResult(directory=path, session_id=session_id)
        result.directory_errors = len(dir_errors)
        result.errors.extend(dir_errors)

        files = self.collect_files(path)
        result.total_files = len(files)
        logger.info(f"Organizing {len(files)} files in {path} (session {session_id})")

        for processed, file_path in enumerate(files, start=1):
            try:
                operation = self._move_file(path, file_path, session_id)
                result.operations.append(operation)
                result.moved += 1
            except MoveError as e:
                logger.error(f"Error moving {file_path.name}: {e.reason}")
                result.failed += 1
                result.errors.append(str(e))

            if progress_callback:
                progress_callback(processed, len(files))

        if result.operations:
            try:
                log.append(session_id, result.operations)
            except LogIOError as e:
                e.result = result
                logger.warning(
                    f"{result.moved} moved files are not recorded and cannot be undone"
                )
                raise

        logger.info(
            f"Session {session_id}: moved {result.moved}, failed {result.failed}"
        )
        return result

    def _move_file(self, directory: Path, file_path: Path, session_id: str) -> FileOperation:
        """
        Move a single file into its category directory.

        Raises:
            MoveError: If no target name is free or the rename fails
        """
        category = self.strategy.category_for(get_extension(file_path))
        desired = directory / category / file_path.name

        try:
            target = make_unique_path(desired, self.config.max_unique_attempts)
        except ExhaustedError as e:
            raise MoveError(file_path, desired, str(e)) from e

        try:
            file_path.rename(target)
        except OSError as e:
            raise MoveError(file_path, target, e.strerror or str(e)) from e

        logger.info(f"Moved {file_path.name} -> {category}/{target.name}")
        return FileOperation(
            source_path=str(file_path),
            destination_path=str(target),
            session_id=session_id,
        )
