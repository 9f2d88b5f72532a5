"""
Undo of organize sessions.

Replays the operation log backwards, moving files back to where they were,
then removes empty category directories and the undone session's log block.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..core.errors import LogIOError
from ..core.types import FileOperation, SessionSummary, UndoResult
from .config import OrganizerConfig
from .file_organizer import ProgressCallback, resolve_directory
from .transaction import OperationLog

logger = logging.getLogger(__name__)


class UndoManager:
    """Reverse logged organize sessions."""

    def __init__(self, config: Optional[OrganizerConfig] = None):
        self.config = config or OrganizerConfig()

    def get_log(self, directory: Path) -> OperationLog:
        return OperationLog(self.config.log_path(directory))

    def history(self, directory: Union[str, Path]) -> List[SessionSummary]:
        """
        Summarize the sessions logged for a directory.

        Args:
            directory: Organized directory

        Returns:
            One summary per session, oldest first
        """
        path = resolve_directory(directory)
        return self.get_log(path).sessions()

    def undo(
        self,
        directory: Union[str, Path],
        session_id: Optional[str] = None,
        latest_only: Optional[bool] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> UndoResult:
        """
        Move files back to their original locations.

        Without ``session_id`` every logged operation is undone, unless
        ``latest_only`` (default: ``config.undo_latest_only``) restricts the
        undo to the most recent session.

        Args:
            directory: Organized directory
            session_id: Session to undo
            latest_only: Undo only the latest session when no id is given
            progress_callback: Called with (processed, total) after each file

        Returns:
            Undo result with statistics

        Raises:
            NotFoundError: If the directory does not exist
            LogIOError: If the log cannot be read, or the undone session
                cannot be removed from it (``error.result`` is then set)
        """
        path = resolve_directory(directory)
        log = self.get_log(path)

        if latest_only is None:
            latest_only = self.config.undo_latest_only
        if session_id is None and latest_only:
            session_id = log.latest_session_id()
            if session_id is None:
                logger.info("No sessions to undo")
                return UndoResult(directory=path)

        operations = log.load_all()
        if session_id is not None:
            operations = [op for op in operations if op.session_id == session_id]

        result = UndoResult(directory=path, session_id=session_id)
        if not operations:
            logger.info("No operations found to undo")
            return result

        # Most recent first so chained renames unwind correctly
        operations.reverse()
        result.attempted = len(operations)
        logger.info(f"Undoing {len(operations)} file operations in {path}")

        for processed, operation in enumerate(operations, start=1):
            self._restore(operation, result)
            if progress_callback:
                progress_callback(processed, len(operations))

        result.removed_directories = self.cleanup_empty_directories(path)

        if session_id is not None:
            try:
                log.remove_session(session_id)
            except LogIOError as e:
                e.result = result
                raise

        logger.info(f"Undo completed. Restored {result.restored} files")
        return result

    def _restore(self, operation: FileOperation, result: UndoResult) -> None:
        destination = operation.destination
        source = operation.source

        if not destination.exists():
            message = f"File not found: {destination}"
            logger.warning(message)
            result.warnings.append(message)
            return

        if source.exists() or source.is_symlink():
            message = f"Not restoring {destination.name}: {source} already exists"
            logger.warning(message)
            result.warnings.append(message)
            return

        try:
            destination.rename(source)
        except OSError as e:
            message = f"Error restoring {source.name}: {e.strerror or e}"
            logger.error(message)
            result.failed += 1
            result.warnings.append(message)
            return

        result.restored += 1
        logger.info(f"Restored {source.name}")

    def cleanup_empty_directories(self, directory: Path) -> List[str]:
        """
        Remove category directories that are empty.

        Returns:
            Names of the removed directories
        """
        removed = []
        for category in self.config.strategy.category_names:
            category_path = directory / category
            if not category_path.is_dir():
                continue
            try:
                if any(category_path.iterdir()):
                    continue
                category_path.rmdir()
            except OSError as e:
                logger.warning(f"Could not remove {category_path}: {e}")
                continue
            removed.append(category)
            logger.info(f"Removed empty directory: {category}")
        return removed
