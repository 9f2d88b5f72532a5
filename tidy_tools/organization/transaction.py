"""
Operation log for organize sessions.

Every organize run appends one session block to a hidden text file in the
organized directory::

    SESSION:20250101_120000
    OPERATION:/data/report.pdf|/data/Documents/report.pdf
    END_SESSION:20250101_120000

Paths are escaped (``\\``, ``|``, newlines) and the file is split on ``\\n``
only. It is read and written as UTF-8 with ``surrogateescape``, so names that
are not valid UTF-8 come back exactly as ``os.fsdecode`` produced them. Undo
replays the log backwards and rewrites it without the undone session.
"""

import logging
import os
from pathlib import Path
from typing import IO, Dict, Iterable, List, Optional, Tuple

from ..core.errors import LogIOError
from ..core.types import FileOperation, SessionSummary

logger = logging.getLogger(__name__)

SESSION_PREFIX = "SESSION:"
END_SESSION_PREFIX = "END_SESSION:"
OPERATION_PREFIX = "OPERATION:"
LEGACY_OPERATION_PREFIX = "MOVE:"
SEPARATOR = "|"

ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"

_ESCAPES = {"\\": "\\\\", "|": "\\|", "\n": "\\n", "\r": "\\r"}
_UNESCAPES = {"\\": "\\", "|": "|", "n": "\n", "r": "\r"}


def escape_path(path: str) -> str:
    """Escape a path so it fits on one log line without a bare separator."""
    return "".join(_ESCAPES.get(ch, ch) for ch in path)


def encode_operation(operation: FileOperation) -> str:
    """Encode an operation as a log line (without the trailing newline)."""
    return (
        f"{OPERATION_PREFIX}{escape_path(operation.source_path)}"
        f"{SEPARATOR}{escape_path(operation.destination_path)}"
    )


def decode_operation(payload: str) -> Optional[Tuple[str, str]]:
    """
    Split an operation payload on its first unescaped separator.

    Args:
        payload: Text after the ``OPERATION:`` prefix

    Returns:
        (source, destination), or None if the payload has no separator
    """
    fields: List[str] = []
    current: List[str] = []
    chars = iter(payload)
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, "")
            current.append(_UNESCAPES.get(nxt, "\\" + nxt))
        elif ch == SEPARATOR and not fields:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)

    if not fields:
        return None
    fields.append("".join(current))
    return fields[0], fields[1]


def _session_marker(line: str) -> Optional[Tuple[str, str]]:
    if line.startswith(END_SESSION_PREFIX):
        return "end", line[len(END_SESSION_PREFIX) :]
    if line.startswith(SESSION_PREFIX):
        return "start", line[len(SESSION_PREFIX) :]
    return None


def _operation_payload(line: str) -> Optional[str]:
    for prefix in (OPERATION_PREFIX, LEGACY_OPERATION_PREFIX):
        if line.startswith(prefix):
            return line[len(prefix) :]
    return None


class OperationLog:
    """Append-only log of moves, grouped by session."""

    def __init__(self, log_path: Path):
        """
        Initialize the log.

        Args:
            log_path: Path of the log file (need not exist yet)
        """
        self.log_path = Path(log_path)

    def exists(self) -> bool:
        return self.log_path.is_file()

    def append(self, session_id: str, operations: Iterable[FileOperation]) -> None:
        """
        Append one session block to the log.

        The block is written with a single write call and fsynced. If the
        write fails partway the log may end with an unterminated block.

        Args:
            session_id: Session the operations belong to
            operations: Operations in the order they were performed

        Raises:
            LogIOError: If the log cannot be written
        """
        lines = [f"{SESSION_PREFIX}{session_id}"]
        lines.extend(encode_operation(op) for op in operations)
        lines.append(f"{END_SESSION_PREFIX}{session_id}")
        block = "\n".join(lines) + "\n"

        try:
            with self._open("a") as f:
                f.write(block)
                f.flush()
                os.fsync(f.fileno())
        except (OSError, UnicodeError) as e:
            logger.error(f"Failed to append session {session_id} to {self.log_path}: {e}")
            raise LogIOError(f"Could not write operation log {self.log_path}: {e}") from e

        logger.info(
            f"Logged {len(lines) - 2} operations for session {session_id} "
            f"to {self.log_path}"
        )

    def _open(self, mode: str, path: Optional[Path] = None) -> IO[str]:
        return open(
            path or self.log_path,
            mode,
            encoding=ENCODING,
            errors=ENCODING_ERRORS,
            newline="\n",
        )

    def _read_lines(self) -> List[str]:
        if not self.log_path.exists():
            return []
        try:
            with self._open("r") as f:
                text = f.read()
        except OSError as e:
            raise LogIOError(f"Could not read operation log {self.log_path}: {e}") from e

        # Only "\n" ends a line: str.splitlines() also breaks on "\x0c",
        # "\x85", "\u2028" and others, which are legal in file names.
        # Written paths never hold a raw "\r", so a trailing one is a CRLF.
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        return [line[:-1] if line.endswith("\r") else line for line in lines]

    def load_all(self) -> List[FileOperation]:
        """
        Load every logged operation in log order.

        Returns:
            Operations tagged with their session id; empty if no log exists

        Raises:
            LogIOError: If the log exists but cannot be read
        """
        operations: List[FileOperation] = []
        current_session = ""

        for lineno, line in enumerate(self._read_lines(), start=1):
            if not line.strip():
                continue

            marker = _session_marker(line)
            if marker:
                kind, session_id = marker
                current_session = session_id if kind == "start" else ""
                continue

            payload = _operation_payload(line)
            decoded = decode_operation(payload) if payload is not None else None
            if decoded is None:
                logger.debug(f"Skipping malformed log line {lineno}: {line!r}")
                continue

            source, destination = decoded
            operations.append(
                FileOperation(
                    source_path=source,
                    destination_path=destination,
                    session_id=current_session,
                )
            )

        return operations

    def sessions(self) -> List[SessionSummary]:
        """
        Summarize the session blocks in log order.

        Blocks that share an id are reported once with their counts added.
        """
        summaries: Dict[str, SessionSummary] = {}
        current: Optional[SessionSummary] = None

        for line in self._read_lines():
            marker = _session_marker(line)
            if marker:
                kind, session_id = marker
                if kind == "start":
                    if current is not None:
                        current.complete = False
                    current = summaries.setdefault(
                        session_id, SessionSummary(session_id=session_id)
                    )
                    current.complete = False
                elif current is not None and current.session_id == session_id:
                    current.complete = True
                    current = None
                continue

            payload = _operation_payload(line)
            if current is not None and payload is not None and decode_operation(payload):
                current.operation_count += 1

        return list(summaries.values())

    def latest_session_id(self) -> Optional[str]:
        """Id of the last session block in the log, if any."""
        latest = None
        for line in self._read_lines():
            marker = _session_marker(line)
            if marker and marker[0] == "start":
                latest = marker[1]
        return latest

    def remove_session(self, session_id: str) -> int:
        """
        Rewrite the log without the given session's block(s).

        The new log is written next to the old one and moved into place with
        an atomic replace, so either the old or the new log survives a crash.

        Args:
            session_id: Session to drop

        Returns:
            Number of operation lines removed

        Raises:
            LogIOError: If the log cannot be read or rewritten
        """
        lines = self._read_lines()
        if not lines:
            return 0

        kept: List[str] = []
        removed = 0
        skipping = False

        for line in lines:
            marker = _session_marker(line)
            if marker:
                kind, marker_id = marker
                if kind == "start":
                    # An unterminated block ends at the next start marker
                    skipping = marker_id == session_id
                    if skipping:
                        continue
                elif skipping and marker_id == session_id:
                    skipping = False
                    continue
            elif skipping:
                if _operation_payload(line) is not None:
                    removed += 1
                continue
            kept.append(line)

        if len(kept) == len(lines):
            logger.debug(f"Session {session_id} not found in {self.log_path}")
            return 0

        temp_path = self.log_path.with_name(self.log_path.name + ".tmp")
        try:
            if not any(line.strip() for line in kept):
                self.log_path.unlink()
                logger.info(f"Removed session {session_id}; log is now empty")
                return removed

            with self._open("w", temp_path) as f:
                f.write("\n".join(kept) + "\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, self.log_path)
        except (OSError, UnicodeError) as e:
            logger.error(f"Failed to rewrite {self.log_path}: {e}")
            raise LogIOError(f"Could not rewrite operation log {self.log_path}: {e}") from e
        finally:
            if temp_path.exists():
                temp_path.unlink()

        logger.info(f"Removed session {session_id} ({removed} operations) from log")
        return removed
