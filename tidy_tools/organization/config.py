"""Organizer configuration."""

import json
import logging
from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field

from .strategy import CategoryStrategy
from ..shared.file_utils import DEFAULT_MAX_ATTEMPTS

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILENAME = ".file_organizer_log.txt"


class OrganizerConfig(BaseModel):
    """Static configuration injected into the organizer and undo engines."""

    strategy: CategoryStrategy = Field(
        default_factory=CategoryStrategy,
        description="Extension to category mapping",
    )
    log_filename: str = Field(
        default=DEFAULT_LOG_FILENAME,
        min_length=1,
        description="Name of the per-directory operation log",
    )
    max_unique_attempts: int = Field(
        default=DEFAULT_MAX_ATTEMPTS,
        ge=1,
        description="Highest numeric suffix tried when a target name is taken",
    )
    undo_latest_only: bool = Field(
        default=False,
        description="Undo only the latest session when no session id is given",
    )

    def log_path(self, directory: Union[str, Path]) -> Path:
        return Path(directory) / self.log_filename

    def save(self, path: Path) -> None:
        """
        Save configuration to a JSON file.

        Args:
            path: Path to write
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)

        logger.info(f"Saved configuration to {path}")

    @classmethod
    def load(cls, path: Path) -> "OrganizerConfig":
        """
        Load configuration from a JSON file.

        Args:
            path: Path to configuration file

        Returns:
            Validated configuration
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        return cls.model_validate(data)
