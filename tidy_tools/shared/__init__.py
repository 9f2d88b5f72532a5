"""
Shared utilities for tidy-tools.
"""

from .file_utils import (
    DEFAULT_MAX_ATTEMPTS,
    format_bytes,
    get_extension,
    make_unique_path,
    setup_logging,
)

__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "format_bytes",
    "get_extension",
    "make_unique_path",
    "setup_logging",
]
