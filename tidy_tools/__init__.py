"""
tidy-tools: sort a directory's files into category folders, reversibly.

Every organize run is recorded in a hidden per-directory operation log so
that it can be undone later, session by session.
"""

from .version import __version__

__all__ = ["__version__"]
