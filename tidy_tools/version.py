"""Version information for tidy-tools."""

import subprocess
from pathlib import Path
from typing import Optional

__version__ = "1.0.0"

# Source checkout root; an installed package has no .git above it
SOURCE_ROOT = Path(__file__).resolve().parent.parent


def get_git_hash(source_root: Optional[Path] = None) -> Optional[str]:
    """Short commit hash of a source checkout.

    Args:
        source_root: Checkout to ask (defaults to the one holding this package)

    Returns:
        7-character hash, or None when git or the checkout is unavailable
    """
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short=7", "HEAD"],
            cwd=source_root or SOURCE_ROOT,
            capture_output=True,
            text=True,
            check=True,
            timeout=2,
        )
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError):
        return None
    return result.stdout.strip() or None


def get_version_string() -> str:
    """Version shown by ``--version`` and the interactive banner.

    Returns:
        "1.0.0", or "1.0.0 (git:abc1234)" when run from a checkout
    """
    git_hash = get_git_hash()
    if git_hash:
        return f"{__version__} (git:{git_hash})"
    return __version__
