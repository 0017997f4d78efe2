"""
Project root discovery utilities for webdeploy.

This module provides functions for discovering project boundaries
by searching for marker files like .webdeploy.json or .git/.
"""

from pathlib import Path

# Markers that indicate a project root, in order of priority
PROJECT_ROOT_MARKERS = [
    ".webdeploy.json",  # Project deploy configuration
    ".git",  # Git repository
]


def find_project_root(start: Path | None = None) -> Path | None:
    """
    Find the project root directory by searching upward for marker files.

    Searches from the start directory upward through parent directories,
    looking for a .webdeploy.json file or a .git/ directory.

    Args:
        start: Directory to start searching from. Defaults to current working directory.

    Returns:
        Path to the project root directory, or None if not found.

    Example:
        >>> find_project_root()  # From /repo/game/src/
        PosixPath('/repo')
    """
    if start is None:
        start = Path.cwd()

    start = start.resolve()

    # Walk up to and including the filesystem root
    for current in [start, *start.parents]:
        for marker in PROJECT_ROOT_MARKERS:
            if (current / marker).exists():
                return current

    return None

