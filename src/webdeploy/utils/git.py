"""
Git utilities for webdeploy.

Provides the version-control operations a release needs: discarding local
changes to a single path and reading the current commit for log output.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from webdeploy.utils.process import CommandRunner

logger = logging.getLogger(__name__)


def restore_path(
    path: Path,
    *,
    runner: CommandRunner | None = None,
    command: list[str] | None = None,
) -> int:
    """Restore a path in the working tree to its last committed state.

    Runs ``git checkout -- <name>`` from the path's parent directory, so the
    path may live in any subdirectory of the repository.

    Args:
        path: Working tree path to restore
        runner: Command runner to use (defaults to a live runner)
        command: Checkout command prefix (defaults to ``["git", "checkout", "--"]``)

    Returns:
        Exit code of the git invocation
    """
    runner = runner or CommandRunner()
    args = [*(command or ["git", "checkout", "--"]), path.name]
    logger.debug(f"Restoring {path} from the last commit")
    return runner.run(args, cwd=path.parent)


def get_current_commit(cwd: Path | None = None) -> str | None:
    """Get the current HEAD commit hash.

    Returns:
        Full commit hash or None if not in a git repo
    """
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True,
            text=True,
            check=True,
            cwd=cwd,
        )
        return result.stdout.strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None
