"""
Data link handling for the artifact directory.

The artifact directory holds a ``system`` symlink to the large map data
directory. Each channel replaces or drops that link before uploading, and
the committed link is put back afterwards on every exit path.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

from webdeploy.core.release.errors import CreationError, RemovalError, RestoreError

logger = logging.getLogger(__name__)


def remove_data_link(link: Path) -> bool:
    """
    Remove the data link if it exists.

    Args:
        link: Path of the link inside the artifact directory

    Returns:
        True if an entry was removed, False if there was nothing to remove

    Raises:
        RemovalError: If the entry exists but cannot be removed (for example
            a real directory in place of the link)
    """
    try:
        link.unlink()
    except FileNotFoundError:
        logger.debug(f"No {link.name} entry in {link.parent}, nothing to remove")
        return False
    except OSError as e:
        raise RemovalError(f"Could not remove {link}: {e.strerror or e}") from e

    logger.info(f"Removed {link}")
    return True


def create_data_link(link: Path, target: Path) -> None:
    """
    Point the data link at a data directory.

    The target is stored as given, so relative targets resolve from the
    artifact directory.

    Raises:
        CreationError: If the symlink cannot be created
    """
    try:
        link.symlink_to(target, target_is_directory=True)
    except OSError as e:
        raise CreationError(f"Could not link {link} -> {target}: {e.strerror or e}") from e

    logger.info(f"Linked {link} -> {target}")


@contextmanager
def swapped_data_link(
    link: Path,
    target: Path | None,
    restore: Callable[[Path], None],
    *,
    dry_run: bool = False,
) -> Iterator[Path]:
    """
    Replace (or drop) the data link for the duration of the block.

    Once the existing link has been removed, ``restore`` runs on every exit
    path: after a failed link creation, after an error inside the block,
    and after the block completes. If the existing link could not be
    removed nothing was changed and nothing is restored.

    When an error is already propagating, a failing restore is logged and
    the original error wins.

    Args:
        link: Path of the link inside the artifact directory
        target: Directory to link to, or None to leave the link out
        restore: Callback that restores ``link`` from version control,
            raising RestoreError on failure
        dry_run: Report the changes without touching the filesystem

    Yields:
        The link path
    """
    if dry_run:
        logger.info(f"Dry run: leaving {link} in place")
    else:
        remove_data_link(link)

    try:
        if target is not None and not dry_run:
            create_data_link(link, target)
        yield link
    except BaseException:
        try:
            restore(link)
        except RestoreError as restore_error:
            logger.error(f"Failed to restore {link} after an earlier error: {restore_error}")
        raise
    else:
        restore(link)
