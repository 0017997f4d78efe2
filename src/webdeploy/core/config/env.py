"""Environment loading helpers.

The aws CLI and the config loader read credentials (AWS_PROFILE,
AWS_ACCESS_KEY_ID, ...) and WEBDEPLOY_* overrides from the environment.
Those can also live in .env files next to the project or in the user's
config directory.

Precedence:
  os.environ > project .env.local > project .env > user .env
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def default_env_paths(project_dir: Path) -> list[Path]:
    """Project and user .env files, highest precedence first."""
    xdg_home = Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))
    return [
        project_dir / ".env.local",
        project_dir / ".env",
        xdg_home / "webdeploy" / ".env",
    ]


def load_layered_env(
    *,
    project_dir: Path | None = None,
    env_paths: Iterable[Path] | None = None,
) -> list[Path]:
    """Load .env files without overriding variables that are already set.

    Files are loaded highest precedence first with ``override=False``, so a
    variable keeps the value from the first place that defines it, and the
    process environment always wins.

    Args:
        project_dir: base directory for project env paths (defaults to cwd)
        env_paths: explicit env file paths, highest precedence first

    Returns:
        The env files that existed and were loaded
    """
    if env_paths is None:
        env_paths = default_env_paths(project_dir or Path.cwd())

    loaded = []
    for path in map(Path, env_paths):
        if path.is_file():
            load_dotenv(path, override=False)
            logger.debug(f"Loaded environment from {path}")
            loaded.append(path)
    return loaded
