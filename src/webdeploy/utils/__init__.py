"""Utility modules for webdeploy."""

from .git import get_current_commit, restore_path
from .process import CommandRunner, format_command
from .project import find_project_root

__all__ = [
    "CommandRunner",
    "find_project_root",
    "format_command",
    "get_current_commit",
    "restore_path",
]
