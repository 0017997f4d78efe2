"""
Standardized error handling and exit codes for the webdeploy CLI.

This module provides consistent error messaging with actionable guidance
and standardized exit codes across the channel commands.
"""

from enum import IntEnum

from rich.console import Console
from rich.markup import escape

from webdeploy.core.config.models import DeployConfig
from webdeploy.core.release.errors import (
    BuildError,
    ConfigurationError,
    CreationError,
    PublishError,
    RemovalError,
    RestoreError,
    UploadError,
)

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Standard exit codes for webdeploy operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Generic error, including data link failures."""

    USER_ERROR = 2
    """User configuration or input error (actionable by user)."""

    COMMAND_NOT_FOUND = 127
    """A required external tool is not on PATH - shell convention."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
    doc_url: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it
        doc_url: Optional documentation URL for more help

    Example:
        >>> print_error(
        ...     "Upload failed",
        ...     reason="aws exited with code 1",
        ...     solution="aws sts get-caller-identity  # check your credentials",
        ... )
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")

    if doc_url:
        console.print(f"[dim]Docs: {doc_url}[/dim]")


def print_not_git_repo_error() -> None:
    """Print error when not inside a git checkout."""
    print_error(
        "Not in a project directory",
        reason="Could not find .webdeploy.json or .git/ in this or any parent directory",
        solution="cd to the repository root  # the data link is restored with git",
    )


def print_missing_dependency_error(
    tool: str, install_url: str | None = None, install_cmd: str | None = None
) -> None:
    """Print error when a required tool is not installed."""
    print_error(
        f"Required tool not found: {tool}",
        reason=f"The '{tool}' command is required but not in PATH",
        solution=install_cmd,
        doc_url=install_url,
    )


def print_invalid_config_error(detail: str) -> None:
    """Print error when the configuration files do not validate."""
    print_error(
        "Invalid webdeploy configuration",
        reason=escape(detail),
        solution="Check .webdeploy.json and ~/.config/webdeploy/config.json",
    )


def print_publish_error(error: PublishError, config: DeployConfig) -> None:
    """
    Print a publish failure with guidance for the step that failed.

    The failing tool has already written its own diagnostics to the
    terminal; this adds a one-line summary and a next step.
    """
    message = escape(str(error))
    if error.returncode == ExitCode.COMMAND_NOT_FOUND:
        tool = _tool_for(error, config)
        if tool is not None:
            print_missing_dependency_error(tool, install_url=_INSTALL_URLS.get(tool))
            return

    if isinstance(error, ConfigurationError):
        print_error(
            message,
            solution="webdeploy demo --data-source PATH  # or webdeploy dev VERSION",
        )
    elif isinstance(error, BuildError):
        print_error(message, reason="Nothing was uploaded and the data link was not touched")
    elif isinstance(error, RemovalError):
        print_error(
            message,
            reason="The build output was not uploaded",
            solution="Check that the data link is a symlink, not a copied directory",
        )
    elif isinstance(error, CreationError):
        print_error(
            message,
            reason="The build output was not uploaded; the data link has been restored",
        )
    elif isinstance(error, UploadError):
        print_error(
            message,
            reason="The data link has been restored",
            solution="aws sts get-caller-identity  # check your AWS credentials",
        )
    elif isinstance(error, RestoreError):
        print_error(
            message,
            reason="The data link in the artifact directory may still be modified",
            solution="git status  # and restore it by hand",
        )
    else:
        print_error(message)


_INSTALL_URLS = {
    "wasm-pack": "https://rustwasm.github.io/wasm-pack/installer/",
    "aws": "https://docs.aws.amazon.com/cli/latest/userguide/getting-started-install.html",
    "git": "https://git-scm.com/downloads",
}


def _tool_for(error: PublishError, config: DeployConfig) -> str | None:
    if isinstance(error, BuildError):
        return config.build.command[0]
    if isinstance(error, UploadError):
        return config.upload.command[0]
    if isinstance(error, RestoreError):
        return config.vcs.restore_command[0]
    return None


__all__ = [
    "ExitCode",
    "print_error",
    "print_invalid_config_error",
    "print_missing_dependency_error",
    "print_not_git_repo_error",
    "print_publish_error",
]
