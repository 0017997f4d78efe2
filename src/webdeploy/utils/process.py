"""
Subprocess execution for external release tools.

Tool output is streamed straight to the terminal rather than captured, so
the build, sync and git diagnostics reach the user unchanged.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path

from rich.console import Console

logger = logging.getLogger(__name__)

# Exit code reported when the executable is not on PATH (shell convention)
COMMAND_NOT_FOUND = 127


def format_command(args: list[str]) -> str:
    """Render an argument list as a copy-pasteable shell command."""
    return shlex.join(args)


class CommandRunner:
    """
    Run external commands and report their exit codes.

    In dry-run mode commands are printed and recorded instead of executed,
    and every command reports success.

    Example:
        >>> runner = CommandRunner(dry_run=True)
        >>> runner.run(["aws", "s3", "sync", ".", "s3://bucket/dev"])
        0
        >>> runner.history[0].args[0]
        'aws'
    """

    def __init__(self, *, dry_run: bool = False, console: Console | None = None) -> None:
        self.dry_run = dry_run
        self.console = console or Console()
        self.history: list[subprocess.CompletedProcess[bytes]] = []

    def run(self, args: list[str], *, cwd: Path | None = None) -> int:
        """
        Run a command to completion.

        Args:
            args: Command and arguments
            cwd: Working directory for the command

        Returns:
            The command's exit code, or 127 if the executable was not found
        """
        display = format_command(args)
        if self.dry_run:
            location = f" (in {cwd})" if cwd else ""
            self.console.print(f"[dim]Would run:[/dim] {display}{location}")
            self.history.append(subprocess.CompletedProcess(args, 0))
            return 0

        logger.debug(f"Running: {display} (cwd={cwd})")
        try:
            result = subprocess.run(args, cwd=cwd, check=False)
        except FileNotFoundError:
            logger.error(f"Command not found: {args[0]}")
            self.history.append(subprocess.CompletedProcess(args, COMMAND_NOT_FOUND))
            return COMMAND_NOT_FOUND

        self.history.append(result)
        if result.returncode != 0:
            logger.warning(f"Command exited with code {result.returncode}: {display}")
        return result.returncode
