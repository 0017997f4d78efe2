"""
webdeploy CLI - Channel publish commands.

Build the web artifact, adjust the data link, upload it to the bucket and
restore the data link, for the demo or dev channel.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from webdeploy.cli.errors import (
    ExitCode,
    print_invalid_config_error,
    print_not_git_repo_error,
    print_publish_error,
)
from webdeploy.core.config import load_config, load_layered_env
from webdeploy.core.release import (
    Channel,
    ConfigurationError,
    PublishError,
    PublishResult,
    ReleaseConfig,
    ReleasePublisher,
)
from webdeploy.utils.git import get_current_commit
from webdeploy.utils.project import find_project_root

console = Console()

DryRunOption = Annotated[
    bool,
    typer.Option(
        "--dry-run",
        "-n",
        help="Show what would be done without running anything",
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Enable debug output with detailed logging",
    ),
]


def configure_logging(debug: bool) -> None:
    """Send log records to stderr; verbose only when debugging."""
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def demo(
    data_source: Annotated[
        Optional[Path],
        typer.Option(
            "--data-source",
            "-d",
            help="Data directory the demo's system link points at. A relative path is "
            "resolved from the artifact directory (game/pkg), not the current directory "
            "(defaults to demo.data_source in the config)",
        ),
    ] = None,
    dry_run: DryRunOption = False,
    debug: DebugOption = False,
) -> None:
    """
    Publish the demo build.

    Builds with the extra viewer/import features, points the system link at
    the imported data, and uploads to the fixed demo prefix.

    Examples:

        webdeploy demo --data-source ../../data/tmp_import
    """
    _publish(Channel.DEMO, data_source=data_source, dry_run=dry_run, debug=debug)


def dev(
    version: Annotated[
        Optional[str],
        typer.Argument(
            help="Upload prefix for this build (defaults to default_version, 'dev')",
        ),
    ] = None,
    dry_run: DryRunOption = False,
    debug: DebugOption = False,
) -> None:
    """
    Publish the dev build.

    Leaves the system data link out of the upload (the data is published
    separately by the updater) and uploads under the version prefix.

    Examples:

        webdeploy dev

        webdeploy dev v0.2.9 --dry-run
    """
    _publish(Channel.DEV, version=version, dry_run=dry_run, debug=debug)


def _publish(
    channel: Channel,
    *,
    version: str | None = None,
    data_source: Path | None = None,
    dry_run: bool,
    debug: bool,
) -> None:
    configure_logging(debug)

    project_root = find_project_root()
    if project_root is None:
        print_not_git_repo_error()
        raise typer.Exit(ExitCode.USER_ERROR)

    # Precedence: OS env > project .env > user .env
    load_layered_env(project_dir=project_root)

    try:
        config = load_config(project_root)
    except ValidationError as e:
        print_invalid_config_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)

    try:
        release = ReleaseConfig.from_deploy_config(
            channel,
            config,
            project_root,
            version=version,
            data_source=data_source,
        )
    except ConfigurationError as e:
        print_publish_error(e, config)
        raise typer.Exit(ExitCode.USER_ERROR)

    commit = get_current_commit(project_root)
    revision = f" at {commit[:10]}" if commit else ""
    console.print(
        f"[cyan]Publishing {channel.value} build{revision} to {release.destination}...[/cyan]"
    )
    if dry_run:
        console.print("[yellow]DRY RUN - No changes will be made[/yellow]")
    console.print()

    publisher = ReleasePublisher.from_config(config, project_root, dry_run=dry_run, console=console)
    try:
        result = publisher.publish(release)
    except PublishError as e:
        print_publish_error(e, config)
        raise typer.Exit(e.exit_code)
    except KeyboardInterrupt:
        # The data link has already been restored on the way out
        console.print("[yellow]Interrupted[/yellow]")
        raise typer.Exit(ExitCode.SIGINT)

    _print_summary(result, dry_run=dry_run)


def _print_summary(result: PublishResult, *, dry_run: bool) -> None:
    mark = "[dim]○[/dim]" if dry_run else "[green]✓[/green]"
    console.print()
    console.print("[bold]Release Summary:[/bold]")
    console.print(f"  Channel: {result.channel.value}")
    console.print(f"  {mark} Uploaded {result.artifact_dir} to {result.destination}")
    console.print(f"  {mark} Restored data link")
    console.print()
    if dry_run:
        console.print("[dim]Dry run complete - no changes made[/dim]")
    console.print(
        f"Have the appropriate amount of fun: {result.url}",
        soft_wrap=True,
        highlight=False,
    )


def _standalone(command: Callable[..., None], name: str) -> typer.Typer:
    app = typer.Typer(name=name, add_completion=False)
    app.command()(command)
    return app


def demo_main() -> None:
    """Entry point for the ``webdeploy-demo`` script."""
    _standalone(demo, "webdeploy-demo")()


def dev_main() -> None:
    """Entry point for the ``webdeploy-dev`` script."""
    _standalone(dev, "webdeploy-dev")()
