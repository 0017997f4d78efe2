"""
webdeploy CLI - Main application entry point.

This module sets up the Typer CLI application with one command per
release channel.
"""

import typer
from rich.console import Console

from webdeploy import __version__
from webdeploy.cli import publish

# Create the main Typer app
app = typer.Typer(
    name="webdeploy",
    help="Build the web artifact and publish it to the object store",
    no_args_is_help=True,
    add_completion=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"webdeploy version {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show webdeploy version and exit",
    ),
) -> None:
    """
    webdeploy - Web release publisher.

    Builds the WebAssembly artifact, adjusts the system data link for the
    channel, syncs the artifact directory to the bucket and restores the
    data link from git.

    Channels:
        webdeploy demo               # Viewer/import build, data linked in
        webdeploy dev [VERSION]      # Plain build, data uploaded separately

    Configuration:
        .webdeploy.json              # Project settings
        ~/.config/webdeploy/         # User settings and .env
        WEBDEPLOY_BUCKET, ...        # Environment overrides
    """


app.command(name="demo")(publish.demo)
app.command(name="dev")(publish.dev)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
