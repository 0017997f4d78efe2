"""
Wrappers around the external tools a release depends on.

Each wrapper turns configuration into a command line, runs it through a
CommandRunner and converts a non-zero exit into the matching PublishError.
"""

from __future__ import annotations

import logging
from pathlib import Path

from webdeploy.core.config.models import BuildConfig, UploadConfig, VcsConfig
from webdeploy.core.release.errors import BuildError, RestoreError, UploadError
from webdeploy.core.release.models import BuildResult, Channel
from webdeploy.utils.git import restore_path
from webdeploy.utils.process import CommandRunner

logger = logging.getLogger(__name__)


class BuildTool:
    """
    Builds the web artifact with wasm-pack (or the configured command).

    Example:
        >>> tool = BuildTool(BuildConfig(), Path("/repo"), CommandRunner(dry_run=True))
        >>> tool.command(["wasm", "wasm_s3"])[-2:]
        ['--features', 'wasm,wasm_s3']
    """

    def __init__(self, config: BuildConfig, project_root: Path, runner: CommandRunner) -> None:
        self.config = config
        self.crate_dir = project_root / config.crate_dir
        self.runner = runner

    def command(self, features: list[str]) -> list[str]:
        """Full build command line for a feature set."""
        args = list(self.config.command)
        if features:
            args += ["--features", ",".join(features)]
        return args

    def build(self, channel: Channel, artifact_dir: Path) -> BuildResult:
        """
        Build the artifact for a channel.

        Args:
            channel: Channel whose feature set to build with
            artifact_dir: Directory the build is expected to populate

        Returns:
            BuildResult for the populated artifact directory

        Raises:
            BuildError: If the crate directory is missing, the build exits
                non-zero, or no artifact directory was produced
        """
        if not self.crate_dir.is_dir():
            raise BuildError(f"Crate directory not found: {self.crate_dir}")

        features = channel.build_features(self.config)
        logger.info(f"Building {channel.value} artifact with features {features}")

        returncode = self.runner.run(self.command(features), cwd=self.crate_dir)
        if returncode != 0:
            raise BuildError(f"Build failed with exit code {returncode}", returncode=returncode)

        if not self.runner.dry_run and not artifact_dir.is_dir():
            raise BuildError(f"Build finished but {artifact_dir} does not exist")

        return BuildResult(artifact_dir=artifact_dir, features=features)


class ObjectStoreSync:
    """Synchronises a local directory to an object-store prefix (``aws s3 sync``)."""

    def __init__(self, config: UploadConfig, runner: CommandRunner) -> None:
        self.config = config
        self.runner = runner

    def command(self, destination: str) -> list[str]:
        return [*self.config.command, ".", destination]

    def sync(self, build: BuildResult, destination: str) -> None:
        """
        Recursively sync the artifact directory to ``destination``.

        Raises:
            UploadError: If the sync command exits non-zero
        """
        logger.info(f"Uploading {build.artifact_dir} to {destination}")
        returncode = self.runner.run(self.command(destination), cwd=build.artifact_dir)
        if returncode != 0:
            raise UploadError(
                f"Upload to {destination} failed with exit code {returncode}",
                returncode=returncode,
            )


class VersionControl:
    """Discards local changes to a path with git."""

    def __init__(self, config: VcsConfig, runner: CommandRunner) -> None:
        self.config = config
        self.runner = runner

    def restore(self, path: Path) -> None:
        """
        Restore ``path`` to its last committed state.

        Raises:
            RestoreError: If the checkout exits non-zero
        """
        returncode = restore_path(path, runner=self.runner, command=self.config.restore_command)
        if returncode != 0:
            raise RestoreError(
                f"Could not restore {path} from version control (exit code {returncode})",
                returncode=returncode,
            )
        logger.info(f"Restored {path} from version control")
