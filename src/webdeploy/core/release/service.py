"""
Release publisher.

Runs one release of the web artifact:
- Build the artifact with the channel's feature set
- Replace (demo) or drop (dev) the ``system`` data link
- Sync the artifact directory to the bucket
- Restore the data link from version control
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console

from webdeploy.core.config.models import DeployConfig
from webdeploy.core.release.collaborators import BuildTool, ObjectStoreSync, VersionControl
from webdeploy.core.release.errors import PublishError
from webdeploy.core.release.links import swapped_data_link
from webdeploy.core.release.models import PublishResult, PublishStage, ReleaseConfig
from webdeploy.utils.process import CommandRunner

logger = logging.getLogger(__name__)


class ReleasePublisher:
    """
    Publishes a release of the web artifact to the object store.

    The publisher walks ``INIT -> BUILT -> LINK_ADJUSTED -> UPLOADED ->
    RESTORED -> DONE``. Any failure ends the run in ``FAILED``; once the data
    link has been touched it is restored first, whichever step failed.

    Example:
        >>> publisher = ReleasePublisher.from_config(load_config(), Path.cwd())
        >>> release = ReleaseConfig.from_deploy_config(
        ...     Channel.DEV, load_config(), Path.cwd(), version="v2"
        ... )
        >>> publisher.publish(release).url
        'http://abstreet.s3-website.us-east-2.amazonaws.com/v2'
    """

    def __init__(
        self,
        builder: BuildTool,
        uploader: ObjectStoreSync,
        vcs: VersionControl,
        *,
        dry_run: bool = False,
    ) -> None:
        self.builder = builder
        self.uploader = uploader
        self.vcs = vcs
        self.dry_run = dry_run
        self.stages: list[PublishStage] = []

    @classmethod
    def from_config(
        cls,
        config: DeployConfig,
        project_root: Path,
        *,
        dry_run: bool = False,
        console: Console | None = None,
    ) -> ReleasePublisher:
        """Create a publisher whose collaborators share one command runner."""
        runner = CommandRunner(dry_run=dry_run, console=console)
        return cls(
            BuildTool(config.build, project_root, runner),
            ObjectStoreSync(config.upload, runner),
            VersionControl(config.vcs, runner),
            dry_run=dry_run,
        )

    def _advance(self, stage: PublishStage) -> None:
        logger.debug(f"Publish stage: {stage.value}")
        self.stages.append(stage)

    def _restore(self, link: Path) -> None:
        self.vcs.restore(link)
        self._advance(PublishStage.RESTORED)

    def publish(self, release: ReleaseConfig) -> PublishResult:
        """
        Publish one release.

        Args:
            release: Validated release configuration

        Returns:
            PublishResult with the destination and website URL

        Raises:
            BuildError: If the build fails (nothing else runs)
            LinkError: If the data link cannot be adjusted (no upload)
            UploadError: If the sync fails (the link is still restored)
            RestoreError: If the link cannot be restored after a successful upload
        """
        self.stages = []
        self._advance(PublishStage.INIT)
        logger.info(f"Publishing {release.channel.value} release to {release.destination}")

        try:
            build = self.builder.build(release.channel, release.artifact_dir)
            self._advance(PublishStage.BUILT)

            with swapped_data_link(
                release.data_link_path,
                release.link_target,
                self._restore,
                dry_run=self.dry_run,
            ):
                self._advance(PublishStage.LINK_ADJUSTED)
                self.uploader.sync(build, release.destination)
                self._advance(PublishStage.UPLOADED)
        except PublishError as e:
            self._advance(PublishStage.FAILED)
            e.stages = list(self.stages)
            logger.error(f"Publishing {release.channel.value} release failed: {e}")
            raise

        self._advance(PublishStage.DONE)
        logger.info(f"Published {release.channel.value} release at {release.website_url}")

        return PublishResult(
            channel=release.channel,
            prefix=release.upload_prefix,
            destination=release.destination,
            url=release.website_url,
            artifact_dir=release.artifact_dir,
            stages=list(self.stages),
        )
