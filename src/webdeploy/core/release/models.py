"""
Data models for release publishing.

Defines the release channels, the per-invocation release configuration,
and the results handed between publishing steps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from webdeploy.core.config.models import BuildConfig, DeployConfig
from webdeploy.core.release.errors import ConfigurationError

# Name of the symlink to the large map data directory inside the artifact
DATA_LINK_NAME = "system"

# Upload prefix of the demo channel
DEMO_PREFIX = "demo"


class Channel(str, Enum):
    """
    Target deployment variant.

    Channel-specific behaviour is dispatched over every member explicitly,
    so adding a channel fails loudly until each method handles it.
    """

    DEMO = "demo"
    DEV = "dev"

    def build_features(self, build: BuildConfig) -> list[str]:
        """Features to enable when building for this channel."""
        if self is Channel.DEMO:
            return [*build.features, *build.demo_features]
        if self is Channel.DEV:
            return list(build.features)
        raise ValueError(f"Unhandled channel: {self.value}")

    def upload_prefix(self, version: str | None) -> str:
        """Prefix under the bucket that this channel publishes to."""
        if self is Channel.DEMO:
            return DEMO_PREFIX
        if self is Channel.DEV:
            if not version:
                raise ValueError("The dev channel needs a version")
            return version
        raise ValueError(f"Unhandled channel: {self.value}")

    def link_target(self, data_source: Path | None) -> Path | None:
        """What the data link should point at, or None to leave it out."""
        if self is Channel.DEMO:
            return data_source
        if self is Channel.DEV:
            # Dev data is uploaded separately by the updater tool
            return None
        raise ValueError(f"Unhandled channel: {self.value}")


class PublishStage(str, Enum):
    """Steps of a publish run, in the order they are reached."""

    INIT = "init"
    BUILT = "built"
    LINK_ADJUSTED = "link_adjusted"
    UPLOADED = "uploaded"
    RESTORED = "restored"
    DONE = "done"
    FAILED = "failed"


class ReleaseConfig(BaseModel):
    """
    Everything one publish run needs to know.

    Example:
        >>> release = ReleaseConfig(
        ...     channel=Channel.DEV,
        ...     version="v2",
        ...     artifact_dir=Path("game/pkg"),
        ...     bucket="abstreet",
        ... )
        >>> release.destination
        's3://abstreet/v2'
    """

    model_config = ConfigDict(frozen=True)

    channel: Channel
    version: str | None = Field(
        default=None,
        description="Upload prefix for the dev channel; ignored for demo",
    )
    artifact_dir: Path
    data_link_name: Literal["system"] = DATA_LINK_NAME
    data_source: Path | None = Field(
        default=None,
        description="Directory the demo data link points at",
    )
    bucket: str = Field(min_length=1)
    region: str = Field(default="us-east-2", min_length=1)

    @model_validator(mode="after")
    def check_channel_fields(self) -> ReleaseConfig:
        """Enforce the fields each channel requires."""
        if self.channel is Channel.DEV:
            if self.version is None or not self.version.strip():
                raise ValueError("version is required for the dev channel")
            if self.version != self.version.strip():
                raise ValueError("version must not have surrounding whitespace")
            if self.data_source is not None:
                raise ValueError("data_source only applies to the demo channel")
        elif self.channel is Channel.DEMO:
            if self.data_source is None:
                raise ValueError("data_source is required for the demo channel")
        return self

    @classmethod
    def from_deploy_config(
        cls,
        channel: Channel,
        config: DeployConfig,
        project_root: Path,
        *,
        version: str | None = None,
        data_source: Path | None = None,
    ) -> ReleaseConfig:
        """
        Build a release configuration from the loaded deploy configuration.

        Args:
            channel: Target channel
            config: Loaded deploy configuration
            project_root: Repository root that relative paths are resolved against
            version: Dev version (config.default_version when None)
            data_source: Demo data directory (defaults to config.demo.data_source)

        Returns:
            Validated ReleaseConfig

        Raises:
            ConfigurationError: If the channel's required fields are missing
        """
        artifact_dir = project_root / config.build.crate_dir / config.build.output_dir
        if channel is Channel.DEV:
            fields = {"version": version if version is not None else config.default_version}
        else:
            fields = {"data_source": data_source or config.demo.data_source}

        try:
            return cls(
                channel=channel,
                artifact_dir=artifact_dir,
                bucket=config.upload.bucket,
                region=config.upload.region,
                **fields,
            )
        except ValidationError as e:
            messages = "; ".join(err["msg"] for err in e.errors())
            raise ConfigurationError(f"Invalid {channel.value} release: {messages}") from e

    @property
    def upload_prefix(self) -> str:
        return self.channel.upload_prefix(self.version)

    @property
    def link_target(self) -> Path | None:
        return self.channel.link_target(self.data_source)

    @property
    def data_link_path(self) -> Path:
        return self.artifact_dir / self.data_link_name

    @property
    def destination(self) -> str:
        """Object-store URI the artifact directory is synced to."""
        return f"s3://{self.bucket}/{self.upload_prefix}"

    @property
    def website_url(self) -> str:
        """Static website URL the release is served from."""
        return f"http://{self.bucket}.s3-website.{self.region}.amazonaws.com/{self.upload_prefix}"


@dataclass
class BuildResult:
    """A populated artifact directory produced by the build tool."""

    artifact_dir: Path
    features: list[str]


@dataclass
class PublishResult:
    """Result of a successful publish run."""

    channel: Channel
    prefix: str
    destination: str
    url: str
    artifact_dir: Path
    stages: list[PublishStage] = field(default_factory=list)
