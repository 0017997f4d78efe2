"""
Configuration data models for webdeploy.

These models define the structure of .webdeploy.json and
~/.config/webdeploy/config.json files, with validation and type safety
via Pydantic.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BuildConfig(BaseModel):
    """
    How the web artifact is built.

    The build runs ``command`` inside ``crate_dir`` followed by
    ``--features <comma-joined features>``.
    """
    command: list[str] = Field(
        default_factory=lambda: [
            "wasm-pack",
            "build",
            "--release",
            "--target",
            "web",
            "--",
            "--no-default-features",
        ],
        min_length=1,
        description="Build command, without the feature flags"
    )
    crate_dir: Path = Field(
        default=Path("game"),
        description="Crate directory, relative to the project root"
    )
    output_dir: str = Field(
        default="pkg",
        description="Artifact directory, relative to crate_dir"
    )
    features: list[str] = Field(
        default_factory=lambda: ["wasm", "wasm_s3"],
        description="Cargo features enabled for every channel"
    )
    demo_features: list[str] = Field(
        default_factory=lambda: ["map_gui/viewer", "importer"],
        description="Additional viewer/import features enabled for the demo channel"
    )


class UploadConfig(BaseModel):
    """
    Where the artifact is published.

    The artifact directory is synced to ``s3://<bucket>/<prefix>`` and
    served from the bucket's static website endpoint.
    """
    bucket: str = Field(
        default="abstreet",
        min_length=1,
        description="Destination bucket name"
    )
    region: str = Field(
        default="us-east-2",
        min_length=1,
        description="Bucket region, used to build the website URL"
    )
    command: list[str] = Field(
        default_factory=lambda: ["aws", "s3", "sync"],
        min_length=1,
        description="Sync command, followed by source and destination"
    )

    @field_validator("bucket")
    @classmethod
    def no_slashes(cls, v: str) -> str:
        """Bucket names are a single path segment."""
        if "/" in v:
            raise ValueError(f"must not contain '/': {v!r}")
        return v


class DemoConfig(BaseModel):
    """Settings that only apply to the demo channel."""
    data_source: Optional[Path] = Field(
        default=None,
        description="Directory the demo's system link points at (temporary imported data)"
    )


class VcsConfig(BaseModel):
    """Version-control command used to restore the data link."""
    restore_command: list[str] = Field(
        default_factory=lambda: ["git", "checkout", "--"],
        min_length=1,
        description="Command prefix that discards local changes to one path"
    )


class DeployConfig(BaseModel):
    """
    Top-level webdeploy configuration.

    Loaded from defaults < user config < project config < env vars.
    """
    model_config = ConfigDict(extra="ignore")

    build: BuildConfig = Field(default_factory=BuildConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    demo: DemoConfig = Field(default_factory=DemoConfig)
    vcs: VcsConfig = Field(default_factory=VcsConfig)
    default_version: str = Field(
        default="dev",
        min_length=1,
        description="Upload prefix used by the dev channel when no version is given"
    )
