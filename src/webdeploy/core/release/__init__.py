"""
Release publishing for the web artifact.

Provides high-level operations for publishing a release, which includes:
- Building the artifact with the channel's feature set
- Adjusting the ``system`` data link for the channel
- Syncing the artifact directory to the object store
- Restoring the data link from version control
"""

from webdeploy.core.release.errors import (
    BuildError,
    ConfigurationError,
    CreationError,
    LinkError,
    PublishError,
    RemovalError,
    RestoreError,
    UploadError,
)
from webdeploy.core.release.models import (
    DATA_LINK_NAME,
    DEMO_PREFIX,
    BuildResult,
    Channel,
    PublishResult,
    PublishStage,
    ReleaseConfig,
)
from webdeploy.core.release.service import ReleasePublisher

__all__ = [
    "DATA_LINK_NAME",
    "DEMO_PREFIX",
    "BuildError",
    "BuildResult",
    "Channel",
    "ConfigurationError",
    "CreationError",
    "LinkError",
    "PublishError",
    "PublishResult",
    "PublishStage",
    "ReleaseConfig",
    "ReleasePublisher",
    "RemovalError",
    "RestoreError",
    "UploadError",
]
