"""
Errors raised while publishing a release.

Every failure is fatal; nothing here is retried. Errors that come from an
external tool carry the tool's exit code so the CLI can propagate it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from webdeploy.core.release.models import PublishStage


class PublishError(Exception):
    """Base class for release publishing failures."""

    def __init__(self, message: str, *, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode
        # Filled in by the publisher before the error leaves publish()
        self.stages: list[PublishStage] = []

    @property
    def exit_code(self) -> int:
        """Process exit code to report for this error."""
        if self.returncode is None or self.returncode == 0:
            return 1
        if self.returncode < 0:
            # Killed by a signal; report it the way a shell does
            return 128 - self.returncode
        return self.returncode


class ConfigurationError(PublishError):
    """The release configuration is invalid for the requested channel."""

    pass


class BuildError(PublishError):
    """The build tool failed or produced no artifact directory."""

    pass


class LinkError(PublishError):
    """The data link inside the artifact directory could not be adjusted."""

    pass


class RemovalError(LinkError):
    """The existing data link exists but could not be removed."""

    pass


class CreationError(LinkError):
    """The replacement data link could not be created."""

    pass


class UploadError(PublishError):
    """The object-store sync failed."""

    pass


class RestoreError(PublishError):
    """The data link could not be restored from version control."""

    pass
