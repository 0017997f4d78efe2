"""
webdeploy - Web release publisher

A CLI tool that builds the web (WebAssembly) artifact and publishes it to
an object-storage bucket for the demo and dev channels.
"""

__version__ = "0.4.0"

# Re-export core models for convenience
from webdeploy.core.config.models import DeployConfig
from webdeploy.core.release.models import Channel, PublishResult, ReleaseConfig

__all__ = ["Channel", "DeployConfig", "PublishResult", "ReleaseConfig", "__version__"]
