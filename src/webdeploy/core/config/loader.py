"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import DeployConfig

logger = logging.getLogger(__name__)

# Global cache to avoid reloading config multiple times per invocation
_config_cache: DeployConfig | None = None

PROJECT_CONFIG_NAME = ".webdeploy.json"


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """
    Get path to user configuration file.

    Returns:
        Path to ~/.config/webdeploy/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / "webdeploy" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Project root (defaults to current directory)

    Returns:
        Path to .webdeploy.json in the project root
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / PROJECT_CONFIG_NAME


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`.
    Nested dicts are merged, not replaced; lists are replaced.

    Example:
        >>> base = {"a": 1, "b": {"x": 10, "y": 20}}
        >>> override = {"b": {"y": 30, "z": 40}, "c": 3}
        >>> deep_merge(base, override)
        {'a': 1, 'b': {'x': 10, 'y': 30, 'z': 40}, 'c': 3}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            logger.warning(f"Ignoring config at {path}: top level is not an object")
            return None
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to parse config at {path}: {e}")
        return None


def _set_nested(config_dict: dict[str, Any], section: str, key: str, value: Any) -> None:
    section_dict = config_dict.get(section)
    if not isinstance(section_dict, dict):
        section_dict = {}
    config_dict[section] = {**section_dict, key: value}


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Env vars have the highest precedence and override all config files.

    Supported env vars:
        WEBDEPLOY_BUCKET - overrides upload.bucket
        WEBDEPLOY_REGION - overrides upload.region
        WEBDEPLOY_DEMO_DATA_SOURCE - overrides demo.data_source
        WEBDEPLOY_DEFAULT_VERSION - overrides default_version

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if bucket := os.environ.get("WEBDEPLOY_BUCKET"):
        _set_nested(result, "upload", "bucket", bucket)

    if region := os.environ.get("WEBDEPLOY_REGION"):
        _set_nested(result, "upload", "region", region)

    if data_source := os.environ.get("WEBDEPLOY_DEMO_DATA_SOURCE"):
        _set_nested(result, "demo", "data_source", data_source)

    if version := os.environ.get("WEBDEPLOY_DEFAULT_VERSION"):
        result["default_version"] = version

    return result


def get_default_config() -> dict[str, Any]:
    """
    Get hardcoded default configuration.

    Section defaults live on the Pydantic models; this only seeds the
    top-level keys so the merge has something to merge into.
    """
    return {"build": {}, "upload": {}, "demo": {}, "vcs": {}}


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> DeployConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (WEBDEPLOY_*)
        2. Project config (.webdeploy.json)
        3. User config (~/.config/webdeploy/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Project root to load .webdeploy.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load

    Returns:
        Validated DeployConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation

    Example:
        >>> config = load_config()
        >>> config.upload.bucket
        'abstreet'
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)

    config = DeployConfig(**merged)

    _config_cache = config

    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
