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

from .models import FetcherConfig

logger = logging.getLogger(__name__)

# Global cache to avoid reloading config multiple times per session
_config_cache: FetcherConfig | None = None

_TRUE_VALUES = ("1", "true", "yes", "on")


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
    """Path to ~/.config/cookfetch/config.json (or XDG equivalent)."""
    return get_xdg_config_home() / "cookfetch" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Project directory (defaults to current directory)

    Returns:
        Path to .cookfetch.json in the project root
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".cookfetch.json"


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
            logger.warning("Ignoring config at %s: top level is not an object", path)
            return None
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in _TRUE_VALUES


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        COOKFETCH_URL - overrides url
        COOKFETCH_DISABLE - overrides disable
        COOKFETCH_VERIFY_TLS - overrides verify_tls

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if (url := os.environ.get("COOKFETCH_URL")) is not None:
        result["url"] = url

    if (disable := os.environ.get("COOKFETCH_DISABLE")) is not None:
        result["disable"] = _parse_bool(disable)

    if (verify := os.environ.get("COOKFETCH_VERIFY_TLS")) is not None:
        result["verify_tls"] = _parse_bool(verify)

    return result


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> FetcherConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (COOKFETCH_*)
        2. Project config (.cookfetch.json)
        3. User config (~/.config/cookfetch/config.json)
        4. Model defaults

    Args:
        project_dir: Project directory to load .cookfetch.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load

    Returns:
        Validated FetcherConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged: dict[str, Any] = {}

    if user_config := load_json_file(get_user_config_path()):
        merged.update(user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged.update(project_config)

    merged = apply_env_overrides(merged)

    config = FetcherConfig(**merged)
    _config_cache = config
    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
