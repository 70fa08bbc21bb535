"""
.env support for COOKFETCH_* settings.

Two files are read, later ones taking precedence over earlier ones:

- ~/.config/cookfetch/.env (or the XDG equivalent)
- <project>/.env

Only COOKFETCH_* keys are picked up, so a project .env written for other
tools does not leak into the process. A value from a .env file never
replaces a variable that was already set in the shell.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import dotenv_values

from .loader import get_xdg_config_home

logger = logging.getLogger(__name__)

ENV_PREFIX = "COOKFETCH_"


def get_env_file_paths(project_dir: Path | None = None) -> list[Path]:
    """.env files consulted for a project, lowest precedence first."""
    if project_dir is None:
        project_dir = Path.cwd()
    return [get_xdg_config_home() / "cookfetch" / ".env", project_dir / ".env"]


def read_env_file(path: Path) -> dict[str, str]:
    """COOKFETCH_* assignments from one .env file; empty if it is missing."""
    if not path.is_file():
        return {}
    return {
        key: value
        for key, value in dotenv_values(path).items()
        if key.startswith(ENV_PREFIX) and value is not None
    }


def load_layered_env(
    *,
    project_dir: Path | None = None,
    env_paths: list[Path] | None = None,
) -> dict[str, str]:
    """
    Export COOKFETCH_* settings from .env files into os.environ.

    Args:
        project_dir: Project whose .env is read (defaults to cwd)
        env_paths: Explicit files to read instead, lowest precedence first

    Returns:
        The variables that were exported
    """
    if env_paths is None:
        env_paths = get_env_file_paths(project_dir)

    merged: dict[str, str] = {}
    for path in env_paths:
        values = read_env_file(path)
        if values:
            logger.debug("Read %s from %s", ", ".join(sorted(values)), path)
        merged.update(values)

    exported = {key: value for key, value in merged.items() if key not in os.environ}
    os.environ.update(exported)
    return exported
