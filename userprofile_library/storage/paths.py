"""Path resolution for userprofile storage locations.

This module provides path resolution based on the USERPROFILE_HOME environment
variable, with one directory per kind of data inside that root.

Contract:
- Inputs: Environment variables (USERPROFILE_HOME, USERPROFILE_CONFIG_DIR, USERPROFILE_REALMS_DIR)
- Outputs: Resolved Path objects
- Side Effects: Creates directories if they don't exist
"""

import os
from pathlib import Path


def get_home_dir() -> Path:
    """Get USERPROFILE_HOME from environment.

    Returns:
        Path to root directory (default: .userprofile)
    """
    root = os.environ.get("USERPROFILE_HOME", ".userprofile")
    return Path(root).resolve()


def get_config_dir() -> Path:
    """Get configuration directory.

    Returns:
        Path to config directory ($USERPROFILE_HOME/config)
    """
    config_dir: Path = get_home_dir() / "config"

    env_override: str | None = os.environ.get("USERPROFILE_CONFIG_DIR")
    if env_override is not None:
        config_dir = Path(env_override).resolve()

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_realms_dir() -> Path:
    """Get directory holding stored per-realm profile configurations.

    Returns:
        Path to realms directory ($USERPROFILE_HOME/realms)
    """
    realms_dir: Path = get_home_dir() / "realms"

    env_override: str | None = os.environ.get("USERPROFILE_REALMS_DIR")
    if env_override is not None:
        realms_dir = Path(env_override).resolve()

    realms_dir.mkdir(parents=True, exist_ok=True)
    return realms_dir
