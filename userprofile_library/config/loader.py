"""Settings loading for the user profile engine.

This module handles loading engine settings from YAML files and environment
variables.

Contract:
- Inputs: Settings file paths, environment variables
- Outputs: EngineSettings objects
- Side Effects: Creates default settings file if missing
"""

import logging
import os
from pathlib import Path

import yaml

from ..storage.paths import get_config_dir
from .settings import EngineSettings

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = """# userprofile engine settings

host: "127.0.0.1"
port: 8420
log_level: "info"

# Raw profile configuration storage: "file" or "memory"
store_backend: "file"

# Root directory for stored profile configuration
# Can be overridden with USERPROFILE_STORAGE_PATH environment variable
# storage_path: ".userprofile"

# Document replacing the built-in default user profile
# default_config_path: "/etc/userprofile/default-profile.yaml"

default_realm: "master"
identifier_synthesized_from_contact: false
"""


def get_settings_path() -> Path:
    """Get path to settings file.

    Returns:
        Path to engine.yaml in config dir
    """
    return get_config_dir() / "engine.yaml"


def create_default_settings() -> None:
    """Create default settings file if it doesn't exist."""
    settings_path = get_settings_path()

    if settings_path.exists():
        logger.debug(f"Settings file already exists: {settings_path}")
        return

    settings_path.write_text(DEFAULT_SETTINGS, encoding="utf-8")
    logger.info(f"Created default settings: {settings_path}")


def load_settings(settings_path: Path | None = None) -> EngineSettings:
    """Load engine settings from YAML and environment.

    Environment variables take precedence over YAML settings.
    Variables are prefixed with USERPROFILE_ (e.g., USERPROFILE_LOG_LEVEL).

    Args:
        settings_path: Optional settings file path (default: engine.yaml in config dir)

    Returns:
        Validated engine settings
    """
    if settings_path is None:
        settings_path = get_settings_path()
        if not settings_path.exists():
            create_default_settings()

    yaml_settings = {}
    if settings_path.exists():
        try:
            with open(settings_path, encoding="utf-8") as f:
                yaml_settings = yaml.safe_load(f) or {}
            logger.debug(f"Loaded settings from {settings_path}")
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load settings from {settings_path}: {e}")
            logger.info("Using default settings and environment variables")

    # Only pass YAML values that don't have corresponding env vars
    filtered_yaml = {}
    for key, value in yaml_settings.items():
        env_key = f"USERPROFILE_{key.upper()}"
        if env_key not in os.environ:
            filtered_yaml[key] = value

    settings = EngineSettings(**filtered_yaml)

    logger.info(f"Engine settings loaded: store={settings.store_backend}, realm={settings.default_realm}")

    return settings
