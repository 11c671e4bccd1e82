"""Configuration module for userprofile_library.

Provides engine settings loading from YAML and environment variables.

Public Interface:
    - EngineSettings: Settings model
    - load_settings: Load settings
    - create_default_settings: Create default settings file
    - get_settings_path: Get settings file path
"""

from .loader import create_default_settings
from .loader import get_settings_path
from .loader import load_settings
from .settings import EngineSettings

__all__ = [
    "EngineSettings",
    "load_settings",
    "create_default_settings",
    "get_settings_path",
]
