"""Storage module for userprofile_library.

Persistence of raw profile configuration documents.

Public Interface:
    - ConfigStore: Protocol for raw configuration storage
    - InMemoryConfigStore: Process-local store
    - FileConfigStore: One JSON document per scope with atomic writes
    - get_home_dir: Get USERPROFILE_HOME
    - get_config_dir: Get config directory
    - get_realms_dir: Get stored configuration directory
"""

from .config_store import ConfigStore
from .config_store import FileConfigStore
from .config_store import InMemoryConfigStore
from .paths import get_config_dir
from .paths import get_home_dir
from .paths import get_realms_dir

__all__ = [
    "ConfigStore",
    "InMemoryConfigStore",
    "FileConfigStore",
    "get_home_dir",
    "get_config_dir",
    "get_realms_dir",
]
