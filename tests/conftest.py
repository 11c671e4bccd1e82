"""
Shared pytest fixtures for the userprofile test suite.

Provides fixtures for:
- Temporary storage directories
- Context catalog, validator registry and compiler wiring
- Providers with isolated in-memory storage
- Sample configuration documents
"""

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from userprofile_library.cache import MetadataCache
from userprofile_library.compiler import ConfigValidator
from userprofile_library.compiler import ProfileCompiler
from userprofile_library.defaults import load_default_config
from userprofile_library.models.config import ProfileConfig
from userprofile_library.models.config import parse_config
from userprofile_library.reserved import DEFAULT_RESERVED_ATTRIBUTES
from userprofile_library.services.base_metadata import BaseMetadataRegistry
from userprofile_library.services.base_metadata import build_base_metadata_registry
from userprofile_library.services.context_catalog import ContextCatalog
from userprofile_library.services.context_catalog import build_default_catalog
from userprofile_library.services.provider_factory import ProfileProviderFactory
from userprofile_library.services.validator_registry import ValidatorRegistry
from userprofile_library.storage import InMemoryConfigStore

SAMPLE_CONFIG = """
attributes:
  - name: username
    validations:
      length: {min: 3, max: 255}
  - name: email
    validations:
      email: {}
    required:
      roles: [user]
    permissions:
      view: [admin, user]
      edit: [admin, user]
  - name: nickname
    displayName: Nickname
    group: personal
    validations:
      length: {max: 32}
    permissions:
      view: [user]
      edit: [admin]
    annotations:
      inputType: text
  - name: locale
    required:
      scopes: [profile]
    permissions:
      view: [admin, user]
      edit: [admin, user]
groups:
  - name: personal
    displayHeader: Personal information
"""


@pytest.fixture
def temp_storage_dir() -> Generator[Path, None, None]:
    """Create temporary storage directory for tests.

    Automatically cleaned up after test completes.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_storage_env(temp_storage_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point USERPROFILE_HOME at a temporary directory.

    Clears the directory overrides and settings variables so tests never
    read or write real data.
    """
    monkeypatch.setenv("USERPROFILE_HOME", str(temp_storage_dir))
    for name in (
        "USERPROFILE_CONFIG_DIR",
        "USERPROFILE_REALMS_DIR",
        "USERPROFILE_LOG_LEVEL",
        "USERPROFILE_STORE_BACKEND",
        "USERPROFILE_STORAGE_PATH",
        "USERPROFILE_DEFAULT_REALM",
        "USERPROFILE_DEFAULT_CONFIG_PATH",
        "USERPROFILE_IDENTIFIER_SYNTHESIZED_FROM_CONTACT",
        "USERPROFILE_HOST",
        "USERPROFILE_PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    return temp_storage_dir


@pytest.fixture
def catalog() -> ContextCatalog:
    return build_default_catalog()


@pytest.fixture
def registry() -> ValidatorRegistry:
    return ValidatorRegistry()


@pytest.fixture
def default_config() -> ProfileConfig:
    return load_default_config()


@pytest.fixture
def base_metadata(catalog: ContextCatalog, default_config: ProfileConfig) -> BaseMetadataRegistry:
    return build_base_metadata_registry(catalog, default_config, DEFAULT_RESERVED_ATTRIBUTES)


@pytest.fixture
def compiler(catalog: ContextCatalog, registry: ValidatorRegistry, default_config: ProfileConfig) -> ProfileCompiler:
    return ProfileCompiler(
        catalog=catalog,
        validator=ConfigValidator(registry),
        reserved=DEFAULT_RESERVED_ATTRIBUTES,
        default_config=default_config,
    )


@pytest.fixture
def sample_config() -> ProfileConfig:
    """Configuration with built-ins, a grouped custom attribute and a scope-required one."""
    return parse_config(SAMPLE_CONFIG)


@pytest.fixture
def factory() -> ProfileProviderFactory:
    """Provider factory with in-memory storage and a private cache."""
    return ProfileProviderFactory(store=InMemoryConfigStore(), cache=MetadataCache())


@pytest.fixture
def sample_document() -> str:
    """Raw YAML document of sample_config."""
    return SAMPLE_CONFIG
