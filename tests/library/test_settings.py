"""
Unit tests for engine settings loading.

Tests settings file creation, loading from YAML and environment variable
overrides.
"""

from pathlib import Path

import pytest

from userprofile_library.config import loader
from userprofile_library.config.settings import EngineSettings


@pytest.mark.unit
class TestSettingsLoader:
    """Test settings loading functions."""

    def test_get_settings_path_returns_engine_yaml(self, mock_storage_env: Path) -> None:
        settings_path = loader.get_settings_path()

        assert settings_path.name == "engine.yaml"
        assert settings_path.parent.name == "config"

    def test_create_default_settings_has_yaml_content(self, mock_storage_env: Path) -> None:
        loader.create_default_settings()

        content = loader.get_settings_path().read_text()
        assert "store_backend:" in content
        assert "log_level:" in content

    def test_create_default_settings_is_idempotent(self, mock_storage_env: Path) -> None:
        settings_path = loader.get_settings_path()
        settings_path.write_text("# Custom settings\nstore_backend: memory\n")

        loader.create_default_settings()

        assert settings_path.read_text() == "# Custom settings\nstore_backend: memory\n"

    def test_load_settings_creates_default_if_missing(self, mock_storage_env: Path) -> None:
        settings = loader.load_settings()

        assert loader.get_settings_path().exists()
        assert isinstance(settings, EngineSettings)
        assert settings.default_realm == "master"

    def test_load_settings_parses_yaml(self, mock_storage_env: Path) -> None:
        settings_path = mock_storage_env / "engine.yaml"
        settings_path.write_text("store_backend: memory\nidentifier_synthesized_from_contact: true\nport: 9000\n")

        settings = loader.load_settings(settings_path)

        assert settings.store_backend == "memory"
        assert settings.identifier_synthesized_from_contact is True
        assert settings.port == 9000

    def test_env_overrides_yaml(self, mock_storage_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        settings_path = mock_storage_env / "engine.yaml"
        settings_path.write_text("store_backend: memory\ndefault_realm: from-yaml\n")
        monkeypatch.setenv("USERPROFILE_DEFAULT_REALM", "from-env")

        settings = loader.load_settings(settings_path)

        assert settings.default_realm == "from-env"
        assert settings.store_backend == "memory"

    def test_malformed_yaml_falls_back_to_defaults(self, mock_storage_env: Path) -> None:
        settings_path = mock_storage_env / "engine.yaml"
        settings_path.write_text("store_backend: [unclosed\n")

        settings = loader.load_settings(settings_path)

        assert settings.store_backend == "file"


@pytest.mark.unit
class TestEngineSettings:
    """Test EngineSettings model."""

    def test_storage_path_is_resolved(self, mock_storage_env: Path) -> None:
        settings = EngineSettings(storage_path="~/profiles")
        assert settings.storage_path == str(Path("~/profiles").expanduser().resolve())

    def test_invalid_backend_rejected(self, mock_storage_env: Path) -> None:
        with pytest.raises(ValueError):
            EngineSettings(store_backend="database")
