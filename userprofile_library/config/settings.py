"""Settings models for the user profile engine.

Contract:
- Inputs: Environment variables, YAML files
- Outputs: Validated settings objects
- Side Effects: None (read-only)
"""

from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class EngineSettings(BaseSettings):
    """Configuration for the user profile engine.

    Attributes:
        host: API bind host (default: 127.0.0.1)
        port: API bind port (default: 8420)
        log_level: Logging level (default: info)
        store_backend: Where raw profile configuration is kept (default: file)
        storage_path: Root directory for stored configuration (default: .userprofile)
        default_config_path: Document overriding the built-in default profile
        default_realm: Realm used when none is given (default: master)
        identifier_synthesized_from_contact: Derive usernames from email addresses

    Example:
        >>> settings = EngineSettings()
        >>> assert settings.default_realm == "master"
    """

    model_config = SettingsConfigDict(
        env_prefix="USERPROFILE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 8420
    log_level: str = "info"
    store_backend: Literal["memory", "file"] = "file"
    storage_path: str = ".userprofile"
    default_config_path: str | None = None
    default_realm: str = "master"
    identifier_synthesized_from_contact: bool = False

    @field_validator("storage_path")
    @classmethod
    def expand_and_resolve_path(cls, v: str) -> str:
        """Expand ~ and resolve to absolute path.

        Args:
            v: Path string (may contain ~ or be relative)

        Returns:
            Absolute path as string
        """
        return str(Path(v).expanduser().resolve())
