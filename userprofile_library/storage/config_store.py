"""Raw configuration stores.

Stores keep the serialized configuration document of each scope and know
nothing about its structure.
"""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock
from typing import Protocol

from .paths import get_realms_dir

logger = logging.getLogger(__name__)


class ConfigStore(Protocol):
    """Persistence of raw configuration documents by scope."""

    def get(self, scope: str) -> str | None: ...

    def set(self, scope: str, raw: str | None) -> None: ...


class InMemoryConfigStore:
    """Process-local configuration store."""

    def __init__(self, documents: dict[str, str] | None = None) -> None:
        self._documents: dict[str, str] = dict(documents or {})
        self._lock = Lock()

    def get(self, scope: str) -> str | None:
        with self._lock:
            return self._documents.get(scope)

    def set(self, scope: str, raw: str | None) -> None:
        with self._lock:
            if raw is None:
                self._documents.pop(scope, None)
            else:
                self._documents[scope] = raw


class FileConfigStore:
    """Configuration store keeping one JSON document per scope."""

    def __init__(self, root: Path | None = None) -> None:
        """Initialize file store.

        Args:
            root: Directory holding the documents.
                  Defaults to $USERPROFILE_HOME/realms
        """
        self.root = Path(root) if root is not None else get_realms_dir()
        self.root.mkdir(parents=True, exist_ok=True)
        logger.info(f"Initialized configuration store at {self.root}")

    def _sanitize_scope(self, scope: str) -> str:
        """Sanitize scope for use as filename."""
        return scope.replace("/", "_").replace("\\", "_")

    def _path(self, scope: str) -> Path:
        return self.root / f"{self._sanitize_scope(scope)}.json"

    def get(self, scope: str) -> str | None:
        path = self._path(scope)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, scope: str, raw: str | None) -> None:
        """Write or remove the scope's document.

        Writes go to a temporary file first and are renamed into place.

        Raises:
            RuntimeError: If the document cannot be written
        """
        path = self._path(scope)

        if raw is None:
            if path.exists():
                path.unlink()
                logger.info(f"Removed configuration of scope '{scope}'")
            return

        temp_path = path.with_suffix(".tmp")
        try:
            temp_path.write_text(raw, encoding="utf-8")
            # Atomic rename
            temp_path.replace(path)
            logger.debug(f"Saved configuration of scope '{scope}' to {path}")
        except Exception as e:
            # Clean up temp file on error
            if temp_path.exists():
                temp_path.unlink()
            raise RuntimeError(f"Failed to save configuration to {path}: {e}") from e
