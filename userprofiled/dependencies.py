"""Shared dependency factories for FastAPI endpoints.

A single ProfileProviderFactory is built per process so every request shares
the compiled metadata cache. Tests replace it through
``app.dependency_overrides[get_provider_factory]``.
"""

import logging
import threading

from userprofile_library.config import load_settings
from userprofile_library.services.provider_factory import ProfileProviderFactory

logger = logging.getLogger(__name__)

_factory: ProfileProviderFactory | None = None
_factory_lock = threading.Lock()


def get_provider_factory() -> ProfileProviderFactory:
    """Get the process-wide provider factory.

    Returns:
        ProfileProviderFactory built from engine settings on first use
    """
    global _factory
    with _factory_lock:
        if _factory is None:
            settings = load_settings()
            _factory = ProfileProviderFactory.from_settings(settings)
            logger.info(f"Provider factory initialized ({settings.store_backend} store)")
        return _factory


def reset_provider_factory() -> None:
    """Drop the process-wide factory; the next request builds a fresh one."""
    global _factory
    with _factory_lock:
        _factory = None
