"""Compiled metadata cache.

Public Interface:
    - MetadataCache: Per-scope cache generations
    - CacheGeneration: Compiled metadata for one configuration version
"""

from .metadata_cache import DEFAULT_TOKEN
from .metadata_cache import CacheGeneration
from .metadata_cache import MetadataCache

__all__ = [
    "MetadataCache",
    "CacheGeneration",
    "DEFAULT_TOKEN",
]
