"""Compiled metadata cache.

Holds one generation per configuration scope. A generation is tied to the
configuration it was loaded from and maps context ids to compiled metadata.
Generations are replaced wholesale when configuration changes; individual
contexts are never invalidated.

Contract:
- Inputs: Scope, context id, loader and compile callables
- Outputs: Published ProfileMetadata
- Side Effects: Runs the compile callable at most once per (generation, context)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future
from datetime import UTC
from datetime import datetime
from threading import Lock

from userprofile_library.models.config import ProfileConfig
from userprofile_library.models.metadata import ProfileMetadata

logger = logging.getLogger(__name__)

DEFAULT_TOKEN = "default"


class CacheGeneration:
    """Compiled metadata for one configuration version of one scope.

    Attributes:
        scope: Configuration scope (e.g. realm name)
        token: Identity of the configuration (content hash, or "default")
        config: Parsed configuration, None when none is stored
        compilations: Number of compilations started in this generation
    """

    def __init__(self, scope: str, token: str, config: ProfileConfig | None) -> None:
        self.scope = scope
        self.token = token
        self.config = config
        self.created_at = datetime.now(UTC)
        self.compilations = 0
        self._entries: dict[str, Future[ProfileMetadata]] = {}
        self._lock = Lock()

    def __repr__(self) -> str:
        return f"CacheGeneration(scope={self.scope!r}, token={self.token[:12]!r}, contexts={self.cached_contexts()!r})"

    def get_or_compile(self, context_id: str, compile_fn: Callable[[], ProfileMetadata]) -> ProfileMetadata:
        """Return cached metadata for a context, compiling it on first request.

        Concurrent first requests share a single compilation: the first caller
        compiles, later callers wait for its result. A failed compilation is
        not cached, so the next request compiles (and validates) again.

        Args:
            context_id: Context identifier
            compile_fn: Produces published metadata for the context

        Returns:
            Published ProfileMetadata
        """
        with self._lock:
            future = self._entries.get(context_id)
            owner = future is None
            if owner:
                future = Future()
                self._entries[context_id] = future
                self.compilations += 1

        if not owner:
            return future.result()

        try:
            metadata = compile_fn()
        except BaseException as e:
            with self._lock:
                if self._entries.get(context_id) is future:
                    del self._entries[context_id]
            future.set_exception(e)
            raise

        future.set_result(metadata)
        logger.debug(f"Cached metadata for '{context_id}' in scope '{self.scope}'")
        return metadata

    def cached_contexts(self) -> list[str]:
        """Context ids with successfully published metadata."""
        with self._lock:
            entries = list(self._entries.items())
        return [cid for cid, f in entries if f.done() and f.exception() is None]


class MetadataCache:
    """Per-scope cache generations.

    Replacing configuration swaps the scope's whole generation: readers see
    either the old fully populated generation or a new empty one.
    """

    def __init__(self) -> None:
        self._generations: dict[str, CacheGeneration] = {}
        self._versions: dict[str, int] = {}
        self._scope_locks: dict[str, Lock] = {}
        self._lock = Lock()

    def _scope_lock(self, scope: str) -> Lock:
        with self._lock:
            return self._scope_locks.setdefault(scope, Lock())

    def generation(self, scope: str, loader: Callable[[], CacheGeneration]) -> CacheGeneration:
        """Get the current generation of a scope, loading it if absent.

        Loads of one scope are serialized on that scope's lock; other scopes
        are not blocked. A load that overlaps an invalidation of its scope is
        discarded and repeated.

        Args:
            scope: Configuration scope
            loader: Builds a fresh generation from the current configuration

        Returns:
            Current CacheGeneration
        """
        with self._lock:
            generation = self._generations.get(scope)
        if generation is not None:
            return generation

        with self._scope_lock(scope):
            while True:
                with self._lock:
                    generation = self._generations.get(scope)
                    if generation is not None:
                        return generation
                    version = self._versions.get(scope, 0)

                generation = loader()

                with self._lock:
                    if self._versions.get(scope, 0) == version:
                        self._generations[scope] = generation
                        break
                logger.debug(f"Scope '{scope}' was invalidated while loading, reloading")

        logger.info(f"Loaded cache generation {generation.token[:12]} for scope '{scope}'")
        return generation

    def peek(self, scope: str) -> CacheGeneration | None:
        with self._lock:
            return self._generations.get(scope)

    def invalidate(self, scope: str) -> None:
        """Discard the scope's generation; the next access loads a new one."""
        with self._lock:
            self._versions[scope] = self._versions.get(scope, 0) + 1
            generation = self._generations.pop(scope, None)
        if generation is not None:
            logger.info(f"Invalidated cache generation {generation.token[:12]} for scope '{scope}'")

    def clear(self) -> None:
        with self._lock:
            for scope in {*self._generations, *self._scope_locks}:
                self._versions[scope] = self._versions.get(scope, 0) + 1
            self._generations.clear()
