"""Declarative user profile provider.

Serves compiled profile metadata for one configuration scope (realm), backed
by a raw configuration store and the shared metadata cache.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable

from userprofile_library.cache import DEFAULT_TOKEN
from userprofile_library.cache import CacheGeneration
from userprofile_library.cache import MetadataCache
from userprofile_library.compiler import ProfileCompiler
from userprofile_library.errors import ConfigurationValidationError
from userprofile_library.models.config import ProfileConfig
from userprofile_library.models.config import dump_config
from userprofile_library.models.config import parse_config
from userprofile_library.models.context import EvaluationContext
from userprofile_library.models.context import RealmSettings
from userprofile_library.models.context import TargetEntity
from userprofile_library.models.metadata import ProfileMetadata
from userprofile_library.storage import ConfigStore

from .base_metadata import BaseMetadataRegistry

logger = logging.getLogger(__name__)


class DeclarativeProfileProvider:
    """Compiled profile metadata for a single scope.

    Compiled metadata is cached per context and configuration generation.
    Replacing the configuration discards the whole generation.
    """

    def __init__(
        self,
        scope: str,
        store: ConfigStore,
        compiler: ProfileCompiler,
        base_metadata: BaseMetadataRegistry,
        cache: MetadataCache,
        default_config: ProfileConfig,
        realm: RealmSettings | None = None,
    ) -> None:
        """Initialize provider.

        Args:
            scope: Configuration scope (realm name)
            store: Raw configuration store
            compiler: Profile compiler
            base_metadata: Base metadata per context
            cache: Metadata cache shared between providers
            default_config: Effective configuration when none is stored
            realm: Realm settings used for evaluation contexts
        """
        self.scope = scope
        self.store = store
        self.compiler = compiler
        self.base_metadata = base_metadata
        self.cache = cache
        self.default_config = default_config
        self.realm = realm or RealmSettings(name=scope)

    def _load_generation(self) -> CacheGeneration:
        raw = self.store.get(self.scope)
        if raw is None or not raw.strip():
            return CacheGeneration(self.scope, DEFAULT_TOKEN, None)

        token = hashlib.sha256(raw.encode("utf-8")).hexdigest()
        config = parse_config(raw)
        return CacheGeneration(self.scope, token, config)

    def generation(self) -> CacheGeneration:
        """Current cache generation of this scope.

        Raises:
            ConfigurationParseError: If the stored configuration is malformed
        """
        return self.cache.generation(self.scope, self._load_generation)

    def get_compiled(self, context_id: str) -> ProfileMetadata:
        """Get compiled metadata for a context.

        Args:
            context_id: Context identifier

        Returns:
            Published ProfileMetadata (the same object until configuration changes)

        Raises:
            UnknownContextError: If no base metadata is bound to the context
            ConfigurationParseError: If the stored configuration is malformed
            ConfigurationValidationError: If the stored configuration is invalid
        """
        base = self.base_metadata.get(context_id)
        generation = self.generation()
        return generation.get_or_compile(
            base.context_id,
            lambda: self.compiler.compile(base, generation.config, scope=self.scope),
        )

    def get_configuration(self) -> ProfileConfig:
        """Effective configuration: the stored one, else the default.

        Returns:
            A copy; changing it has no effect until passed to set_configuration
        """
        config = self.generation().config
        if config is None:
            config = self.default_config
        return config.clone()

    def set_configuration(self, configuration: ProfileConfig | str | None) -> None:
        """Replace (or clear, with None) the stored configuration.

        Args:
            configuration: Parsed configuration, raw JSON/YAML document, or None

        Raises:
            ConfigurationParseError: If a raw document is malformed
            ConfigurationValidationError: If the configuration is invalid
        """
        if configuration is None:
            self.store.set(self.scope, None)
            self.cache.invalidate(self.scope)
            logger.info(f"Cleared user profile configuration of '{self.scope}'")
            return

        if isinstance(configuration, (str, bytes)):
            configuration = parse_config(configuration)

        errors = self.compiler.validator.validate(configuration)
        if errors:
            raise ConfigurationValidationError(errors, scope=self.scope)

        self.store.set(self.scope, dump_config(configuration))
        self.cache.invalidate(self.scope)
        logger.info(
            f"Replaced user profile configuration of '{self.scope}' ({len(configuration.attributes)} attributes)"
        )

    def evaluation_context(
        self,
        context_id: str,
        *,
        roles: Iterable[str] | None = None,
        requested_scopes: Iterable[str] | None = None,
        client_default_scopes: Iterable[str] = (),
        target: TargetEntity | None = None,
    ) -> EvaluationContext:
        """Build an evaluation context for this provider's realm."""
        return EvaluationContext.for_context(
            self.compiler.catalog,
            context_id,
            roles=roles,
            requested_scopes=requested_scopes,
            client_default_scopes=client_default_scopes,
            target=target,
            realm=self.realm,
        )
