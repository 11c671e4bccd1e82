"""Wiring of profile providers.

One factory per process holds the collaborators every realm shares (context
catalog, validator registry, base metadata, store and metadata cache) and
creates a provider per realm.
"""

from __future__ import annotations

import logging
from pathlib import Path

from userprofile_library.cache import MetadataCache
from userprofile_library.compiler import AttributeDecorator
from userprofile_library.compiler import ConfigValidator
from userprofile_library.compiler import ProfileCompiler
from userprofile_library.config import EngineSettings
from userprofile_library.defaults import load_default_config
from userprofile_library.models.config import ProfileConfig
from userprofile_library.models.context import RealmSettings
from userprofile_library.reserved import DEFAULT_RESERVED_ATTRIBUTES
from userprofile_library.reserved import ReservedAttributes
from userprofile_library.storage import ConfigStore
from userprofile_library.storage import FileConfigStore
from userprofile_library.storage import InMemoryConfigStore

from .base_metadata import BaseMetadataRegistry
from .base_metadata import build_base_metadata_registry
from .context_catalog import ContextCatalog
from .context_catalog import build_default_catalog
from .profile_provider import DeclarativeProfileProvider
from .validator_registry import ValidatorRegistry

logger = logging.getLogger(__name__)


class ProfileProviderFactory:
    """Creates DeclarativeProfileProvider instances sharing one cache."""

    def __init__(
        self,
        store: ConfigStore | None = None,
        catalog: ContextCatalog | None = None,
        registry: ValidatorRegistry | None = None,
        reserved: ReservedAttributes = DEFAULT_RESERVED_ATTRIBUTES,
        default_config: ProfileConfig | None = None,
        base_metadata: BaseMetadataRegistry | None = None,
        decorator: AttributeDecorator | None = None,
        cache: MetadataCache | None = None,
        identifier_synthesized_from_contact: bool = False,
    ) -> None:
        self.store = store if store is not None else InMemoryConfigStore()
        self.catalog = catalog or build_default_catalog()
        self.registry = registry or ValidatorRegistry()
        self.reserved = reserved
        self.default_config = default_config or load_default_config()
        self.base_metadata = base_metadata or build_base_metadata_registry(
            self.catalog, self.default_config, self.reserved
        )
        self.cache = cache or MetadataCache()
        self.identifier_synthesized_from_contact = identifier_synthesized_from_contact
        self.compiler = ProfileCompiler(
            catalog=self.catalog,
            validator=ConfigValidator(self.registry),
            reserved=self.reserved,
            default_config=self.default_config,
            decorator=decorator,
        )

    @classmethod
    def from_settings(cls, settings: EngineSettings, **overrides) -> ProfileProviderFactory:
        """Build a factory from engine settings.

        Args:
            settings: Engine settings
            **overrides: Collaborators replacing the ones derived from settings

        Returns:
            ProfileProviderFactory instance
        """
        if "store" not in overrides:
            if settings.store_backend == "file":
                overrides["store"] = FileConfigStore(Path(settings.storage_path) / "realms")
            else:
                overrides["store"] = InMemoryConfigStore()

        if "default_config" not in overrides and settings.default_config_path:
            overrides["default_config"] = load_default_config(Path(settings.default_config_path))

        overrides.setdefault("identifier_synthesized_from_contact", settings.identifier_synthesized_from_contact)
        return cls(**overrides)

    def realm_settings(self, realm: str) -> RealmSettings:
        return RealmSettings(
            name=realm,
            identifier_synthesized_from_contact=self.identifier_synthesized_from_contact,
        )

    def create(self, realm: str) -> DeclarativeProfileProvider:
        """Create a provider for a realm.

        Providers are cheap; compiled metadata lives in the shared cache.
        """
        return DeclarativeProfileProvider(
            scope=realm,
            store=self.store,
            compiler=self.compiler,
            base_metadata=self.base_metadata,
            cache=self.cache,
            default_config=self.default_config,
            realm=self.realm_settings(realm),
        )
