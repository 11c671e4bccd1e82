"""Profile compilation.

Turns a user profile configuration into published, predicate-bearing metadata
for one context.

Stages:
1. Validate configuration (every compilation, not only on submission)
2. Clone base metadata and prepare built-in entries
3. Compile each supported attribute in declaration order
4. Merge each compiled attribute into the metadata
5. Run the external decorator hook
6. Publish
"""

from __future__ import annotations

import logging

from userprofile_library.errors import ConfigurationValidationError
from userprofile_library.models.config import ProfileConfig
from userprofile_library.models.metadata import AttributeGroupMetadata
from userprofile_library.models.metadata import ProfileMetadata
from userprofile_library.reserved import ReservedAttributes
from userprofile_library.services.context_catalog import ContextCatalog

from .merger import AttributeDecorator
from .merger import BuiltinMerger
from .predicates import PredicateCompiler
from .validation import ConfigValidator

logger = logging.getLogger(__name__)


class ProfileCompiler:
    """Compiles configuration into per-context metadata.

    Compilation is pure: inputs are never mutated and the result is published
    before it is returned.
    """

    def __init__(
        self,
        catalog: ContextCatalog,
        validator: ConfigValidator,
        reserved: ReservedAttributes,
        default_config: ProfileConfig,
        decorator: AttributeDecorator | None = None,
    ) -> None:
        """Initialize profile compiler.

        Args:
            catalog: Context catalog (attribute support, auth flow capability, roles)
            validator: Configuration validator
            reserved: Reserved attribute names
            default_config: Default configuration, compiled when none is stored and
                source of built-in validators
            decorator: Optional hook run after configuration-driven decoration
        """
        self.catalog = catalog
        self.validator = validator
        self.reserved = reserved
        self.default_config = default_config
        self.decorator = decorator
        self.predicates = PredicateCompiler(catalog, reserved)
        self.merger = BuiltinMerger(reserved, default_config)

    def compile(
        self, base: ProfileMetadata, config: ProfileConfig | None, scope: str | None = None
    ) -> ProfileMetadata:
        """Compile metadata for the base's context.

        Args:
            base: Base metadata of the context (never mutated)
            config: Parsed configuration, None to compile the default configuration
            scope: Configuration scope, used in error messages

        Returns:
            Published ProfileMetadata

        Raises:
            ConfigurationValidationError: If the configuration is invalid
            ContextIntegrityError: If a supported reserved attribute has no base entry
        """
        context_id = base.context_id
        metadata = base.clone()
        if config is None:
            config = self.default_config

        errors = self.validator.validate(config)
        if errors:
            logger.error(f"Refusing to compile '{context_id}': {len(errors)} configuration violation(s)")
            raise ConfigurationValidationError(errors, scope=scope)

        logger.info(f"Compiling user profile metadata for context '{context_id}'")

        self.merger.prepare_base(metadata, config)

        gui_order = 0
        for attribute in config.attributes:
            if not self.catalog.is_attribute_supported(context_id, attribute.name):
                # e.g. only the email attribute exists when updating the email
                continue

            gui_order += 1
            group = AttributeGroupMetadata.from_config(config.get_group(attribute.group))
            compiled = self.predicates.compile_attribute(attribute, context_id, gui_order, group)
            self.merger.apply(metadata, compiled)

        self._decorate(metadata)

        logger.info(f"Compiled {len(metadata)} attribute(s) for context '{context_id}'")
        return metadata.publish()

    def _decorate(self, metadata: ProfileMetadata) -> None:
        if self.decorator is not None:
            self.decorator.decorate(metadata.context_id, metadata)
