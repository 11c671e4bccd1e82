"""Base (pre-configuration) metadata per context.

Each context starts from a base ProfileMetadata holding the built-in
attributes it supports. Compilation clones the base and decorates the clone.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable
from types import MappingProxyType

from userprofile_library.errors import UnknownContextError
from userprofile_library.models.config import ProfileConfig
from userprofile_library.models.context import context_key
from userprofile_library.models.metadata import ProfileMetadata
from userprofile_library.models.metadata import ValidatorMetadata
from userprofile_library.predicates import ALWAYS_FALSE
from userprofile_library.predicates import ALWAYS_TRUE
from userprofile_library.reserved import ReservedAttributes

from .context_catalog import ContextCatalog

logger = logging.getLogger(__name__)


class BaseMetadataRegistry:
    """Published base metadata keyed by context id."""

    def __init__(self, metadata: Iterable[ProfileMetadata] = ()) -> None:
        self._metadata: dict[str, ProfileMetadata] = {}
        for item in metadata:
            self.register(item)

    def register(self, metadata: ProfileMetadata) -> None:
        self._metadata[metadata.context_id] = metadata.publish()

    def context_ids(self) -> list[str]:
        return list(self._metadata)

    def get(self, context_id: str) -> ProfileMetadata:
        """Get the base metadata bound to a context.

        Raises:
            UnknownContextError: If no metadata is bound to the context
        """
        metadata = self._metadata.get(context_key(context_id))
        if metadata is None:
            raise UnknownContextError(f"No metadata is bound to the '{context_id}' context")
        return metadata


def build_base_metadata(
    context_id: str,
    catalog: ContextCatalog,
    default_config: ProfileConfig,
    reserved: ReservedAttributes,
) -> ProfileMetadata:
    """Build base metadata for one context from the default configuration.

    Only built-in attributes (reserved and optional reserved) the context
    supports are included, readable and writable, carrying their default
    validators.

    Args:
        context_id: Context identifier
        catalog: Context catalog
        default_config: Default profile configuration
        reserved: Reserved attribute names

    Returns:
        Unpublished base metadata
    """
    metadata = ProfileMetadata(context_id)
    gui_order = 0

    for attribute in default_config.attributes:
        name = attribute.name
        if not (reserved.is_reserved(name) or reserved.is_optional_reserved(name)):
            continue
        if not catalog.is_attribute_supported(context_id, name):
            continue

        gui_order += 1
        validators = [
            ValidatorMetadata(validator_id, MappingProxyType(copy.deepcopy(dict(cfg))))
            for validator_id, cfg in attribute.validations.items()
        ]
        metadata.add_attribute(
            name,
            gui_order,
            validators=validators,
            selected=ALWAYS_TRUE,
            write_allowed=ALWAYS_TRUE,
            required=ALWAYS_FALSE,
            read_allowed=ALWAYS_TRUE,
        ).set_display_name(attribute.display_name)

    return metadata


def build_base_metadata_registry(
    catalog: ContextCatalog,
    default_config: ProfileConfig,
    reserved: ReservedAttributes,
) -> BaseMetadataRegistry:
    """Build base metadata for every context in the catalog."""
    registry = BaseMetadataRegistry()
    for context_id in catalog.context_ids():
        registry.register(build_base_metadata(context_id, catalog, default_config, reserved))
    logger.debug(f"Built base metadata for {len(registry.context_ids())} contexts")
    return registry
