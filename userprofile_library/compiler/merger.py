"""Reconciliation of compiled configuration with built-in attribute metadata.

Reserved attributes already exist in the base metadata of every context that
supports them and are decorated in place; every other attribute is appended.
"""

from __future__ import annotations

import logging
from typing import Protocol

from userprofile_library.errors import ContextIntegrityError
from userprofile_library.models.config import ProfileConfig
from userprofile_library.models.metadata import ProfileMetadata
from userprofile_library.predicates import ALWAYS_TRUE
from userprofile_library.predicates import Not
from userprofile_library.predicates import Predicate
from userprofile_library.predicates import RealmFlag
from userprofile_library.predicates import TargetIsServiceAccount
from userprofile_library.predicates import all_of
from userprofile_library.predicates import any_of
from userprofile_library.reserved import ReservedAttributes

from .predicates import CompiledAttribute

logger = logging.getLogger(__name__)

IDENTIFIER_FROM_CONTACT = RealmFlag("identifier_synthesized_from_contact")


class AttributeDecorator(Protocol):
    """Hook letting an external component further decorate compiled metadata."""

    def decorate(self, context_id: str, metadata: ProfileMetadata) -> None: ...


class BuiltinMerger:
    """Folds compiled attributes into a context's metadata."""

    def __init__(self, reserved: ReservedAttributes, default_config: ProfileConfig) -> None:
        self.reserved = reserved
        self.default_config = default_config

    def prepare_base(self, metadata: ProfileMetadata, config: ProfileConfig) -> None:
        """Adjust built-in entries once per compilation, before any attribute is merged.

        - Optional built-ins are dropped; those the configuration declares are
          merged back from configuration.
        - Mandatory built-ins the configuration declares lose the default
          validators the configuration re-specifies.
        - Mandatory built-ins absent from configuration are left untouched.
        """
        configured = config.attribute_names()

        for name in sorted(self.reserved.optional):
            removed = metadata.remove_attribute(name)
            if removed:
                logger.debug(f"Removed optional built-in '{name}' from '{metadata.context_id}'")

        for name in sorted(self.reserved.mandatory & configured):
            default = self.default_config.get_attribute(name)
            if default is None or not default.validations:
                continue
            for entry in metadata.get_attribute(name):
                entry.remove_validators(default.validations.keys())

    def required_for(self, compiled: CompiledAttribute) -> Predicate:
        """Required predicate after the built-in overrides."""
        if compiled.name == self.reserved.identifier:
            # never asked for when derived from the contact address
            return Not(IDENTIFIER_FROM_CONTACT)

        if compiled.name == self.reserved.contact:
            # order matters: service accounts first, then the configured rule
            return all_of(
                Not(TargetIsServiceAccount()),
                any_of(compiled.required, IDENTIFIER_FROM_CONTACT),
            )

        return compiled.required

    def apply(self, metadata: ProfileMetadata, compiled: CompiledAttribute) -> None:
        """Merge one compiled attribute into the metadata.

        Raises:
            ContextIntegrityError: If a reserved attribute has no base entry
        """
        name = compiled.name

        if not self.reserved.is_reserved(name):
            metadata.add_attribute(
                name,
                compiled.gui_order,
                validators=compiled.validators,
                selected=compiled.selected,
                write_allowed=compiled.write_allowed,
                required=compiled.required,
                read_allowed=compiled.read_allowed,
            ).add_annotations(compiled.annotations).set_display_name(compiled.display_name).set_group(
                compiled.group
            )
            return

        read_allowed = compiled.read_allowed
        write_allowed = compiled.write_allowed
        if not compiled.has_permissions:
            # built-ins stay visible and editable unless explicitly restricted
            read_allowed = ALWAYS_TRUE
            write_allowed = ALWAYS_TRUE

        required = self.required_for(compiled)

        existing = metadata.get_attribute(name)
        if not existing:
            logger.error(f"Attribute '{name}' is supported by '{metadata.context_id}' but has no base metadata")
            raise ContextIntegrityError(f"Attribute {name} not defined in the context '{metadata.context_id}'.")

        for entry in existing:
            (
                entry.add_annotations(compiled.annotations)
                .set_display_name(compiled.display_name)
                .set_gui_order(compiled.gui_order)
                .set_group(compiled.group)
                .set_read_allowed(read_allowed)
                .set_write_allowed(write_allowed)
                .add_validators(compiled.validators)
                .set_required(required)
            )
