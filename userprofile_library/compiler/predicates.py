"""Translation of one attribute's policy into predicates and validators."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from userprofile_library.models.config import AttributeConfig
from userprofile_library.models.config import AttributePermissions
from userprofile_library.models.config import AttributeRequired
from userprofile_library.models.config import AttributeSelector
from userprofile_library.models.metadata import AttributeGroupMetadata
from userprofile_library.models.metadata import ValidatorMetadata
from userprofile_library.predicates import ALWAYS_FALSE
from userprofile_library.predicates import ALWAYS_TRUE
from userprofile_library.predicates import Predicate
from userprofile_library.predicates import any_of
from userprofile_library.predicates import role_match
from userprofile_library.predicates import scope_match
from userprofile_library.reserved import ReservedAttributes
from userprofile_library.services.context_catalog import ContextCatalog
from userprofile_library.services.validator_registry import IMMUTABLE_ATTRIBUTE_VALIDATOR
from userprofile_library.services.validator_registry import REQUIRED_BY_METADATA_VALIDATOR

logger = logging.getLogger(__name__)

# Added to every configured validator: empty values are left to the required check
IGNORE_EMPTY_VALUE = "ignore.empty.value"


@dataclass
class CompiledAttribute:
    """Predicates and validators compiled from one AttributeConfig."""

    config: AttributeConfig
    gui_order: int
    validators: list[ValidatorMetadata]
    required: Predicate
    read_allowed: Predicate
    write_allowed: Predicate
    selected: Predicate
    group: AttributeGroupMetadata | None = None

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def display_name(self) -> str | None:
        return self.config.display_name

    @property
    def annotations(self) -> dict[str, Any]:
        return self.config.annotations

    @property
    def has_permissions(self) -> bool:
        return self.config.permissions is not None and not self.config.permissions.is_empty()


class PredicateCompiler:
    """Compiles attribute policies for a given context."""

    def __init__(self, catalog: ContextCatalog, reserved: ReservedAttributes) -> None:
        self.catalog = catalog
        self.reserved = reserved

    def compile_required(self, rule: AttributeRequired | None, context_id: str) -> Predicate:
        """Compile the required rule.

        Precedence:
        1. No rule → never required
        2. Always, or the context grants one of the rule's roles → required,
           unless scopes are configured: then scope-based inside auth flows
           and never required elsewhere
        3. Scopes configured and the context can be an auth flow → scope-based
        4. Otherwise → never required
        """
        if rule is None:
            return ALWAYS_FALSE

        can_be_auth_flow = self.catalog.can_originate_from_auth_flow(context_id)

        if rule.is_always or self.catalog.is_role_for_context(context_id, rule.roles):
            if rule.scopes:
                # Scopes have no meaning outside an authentication flow
                return scope_match(rule.scopes) if can_be_auth_flow else ALWAYS_FALSE
            return ALWAYS_TRUE

        if can_be_auth_flow and rule.scopes:
            return scope_match(rule.scopes)

        return ALWAYS_FALSE

    def compile_permissions(self, permissions: AttributePermissions | None) -> tuple[Predicate, Predicate]:
        """Compile view/edit permissions.

        Returns:
            Tuple of (read_allowed, write_allowed)
        """
        if permissions is None:
            return ALWAYS_FALSE, ALWAYS_FALSE

        write_allowed = role_match(permissions.edit) if permissions.edit else ALWAYS_FALSE

        if not permissions.view:
            return write_allowed, write_allowed

        # editors can always read
        return any_of(role_match(permissions.view), write_allowed), write_allowed

    def compile_selector(self, name: str, selector: AttributeSelector | None, context_id: str) -> Predicate:
        if (
            selector is not None
            and selector.scopes
            and not self.reserved.is_reserved(name)
            and self.catalog.can_originate_from_auth_flow(context_id)
        ):
            return scope_match(selector.scopes)
        return ALWAYS_TRUE

    def compile_validators(self, attribute: AttributeConfig) -> list[ValidatorMetadata]:
        """Configured validators in declaration order, then the system validators."""
        validators = [
            ValidatorMetadata(validator_id, MappingProxyType({**copy.deepcopy(cfg), IGNORE_EMPTY_VALUE: True}))
            for validator_id, cfg in attribute.validations.items()
        ]
        if attribute.required is not None:
            validators.append(ValidatorMetadata(REQUIRED_BY_METADATA_VALIDATOR))
        validators.append(ValidatorMetadata(IMMUTABLE_ATTRIBUTE_VALIDATOR))
        return validators

    def compile_attribute(
        self,
        attribute: AttributeConfig,
        context_id: str,
        gui_order: int,
        group: AttributeGroupMetadata | None = None,
    ) -> CompiledAttribute:
        """Compile every predicate slot of one attribute.

        Args:
            attribute: Attribute configuration
            context_id: Context being compiled
            gui_order: Display order assigned to the attribute
            group: Resolved group metadata, if any

        Returns:
            CompiledAttribute ready to be merged into the profile
        """
        read_allowed, write_allowed = self.compile_permissions(attribute.permissions)
        compiled = CompiledAttribute(
            config=attribute,
            gui_order=gui_order,
            validators=self.compile_validators(attribute),
            required=self.compile_required(attribute.required, context_id),
            read_allowed=read_allowed,
            write_allowed=write_allowed,
            selected=self.compile_selector(attribute.name, attribute.selector, context_id),
            group=group,
        )
        logger.debug(
            f"Compiled '{attribute.name}' for '{context_id}': required={compiled.required.describe()}, "
            f"read={compiled.read_allowed.describe()}, write={compiled.write_allowed.describe()}"
        )
        return compiled
