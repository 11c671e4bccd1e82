"""Context catalog.

Describes what each profile context supports: which attributes it manages,
whether it can run inside an authentication flow, and which roles it grants.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from userprofile_library.errors import UnknownContextError
from userprofile_library.models.context import ProfileContext
from userprofile_library.models.context import context_key
from userprofile_library.reserved import EMAIL

logger = logging.getLogger(__name__)

ROLE_USER = "user"
ROLE_ADMIN = "admin"


@dataclass(frozen=True)
class ContextDescriptor:
    """Capabilities of a single context.

    Attributes:
        context_id: Context identifier
        can_originate_from_auth_flow: Whether requests in this context may come from an auth flow
        roles: Roles the context grants to the acting principal
        supported_attributes: Attributes managed in the context, None for all
    """

    context_id: str
    can_originate_from_auth_flow: bool
    roles: frozenset[str]
    supported_attributes: frozenset[str] | None = None

    def is_attribute_supported(self, name: str) -> bool:
        return self.supported_attributes is None or name in self.supported_attributes


class ContextCatalog:
    """Registry of context descriptors."""

    def __init__(self, descriptors: Iterable[ContextDescriptor]) -> None:
        self._descriptors = {d.context_id: d for d in descriptors}

    def context_ids(self) -> list[str]:
        return list(self._descriptors)

    def get(self, context_id: str) -> ContextDescriptor:
        """Get descriptor for a context.

        Raises:
            UnknownContextError: If the context is not registered
        """
        descriptor = self._descriptors.get(context_key(context_id))
        if descriptor is None:
            raise UnknownContextError(f"Unknown profile context: {context_id}")
        return descriptor

    def is_attribute_supported(self, context_id: str, name: str) -> bool:
        return self.get(context_id).is_attribute_supported(name)

    def can_originate_from_auth_flow(self, context_id: str) -> bool:
        return self.get(context_id).can_originate_from_auth_flow

    def is_role_for_context(self, context_id: str, roles: Iterable[str]) -> bool:
        """Whether any of the roles is granted in the context."""
        return not self.get(context_id).roles.isdisjoint(roles)


def build_default_catalog() -> ContextCatalog:
    """Catalog of the built-in profile contexts.

    Returns:
        ContextCatalog for every ProfileContext member
    """
    user = frozenset({ROLE_USER})
    return ContextCatalog(
        [
            ContextDescriptor(ProfileContext.UPDATE_PROFILE.value, True, user),
            ContextDescriptor(ProfileContext.IDP_REVIEW.value, True, user),
            ContextDescriptor(ProfileContext.ACCOUNT.value, False, user),
            ContextDescriptor(ProfileContext.REGISTRATION.value, True, user),
            ContextDescriptor(ProfileContext.USER_API.value, False, frozenset({ROLE_ADMIN})),
            ContextDescriptor(ProfileContext.UPDATE_EMAIL.value, True, user, frozenset({EMAIL})),
        ]
    )
