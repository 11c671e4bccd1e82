"""Profile contexts and the runtime facts predicates are evaluated against."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import ConfigDict
from pydantic import Field

from userprofile_library.models.base import CamelCaseModel

if TYPE_CHECKING:
    from userprofile_library.services.context_catalog import ContextCatalog


class ProfileContext(str, Enum):
    """Built-in contexts a user profile is managed in.

    - UPDATE_PROFILE: User updates the profile during an authentication flow
    - IDP_REVIEW: User reviews data brokered from an identity provider
    - ACCOUNT: User manages the profile in the account console
    - REGISTRATION: User self-registers
    - USER_API: Administrator manages users through the admin API
    - UPDATE_EMAIL: User changes the email address during an authentication flow
    """

    UPDATE_PROFILE = "update-profile"
    IDP_REVIEW = "idp-review"
    ACCOUNT = "account"
    REGISTRATION = "registration"
    USER_API = "user-api"
    UPDATE_EMAIL = "update-email"


class RealmSettings(CamelCaseModel):
    """Per-realm settings consulted when predicates are evaluated."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="default", description="Realm name")
    identifier_synthesized_from_contact: bool = Field(
        default=False, description="Whether the username is derived from the email address"
    )


@dataclass(frozen=True)
class AuthSession:
    """Scopes known for the current authentication flow.

    Granted scopes are the client's default scopes plus the scopes explicitly
    requested through the ``scope`` parameter.
    """

    requested_scopes: frozenset[str] = frozenset()
    client_default_scopes: frozenset[str] = frozenset()

    def granted_scopes(self) -> frozenset[str]:
        return self.client_default_scopes | self.requested_scopes


@dataclass(frozen=True)
class TargetEntity:
    """The user whose attributes are being managed."""

    entity_id: str | None = None
    service_account_client: str | None = None

    @property
    def is_service_account(self) -> bool:
        return self.service_account_client is not None


@dataclass(frozen=True)
class EvaluationContext:
    """Runtime facts supplied by the caller when compiled metadata is evaluated.

    Attributes:
        context_id: Context the metadata was compiled for
        roles: Roles the acting principal holds in this context
        auth_session: Authentication flow scopes, None outside an auth flow
        target: Entity being read or written, None on creation
        can_originate_from_auth_flow: Capability flag of the context
        realm: Realm settings
    """

    context_id: str
    roles: frozenset[str] = frozenset()
    auth_session: AuthSession | None = None
    target: TargetEntity | None = None
    can_originate_from_auth_flow: bool = False
    realm: RealmSettings = field(default_factory=RealmSettings)

    def granted_scopes(self) -> frozenset[str] | None:
        """Scopes requested or granted in the current flow, None without a flow."""
        if self.auth_session is None:
            return None
        return self.auth_session.granted_scopes()

    @classmethod
    def for_context(
        cls,
        catalog: ContextCatalog,
        context_id: str,
        *,
        roles: Iterable[str] | None = None,
        requested_scopes: Iterable[str] | None = None,
        client_default_scopes: Iterable[str] = (),
        target: TargetEntity | None = None,
        realm: RealmSettings | None = None,
    ) -> EvaluationContext:
        """Build an evaluation context with roles and capability taken from the catalog.

        Args:
            catalog: Context catalog describing the context
            context_id: Context identifier
            roles: Principal roles (default: the roles the context grants)
            requested_scopes: Scopes requested in the auth flow; None means no flow
            client_default_scopes: Default scopes of the client driving the flow
            target: Entity being managed
            realm: Realm settings (default: RealmSettings())

        Returns:
            EvaluationContext instance
        """
        descriptor = catalog.get(context_id)
        auth_session = None
        if requested_scopes is not None and descriptor.can_originate_from_auth_flow:
            auth_session = AuthSession(
                requested_scopes=frozenset(requested_scopes),
                client_default_scopes=frozenset(client_default_scopes),
            )
        return cls(
            context_id=descriptor.context_id,
            roles=frozenset(descriptor.roles if roles is None else roles),
            auth_session=auth_session,
            target=target,
            can_originate_from_auth_flow=descriptor.can_originate_from_auth_flow,
            realm=realm or RealmSettings(),
        )


def context_key(context_id: str) -> str:
    """Plain string identifier of a context (accepts ProfileContext members)."""
    if isinstance(context_id, ProfileContext):
        return context_id.value
    return context_id
