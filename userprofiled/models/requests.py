"""Request models for userprofiled API."""

from pydantic import Field

from userprofile_library.models.base import CamelCaseModel


class EvaluateRequest(CamelCaseModel):
    """Runtime facts to evaluate compiled metadata against.

    Attributes:
        roles: Principal roles; omitted means the roles the context grants
        requested_scopes: Scopes requested in the auth flow; omitted means no flow
        client_default_scopes: Default scopes of the client driving the flow
        target_id: Identifier of the managed user, omitted on creation
        service_account_client: Client id when the managed user is a service account
    """

    roles: list[str] | None = Field(default=None, description="Principal roles")
    requested_scopes: list[str] | None = Field(default=None, description="Requested scopes")
    client_default_scopes: list[str] = Field(default_factory=list, description="Client default scopes")
    target_id: str | None = Field(default=None, description="Managed user id")
    service_account_client: str | None = Field(default=None, description="Service account client id")
