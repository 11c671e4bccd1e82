"""Response models for userprofiled API."""

from pydantic import Field

from userprofile_library.models.base import CamelCaseModel


class StatusResponse(CamelCaseModel):
    """Server status."""

    status: str
    version: str
    uptime_seconds: float


class ContextInfo(CamelCaseModel):
    """Capabilities of a profile context."""

    context_id: str
    can_originate_from_auth_flow: bool
    roles: list[str]
    supported_attributes: list[str] | None = Field(default=None, description="None when every attribute is supported")


class AttributeDecisionResponse(CamelCaseModel):
    """Evaluated predicates of one attribute."""

    name: str
    required: bool
    readable: bool
    writable: bool
    selected: bool


class EvaluationResponse(CamelCaseModel):
    """Evaluated metadata of one context."""

    realm: str
    context_id: str
    attributes: list[AttributeDecisionResponse]
