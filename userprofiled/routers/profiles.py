"""User profile configuration and metadata API endpoints."""

import json
import logging
from typing import Annotated
from typing import Any

from fastapi import APIRouter
from fastapi import Body
from fastapi import Depends
from fastapi import HTTPException

from userprofile_library.errors import ConfigurationParseError
from userprofile_library.errors import ConfigurationValidationError
from userprofile_library.errors import UnknownContextError
from userprofile_library.models.config import ProfileConfig
from userprofile_library.models.context import TargetEntity
from userprofile_library.services.profile_provider import DeclarativeProfileProvider
from userprofile_library.services.provider_factory import ProfileProviderFactory

from ..dependencies import get_provider_factory
from ..models import AttributeDecisionResponse
from ..models import ErrorResponse
from ..models import EvaluateRequest
from ..models import EvaluationResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/realms/{realm}/profile", tags=["profile"])


def get_provider(
    realm: str,
    factory: Annotated[ProfileProviderFactory, Depends(get_provider_factory)],
) -> DeclarativeProfileProvider:
    """Get the profile provider of the realm in the path.

    Returns:
        DeclarativeProfileProvider instance
    """
    return factory.create(realm)


def _configuration_error(exc: ConfigurationParseError | ConfigurationValidationError) -> HTTPException:
    """Map a configuration error to a 400 carrying every violation."""
    body = ErrorResponse(
        error="Invalid user profile configuration",
        detail=str(exc),
        validation_errors=exc.errors if isinstance(exc, ConfigurationValidationError) else None,
    )
    return HTTPException(status_code=400, detail=body.model_dump(by_alias=True, exclude_none=True))


@router.get("", response_model=ProfileConfig, response_model_exclude_none=True)
async def get_configuration(
    provider: Annotated[DeclarativeProfileProvider, Depends(get_provider)],
) -> ProfileConfig:
    """Get the effective configuration (stored, else default).

    Raises:
        HTTPException: 400 if the stored configuration cannot be parsed
    """
    try:
        return provider.get_configuration()
    except ConfigurationParseError as exc:
        raise _configuration_error(exc) from exc


@router.put("", response_model=ProfileConfig, response_model_exclude_none=True)
async def set_configuration(
    document: Annotated[dict[str, Any], Body()],
    provider: Annotated[DeclarativeProfileProvider, Depends(get_provider)],
) -> ProfileConfig:
    """Replace the realm's configuration.

    Args:
        document: Configuration document
        provider: Profile provider of the realm

    Returns:
        The effective configuration after the change

    Raises:
        HTTPException: 400 with every violation if the document is rejected
    """
    try:
        provider.set_configuration(json.dumps(document))
        return provider.get_configuration()
    except (ConfigurationParseError, ConfigurationValidationError) as exc:
        logger.info(f"Rejected configuration for realm '{provider.scope}': {exc}")
        raise _configuration_error(exc) from exc


@router.delete("", status_code=204)
async def clear_configuration(
    provider: Annotated[DeclarativeProfileProvider, Depends(get_provider)],
) -> None:
    """Clear the stored configuration; the default applies again."""
    provider.set_configuration(None)


@router.get("/metadata/{context_id}")
async def get_metadata(
    context_id: str,
    provider: Annotated[DeclarativeProfileProvider, Depends(get_provider)],
) -> dict[str, Any]:
    """Get compiled metadata of a context with predicates in serialized form.

    Raises:
        HTTPException:
            - 404 if the context is unknown
            - 400 if the stored configuration is rejected
    """
    try:
        return provider.get_compiled(context_id).to_dict()
    except UnknownContextError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (ConfigurationParseError, ConfigurationValidationError) as exc:
        raise _configuration_error(exc) from exc


@router.post("/metadata/{context_id}/evaluate", response_model=EvaluationResponse)
async def evaluate_metadata(
    context_id: str,
    request: EvaluateRequest,
    provider: Annotated[DeclarativeProfileProvider, Depends(get_provider)],
) -> EvaluationResponse:
    """Evaluate compiled metadata of a context against runtime facts.

    Raises:
        HTTPException:
            - 404 if the context is unknown
            - 400 if the stored configuration is rejected
    """
    target = None
    if request.target_id is not None or request.service_account_client is not None:
        target = TargetEntity(entity_id=request.target_id, service_account_client=request.service_account_client)

    try:
        metadata = provider.get_compiled(context_id)
        context = provider.evaluation_context(
            context_id,
            roles=request.roles,
            requested_scopes=request.requested_scopes,
            client_default_scopes=request.client_default_scopes,
            target=target,
        )
    except UnknownContextError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (ConfigurationParseError, ConfigurationValidationError) as exc:
        raise _configuration_error(exc) from exc

    return EvaluationResponse(
        realm=provider.scope,
        context_id=metadata.context_id,
        attributes=[
            AttributeDecisionResponse(
                name=decision.name,
                required=decision.required,
                readable=decision.readable,
                writable=decision.writable,
                selected=decision.selected,
            )
            for decision in metadata.evaluate(context)
        ],
    )
