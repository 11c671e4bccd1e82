"""Profile context API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException

from userprofile_library.errors import UnknownContextError
from userprofile_library.services.context_catalog import ContextDescriptor
from userprofile_library.services.provider_factory import ProfileProviderFactory

from ..dependencies import get_provider_factory
from ..models import ContextInfo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/contexts", tags=["contexts"])


def _to_info(descriptor: ContextDescriptor) -> ContextInfo:
    supported = descriptor.supported_attributes
    return ContextInfo(
        context_id=descriptor.context_id,
        can_originate_from_auth_flow=descriptor.can_originate_from_auth_flow,
        roles=sorted(descriptor.roles),
        supported_attributes=sorted(supported) if supported is not None else None,
    )


@router.get("/", response_model=list[ContextInfo])
async def list_contexts(
    factory: Annotated[ProfileProviderFactory, Depends(get_provider_factory)],
) -> list[ContextInfo]:
    """List the profile contexts metadata is compiled for."""
    return [_to_info(factory.catalog.get(context_id)) for context_id in factory.catalog.context_ids()]


@router.get("/{context_id}", response_model=ContextInfo)
async def get_context(
    context_id: str,
    factory: Annotated[ProfileProviderFactory, Depends(get_provider_factory)],
) -> ContextInfo:
    """Get capabilities of one profile context.

    Raises:
        HTTPException: 404 if the context is unknown
    """
    try:
        return _to_info(factory.catalog.get(context_id))
    except UnknownContextError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
