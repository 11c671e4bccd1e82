"""Status router for userprofiled API.

Provides health check and status information.
"""

import logging
import time

from fastapi import APIRouter

from .. import __version__
from ..models import StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["status"])

# Track server start time for uptime calculation
_start_time = time.time()


@router.get("/status", response_model=StatusResponse)
async def get_status() -> StatusResponse:
    """Get server status.

    Returns:
        Server status information including version and uptime
    """
    return StatusResponse(
        status="running",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Simple health status
    """
    return {"status": "healthy"}
