"""API routers for userprofiled.

This module contains FastAPI routers for all API endpoints.
"""

from .contexts import router as contexts_router
from .profiles import router as profiles_router
from .status import router as status_router

__all__ = [
    "contexts_router",
    "profiles_router",
    "status_router",
]
