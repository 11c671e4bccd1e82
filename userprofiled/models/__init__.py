"""Models for userprofiled API."""

from .errors import ErrorResponse
from .requests import EvaluateRequest
from .responses import AttributeDecisionResponse
from .responses import ContextInfo
from .responses import EvaluationResponse
from .responses import StatusResponse

__all__ = [
    "ErrorResponse",
    "EvaluateRequest",
    "AttributeDecisionResponse",
    "ContextInfo",
    "EvaluationResponse",
    "StatusResponse",
]
