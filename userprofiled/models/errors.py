"""Error models for userprofiled API.

Pydantic models for error responses.
"""

from pydantic import Field

from userprofile_library.models.base import CamelCaseModel
from userprofile_library.models.errors import ConfigErrorDetail


class ErrorResponse(CamelCaseModel):
    """Standard error response.

    Attributes:
        error: Error message
        detail: Optional additional details
        validation_errors: Optional configuration violations
    """

    error: str = Field(..., description="Error message")
    detail: str | None = Field(default=None, description="Additional error details")
    validation_errors: list[ConfigErrorDetail] | None = Field(
        default=None, description="Configuration violations"
    )
