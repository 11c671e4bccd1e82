"""Error detail models for configuration validation.

Pydantic models describing a single configuration violation, shaped like API
validation error details so they can be returned to operators unchanged.
"""

from pydantic import Field

from userprofile_library.models.base import CamelCaseModel


class ConfigErrorDetail(CamelCaseModel):
    """Detail about one configuration violation.

    Attributes:
        loc: Location of the violation (path into the configuration document)
        msg: Human-readable message
        type: Machine-readable violation type
    """

    loc: list[str] = Field(..., description="Location of the violation")
    msg: str = Field(..., description="Violation message")
    type: str = Field(..., description="Violation type")

    def __str__(self) -> str:
        return f"{'.'.join(self.loc)}: {self.msg}"
