"""User profile configuration models.

The declarative document an operator submits: attributes with permissions,
required rules, selectors, validations and annotations, plus attribute groups.

Contract:
- Inputs: Raw JSON or YAML documents
- Outputs: Validated ProfileConfig objects
- Side Effects: None
"""

from __future__ import annotations

from typing import Annotated
from typing import Any

import yaml
from pydantic import BeforeValidator
from pydantic import Field
from pydantic import PlainSerializer
from pydantic import ValidationError
from pydantic import field_validator

from userprofile_library.errors import ConfigurationParseError
from userprofile_library.models.base import CamelCaseModel


def _none_as_empty_set(v: Any) -> Any:
    return set() if v is None else v


# null in a document means "no entries"; serialized sorted for stable output
NameSet = Annotated[
    set[str],
    BeforeValidator(_none_as_empty_set),
    PlainSerializer(lambda v: sorted(v), return_type=list[str]),
]


class AttributePermissions(CamelCaseModel):
    """Roles allowed to view and edit an attribute."""

    view: NameSet = Field(default_factory=set, description="Roles allowed to view")
    edit: NameSet = Field(default_factory=set, description="Roles allowed to edit")

    def is_empty(self) -> bool:
        return not self.view and not self.edit


class AttributeRequired(CamelCaseModel):
    """Rule deciding when an attribute is required.

    A rule with neither roles nor scopes means the attribute is always
    required, unless ``always`` is given explicitly.
    """

    always: bool | None = Field(default=None, description="Always required")
    roles: NameSet = Field(default_factory=set, description="Roles for which the attribute is required")
    scopes: NameSet = Field(default_factory=set, description="Scopes that make the attribute required")

    @property
    def is_always(self) -> bool:
        if self.always is not None:
            return self.always
        return not self.roles and not self.scopes


class AttributeSelector(CamelCaseModel):
    """Scopes that make an attribute part of the profile."""

    scopes: NameSet = Field(default_factory=set, description="Scopes selecting the attribute")


class AttributeConfig(CamelCaseModel):
    """Configuration of a single attribute."""

    name: str = Field(description="Attribute name")
    display_name: str | None = Field(default=None, description="Display name or message key")
    group: str | None = Field(default=None, description="Name of the group the attribute belongs to")
    permissions: AttributePermissions | None = Field(default=None, description="View/edit permissions")
    required: AttributeRequired | None = Field(default=None, description="Required rule")
    selector: AttributeSelector | None = Field(default=None, description="Selector rule")
    validations: dict[str, dict[str, Any]] = Field(
        default_factory=dict, description="Validator configuration by validator id"
    )
    annotations: dict[str, Any] = Field(default_factory=dict, description="Free-form annotations")

    @field_validator("validations", mode="before")
    @classmethod
    def _normalize_validations(cls, v: Any) -> Any:
        if v is None:
            return {}
        if isinstance(v, dict):
            return {key: ({} if cfg is None else cfg) for key, cfg in v.items()}
        return v

    @field_validator("annotations", mode="before")
    @classmethod
    def _normalize_annotations(cls, v: Any) -> Any:
        return {} if v is None else v


class GroupConfig(CamelCaseModel):
    """Configuration of an attribute group."""

    name: str = Field(description="Group name")
    display_header: str | None = Field(default=None, description="Header shown for the group")
    display_description: str | None = Field(default=None, description="Description shown for the group")
    annotations: dict[str, Any] = Field(default_factory=dict, description="Free-form annotations")

    @field_validator("annotations", mode="before")
    @classmethod
    def _normalize_annotations(cls, v: Any) -> Any:
        return {} if v is None else v


class ProfileConfig(CamelCaseModel):
    """Complete user profile configuration."""

    attributes: list[AttributeConfig] = Field(default_factory=list, description="Declared attributes, in order")
    groups: list[GroupConfig] = Field(default_factory=list, description="Declared attribute groups")

    @field_validator("attributes", "groups", mode="before")
    @classmethod
    def _none_as_empty_list(cls, v: Any) -> Any:
        return [] if v is None else v

    def get_attribute(self, name: str) -> AttributeConfig | None:
        """Get the first attribute declared with the given name."""
        return next((a for a in self.attributes if a.name == name), None)

    def get_group(self, name: str | None) -> GroupConfig | None:
        """Get the first group declared with the given name."""
        if name is None:
            return None
        return next((g for g in self.groups if g.name == name), None)

    def attribute_names(self) -> set[str]:
        return {a.name for a in self.attributes}

    def clone(self) -> ProfileConfig:
        """Deep copy, safe to hand out to callers."""
        return self.model_copy(deep=True)


def parse_config(raw: str | bytes) -> ProfileConfig:
    """Parse a raw configuration document.

    JSON documents are accepted as-is since YAML is a superset of JSON.

    Args:
        raw: Serialized configuration (JSON or YAML)

    Returns:
        Validated configuration

    Raises:
        ConfigurationParseError: If the document is malformed
    """
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigurationParseError(f"Malformed user profile configuration: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationParseError(
            f"User profile configuration must be a mapping, got {type(data).__name__}"
        )

    try:
        return ProfileConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationParseError(f"Malformed user profile configuration: {e}") from e


def dump_config(config: ProfileConfig) -> str:
    """Serialize configuration to its camelCase JSON document."""
    return config.model_dump_json(by_alias=True, exclude_none=True, indent=2)
