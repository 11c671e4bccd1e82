"""Compiled profile metadata.

Entries are mutable while a compilation owns them and frozen once the
enclosing ProfileMetadata is published.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from types import MappingProxyType
from typing import Any

from userprofile_library.errors import FrozenMetadataError
from userprofile_library.models.config import GroupConfig
from userprofile_library.models.context import EvaluationContext
from userprofile_library.models.context import context_key
from userprofile_library.predicates import ALWAYS_FALSE
from userprofile_library.predicates import ALWAYS_TRUE
from userprofile_library.predicates import Predicate


@dataclass(frozen=True)
class ValidatorMetadata:
    """Validator id plus the configuration it runs with."""

    validator_id: str
    config: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"validatorId": self.validator_id, "config": dict(self.config)}


@dataclass(frozen=True)
class AttributeGroupMetadata:
    """Group an attribute is displayed in."""

    name: str
    display_header: str | None = None
    display_description: str | None = None
    annotations: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_config(cls, group: GroupConfig | None) -> AttributeGroupMetadata | None:
        if group is None:
            return None
        return cls(
            name=group.name,
            display_header=group.display_header,
            display_description=group.display_description,
            annotations=MappingProxyType(copy.deepcopy(dict(group.annotations))),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "displayHeader": self.display_header,
            "displayDescription": self.display_description,
            "annotations": dict(self.annotations),
        }


@dataclass(frozen=True)
class AttributeDecision:
    """Outcome of evaluating one attribute's predicates."""

    name: str
    required: bool
    readable: bool
    writable: bool
    selected: bool


@dataclass
class AttributeMetadata:
    """Compiled metadata of one attribute in one context."""

    name: str
    gui_order: int = 0
    validators: list[ValidatorMetadata] = field(default_factory=list)
    required: Predicate = ALWAYS_FALSE
    read_allowed: Predicate = ALWAYS_FALSE
    write_allowed: Predicate = ALWAYS_FALSE
    selected: Predicate = ALWAYS_TRUE
    group: AttributeGroupMetadata | None = None
    display_name: str | None = None
    annotations: dict[str, Any] = field(default_factory=dict)
    _published: bool = field(default=False, init=False, repr=False, compare=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_published", False):
            raise FrozenMetadataError(f"Metadata of attribute '{self.name}' is published and cannot change")
        super().__setattr__(name, value)

    @property
    def is_published(self) -> bool:
        return self._published

    # Builder methods

    def add_annotations(self, annotations: Mapping[str, Any] | None) -> AttributeMetadata:
        if annotations:
            self.annotations = {**self.annotations, **annotations}
        return self

    def set_display_name(self, display_name: str | None) -> AttributeMetadata:
        self.display_name = display_name
        return self

    def set_gui_order(self, gui_order: int) -> AttributeMetadata:
        self.gui_order = gui_order
        return self

    def set_group(self, group: AttributeGroupMetadata | None) -> AttributeMetadata:
        self.group = group
        return self

    def set_read_allowed(self, predicate: Predicate) -> AttributeMetadata:
        self.read_allowed = predicate
        return self

    def set_write_allowed(self, predicate: Predicate) -> AttributeMetadata:
        self.write_allowed = predicate
        return self

    def set_required(self, predicate: Predicate) -> AttributeMetadata:
        self.required = predicate
        return self

    def set_selected(self, predicate: Predicate) -> AttributeMetadata:
        self.selected = predicate
        return self

    def add_validators(self, validators: Iterable[ValidatorMetadata]) -> AttributeMetadata:
        self.validators = [*self.validators, *validators]
        return self

    def remove_validators(self, validator_ids: Iterable[str]) -> AttributeMetadata:
        ids = set(validator_ids)
        self.validators = [v for v in self.validators if v.validator_id not in ids]
        return self

    def publish(self) -> AttributeMetadata:
        """Freeze the entry; sequences become tuples and mappings read-only copies."""
        if self._published:
            return self
        self.validators = tuple(
            ValidatorMetadata(v.validator_id, MappingProxyType(copy.deepcopy(dict(v.config)))) for v in self.validators
        )
        self.annotations = MappingProxyType(copy.deepcopy(dict(self.annotations)))
        self._published = True
        return self

    def clone(self) -> AttributeMetadata:
        """Unpublished copy that can be decorated independently."""
        return AttributeMetadata(
            name=self.name,
            gui_order=self.gui_order,
            validators=list(self.validators),
            required=self.required,
            read_allowed=self.read_allowed,
            write_allowed=self.write_allowed,
            selected=self.selected,
            group=self.group,
            display_name=self.display_name,
            annotations=dict(self.annotations),
        )

    # Evaluation

    def is_required(self, context: EvaluationContext) -> bool:
        return self.required(context)

    def is_readable(self, context: EvaluationContext) -> bool:
        return self.read_allowed(context)

    def is_writable(self, context: EvaluationContext) -> bool:
        return self.write_allowed(context)

    def is_selected(self, context: EvaluationContext) -> bool:
        return self.selected(context)

    def evaluate(self, context: EvaluationContext) -> AttributeDecision:
        return AttributeDecision(
            name=self.name,
            required=self.is_required(context),
            readable=self.is_readable(context),
            writable=self.is_writable(context),
            selected=self.is_selected(context),
        )

    def to_dict(self) -> dict:
        """Diagnostic view with predicates in their serialized form."""
        return {
            "name": self.name,
            "displayName": self.display_name,
            "guiOrder": self.gui_order,
            "group": self.group.to_dict() if self.group else None,
            "annotations": dict(self.annotations),
            "validators": [v.to_dict() for v in self.validators],
            "required": self.required.to_dict(),
            "readAllowed": self.read_allowed.to_dict(),
            "writeAllowed": self.write_allowed.to_dict(),
            "selected": self.selected.to_dict(),
        }


class ProfileMetadata:
    """Ordered attribute metadata compiled for one context."""

    def __init__(self, context_id: str, attributes: Iterable[AttributeMetadata] = ()) -> None:
        self.context_id = context_key(context_id)
        self._attributes: list[AttributeMetadata] | tuple[AttributeMetadata, ...] = list(attributes)
        self._published = False

    def __iter__(self) -> Iterator[AttributeMetadata]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __repr__(self) -> str:
        return f"ProfileMetadata(context_id={self.context_id!r}, attributes={self.attribute_names()!r})"

    @property
    def attributes(self) -> tuple[AttributeMetadata, ...]:
        return tuple(self._attributes)

    @property
    def is_published(self) -> bool:
        return self._published

    def attribute_names(self) -> list[str]:
        return [a.name for a in self._attributes]

    def get_attribute(self, name: str) -> list[AttributeMetadata]:
        """All entries registered under the name (a context may register several)."""
        return [a for a in self._attributes if a.name == name]

    def _check_mutable(self) -> None:
        if self._published:
            raise FrozenMetadataError(f"Metadata for context '{self.context_id}' is published and cannot change")

    def add_attribute(
        self,
        name: str,
        gui_order: int,
        validators: Iterable[ValidatorMetadata] = (),
        selected: Predicate = ALWAYS_TRUE,
        write_allowed: Predicate = ALWAYS_FALSE,
        required: Predicate = ALWAYS_FALSE,
        read_allowed: Predicate = ALWAYS_FALSE,
    ) -> AttributeMetadata:
        """Append a new entry and return it for further decoration."""
        self._check_mutable()
        metadata = AttributeMetadata(
            name=name,
            gui_order=gui_order,
            validators=list(validators),
            selected=selected,
            write_allowed=write_allowed,
            required=required,
            read_allowed=read_allowed,
        )
        self._attributes.append(metadata)
        return metadata

    def remove_attribute(self, name: str) -> int:
        """Remove every entry with the name; returns how many were removed."""
        self._check_mutable()
        before = len(self._attributes)
        self._attributes = [a for a in self._attributes if a.name != name]
        return before - len(self._attributes)

    def clone(self) -> ProfileMetadata:
        """Unpublished deep copy; predicates are immutable and shared."""
        return ProfileMetadata(self.context_id, (a.clone() for a in self._attributes))

    def publish(self) -> ProfileMetadata:
        """Freeze this metadata and all of its entries."""
        if not self._published:
            for attribute in self._attributes:
                attribute.publish()
            self._attributes = tuple(self._attributes)
            self._published = True
        return self

    def evaluate(self, context: EvaluationContext) -> list[AttributeDecision]:
        return [a.evaluate(context) for a in self._attributes]

    def to_dict(self) -> dict:
        return {
            "contextId": self.context_id,
            "attributes": [a.to_dict() for a in self._attributes],
        }
