"""
Unit tests for compiled metadata.

Tests builder decoration, cloning and the frozen state after publishing.
"""

import pytest

from userprofile_library.errors import FrozenMetadataError
from userprofile_library.models.context import EvaluationContext
from userprofile_library.models.metadata import ProfileMetadata
from userprofile_library.models.metadata import ValidatorMetadata
from userprofile_library.predicates import ALWAYS_FALSE
from userprofile_library.predicates import ALWAYS_TRUE
from userprofile_library.predicates import role_match


@pytest.fixture
def metadata() -> ProfileMetadata:
    profile = ProfileMetadata("account")
    profile.add_attribute("username", 1, validators=[ValidatorMetadata("length", {"min": 3})], write_allowed=ALWAYS_TRUE)
    profile.add_attribute("nickname", 2, read_allowed=role_match(["user"]))
    return profile


@pytest.mark.unit
class TestProfileMetadata:
    """Test ProfileMetadata building."""

    def test_add_attribute_defaults(self, metadata: ProfileMetadata) -> None:
        nickname = metadata.get_attribute("nickname")[0]

        assert nickname.required == ALWAYS_FALSE
        assert nickname.write_allowed == ALWAYS_FALSE
        assert nickname.selected == ALWAYS_TRUE
        assert nickname.validators == []

    def test_get_attribute_returns_all_entries(self, metadata: ProfileMetadata) -> None:
        metadata.add_attribute("nickname", 3)
        assert len(metadata.get_attribute("nickname")) == 2
        assert metadata.get_attribute("missing") == []

    def test_remove_attribute_counts(self, metadata: ProfileMetadata) -> None:
        assert metadata.remove_attribute("nickname") == 1
        assert metadata.remove_attribute("nickname") == 0
        assert metadata.attribute_names() == ["username"]

    def test_builders_chain(self, metadata: ProfileMetadata) -> None:
        entry = (
            metadata.get_attribute("nickname")[0]
            .set_display_name("Nick")
            .add_annotations({"a": 1})
            .add_annotations({"b": 2})
            .add_validators([ValidatorMetadata("length")])
            .remove_validators(["length"])
        )

        assert entry.display_name == "Nick"
        assert entry.annotations == {"a": 1, "b": 2}
        assert entry.validators == []

    def test_evaluate(self, metadata: ProfileMetadata) -> None:
        decisions = metadata.evaluate(EvaluationContext("account", roles=frozenset({"user"})))

        assert [(d.name, d.readable, d.writable) for d in decisions] == [
            ("username", False, True),
            ("nickname", True, False),
        ]


@pytest.mark.unit
class TestPublishing:
    """Test cloning and publishing."""

    def test_published_metadata_rejects_changes(self, metadata: ProfileMetadata) -> None:
        metadata.publish()

        with pytest.raises(FrozenMetadataError):
            metadata.add_attribute("other", 3)
        with pytest.raises(FrozenMetadataError):
            metadata.remove_attribute("username")
        with pytest.raises(FrozenMetadataError):
            metadata.get_attribute("username")[0].set_required(ALWAYS_TRUE)

    def test_published_collections_are_read_only(self, metadata: ProfileMetadata) -> None:
        metadata.publish()
        entry = metadata.get_attribute("username")[0]

        assert isinstance(entry.validators, tuple)
        with pytest.raises(TypeError):
            entry.annotations["x"] = 1

    def test_clone_of_published_is_mutable(self, metadata: ProfileMetadata) -> None:
        metadata.publish()
        copy = metadata.clone()

        copy.get_attribute("username")[0].set_required(ALWAYS_TRUE)
        copy.add_attribute("other", 3)

        assert not copy.is_published
        assert metadata.get_attribute("username")[0].required == ALWAYS_FALSE
        assert metadata.attribute_names() == ["username", "nickname"]

    def test_to_dict_serializes_predicates(self, metadata: ProfileMetadata) -> None:
        data = metadata.publish().to_dict()

        assert data["contextId"] == "account"
        nickname = data["attributes"][1]
        assert nickname["readAllowed"] == {"kind": "role-match", "roles": ["user"]}
        assert data["attributes"][0]["validators"] == [{"validatorId": "length", "config": {"min": 3}}]
