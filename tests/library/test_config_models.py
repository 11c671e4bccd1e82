"""
Unit tests for configuration models.

Tests document parsing, null normalization, the required rule and
serialization back to the camelCase document.
"""

import json

import pytest

from userprofile_library.errors import ConfigurationParseError
from userprofile_library.models.config import AttributeRequired
from userprofile_library.models.config import ProfileConfig
from userprofile_library.models.config import dump_config
from userprofile_library.models.config import parse_config


@pytest.mark.unit
class TestParseConfig:
    """Test parse_config."""

    def test_parses_yaml(self, sample_config: ProfileConfig) -> None:
        assert [a.name for a in sample_config.attributes] == ["username", "email", "nickname", "locale"]
        nickname = sample_config.get_attribute("nickname")
        assert nickname is not None
        assert nickname.display_name == "Nickname"
        assert nickname.permissions.view == {"user"}
        assert nickname.annotations == {"inputType": "text"}

    def test_parses_json(self) -> None:
        config = parse_config('{"attributes": [{"name": "nickname", "displayName": "Nick"}]}')
        assert config.attributes[0].display_name == "Nick"

    def test_nulls_become_empty(self) -> None:
        config = parse_config(
            """
attributes:
  - name: nickname
    validations:
      length:
    annotations:
    permissions:
      view:
      edit: [admin]
groups:
"""
        )
        attribute = config.attributes[0]
        assert attribute.validations == {"length": {}}
        assert attribute.annotations == {}
        assert attribute.permissions.view == set()
        assert config.groups == []

    def test_malformed_yaml_raises(self) -> None:
        with pytest.raises(ConfigurationParseError):
            parse_config("attributes: [unclosed")

    def test_non_mapping_raises(self) -> None:
        with pytest.raises(ConfigurationParseError, match="must be a mapping"):
            parse_config("- just\n- a list\n")

    def test_wrong_shape_raises(self) -> None:
        with pytest.raises(ConfigurationParseError):
            parse_config('{"attributes": [{"displayName": "no name"}]}')


@pytest.mark.unit
class TestAttributeRequired:
    """Test the always-required rule."""

    def test_empty_rule_is_always(self) -> None:
        assert AttributeRequired().is_always

    def test_roles_or_scopes_make_it_conditional(self) -> None:
        assert not AttributeRequired(roles={"user"}).is_always
        assert not AttributeRequired(scopes={"profile"}).is_always

    def test_explicit_always_wins(self) -> None:
        assert AttributeRequired(always=True, roles={"user"}).is_always
        assert not AttributeRequired(always=False).is_always


@pytest.mark.unit
class TestDumpConfig:
    """Test configuration serialization."""

    def test_dump_uses_camel_case_and_sorted_sets(self, sample_config: ProfileConfig) -> None:
        data = json.loads(dump_config(sample_config))

        email = data["attributes"][1]
        assert email["permissions"]["view"] == ["admin", "user"]
        assert "displayHeader" in data["groups"][0]
        assert "display_name" not in data["attributes"][2]

    def test_dump_then_parse_is_equal(self, sample_config: ProfileConfig) -> None:
        assert parse_config(dump_config(sample_config)) == sample_config

    def test_clone_is_independent(self, sample_config: ProfileConfig) -> None:
        copy = sample_config.clone()
        copy.attributes[0].validations["length"]["min"] = 10

        assert sample_config.attributes[0].validations["length"]["min"] == 3
