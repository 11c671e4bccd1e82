"""
Unit tests for configuration validation.

Tests that every violation is reported, including unknown validators.
"""

import pytest

from userprofile_library.compiler import ConfigValidator
from userprofile_library.models.config import ProfileConfig
from userprofile_library.models.config import parse_config
from userprofile_library.services.validator_registry import ValidatorRegistry


@pytest.mark.unit
class TestConfigValidator:
    """Test ConfigValidator."""

    def test_sample_config_is_valid(self, registry: ValidatorRegistry, sample_config: ProfileConfig) -> None:
        assert ConfigValidator(registry).validate(sample_config) == []

    def test_default_config_is_valid(self, registry: ValidatorRegistry, default_config: ProfileConfig) -> None:
        assert ConfigValidator(registry).validate(default_config) == []

    def test_unknown_validator(self, registry: ValidatorRegistry) -> None:
        config = parse_config(
            """
attributes:
  - name: nickname
    validations:
      no-such-validator: {}
"""
        )
        errors = ConfigValidator(registry).validate(config)

        assert len(errors) == 1
        assert errors[0].type == "unknown_validator"
        assert errors[0].loc == ["attributes", "nickname", "validations", "no-such-validator"]
        assert "no-such-validator" in errors[0].msg
        assert "nickname" in errors[0].msg

    def test_registering_validator_makes_config_valid(self, registry: ValidatorRegistry) -> None:
        config = parse_config("attributes: [{name: nickname, validations: {custom: {}}}]")
        validator = ConfigValidator(registry)
        assert validator.validate(config)

        registry.register("custom")

        assert validator.validate(config) == []

    def test_reports_every_violation(self, registry: ValidatorRegistry) -> None:
        config = parse_config(
            """
attributes:
  - name: "bad name"
    group: missing
  - name: nickname
  - name: nickname
    validations:
      nope: {}
  - name: "  "
groups:
  - name: personal
  - name: personal
"""
        )
        errors = ConfigValidator(registry).validate(config)

        assert sorted(e.type for e in errors) == [
            "blank_name",
            "duplicate_attribute",
            "duplicate_group",
            "invalid_name",
            "unknown_group",
            "unknown_validator",
        ]

    def test_error_detail_str(self, registry: ValidatorRegistry) -> None:
        config = parse_config("attributes: [{name: nickname, group: missing}]")
        error = ConfigValidator(registry).validate(config)[0]

        assert str(error) == "attributes.nickname.group: Attribute 'nickname' references unknown group 'missing'"
