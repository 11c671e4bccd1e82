"""Semantic validation of user profile configuration.

Contract:
- Inputs: Parsed ProfileConfig, validator registry
- Outputs: Every violation found, empty when the configuration is usable
- Side Effects: None
"""

import logging
import re

from userprofile_library.models.config import ProfileConfig
from userprofile_library.models.errors import ConfigErrorDetail
from userprofile_library.services.validator_registry import ValidatorRegistry

logger = logging.getLogger(__name__)

ATTRIBUTE_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9._\-]+$")


class ConfigValidator:
    """Checks a configuration before it is compiled.

    Reports all violations at once so operators can fix the configuration
    in a single pass.
    """

    def __init__(self, registry: ValidatorRegistry) -> None:
        self.registry = registry

    def validate(self, config: ProfileConfig) -> list[ConfigErrorDetail]:
        """Validate configuration.

        Args:
            config: Parsed configuration

        Returns:
            List of violations (empty if valid)
        """
        errors: list[ConfigErrorDetail] = []
        group_names = self._validate_groups(config, errors)
        self._validate_attributes(config, group_names, errors)

        if errors:
            logger.debug(f"Configuration has {len(errors)} violation(s)")
        return errors

    def _validate_groups(self, config: ProfileConfig, errors: list[ConfigErrorDetail]) -> set[str]:
        seen: set[str] = set()
        for index, group in enumerate(config.groups):
            if not group.name or not group.name.strip():
                errors.append(
                    ConfigErrorDetail(loc=["groups", str(index), "name"], msg="Group name is blank", type="blank_name")
                )
                continue
            if group.name in seen:
                errors.append(
                    ConfigErrorDetail(
                        loc=["groups", group.name],
                        msg=f"Duplicate group name '{group.name}'",
                        type="duplicate_group",
                    )
                )
            seen.add(group.name)
        return seen

    def _validate_attributes(
        self, config: ProfileConfig, group_names: set[str], errors: list[ConfigErrorDetail]
    ) -> None:
        seen: set[str] = set()
        for index, attribute in enumerate(config.attributes):
            name = attribute.name

            if not name or not name.strip():
                errors.append(
                    ConfigErrorDetail(
                        loc=["attributes", str(index), "name"], msg="Attribute name is blank", type="blank_name"
                    )
                )
                continue

            if not ATTRIBUTE_NAME_PATTERN.match(name):
                errors.append(
                    ConfigErrorDetail(
                        loc=["attributes", name, "name"],
                        msg=f"Invalid attribute name '{name}'",
                        type="invalid_name",
                    )
                )

            if name in seen:
                errors.append(
                    ConfigErrorDetail(
                        loc=["attributes", name],
                        msg=f"Duplicate attribute name '{name}'",
                        type="duplicate_attribute",
                    )
                )
            seen.add(name)

            for validator_id in attribute.validations:
                if not self.registry.is_registered(validator_id):
                    errors.append(
                        ConfigErrorDetail(
                            loc=["attributes", name, "validations", validator_id],
                            msg=f"Validator '{validator_id}' configured for attribute '{name}' does not exist",
                            type="unknown_validator",
                        )
                    )

            if attribute.group is not None and attribute.group not in group_names:
                errors.append(
                    ConfigErrorDetail(
                        loc=["attributes", name, "group"],
                        msg=f"Attribute '{name}' references unknown group '{attribute.group}'",
                        type="unknown_group",
                    )
                )
