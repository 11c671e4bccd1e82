"""Built-in default user profile configuration.

Used as the effective configuration when a realm has none stored, and as the
source of the default validators of built-in attributes.
"""

import logging
from pathlib import Path

from userprofile_library.models.config import ProfileConfig
from userprofile_library.models.config import parse_config

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_CONFIG = """# Default user profile
# Built-in attributes and the validators they carry out of the box

attributes:
  - name: username
    displayName: "${username}"
    validations:
      length:
        min: 3
        max: 255
      username-prohibited-characters: {}
      up-username-not-idn-homograph: {}
    permissions:
      view: [admin, user]
      edit: [admin, user]

  - name: email
    displayName: "${email}"
    validations:
      email: {}
      length:
        max: 255
    required:
      roles: [user]
    permissions:
      view: [admin, user]
      edit: [admin, user]

  - name: firstName
    displayName: "${firstName}"
    validations:
      length:
        max: 255
      person-name-prohibited-characters: {}
    required:
      roles: [user]
    permissions:
      view: [admin, user]
      edit: [admin, user]

  - name: lastName
    displayName: "${lastName}"
    validations:
      length:
        max: 255
      person-name-prohibited-characters: {}
    required:
      roles: [user]
    permissions:
      view: [admin, user]
      edit: [admin, user]

groups:
  - name: user-metadata
    displayHeader: User metadata
    displayDescription: Attributes, which refer to user metadata
"""


def load_default_config(path: Path | None = None) -> ProfileConfig:
    """Load the default profile configuration.

    Args:
        path: Optional document overriding the built-in default

    Returns:
        Parsed default configuration

    Raises:
        ConfigurationParseError: If the document is malformed
    """
    if path is None:
        return parse_config(DEFAULT_PROFILE_CONFIG)

    logger.info(f"Loading default user profile from {path}")
    return parse_config(Path(path).read_text(encoding="utf-8"))
