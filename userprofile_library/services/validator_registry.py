"""Registry of validator ids known to the host environment.

Only existence is tracked; validators are never executed here.
"""

import logging
from collections.abc import Iterable
from threading import Lock

logger = logging.getLogger(__name__)

REQUIRED_BY_METADATA_VALIDATOR = "up-attribute-required-by-metadata-value"
IMMUTABLE_ATTRIBUTE_VALIDATOR = "up-immutable-attribute"

BUILTIN_VALIDATORS = frozenset(
    {
        "length",
        "email",
        "pattern",
        "uri",
        "integer",
        "double",
        "options",
        "local-date",
        "iso-date",
        "multivalued",
        "person-name-prohibited-characters",
        "username-prohibited-characters",
        "up-username-not-idn-homograph",
        "up-duplicate-username",
        "up-duplicate-email",
        "up-email-exists-as-username",
        "up-username-mutation",
        REQUIRED_BY_METADATA_VALIDATOR,
        IMMUTABLE_ATTRIBUTE_VALIDATOR,
    }
)


class ValidatorRegistry:
    """Set of registered validator ids, safe for concurrent use."""

    def __init__(self, validator_ids: Iterable[str] = BUILTIN_VALIDATORS) -> None:
        self._ids = set(validator_ids)
        self._lock = Lock()

    def register(self, validator_id: str) -> None:
        with self._lock:
            self._ids.add(validator_id)
        logger.debug(f"Registered validator '{validator_id}'")

    def deregister(self, validator_id: str) -> None:
        with self._lock:
            self._ids.discard(validator_id)
        logger.info(f"Deregistered validator '{validator_id}'")

    def is_registered(self, validator_id: str) -> bool:
        with self._lock:
            return validator_id in self._ids

    def validator_ids(self) -> list[str]:
        with self._lock:
            return sorted(self._ids)
