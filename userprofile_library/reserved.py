"""Reserved (built-in) attribute names."""

from dataclasses import dataclass

USERNAME = "username"
EMAIL = "email"
FIRST_NAME = "firstName"
LAST_NAME = "lastName"


@dataclass(frozen=True)
class ReservedAttributes:
    """Names of the built-in attributes every context is expected to know.

    Attributes:
        identifier: Attribute identifying the user (always present)
        contact: Contact address attribute (always present)
        optional: Built-ins removed unless the configuration declares them
    """

    identifier: str = USERNAME
    contact: str = EMAIL
    optional: frozenset[str] = frozenset({FIRST_NAME, LAST_NAME})

    @property
    def mandatory(self) -> frozenset[str]:
        return frozenset({self.identifier, self.contact})

    def is_reserved(self, name: str) -> bool:
        return name in self.mandatory

    def is_optional_reserved(self, name: str) -> bool:
        return name in self.optional


DEFAULT_RESERVED_ATTRIBUTES = ReservedAttributes()
