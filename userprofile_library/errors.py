"""Exceptions raised by the profile compiler and provider."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from userprofile_library.models.errors import ConfigErrorDetail


class ProfileError(Exception):
    """Base class for user profile errors."""


class ConfigurationParseError(ProfileError):
    """Raised when a raw configuration document cannot be parsed."""


class ConfigurationValidationError(ProfileError):
    """Raised when a configuration is structurally valid but semantically wrong.

    Carries every violation found, never only the first.
    """

    def __init__(self, errors: list[ConfigErrorDetail], scope: str | None = None) -> None:
        self.errors = list(errors)
        self.scope = scope
        where = f" for '{scope}'" if scope else ""
        details = "; ".join(str(e) for e in self.errors)
        super().__init__(f"User profile configuration{where} is invalid: {details}")


class ContextIntegrityError(ProfileError):
    """Raised when a context supports a reserved attribute but has no base entry for it."""


class UnknownContextError(ProfileError):
    """Raised when no base metadata is bound to a context."""


class FrozenMetadataError(ProfileError):
    """Raised on an attempt to mutate published metadata."""
