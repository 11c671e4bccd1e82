"""User profile library.

Compiles declarative user profile configuration into per-context metadata
whose predicates decide, at request time, which attributes are required,
readable, writable and selected.

Public Interface:
    Modules:
    - models: Configuration, context and compiled metadata models
    - predicates: Compiled predicate variants
    - compiler: Validation, predicate compilation and built-in merging
    - cache: Per-scope compiled metadata cache
    - services: Context catalog, validator registry, providers
    - storage: Raw configuration stores
    - config: Engine settings
"""

from .errors import ConfigurationParseError
from .errors import ConfigurationValidationError
from .errors import ContextIntegrityError
from .errors import FrozenMetadataError
from .errors import ProfileError
from .errors import UnknownContextError
from .models import EvaluationContext
from .models import ProfileConfig
from .models import ProfileContext
from .models import ProfileMetadata
from .services.profile_provider import DeclarativeProfileProvider
from .services.provider_factory import ProfileProviderFactory

__all__ = [
    "DeclarativeProfileProvider",
    "ProfileProviderFactory",
    "EvaluationContext",
    "ProfileConfig",
    "ProfileContext",
    "ProfileMetadata",
    "ProfileError",
    "ConfigurationParseError",
    "ConfigurationValidationError",
    "ContextIntegrityError",
    "FrozenMetadataError",
    "UnknownContextError",
]
