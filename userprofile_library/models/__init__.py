"""Models for userprofile_library."""

from .config import AttributeConfig
from .config import AttributePermissions
from .config import AttributeRequired
from .config import AttributeSelector
from .config import GroupConfig
from .config import ProfileConfig
from .config import dump_config
from .config import parse_config
from .context import AuthSession
from .context import EvaluationContext
from .context import ProfileContext
from .context import RealmSettings
from .context import TargetEntity
from .errors import ConfigErrorDetail
from .metadata import AttributeDecision
from .metadata import AttributeGroupMetadata
from .metadata import AttributeMetadata
from .metadata import ProfileMetadata
from .metadata import ValidatorMetadata

__all__ = [
    "AttributeConfig",
    "AttributePermissions",
    "AttributeRequired",
    "AttributeSelector",
    "GroupConfig",
    "ProfileConfig",
    "parse_config",
    "dump_config",
    "AuthSession",
    "EvaluationContext",
    "ProfileContext",
    "RealmSettings",
    "TargetEntity",
    "ConfigErrorDetail",
    "AttributeDecision",
    "AttributeGroupMetadata",
    "AttributeMetadata",
    "ProfileMetadata",
    "ValidatorMetadata",
]
