"""User profile compiler.

Public Interface:
    - ProfileCompiler: Compile configuration into per-context metadata
    - ConfigValidator: Semantic validation of configuration
    - PredicateCompiler: Per-attribute predicate compilation
    - BuiltinMerger: Merge compiled attributes with built-in metadata
    - AttributeDecorator: Hook protocol for external decoration
"""

from .compiler import ProfileCompiler
from .merger import AttributeDecorator
from .merger import BuiltinMerger
from .predicates import CompiledAttribute
from .predicates import PredicateCompiler
from .validation import ConfigValidator

__all__ = [
    "ProfileCompiler",
    "ConfigValidator",
    "PredicateCompiler",
    "CompiledAttribute",
    "BuiltinMerger",
    "AttributeDecorator",
]
