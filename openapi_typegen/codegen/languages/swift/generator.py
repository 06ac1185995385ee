"""
Swift generator implementation.

Names types for Swift: keywords are escaped, builtins live in the
``Swift``, ``Foundation`` and ``OpenAPIRuntime`` modules, and usages are
spelled with Swift sugar (``T?``, ``[T]``, ``[String: T]``).
"""

from typing import Dict, FrozenSet

from ...core.generator import CodeGenerator
from ...core.matcher import BuiltinType
from ...core.type_name import TypeName
from .naming import SWIFT_KEYWORDS
from .types import SWIFT_BUILTIN_TYPES


class SwiftGenerator(CodeGenerator):
    """Type naming for Swift."""

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "swift"

    @property
    def keywords(self) -> FrozenSet[str]:
        return SWIFT_KEYWORDS

    def builtin_type_names(self) -> Dict[BuiltinType, TypeName]:
        return dict(SWIFT_BUILTIN_TYPES)
