"""
Python generator implementation.

Names types for Python models: keywords and common builtins are escaped,
builtin types come from ``builtins``, ``datetime`` and ``typing``, and
usages are spelled with ``typing`` generics.
"""

from typing import Dict, FrozenSet

from ...core.generator import CodeGenerator
from ...core.matcher import BuiltinType
from ...core.type_name import TypeName, TypeUsage, UsageKind
from .naming import PYTHON_KEYWORDS
from .types import PYTHON_BUILTIN_TYPES


class PythonGenerator(CodeGenerator):
    """Type naming for Python."""

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "python"

    @property
    def keywords(self) -> FrozenSet[str]:
        return PYTHON_KEYWORDS

    def builtin_type_names(self) -> Dict[BuiltinType, TypeName]:
        return dict(PYTHON_BUILTIN_TYPES)

    def render_usage(self, usage: TypeUsage) -> str:
        """
        Render a usage with ``typing`` generics.

        Builtin names drop their module prefix, e.g. an optional array of
        strings renders as ``Optional[List[str]]``.
        """
        type_name = usage.type_name
        if type_name.identifier_path_components[0] == "builtins":
            rendered = type_name.short_name
        else:
            rendered = type_name.fully_qualified_name

        for kind in usage.wrappers:
            if kind is UsageKind.OPTIONAL:
                rendered = f"Optional[{rendered}]"
            elif kind is UsageKind.ARRAY:
                rendered = f"List[{rendered}]"
            else:
                rendered = f"Dict[str, {rendered}]"
        return rendered
