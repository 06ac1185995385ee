"""
Python generator module.

Names types for Python dataclass or TypedDict models.
"""

from .generator import PythonGenerator
from .naming import PYTHON_BUILTIN_NAMES, PYTHON_KEYWORDS, PYTHON_RESERVED_WORDS
from .types import PYTHON_BUILTIN_TYPES

__all__ = [
    "PythonGenerator",
    "PYTHON_KEYWORDS",
    "PYTHON_RESERVED_WORDS",
    "PYTHON_BUILTIN_NAMES",
    "PYTHON_BUILTIN_TYPES",
]
