"""
Language-specific generators.

Each language supplies its reserved words, builtin type names and usage
rendering; translation is shared.
"""

from .python import PythonGenerator
from .swift import SwiftGenerator

__all__ = ["PythonGenerator", "SwiftGenerator"]
