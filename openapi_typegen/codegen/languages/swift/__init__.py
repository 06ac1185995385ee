"""
Swift generator module.

Names types the way Swift OpenAPI clients and servers declare them.
"""

from .generator import SwiftGenerator
from .naming import SWIFT_KEYWORDS
from .types import SWIFT_BUILTIN_TYPES

__all__ = [
    "SwiftGenerator",
    "SWIFT_KEYWORDS",
    "SWIFT_BUILTIN_TYPES",
]
