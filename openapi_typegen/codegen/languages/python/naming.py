"""
Python-specific reserved words.

Keywords and the builtin names generated models are likely to shadow.
"""

# Python reserved keywords
PYTHON_RESERVED_WORDS = frozenset(
    {
        "False",
        "None",
        "True",
        "and",
        "as",
        "assert",
        "async",
        "await",
        "break",
        "class",
        "continue",
        "def",
        "del",
        "elif",
        "else",
        "except",
        "finally",
        "for",
        "from",
        "global",
        "if",
        "import",
        "in",
        "is",
        "lambda",
        "nonlocal",
        "not",
        "or",
        "pass",
        "raise",
        "return",
        "try",
        "while",
        "with",
        "yield",
    }
)

# Builtin names that would be shadowed by a generated class or attribute
PYTHON_BUILTIN_NAMES = frozenset(
    {
        # Types
        "bool",
        "bytearray",
        "bytes",
        "complex",
        "dict",
        "float",
        "frozenset",
        "int",
        "list",
        "object",
        "set",
        "str",
        "tuple",
        "type",
        # Decorators
        "classmethod",
        "property",
        "staticmethod",
        # Typing helpers generated code imports
        "Any",
        "Dict",
        "List",
        "Optional",
    }
)

PYTHON_KEYWORDS = PYTHON_RESERVED_WORDS | PYTHON_BUILTIN_NAMES
