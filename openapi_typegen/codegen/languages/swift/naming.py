"""
Swift-specific reserved words.

Generated names that collide with one of these are prefixed with an
underscore by the defensive safe name generator.
"""

# Swift keywords and contextual names that cannot be used unescaped
SWIFT_KEYWORDS = frozenset(
    {
        # Declarations
        "associatedtype",
        "class",
        "deinit",
        "enum",
        "extension",
        "fileprivate",
        "func",
        "import",
        "init",
        "inout",
        "internal",
        "let",
        "operator",
        "precedencegroup",
        "private",
        "protocol",
        "public",
        "static",
        "struct",
        "subscript",
        "typealias",
        "var",
        # Statements
        "break",
        "case",
        "catch",
        "continue",
        "default",
        "defer",
        "do",
        "else",
        "fallthrough",
        "for",
        "guard",
        "if",
        "in",
        "repeat",
        "return",
        "switch",
        "throw",
        "where",
        "while",
        # Expressions and types
        "Any",
        "as",
        "await",
        "false",
        "is",
        "nil",
        "rethrows",
        "self",
        "Self",
        "super",
        "throws",
        "true",
        "try",
        "yield",
        # Literals
        "__COLUMN__",
        "__DSO_HANDLE__",
        "__FILE__",
        "__FUNCTION__",
        "__LINE__",
        # Standard library names generated code refers to unqualified
        "Array",
        "Bool",
        "Error",
        "Int",
        "Protocol",
        "String",
        "Type",
        "type",
    }
)
