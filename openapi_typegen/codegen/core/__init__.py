"""
Core type naming machinery shared by all target languages.
"""

from .assigner import NameCollisionError, NamingMethod, TypeAssigner
from .config import ConfigError, ConfigManager, GeneratorConfig, get_config_manager, load_config
from .content_type import ContentType, ContentTypeCategory, InvalidContentTypeError
from .declarations import Declaration, DeclarationKind, Member
from .diagnostics import Diagnostic, DiagnosticCollector, Severity
from .generator import (
    CodeGenerator,
    GenerationResult,
    GeneratorError,
    TranslationOutput,
    generate_types,
)
from .matcher import BuiltinType, TypeMatcher
from .naming import NamingStrategy, SafeNameGenerator, create_safe_name_generator
from .recursion import (
    DictNodeContainer,
    InvalidRecursionError,
    NodeNotFoundError,
    TypeNode,
    TypeNodeContainer,
    compute_boxed_types,
)
from .references import ComponentKind, ReferenceParsingError, parse_reference
from .schema import ComponentNotFoundError, Document, Schema, SchemaKind, convert_document
from .support import ReferenceStack, SupportChecker, SupportResult, UnsupportedReason
from .type_name import TypeName, TypeNameComponent, TypeUsage

__all__ = [
    "BuiltinType",
    "CodeGenerator",
    "ComponentKind",
    "ComponentNotFoundError",
    "ConfigError",
    "ConfigManager",
    "ContentType",
    "ContentTypeCategory",
    "Declaration",
    "DeclarationKind",
    "Diagnostic",
    "DiagnosticCollector",
    "DictNodeContainer",
    "Document",
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "InvalidContentTypeError",
    "InvalidRecursionError",
    "Member",
    "NameCollisionError",
    "NamingMethod",
    "NamingStrategy",
    "NodeNotFoundError",
    "ReferenceParsingError",
    "ReferenceStack",
    "SafeNameGenerator",
    "Schema",
    "SchemaKind",
    "Severity",
    "SupportChecker",
    "SupportResult",
    "TranslationOutput",
    "TypeAssigner",
    "TypeMatcher",
    "TypeName",
    "TypeNameComponent",
    "TypeNode",
    "TypeNodeContainer",
    "TypeUsage",
    "UnsupportedReason",
    "compute_boxed_types",
    "convert_document",
    "create_safe_name_generator",
    "generate_types",
    "get_config_manager",
    "load_config",
    "parse_reference",
]
