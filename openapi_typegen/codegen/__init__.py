"""
OpenAPI type naming module.

Assigns collision-free, language-safe names to every type an OpenAPI
document implies and decides which of them need boxed storage.
"""

from typing import Any, Dict, Optional

from .core.config import ConfigError, GeneratorConfig, load_config
from .core.generator import CodeGenerator, GenerationResult, GeneratorError, generate_types
from .core.schema import SchemaConversionError, convert_document
from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    get_registry,
    list_supported_languages,
)


def generate_from_document(
    raw_document: Dict[str, Any],
    language: str = "swift",
    config: Optional[Any] = None,
) -> GenerationResult:
    """
    Name the types of a parsed OpenAPI document.

    Args:
        raw_document: Document as loaded from JSON or YAML
        language: Target language name or alias
        config: GeneratorConfig, dict of overrides, or config file path

    Returns:
        GenerationResult with declarations, boxed types and diagnostics

    Raises:
        RegistryError: If the language is unknown or configuration fails
        SchemaConversionError: If the document is structurally malformed
    """
    generator = get_generator(language, config)
    document = convert_document(raw_document)
    return generate_types(generator, document)


__all__ = [
    "CodeGenerator",
    "ConfigError",
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "GeneratorRegistry",
    "RegistryError",
    "SchemaConversionError",
    "convert_document",
    "generate_from_document",
    "generate_types",
    "get_generator",
    "get_language_info",
    "get_registry",
    "list_supported_languages",
    "load_config",
]
