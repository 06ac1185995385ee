"""
Base generator interface for all target languages.

A generator knows the target's reserved words and builtin types; the
translation itself is shared. ``generate`` names every type in a document
and computes which declarations need boxed storage.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Set

from ...logging_config import get_logger
from .assigner import NameCollisionError, TypeAssigner
from .config import GeneratorConfig
from .declarations import Declaration
from .diagnostics import Diagnostic, DiagnosticCollector
from .matcher import BuiltinType
from .naming import SafeNameGenerator, create_safe_name_generator
from .recursion import (
    DictNodeContainer,
    InvalidRecursionError,
    NodeNotFoundError,
    compute_boxed_types,
)
from .references import ComponentKind, ReferenceParsingError
from .schema import ComponentNotFoundError, Document
from .translator import DocumentTranslator
from .type_name import TypeName, TypeUsage

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for generation errors."""

    pass


# Document errors that abort a run.
DOCUMENT_ERRORS = (
    GeneratorError,
    ReferenceParsingError,
    ComponentNotFoundError,
    NodeNotFoundError,
    InvalidRecursionError,
    NameCollisionError,
)


@dataclass
class TranslationOutput:
    """Everything a generation run produced."""

    declarations: List[Declaration] = field(default_factory=list)
    boxed_types: Set[TypeName] = field(default_factory=set)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def find(self, fully_qualified_name: str) -> Optional[Declaration]:
        """Find a declaration (nested ones included) by its identifier path."""
        for declaration in self.declarations:
            for candidate in declaration.walk():
                if candidate.type_name.fully_qualified_name == fully_qualified_name:
                    return candidate
        return None

    @property
    def boxed_names(self) -> Set[str]:
        return {name.fully_qualified_name for name in self.boxed_types}


class CodeGenerator(ABC):
    """Abstract base class for all target language generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig(language=self.language_name)

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'swift', 'python')."""
        pass

    @property
    @abstractmethod
    def keywords(self) -> FrozenSet[str]:
        """Identifiers that generated names must not collide with."""
        pass

    @abstractmethod
    def builtin_type_names(self) -> Dict[BuiltinType, TypeName]:
        """Return the target-language name of every builtin type."""
        pass

    def render_usage(self, usage: TypeUsage) -> str:
        """Render a type usage the way the target language spells it."""
        return usage.fully_qualified_name

    def create_safe_name_generator(self) -> SafeNameGenerator:
        return create_safe_name_generator(
            self.config.naming_strategy,
            keywords=self.keywords,
            name_overrides=self.config.name_overrides,
        )

    def create_type_assigner(self) -> TypeAssigner:
        """Create a fresh naming authority; one per run."""
        return TypeAssigner(
            self.create_safe_name_generator(),
            self.builtin_type_names(),
            detect_collisions=self.config.detect_collisions,
            inline_type_suffix=self.config.inline_type_suffix,
        )

    def generate(self, document: Document) -> TranslationOutput:
        """
        Translate a document and compute its boxed types.

        Raises:
            ReferenceParsingError: For references outside ``#/components``
            ComponentNotFoundError: For references to missing components
            InvalidRecursionError: For cycles without a boxable declaration
            NameCollisionError: When collision detection is enabled and
                two document strings map to the same identifier
        """
        assigner = self.create_type_assigner()
        diagnostics = DiagnosticCollector()
        translator = DocumentTranslator(document, assigner, diagnostics)

        schemas = translator.translate_schemas()
        boxed = self.compute_boxed_types(schemas, assigner.type_name_for_location(ComponentKind.SCHEMAS))
        for declaration in schemas:
            declaration.boxed = declaration.type_name in boxed

        declarations = list(schemas)
        declarations.extend(translator.translate_component_parameters())
        declarations.extend(translator.translate_component_headers())
        declarations.extend(translator.translate_component_request_bodies())
        declarations.extend(translator.translate_component_responses())
        if self.config.include_operations:
            declarations.extend(translator.translate_operations())

        logger.info(
            "Generated %d declarations, %d boxed, %d diagnostics",
            len(declarations),
            len(boxed),
            len(diagnostics),
        )
        return TranslationOutput(
            declarations=declarations,
            boxed_types=boxed,
            diagnostics=list(diagnostics.diagnostics),
        )

    @staticmethod
    def compute_boxed_types(declarations: List[Declaration], namespace: TypeName) -> Set[TypeName]:
        """Run recursion detection over top-level schema declarations."""
        nodes = [declaration.as_type_node(namespace) for declaration in declarations]
        return compute_boxed_types(nodes, DictNodeContainer(nodes))

    def validate_document(self, document: Document) -> List[str]:
        """
        Check a document for issues worth reporting before generation.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        if not document.components.schemas and not document.operations:
            warnings.append("Document has no component schemas and no operations")

        seen_ids: Dict[str, str] = {}
        for operation in document.operations:
            where = f"{operation.method.upper()} {operation.path}"
            if not operation.operation_id:
                warnings.append(f"Operation {where} has no operationId, using '{operation.resolved_operation_id}'")
            elif operation.operation_id in seen_ids:
                warnings.append(
                    f"Duplicate operationId '{operation.operation_id}' on {where} "
                    f"and {seen_ids[operation.operation_id]}"
                )
            else:
                seen_ids[operation.operation_id] = where
            if not operation.responses:
                warnings.append(f"Operation {where} documents no responses")

        return warnings


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        output: Optional[TranslationOutput],
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            output: Declarations, boxed types and diagnostics
            warnings: Warnings from validation and rendered diagnostics
            metadata: Additional metadata about generation
        """
        self.output = output
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(output=None)
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_types(generator: CodeGenerator, document: Document) -> GenerationResult:
    """
    Run a generator with error handling.

    Document errors (bad references, missing components, unrepresentable
    recursion, name collisions) produce a failed result instead of raising.

    Args:
        generator: Generator instance
        document: Converted document

    Returns:
        GenerationResult with output, warnings, and metadata
    """
    try:
        warnings = generator.validate_document(document)
        output = generator.generate(document)
    except DOCUMENT_ERRORS as e:
        logger.error("Type generation failed: %s", e)
        return GenerationResult.error(f"Type generation failed: {e}", exception=e)

    warnings.extend(str(diagnostic) for diagnostic in output.diagnostics)

    metadata = {
        "language": generator.language_name,
        "naming_strategy": generator.config.naming_strategy,
        "title": document.title,
        "schema_count": len(document.components.schemas),
        "operation_count": len(document.operations),
        "declaration_count": sum(
            1 for declaration in output.declarations for _ in declaration.walk()
        ),
        "boxed_types": sorted(output.boxed_names),
    }

    return GenerationResult(output, warnings, metadata)
