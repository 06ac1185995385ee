"""
Type name assignment.

``TypeAssigner`` is the single naming authority of a generation run: every
component, inline schema, parameter, header and body gets its ``TypeName``
through it, so names are deterministic and hierarchical.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from ...logging_config import get_logger
from .content_type import ContentType
from .matcher import BuiltinType, TypeMatcher
from .naming import SafeNameGenerator, uppercase_first_letter
from .references import ComponentKind, parse_reference
from .schema import Content, Operation, Schema
from .type_name import TypeName, TypeNameComponent, TypeUsage

logger = get_logger(__name__)

INLINE_TYPE_SUFFIX = "Payload"

# Types and members of one parent are checked separately.
TYPE_NAMESPACE = "type"
MEMBER_NAMESPACE = "member"


class NamingMethod(Enum):
    """Where a synthesized inline type name is placed relative to its parent."""

    # New scope under the parent, e.g. a property type nested in a struct.
    APPEND_SCOPE = "append_scope"
    # Sibling of the parent, e.g. the element type of an array typealias.
    APPEND_TO_LAST_PATH_COMPONENT = "append_to_last_path_component"


class NameCollisionError(Exception):
    """Two different document strings produced the same identifier in one scope."""

    def __init__(self, scope: TypeName, identifier: str, first: str, second: str):
        self.scope = scope
        self.identifier = identifier
        self.original_names = (first, second)
        super().__init__(
            f"Identifier '{identifier}' in '{scope.fully_qualified_name}' is produced "
            f"by both '{first}' and '{second}'"
        )


class TypeAssigner:
    """
    Computes type names and type usages.

    Args:
        safe_names: Strategy producing identifiers from document strings
        builtin_type_names: Target-language names of the builtin types
        detect_collisions: Track the identifiers synthesized per scope and
            raise ``NameCollisionError`` when two different document strings
            map to the same one
        inline_type_suffix: Suffix appended to synthesized inline type names
    """

    def __init__(
        self,
        safe_names: SafeNameGenerator,
        builtin_type_names: Dict[BuiltinType, TypeName],
        detect_collisions: bool = False,
        inline_type_suffix: str = INLINE_TYPE_SUFFIX,
    ):
        self.safe_names = safe_names
        self.matcher = TypeMatcher(self, builtin_type_names)
        self.detect_collisions = detect_collisions
        self.inline_type_suffix = inline_type_suffix
        self._assigned: Dict[Tuple[str, TypeName, str], str] = {}

    # Namespaces

    @property
    def components_namespace(self) -> TypeName:
        return TypeName((TypeNameComponent.root(), TypeNameComponent("Components", "components")))

    @property
    def operations_namespace(self) -> TypeName:
        return TypeName((TypeNameComponent.root(), TypeNameComponent("Operations", "paths")))

    def type_name_for_location(self, kind: ComponentKind) -> TypeName:
        """Namespace of a components section, e.g. ``Components.Schemas``."""
        return self.components_namespace.appending(
            identifier=uppercase_first_letter(self.safe_names.type_name(kind.value)),
            json=kind.value,
        )

    def type_name_for_component(self, key: str, kind: ComponentKind = ComponentKind.SCHEMAS) -> TypeName:
        """Name of a reusable component, e.g. ``Components.Schemas.Foo``."""
        return self.scoped(self.type_name_for_location(kind), self.safe_names.type_name(key), key)

    def type_name_for_reference(self, reference: str) -> TypeName:
        """
        Name of the component a ``$ref`` points at.

        Raises:
            ExternalReferenceError: If the reference points at another document
            NonComponentReferenceError: If it points outside ``#/components``
        """
        parsed = parse_reference(reference)
        return self.type_name_for_component(parsed.name, parsed.kind)

    def type_name_for_operation(self, operation: Operation) -> TypeName:
        """Namespace of an operation, e.g. ``Operations.getPet``."""
        escaped_path = operation.path.replace("~", "~0").replace("/", "~1")
        operation_id = operation.resolved_operation_id
        return self.scoped(
            self.operations_namespace,
            self.safe_names.type_name(operation_id),
            escaped_path,
            original_name=operation_id,
        ).appending(json=operation.method)

    def scoped(
        self,
        parent: TypeName,
        identifier: str,
        json: Optional[str] = None,
        original_name: Optional[str] = None,
    ) -> TypeName:
        """
        Append a component to ``parent``, recording it for collision checks.

        Args:
            parent: Enclosing type name
            identifier: Already sanitized identifier
            json: JSON path component, if the new name maps to a document entity
            original_name: Document string the identifier was derived from,
                defaults to ``json``
        """
        if self.detect_collisions:
            self._record(TYPE_NAMESPACE, parent, identifier, original_name or json or identifier)
        return parent.appending(identifier=identifier, json=json)

    def member_name(self, parent: TypeName, original_name: str) -> str:
        """
        Identifier of a property, parameter, header or case declared in ``parent``.

        Recorded per parent, apart from nested type names, so two document
        strings sanitized to one member identifier are caught as well.
        """
        identifier = self.safe_names.member_name(original_name)
        if self.detect_collisions:
            self._record(MEMBER_NAMESPACE, parent, identifier, original_name)
        return identifier

    def _record(self, namespace: str, scope: TypeName, identifier: str, original_name: str):
        key = (namespace, scope, identifier)
        previous = self._assigned.setdefault(key, original_name)
        if previous != original_name:
            logger.debug("Name collision on %s in %s", identifier, scope)
            raise NameCollisionError(scope, identifier, previous, original_name)

    # Type usages

    def type_usage(
        self,
        hint: str,
        schema: Optional[Schema],
        parent: TypeName,
        naming_method: NamingMethod = NamingMethod.APPEND_SCOPE,
        json_component: Optional[str] = None,
    ) -> TypeUsage:
        """
        Usage for a schema found at a named site.

        Referenceable schemas reuse the existing name; anything else gets a
        new inline name derived from ``hint``, carrying the schema's
        optionality.
        """
        referenced = self.matcher.try_match_referenceable_type(schema)
        if referenced is not None:
            return referenced

        if naming_method is NamingMethod.APPEND_SCOPE:
            base = parent
        else:
            base = parent.parent

        identifier = self.safe_names.type_name(hint) + self.inline_type_suffix
        type_name = self.scoped(
            base,
            identifier,
            json_component if json_component is not None else hint,
        )
        return type_name.as_usage().with_optional(self.matcher.is_optional(schema))

    def type_usage_for_object_property(self, name: str, schema: Optional[Schema], parent: TypeName) -> TypeUsage:
        return self.type_usage(name, schema, parent)

    def type_usage_for_composite_child(self, name: str, schema: Optional[Schema], parent: TypeName) -> TypeUsage:
        """
        Usage for an allOf/anyOf/oneOf child.

        The identifier hint is capitalized, while the JSON path keeps the
        name as written.
        """
        return self.type_usage(
            uppercase_first_letter(name), schema, parent, json_component=name
        )

    def type_usage_for_array_element(self, schema: Optional[Schema], parent: TypeName) -> TypeUsage:
        """Usage for an array element, named after the array itself."""
        return self.type_usage(
            parent.short_name,
            schema,
            parent,
            naming_method=NamingMethod.APPEND_TO_LAST_PATH_COMPONENT,
        )

    def type_usage_for_parameter(self, name: str, schema: Optional[Schema], parent: TypeName) -> TypeUsage:
        return self.type_usage(name, schema, parent)

    def type_usage_for_content(self, content: Content, parent: TypeName) -> TypeUsage:
        """Usage for a request or response body in one content type."""
        return self.type_usage(
            self.content_type_name(content.content_type), content.schema, parent
        )

    def content_type_name(self, content_type: ContentType) -> str:
        return self.safe_names.content_type_name(content_type)
