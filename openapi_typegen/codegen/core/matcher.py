"""
Matching schemas to builtin and referenceable types.

A schema is *referenceable* when it can be named without synthesizing a new
declaration: it maps to a builtin type (possibly wrapped in arrays) or is a
``$ref`` to a component. Every other schema is *inlinable* and gets a new
type scoped under its use site.
"""

from enum import Enum
from typing import Dict, Optional

from .schema import Schema, SchemaKind
from .type_name import TypeName, TypeUsage


class BuiltinType(Enum):
    """Builtin types a schema can map to; target languages name them."""

    BOOL = "bool"
    DOUBLE = "double"
    FLOAT = "float"
    INT = "int"
    INT32 = "int32"
    INT64 = "int64"
    STRING = "string"
    DATA = "data"
    DATE = "date"
    VALUE_CONTAINER = "value_container"
    OBJECT_CONTAINER = "object_container"
    ARRAY_CONTAINER = "array_container"


class TypeMatcher:
    """
    Classifies schemas as builtin, referenceable or inlinable.

    Args:
        assigner: Naming authority used to name ``$ref`` targets; any object
            with a ``type_name_for_reference`` method
        builtin_type_names: Target-language names of the builtin types
    """

    def __init__(self, assigner, builtin_type_names: Dict[BuiltinType, TypeName]):
        self.assigner = assigner
        self.builtin_type_names = builtin_type_names

    def builtin(self, builtin_type: BuiltinType) -> TypeUsage:
        return self.builtin_type_names[builtin_type].as_usage()

    def try_match_builtin_type(self, schema: Schema) -> Optional[TypeUsage]:
        """
        Return the builtin usage for ``schema``, recursing through arrays.

        Schemas with allowed values never match, since enums always get a
        named type. Optionality is not applied.
        """
        return self._try_match_recursive(schema, self._match_builtin_non_recursive)

    def try_match_referenceable_type(self, schema: Schema) -> Optional[TypeUsage]:
        """
        Return a usage for ``schema`` if it is a builtin or a ``$ref``.

        The schema's own optionality is applied to the result.

        Raises:
            ReferenceParsingError: If a ``$ref`` cannot be named
        """
        usage = self._try_match_recursive(schema, self._match_referenceable_non_recursive)
        if usage is None:
            return None
        return usage.with_optional(self.is_optional(schema))

    def is_referenceable(self, schema: Optional[Schema]) -> bool:
        """Whether ``schema`` can be used without defining a new type."""
        if schema is None:
            # An unspecified schema is a fragment, which is a builtin.
            return True
        if schema.kind is SchemaKind.ARRAY:
            return schema.items is None or self.is_referenceable(schema.items)
        if schema.kind is SchemaKind.REFERENCE:
            return True
        return self._match_builtin_non_recursive(schema) is not None

    def is_inlinable(self, schema: Optional[Schema]) -> bool:
        """Whether ``schema`` needs a new type defined at its use site."""
        return not self.is_referenceable(schema)

    @staticmethod
    def is_optional(schema: Optional[Schema]) -> bool:
        return schema is not None and schema.is_optional

    def _try_match_recursive(self, schema: Optional[Schema], match) -> Optional[TypeUsage]:
        if schema is None:
            return self.builtin(BuiltinType.VALUE_CONTAINER)
        if schema.kind is SchemaKind.ARRAY and schema.items is not None:
            element = self._try_match_recursive(schema.items, match)
            if element is None:
                return None
            # Element optionality is carried by the element usage itself.
            return element.as_array()
        return match(schema)

    def _match_referenceable_non_recursive(self, schema: Schema) -> Optional[TypeUsage]:
        if schema.kind is SchemaKind.REFERENCE:
            return self.assigner.type_name_for_reference(schema.reference).as_usage()
        return self._match_builtin_non_recursive(schema)

    def _match_builtin_non_recursive(self, schema: Schema) -> Optional[TypeUsage]:
        if schema.allowed_values is not None:
            return None

        kind = schema.kind
        if kind is SchemaKind.BOOLEAN:
            return self.builtin(BuiltinType.BOOL)
        if kind is SchemaKind.NUMBER:
            if schema.format == "float":
                return self.builtin(BuiltinType.FLOAT)
            return self.builtin(BuiltinType.DOUBLE)
        if kind is SchemaKind.INTEGER:
            if schema.format == "int32":
                return self.builtin(BuiltinType.INT32)
            if schema.format == "int64":
                return self.builtin(BuiltinType.INT64)
            return self.builtin(BuiltinType.INT)
        if kind is SchemaKind.STRING:
            if schema.format == "binary":
                return self.builtin(BuiltinType.DATA)
            if schema.format == "date-time":
                return self.builtin(BuiltinType.DATE)
            return self.builtin(BuiltinType.STRING)
        if kind is SchemaKind.FRAGMENT:
            return self.builtin(BuiltinType.VALUE_CONTAINER)
        if kind is SchemaKind.OBJECT:
            if not schema.properties and schema.additional_properties is None:
                return self.builtin(BuiltinType.OBJECT_CONTAINER)
            return None
        if kind is SchemaKind.ARRAY and schema.items is None:
            return self.builtin(BuiltinType.ARRAY_CONTAINER)
        return None
