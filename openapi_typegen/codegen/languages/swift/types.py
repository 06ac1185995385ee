"""Swift names of the builtin types."""

from typing import Dict

from ...core.matcher import BuiltinType
from ...core.type_name import TypeName

SWIFT_BUILTIN_TYPES: Dict[BuiltinType, TypeName] = {
    BuiltinType.BOOL: TypeName.from_identifiers(["Swift", "Bool"]),
    BuiltinType.DOUBLE: TypeName.from_identifiers(["Swift", "Double"]),
    BuiltinType.FLOAT: TypeName.from_identifiers(["Swift", "Float"]),
    BuiltinType.INT: TypeName.from_identifiers(["Swift", "Int"]),
    BuiltinType.INT32: TypeName.from_identifiers(["Swift", "Int32"]),
    BuiltinType.INT64: TypeName.from_identifiers(["Swift", "Int64"]),
    BuiltinType.STRING: TypeName.from_identifiers(["Swift", "String"]),
    BuiltinType.DATA: TypeName.from_identifiers(["Foundation", "Data"]),
    BuiltinType.DATE: TypeName.from_identifiers(["Foundation", "Date"]),
    BuiltinType.VALUE_CONTAINER: TypeName.from_identifiers(
        ["OpenAPIRuntime", "OpenAPIValueContainer"]
    ),
    BuiltinType.OBJECT_CONTAINER: TypeName.from_identifiers(
        ["OpenAPIRuntime", "OpenAPIObjectContainer"]
    ),
    BuiltinType.ARRAY_CONTAINER: TypeName.from_identifiers(
        ["OpenAPIRuntime", "OpenAPIArrayContainer"]
    ),
}
