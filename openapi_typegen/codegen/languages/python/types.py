"""Python names of the builtin types."""

from typing import Dict

from ...core.matcher import BuiltinType
from ...core.type_name import TypeName

PYTHON_BUILTIN_TYPES: Dict[BuiltinType, TypeName] = {
    BuiltinType.BOOL: TypeName.from_identifiers(["builtins", "bool"]),
    BuiltinType.DOUBLE: TypeName.from_identifiers(["builtins", "float"]),
    BuiltinType.FLOAT: TypeName.from_identifiers(["builtins", "float"]),
    BuiltinType.INT: TypeName.from_identifiers(["builtins", "int"]),
    BuiltinType.INT32: TypeName.from_identifiers(["builtins", "int"]),
    BuiltinType.INT64: TypeName.from_identifiers(["builtins", "int"]),
    BuiltinType.STRING: TypeName.from_identifiers(["builtins", "str"]),
    BuiltinType.DATA: TypeName.from_identifiers(["builtins", "bytes"]),
    BuiltinType.DATE: TypeName.from_identifiers(["datetime", "datetime"]),
    BuiltinType.VALUE_CONTAINER: TypeName.from_identifiers(["typing", "Any"]),
    BuiltinType.OBJECT_CONTAINER: TypeName.from_identifiers(["builtins", "dict"]),
    BuiltinType.ARRAY_CONTAINER: TypeName.from_identifiers(["builtins", "list"]),
}
