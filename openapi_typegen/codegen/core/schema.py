"""
Core document representation for code generation.

Converts a parsed OpenAPI document (the mapping produced by the JSON or YAML
loader) into a normalized, immutable model that the naming and recursion
passes can work with consistently.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from ...logging_config import get_logger
from .content_type import ContentType, InvalidContentTypeError
from .references import ComponentKind, parse_reference

logger = get_logger(__name__)


class SchemaConversionError(Exception):
    """Exception raised when a document cannot be converted to the model."""

    def __init__(self, message: str, path: str = "#"):
        self.path = path
        super().__init__(f"{message} (at {path})")


class ComponentNotFoundError(Exception):
    """Exception raised when a referenced component does not exist."""

    def __init__(self, kind: ComponentKind, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"Component '{name}' not found in #/components/{kind.value}")


class SchemaKind(Enum):
    """Schema variants the generator distinguishes."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    REFERENCE = "reference"
    ALL_OF = "allOf"
    ANY_OF = "anyOf"
    ONE_OF = "oneOf"
    FRAGMENT = "fragment"
    NOT = "not"
    NULL = "null"

    @property
    def is_composite(self) -> bool:
        return self in (SchemaKind.ALL_OF, SchemaKind.ANY_OF, SchemaKind.ONE_OF)


PRIMITIVE_KINDS = frozenset(
    {SchemaKind.STRING, SchemaKind.INTEGER, SchemaKind.NUMBER, SchemaKind.BOOLEAN}
)


@dataclass(frozen=True)
class Schema:
    """
    A single schema node.

    Only the fields relevant to ``kind`` are populated. ``required`` is
    derived from the enclosing object's ``required`` list, so the same
    component can be required in one place and optional in another.
    """

    kind: SchemaKind
    format: Optional[str] = None
    allowed_values: Optional[Tuple[Any, ...]] = None
    properties: Dict[str, "Schema"] = field(default_factory=dict)
    # None: unspecified, False: disallowed, True: allow any, Schema: typed
    additional_properties: Union[bool, "Schema", None] = None
    items: Optional["Schema"] = None
    subschemas: Tuple["Schema", ...] = ()
    discriminator: Optional[str] = None
    reference: Optional[str] = None
    not_schema: Optional["Schema"] = None
    required: bool = True
    nullable: bool = False
    description: Optional[str] = None

    @property
    def is_optional(self) -> bool:
        return not self.required or self.nullable

    def with_required(self, required: bool) -> "Schema":
        if required == self.required:
            return self
        return replace(self, required=required)

    @classmethod
    def ref(cls, reference: str, required: bool = True) -> "Schema":
        """Shortcut for a ``$ref`` schema."""
        return cls(kind=SchemaKind.REFERENCE, reference=reference, required=required)


@dataclass(frozen=True)
class Reference:
    """A ``$ref`` in a place where a component other than a schema is allowed."""

    ref: str


class ParameterLocation(Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


@dataclass(frozen=True)
class Content:
    """One entry of a ``content`` map."""

    content_type: ContentType
    schema: Optional[Schema] = None


@dataclass(frozen=True)
class Parameter:
    name: str
    location: ParameterLocation
    required: bool = False
    schema: Optional[Schema] = None
    content: Optional[Content] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Header:
    required: bool = False
    schema: Optional[Schema] = None
    content: Optional[Content] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class RequestBody:
    content: Tuple[Content, ...] = ()
    required: bool = False
    description: Optional[str] = None


@dataclass(frozen=True)
class Response:
    description: Optional[str] = None
    headers: Dict[str, Union[Header, Reference]] = field(default_factory=dict)
    content: Tuple[Content, ...] = ()


@dataclass(frozen=True)
class Operation:
    """An HTTP operation, in document order."""

    method: str
    path: str
    operation_id: Optional[str] = None
    parameters: Tuple[Union[Parameter, Reference], ...] = ()
    request_body: Union[RequestBody, Reference, None] = None
    responses: Dict[str, Union[Response, Reference]] = field(default_factory=dict)

    @property
    def resolved_operation_id(self) -> str:
        """The declared operation ID, or one synthesized from method and path."""
        if self.operation_id:
            return self.operation_id
        return f"{self.method.lower()}{self.path}"


@dataclass
class Components:
    """Reusable components, keyed by their name in document order."""

    schemas: Dict[str, Schema] = field(default_factory=dict)
    parameters: Dict[str, Parameter] = field(default_factory=dict)
    headers: Dict[str, Header] = field(default_factory=dict)
    request_bodies: Dict[str, RequestBody] = field(default_factory=dict)
    responses: Dict[str, Response] = field(default_factory=dict)

    def _section(self, kind: ComponentKind) -> Dict[str, Any]:
        return {
            ComponentKind.SCHEMAS: self.schemas,
            ComponentKind.PARAMETERS: self.parameters,
            ComponentKind.HEADERS: self.headers,
            ComponentKind.REQUEST_BODIES: self.request_bodies,
            ComponentKind.RESPONSES: self.responses,
        }[kind]

    def lookup(self, kind: ComponentKind, name: str) -> Any:
        """
        Find a component by kind and key.

        Raises:
            ComponentNotFoundError: If no such component exists
        """
        section = self._section(kind)
        if name not in section:
            raise ComponentNotFoundError(kind, name)
        return section[name]

    def lookup_reference(self, reference: str, kind: ComponentKind) -> Any:
        """
        Resolve one level of ``$ref`` indirection.

        Raises:
            ReferenceParsingError: If the reference cannot be parsed
            ComponentNotFoundError: If it points at a missing component or
                at a section other than ``kind``
        """
        parsed = parse_reference(reference)
        if parsed.kind is not kind:
            raise ComponentNotFoundError(kind, parsed.name)
        return self.lookup(kind, parsed.name)

    def lookup_schema(self, schema: Schema) -> Schema:
        """Resolve a reference schema to the component it points at."""
        return self.lookup_reference(schema.reference, ComponentKind.SCHEMAS)

    def resolve(self, value, kind: ComponentKind):
        """Return ``value`` itself, or the component a ``Reference`` points at."""
        if isinstance(value, Reference):
            return self.lookup_reference(value.ref, kind)
        return value


@dataclass
class Document:
    """The parts of an OpenAPI document the generator consumes."""

    title: str = ""
    version: str = ""
    openapi: str = "3.0.3"
    components: Components = field(default_factory=Components)
    operations: List[Operation] = field(default_factory=list)


HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

_TYPE_KINDS = {
    "string": SchemaKind.STRING,
    "integer": SchemaKind.INTEGER,
    "number": SchemaKind.NUMBER,
    "boolean": SchemaKind.BOOLEAN,
    "object": SchemaKind.OBJECT,
    "array": SchemaKind.ARRAY,
    "null": SchemaKind.NULL,
}


def _expect_mapping(value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaConversionError(f"Expected an object, found {type(value).__name__}", path)
    return value


def _resolve_type(raw: Dict[str, Any], path: str) -> Tuple[Optional[SchemaKind], bool]:
    """Return the schema kind named by ``type`` and whether null is allowed."""
    declared = raw.get("type")
    nullable = bool(raw.get("nullable", False))
    if declared is None:
        return None, nullable

    types = declared if isinstance(declared, list) else [declared]
    if "null" in types:
        nullable = True
        non_null = [t for t in types if t != "null"]
        types = non_null or ["null"]

    if len(types) != 1:
        # Several non-null types cannot be expressed by a single kind.
        return SchemaKind.FRAGMENT, nullable

    kind = _TYPE_KINDS.get(types[0])
    if kind is None:
        raise SchemaConversionError(f"Unknown schema type '{types[0]}'", path)
    return kind, nullable


def convert_schema(raw: Any, path: str = "#", required: bool = True) -> Schema:
    """
    Convert a raw schema mapping into a ``Schema``.

    Args:
        raw: Parsed schema (a mapping, or a boolean JSON schema)
        path: JSON path of the schema, used in error messages
        required: Whether the enclosing object lists this schema as required

    Returns:
        Converted schema

    Raises:
        SchemaConversionError: If the schema is malformed
    """
    if raw is True:
        return Schema(kind=SchemaKind.FRAGMENT, required=required)
    if raw is False:
        return Schema(kind=SchemaKind.NOT, required=required)

    raw = _expect_mapping(raw, path)
    description = raw.get("description")

    if "$ref" in raw:
        return Schema(
            kind=SchemaKind.REFERENCE,
            reference=str(raw["$ref"]),
            required=required,
            nullable=bool(raw.get("nullable", False)),
            description=description,
        )

    kind, nullable = _resolve_type(raw, path)

    for keyword, composite_kind in (
        ("allOf", SchemaKind.ALL_OF),
        ("anyOf", SchemaKind.ANY_OF),
        ("oneOf", SchemaKind.ONE_OF),
    ):
        if keyword in raw:
            children = raw[keyword]
            if not isinstance(children, list):
                raise SchemaConversionError(f"'{keyword}' must be a list", path)
            discriminator = None
            if composite_kind is SchemaKind.ONE_OF and "discriminator" in raw:
                discriminator = _expect_mapping(
                    raw["discriminator"], f"{path}/discriminator"
                ).get("propertyName")
            return Schema(
                kind=composite_kind,
                subschemas=tuple(
                    convert_schema(child, f"{path}/{keyword}/{index}")
                    for index, child in enumerate(children)
                ),
                discriminator=discriminator,
                required=required,
                nullable=nullable,
                description=description,
            )

    if "not" in raw:
        return Schema(
            kind=SchemaKind.NOT,
            not_schema=convert_schema(raw["not"], f"{path}/not"),
            required=required,
            description=description,
        )

    if kind is None:
        if "properties" in raw or "additionalProperties" in raw:
            kind = SchemaKind.OBJECT
        elif "items" in raw:
            kind = SchemaKind.ARRAY
        else:
            kind = SchemaKind.FRAGMENT

    allowed_values = None
    if "enum" in raw:
        if not isinstance(raw["enum"], list):
            raise SchemaConversionError("'enum' must be a list", path)
        allowed_values = tuple(value for value in raw["enum"] if value is not None)
        if len(allowed_values) != len(raw["enum"]):
            nullable = True

    if kind is SchemaKind.OBJECT:
        required_names = set(raw.get("required") or [])
        properties = {
            name: convert_schema(
                prop, f"{path}/properties/{name}", required=name in required_names
            )
            for name, prop in _expect_mapping(
                raw.get("properties", {}), f"{path}/properties"
            ).items()
        }
        additional = raw.get("additionalProperties")
        if isinstance(additional, dict):
            additional = convert_schema(additional, f"{path}/additionalProperties")
        elif additional is not None:
            additional = bool(additional)
        return Schema(
            kind=kind,
            properties=properties,
            additional_properties=additional,
            required=required,
            nullable=nullable,
            description=description,
        )

    if kind is SchemaKind.ARRAY:
        items = raw.get("items")
        return Schema(
            kind=kind,
            items=convert_schema(items, f"{path}/items") if items is not None else None,
            required=required,
            nullable=nullable,
            description=description,
        )

    return Schema(
        kind=kind,
        format=raw.get("format"),
        allowed_values=allowed_values,
        required=required,
        nullable=nullable,
        description=description,
    )


def _convert_content_map(raw: Any, path: str) -> Tuple[Content, ...]:
    contents = []
    for raw_type, entry in _expect_mapping(raw or {}, path).items():
        try:
            content_type = ContentType.parse(str(raw_type))
        except InvalidContentTypeError as e:
            raise SchemaConversionError(str(e), path) from e
        entry = _expect_mapping(entry or {}, f"{path}/{raw_type}")
        schema = None
        if "schema" in entry:
            schema = convert_schema(entry["schema"], f"{path}/{raw_type}/schema")
        contents.append(Content(content_type=content_type, schema=schema))
    return tuple(contents)


def _convert_single_content(raw: Dict[str, Any], path: str) -> Optional[Content]:
    if "content" not in raw:
        return None
    contents = _convert_content_map(raw["content"], f"{path}/content")
    return contents[0] if contents else None


def convert_parameter(raw: Any, path: str) -> Union[Parameter, Reference]:
    raw = _expect_mapping(raw, path)
    if "$ref" in raw:
        return Reference(str(raw["$ref"]))
    try:
        location = ParameterLocation(raw.get("in"))
    except ValueError as e:
        raise SchemaConversionError(f"Invalid parameter location '{raw.get('in')}'", path) from e
    if "name" not in raw:
        raise SchemaConversionError("Parameter is missing a name", path)

    required = bool(raw.get("required", location is ParameterLocation.PATH))
    schema = None
    if "schema" in raw:
        schema = convert_schema(raw["schema"], f"{path}/schema", required=required)
    return Parameter(
        name=str(raw["name"]),
        location=location,
        required=required,
        schema=schema,
        content=_convert_single_content(raw, path),
        description=raw.get("description"),
    )


def convert_header(raw: Any, path: str) -> Union[Header, Reference]:
    raw = _expect_mapping(raw, path)
    if "$ref" in raw:
        return Reference(str(raw["$ref"]))
    required = bool(raw.get("required", False))
    schema = None
    if "schema" in raw:
        schema = convert_schema(raw["schema"], f"{path}/schema", required=required)
    return Header(
        required=required,
        schema=schema,
        content=_convert_single_content(raw, path),
        description=raw.get("description"),
    )


def convert_request_body(raw: Any, path: str) -> Union[RequestBody, Reference]:
    raw = _expect_mapping(raw, path)
    if "$ref" in raw:
        return Reference(str(raw["$ref"]))
    return RequestBody(
        content=_convert_content_map(raw.get("content"), f"{path}/content"),
        required=bool(raw.get("required", False)),
        description=raw.get("description"),
    )


def convert_response(raw: Any, path: str) -> Union[Response, Reference]:
    raw = _expect_mapping(raw, path)
    if "$ref" in raw:
        return Reference(str(raw["$ref"]))
    headers = {
        name: convert_header(header, f"{path}/headers/{name}")
        for name, header in _expect_mapping(raw.get("headers") or {}, f"{path}/headers").items()
    }
    return Response(
        description=raw.get("description"),
        headers=headers,
        content=_convert_content_map(raw.get("content"), f"{path}/content"),
    )


def _convert_operation(
    method: str, path: str, raw: Any, shared_parameters: List[Union[Parameter, Reference]], json_path: str
) -> Operation:
    raw = _expect_mapping(raw, json_path)

    own_parameters = [
        convert_parameter(param, f"{json_path}/parameters/{index}")
        for index, param in enumerate(raw.get("parameters") or [])
    ]
    # Operation-level parameters replace path-level ones with the same name
    # and location.
    own_keys = {
        (p.name, p.location) for p in own_parameters if isinstance(p, Parameter)
    }
    parameters = [
        p
        for p in shared_parameters
        if not (isinstance(p, Parameter) and (p.name, p.location) in own_keys)
    ] + own_parameters

    request_body = None
    if "requestBody" in raw:
        request_body = convert_request_body(raw["requestBody"], f"{json_path}/requestBody")

    responses = {
        str(status): convert_response(response, f"{json_path}/responses/{status}")
        for status, response in _expect_mapping(
            raw.get("responses") or {}, f"{json_path}/responses"
        ).items()
    }

    return Operation(
        method=method,
        path=path,
        operation_id=raw.get("operationId"),
        parameters=tuple(parameters),
        request_body=request_body,
        responses=responses,
    )


def convert_document(raw: Any) -> Document:
    """
    Convert a parsed OpenAPI document into the internal model.

    Args:
        raw: Mapping produced by the JSON/YAML loader

    Returns:
        Converted document, with components and operations in document order

    Raises:
        SchemaConversionError: If the document is malformed
    """
    raw = _expect_mapping(raw, "#")
    info = raw.get("info") or {}

    raw_components = _expect_mapping(raw.get("components") or {}, "#/components")
    section_path = "#/components/{}".format

    components = Components(
        schemas={
            name: convert_schema(schema, f"{section_path('schemas')}/{name}")
            for name, schema in _expect_mapping(
                raw_components.get("schemas") or {}, section_path("schemas")
            ).items()
        },
        parameters={
            name: convert_parameter(param, f"{section_path('parameters')}/{name}")
            for name, param in _expect_mapping(
                raw_components.get("parameters") or {}, section_path("parameters")
            ).items()
        },
        headers={
            name: convert_header(header, f"{section_path('headers')}/{name}")
            for name, header in _expect_mapping(
                raw_components.get("headers") or {}, section_path("headers")
            ).items()
        },
        request_bodies={
            name: convert_request_body(body, f"{section_path('requestBodies')}/{name}")
            for name, body in _expect_mapping(
                raw_components.get("requestBodies") or {}, section_path("requestBodies")
            ).items()
        },
        responses={
            name: convert_response(response, f"{section_path('responses')}/{name}")
            for name, response in _expect_mapping(
                raw_components.get("responses") or {}, section_path("responses")
            ).items()
        },
    )

    operations = []
    for path, item in _expect_mapping(raw.get("paths") or {}, "#/paths").items():
        item_path = f"#/paths/{path}"
        item = _expect_mapping(item, item_path)
        shared_parameters = [
            convert_parameter(param, f"{item_path}/parameters/{index}")
            for index, param in enumerate(item.get("parameters") or [])
        ]
        for method, raw_operation in item.items():
            if method.lower() not in HTTP_METHODS:
                continue
            operations.append(
                _convert_operation(
                    method.lower(), path, raw_operation, shared_parameters, f"{item_path}/{method}"
                )
            )

    logger.debug(
        "Converted document with %d schemas and %d operations",
        len(components.schemas),
        len(operations),
    )
    return Document(
        title=str(info.get("title", "")),
        version=str(info.get("version", "")),
        openapi=str(raw.get("openapi", "3.0.3")),
        components=components,
        operations=operations,
    )
