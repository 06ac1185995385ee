"""
Translation of an OpenAPI document into named declarations.

Walks components and operations, asks the support checker before touching
any schema, and names every type through the ``TypeAssigner``. The output
is a list of structural declarations in document order.
"""

from typing import Dict, List, Optional, Union

from ...logging_config import get_logger
from .assigner import NamingMethod, TypeAssigner
from .content_type import ContentTypeCategory
from .declarations import Declaration, DeclarationKind, Member
from .diagnostics import DiagnosticCollector
from .http_status import status_case_name
from .matcher import BuiltinType
from .naming import uppercase_first_letter
from .references import ComponentKind, parse_reference
from .schema import (
    Content,
    Document,
    Header,
    Operation,
    Parameter,
    ParameterLocation,
    Reference,
    RequestBody,
    Response,
    Schema,
    SchemaKind,
)
from .support import SupportChecker

logger = get_logger(__name__)

PARAMETER_STRUCT_NAMES = {
    ParameterLocation.PATH: ("Path", "path"),
    ParameterLocation.QUERY: ("Query", "query"),
    ParameterLocation.HEADER: ("Headers", "headers"),
    ParameterLocation.COOKIE: ("Cookies", "cookies"),
}


class DocumentTranslator:
    """
    Translates one document.

    Args:
        document: Converted document
        assigner: Naming authority for this run
        diagnostics: Collector for skipped, unsupported parts
    """

    def __init__(self, document: Document, assigner: TypeAssigner, diagnostics: DiagnosticCollector):
        self.document = document
        self.components = document.components
        self.assigner = assigner
        self.matcher = assigner.matcher
        self.safe_names = assigner.safe_names
        self.diagnostics = diagnostics
        self.support = SupportChecker(self.components)

    # Components

    def translate_schemas(self) -> List[Declaration]:
        """Translate every component schema, in document order."""
        declarations = []
        for key, schema in self.components.schemas.items():
            type_name = self.assigner.type_name_for_component(key, ComponentKind.SCHEMAS)
            declarations.extend(self.translate_schema(type_name, schema))
        logger.debug("Translated %d schema declarations", len(declarations))
        return declarations

    def translate_schema(self, type_name, schema: Schema, found_in: Optional[str] = None) -> List[Declaration]:
        """
        Translate a schema into the declarations defining ``type_name``.

        Unsupported schemas produce a diagnostic and no declarations. The
        first declaration returned is always the one named ``type_name``;
        array element types follow it as siblings.
        """
        result = self.support.is_schema_supported(schema)
        if not result.supported:
            self.diagnostics.emit_unsupported_schema(
                result.reason, result.schema.kind.value, found_in or self._location(type_name)
            )
            return []
        return self._translate_supported_schema(type_name, schema)

    def _translate_supported_schema(self, type_name, schema: Schema) -> List[Declaration]:
        builtin = self.matcher.try_match_builtin_type(schema)
        if builtin is not None:
            return [self._typealias(type_name, builtin, schema)]

        kind = schema.kind
        if kind is SchemaKind.REFERENCE:
            target = self.assigner.type_name_for_reference(schema.reference)
            return [self._typealias(type_name, target.as_usage(), schema)]

        if schema.allowed_values is not None:
            return [self._translate_enum_values(type_name, schema)]

        if kind is SchemaKind.OBJECT:
            return [self._translate_object(type_name, schema)]

        if kind is SchemaKind.ARRAY:
            return self._translate_array(type_name, schema)

        if kind is SchemaKind.ALL_OF:
            return [self._translate_all_or_any_of(type_name, schema, optional_members=False)]

        if kind is SchemaKind.ANY_OF:
            return [self._translate_all_or_any_of(type_name, schema, optional_members=True)]

        if kind is SchemaKind.ONE_OF:
            return [self._translate_one_of(type_name, schema)]

        # Not reachable for supported schemas.
        self.diagnostics.emit_unsupported(f"schema kind {kind.value}", self._location(type_name))
        return []

    @staticmethod
    def _location(type_name, name: Optional[str] = None) -> str:
        """Where a diagnostic was found: the JSON path when there is one."""
        base = type_name.fully_qualified_json_path or type_name.fully_qualified_name
        return f"{base}/{name}" if name else base

    def _typealias(self, type_name, usage, schema: Optional[Schema] = None) -> Declaration:
        return Declaration(
            type_name=type_name,
            kind=DeclarationKind.TYPEALIAS,
            aliased=usage,
            description=schema.description if schema else None,
        )

    def _translate_enum_values(self, type_name, schema: Schema) -> Declaration:
        members = [
            Member(name=self.assigner.member_name(type_name, str(value)), original_name=str(value))
            for value in schema.allowed_values
        ]
        return Declaration(
            type_name=type_name,
            kind=DeclarationKind.ENUM,
            members=members,
            description=schema.description,
        )

    def _translate_object(self, type_name, schema: Schema) -> Declaration:
        declaration = Declaration(
            type_name=type_name,
            kind=DeclarationKind.STRUCT,
            description=schema.description,
        )

        for name, property_schema in schema.properties.items():
            found_in = self._location(type_name, name)
            result = self.support.is_schema_supported(property_schema)
            if not result.supported:
                self.diagnostics.emit_unsupported_schema(
                    result.reason, result.schema.kind.value, found_in
                )
                continue
            usage = self.assigner.type_usage_for_object_property(name, property_schema, type_name)
            declaration.members.append(
                Member(
                    name=self.assigner.member_name(type_name, name),
                    original_name=name,
                    usage=usage,
                    description=property_schema.description,
                )
            )
            if self.matcher.is_inlinable(property_schema):
                declaration.nested.extend(
                    self._translate_supported_schema(usage.type_name, property_schema)
                )

        additional = schema.additional_properties
        if additional is True:
            declaration.members.append(
                Member(
                    name="additionalProperties",
                    original_name="additionalProperties",
                    usage=self.matcher.builtin(BuiltinType.OBJECT_CONTAINER),
                )
            )
        elif isinstance(additional, Schema):
            found_in = self._location(type_name, "additionalProperties")
            result = self.support.is_schema_supported(additional)
            if not result.supported:
                self.diagnostics.emit_unsupported_schema(
                    result.reason, result.schema.kind.value, found_in
                )
            else:
                value_usage = self.assigner.type_usage_for_object_property(
                    "additionalProperties", additional, type_name
                )
                declaration.members.append(
                    Member(
                        name="additionalProperties",
                        original_name="additionalProperties",
                        usage=value_usage.as_dictionary_value(),
                    )
                )
                if self.matcher.is_inlinable(additional):
                    declaration.nested.extend(
                        self._translate_supported_schema(value_usage.type_name, additional)
                    )

        return declaration

    def _translate_array(self, type_name, schema: Schema) -> List[Declaration]:
        element_usage = self.assigner.type_usage_for_array_element(schema.items, type_name)
        declarations = [self._typealias(type_name, element_usage.as_array(), schema)]
        if self.matcher.is_inlinable(schema.items):
            declarations.extend(
                self._translate_supported_schema(element_usage.type_name, schema.items)
            )
        return declarations

    def _translate_all_or_any_of(self, type_name, schema: Schema, optional_members: bool) -> Declaration:
        declaration = Declaration(
            type_name=type_name,
            kind=DeclarationKind.STRUCT,
            description=schema.description,
        )
        for index, child in enumerate(schema.subschemas, start=1):
            key = f"value{index}"
            usage = self.assigner.type_usage_for_composite_child(key, child, type_name)
            if optional_members:
                usage = usage.as_optional()
            declaration.members.append(Member(name=key, original_name=key, usage=usage))
            if self.matcher.is_inlinable(child):
                declaration.nested.extend(self._translate_supported_schema(usage.type_name, child))
        return declaration

    def _translate_one_of(self, type_name, schema: Schema) -> Declaration:
        declaration = Declaration(
            type_name=type_name,
            kind=DeclarationKind.ENUM,
            discriminator=schema.discriminator,
            description=schema.description,
        )

        if schema.discriminator is not None:
            for child in schema.subschemas:
                parsed = parse_reference(child.reference)
                declaration.members.append(
                    Member(
                        name=self.assigner.member_name(type_name, parsed.name),
                        original_name=parsed.name,
                        usage=self.assigner.type_name_for_reference(child.reference).as_usage(),
                    )
                )
            return declaration

        for index, child in enumerate(schema.subschemas, start=1):
            key = f"case{index}"
            usage = self.assigner.type_usage_for_composite_child(key, child, type_name)
            declaration.members.append(Member(name=key, original_name=key, usage=usage))
            if self.matcher.is_inlinable(child):
                declaration.nested.extend(self._translate_supported_schema(usage.type_name, child))
        return declaration

    def translate_component_parameters(self) -> List[Declaration]:
        declarations = []
        for key, parameter in self.components.parameters.items():
            type_name = self.assigner.type_name_for_component(key, ComponentKind.PARAMETERS)
            parameter = self.components.resolve(parameter, ComponentKind.PARAMETERS)
            declarations.extend(self._translate_value_alias(type_name, parameter))
        return declarations

    def translate_component_headers(self) -> List[Declaration]:
        declarations = []
        for key, header in self.components.headers.items():
            type_name = self.assigner.type_name_for_component(key, ComponentKind.HEADERS)
            header = self.components.resolve(header, ComponentKind.HEADERS)
            declarations.extend(self._translate_value_alias(type_name, header))
        return declarations

    def _translate_value_alias(self, type_name, value: Union[Parameter, Header]) -> List[Declaration]:
        """A reusable parameter or header becomes a typealias of its value type."""
        schema = self._value_schema(value)
        if schema is not None:
            result = self.support.is_schema_supported(schema)
            if not result.supported:
                self.diagnostics.emit_unsupported_schema(
                    result.reason, result.schema.kind.value, self._location(type_name)
                )
                return []
        usage = self.assigner.type_usage(
            type_name.short_name,
            schema,
            type_name,
            naming_method=NamingMethod.APPEND_TO_LAST_PATH_COMPONENT,
        )
        declarations = [self._typealias(type_name, usage.as_non_optional(), schema)]
        if self.matcher.is_inlinable(schema):
            declarations.extend(self._translate_supported_schema(usage.type_name, schema))
        return declarations

    @staticmethod
    def _value_schema(value: Union[Parameter, Header]) -> Optional[Schema]:
        if value.schema is not None:
            return value.schema
        if value.content is not None and value.content.schema is not None:
            return value.content.schema.with_required(value.required)
        return None

    def translate_component_request_bodies(self) -> List[Declaration]:
        declarations = []
        for key, body in self.components.request_bodies.items():
            type_name = self.assigner.type_name_for_component(key, ComponentKind.REQUEST_BODIES)
            body = self.components.resolve(body, ComponentKind.REQUEST_BODIES)
            declarations.append(self._translate_body_enum(type_name, body.content))
        return declarations

    def translate_component_responses(self) -> List[Declaration]:
        declarations = []
        for key, response in self.components.responses.items():
            type_name = self.assigner.type_name_for_component(key, ComponentKind.RESPONSES)
            response = self.components.resolve(response, ComponentKind.RESPONSES)
            declarations.append(self._translate_response_struct(type_name, response))
        return declarations

    # Bodies, headers and responses

    def _translate_body_enum(self, type_name, contents) -> Declaration:
        """An enum with one case per supported content type."""
        declaration = Declaration(type_name=type_name, kind=DeclarationKind.ENUM)
        for content in contents:
            found_in = self._location(type_name, content.content_type.lowercased_type_and_subtype)
            if not self._is_content_supported(content, found_in):
                continue
            usage = self.assigner.type_usage_for_content(content, type_name)
            declaration.members.append(
                Member(
                    name=self.assigner.content_type_name(content.content_type),
                    original_name=content.content_type.originally_cased_type_subtype_and_parameters,
                    usage=usage,
                )
            )
            if self.matcher.is_inlinable(content.schema):
                declaration.nested.extend(
                    self._translate_supported_schema(usage.type_name, content.schema)
                )
        return declaration

    def _is_content_supported(self, content: Content, found_in: str) -> bool:
        if content.schema is None:
            return True
        if content.content_type.category is ContentTypeCategory.MULTIPART:
            result = self.support.is_object_or_ref_to_object_supported(content.schema)
        else:
            result = self.support.is_schema_supported(content.schema)
        if not result.supported:
            self.diagnostics.emit_unsupported_schema(
                result.reason, result.schema.kind.value, found_in
            )
        return result.supported

    def _translate_headers_struct(self, type_name, headers: Dict[str, Union[Header, Reference]]) -> Declaration:
        declaration = Declaration(type_name=type_name, kind=DeclarationKind.STRUCT)
        for name, header in headers.items():
            if name.lower() == "content-type":
                # Carried by the body case instead.
                continue
            if isinstance(header, Reference):
                target = self.assigner.type_name_for_reference(header.ref)
                resolved = self.components.resolve(header, ComponentKind.HEADERS)
                usage = target.as_usage().with_optional(not resolved.required)
            else:
                schema = self._value_schema(header)
                if schema is not None and not self._check_supported(schema, self._location(type_name, name)):
                    continue
                usage = self.assigner.type_usage_for_parameter(name, schema, type_name)
                if self.matcher.is_inlinable(schema):
                    declaration.nested.extend(self._translate_supported_schema(usage.type_name, schema))
            declaration.members.append(
                Member(name=self.assigner.member_name(type_name, name), original_name=name, usage=usage)
            )
        return declaration

    def _translate_response_struct(self, type_name, response: Response) -> Declaration:
        declaration = Declaration(
            type_name=type_name,
            kind=DeclarationKind.STRUCT,
            description=response.description,
        )
        headers_name = self.assigner.scoped(type_name, "Headers")
        headers = self._translate_headers_struct(headers_name, response.headers)
        declaration.nested.append(headers)
        declaration.members.append(
            Member(name="headers", original_name="headers", usage=headers_name.as_usage())
        )

        body_name = self.assigner.scoped(type_name, "Body")
        body = self._translate_body_enum(body_name, response.content)
        declaration.nested.append(body)
        if response.content:
            declaration.members.append(
                Member(name="body", original_name="body", usage=body_name.as_usage())
            )
        return declaration

    def _check_supported(self, schema: Schema, found_in: str) -> bool:
        result = self.support.is_schema_supported(schema)
        if not result.supported:
            self.diagnostics.emit_unsupported_schema(result.reason, result.schema.kind.value, found_in)
        return result.supported

    # Operations

    def translate_operations(self) -> List[Declaration]:
        return [self.translate_operation(operation) for operation in self.document.operations]

    def translate_operation(self, operation: Operation) -> Declaration:
        """
        Translate an operation into its namespace.

        The namespace holds an ``Input`` struct (one nested struct per
        parameter location, plus the request ``Body``) and an ``Output``
        enum with one case per documented response.
        """
        operation_name = self.assigner.type_name_for_operation(operation)
        namespace = Declaration(type_name=operation_name, kind=DeclarationKind.ENUM)
        namespace.nested.append(self._translate_input(operation, operation_name))
        namespace.nested.append(self._translate_output(operation, operation_name))
        return namespace

    def _translate_input(self, operation: Operation, operation_name) -> Declaration:
        input_name = self.assigner.scoped(operation_name, "Input")
        declaration = Declaration(type_name=input_name, kind=DeclarationKind.STRUCT)

        parameters = [
            (p, self.components.resolve(p, ComponentKind.PARAMETERS)) for p in operation.parameters
        ]
        for location, (identifier, member_name) in PARAMETER_STRUCT_NAMES.items():
            struct_name = self.assigner.scoped(input_name, identifier)
            struct = Declaration(type_name=struct_name, kind=DeclarationKind.STRUCT)
            for original, parameter in parameters:
                if parameter.location is not location:
                    continue
                found_in = self._location(struct_name, parameter.name)
                if isinstance(original, Reference):
                    target = self.assigner.type_name_for_reference(original.ref)
                    usage = target.as_usage().with_optional(not parameter.required)
                else:
                    schema = self._value_schema(parameter)
                    if schema is not None and not self._check_supported(schema, found_in):
                        continue
                    usage = self.assigner.type_usage_for_parameter(parameter.name, schema, struct_name)
                    if self.matcher.is_inlinable(schema):
                        struct.nested.extend(self._translate_supported_schema(usage.type_name, schema))
                struct.members.append(
                    Member(
                        name=self.assigner.member_name(struct_name, parameter.name),
                        original_name=parameter.name,
                        usage=usage,
                        description=parameter.description,
                    )
                )
            declaration.nested.append(struct)
            declaration.members.append(
                Member(name=member_name, original_name=member_name, usage=struct_name.as_usage())
            )

        body = operation.request_body
        if isinstance(body, Reference):
            resolved: RequestBody = self.components.resolve(body, ComponentKind.REQUEST_BODIES)
            usage = self.assigner.type_name_for_reference(body.ref).as_usage()
            declaration.members.append(
                Member(name="body", original_name="body", usage=usage.with_optional(not resolved.required))
            )
        elif body is not None:
            body_name = self.assigner.scoped(input_name, "Body")
            declaration.nested.append(self._translate_body_enum(body_name, body.content))
            declaration.members.append(
                Member(
                    name="body",
                    original_name="body",
                    usage=body_name.as_usage().with_optional(not body.required),
                )
            )
        return declaration

    def _translate_output(self, operation: Operation, operation_name) -> Declaration:
        output_name = self.assigner.scoped(operation_name, "Output")
        declaration = Declaration(type_name=output_name, kind=DeclarationKind.ENUM)
        for status, response in operation.responses.items():
            case_name = status_case_name(status)
            if isinstance(response, Reference):
                usage = self.assigner.type_name_for_reference(response.ref).as_usage()
            else:
                response_name = self.assigner.scoped(
                    output_name, uppercase_first_letter(self.safe_names.type_name(case_name)), status
                )
                declaration.nested.append(self._translate_response_struct(response_name, response))
                usage = response_name.as_usage()
            declaration.members.append(
                Member(name=self.assigner.member_name(output_name, case_name), original_name=status, usage=usage)
            )
        return declaration
