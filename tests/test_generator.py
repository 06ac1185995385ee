"""
End-to-end tests for document translation and type generation.

Runs the bundled generators over small documents and checks the names,
member usages and boxed types they produce.
"""

import pytest

from conftest import make_document, schema_ref
from openapi_typegen.codegen import generate_from_document
from openapi_typegen.codegen.core.assigner import NameCollisionError
from openapi_typegen.codegen.core.config import GeneratorConfig
from openapi_typegen.codegen.core.declarations import DeclarationKind
from openapi_typegen.codegen.core.generator import generate_types
from openapi_typegen.codegen.core.recursion import InvalidRecursionError
from openapi_typegen.codegen.core.schema import convert_document
from openapi_typegen.codegen.languages import PythonGenerator, SwiftGenerator


@pytest.fixture
def swift():
    return SwiftGenerator()


def member_usages(declaration):
    return {member.name: str(member.usage) for member in declaration.members}


# -----------------------------------------------------------------------------
# Component schemas
# -----------------------------------------------------------------------------
def test_object_schema_becomes_struct(swift, pets):
    output = swift.generate(pets)
    pet = output.find("Components.Schemas.Pet")

    assert pet.kind is DeclarationKind.STRUCT
    assert pet.type_name.fully_qualified_json_path == "#/components/schemas/Pet"
    assert member_usages(pet) == {
        "id": "Swift.Int64",
        "name": "Swift.String",
        "tag": "Swift.String?",
        "owner": "Components.Schemas.Pet.ownerPayload?",
    }


def test_inline_property_schema_is_nested(swift, pets):
    output = swift.generate(pets)
    pet = output.find("Components.Schemas.Pet")

    assert [n.type_name.fully_qualified_name for n in pet.nested] == [
        "Components.Schemas.Pet.ownerPayload"
    ]
    owner = pet.nested[0]
    assert owner.kind is DeclarationKind.STRUCT
    assert member_usages(owner) == {"email": "Swift.String?"}


def test_array_of_references_is_typealias(swift, pets):
    output = swift.generate(pets)
    pets_alias = output.find("Components.Schemas.Pets")

    assert pets_alias.kind is DeclarationKind.TYPEALIAS
    assert str(pets_alias.aliased) == "[Components.Schemas.Pet]"


def test_enum_schema_lists_values(swift, pets):
    output = swift.generate(pets)
    kind = output.find("Components.Schemas.PetKind")

    assert kind.kind is DeclarationKind.ENUM
    assert [m.original_name for m in kind.members] == ["cat", "dog"]


def test_keyword_schema_name_is_escaped(swift, pets):
    output = swift.generate(pets)

    # "Error" is a Swift standard library type.
    assert output.find("Components.Schemas._Error") is not None
    assert output.find("Components.Schemas.Error") is None


def test_inline_array_element_is_sibling_declaration(swift):
    document = convert_document(
        make_document(
            {
                "Items": {
                    "type": "array",
                    "items": {"type": "object", "properties": {"label": {"type": "string"}}},
                }
            }
        )
    )

    output = swift.generate(document)
    names = [d.type_name.fully_qualified_name for d in output.declarations]

    assert names == ["Components.Schemas.Items", "Components.Schemas.ItemsPayload"]
    assert str(output.declarations[0].aliased) == "[Components.Schemas.ItemsPayload]"


def test_unsupported_property_is_skipped_with_diagnostic(swift):
    document = convert_document(
        make_document(
            {
                "Weird": {
                    "type": "object",
                    "properties": {"ok": {"type": "string"}, "bad": {"not": {}}},
                }
            }
        )
    )

    output = swift.generate(document)

    assert [m.name for m in output.find("Components.Schemas.Weird").members] == ["ok"]
    assert len(output.diagnostics) == 1
    diagnostic = output.diagnostics[0]
    assert diagnostic.message == 'Schema "not" is not supported, reason: "schema type", skipping'
    assert diagnostic.context == {"foundIn": "#/components/schemas/Weird/bad"}


# -----------------------------------------------------------------------------
# Recursion
# -----------------------------------------------------------------------------
def test_self_referencing_schema_is_boxed(swift):
    document = convert_document(
        make_document(
            {
                "Node": {
                    "type": "object",
                    "properties": {"value": {"type": "string"}, "next": schema_ref("Node")},
                }
            }
        )
    )

    output = swift.generate(document)

    assert output.boxed_names == {"Components.Schemas.Node"}
    assert output.find("Components.Schemas.Node").boxed is True


def test_recursion_through_array_boxes_element_struct(swift):
    document = convert_document(
        make_document(
            {
                "Tree": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {"children": schema_ref("Tree")},
                    },
                }
            }
        )
    )

    output = swift.generate(document)

    assert output.boxed_names == {"Components.Schemas.TreePayload"}
    assert output.find("Components.Schemas.Tree").boxed is False


def test_acyclic_document_boxes_nothing(swift, pets):
    assert swift.generate(pets).boxed_types == set()


def test_alias_cycle_cannot_be_boxed(swift):
    document = convert_document(make_document({"A": schema_ref("B"), "B": schema_ref("A")}))

    with pytest.raises(InvalidRecursionError):
        swift.generate(document)

    result = generate_types(swift, document)
    assert not result.success
    assert result.error_message.startswith("Type generation failed")
    assert isinstance(result.exception, InvalidRecursionError)


def test_long_schema_cycle_is_boxed_once(swift):
    count = 1200
    schemas = {
        f"S{i}": {"type": "object", "properties": {"next": schema_ref(f"S{(i + 1) % count}")}}
        for i in range(count)
    }

    output = swift.generate(convert_document(make_document(schemas)))

    assert output.boxed_names == {"Components.Schemas.S0"}
    assert len(output.declarations) == count


def test_long_alias_chain_is_generated(swift):
    count = 1200
    schemas = {f"A{i}": schema_ref(f"A{i + 1}") for i in range(count)}
    schemas[f"A{count}"] = {"type": "object", "properties": {"id": {"type": "string"}}}

    output = swift.generate(convert_document(make_document(schemas)))

    assert output.boxed_types == set()
    assert output.diagnostics == []
    assert output.find("Components.Schemas.A0").kind is DeclarationKind.TYPEALIAS


# -----------------------------------------------------------------------------
# Operations
# -----------------------------------------------------------------------------
def test_operation_input_structs(swift, pets):
    output = swift.generate(pets)
    input_struct = output.find("Operations.listPets.Input")

    assert [m.name for m in input_struct.members] == ["path", "query", "headers", "cookies"]
    assert member_usages(output.find("Operations.listPets.Input.Query")) == {
        "limit": "Swift.Int32?"
    }
    assert member_usages(output.find("Operations.listPets.Input.Headers")) == {
        "X_hyphen_Request_hyphen_ID": "Swift.String"
    }


def test_operation_output_cases(swift, pets):
    output = swift.generate(pets)
    output_enum = output.find("Operations.listPets.Output")

    assert output_enum.kind is DeclarationKind.ENUM
    assert member_usages(output_enum) == {
        "ok": "Operations.listPets.Output.Ok",
        "_default": "Operations.listPets.Output._default",
    }
    assert [m.original_name for m in output_enum.members] == ["200", "default"]

    ok = output.find("Operations.listPets.Output.Ok")
    assert member_usages(ok) == {
        "headers": "Operations.listPets.Output.Ok.Headers",
        "body": "Operations.listPets.Output.Ok.Body",
    }
    assert member_usages(output.find("Operations.listPets.Output.Ok.Headers")) == {
        "x_hyphen_next": "Swift.String?"
    }
    assert member_usages(output.find("Operations.listPets.Output.Ok.Body")) == {
        "json": "Components.Schemas.Pets"
    }


def test_request_body_and_empty_response(swift, pets):
    output = swift.generate(pets)

    input_struct = output.find("Operations.createPet.Input")
    assert member_usages(input_struct)["body"] == "Operations.createPet.Input.Body"
    assert member_usages(output.find("Operations.createPet.Input.Body")) == {
        "json": "Components.Schemas.Pet"
    }

    created = output.find("Operations.createPet.Output.Created")
    assert [m.name for m in created.members] == ["headers"]


def test_operation_without_id_is_named_from_method_and_path(swift, pets):
    output = swift.generate(pets)
    operation = output.find("Operations.get_sol_pets_sol__lcub_petId_rcub_")

    assert operation is not None
    assert member_usages(
        output.find("Operations.get_sol_pets_sol__lcub_petId_rcub_.Input.Path")
    ) == {"petId": "Swift.String"}


def test_operations_can_be_excluded(pets):
    generator = SwiftGenerator(GeneratorConfig(include_operations=False))
    output = generator.generate(pets)

    assert output.find("Operations.listPets") is None
    assert output.find("Components.Schemas.Pet") is not None


def test_component_parameters_and_responses():
    document = convert_document(
        make_document(
            {"Problem": {"type": "object", "properties": {"detail": {"type": "string"}}}},
            parameters={
                "PageSize": {"name": "pageSize", "in": "query", "schema": {"type": "integer"}}
            },
            responses={
                "NotFound": {
                    "description": "Missing",
                    "content": {"application/json": {"schema": schema_ref("Problem")}},
                }
            },
            paths={
                "/things": {
                    "get": {
                        "operationId": "listThings",
                        "parameters": [{"$ref": "#/components/parameters/PageSize"}],
                        "responses": {"404": {"$ref": "#/components/responses/NotFound"}},
                    }
                }
            },
        )
    )

    output = SwiftGenerator().generate(document)

    assert str(output.find("Components.Parameters.PageSize").aliased) == "Swift.Int"
    assert member_usages(output.find("Components.Responses.NotFound.Body")) == {
        "json": "Components.Schemas.Problem"
    }
    assert member_usages(output.find("Operations.listThings.Input.Query")) == {
        "pageSize": "Components.Parameters.PageSize?"
    }
    assert member_usages(output.find("Operations.listThings.Output")) == {
        "notFound": "Components.Responses.NotFound"
    }


# -----------------------------------------------------------------------------
# Configuration effects
# -----------------------------------------------------------------------------
def test_collision_detection_fails_generation():
    document = convert_document(
        make_document({"pet-store": {"type": "string"}, "pet_store": {"type": "integer"}})
    )
    generator = SwiftGenerator(GeneratorConfig(naming_strategy="idiomatic", detect_collisions=True))

    with pytest.raises(NameCollisionError):
        generator.generate(document)

    result = generate_types(generator, document)
    assert not result.success
    assert "PetStore" in result.error_message


def test_member_collision_fails_generation():
    document = convert_document(
        make_document(
            {
                "Pet": {
                    "type": "object",
                    "properties": {"foo_bar": {"type": "string"}, "foo-bar": {"type": "integer"}},
                }
            }
        )
    )
    generator = SwiftGenerator(GeneratorConfig(naming_strategy="idiomatic", detect_collisions=True))

    with pytest.raises(NameCollisionError) as exc_info:
        generator.generate(document)

    assert exc_info.value.identifier == "fooBar"
    assert exc_info.value.original_names == ("foo_bar", "foo-bar")
    assert exc_info.value.scope.fully_qualified_name == "Components.Schemas.Pet"


def test_collisions_are_ignored_by_default():
    document = convert_document(
        make_document({"pet-store": {"type": "string"}, "pet_store": {"type": "integer"}})
    )
    generator = SwiftGenerator(GeneratorConfig(naming_strategy="idiomatic"))

    output = generator.generate(document)

    assert len(output.declarations) == 2


def test_name_overrides_apply_to_components(pets):
    generator = SwiftGenerator(GeneratorConfig(name_overrides={"Error": "ApiError"}))

    output = generator.generate(pets)

    assert output.find("Components.Schemas.ApiError") is not None


def test_python_generator_renders_typing_generics():
    document = convert_document(
        make_document(
            {
                "Tagged": {
                    "type": "object",
                    "required": ["created"],
                    "properties": {
                        "tags": {"type": "array", "items": {"type": "string"}},
                        "created": {"type": "string", "format": "date-time"},
                    },
                }
            }
        )
    )
    generator = PythonGenerator(GeneratorConfig(language="python", naming_strategy="idiomatic"))

    tagged = generator.generate(document).find("Components.Schemas.Tagged")
    rendered = {m.name: generator.render_usage(m.usage) for m in tagged.members}

    assert rendered == {"tags": "Optional[List[str]]", "created": "datetime.datetime"}


# -----------------------------------------------------------------------------
# Results and validation
# -----------------------------------------------------------------------------
def test_generate_types_metadata(swift, pets):
    result = generate_types(swift, pets)

    assert result.success
    assert result.metadata["language"] == "swift"
    assert result.metadata["title"] == "Test API"
    assert result.metadata["schema_count"] == 4
    assert result.metadata["operation_count"] == 3
    assert result.metadata["boxed_types"] == []


def test_validate_document_reports_missing_operation_id(swift, pets):
    warnings = swift.validate_document(pets)

    assert warnings == [
        "Operation GET /pets/{petId} has no operationId, using 'get/pets/{petId}'"
    ]


def test_validate_document_reports_duplicates_and_empty(swift):
    document = convert_document(
        make_document(
            paths={
                "/a": {"get": {"operationId": "same", "responses": {"200": {}}}},
                "/b": {"get": {"operationId": "same"}},
            }
        )
    )

    warnings = swift.validate_document(document)

    assert any("Duplicate operationId 'same'" in w for w in warnings)
    assert "Operation GET /b documents no responses" in warnings
    assert swift.validate_document(convert_document(make_document())) == [
        "Document has no component schemas and no operations"
    ]


def test_generate_from_document_uses_language_defaults(pets_document):
    result = generate_from_document(pets_document, language="py")

    assert result.success
    assert result.metadata["language"] == "python"
    assert result.metadata["naming_strategy"] == "idiomatic"
