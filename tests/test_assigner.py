"""
Unit tests for type name assignment.
"""

import pytest

from openapi_typegen.codegen.core.assigner import NameCollisionError, NamingMethod
from openapi_typegen.codegen.core.content_type import ContentType
from openapi_typegen.codegen.core.references import ComponentKind, NonComponentReferenceError
from openapi_typegen.codegen.core.schema import Content, Operation, Schema, convert_schema
from openapi_typegen.codegen.core.type_name import TypeName

INLINE_OBJECT = {"type": "object", "properties": {"a": {"type": "string"}}}


def test_component_names(assigner):
    name = assigner.type_name_for_component("Pet")

    assert name.fully_qualified_name == "Components.Schemas.Pet"
    assert name.fully_qualified_json_path == "#/components/schemas/Pet"


@pytest.mark.parametrize(
    "kind, namespace, json_path",
    [
        (ComponentKind.SCHEMAS, "Components.Schemas", "#/components/schemas"),
        (ComponentKind.PARAMETERS, "Components.Parameters", "#/components/parameters"),
        (ComponentKind.HEADERS, "Components.Headers", "#/components/headers"),
        (ComponentKind.REQUEST_BODIES, "Components.RequestBodies", "#/components/requestBodies"),
        (ComponentKind.RESPONSES, "Components.Responses", "#/components/responses"),
    ],
)
def test_location_namespaces(assigner, kind, namespace, json_path):
    name = assigner.type_name_for_location(kind)

    assert name.fully_qualified_name == namespace
    assert name.fully_qualified_json_path == json_path


def test_component_names_are_sanitized(assigner_factory):
    defensive = assigner_factory("defensive")
    idiomatic = assigner_factory("idiomatic")

    assert defensive.type_name_for_component("pet-store").short_name == "pet_hyphen_store"
    assert idiomatic.type_name_for_component("pet-store").short_name == "PetStore"
    # The JSON path keeps the raw key.
    assert idiomatic.type_name_for_component("pet-store").short_json_name == "pet-store"


def test_same_key_gives_same_name(assigner):
    assert assigner.type_name_for_component("Pet") == assigner.type_name_for_component("Pet")


def test_reference_names(assigner):
    name = assigner.type_name_for_reference("#/components/responses/NotFound")

    assert name.fully_qualified_name == "Components.Responses.NotFound"
    with pytest.raises(NonComponentReferenceError):
        assigner.type_name_for_reference("#/paths/~1pets")


def test_operation_names(assigner):
    operation = Operation(method="get", path="/pets/{petId}", operation_id="getPet")
    name = assigner.type_name_for_operation(operation)

    assert name.fully_qualified_name == "Operations.getPet"
    assert name.fully_qualified_json_path == "#/paths/~1pets~1{petId}/get"


def test_operation_names_without_operation_id(assigner_factory):
    operation = Operation(method="post", path="/pets")

    assert assigner_factory("defensive").type_name_for_operation(operation).short_name == (
        "post_sol_pets"
    )
    assert assigner_factory("idiomatic").type_name_for_operation(operation).short_name == (
        "PostPets"
    )


def test_property_usage_reuses_referenceable_types(assigner):
    parent = TypeName.from_identifiers(["MyType"])

    usage = assigner.type_usage_for_object_property("foo", convert_schema({"type": "string"}), parent)
    assert usage.fully_qualified_name == "Swift.String"

    optional_ref = Schema.ref("#/components/schemas/Pet", required=False)
    usage = assigner.type_usage_for_object_property("pet", optional_ref, parent)
    assert usage.fully_qualified_name == "Components.Schemas.Pet?"


def test_property_usage_synthesizes_inline_names(assigner):
    parent = TypeName.from_identifiers(["MyType"])
    schema = convert_schema(INLINE_OBJECT)

    usage = assigner.type_usage_for_object_property("foo", schema, parent)
    assert usage.fully_qualified_name == "MyType.fooPayload"

    nullable = convert_schema(dict(INLINE_OBJECT, nullable=True))
    usage = assigner.type_usage_for_object_property("foo", nullable, parent)
    assert usage.fully_qualified_name == "MyType.fooPayload?"


def test_inline_names_keep_the_json_path(assigner):
    parent = assigner.type_name_for_component("Pet")
    usage = assigner.type_usage_for_object_property("owner", convert_schema(INLINE_OBJECT), parent)

    assert usage.type_name.fully_qualified_json_path == "#/components/schemas/Pet/owner"


def test_composite_children(assigner):
    parent = assigner.type_name_for_component("Shape")
    usage = assigner.type_usage_for_composite_child("value1", convert_schema(INLINE_OBJECT), parent)

    assert usage.fully_qualified_name == "Components.Schemas.Shape.Value1Payload"
    assert usage.type_name.short_json_name == "value1"


def test_array_elements_are_siblings(assigner):
    parent = assigner.type_name_for_component("Pets")
    usage = assigner.type_usage_for_array_element(convert_schema(INLINE_OBJECT), parent)

    assert usage.fully_qualified_name == "Components.Schemas.PetsPayload"


def test_append_to_last_path_component(assigner):
    parent = TypeName.from_identifiers(["A", "B"])
    usage = assigner.type_usage(
        "item",
        convert_schema(INLINE_OBJECT),
        parent,
        naming_method=NamingMethod.APPEND_TO_LAST_PATH_COMPONENT,
    )

    assert usage.fully_qualified_name == "A.itemPayload"


def test_content_usage(assigner):
    parent = TypeName.from_identifiers(["Body"])
    content = Content(ContentType.parse("application/json"), convert_schema(INLINE_OBJECT))

    assert assigner.type_usage_for_content(content, parent).fully_qualified_name == (
        "Body.jsonPayload"
    )


def test_inline_type_suffix_is_configurable(assigner_factory):
    assigner = assigner_factory(inline_type_suffix="Value")
    parent = TypeName.from_identifiers(["MyType"])

    usage = assigner.type_usage_for_object_property("foo", convert_schema(INLINE_OBJECT), parent)
    assert usage.fully_qualified_name == "MyType.fooValue"


# -----------------------------------------------------------------------------
# Collision detection
# -----------------------------------------------------------------------------
def test_collisions_are_ignored_by_default(assigner_factory):
    assigner = assigner_factory("idiomatic")

    first = assigner.type_name_for_component("pet_store")
    second = assigner.type_name_for_component("pet-store")
    assert first.fully_qualified_name == second.fully_qualified_name


def test_collisions_are_detected_when_enabled(assigner_factory):
    assigner = assigner_factory("idiomatic", detect_collisions=True)
    assigner.type_name_for_component("pet_store")

    with pytest.raises(NameCollisionError) as exc_info:
        assigner.type_name_for_component("pet-store")

    assert exc_info.value.identifier == "PetStore"
    assert exc_info.value.original_names == ("pet_store", "pet-store")


def test_collision_detection_allows_repeated_names(assigner_factory):
    assigner = assigner_factory("idiomatic", detect_collisions=True)

    assigner.type_name_for_component("Pet")
    assigner.type_name_for_component("Pet")
    # Same identifier in a different scope is fine.
    assigner.type_name_for_component("Pet", ComponentKind.RESPONSES)


def test_member_names_are_checked_per_parent(assigner_factory):
    assigner = assigner_factory("idiomatic", detect_collisions=True)
    pet = assigner.type_name_for_component("Pet")
    owner = assigner.type_name_for_component("Owner")

    assert assigner.member_name(pet, "pet_store") == "petStore"
    assert assigner.member_name(pet, "pet_store") == "petStore"
    assert assigner.member_name(owner, "pet-store") == "petStore"

    with pytest.raises(NameCollisionError) as exc_info:
        assigner.member_name(pet, "pet-store")

    assert exc_info.value.scope == pet
    assert exc_info.value.original_names == ("pet_store", "pet-store")


def test_member_and_type_names_do_not_collide(assigner_factory):
    assigner = assigner_factory("defensive", detect_collisions=True)
    pet = assigner.type_name_for_component("Pet")

    assigner.scoped(pet, "value", "Value")
    assert assigner.member_name(pet, "value") == "value"


def test_member_collisions_are_ignored_by_default(assigner_factory):
    assigner = assigner_factory("idiomatic")
    pet = assigner.type_name_for_component("Pet")

    assert assigner.member_name(pet, "pet_store") == assigner.member_name(pet, "pet-store")
