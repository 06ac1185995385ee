"""
Unit tests for type names and type usages.
"""

import pytest

from openapi_typegen.codegen.core.type_name import TypeName, TypeNameComponent, TypeUsage


@pytest.fixture
def pet_name() -> TypeName:
    return TypeName(
        (
            TypeNameComponent.root(),
            TypeNameComponent("Components", "components"),
            TypeNameComponent("Schemas", "schemas"),
            TypeNameComponent("Pet", "Pet"),
        )
    )


def test_paths(pet_name):
    assert pet_name.fully_qualified_name == "Components.Schemas.Pet"
    assert pet_name.fully_qualified_json_path == "#/components/schemas/Pet"
    assert pet_name.short_name == "Pet"
    assert pet_name.short_json_name == "Pet"
    assert pet_name.identifier_path_components == ["Components", "Schemas", "Pet"]
    assert str(pet_name) == "Components.Schemas.Pet (#/components/schemas/Pet)"


def test_appending_and_parent(pet_name):
    child = pet_name.appending(identifier="ownerPayload", json="owner")

    assert child.fully_qualified_name == "Components.Schemas.Pet.ownerPayload"
    assert child.fully_qualified_json_path == "#/components/schemas/Pet/owner"
    assert child.parent == pet_name


def test_json_path_is_none_without_last_json_component(pet_name):
    synthesized = pet_name.appending(identifier="Headers")

    assert synthesized.fully_qualified_json_path is None
    assert synthesized.short_json_name == "Pet"


def test_from_identifiers_has_no_json_path():
    name = TypeName.from_identifiers(["Swift", "String"])

    assert name.fully_qualified_name == "Swift.String"
    assert name.json_key_path_components is None
    assert str(name) == "Swift.String"


def test_equality_considers_json_components():
    a = TypeName((TypeNameComponent("Foo", "foo"),))
    b = TypeName((TypeNameComponent("Foo", "bar"),))

    assert a != b
    assert a == TypeName((TypeNameComponent("Foo", "foo"),))
    assert len({a, b}) == 2


def test_empty_identifier_path_is_rejected():
    with pytest.raises(ValueError):
        TypeName((TypeNameComponent.root(),))
    with pytest.raises(ValueError):
        TypeName.from_identifiers(["Foo"]).appending()


def test_usage_wrappers_render_innermost_first():
    usage = TypeName.from_identifiers(["Swift", "String"]).as_usage()

    assert usage.fully_qualified_name == "Swift.String"
    assert usage.as_optional().fully_qualified_name == "Swift.String?"
    assert usage.as_array().as_optional().fully_qualified_name == "[Swift.String]?"
    assert usage.as_dictionary_value().fully_qualified_name == "[String: Swift.String]"


def test_optionality_toggles():
    usage = TypeName.from_identifiers(["Foo"]).as_usage()
    optional = usage.as_optional()

    assert optional.is_optional
    assert optional.as_optional() == optional
    assert optional.as_non_optional() == usage
    assert usage.with_optional(True) == optional
    assert optional.with_optional(False) == usage
    assert not usage.as_array().is_optional
    assert isinstance(usage, TypeUsage)
