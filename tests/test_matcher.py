"""
Unit tests for builtin and referenceable type matching.
"""

import pytest

from openapi_typegen.codegen.core.schema import Schema, SchemaKind, convert_schema


@pytest.fixture
def matcher(assigner):
    return assigner.matcher


@pytest.mark.parametrize(
    "raw, expected",
    [
        ({"type": "boolean"}, "Swift.Bool"),
        ({"type": "integer"}, "Swift.Int"),
        ({"type": "integer", "format": "int32"}, "Swift.Int32"),
        ({"type": "integer", "format": "int64"}, "Swift.Int64"),
        ({"type": "number"}, "Swift.Double"),
        ({"type": "number", "format": "float"}, "Swift.Float"),
        ({"type": "string"}, "Swift.String"),
        ({"type": "string", "format": "binary"}, "Foundation.Data"),
        ({"type": "string", "format": "date-time"}, "Foundation.Date"),
        ({}, "OpenAPIRuntime.OpenAPIValueContainer"),
        ({"type": "object"}, "OpenAPIRuntime.OpenAPIObjectContainer"),
        ({"type": "array"}, "OpenAPIRuntime.OpenAPIArrayContainer"),
        ({"type": "array", "items": {"type": "string"}}, "[Swift.String]"),
        (
            {"type": "array", "items": {"type": "array", "items": {"type": "integer"}}},
            "[[Swift.Int]]",
        ),
    ],
)
def test_builtin_matching(matcher, raw, expected):
    usage = matcher.try_match_builtin_type(convert_schema(raw))

    assert usage is not None
    assert usage.fully_qualified_name == expected


def test_missing_schema_is_a_value_container(matcher):
    assert matcher.try_match_builtin_type(None).fully_qualified_name == (
        "OpenAPIRuntime.OpenAPIValueContainer"
    )
    assert matcher.is_referenceable(None)


def test_enums_never_match_builtins(matcher):
    schema = convert_schema({"type": "string", "enum": ["a", "b"]})

    assert matcher.try_match_builtin_type(schema) is None
    assert matcher.is_inlinable(schema)


def test_objects_with_properties_are_inlinable(matcher):
    schema = convert_schema({"type": "object", "properties": {"a": {"type": "string"}}})

    assert matcher.try_match_referenceable_type(schema) is None
    assert not matcher.is_referenceable(schema)
    assert matcher.is_inlinable(schema)


def test_references_are_referenceable(matcher):
    schema = Schema.ref("#/components/schemas/Pet")

    usage = matcher.try_match_referenceable_type(schema)
    assert usage.fully_qualified_name == "Components.Schemas.Pet"
    assert matcher.try_match_builtin_type(schema) is None
    assert matcher.is_referenceable(schema)


def test_referenceable_applies_optionality(matcher):
    optional_ref = Schema.ref("#/components/schemas/Pet", required=False)
    nullable_string = convert_schema({"type": "string", "nullable": True})

    assert matcher.try_match_referenceable_type(optional_ref).fully_qualified_name == (
        "Components.Schemas.Pet?"
    )
    assert matcher.try_match_referenceable_type(nullable_string).fully_qualified_name == (
        "Swift.String?"
    )
    # Builtin matching leaves optionality to the caller.
    assert matcher.try_match_builtin_type(nullable_string).fully_qualified_name == "Swift.String"


def test_array_of_references(matcher):
    schema = convert_schema({"type": "array", "items": {"$ref": "#/components/schemas/Pet"}})

    assert matcher.try_match_referenceable_type(schema).fully_qualified_name == (
        "[Components.Schemas.Pet]"
    )
    assert matcher.is_referenceable(schema)


def test_array_of_inline_objects_is_inlinable(matcher):
    schema = convert_schema(
        {"type": "array", "items": {"type": "object", "properties": {"a": {}}}}
    )

    assert matcher.try_match_referenceable_type(schema) is None
    assert matcher.is_inlinable(schema)


def test_referenceable_and_inlinable_are_complementary(matcher):
    schemas = [
        convert_schema(raw)
        for raw in (
            {"type": "string"},
            {"type": "string", "enum": ["x"]},
            {"type": "object", "properties": {"a": {}}},
            {"allOf": [{"type": "object"}]},
            {"$ref": "#/components/schemas/Pet"},
            {"type": "array", "items": {"oneOf": [{"type": "string"}]}},
        )
    ]

    for schema in schemas:
        assert matcher.is_referenceable(schema) != matcher.is_inlinable(schema)
        if matcher.is_referenceable(schema):
            assert matcher.try_match_referenceable_type(schema) is not None
        else:
            assert matcher.try_match_referenceable_type(schema) is None


def test_is_optional(matcher):
    assert not matcher.is_optional(None)
    assert matcher.is_optional(Schema(kind=SchemaKind.STRING, required=False))
    assert not matcher.is_optional(Schema(kind=SchemaKind.STRING))
