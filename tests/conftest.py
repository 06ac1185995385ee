"""
Shared fixtures for the test suite.

Provides raw OpenAPI documents and factories for naming authorities so
individual test modules only describe the schemas they care about.
"""

from typing import Any, Callable, Dict, Optional

import pytest

from openapi_typegen.codegen.core.assigner import TypeAssigner
from openapi_typegen.codegen.core.naming import create_safe_name_generator
from openapi_typegen.codegen.core.schema import convert_document
from openapi_typegen.codegen.languages.swift import SWIFT_BUILTIN_TYPES, SWIFT_KEYWORDS


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def schema_ref(name: str) -> Dict[str, str]:
    return {"$ref": f"#/components/schemas/{name}"}


def make_document(schemas: Optional[Dict[str, Any]] = None, **sections) -> Dict[str, Any]:
    """Build a raw OpenAPI document around the given component schemas."""
    document: Dict[str, Any] = {
        "openapi": "3.1.0",
        "info": {"title": "Test API", "version": "1.0.0"},
        "components": {"schemas": schemas or {}},
    }
    paths = sections.pop("paths", None)
    if paths is not None:
        document["paths"] = paths
    document["components"].update(sections)
    return document


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def assigner_factory() -> Callable[..., TypeAssigner]:
    """Create Swift-flavoured type assigners with a chosen naming strategy."""

    def factory(strategy: str = "defensive", **kwargs) -> TypeAssigner:
        safe_names = create_safe_name_generator(strategy, keywords=SWIFT_KEYWORDS)
        return TypeAssigner(safe_names, dict(SWIFT_BUILTIN_TYPES), **kwargs)

    return factory


@pytest.fixture
def assigner(assigner_factory) -> TypeAssigner:
    return assigner_factory()


@pytest.fixture
def pets_document() -> Dict[str, Any]:
    """A small but complete document with components and operations."""
    return make_document(
        {
            "Pet": {
                "type": "object",
                "required": ["id", "name"],
                "properties": {
                    "id": {"type": "integer", "format": "int64"},
                    "name": {"type": "string"},
                    "tag": {"type": "string"},
                    "owner": {
                        "type": "object",
                        "properties": {"email": {"type": "string"}},
                    },
                },
            },
            "Pets": {"type": "array", "items": schema_ref("Pet")},
            "PetKind": {"type": "string", "enum": ["cat", "dog"]},
            "Error": {
                "type": "object",
                "required": ["message"],
                "properties": {"message": {"type": "string"}},
            },
        },
        paths={
            "/pets": {
                "get": {
                    "operationId": "listPets",
                    "parameters": [
                        {
                            "name": "limit",
                            "in": "query",
                            "schema": {"type": "integer", "format": "int32"},
                        },
                        {
                            "name": "X-Request-ID",
                            "in": "header",
                            "required": True,
                            "schema": {"type": "string"},
                        },
                    ],
                    "responses": {
                        "200": {
                            "description": "A list of pets",
                            "headers": {"x-next": {"schema": {"type": "string"}}},
                            "content": {"application/json": {"schema": schema_ref("Pets")}},
                        },
                        "default": {
                            "description": "Unexpected error",
                            "content": {"application/json": {"schema": schema_ref("Error")}},
                        },
                    },
                },
                "post": {
                    "operationId": "createPet",
                    "requestBody": {
                        "required": True,
                        "content": {"application/json": {"schema": schema_ref("Pet")}},
                    },
                    "responses": {"201": {"description": "Created"}},
                },
            },
            "/pets/{petId}": {
                "parameters": [
                    {"name": "petId", "in": "path", "required": True, "schema": {"type": "string"}}
                ],
                "get": {
                    "responses": {
                        "200": {
                            "description": "One pet",
                            "content": {"application/json": {"schema": schema_ref("Pet")}},
                        }
                    }
                },
            },
        },
    )


@pytest.fixture
def pets(pets_document):
    return convert_document(pets_document)
