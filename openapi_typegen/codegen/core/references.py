"""
JSON reference parsing.

Only references to entities under ``#/components`` of the same document are
supported; anything else is a document error.
"""

from dataclasses import dataclass
from enum import Enum


class ComponentKind(Enum):
    """Reusable component sections of an OpenAPI document."""

    SCHEMAS = "schemas"
    PARAMETERS = "parameters"
    HEADERS = "headers"
    REQUEST_BODIES = "requestBodies"
    RESPONSES = "responses"


class ReferenceParsingError(Exception):
    """Base exception for references the generator cannot follow."""

    def __init__(self, message: str, reference: str):
        self.reference = reference
        super().__init__(message)


class NonComponentReferenceError(ReferenceParsingError):
    """A reference into the same document, but outside ``#/components``."""

    def __init__(self, reference: str):
        super().__init__(
            f"JSON references outside of #/components are not supported, found: {reference}",
            reference,
        )


class ExternalReferenceError(ReferenceParsingError):
    """A reference into another document."""

    def __init__(self, reference: str):
        super().__init__(
            f"External JSON references are not supported, found: {reference}",
            reference,
        )


@dataclass(frozen=True)
class ComponentReference:
    """A parsed ``#/components/<kind>/<name>`` reference."""

    kind: ComponentKind
    name: str

    @property
    def raw(self) -> str:
        return f"#/components/{self.kind.value}/{_escape(self.name)}"


def _unescape(token: str) -> str:
    # JSON pointer escapes, applied in this order.
    return token.replace("~1", "/").replace("~0", "~")


def _escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def parse_reference(reference: str) -> ComponentReference:
    """
    Parse a raw ``$ref`` value.

    Raises:
        ExternalReferenceError: If the reference points at another document
        NonComponentReferenceError: If it points outside ``#/components``
    """
    if not reference.startswith("#"):
        raise ExternalReferenceError(reference)

    parts = reference.split("/")
    if len(parts) != 4 or parts[0] != "#" or parts[1] != "components" or not parts[3]:
        raise NonComponentReferenceError(reference)

    try:
        kind = ComponentKind(parts[2])
    except ValueError as e:
        raise NonComponentReferenceError(reference) from e

    return ComponentReference(kind=kind, name=_unescape(parts[3]))
