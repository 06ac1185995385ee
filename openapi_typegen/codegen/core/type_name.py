"""
Fully-qualified type names and type usages.

A ``TypeName`` tracks two parallel paths: the identifier path used in
generated code (``Components.Schemas.Foo``) and the JSON reference path of
the document entity it was derived from (``#/components/schemas/Foo``).
A ``TypeUsage`` describes how a named type is used at a particular site,
for example as an optional value or an array element.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class TypeNameComponent:
    """One level of a type name; at least one of the two paths is set."""

    identifier: Optional[str] = None
    json: Optional[str] = None

    @classmethod
    def root(cls) -> "TypeNameComponent":
        """The document root, only contributing ``#`` to the JSON path."""
        return cls(identifier=None, json="#")


@dataclass(frozen=True)
class TypeName:
    """
    Immutable, hierarchical type name.

    Equality and hashing consider the full component sequence, so two names
    with the same identifier path but different JSON paths are different.
    """

    components: Tuple[TypeNameComponent, ...]

    def __post_init__(self):
        object.__setattr__(self, "components", tuple(self.components))
        if not self.identifier_path_components:
            raise ValueError("TypeName identifier path cannot be empty")

    @classmethod
    def from_identifiers(cls, identifiers: Iterable[str]) -> "TypeName":
        """Create a name without any JSON path information."""
        return cls(tuple(TypeNameComponent(identifier=part) for part in identifiers))

    @property
    def identifier_path_components(self) -> List[str]:
        return [c.identifier for c in self.components if c.identifier is not None]

    @property
    def json_key_path_components(self) -> Optional[List[str]]:
        parts = [c.json for c in self.components if c.json is not None]
        return parts or None

    @property
    def fully_qualified_name(self) -> str:
        """Identifier path joined with periods."""
        return ".".join(self.identifier_path_components)

    @property
    def short_name(self) -> str:
        return self.identifier_path_components[-1]

    @property
    def fully_qualified_json_path(self) -> Optional[str]:
        """
        JSON path joined with slashes.

        ``None`` when the last component does not map to a document entity,
        since the path would then point at an ancestor.
        """
        if self.components[-1].json is None:
            return None
        parts = self.json_key_path_components
        return "/".join(parts) if parts else None

    @property
    def short_json_name(self) -> Optional[str]:
        parts = self.json_key_path_components
        return parts[-1] if parts else None

    def appending(self, identifier: Optional[str] = None, json: Optional[str] = None) -> "TypeName":
        """Return a new name with one more component."""
        if identifier is None and json is None:
            raise ValueError("At least the identifier or the JSON name must be provided")
        return TypeName(self.components + (TypeNameComponent(identifier=identifier, json=json),))

    @property
    def parent(self) -> "TypeName":
        """
        The name without its last component.

        Raises:
            ValueError: If no identifier component would remain
        """
        if not self.components:
            raise ValueError("Cannot get the parent of a root type")
        return TypeName(self.components[:-1])

    def as_usage(self) -> "TypeUsage":
        return TypeUsage(self)

    def __str__(self) -> str:
        json_path = self.fully_qualified_json_path
        if json_path:
            return f"{self.fully_qualified_name} ({json_path})"
        return self.fully_qualified_name


class UsageKind(Enum):
    """Ways a type can be wrapped at a use site."""

    OPTIONAL = "optional"
    ARRAY = "array"
    DICTIONARY_VALUE = "dictionary_value"


@dataclass(frozen=True)
class TypeUsage:
    """
    A type name together with its use-site wrappers.

    Wrappers are stored innermost first, e.g. ``(ARRAY, OPTIONAL)`` for an
    optional array of ``type_name``.
    """

    type_name: TypeName
    wrappers: Tuple[UsageKind, ...] = ()

    def _wrapped(self, kind: UsageKind) -> "TypeUsage":
        return TypeUsage(self.type_name, self.wrappers + (kind,))

    @property
    def is_optional(self) -> bool:
        return bool(self.wrappers) and self.wrappers[-1] is UsageKind.OPTIONAL

    def as_optional(self) -> "TypeUsage":
        if self.is_optional:
            return self
        return self._wrapped(UsageKind.OPTIONAL)

    def as_non_optional(self) -> "TypeUsage":
        if not self.is_optional:
            return self
        return TypeUsage(self.type_name, self.wrappers[:-1])

    def with_optional(self, is_optional: bool) -> "TypeUsage":
        return self.as_optional() if is_optional else self.as_non_optional()

    def as_array(self) -> "TypeUsage":
        return self._wrapped(UsageKind.ARRAY)

    def as_dictionary_value(self) -> "TypeUsage":
        return self._wrapped(UsageKind.DICTIONARY_VALUE)

    @property
    def fully_qualified_name(self) -> str:
        """Generic rendering: ``T?``, ``[T]`` and ``[String: T]``."""
        rendered = self.type_name.fully_qualified_name
        for kind in self.wrappers:
            if kind is UsageKind.OPTIONAL:
                rendered = f"{rendered}?"
            elif kind is UsageKind.ARRAY:
                rendered = f"[{rendered}]"
            else:
                rendered = f"[String: {rendered}]"
        return rendered

    def __str__(self) -> str:
        return self.fully_qualified_name
