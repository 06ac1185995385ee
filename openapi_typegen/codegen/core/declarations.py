"""
Structural declarations produced by translation.

A declaration records what a type is (struct, enum or typealias), its name
and the usages of its members. Rendering declarations to source text is left
to the consumer; the model carries everything needed to decide names and
storage.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

from .recursion import TypeNode
from .type_name import TypeName, TypeUsage


class DeclarationKind(Enum):
    STRUCT = "struct"
    ENUM = "enum"
    TYPEALIAS = "typealias"


@dataclass
class Member:
    """A struct property or an enum case."""

    name: str
    original_name: str
    usage: Optional[TypeUsage] = None
    description: Optional[str] = None


@dataclass
class Declaration:
    type_name: TypeName
    kind: DeclarationKind
    members: List[Member] = field(default_factory=list)
    nested: List["Declaration"] = field(default_factory=list)
    aliased: Optional[TypeUsage] = None
    discriminator: Optional[str] = None
    description: Optional[str] = None
    boxed: bool = False

    @property
    def is_boxable(self) -> bool:
        """Structs and enums can hold indirect storage, typealiases cannot."""
        return self.kind is not DeclarationKind.TYPEALIAS

    def walk(self) -> Iterator["Declaration"]:
        """Yield this declaration and every nested one, depth first."""
        yield self
        for nested in self.nested:
            yield from nested.walk()

    def usages(self) -> Iterator[TypeUsage]:
        """Every type usage in this declaration, including nested ones."""
        for declaration in self.walk():
            if declaration.aliased is not None:
                yield declaration.aliased
            for member in declaration.members:
                if member.usage is not None:
                    yield member.usage

    def referenced_names(self, namespace: TypeName) -> List[TypeName]:
        """Names directly inside ``namespace`` that this declaration uses, in order."""
        names: List[TypeName] = []
        for usage in self.usages():
            name = usage.type_name
            if len(name.components) > len(namespace.components) and name.parent == namespace:
                if name not in names:
                    names.append(name)
        return names

    def as_type_node(self, namespace: TypeName) -> TypeNode:
        return TypeNode(
            name=self.type_name,
            edges=tuple(self.referenced_names(namespace)),
            is_boxable=self.is_boxable,
        )
