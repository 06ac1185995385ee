"""
Schema support classification.

Decides, before any translation happens, whether the generator can
represent a schema. Unsupported schemas are not errors: callers report the
reason and skip the schema (or the property holding it).
"""

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, NamedTuple, Optional, Set, Tuple

from .schema import Components, PRIMITIVE_KINDS, Schema, SchemaKind


class UnsupportedReason(Enum):
    """Why a schema cannot be represented."""

    NO_SUBSCHEMAS = "no subschemas"
    NOT_OBJECTISH = "not an object-ish schema (object, ref, allOf)"
    NOT_REF = "not a reference"
    SCHEMA_TYPE = "schema type"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SupportResult:
    """Outcome of a support check; ``reason`` is ``None`` when supported."""

    reason: Optional[UnsupportedReason] = None
    schema: Optional[Schema] = None

    @property
    def supported(self) -> bool:
        return self.reason is None

    @classmethod
    def ok(cls) -> "SupportResult":
        return cls()

    @classmethod
    def unsupported(cls, reason: UnsupportedReason, schema: Schema) -> "SupportResult":
        return cls(reason=reason, schema=schema)


class ReferenceStack:
    """
    References currently being visited, in order.

    A list keeps the order for reporting, a set makes membership checks
    constant time. Entries are only added through ``visiting`` (or matched
    ``push``/``pop`` calls) so sibling branches never see each other's
    references.
    """

    def __init__(self):
        self._stack: List[str] = []
        self._members: Set[str] = set()

    def push(self, name: str):
        if name in self._members:
            raise ValueError(f"Reference '{name}' is already on the stack")
        self._stack.append(name)
        self._members.add(name)

    def pop(self) -> str:
        name = self._stack.pop()
        self._members.discard(name)
        return name

    @contextmanager
    def visiting(self, name: str) -> Iterator[None]:
        """Push ``name`` for the duration of the block, popping on any exit."""
        self.push(name)
        try:
            yield
        finally:
            self.pop()

    def __contains__(self, name: str) -> bool:
        return name in self._members

    def __len__(self) -> int:
        return len(self._stack)

    def __iter__(self):
        return iter(list(self._stack))


class _Expansion(NamedTuple):
    """Child checks that decide a schema, run with ``reference`` on the stack."""

    tasks: List[Tuple[Callable, Schema]]
    reference: Optional[str] = None


class SupportChecker:
    """
    Classifies schemas against one document's components.

    Each rule either decides a schema on its own or expands it into child
    checks. ``_run`` works through those checks depth first with an explicit
    frame stack, so long chains of references, arrays and compositions never
    hit the interpreter's recursion limit. The first unsupported child
    decides the result.

    Raises from ``is_schema_supported`` are document errors: a reference that
    cannot be parsed or points at a missing component.
    """

    def __init__(self, components: Components):
        self.components = components

    def is_schema_supported(
        self, schema: Schema, reference_stack: Optional[ReferenceStack] = None
    ) -> SupportResult:
        return self._run(self._schema_rule, schema, reference_stack)

    def is_objectish_and_supported(
        self, schema: Schema, reference_stack: Optional[ReferenceStack] = None
    ) -> SupportResult:
        """Supported only for objects, references to object-ish schemas and allOf."""
        return self._run(self._objectish_rule, schema, reference_stack)

    def is_object_or_ref_to_object_supported(
        self, schema: Schema, reference_stack: Optional[ReferenceStack] = None
    ) -> SupportResult:
        """
        Check used for multipart bodies, whose parts come from object properties.

        Objects and free-form fragments are accepted, references are followed;
        anything else, compositions included, is not a reference to an object.
        """
        return self._run(self._object_or_ref_rule, schema, reference_stack)

    # Rules

    def _schema_rule(self, schema: Schema, stack: ReferenceStack):
        kind = schema.kind

        if kind in PRIMITIVE_KINDS or kind in (SchemaKind.OBJECT, SchemaKind.FRAGMENT):
            # Unsupported properties are dropped by the object translation.
            return SupportResult.ok()

        if kind is SchemaKind.ARRAY:
            if schema.items is None:
                return SupportResult.ok()
            return _Expansion([(self._schema_rule, schema.items)])

        if kind is SchemaKind.REFERENCE:
            return self._follow_reference(schema, stack, self._schema_rule)

        if kind in (SchemaKind.ALL_OF, SchemaKind.ANY_OF):
            if not schema.subschemas:
                return SupportResult.unsupported(UnsupportedReason.NO_SUBSCHEMAS, schema)
            return _Expansion([(self._objectish_rule, child) for child in schema.subschemas])

        if kind is SchemaKind.ONE_OF:
            if not schema.subschemas:
                return SupportResult.unsupported(UnsupportedReason.NO_SUBSCHEMAS, schema)
            if schema.discriminator is None:
                return _Expansion([(self._schema_rule, child) for child in schema.subschemas])
            # Discriminated payloads must be named components.
            for child in schema.subschemas:
                if child.kind is not SchemaKind.REFERENCE:
                    return SupportResult.unsupported(UnsupportedReason.NOT_REF, child)
            return _Expansion([(self._objectish_rule, child) for child in schema.subschemas])

        return SupportResult.unsupported(UnsupportedReason.SCHEMA_TYPE, schema)

    def _objectish_rule(self, schema: Schema, stack: ReferenceStack):
        if schema.kind is SchemaKind.OBJECT:
            return SupportResult.ok()
        if schema.kind is SchemaKind.REFERENCE:
            return self._follow_reference(schema, stack, self._objectish_rule)
        if schema.kind is SchemaKind.ALL_OF:
            return _Expansion([(self._schema_rule, schema)])
        return SupportResult.unsupported(UnsupportedReason.NOT_OBJECTISH, schema)

    def _object_or_ref_rule(self, schema: Schema, stack: ReferenceStack):
        if schema.kind in (SchemaKind.OBJECT, SchemaKind.FRAGMENT):
            return SupportResult.ok()
        if schema.kind is SchemaKind.REFERENCE:
            return self._follow_reference(schema, stack, self._object_or_ref_rule)
        return SupportResult.unsupported(UnsupportedReason.NOT_REF, schema)

    def _follow_reference(self, schema: Schema, stack: ReferenceStack, rule):
        name = schema.reference
        if name in stack:
            # Cycles are handled by the recursion detector.
            return SupportResult.ok()
        return _Expansion([(rule, self.components.lookup_schema(schema))], name)

    @staticmethod
    def _run(rule, schema: Schema, reference_stack: Optional[ReferenceStack]) -> SupportResult:
        stack = reference_stack if reference_stack is not None else ReferenceStack()
        frames: List[Tuple[Iterator, Optional[str]]] = [(iter([(rule, schema)]), None)]
        try:
            while frames:
                task = next(frames[-1][0], None)
                if task is None:
                    _, reference = frames.pop()
                    if reference is not None:
                        stack.pop()
                    continue

                check, child = task
                outcome = check(child, stack)
                if isinstance(outcome, SupportResult):
                    if not outcome.supported:
                        return outcome
                    continue

                if outcome.reference is not None:
                    stack.push(outcome.reference)
                frames.append((iter(outcome.tasks), outcome.reference))
            return SupportResult.ok()
        finally:
            # Leave a caller's stack as it was, even on early exit or error.
            for _, reference in frames:
                if reference is not None:
                    stack.pop()
