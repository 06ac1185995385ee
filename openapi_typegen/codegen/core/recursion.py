"""
Recursive type detection.

Types generated with value semantics cannot contain themselves, directly or
through other types. For every reference cycle in the graph of component
declarations, one declaration must use indirect (boxed) storage instead.
This module computes that set deterministically, in document order.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, Iterator, List, Set, Tuple

from ...logging_config import get_logger

logger = get_logger(__name__)

_EXHAUSTED = object()


class NodeNotFoundError(Exception):
    """Exception raised when an edge points at a node the container lacks."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Node '{name}' not found")


class InvalidRecursionError(Exception):
    """A cycle in which no node can hold indirect storage."""

    def __init__(self, name):
        self.name = name
        super().__init__(
            f"Invalid recursion found at type '{name}'. This type cannot be constructed, "
            "cycles must contain at least one struct, not just typealiases."
        )


@dataclass(frozen=True)
class TypeNode:
    """
    A node of the reference graph.

    Attributes:
        name: Unique, hashable name
        edges: Names of the nodes this one contains, in declaration order
        is_boxable: Whether this node can be chosen to break a cycle
    """

    name: Hashable
    edges: Tuple[Hashable, ...] = ()
    is_boxable: bool = True


class TypeNodeContainer(ABC):
    """Looks up nodes by name."""

    @abstractmethod
    def lookup(self, name):
        """
        Return the node called ``name``.

        Raises:
            NodeNotFoundError: If no such node exists
        """


class DictNodeContainer(TypeNodeContainer):
    """Container backed by a dictionary of nodes keyed by name."""

    def __init__(self, nodes: Iterable):
        self._nodes: Dict[Hashable, object] = {node.name: node for node in nodes}

    def lookup(self, name):
        try:
            return self._nodes[name]
        except KeyError:
            raise NodeNotFoundError(name) from None


def compute_boxed_types(root_nodes: Iterable, container: TypeNodeContainer) -> Set:
    """
    Compute the names of the nodes that need boxed storage.

    Nodes are explored depth first, starting from each root in order. The
    walk keeps its own stack of ``(name, edge iterator)`` frames, so the
    length of a reference chain is not bounded by the interpreter's
    recursion limit. When an edge leads back to a node on the current path,
    the path slice from that node onward is a cycle. A cycle that already
    contains a boxed node is broken; otherwise its first boxable node,
    counted from the start of the cycle, is boxed.

    Args:
        root_nodes: Nodes in document order; any object with ``name``,
            ``edges`` and ``is_boxable`` attributes
        container: Resolves edge names to nodes

    Returns:
        Names of the nodes to box

    Raises:
        InvalidRecursionError: If a cycle has no boxable node
        NodeNotFoundError: If an edge cannot be resolved
    """
    seen: Set = set()
    boxed: Set = set()
    frames: List[Tuple[Hashable, Iterator]] = []
    stack: List = []
    stack_set: Set = set()

    def enter(node):
        seen.add(node.name)
        stack.append(node.name)
        stack_set.add(node.name)
        frames.append((node.name, iter(node.edges)))

    def leave():
        name, _ = frames.pop()
        stack.pop()
        stack_set.discard(name)

    def close_cycle(name):
        cycle = stack[stack.index(name):]
        if any(member in boxed for member in cycle):
            return
        for member in cycle:
            if container.lookup(member).is_boxable:
                logger.debug("Boxing %s to break cycle %s", member, cycle)
                boxed.add(member)
                return
        raise InvalidRecursionError(name)

    for root in root_nodes:
        if root.name in seen:
            continue
        enter(root)
        try:
            while frames:
                edge = next(frames[-1][1], _EXHAUSTED)
                if edge is _EXHAUSTED:
                    leave()
                    continue
                node = container.lookup(edge)
                # A seen node off the path was fully explored elsewhere, not a cycle.
                if node.name not in seen:
                    enter(node)
                elif node.name in stack_set:
                    close_cycle(node.name)
        finally:
            while frames:
                leave()

    return boxed
