"""
Generic tree values used as the interchange format for axioms.

A tree is either a Leaf holding a string token or a Node holding an ordered
sequence of trees. Callers that have no access to the typed axiom model build
and read axioms through this shape only, usually as plain nested Python lists
of strings (see `from_host` and `to_host`).
"""

from dataclasses import dataclass
from typing import Any, Tuple, Union

from .errors import DecodeError


@dataclass(frozen=True)
class Leaf:
    """An atomic string token."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Node:
    """An ordered sequence of generic trees."""

    children: Tuple["GenericTree", ...] = ()

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self):
        return iter(self.children)

    def __getitem__(self, index):
        return self.children[index]


GenericTree = Union[Leaf, Node]


def node(*children: GenericTree) -> GenericTree:
    """
    Build a node, collapsing it to its only child when it has exactly one.

    A one-child node is interchangeable with the child itself, so encoders never
    produce one.
    """
    if len(children) == 1:
        return children[0]
    return Node(tuple(children))


def unwrap(tree: GenericTree) -> GenericTree:
    """Strip any chain of one-child nodes around a tree."""
    while isinstance(tree, Node) and len(tree.children) == 1:
        tree = tree.children[0]
    return tree


def from_host(value: Any) -> GenericTree:
    """
    Convert a host value (a string or a nested list/tuple of strings) into a tree.

    Args:
        value: String or nested sequence of strings

    Returns:
        The equivalent generic tree

    Raises:
        DecodeError: If any element is neither a string nor a sequence
    """
    if isinstance(value, str):
        return Leaf(value)
    if isinstance(value, (list, tuple)):
        return Node(tuple(from_host(item) for item in value))
    raise DecodeError(f"Unparseable axiom element: {value!r}")


def to_host(tree: GenericTree) -> Union[str, list]:
    """
    Convert a tree into plain host values.

    Leaves become strings and nodes become lists. A node with a single child is
    returned as that child's host value rather than a one-element list.
    """
    if isinstance(tree, Leaf):
        return tree.value
    if len(tree.children) == 1:
        return to_host(tree.children[0])
    return [to_host(child) for child in tree.children]
