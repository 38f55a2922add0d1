"""
Transitive closure over the direct class hierarchy.

Both queries walk the store's adjacency indices depth-first. Each class is
marked visited before it is expanded, so the walk also terminates when the
asserted hierarchy contains a cycle. The result always includes the start class.
"""

from typing import Callable, Set

from rdflib import URIRef

from .domain import iri
from .store import IRILike, OntologyStore


def _closure(start: URIRef, neighbours: Callable[[URIRef], Set[URIRef]]) -> Set[URIRef]:
    visited = {start}
    stack = [start]
    while stack:
        current = stack.pop()
        for nxt in neighbours(current):
            if nxt not in visited:
                visited.add(nxt)
                stack.append(nxt)
    return visited


def descendants_of(store: OntologyStore, cls: IRILike) -> Set[URIRef]:
    """The class itself plus every class reachable through direct subclass edges."""
    return _closure(iri(cls), store.direct_subclasses)


def ancestors_of(store: OntologyStore, cls: IRILike) -> Set[URIRef]:
    """The class itself plus every class reachable through direct superclass edges."""
    return _closure(iri(cls), store.direct_superclasses)
