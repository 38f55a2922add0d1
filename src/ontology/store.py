"""
In-memory axiom store with label and class hierarchy indices.

The store owns the set of axioms plus indices derived from them:
- identifier -> axioms mentioning it
- identifier -> label, and label -> identifier
- class -> direct subclasses, and class -> direct superclasses

Every index is maintained incrementally by `insert` and `remove`. Loading an
ontology replays each axiom through `insert`, so there is a single indexing
code path. Removing an axiom retracts whatever index entries it produced.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, Iterator, List, Optional, Set, Union

from rdflib import URIRef

from .config import OntologyConfig
from .domain import (
    LABEL_ALIASES, AnnotationAssertion, Axiom, DeclareClass, OntologyStats,
    SubClassOf, iri,
)

logger = logging.getLogger(__name__)

IRILike = Union[str, URIRef]


class OntologyStore:
    """Simple in-memory store for ontology axioms."""

    def __init__(self, config: Optional[OntologyConfig] = None,
                 prefixes: Optional[Dict[str, str]] = None):
        """Initialize an empty store.

        Args:
            config: Optional configuration. If None, defaults are used.
            prefixes: Namespace prefix mapping kept for saving the ontology again
        """
        self.config = config or OntologyConfig()
        self.label_property = iri(self.config.label_property)
        self.prefixes: Dict[str, str] = dict(prefixes or {})

        # Primary store; a dict keeps insertion order for stable lookups
        self._axioms: Dict[Axiom, None] = {}

        # Derived indices
        self._axioms_by_iri: Dict[URIRef, Dict[Axiom, None]] = {}
        self._labels: Dict[URIRef, str] = {}
        self._iris_by_label: Dict[str, URIRef] = {}
        self._subclasses: Dict[URIRef, Set[URIRef]] = {}
        self._superclasses: Dict[URIRef, Set[URIRef]] = {}

    @classmethod
    def from_axioms(cls, axioms: Iterable[Axiom],
                    prefixes: Optional[Dict[str, str]] = None,
                    config: Optional[OntologyConfig] = None) -> "OntologyStore":
        """Build a store by inserting every axiom in turn."""
        store = cls(config=config, prefixes=prefixes)
        for axiom in axioms:
            store.insert(axiom)
        return store

    def __len__(self) -> int:
        return len(self._axioms)

    def __contains__(self, axiom: Axiom) -> bool:
        return axiom in self._axioms

    def __iter__(self) -> Iterator[Axiom]:
        return iter(list(self._axioms))

    def is_label_property(self, property_iri: IRILike) -> bool:
        """True for the configured label property and its accepted short forms."""
        value = str(property_iri)
        return value == str(self.label_property) or value in LABEL_ALIASES

    def _is_label_axiom(self, axiom: Axiom) -> bool:
        return isinstance(axiom, AnnotationAssertion) and self.is_label_property(axiom.property)

    # Mutation

    def insert(self, axiom: Axiom) -> bool:
        """Add an axiom and update the indices.

        A label annotation replaces any existing label annotation for the same
        subject instead of sitting next to it.

        Returns:
            True if the axiom was added, False if it was already present
        """
        if axiom in self._axioms:
            return False

        if self._is_label_axiom(axiom):
            old = self._label_axiom(axiom.subject)
            if old is not None:
                logger.debug("Replacing label of %s: %r -> %r", axiom.subject, old.value, axiom.value)
                self.remove(old)

        self._axioms[axiom] = None
        self._index(axiom)
        return True

    def remove(self, axiom: Axiom) -> bool:
        """Remove an axiom and retract the index entries it produced.

        Returns:
            True if the axiom was removed, False if it was not in the store
        """
        if axiom not in self._axioms:
            return False
        del self._axioms[axiom]
        self._unindex(axiom)
        return True

    def set_label(self, subject: IRILike, label: str) -> None:
        """Set the label of an entity, replacing any previous one."""
        self.insert(AnnotationAssertion(subject=iri(subject), property=self.label_property, value=label))

    def _index(self, axiom: Axiom) -> None:
        for entity in axiom.iris():
            self._axioms_by_iri.setdefault(entity, {})[axiom] = None

        if self._is_label_axiom(axiom):
            self._labels[axiom.subject] = axiom.value
            self._iris_by_label[axiom.value] = axiom.subject
        elif isinstance(axiom, SubClassOf) and axiom.is_atomic():
            # Direct subclasses only
            sub, sup = axiom.sub.iri, axiom.sup.iri
            self._subclasses.setdefault(sup, set()).add(sub)
            self._superclasses.setdefault(sub, set()).add(sup)

    def _unindex(self, axiom: Axiom) -> None:
        for entity in axiom.iris():
            mentioned = self._axioms_by_iri.get(entity)
            if mentioned is None:
                continue
            mentioned.pop(axiom, None)
            if not mentioned:
                del self._axioms_by_iri[entity]

        if self._is_label_axiom(axiom):
            if self._labels.get(axiom.subject) == axiom.value:
                del self._labels[axiom.subject]
            if self._iris_by_label.get(axiom.value) == axiom.subject:
                del self._iris_by_label[axiom.value]
                # Another entity may still carry the same label
                for subject, label in self._labels.items():
                    if label == axiom.value:
                        self._iris_by_label[label] = subject
                        break
        elif isinstance(axiom, SubClassOf) and axiom.is_atomic():
            sub, sup = axiom.sub.iri, axiom.sup.iri
            self._discard_edge(self._subclasses, sup, sub)
            self._discard_edge(self._superclasses, sub, sup)

    @staticmethod
    def _discard_edge(index: Dict[URIRef, Set[URIRef]], key: URIRef, value: URIRef) -> None:
        targets = index.get(key)
        if targets is None:
            return
        targets.discard(value)
        if not targets:
            del index[key]

    def _label_axiom(self, subject: URIRef) -> Optional[AnnotationAssertion]:
        for axiom in self._axioms_by_iri.get(subject, {}):
            if self._is_label_axiom(axiom) and axiom.subject == subject:
                return axiom
        return None

    # Lookups

    def axioms(self) -> List[Axiom]:
        """All axioms in insertion order."""
        return list(self._axioms)

    def axioms_for_iri(self, entity: IRILike) -> List[Axiom]:
        """All axioms that mention the identifier, in insertion order."""
        return list(self._axioms_by_iri.get(iri(entity), {}))

    def label(self, entity: IRILike) -> Optional[str]:
        return self._labels.get(iri(entity))

    def iri_for_label(self, label: str) -> Optional[URIRef]:
        return self._iris_by_label.get(label)

    def direct_subclasses(self, cls: IRILike) -> Set[URIRef]:
        return set(self._subclasses.get(iri(cls), ()))

    def direct_superclasses(self, cls: IRILike) -> Set[URIRef]:
        return set(self._superclasses.get(iri(cls), ()))

    def declared_classes(self) -> Set[URIRef]:
        return {axiom.cls for axiom in self._axioms if isinstance(axiom, DeclareClass)}

    def annotation_value(self, subject: IRILike, property_iri: IRILike) -> Optional[str]:
        """Value of the first annotation on `subject` through `property_iri`, if any.

        "First" follows insertion order. Any accepted form of the label property
        matches label annotations.
        """
        subject = iri(subject)
        wants_label = self.is_label_property(property_iri)
        for axiom in self._axioms_by_iri.get(subject, {}):
            if not isinstance(axiom, AnnotationAssertion) or axiom.subject != subject:
                continue
            if str(axiom.property) == str(property_iri):
                return axiom.value
            if wants_label and self.is_label_property(axiom.property):
                return axiom.value
        return None

    def stats(self) -> OntologyStats:
        """Get basic statistics about the ontology."""
        by_kind = Counter(axiom.kind for axiom in self._axioms)
        return OntologyStats(
            total_axioms=len(self._axioms),
            declared_classes=by_kind.get(DeclareClass.kind, 0),
            subclass_edges=sum(len(subs) for subs in self._subclasses.values()),
            labelled_entities=len(self._labels),
            axioms_by_kind=dict(by_kind),
        )
