"""
Domain models for the ontology module.

These models represent axioms, class expressions and property expressions as
frozen, hashable values so that the store can keep them in a set keyed by
structural equality.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Dict, FrozenSet, Tuple
from rdflib import RDFS, URIRef


# Annotation property reserved for labels, plus the short forms accepted for it
LABEL_IRI = URIRef(str(RDFS.label))
LABEL_ALIASES = frozenset({str(RDFS.label), "rdfs:label", "label"})


def iri(value: str) -> URIRef:
    """Build an identifier from its string form."""
    if isinstance(value, URIRef):
        return value
    return URIRef(str(value))


# Object property expressions

class ObjectPropertyExpression:
    """Base class for object property expressions."""

    def iris(self) -> FrozenSet[URIRef]:
        raise NotImplementedError


@dataclass(frozen=True)
class Property(ObjectPropertyExpression):
    """A named object property."""

    iri: URIRef

    def __post_init__(self):
        object.__setattr__(self, "iri", iri(self.iri))

    def iris(self) -> FrozenSet[URIRef]:
        return frozenset({self.iri})


@dataclass(frozen=True)
class InverseProperty(ObjectPropertyExpression):
    """The inverse of a named object property."""

    iri: URIRef

    def __post_init__(self):
        object.__setattr__(self, "iri", iri(self.iri))

    def iris(self) -> FrozenSet[URIRef]:
        return frozenset({self.iri})


# Class expressions

class ClassExpression:
    """Base class for class expressions."""

    def iris(self) -> FrozenSet[URIRef]:
        raise NotImplementedError


@dataclass(frozen=True)
class AtomicClass(ClassExpression):
    """A named class."""

    iri: URIRef

    def __post_init__(self):
        object.__setattr__(self, "iri", iri(self.iri))

    def iris(self) -> FrozenSet[URIRef]:
        return frozenset({self.iri})


@dataclass(frozen=True)
class Intersection(ClassExpression):
    """Intersection of class expressions (ObjectIntersectionOf)."""

    operands: Tuple[ClassExpression, ...]

    def __post_init__(self):
        object.__setattr__(self, "operands", tuple(self.operands))

    def iris(self) -> FrozenSet[URIRef]:
        return frozenset().union(*(op.iris() for op in self.operands))


@dataclass(frozen=True)
class Complement(ClassExpression):
    """Complement of a class expression (ObjectComplementOf)."""

    operand: ClassExpression

    def iris(self) -> FrozenSet[URIRef]:
        return self.operand.iris()


@dataclass(frozen=True)
class SomeValuesFrom(ClassExpression):
    """Existential restriction (ObjectSomeValuesFrom)."""

    property: ObjectPropertyExpression
    filler: ClassExpression

    def iris(self) -> FrozenSet[URIRef]:
        return self.property.iris() | self.filler.iris()


@dataclass(frozen=True)
class AllValuesFrom(ClassExpression):
    """Universal restriction (ObjectAllValuesFrom)."""

    property: ObjectPropertyExpression
    filler: ClassExpression

    def iris(self) -> FrozenSet[URIRef]:
        return self.property.iris() | self.filler.iris()


# Axioms

class Axiom:
    """Base class for axioms. `kind` is the tag used in the generic tree encoding."""

    kind: ClassVar[str] = ""

    def iris(self) -> FrozenSet[URIRef]:
        """All identifiers this axiom refers to."""
        raise NotImplementedError


@dataclass(frozen=True)
class DeclareClass(Axiom):
    """Declaration of a named class."""

    kind: ClassVar[str] = "DeclareClass"

    cls: URIRef

    def __post_init__(self):
        object.__setattr__(self, "cls", iri(self.cls))

    def iris(self) -> FrozenSet[URIRef]:
        return frozenset({self.cls})


@dataclass(frozen=True)
class SubClassOf(Axiom):
    """`sub` is a subclass of `sup`."""

    kind: ClassVar[str] = "SubClassOf"

    sub: ClassExpression
    sup: ClassExpression

    def iris(self) -> FrozenSet[URIRef]:
        return self.sub.iris() | self.sup.iris()

    def is_atomic(self) -> bool:
        """True when both sides are named classes, i.e. a direct hierarchy edge."""
        return isinstance(self.sub, AtomicClass) and isinstance(self.sup, AtomicClass)


@dataclass(frozen=True)
class AnnotationAssertion(Axiom):
    """A literal annotation `value` on `subject` through annotation `property`."""

    kind: ClassVar[str] = "AnnotationAssertion"

    subject: URIRef
    property: URIRef
    value: str

    def __post_init__(self):
        object.__setattr__(self, "subject", iri(self.subject))
        object.__setattr__(self, "property", iri(self.property))

    def iris(self) -> FrozenSet[URIRef]:
        return frozenset({self.subject, self.property})


@dataclass(frozen=True)
class EquivalentClasses(Axiom):
    """All operands denote the same class."""

    kind: ClassVar[str] = "EquivalentClasses"

    operands: Tuple[ClassExpression, ...]

    def __post_init__(self):
        object.__setattr__(self, "operands", tuple(self.operands))

    def iris(self) -> FrozenSet[URIRef]:
        return frozenset().union(*(op.iris() for op in self.operands))


@dataclass
class OntologyStats:
    """Statistics about the ontology content."""

    total_axioms: int = 0
    declared_classes: int = 0
    subclass_edges: int = 0                 # atomic SubClassOf axioms in the hierarchy index
    labelled_entities: int = 0
    axioms_by_kind: Dict[str, int] = field(default_factory=dict)
