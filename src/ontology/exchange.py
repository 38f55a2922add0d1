"""
Reading and writing ontology files.

Files are parsed and serialized with rdflib, so any RDF syntax rdflib supports
(RDF/XML `.owl`/`.rdf`, Turtle `.ttl`, N-Triples, JSON-LD, ...) can be used.
The RDF graph is translated to and from axioms following the OWL 2 mapping
to RDF graphs for the supported subset:

    owl:Class typing            -> DeclareClass
    rdfs:subClassOf             -> SubClassOf
    owl:equivalentClass         -> EquivalentClasses
    literal annotation triples  -> AnnotationAssertion

Restrictions, intersections, complements and inverse properties are read from
their blank node structures. Anything else, including blank node structures
that refer back to themselves, is skipped with a warning.

Known losses on a save/load cycle:
- Annotations whose value is an IRI or blank node are not read.
- Annotation literals keep only their lexical form; language tags and
  datatypes (e.g. "A domesticated canine."@en) are dropped and the value is
  written back as a plain literal.
- Short forms of well-known annotation properties ("label", "comment",
  "rdfs:seeAlso", "skos:definition", ...) are written as their full IRIs.
  Any other annotation property must be an absolute IRI to be usable as a
  predicate in RDF/XML.

Identifiers that are not absolute IRIs (e.g. "Dog") are kept as they are:
files are parsed against a fixed placeholder base which is removed again from
every identifier read. N-Triples cannot hold such identifiers at all.
"""

import logging
import time
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

from rdflib import BNode, Graph, Literal, Namespace, OWL, RDF, RDFS, SKOS, URIRef
from rdflib.collection import Collection
from rdflib.term import Node as RDFNode
from rdflib.util import guess_format

from .domain import (
    LABEL_ALIASES, AllValuesFrom, AnnotationAssertion, AtomicClass, Axiom,
    ClassExpression, Complement, DeclareClass, EquivalentClasses, Intersection,
    InverseProperty, ObjectPropertyExpression, Property, SomeValuesFrom, SubClassOf,
)
from .errors import LoadError, SaveError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Annotation properties recognised without an owl:AnnotationProperty declaration
BUILTIN_ANNOTATION_PROPERTIES = frozenset({
    RDFS.label, RDFS.comment, RDFS.seeAlso, RDFS.isDefinedBy,
    OWL.versionInfo, OWL.deprecated,
    SKOS.prefLabel, SKOS.altLabel, SKOS.definition,
})

# Short forms accepted for the built-in annotation properties when writing
ANNOTATION_SHORT_FORMS = {
    **{alias: RDFS.label for alias in LABEL_ALIASES},
    "comment": RDFS.comment, "rdfs:comment": RDFS.comment,
    "seeAlso": RDFS.seeAlso, "rdfs:seeAlso": RDFS.seeAlso,
    "isDefinedBy": RDFS.isDefinedBy, "rdfs:isDefinedBy": RDFS.isDefinedBy,
    "owl:versionInfo": OWL.versionInfo, "owl:deprecated": OWL.deprecated,
    "skos:prefLabel": SKOS.prefLabel, "skos:altLabel": SKOS.altLabel,
    "skos:definition": SKOS.definition,
}

# Base that relative identifiers resolve against while parsing; stripped afterwards
RELATIVE_BASE = "http://relative.invalid/"


class UnsupportedConstruct(Exception):
    """An RDF structure outside the supported class expression subset."""


def resolve_format(path: PathLike, fmt: Optional[str] = None, default_format: str = "xml") -> str:
    """Pick the rdflib format: explicit, guessed from the suffix, or the default."""
    return fmt or guess_format(str(path)) or default_format


# Reading

def load_ontology(path: PathLike, fmt: Optional[str] = None,
                  default_format: str = "xml") -> Tuple[List[Axiom], Dict[str, str]]:
    """
    Read an ontology file.

    Args:
        path: File to read
        fmt: rdflib format name; guessed from the file suffix when omitted
        default_format: Format used when the suffix is not recognised

    Returns:
        Tuple of (axioms, namespace prefix mapping)

    Raises:
        LoadError: If the file is missing, cannot be parsed, or holds RDF that
            cannot be translated into axioms
    """
    path = Path(path)
    if not path.is_file():
        raise LoadError(f"Ontology file not found: {path}", path=str(path))

    fmt = resolve_format(path, fmt, default_format)
    before = time.perf_counter()

    graph = Graph()
    try:
        graph.parse(str(path), format=fmt, publicID=RELATIVE_BASE)
    except Exception as e:
        raise LoadError(f"Could not parse ontology {path} as {fmt}: {e}", path=str(path)) from e

    logger.info("Finished reading ontology from %s in %.2f seconds (%d triples)",
                path, time.perf_counter() - before, len(graph))

    try:
        _strip_base(graph, RELATIVE_BASE)
        axioms = graph_to_axioms(graph)
    except Exception as e:
        raise LoadError(f"Could not read axioms from ontology {path}: {e}", path=str(path)) from e

    prefixes = {prefix: str(namespace) for prefix, namespace in graph.namespaces()}
    return axioms, prefixes


def _strip_base(graph: Graph, base: str) -> None:
    """Turn identifiers resolved against `base` back into relative ones."""
    def strip(term: RDFNode) -> RDFNode:
        if isinstance(term, URIRef) and term.startswith(base):
            return URIRef(term[len(base):])
        return term

    for triple in list(graph):
        stripped = tuple(strip(term) for term in triple)
        if stripped != triple:
            graph.remove(triple)
            graph.add(stripped)


def graph_to_axioms(graph: Graph) -> List[Axiom]:
    """Translate an RDF graph into axioms of the supported subset."""
    axioms: List[Axiom] = []
    skipped = 0

    for cls in sorted(graph.subjects(RDF.type, OWL.Class), key=str):
        if isinstance(cls, URIRef):
            axioms.append(DeclareClass(cls))

    for sub, sup in sorted(graph.subject_objects(RDFS.subClassOf), key=_pair_key):
        try:
            axioms.append(SubClassOf(sub=_read_class_expression(graph, sub),
                                     sup=_read_class_expression(graph, sup)))
        except UnsupportedConstruct as e:
            logger.warning("Skipping rdfs:subClassOf axiom: %s", e)
            skipped += 1

    for first, second in sorted(graph.subject_objects(OWL.equivalentClass), key=_pair_key):
        try:
            axioms.append(EquivalentClasses((_read_class_expression(graph, first),
                                             _read_class_expression(graph, second))))
        except UnsupportedConstruct as e:
            logger.warning("Skipping owl:equivalentClass axiom: %s", e)
            skipped += 1

    annotation_properties = set(BUILTIN_ANNOTATION_PROPERTIES)
    annotation_properties.update(p for p in graph.subjects(RDF.type, OWL.AnnotationProperty)
                                 if isinstance(p, URIRef))
    for prop in sorted(annotation_properties, key=str):
        for subject, value in sorted(graph.subject_objects(prop), key=_pair_key):
            if isinstance(subject, URIRef) and isinstance(value, Literal):
                axioms.append(AnnotationAssertion(subject=subject, property=prop, value=str(value)))
            else:
                logger.debug("Skipping non-literal annotation %s %s %s", subject, prop, value)

    logger.info("Translated graph into %d axioms (%d skipped)", len(axioms), skipped)
    return axioms


def _pair_key(pair: Tuple[RDFNode, RDFNode]) -> Tuple[str, str]:
    return str(pair[0]), str(pair[1])


def _read_property(graph: Graph, node: RDFNode) -> ObjectPropertyExpression:
    if isinstance(node, URIRef):
        return Property(node)
    if isinstance(node, BNode):
        inverse = graph.value(node, OWL.inverseOf)
        if isinstance(inverse, URIRef):
            return InverseProperty(inverse)
    raise UnsupportedConstruct(f"unsupported object property expression {node!r}")


def _read_class_expression(graph: Graph, node: RDFNode,
                           seen: FrozenSet[BNode] = frozenset()) -> ClassExpression:
    if isinstance(node, URIRef):
        return AtomicClass(node)
    if not isinstance(node, BNode):
        raise UnsupportedConstruct(f"unsupported class expression {node!r}")
    if node in seen:
        raise UnsupportedConstruct(f"class expression {node!r} contains itself")
    seen = seen | {node}

    on_property = graph.value(node, OWL.onProperty)
    if on_property is not None:
        some = graph.value(node, OWL.someValuesFrom)
        if some is not None:
            return SomeValuesFrom(_read_property(graph, on_property),
                                  _read_class_expression(graph, some, seen))
        every = graph.value(node, OWL.allValuesFrom)
        if every is not None:
            return AllValuesFrom(_read_property(graph, on_property),
                                 _read_class_expression(graph, every, seen))
        raise UnsupportedConstruct(f"unsupported restriction {node!r}")

    members = graph.value(node, OWL.intersectionOf)
    if members is not None:
        return Intersection(tuple(_read_class_expression(graph, m, seen)
                                  for m in Collection(graph, members)))

    complement = graph.value(node, OWL.complementOf)
    if complement is not None:
        return Complement(_read_class_expression(graph, complement, seen))

    raise UnsupportedConstruct(f"unsupported class expression {node!r}")


# Writing

def save_ontology(path: PathLike, axioms: Iterable[Axiom],
                  prefixes: Optional[Dict[str, str]] = None,
                  fmt: Optional[str] = None, default_format: str = "xml") -> None:
    """
    Write axioms to an ontology file.

    Args:
        path: File to write
        axioms: Axioms to serialize
        prefixes: Namespace prefix mapping to bind in the output
        fmt: rdflib format name; guessed from the file suffix when omitted
        default_format: Format used when the suffix is not recognised

    Raises:
        SaveError: If the graph cannot be built or written
    """
    path = Path(path)
    fmt = resolve_format(path, fmt, default_format)
    before = time.perf_counter()

    try:
        graph = axioms_to_graph(axioms, prefixes)
        graph.serialize(destination=str(path), format=fmt)
    except Exception as e:
        raise SaveError(f"Problem saving the ontology to {path}: {e}", path=str(path)) from e

    logger.info("Finished saving ontology to %s in %.2f seconds (%d triples)",
                path, time.perf_counter() - before, len(graph))


def axioms_to_graph(axioms: Iterable[Axiom], prefixes: Optional[Dict[str, str]] = None) -> Graph:
    """Translate axioms into an RDF graph."""
    graph = Graph()
    for prefix, namespace in (prefixes or {}).items():
        graph.bind(prefix, Namespace(namespace), override=True)

    for axiom in axioms:
        if isinstance(axiom, DeclareClass):
            graph.add((axiom.cls, RDF.type, OWL.Class))
        elif isinstance(axiom, SubClassOf):
            graph.add((_class_node(graph, axiom.sub), RDFS.subClassOf, _class_node(graph, axiom.sup)))
        elif isinstance(axiom, AnnotationAssertion):
            prop = ANNOTATION_SHORT_FORMS.get(str(axiom.property), axiom.property)
            if prop not in BUILTIN_ANNOTATION_PROPERTIES:
                graph.add((prop, RDF.type, OWL.AnnotationProperty))
            graph.add((axiom.subject, prop, Literal(axiom.value)))
        elif isinstance(axiom, EquivalentClasses):
            nodes = [_class_node(graph, op) for op in axiom.operands]
            for other in nodes[1:]:
                graph.add((nodes[0], OWL.equivalentClass, other))
        else:
            raise TypeError(f"Not an axiom: {axiom!r}")
    return graph


def _property_node(graph: Graph, ope: ObjectPropertyExpression) -> RDFNode:
    if isinstance(ope, Property):
        graph.add((ope.iri, RDF.type, OWL.ObjectProperty))
        return ope.iri
    node = BNode()
    graph.add((ope.iri, RDF.type, OWL.ObjectProperty))
    graph.add((node, OWL.inverseOf, ope.iri))
    return node


def _class_node(graph: Graph, ce: ClassExpression) -> RDFNode:
    if isinstance(ce, AtomicClass):
        return ce.iri

    node = BNode()
    if isinstance(ce, (SomeValuesFrom, AllValuesFrom)):
        predicate = OWL.someValuesFrom if isinstance(ce, SomeValuesFrom) else OWL.allValuesFrom
        graph.add((node, RDF.type, OWL.Restriction))
        graph.add((node, OWL.onProperty, _property_node(graph, ce.property)))
        graph.add((node, predicate, _class_node(graph, ce.filler)))
    elif isinstance(ce, Intersection):
        members = BNode()
        Collection(graph, members, [_class_node(graph, op) for op in ce.operands])
        graph.add((node, RDF.type, OWL.Class))
        graph.add((node, OWL.intersectionOf, members))
    elif isinstance(ce, Complement):
        graph.add((node, RDF.type, OWL.Class))
        graph.add((node, OWL.complementOf, _class_node(graph, ce.operand)))
    else:
        raise TypeError(f"Not a class expression: {ce!r}")
    return node
