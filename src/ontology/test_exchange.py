"""
Tests for reading and writing ontology files with rdflib.

HOW TO RUN:
From the src directory, run:
    python -m pytest ontology/test_exchange.py -v
"""

import pytest
from rdflib import OWL, RDF, RDFS, BNode, Graph, Literal, URIRef

from .domain import (
    AllValuesFrom, AnnotationAssertion, AtomicClass, Complement, DeclareClass,
    EquivalentClasses, Intersection, InverseProperty, Property, SomeValuesFrom,
    SubClassOf,
)
from .errors import LoadError, SaveError
from .exchange import axioms_to_graph, graph_to_axioms, load_ontology, resolve_format, save_ontology

EX = "http://example.org/"
LABEL = str(RDFS.label)

ANIMALS_TTL = """
@prefix ex: <http://example.org/> .
@prefix owl: <http://www.w3.org/2002/07/owl#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .
@prefix skos: <http://www.w3.org/2004/02/skos/core#> .

ex:Animal a owl:Class ;
    rdfs:label "Animal" .

ex:Dog a owl:Class ;
    rdfs:label "Dog" ;
    skos:definition "A domesticated canine."@en ;
    rdfs:subClassOf ex:Animal ,
        [ a owl:Restriction ; owl:onProperty ex:hasPart ; owl:someValuesFrom ex:Tail ] .

ex:Cat a owl:Class ;
    rdfs:subClassOf ex:Animal ,
        [ owl:unionOf ( ex:Pet ex:Stray ) ] .

ex:hasPart a owl:ObjectProperty .
ex:seeAlsoPage rdfs:seeAlso ex:Other .
"""

CYCLIC_RESTRICTION_TTL = """
@prefix ex: <http://example.org/> .
@prefix owl: <http://www.w3.org/2002/07/owl#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .

ex:A a owl:Class ;
    rdfs:subClassOf _:r .
_:r owl:onProperty ex:p ;
    owl:someValuesFrom _:r .
"""

RECURSIVE_LIST_TTL = """
@prefix ex: <http://example.org/> .
@prefix owl: <http://www.w3.org/2002/07/owl#> .
@prefix rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .

ex:A rdfs:subClassOf _:x .
_:x owl:intersectionOf _:l .
_:l rdf:first ex:C ;
    rdf:rest _:l .
"""


@pytest.fixture
def animals_file(tmp_path):
    path = tmp_path / "animals.ttl"
    path.write_text(ANIMALS_TTL, encoding="utf-8")
    return path


@pytest.fixture
def sample_axioms():
    has_part = Property(EX + "hasPart")
    return [
        DeclareClass(EX + "Animal"),
        DeclareClass(EX + "Dog"),
        SubClassOf(sub=AtomicClass(EX + "Dog"), sup=AtomicClass(EX + "Animal")),
        SubClassOf(sub=AtomicClass(EX + "Dog"),
                   sup=SomeValuesFrom(has_part, AtomicClass(EX + "Tail"))),
        SubClassOf(sub=AtomicClass(EX + "Tail"),
                   sup=SomeValuesFrom(InverseProperty(EX + "hasPart"), AtomicClass(EX + "Dog"))),
        AnnotationAssertion(subject=EX + "Dog", property=LABEL, value="Dog"),
        AnnotationAssertion(subject=EX + "Dog", property=EX + "note", value="barks"),
        EquivalentClasses([
            AtomicClass(EX + "Hound"),
            Intersection([AtomicClass(EX + "Dog"), Complement(AtomicClass(EX + "Pet")),
                          AllValuesFrom(has_part, AtomicClass(EX + "Tail"))]),
        ]),
    ]


class TestLoad:
    """Reading files into axioms."""

    def test_reads_supported_axioms(self, animals_file):
        axioms, _ = load_ontology(animals_file)

        assert DeclareClass(EX + "Dog") in axioms
        assert DeclareClass(EX + "Animal") in axioms
        assert SubClassOf(sub=AtomicClass(EX + "Dog"), sup=AtomicClass(EX + "Animal")) in axioms
        assert SubClassOf(
            sub=AtomicClass(EX + "Dog"),
            sup=SomeValuesFrom(Property(EX + "hasPart"), AtomicClass(EX + "Tail")),
        ) in axioms
        assert AnnotationAssertion(subject=EX + "Dog", property=LABEL, value="Dog") in axioms
        assert AnnotationAssertion(
            subject=EX + "Dog",
            property="http://www.w3.org/2004/02/skos/core#definition",
            value="A domesticated canine.",
        ) in axioms

    def test_skips_unsupported_constructs(self, animals_file):
        axioms, _ = load_ontology(animals_file)

        cat_axioms = [ax for ax in axioms if isinstance(ax, SubClassOf)
                      and ax.sub == AtomicClass(EX + "Cat")]
        assert cat_axioms == [SubClassOf(sub=AtomicClass(EX + "Cat"), sup=AtomicClass(EX + "Animal"))]

    def test_skips_non_literal_annotations(self, animals_file):
        axioms, _ = load_ontology(animals_file)

        assert not any(isinstance(ax, AnnotationAssertion) and str(ax.subject) == EX + "seeAlsoPage"
                       for ax in axioms)

    def test_returns_prefixes(self, animals_file):
        _, prefixes = load_ontology(animals_file)

        assert prefixes["ex"] == EX
        assert prefixes["owl"] == "http://www.w3.org/2002/07/owl#"

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "missing.owl"

        with pytest.raises(LoadError) as excinfo:
            load_ontology(missing)

        assert excinfo.value.path == str(missing)

    def test_malformed_file(self, tmp_path):
        broken = tmp_path / "broken.ttl"
        broken.write_text("ex:Dog a owl:Class ; this is not turtle {", encoding="utf-8")

        with pytest.raises(LoadError, match="Could not parse"):
            load_ontology(broken)

    def test_self_referencing_restriction_is_skipped(self, tmp_path):
        path = tmp_path / "cyclic.ttl"
        path.write_text(CYCLIC_RESTRICTION_TTL, encoding="utf-8")

        axioms, _ = load_ontology(path)

        assert axioms == [DeclareClass(EX + "A")]

    def test_recursive_list_raises_load_error(self, tmp_path):
        path = tmp_path / "recursive_list.ttl"
        path.write_text(RECURSIVE_LIST_TTL, encoding="utf-8")

        with pytest.raises(LoadError) as excinfo:
            load_ontology(path)

        assert excinfo.value.path == str(path)


class TestSave:
    """Writing axioms to files."""

    @pytest.mark.parametrize("suffix", [".ttl", ".owl", ".nt"])
    def test_round_trip(self, tmp_path, sample_axioms, suffix):
        path = tmp_path / f"animals{suffix}"

        save_ontology(path, sample_axioms, prefixes={"ex": EX})
        loaded, _ = load_ontology(path)

        assert set(loaded) == set(sample_axioms)

    def test_prefixes_are_kept(self, tmp_path, sample_axioms):
        path = tmp_path / "animals.ttl"

        save_ontology(path, sample_axioms, prefixes={"zoo": EX})
        _, prefixes = load_ontology(path)

        assert prefixes["zoo"] == EX

    def test_label_alias_is_written_as_rdfs_label(self):
        graph = axioms_to_graph([AnnotationAssertion(subject=EX + "Dog", property="label", value="Canine")])

        assert graph.value(URIRef(EX + "Dog"), RDFS.label).toPython() == "Canine"

    def test_custom_annotation_property_is_declared(self, sample_axioms):
        graph = axioms_to_graph(sample_axioms)

        assert (URIRef(EX + "note"), RDF.type, OWL.AnnotationProperty) in graph
        assert (RDFS.label, RDF.type, OWL.AnnotationProperty) not in graph

    def test_restriction_structure(self):
        axiom = SubClassOf(sub=AtomicClass(EX + "Dog"),
                           sup=SomeValuesFrom(Property(EX + "hasPart"), AtomicClass(EX + "Tail")))
        graph = axioms_to_graph([axiom])

        restriction = graph.value(URIRef(EX + "Dog"), RDFS.subClassOf)
        assert isinstance(restriction, BNode)
        assert (restriction, RDF.type, OWL.Restriction) in graph
        assert graph.value(restriction, OWL.onProperty) == URIRef(EX + "hasPart")
        assert graph.value(restriction, OWL.someValuesFrom) == URIRef(EX + "Tail")

    def test_unwritable_path(self, tmp_path, sample_axioms):
        path = tmp_path / "no" / "such" / "dir" / "animals.ttl"

        with pytest.raises(SaveError) as excinfo:
            save_ontology(path, sample_axioms)

        assert excinfo.value.path == str(path)

    @pytest.mark.parametrize("suffix", [".ttl", ".owl"])
    def test_bare_identifiers_round_trip(self, tmp_path, suffix):
        axioms = [
            DeclareClass("Dog"),
            DeclareClass("Animal"),
            SubClassOf(sub=AtomicClass("Dog"), sup=AtomicClass("Animal")),
            SubClassOf(sub=AtomicClass("Dog"), sup=SomeValuesFrom(Property("hasPart"), AtomicClass("Tail"))),
            AnnotationAssertion(subject="Dog", property=LABEL, value="Canine"),
        ]
        path = tmp_path / f"animals{suffix}"

        save_ontology(path, axioms)
        loaded, _ = load_ontology(path)

        assert set(loaded) == set(axioms)

    @pytest.mark.parametrize("short_form", ["comment", "rdfs:comment"])
    def test_annotation_short_forms_are_expanded(self, tmp_path, short_form):
        axiom = AnnotationAssertion(subject=EX + "Dog", property=short_form, value="barks")
        path = tmp_path / "animals.owl"

        save_ontology(path, [axiom])
        loaded, _ = load_ontology(path)

        assert loaded == [AnnotationAssertion(subject=EX + "Dog", property=str(RDFS.comment), value="barks")]

    def test_annotation_literals_are_written_plain(self, animals_file):
        axioms, _ = load_ontology(animals_file)

        graph = axioms_to_graph(axioms)

        definition = graph.value(URIRef(EX + "Dog"), URIRef("http://www.w3.org/2004/02/skos/core#definition"))
        assert definition == Literal("A domesticated canine.")
        assert definition.language is None


def test_graph_round_trip_in_memory(sample_axioms):
    graph = axioms_to_graph(sample_axioms)

    assert set(graph_to_axioms(graph)) == set(sample_axioms)


def test_graph_without_axioms():
    assert graph_to_axioms(Graph()) == []


def test_resolve_format():
    assert resolve_format("animals.ttl") == "turtle"
    assert resolve_format("animals.owl") == "xml"
    assert resolve_format("animals.unknown") == "xml"
    assert resolve_format("animals.unknown", default_format="turtle") == "turtle"
    assert resolve_format("animals.owl", fmt="turtle") == "turtle"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
