"""
Indexed Ontology Module

This module provides an in-memory ontology store with a generic tree encoding
for axioms and transitive closure queries over the class hierarchy.

Public Interface:
- OntologyService: High-level service speaking nested lists of strings
- open_ontology: Load an ontology file into a service

Private Components:
- OntologyStore: Axiom set with label and hierarchy indices
- codec / tree: Generic tree encoding of axioms
- closure: Ancestor and descendant queries
- exchange: rdflib-based file reading and writing
"""

from .errors import DecodeError, LoadError, OntologyError, SaveError
from .service import OntologyService, open_ontology

__all__ = [
    "DecodeError",
    "LoadError",
    "OntologyError",
    "OntologyService",
    "SaveError",
    "open_ontology",
]
