"""
High-level ontology service providing the public interface for all ontology operations.

Callers exchange axioms with the service as generic trees in their plain host
form: nested lists of strings, e.g.

    ["SubClassOf", "http://example.org/Dog", "http://example.org/Animal"]
    ["SubClassOf", "http://example.org/Dog",
        ["ObjectSomeValuesFrom", "http://example.org/hasPart", "http://example.org/Tail"]]

Identifiers are returned as plain strings. Closure queries return flat sets of
identifier strings.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Set, Union

from .closure import ancestors_of, descendants_of
from .codec import decode_host, encode_host
from .config import OntologyConfig
from .domain import OntologyStats
from .exchange import load_ontology, save_ontology
from .store import OntologyStore

logger = logging.getLogger(__name__)


class OntologyService:
    """High-level interface for ontology operations over host values."""

    def __init__(self, store: Optional[OntologyStore] = None,
                 config: Optional[OntologyConfig] = None):
        """Initialize the ontology service.

        Args:
            store: Optional ontology store. If None, creates a new empty one.
            config: Optional configuration, used when a store has to be created
        """
        self.config = config or (store.config if store is not None else OntologyConfig())
        self.store = store if store is not None else OntologyStore(config=self.config)

    @classmethod
    def open(cls, path: Union[str, Path], fmt: Optional[str] = None,
             config: Optional[OntologyConfig] = None) -> "OntologyService":
        """Load an ontology file and build its indices.

        Raises:
            LoadError: If the file is missing or cannot be parsed
        """
        config = config or OntologyConfig()
        axioms, prefixes = load_ontology(path, fmt=fmt, default_format=config.default_format)
        logger.info("Building indexes for %d axioms", len(axioms))
        store = OntologyStore.from_axioms(axioms, prefixes=prefixes, config=config)
        return cls(store=store, config=config)

    def save_to_file(self, path: Union[str, Path], fmt: Optional[str] = None) -> None:
        """Write every axiom and the retained prefix mapping to a file.

        Raises:
            SaveError: If the file cannot be written
        """
        save_ontology(path, self.store.axioms(), self.store.prefixes,
                      fmt=fmt, default_format=self.config.default_format)

    # Axioms as generic trees

    def add_axiom(self, axiom: Any) -> None:
        """Add an axiom given as a nested list of strings.

        Raises:
            DecodeError: If the value is not a decodable axiom; nothing is added
        """
        self.store.insert(decode_host(axiom))

    def remove_axiom(self, axiom: Any) -> bool:
        """Remove an axiom given as a nested list of strings.

        Returns:
            True if a matching axiom was removed

        Raises:
            DecodeError: If the value is not a decodable axiom
        """
        return self.store.remove(decode_host(axiom))

    def get_axioms(self) -> List[Any]:
        """All axioms as nested lists of strings."""
        return [encode_host(axiom) for axiom in self.store.axioms()]

    def get_axioms_for_iri(self, iri: str) -> List[Any]:
        """Axioms mentioning the identifier, as nested lists of strings."""
        return [encode_host(axiom) for axiom in self.store.axioms_for_iri(iri)]

    # Labels and annotations

    def set_label(self, iri: str, label: str) -> None:
        self.store.set_label(iri, label)

    def get_label(self, iri: str) -> Optional[str]:
        return self.store.label(iri)

    def get_iri_for_label(self, label: str) -> Optional[str]:
        found = self.store.iri_for_label(label)
        return str(found) if found is not None else None

    def get_annotation(self, iri: str, annotation_iri: str) -> Optional[str]:
        return self.store.annotation_value(iri, annotation_iri)

    # Class hierarchy

    def get_classes(self) -> Set[str]:
        return {str(cls) for cls in self.store.declared_classes()}

    def get_subclasses(self, iri: str) -> Set[str]:
        return {str(cls) for cls in self.store.direct_subclasses(iri)}

    def get_superclasses(self, iri: str) -> Set[str]:
        return {str(cls) for cls in self.store.direct_superclasses(iri)}

    def get_descendants(self, iri: str) -> Set[str]:
        """The class and all its transitive subclasses."""
        return {str(cls) for cls in descendants_of(self.store, iri)}

    def get_ancestors(self, iri: str) -> Set[str]:
        """The class and all its transitive superclasses."""
        return {str(cls) for cls in ancestors_of(self.store, iri)}

    def get_stats(self) -> OntologyStats:
        return self.store.stats()


def open_ontology(path: Union[str, Path], fmt: Optional[str] = None,
                  config: Optional[OntologyConfig] = None) -> OntologyService:
    """Load an ontology file into a new service."""
    return OntologyService.open(path, fmt=fmt, config=config)
