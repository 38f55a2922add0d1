"""
Exceptions raised by the ontology module.

Lookups never raise; absence is reported as None or an empty set.
"""

from typing import Optional


class OntologyError(Exception):
    """Base exception for all ontology errors."""


class DecodeError(OntologyError, ValueError):
    """Raised when a generic tree cannot be decoded into an axiom or expression."""

    def __init__(self, message: str, tag: Optional[str] = None):
        super().__init__(message)
        self.tag = tag


class LoadError(OntologyError):
    """Raised when an ontology file cannot be read or parsed."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class SaveError(OntologyError):
    """Raised when an ontology cannot be written to a file."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
