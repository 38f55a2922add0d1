"""
Configuration for the ontology module.

Values can be supplied directly or read from the environment (and a `.env`
file, if present) with `OntologyConfig.from_env()`.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .domain import LABEL_IRI


class OntologyConfig(BaseModel):
    """Settings shared by the store, the exchange format and the CLI."""

    label_property: str = Field(str(LABEL_IRI), description="Annotation property IRI used for labels")
    default_format: str = Field("xml", description="rdflib serialization format used when it cannot be guessed from the file name")
    log_level: str = Field("WARNING", description="Logging level for the command line tool")

    @classmethod
    def from_env(cls) -> "OntologyConfig":
        """Build the configuration from ONTOLOGY_* environment variables."""
        load_dotenv()
        values = {}
        if os.getenv("ONTOLOGY_LABEL_PROPERTY"):
            values["label_property"] = os.environ["ONTOLOGY_LABEL_PROPERTY"]
        if os.getenv("ONTOLOGY_FORMAT"):
            values["default_format"] = os.environ["ONTOLOGY_FORMAT"]
        if os.getenv("ONTOLOGY_LOG_LEVEL"):
            values["log_level"] = os.environ["ONTOLOGY_LOG_LEVEL"].upper()
        return cls(**values)
