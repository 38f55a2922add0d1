#!/usr/bin/env python3
"""
CLI tool for inspecting and editing ontology files.

Usage:
    python -m ontology.cli animals.owl stats
    python -m ontology.cli animals.owl descendants http://example.org/Animal
    python -m ontology.cli animals.owl axioms --iri http://example.org/Dog
    python -m ontology.cli animals.owl set-label http://example.org/Dog Canine --output animals.owl
    python -m ontology.cli animals.ttl add '["SubClassOf", "http://example.org/Puppy", "http://example.org/Dog"]' --output animals.ttl
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import List, Optional

from .config import OntologyConfig
from .errors import OntologyError
from .service import OntologyService

logger = logging.getLogger(__name__)


def _print_iris(iris) -> None:
    for value in sorted(iris):
        print(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ontology",
        description="Query and edit an ontology file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Overview of the ontology
  python -m ontology.cli animals.owl stats

  # All subclasses of Animal, transitively
  python -m ontology.cli animals.owl descendants http://example.org/Animal

  # Add an axiom and write the result
  python -m ontology.cli animals.ttl add '["DeclareClass", "http://example.org/Cat"]' --output animals.ttl
        """
    )
    parser.add_argument("file", help="Ontology file to load")
    parser.add_argument("--format", dest="fmt", help="rdflib format name (guessed from the suffix by default)")
    parser.add_argument("--log-level", help="Logging level (default from ONTOLOGY_LOG_LEVEL or WARNING)")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("stats", help="Print axiom and hierarchy statistics")
    commands.add_parser("classes", help="List declared classes")

    descendants = commands.add_parser("descendants", help="List a class and all its subclasses")
    descendants.add_argument("iri")

    ancestors = commands.add_parser("ancestors", help="List a class and all its superclasses")
    ancestors.add_argument("iri")

    axioms = commands.add_parser("axioms", help="Print axioms as JSON lists")
    axioms.add_argument("--iri", help="Only axioms mentioning this identifier")

    label = commands.add_parser("label", help="Print the label of an entity")
    label.add_argument("iri")

    lookup = commands.add_parser("lookup", help="Print the identifier carrying a label")
    lookup.add_argument("label")

    set_label = commands.add_parser("set-label", help="Set the label of an entity and save")
    set_label.add_argument("iri")
    set_label.add_argument("label")
    set_label.add_argument("--output", required=True, help="File to write the updated ontology to")

    add = commands.add_parser("add", help="Add an axiom given as a JSON list and save")
    add.add_argument("axiom", help='e.g. \'["DeclareClass", "http://example.org/Cat"]\'')
    add.add_argument("--output", required=True, help="File to write the updated ontology to")

    return parser


def run(args: argparse.Namespace, config: OntologyConfig) -> int:
    service = OntologyService.open(args.file, fmt=args.fmt, config=config)

    if args.command == "stats":
        print(json.dumps(asdict(service.get_stats()), indent=2))
    elif args.command == "classes":
        _print_iris(service.get_classes())
    elif args.command == "descendants":
        _print_iris(service.get_descendants(args.iri))
    elif args.command == "ancestors":
        _print_iris(service.get_ancestors(args.iri))
    elif args.command == "axioms":
        axioms = service.get_axioms_for_iri(args.iri) if args.iri else service.get_axioms()
        for axiom in axioms:
            print(json.dumps(axiom, ensure_ascii=False))
    elif args.command == "label":
        value = service.get_label(args.iri)
        if value is None:
            print(f"No label for {args.iri}", file=sys.stderr)
            return 1
        print(value)
    elif args.command == "lookup":
        value = service.get_iri_for_label(args.label)
        if value is None:
            print(f"No entity labelled {args.label!r}", file=sys.stderr)
            return 1
        print(value)
    elif args.command == "set-label":
        service.set_label(args.iri, args.label)
        service.save_to_file(args.output, fmt=args.fmt)
    elif args.command == "add":
        try:
            axiom = json.loads(args.axiom)
        except json.JSONDecodeError as e:
            print(f"Axiom is not valid JSON: {e}", file=sys.stderr)
            return 2
        service.add_axiom(axiom)
        service.save_to_file(args.output, fmt=args.fmt)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = OntologyConfig.from_env()
    logging.basicConfig(level=(args.log_level or config.log_level).upper(),
                        format='%(levelname)s: %(message)s')

    try:
        return run(args, config)
    except OntologyError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
