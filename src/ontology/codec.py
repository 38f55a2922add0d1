"""
Bidirectional mapping between typed axioms and generic trees.

Encoding is total: every axiom, class expression and property expression can be
turned into a tree. Decoding covers a smaller subset:

    DeclareClass         [DeclareClass, class]
    SubClassOf           [SubClassOf, sub, sup]
    AnnotationAssertion  [AnnotationAssertion, subject, property, value]

where class expressions are either a bare identifier or
[ObjectSomeValuesFrom, property, filler], and properties are either a bare
identifier or [InverseObjectProperty, property]. EquivalentClasses,
ObjectIntersectionOf, ObjectComplementOf and ObjectAllValuesFrom are encode-only.
"""

import logging
from typing import Any, Sequence, Union

from .domain import (
    AllValuesFrom, AnnotationAssertion, AtomicClass, Axiom, ClassExpression,
    Complement, DeclareClass, EquivalentClasses, Intersection, InverseProperty,
    ObjectPropertyExpression, Property, SomeValuesFrom, SubClassOf, iri,
)
from .errors import DecodeError
from .tree import GenericTree, Leaf, Node, from_host, node, to_host, unwrap

logger = logging.getLogger(__name__)

# Class expression and property tags
INTERSECTION = "ObjectIntersectionOf"
COMPLEMENT = "ObjectComplementOf"
SOME_VALUES_FROM = "ObjectSomeValuesFrom"
ALL_VALUES_FROM = "ObjectAllValuesFrom"
INVERSE_PROPERTY = "InverseObjectProperty"

ENCODE_ONLY_TAGS = frozenset({EquivalentClasses.kind, INTERSECTION, COMPLEMENT, ALL_VALUES_FROM})


# Encoding

def encode_property(ope: ObjectPropertyExpression) -> GenericTree:
    """Encode an object property expression."""
    if isinstance(ope, Property):
        return Leaf(str(ope.iri))
    if isinstance(ope, InverseProperty):
        return node(Leaf(INVERSE_PROPERTY), Leaf(str(ope.iri)))
    raise TypeError(f"Not an object property expression: {ope!r}")


def encode_class_expression(ce: ClassExpression) -> GenericTree:
    """Encode a class expression. A named class encodes to its bare identifier."""
    if isinstance(ce, AtomicClass):
        return Leaf(str(ce.iri))
    if isinstance(ce, Intersection):
        return node(Leaf(INTERSECTION), *(encode_class_expression(op) for op in ce.operands))
    if isinstance(ce, Complement):
        return node(Leaf(COMPLEMENT), encode_class_expression(ce.operand))
    if isinstance(ce, SomeValuesFrom):
        return node(Leaf(SOME_VALUES_FROM), encode_property(ce.property),
                    encode_class_expression(ce.filler))
    if isinstance(ce, AllValuesFrom):
        return node(Leaf(ALL_VALUES_FROM), encode_property(ce.property),
                    encode_class_expression(ce.filler))
    raise TypeError(f"Not a class expression: {ce!r}")


def encode_axiom(axiom: Axiom) -> GenericTree:
    """Encode an axiom as a node whose first element is the axiom kind."""
    if not isinstance(axiom, Axiom):
        raise TypeError(f"Not an axiom: {axiom!r}")
    tag = Leaf(axiom.kind)
    if isinstance(axiom, DeclareClass):
        return node(tag, Leaf(str(axiom.cls)))
    if isinstance(axiom, SubClassOf):
        return node(tag, encode_class_expression(axiom.sub), encode_class_expression(axiom.sup))
    if isinstance(axiom, AnnotationAssertion):
        return node(tag, Leaf(str(axiom.subject)), Leaf(str(axiom.property)), Leaf(axiom.value))
    if isinstance(axiom, EquivalentClasses):
        return node(tag, *(encode_class_expression(op) for op in axiom.operands))
    raise TypeError(f"Not an axiom: {axiom!r}")


# Decoding

def _describe(tree: GenericTree) -> str:
    return repr(to_host(tree))


def _split(tree: GenericTree, what: str):
    """Return (tag, arguments) of a tagged node."""
    if not isinstance(tree, Node) or len(tree.children) == 0:
        raise DecodeError(f"Expected a non-empty sequence for {what}, got {_describe(tree)}")
    head = unwrap(tree.children[0])
    if not isinstance(head, Leaf):
        raise DecodeError(f"Expected a tag as the first element of {what}, got {_describe(head)}")
    return head.value, tree.children[1:]


def _expect_arity(tag: str, args: Sequence[GenericTree], arity: int) -> None:
    if len(args) != arity:
        raise DecodeError(f"{tag} expects {arity} element(s) after the tag, got {len(args)}", tag=tag)


def _text(tree: GenericTree, tag: str) -> str:
    tree = unwrap(tree)
    if not isinstance(tree, Leaf):
        raise DecodeError(f"{tag} expects a string element, got {_describe(tree)}", tag=tag)
    return tree.value


def decode_property(tree: GenericTree) -> ObjectPropertyExpression:
    """Decode an object property expression: an identifier or [InverseObjectProperty, iri]."""
    tree = unwrap(tree)
    if isinstance(tree, Leaf):
        return Property(iri(tree.value))

    tag, args = _split(tree, "an object property expression")
    if tag == INVERSE_PROPERTY:
        _expect_arity(tag, args, 1)
        return InverseProperty(iri(_text(args[0], tag)))
    raise DecodeError(f"Unknown object property expression: {tag!r}", tag=tag)


def decode_class_expression(tree: GenericTree) -> ClassExpression:
    """Decode a class expression: an identifier or [ObjectSomeValuesFrom, property, filler]."""
    tree = unwrap(tree)
    if isinstance(tree, Leaf):
        return AtomicClass(iri(tree.value))

    tag, args = _split(tree, "a class expression")
    if tag == SOME_VALUES_FROM:
        _expect_arity(tag, args, 2)
        return SomeValuesFrom(decode_property(args[0]), decode_class_expression(args[1]))
    if tag in ENCODE_ONLY_TAGS:
        raise DecodeError(f"Class expression {tag!r} cannot be decoded", tag=tag)
    raise DecodeError(f"Unknown class expression: {tag!r}", tag=tag)


def decode_axiom(tree: GenericTree) -> Axiom:
    """
    Decode an axiom from a generic tree.

    Args:
        tree: Node whose first element is the axiom kind

    Returns:
        The decoded axiom

    Raises:
        DecodeError: On a leaf root, an unknown or encode-only tag, or wrong arity
    """
    tag, args = _split(tree, "an axiom")
    logger.debug("Decoding %s axiom", tag)

    if tag == DeclareClass.kind:
        _expect_arity(tag, args, 1)
        return DeclareClass(iri(_text(args[0], tag)))

    if tag == SubClassOf.kind:
        _expect_arity(tag, args, 2)
        return SubClassOf(sub=decode_class_expression(args[0]), sup=decode_class_expression(args[1]))

    if tag == AnnotationAssertion.kind:
        _expect_arity(tag, args, 3)
        return AnnotationAssertion(
            subject=iri(_text(args[0], tag)),
            property=iri(_text(args[1], tag)),
            value=_text(args[2], tag),
        )

    if tag in ENCODE_ONLY_TAGS:
        raise DecodeError(f"Axiom {tag!r} cannot be decoded", tag=tag)
    raise DecodeError(f"Unknown axiom: {tag!r}", tag=tag)


# Host values (nested lists of strings)

def decode_host(value: Any) -> Axiom:
    """Decode an axiom given as a nested list of strings."""
    return decode_axiom(from_host(value))


def encode_host(axiom: Axiom) -> Union[str, list]:
    """Encode an axiom as a nested list of strings."""
    return to_host(encode_axiom(axiom))
