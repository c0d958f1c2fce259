"""
Triple primitives shared by all builders.

This module provides the low-level constructors every builder uses:
- Type, datatype-property and object-property triples
- Literal coercion from Python/Elixir values
- Blank nodes and RDF list encoding
- Deduplication that keeps first-occurrence order
- Read-only queries over triple lists

All builders should go through these helpers so that literal datatypes and
list shapes stay consistent across the graph.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from rdflib import BNode, Literal, URIRef
from rdflib.namespace import RDF, XSD, Namespace

from elixir_rdf.adapters.ast.models import SourceLocation
from elixir_rdf.adapters.ast.quoted import Atom
from elixir_rdf.common import iri
from elixir_rdf.common.namespaces import CORE
from elixir_rdf.common.types import RdfList, Subject, Triple

if TYPE_CHECKING:
    from .context import Context

__all__ = [
    "type_triple",
    "datatype_property",
    "object_property",
    "to_literal",
    "blank_node",
    "build_rdf_list",
    "deduplicate_triples",
    "finalize_triples",
    "filter_by_subject",
    "in_namespace",
    "dual_type_triples",
    "optional_string_property",
    "optional_datetime_property",
    "location_triples",
    "line_triples",
    "line_range_triples",
]


# =============================================================================
# Triple Constructors
# =============================================================================


def type_triple(subject: Subject, cls: URIRef) -> Triple:
    """Return ``(subject, rdf:type, cls)``."""
    return (subject, RDF.type, cls)


def datatype_property(
    subject: Subject, predicate: URIRef, value: Any, datatype: URIRef | None = None
) -> Triple:
    """
    Build a triple whose object is a typed literal.

    Args:
        subject: Entity IRI or blank node
        predicate: Datatype property IRI
        value: Python value; atoms are written by name
        datatype: Explicit XSD datatype, inferred from ``value`` when omitted

    Returns:
        Triple with a Literal object
    """
    if datatype is None:
        return (subject, predicate, to_literal(value))
    if isinstance(value, Atom):
        value = value.name
    return (subject, predicate, Literal(value, datatype=datatype))


def object_property(subject: Subject, predicate: URIRef, obj: URIRef | BNode) -> Triple:
    return (subject, predicate, obj)


def to_literal(value: Any) -> Literal:
    """
    Coerce a value to a typed literal.

    Booleans map to xsd:boolean, integers to xsd:integer, floats to
    xsd:double, strings and atoms to xsd:string, dates and datetimes to
    xsd:date / xsd:dateTime. Anything else is written as its string form.
    """
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return Literal(value, datatype=XSD.boolean)
    if isinstance(value, int):
        return Literal(value, datatype=XSD.integer)
    if isinstance(value, float):
        return Literal(value, datatype=XSD.double)
    if isinstance(value, Atom):
        return Literal(value.name, datatype=XSD.string)
    if isinstance(value, str):
        return Literal(value, datatype=XSD.string)
    # datetime before date: datetime is a date subclass
    if isinstance(value, datetime):
        return Literal(value, datatype=XSD.dateTime)
    if isinstance(value, date):
        return Literal(value, datatype=XSD.date)
    return Literal(str(value), datatype=XSD.string)


# =============================================================================
# Blank Nodes and RDF Lists
# =============================================================================


def blank_node(label: str | None = None) -> BNode:
    """Allocate a fresh blank node; equal labels still give distinct nodes."""
    suffix = uuid4().hex
    return BNode(f"{label}_{suffix}" if label else suffix)


def build_rdf_list(items: Sequence[URIRef | BNode]) -> RdfList:
    """
    Encode an ordered sequence as an RDF list.

    Args:
        items: Terms to chain, in order

    Returns:
        RdfList whose head is ``rdf:nil`` for an empty sequence, otherwise
        the first cons cell; ``2 * len(items)`` first/rest triples
    """
    if not items:
        return RdfList(RDF.nil, [])

    cells = [blank_node("list") for _ in items]
    triples: list[Triple] = []
    for position, (cell, item) in enumerate(zip(cells, items)):
        rest = cells[position + 1] if position + 1 < len(cells) else RDF.nil
        triples.append((cell, RDF.first, item))
        triples.append((cell, RDF.rest, rest))
    return RdfList(cells[0], triples)


# =============================================================================
# Assembly
# =============================================================================


def deduplicate_triples(nested: Iterable[Triple | Iterable[Triple]]) -> list[Triple]:
    """Flatten one level of nesting and drop repeated triples, keeping first occurrences."""
    return list(dict.fromkeys(_flatten(nested)))


def finalize_triples(nested: Iterable[Triple | Iterable[Triple] | None]) -> list[Triple]:
    """Like :func:`deduplicate_triples`, but also skip ``None`` placeholders."""
    return list(dict.fromkeys(triple for triple in _flatten(nested) if triple is not None))


def _flatten(nested: Iterable[Any]) -> Iterable[Any]:
    for item in nested:
        if item is None:
            yield None
        elif _is_triple(item):
            yield item
        else:
            yield from item


def _is_triple(item: Any) -> bool:
    return isinstance(item, tuple) and len(item) == 3 and isinstance(item[1], URIRef)


# =============================================================================
# Queries
# =============================================================================


def filter_by_subject(triples: Iterable[Triple], subject: Subject) -> list[Triple]:
    return [triple for triple in triples if triple[0] == subject]


def in_namespace(term: Any, namespace: Namespace | str) -> bool:
    """True when ``term`` is an IRI inside ``namespace``."""
    return isinstance(term, URIRef) and str(term).startswith(str(namespace))


# =============================================================================
# Composite Helpers
# =============================================================================


def dual_type_triples(subject: Subject, primary: URIRef, secondary: URIRef) -> list[Triple]:
    return [type_triple(subject, primary), type_triple(subject, secondary)]


def optional_string_property(subject: Subject, predicate: URIRef, value: str | None) -> list[Triple]:
    if value is None:
        return []
    return [datatype_property(subject, predicate, value, XSD.string)]


def optional_datetime_property(
    subject: Subject, predicate: URIRef, value: datetime | None
) -> list[Triple]:
    if value is None:
        return []
    return [datatype_property(subject, predicate, value, XSD.dateTime)]


def location_triples(subject: Subject, location: SourceLocation | None, context: Context) -> list[Triple]:
    """
    Link an entity to its source location inside the context's file.

    Emitted only when both a location and a file path are known; the end line
    falls back to the start line.
    """
    if location is None or not context.file_path:
        return []
    file_iri = iri.for_source_file(context.base_iri, context.file_path)
    location_iri = iri.for_source_location(file_iri, location.start_line, location.effective_end_line)
    return [object_property(subject, CORE.hasSourceLocation, location_iri)]


def line_triples(subject: Subject, location: SourceLocation | None) -> list[Triple]:
    """``startLine`` of a construct, when its location is known."""
    if location is None or not location.start_line:
        return []
    return [datatype_property(subject, CORE.startLine, location.start_line, XSD.positiveInteger)]



def line_range_triples(subject: Subject, predicate: URIRef, location: SourceLocation | None) -> list[Triple]:
    """
    Link an entity to a location node of its own, ``<subject>/L<start>-<end>``.

    The node is typed ``core:SourceLocation`` and carries startLine/endLine
    when they are known.
    """
    if location is None:
        return []
    start = location.start_line or 0
    end = location.end_line or start
    location_iri = URIRef(f"{subject}/L{start}-{end}")

    triples = [
        object_property(subject, predicate, location_iri),
        type_triple(location_iri, CORE.SourceLocation),
    ]
    if location.start_line:
        triples.append(datatype_property(location_iri, CORE.startLine, location.start_line, XSD.positiveInteger))
    if location.end_line:
        triples.append(datatype_property(location_iri, CORE.endLine, location.end_line, XSD.positiveInteger))
    return triples
