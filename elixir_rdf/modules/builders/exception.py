"""
Exception builder - try, raise, throw and exit expressions.

IRI pattern: ``<base><kind>/<containing-function>/<index>`` with kinds
``try``, ``raise``, ``throw`` and ``exit``. The sections of a ``try`` are
presence markers, emitted only when the section exists.
"""

from __future__ import annotations

import logging

from rdflib import URIRef
from rdflib.namespace import XSD

from elixir_rdf.adapters.ast.models import ExitExpression, RaiseExpression, ThrowExpression, TryExpression
from elixir_rdf.common.namespaces import CORE
from elixir_rdf.common.types import BuildResult, Triple

from .call_graph import UNKNOWN_CALLER
from .context import Context
from .helpers import datatype_property, deduplicate_triples, line_triples, type_triple

logger = logging.getLogger(__name__)

__all__ = [
    "try_iri",
    "raise_iri",
    "throw_iri",
    "exit_iri",
    "build_try",
    "build_raise",
    "build_throw",
    "build_exit",
]


def try_iri(base_iri: str, containing_function: str, index: int) -> URIRef:
    return URIRef(f"{base_iri}try/{containing_function}/{index}")


def raise_iri(base_iri: str, containing_function: str, index: int) -> URIRef:
    return URIRef(f"{base_iri}raise/{containing_function}/{index}")


def throw_iri(base_iri: str, containing_function: str, index: int) -> URIRef:
    return URIRef(f"{base_iri}throw/{containing_function}/{index}")


def exit_iri(base_iri: str, containing_function: str, index: int) -> URIRef:
    return URIRef(f"{base_iri}exit/{containing_function}/{index}")


def build_try(
    try_expression: TryExpression,
    context: Context,
    *,
    containing_function: str = UNKNOWN_CALLER,
    index: int = 0,
) -> BuildResult:
    """
    Build a ``try`` expression.

    Args:
        try_expression: Extracted try record with its section flags
        context: Build context
        containing_function: Local path of the enclosing function
        index: Position of the ``try`` within the function

    Returns:
        BuildResult with the try IRI and its triples
    """
    subject = try_iri(context.base_iri, containing_function, index)
    triples: list[Triple] = [type_triple(subject, CORE.TryExpression)]

    sections = (
        (try_expression.has_rescue, CORE.hasRescueClause),
        (try_expression.has_catch, CORE.hasCatchClause),
        (try_expression.has_after, CORE.hasAfterClause),
        (try_expression.has_else, CORE.hasElseClause),
    )
    for present, predicate in sections:
        if present:
            triples.append(datatype_property(subject, predicate, True, XSD.boolean))

    triples.extend(line_triples(subject, try_expression.location))
    return BuildResult(subject, deduplicate_triples(triples))


def build_raise(
    raise_expression: RaiseExpression,
    context: Context,
    *,
    containing_function: str = UNKNOWN_CALLER,
    index: int = 0,
) -> BuildResult:
    subject = raise_iri(context.base_iri, containing_function, index)
    triples = [type_triple(subject, CORE.RaiseExpression), *line_triples(subject, raise_expression.location)]
    return BuildResult(subject, deduplicate_triples(triples))


def build_throw(
    throw_expression: ThrowExpression,
    context: Context,
    *,
    containing_function: str = UNKNOWN_CALLER,
    index: int = 0,
) -> BuildResult:
    subject = throw_iri(context.base_iri, containing_function, index)
    triples = [type_triple(subject, CORE.ThrowExpression), *line_triples(subject, throw_expression.location)]
    return BuildResult(subject, deduplicate_triples(triples))


def build_exit(
    exit_expression: ExitExpression,
    context: Context,
    *,
    containing_function: str = UNKNOWN_CALLER,
    index: int = 0,
) -> BuildResult:
    subject = exit_iri(context.base_iri, containing_function, index)
    triples = [type_triple(subject, CORE.ExitExpression), *line_triples(subject, exit_expression.location)]
    return BuildResult(subject, deduplicate_triples(triples))
