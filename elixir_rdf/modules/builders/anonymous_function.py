"""
Anonymous function builder - ``fn ... end`` expressions to RDF.

IRI pattern: ``<context_iri>/anon/<index>`` where the context IRI is the
enclosing module, else the parent module, else the source file, else
``<base>anonymous``. Clauses live under ``<anon_iri>/clause/<i>``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rdflib import URIRef
from rdflib.namespace import XSD

from elixir_rdf.adapters.ast.models import AnonymousClause, AnonymousFunction
from elixir_rdf.common import iri
from elixir_rdf.common.namespaces import CORE, STRUCTURE
from elixir_rdf.common.types import BuildAllResult, BuildResult, Triple

from .closure import build_closure_triples
from .context import Context
from .helpers import (
    build_rdf_list,
    datatype_property,
    deduplicate_triples,
    location_triples,
    object_property,
    type_triple,
)

logger = logging.getLogger(__name__)

__all__ = ["anonymous_function_iri", "anonymous_clause_iri", "build", "build_all"]

_FALLBACK_CONTEXT = "anonymous"


def anonymous_function_iri(context: Context, index: int) -> URIRef:
    return iri.for_anonymous_function(context.context_iri(_FALLBACK_CONTEXT), index)


def anonymous_clause_iri(anon_iri: URIRef, index: int) -> URIRef:
    return iri.for_anonymous_clause(anon_iri, index)


def _arity(anonymous: AnonymousFunction) -> int:
    if anonymous.arity or not anonymous.clauses:
        return anonymous.arity
    return anonymous.clauses[0].arity


def _clause_triples(clause: AnonymousClause, anon_iri: URIRef, index: int) -> tuple[URIRef, list[Triple]]:
    subject = anonymous_clause_iri(anon_iri, index)
    triples = [
        type_triple(subject, STRUCTURE.FunctionClause),
        datatype_property(subject, STRUCTURE.clauseOrder, index + 1, XSD.positiveInteger),
    ]
    if clause.guard is not None:
        triples.append(datatype_property(subject, CORE.hasGuard, True, XSD.boolean))
    triples.append(object_property(anon_iri, STRUCTURE.hasClause, subject))
    return subject, triples


def build(anonymous: AnonymousFunction, context: Context, index: int = 0) -> BuildResult:
    """
    Build an anonymous function, its clauses and its captured variables.

    Args:
        anonymous: Anonymous function record
        context: Build context
        index: Position of the ``fn`` within its scope

    Returns:
        BuildResult with the anonymous function IRI and its triples
    """
    subject = anonymous_function_iri(context, index)

    triples: list[Triple] = [
        type_triple(subject, STRUCTURE.AnonymousFunction),
        datatype_property(subject, STRUCTURE.arity, _arity(anonymous), XSD.nonNegativeInteger),
    ]

    clause_iris: list[URIRef] = []
    for position, clause in enumerate(anonymous.clauses):
        clause_subject, clause_triples = _clause_triples(clause, subject, position)
        clause_iris.append(clause_subject)
        triples.extend(clause_triples)

    if len(clause_iris) > 1:
        clause_list = build_rdf_list(clause_iris)
        triples.append(object_property(subject, STRUCTURE.hasClauses, clause_list.head))
        triples.extend(clause_list.triples)

    triples.extend(location_triples(subject, anonymous.location, context))
    triples.extend(build_closure_triples(anonymous, subject))

    return BuildResult(subject, deduplicate_triples(triples))


def build_all(functions: Sequence[AnonymousFunction], context: Context) -> BuildAllResult:
    """Build every anonymous function of a scope, indexed in input order."""
    results = [build(anonymous, context, index) for index, anonymous in enumerate(functions)]
    logger.debug("Built %d anonymous functions", len(results))
    return BuildAllResult(
        [result.iri for result in results],
        deduplicate_triples(result.triples for result in results),
    )
