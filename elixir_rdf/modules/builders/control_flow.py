"""
Control flow builder - conditionals, case, with, receive and comprehensions.

IRI pattern: ``<base><kind>/<containing-function>/<index>`` with kinds
``cond`` (if/unless/cond), ``case``, ``with``, ``receive`` and ``for``.

Structural features are recorded as presence markers: ``hasClause``,
``hasGuard``, ``hasElseClause`` and the like are emitted with the value
``true`` when the feature exists and omitted otherwise.

In full mode, conditions and branches of conditionals are built as
expressions under ``<construct_iri>/expr/...`` and linked by object
properties instead of markers.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from rdflib import URIRef
from rdflib.namespace import XSD

from elixir_rdf.adapters.ast.models import (
    BranchKind,
    CaseExpression,
    Comprehension,
    Conditional,
    ConditionalKind,
    ReceiveExpression,
    WithExpression,
)
from elixir_rdf.common.namespaces import CORE
from elixir_rdf.common.types import BuildAllResult, BuildResult, Triple

from . import expression
from .call_graph import UNKNOWN_CALLER
from .context import Context
from .helpers import datatype_property, deduplicate_triples, line_triples, object_property, type_triple

logger = logging.getLogger(__name__)

__all__ = [
    "conditional_iri",
    "case_iri",
    "with_iri",
    "receive_iri",
    "comprehension_iri",
    "build_conditional",
    "build_case",
    "build_with",
    "build_receive",
    "build_comprehension",
    "build_all_conditionals",
    "build_all_cases",
    "build_all_withs",
    "build_all_receives",
    "build_all_comprehensions",
]

_CONDITIONAL_CLASSES: dict[ConditionalKind, URIRef] = {
    ConditionalKind.IF: CORE.IfExpression,
    ConditionalKind.UNLESS: CORE.UnlessExpression,
    ConditionalKind.COND: CORE.CondExpression,
}

_BRANCH_PREDICATES: dict[BranchKind, URIRef] = {
    BranchKind.THEN: CORE.hasThenBranch,
    BranchKind.ELSE: CORE.hasElseBranch,
}


# =============================================================================
# IRIs
# =============================================================================


def _construct_iri(kind: str, base_iri: str, containing_function: str, index: int) -> URIRef:
    return URIRef(f"{base_iri}{kind}/{containing_function}/{index}")


def conditional_iri(base_iri: str, containing_function: str, index: int) -> URIRef:
    return _construct_iri("cond", base_iri, containing_function, index)


def case_iri(base_iri: str, containing_function: str, index: int) -> URIRef:
    return _construct_iri("case", base_iri, containing_function, index)


def with_iri(base_iri: str, containing_function: str, index: int) -> URIRef:
    return _construct_iri("with", base_iri, containing_function, index)


def receive_iri(base_iri: str, containing_function: str, index: int) -> URIRef:
    return _construct_iri("receive", base_iri, containing_function, index)


def comprehension_iri(base_iri: str, containing_function: str, index: int) -> URIRef:
    return _construct_iri("for", base_iri, containing_function, index)


def _marker(subject: URIRef, predicate: URIRef) -> Triple:
    return datatype_property(subject, predicate, True, XSD.boolean)


# =============================================================================
# Conditionals
# =============================================================================


class _LinkedExpressions:
    """Builds sub-expressions of one construct, threading the expression counter."""

    def __init__(self, subject: URIRef, context: Context) -> None:
        self.subject = subject
        self.context = context
        self.triples: list[Triple] = []

    def link(self, ast: Any, suffix: str, predicate: URIRef) -> bool:
        """Build ``ast`` and link it with ``predicate``; False when it could not be built."""
        result = expression.build(ast, self.context, suffix=suffix, base_iri=f"{self.subject}/")
        if not result.success:
            if not result.skipped:
                logger.warning("Expression %s of %s not built: %s", suffix, self.subject, "; ".join(result.errors))
            return False
        self.context = result.context
        self.triples.extend(result.triples)
        self.triples.append(object_property(self.subject, predicate, result.iri))
        return True


def _conditional_triples(conditional: Conditional, subject: URIRef, context: Context) -> list[Triple]:
    kind = ConditionalKind(conditional.kind)
    build_expressions = context.full_mode_for_file(context.file_path)
    linked = _LinkedExpressions(subject, context)
    triples: list[Triple] = []

    if kind != ConditionalKind.COND and conditional.condition is not None:
        if not (build_expressions and linked.link(conditional.condition, "condition", CORE.hasCondition)):
            triples.append(_marker(subject, CORE.hasCondition))

    for branch in conditional.branches:
        predicate = _BRANCH_PREDICATES[BranchKind(branch.kind)]
        if not (build_expressions and linked.link(branch.body, BranchKind(branch.kind).value, predicate)):
            triples.append(_marker(subject, predicate))

    if kind == ConditionalKind.COND and conditional.clauses:
        if build_expressions:
            # cond_<i> suffixes pair each body with its condition
            for clause in conditional.clauses:
                linked.link(clause.condition, f"cond_{clause.index}_condition", CORE.hasCondition)
                linked.link(clause.body, f"cond_{clause.index}_body", CORE.hasThenBranch)
        else:
            triples.append(_marker(subject, CORE.hasClause))

    return triples + linked.triples


def build_conditional(
    conditional: Conditional,
    context: Context,
    *,
    containing_function: str = UNKNOWN_CALLER,
    index: int = 0,
) -> BuildResult:
    """
    Build an ``if``, ``unless`` or ``cond`` expression.

    Args:
        conditional: Extracted conditional record
        context: Build context; full mode links condition and branch expressions
        containing_function: Local path of the enclosing function
        index: Position of the conditional within the function

    Returns:
        BuildResult with the conditional IRI and its triples
    """
    subject = conditional_iri(context.base_iri, containing_function, index)
    triples: list[Triple] = [type_triple(subject, _CONDITIONAL_CLASSES[ConditionalKind(conditional.kind)])]
    triples.extend(_conditional_triples(conditional, subject, context))
    triples.extend(line_triples(subject, conditional.location))
    return BuildResult(subject, deduplicate_triples(triples))


# =============================================================================
# Case, With, Receive
# =============================================================================


def build_case(
    case: CaseExpression,
    context: Context,
    *,
    containing_function: str = UNKNOWN_CALLER,
    index: int = 0,
) -> BuildResult:
    subject = case_iri(context.base_iri, containing_function, index)
    triples: list[Triple] = [type_triple(subject, CORE.CaseExpression)]
    if case.clauses:
        triples.append(_marker(subject, CORE.hasClause))
        if any(clause.has_guard for clause in case.clauses):
            triples.append(_marker(subject, CORE.hasGuard))
    triples.extend(line_triples(subject, case.location))
    return BuildResult(subject, deduplicate_triples(triples))


def build_with(
    with_expression: WithExpression,
    context: Context,
    *,
    containing_function: str = UNKNOWN_CALLER,
    index: int = 0,
) -> BuildResult:
    subject = with_iri(context.base_iri, containing_function, index)
    triples: list[Triple] = [type_triple(subject, CORE.WithExpression)]
    if with_expression.clauses:
        triples.append(_marker(subject, CORE.hasClause))
    if with_expression.else_clauses:
        triples.append(_marker(subject, CORE.hasElseClause))
    triples.extend(line_triples(subject, with_expression.location))
    return BuildResult(subject, deduplicate_triples(triples))


def build_receive(
    receive: ReceiveExpression,
    context: Context,
    *,
    containing_function: str = UNKNOWN_CALLER,
    index: int = 0,
) -> BuildResult:
    subject = receive_iri(context.base_iri, containing_function, index)
    triples: list[Triple] = [type_triple(subject, CORE.ReceiveExpression)]
    if receive.clauses:
        triples.append(_marker(subject, CORE.hasClause))
    if receive.has_after:
        triples.append(_marker(subject, CORE.hasAfterTimeout))
    triples.extend(line_triples(subject, receive.location))
    return BuildResult(subject, deduplicate_triples(triples))


# =============================================================================
# Comprehensions
# =============================================================================


def build_comprehension(
    comprehension: Comprehension,
    context: Context,
    *,
    containing_function: str = UNKNOWN_CALLER,
    index: int = 0,
) -> BuildResult:
    """Build a ``for`` comprehension; ``into:``, ``reduce:`` and ``uniq: true`` are markers."""
    subject = comprehension_iri(context.base_iri, containing_function, index)
    triples: list[Triple] = [type_triple(subject, CORE.ForComprehension)]
    if comprehension.generators:
        triples.append(_marker(subject, CORE.hasGenerator))
    if comprehension.filters:
        triples.append(_marker(subject, CORE.hasFilter))
    if comprehension.into is not None:
        triples.append(_marker(subject, CORE.hasIntoOption))
    if comprehension.reduce is not None:
        triples.append(_marker(subject, CORE.hasReduceOption))
    if comprehension.uniq is True:
        triples.append(_marker(subject, CORE.hasUniqOption))
    triples.extend(line_triples(subject, comprehension.location))
    return BuildResult(subject, deduplicate_triples(triples))


# =============================================================================
# Aggregates
# =============================================================================


def _build_all(builder: Any, records: Sequence[Any], context: Context, containing_function: str) -> BuildAllResult:
    results = [
        builder(record, context, containing_function=containing_function, index=index)
        for index, record in enumerate(records)
    ]
    return BuildAllResult(
        [result.iri for result in results],
        deduplicate_triples(result.triples for result in results),
    )


def build_all_conditionals(
    conditionals: Sequence[Conditional], context: Context, *, containing_function: str = UNKNOWN_CALLER
) -> BuildAllResult:
    return _build_all(build_conditional, conditionals, context, containing_function)


def build_all_cases(
    cases: Sequence[CaseExpression], context: Context, *, containing_function: str = UNKNOWN_CALLER
) -> BuildAllResult:
    return _build_all(build_case, cases, context, containing_function)


def build_all_withs(
    withs: Sequence[WithExpression], context: Context, *, containing_function: str = UNKNOWN_CALLER
) -> BuildAllResult:
    return _build_all(build_with, withs, context, containing_function)


def build_all_receives(
    receives: Sequence[ReceiveExpression], context: Context, *, containing_function: str = UNKNOWN_CALLER
) -> BuildAllResult:
    return _build_all(build_receive, receives, context, containing_function)


def build_all_comprehensions(
    comprehensions: Sequence[Comprehension], context: Context, *, containing_function: str = UNKNOWN_CALLER
) -> BuildAllResult:
    return _build_all(build_comprehension, comprehensions, context, containing_function)
