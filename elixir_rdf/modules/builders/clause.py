"""
Clause builder - function clauses, heads, bodies and parameters.

Each clause gets ``<function_iri>/clause/<order - 1>`` and each parameter
``<clause_iri>/param/<position>``; the ``clauseOrder`` and
``parameterPosition`` literals are 1-based. Heads, bodies and guards are
blank nodes; the parameter list is an RDF list.

In full mode (expressions enabled for the file) the guard and body are built
by the expression builder and linked instead of placeholder nodes.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from rdflib import BNode, URIRef
from rdflib.namespace import XSD

from elixir_rdf.adapters.ast.models import Clause, Parameter, ParameterKind
from elixir_rdf.adapters.ast.quoted import Atom, is_call, is_variable
from elixir_rdf.common import iri
from elixir_rdf.common.namespaces import CORE, STRUCTURE
from elixir_rdf.common.types import BuildAllResult, BuildResult, Triple

from . import expression
from .context import Context
from .helpers import (
    blank_node,
    build_rdf_list,
    datatype_property,
    deduplicate_triples,
    object_property,
    type_triple,
)

logger = logging.getLogger(__name__)

__all__ = [
    "clause_iri",
    "parameter_iri",
    "extract_parameter",
    "parameter_class",
    "build",
    "build_all",
]

# Quoted forms that are always destructuring patterns.
_PATTERN_FORMS = {"{}", "%{}", "%", "|", "<<>>", "="}

_PARAMETER_CLASSES: dict[ParameterKind, URIRef] = {
    ParameterKind.SIMPLE: STRUCTURE.Parameter,
    ParameterKind.DEFAULT: STRUCTURE.DefaultParameter,
    ParameterKind.PATTERN: STRUCTURE.PatternParameter,
    ParameterKind.PIN: STRUCTURE.PatternParameter,
}


def clause_iri(function_iri: URIRef, order: int) -> URIRef:
    """IRI of the clause with 1-based ``order``."""
    return iri.for_clause(function_iri, order - 1)


def parameter_iri(clause: URIRef, position: int) -> URIRef:
    return iri.for_parameter(clause, position)


# =============================================================================
# Parameter Classification
# =============================================================================


def _form(node: Any) -> str | None:
    if is_call(node) and isinstance(node[0], Atom):
        return node[0].name
    return None


def _parameter_name(node: Any) -> str | None:
    if is_variable(node):
        return node[0].name
    form = _form(node)
    if form == "\\\\" and len(node[2]) == 2:
        return _parameter_name(node[2][0])
    if form == "^" and len(node[2]) == 1 and is_variable(node[2][0]):
        return node[2][0][0].name
    return None


def extract_parameter(node: Any, position: int) -> Parameter | None:
    """
    Classify one parameter of a clause head.

    Args:
        node: Quoted form of the parameter
        position: 0-based position in the parameter list

    Returns:
        Parameter, or None if the form is not a valid parameter
    """
    form = _form(node)
    if form == "\\\\" and len(node[2]) == 2:
        return Parameter(
            position=position,
            kind=ParameterKind.DEFAULT,
            name=_parameter_name(node),
            expression=node,
            default_value=node[2][1],
        )
    if form == "^" and len(node[2]) == 1 and is_variable(node[2][0]):
        return Parameter(position=position, kind=ParameterKind.PIN, name=_parameter_name(node), expression=node)
    if form in _PATTERN_FORMS:
        return Parameter(position=position, kind=ParameterKind.PATTERN, expression=node)
    if isinstance(node, list) or (isinstance(node, tuple) and len(node) == 2):
        return Parameter(position=position, kind=ParameterKind.PATTERN, expression=node)
    if is_variable(node):
        return Parameter(position=position, kind=ParameterKind.SIMPLE, name=node[0].name, expression=node)
    if node is None or isinstance(node, (bool, int, float, str)):
        # Literal patterns such as 0, "ok" or :error
        return Parameter(position=position, kind=ParameterKind.PATTERN, expression=node)
    return None


def parameter_class(parameter: Parameter) -> URIRef:
    return _PARAMETER_CLASSES[parameter.kind]


# =============================================================================
# Building
# =============================================================================


def _build_parameters(clause: Clause, subject: URIRef) -> tuple[list[URIRef], list[Triple]]:
    iris: list[URIRef] = []
    triples: list[Triple] = []
    for position, node in enumerate(clause.parameters):
        parameter = extract_parameter(node, position)
        if parameter is None:
            logger.warning(
                "Failed to extract parameter at position %d in %s/%d", position, clause.name, clause.arity
            )
            continue
        param_iri = parameter_iri(subject, parameter.position)
        iris.append(param_iri)
        triples.append(type_triple(param_iri, parameter_class(parameter)))
        triples.append(
            datatype_property(param_iri, STRUCTURE.parameterPosition, parameter.position + 1, XSD.positiveInteger)
        )
        if parameter.name:
            triples.append(datatype_property(param_iri, STRUCTURE.parameterName, parameter.name, XSD.string))
    return iris, triples


def _build_guard(
    clause: Clause, subject: URIRef, head: BNode, context: Context, build_expressions: bool
) -> tuple[list[Triple], Context]:
    if clause.guard is None:
        return [], context

    if build_expressions:
        result = expression.build(clause.guard, context, suffix="guard", base_iri=f"{subject}/")
        if result.success:
            return [*result.triples, object_property(head, CORE.hasGuard, result.iri)], result.context
        if not result.skipped:
            logger.warning("Guard of %s/%d not built: %s", clause.name, clause.arity, "; ".join(result.errors))

    guard = blank_node("guard")
    return [type_triple(guard, CORE.GuardClause), object_property(head, CORE.hasGuard, guard)], context


def _build_body(
    clause: Clause, subject: URIRef, body: BNode, context: Context, build_expressions: bool
) -> list[Triple]:
    triples: list[Triple] = [type_triple(body, STRUCTURE.FunctionBody)]
    if not build_expressions or clause.body is None:
        return triples

    result = expression.build(clause.body, context, suffix="body", base_iri=f"{subject}/")
    if result.success:
        triples.extend(result.triples)
        triples.append(object_property(body, CORE.hasExpression, result.iri))
    elif not result.skipped:
        logger.warning("Body of %s/%d not built: %s", clause.name, clause.arity, "; ".join(result.errors))
    return triples


def build(clause: Clause, function_iri: URIRef, context: Context) -> BuildResult:
    """
    Build one clause of a function.

    Args:
        clause: Extracted clause record (``order`` is 1-based)
        function_iri: IRI of the owning function
        context: Build context

    Returns:
        BuildResult with the clause IRI and its triples
    """
    subject = clause_iri(function_iri, clause.order)
    build_expressions = context.full_mode_for_file(context.file_path)

    triples: list[Triple] = [
        type_triple(subject, STRUCTURE.FunctionClause),
        datatype_property(subject, STRUCTURE.clauseOrder, clause.order, XSD.positiveInteger),
        object_property(function_iri, STRUCTURE.hasClause, subject),
    ]

    head = blank_node("function_head")
    parameter_iris, parameter_triples = _build_parameters(clause, subject)
    parameter_list = build_rdf_list(parameter_iris)
    guard_triples, context = _build_guard(clause, subject, head, context, build_expressions)
    triples += [
        type_triple(head, STRUCTURE.FunctionHead),
        object_property(head, STRUCTURE.hasParameters, parameter_list.head),
        *guard_triples,
        *parameter_triples,
        *parameter_list.triples,
        object_property(subject, STRUCTURE.hasHead, head),
    ]

    body = blank_node("function_body")
    triples += _build_body(clause, subject, body, context, build_expressions)
    triples.append(object_property(subject, STRUCTURE.hasBody, body))

    return BuildResult(subject, deduplicate_triples(triples))


def build_all(clauses: Sequence[Clause], function_iri: URIRef, context: Context) -> BuildAllResult:
    """Build all clauses of a function, in order."""
    results = [build(clause, function_iri, context) for clause in clauses]
    return BuildAllResult(
        [result.iri for result in results],
        deduplicate_triples(result.triples for result in results),
    )
