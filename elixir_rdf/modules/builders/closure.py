"""
Closure analysis for anonymous functions.

An ``fn`` is a closure when a clause guard or body reads a variable that the
clause does not bind itself. Each such free variable becomes a captured
variable entity ``<anon_iri>/capture/<name>`` with exactly three triples.
"""

from __future__ import annotations

import logging

from rdflib import URIRef
from rdflib.namespace import XSD

from elixir_rdf.adapters.ast.models import AnonymousClause, AnonymousFunction
from elixir_rdf.adapters.ast.quoted import pattern_variables, variable_references
from elixir_rdf.common import iri
from elixir_rdf.common.namespaces import CORE
from elixir_rdf.common.types import Triple

from .helpers import datatype_property, object_property, type_triple

logger = logging.getLogger(__name__)

__all__ = ["free_variables", "is_closure", "captured_variable_iri", "build_closure_triples"]


def _clause_free_variables(clause: AnonymousClause) -> list[str]:
    bound = set(clause.bound_variables)
    for parameter in clause.parameters:
        bound.update(pattern_variables(parameter))

    names = []
    if clause.guard is not None:
        names.extend(variable_references(clause.guard, bound))
    names.extend(variable_references(clause.body, bound))
    return names


def free_variables(anonymous: AnonymousFunction) -> list[str]:
    """Variables read by any clause but bound by none of its own bindings, sorted by name."""
    names: set[str] = set()
    for clause in anonymous.clauses:
        names.update(_clause_free_variables(clause))
    return sorted(names)


def is_closure(anonymous: AnonymousFunction) -> bool:
    return bool(free_variables(anonymous))


def captured_variable_iri(anon_iri: URIRef, name: str) -> URIRef:
    return iri.for_captured_variable(anon_iri, name)


def build_closure_triples(anonymous: AnonymousFunction, anon_iri: URIRef) -> list[Triple]:
    """
    Triples for the variables an anonymous function captures.

    Args:
        anonymous: Anonymous function record
        anon_iri: IRI of the anonymous function

    Returns:
        Three triples per free variable; empty when the function is not a closure
    """
    triples: list[Triple] = []
    for name in free_variables(anonymous):
        variable = captured_variable_iri(anon_iri, name)
        triples.append(object_property(anon_iri, CORE.capturesVariable, variable))
        triples.append(type_triple(variable, CORE.Variable))
        triples.append(datatype_property(variable, CORE.name, name, XSD.string))

    if triples:
        logger.debug("Anonymous function %s captures %d variables", anon_iri, len(triples) // 3)
    return triples
