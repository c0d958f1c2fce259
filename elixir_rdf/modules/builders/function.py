"""
Function builder - named function definitions to RDF.

IRI pattern: ``<base><Module>/<name>/<arity>``. A function always belongs to
a module; building one without a resolvable module is a programming error.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rdflib import URIRef
from rdflib.namespace import XSD

from elixir_rdf.adapters.ast.models import Function, FunctionKind, Visibility
from elixir_rdf.common import iri
from elixir_rdf.common.namespaces import STRUCTURE
from elixir_rdf.common.types import BuildAllResult, BuildResult, NoModuleContextError, Triple

from .context import Context
from .helpers import (
    datatype_property,
    deduplicate_triples,
    location_triples,
    object_property,
    type_triple,
)

logger = logging.getLogger(__name__)

__all__ = ["function_class", "function_iri", "build", "build_all"]

_CLASSES: dict[tuple[FunctionKind, Visibility], URIRef] = {
    (FunctionKind.FUNCTION, Visibility.PUBLIC): STRUCTURE.PublicFunction,
    (FunctionKind.FUNCTION, Visibility.PRIVATE): STRUCTURE.PrivateFunction,
    (FunctionKind.GUARD, Visibility.PUBLIC): STRUCTURE.GuardFunction,
    (FunctionKind.GUARD, Visibility.PRIVATE): STRUCTURE.GuardFunction,
    (FunctionKind.DELEGATE, Visibility.PUBLIC): STRUCTURE.DelegatedFunction,
    (FunctionKind.DELEGATE, Visibility.PRIVATE): STRUCTURE.DelegatedFunction,
}


def function_class(kind: FunctionKind, visibility: Visibility) -> URIRef:
    return _CLASSES[(FunctionKind(kind), Visibility(visibility))]


def function_iri(base_iri: str, module: str | Sequence[str], name: str, arity: int) -> URIRef:
    return iri.for_function(base_iri, module, name, arity)


def _module_iri(function: Function, context: Context) -> URIRef:
    if function.module:
        return iri.for_module(context.base_iri, function.module)
    module_iri = context.module_iri()
    if module_iri is None:
        raise NoModuleContextError(
            f"Cannot build function {function.name}/{function.arity}: no enclosing module in context"
        )
    return module_iri


def build(function: Function, context: Context) -> BuildResult:
    """
    Build the triples of a named function.

    Args:
        function: Extracted function record
        context: Build context; must resolve an enclosing module unless the
            record names its own module

    Returns:
        BuildResult with the function IRI and its triples

    Raises:
        NoModuleContextError: If no module can be resolved
    """
    module_iri = _module_iri(function, context)
    subject = URIRef(f"{module_iri}/{iri.escape_name(function.name)}/{function.arity}")

    triples: list[Triple] = [
        type_triple(subject, function_class(function.kind, function.visibility)),
        datatype_property(subject, STRUCTURE.functionName, function.name, XSD.string),
        datatype_property(subject, STRUCTURE.arity, function.arity, XSD.nonNegativeInteger),
    ]

    if function.min_arity is not None and function.min_arity != function.arity:
        triples.append(
            datatype_property(subject, STRUCTURE.minArity, function.min_arity, XSD.nonNegativeInteger)
        )

    if isinstance(function.docstring, str):
        triples.append(datatype_property(subject, STRUCTURE.docstring, function.docstring, XSD.string))

    triples.append(object_property(subject, STRUCTURE.belongsTo, module_iri))
    triples.append(object_property(module_iri, STRUCTURE.containsFunction, subject))

    if function.delegates_to is not None:
        target = function.delegates_to
        target_iri = iri.for_function(context.base_iri, target.module, target.function, target.arity)
        triples.append(object_property(subject, STRUCTURE.delegatesTo, target_iri))

    triples.extend(location_triples(subject, function.location, context))

    return BuildResult(subject, deduplicate_triples(triples))


def build_all(functions: Sequence[Function], context: Context) -> BuildAllResult:
    """Build every function of a module, keeping input order."""
    results = [build(function, context) for function in functions]
    logger.debug("Built %d functions", len(results))
    return BuildAllResult(
        [result.iri for result in results],
        deduplicate_triples(result.triples for result in results),
    )
