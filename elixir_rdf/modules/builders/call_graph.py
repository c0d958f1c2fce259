"""
Call graph builder - function call edges to RDF.

IRI pattern: ``<base>call/<caller-fragment>/<index>`` where the caller
fragment is the calling function's local path (``MyApp/process/1``),
``unknown/0`` when the caller is not known.

Call kinds:
- local: LocalCall, linked to the context module's function when a module is known
- remote: RemoteCall with moduleName, always linked to the target function
- dynamic: typed LocalCall (the target cannot be resolved statically)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rdflib import URIRef
from rdflib.namespace import XSD

from elixir_rdf.adapters.ast.models import CallKind, FunctionCall
from elixir_rdf.common import iri
from elixir_rdf.common.namespaces import CORE, STRUCTURE
from elixir_rdf.common.types import BuildAllResult, BuildResult, Triple

from .context import Context
from .helpers import (
    datatype_property,
    deduplicate_triples,
    line_triples,
    object_property,
    type_triple,
)

logger = logging.getLogger(__name__)

__all__ = ["UNKNOWN_CALLER", "call_iri", "build", "build_all"]

UNKNOWN_CALLER = "unknown/0"


def call_iri(base_iri: str, caller_function: str, index: int) -> URIRef:
    """
    Generate an IRI for a function call.

    Example:
        >>> call_iri("https://example.org/code#", "MyApp/foo/1", 0)
        rdflib.term.URIRef('https://example.org/code#call/MyApp/foo/1/0')
    """
    return URIRef(f"{base_iri}call/{caller_function}/{index}")


def _target_iri(call: FunctionCall, context: Context) -> URIRef | None:
    if call.kind == CallKind.REMOTE:
        if not call.module:
            return None
        return iri.for_function(context.base_iri, call.module, call.name, call.arity)
    if call.kind == CallKind.LOCAL:
        module = context.module_name()
        if module is None:
            return None
        return iri.for_function(context.base_iri, module, call.name, call.arity)
    return None


def build(
    call: FunctionCall,
    context: Context,
    *,
    caller_function: str = UNKNOWN_CALLER,
    index: int = 0,
) -> BuildResult:
    """
    Build one call edge.

    Args:
        call: Extracted call record
        context: Build context
        caller_function: Local path of the calling function, e.g. ``MyApp/run/0``
        index: Position of the call within the caller

    Returns:
        BuildResult with the call IRI and its triples
    """
    subject = call_iri(context.base_iri, caller_function, index)
    kind = CallKind(call.kind)

    triples: list[Triple] = [
        type_triple(subject, CORE.RemoteCall if kind == CallKind.REMOTE else CORE.LocalCall),
        datatype_property(subject, STRUCTURE.functionName, call.name, XSD.string),
        datatype_property(subject, STRUCTURE.arity, call.arity, XSD.nonNegativeInteger),
    ]

    if call.module:
        triples.append(datatype_property(subject, STRUCTURE.moduleName, iri.module_name(call.module), XSD.string))

    if caller_function != UNKNOWN_CALLER:
        triples.append(object_property(subject, STRUCTURE.belongsTo, URIRef(f"{context.base_iri}{caller_function}")))

    target = _target_iri(call, context)
    if target is not None:
        triples.append(object_property(subject, STRUCTURE.callsFunction, target))

    triples.extend(line_triples(subject, call.location))

    return BuildResult(subject, deduplicate_triples(triples))


def build_all(
    calls: Sequence[FunctionCall], context: Context, *, caller_function: str = UNKNOWN_CALLER
) -> BuildAllResult:
    """Build every call made by one caller, indexed in input order."""
    results = [
        build(call, context, caller_function=caller_function, index=index) for index, call in enumerate(calls)
    ]
    logger.debug("Built %d calls for %s", len(results), caller_function)
    return BuildAllResult(
        [result.iri for result in results],
        deduplicate_triples(result.triples for result in results),
    )
