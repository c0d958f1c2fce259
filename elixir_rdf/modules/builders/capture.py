"""
Capture builder - ``&`` function captures and partial applications.

IRI pattern: ``<context_iri>/&/<index>``, falling back to ``<base>captures``
when the context names neither a module nor a file.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rdflib import URIRef
from rdflib.namespace import XSD

from elixir_rdf.adapters.ast.models import Capture, CaptureKind
from elixir_rdf.common import iri
from elixir_rdf.common.namespaces import CORE, STRUCTURE
from elixir_rdf.common.types import BuildAllResult, BuildResult, Triple

from .context import Context
from .helpers import datatype_property, deduplicate_triples, object_property, type_triple

logger = logging.getLogger(__name__)

__all__ = ["capture_iri", "build", "build_all"]


def capture_iri(context: Context, index: int) -> URIRef:
    return iri.for_capture(context.context_iri("captures"), index)


def _target_triples(capture: Capture, subject: URIRef, context: Context) -> list[Triple]:
    if capture.function is None:
        return []

    if capture.kind == CaptureKind.NAMED_REMOTE and capture.module is not None:
        module_iri = iri.for_module(context.base_iri, capture.module)
        function_iri = iri.for_function(context.base_iri, capture.module, capture.function, capture.arity)
        return [
            object_property(subject, CORE.refersToModule, module_iri),
            object_property(subject, CORE.refersToFunction, function_iri),
        ]

    module = context.module_name()
    if module is None:
        return []
    function_iri = iri.for_function(context.base_iri, module, capture.function, capture.arity)
    return [object_property(subject, CORE.refersToFunction, function_iri)]


def build(capture: Capture, context: Context, index: int = 0) -> BuildResult:
    """
    Build one capture.

    Named captures (``&foo/1``, ``&Mod.fun/2``) become CapturedFunction
    entities linked to the function they refer to; shorthand captures
    (``&(&1 + 1)``) become PartialApplication entities.
    """
    subject = capture_iri(context, index)
    kind = CaptureKind(capture.kind)
    cls = STRUCTURE.PartialApplication if kind == CaptureKind.SHORTHAND else STRUCTURE.CapturedFunction

    triples: list[Triple] = [
        type_triple(subject, cls),
        datatype_property(subject, STRUCTURE.arity, capture.arity, XSD.nonNegativeInteger),
    ]
    if kind != CaptureKind.SHORTHAND:
        triples.extend(_target_triples(capture, subject, context))

    return BuildResult(subject, deduplicate_triples(triples))


def build_all(captures: Sequence[Capture], context: Context) -> BuildAllResult:
    results = [build(capture, context, index) for index, capture in enumerate(captures)]
    logger.debug("Built %d captures", len(results))
    return BuildAllResult(
        [result.iri for result in results],
        deduplicate_triples(result.triples for result in results),
    )
