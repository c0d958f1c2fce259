"""
Macro invocation builder - ``def``, ``if``, ``use``-style invocations to RDF.

IRI pattern: ``<base><Module>/invocation/<MacroModule>.<macro>/<index>``.
The macro module segment has dots replaced by underscores and is
``unknown`` for unresolved macros. The index comes from the ``index``
argument, else the record's invocation index, else its start line, else 0.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rdflib import URIRef
from rdflib.namespace import XSD

from elixir_rdf.adapters.ast.models import MacroCategory, MacroInvocation, ModuleRef, ResolutionStatus
from elixir_rdf.common import iri
from elixir_rdf.common.namespaces import STRUCTURE
from elixir_rdf.common.types import BuildAllResult, BuildResult, Triple

from .context import Context
from .helpers import datatype_property, deduplicate_triples, line_range_triples, type_triple

logger = logging.getLogger(__name__)

__all__ = ["macro_id", "invocation_iri", "build", "build_all"]

_UNKNOWN_MODULE = "Unknown"


def macro_id(invocation: MacroInvocation) -> str:
    """``Kernel.def``-style identifier; dots inside the module become underscores."""
    if invocation.module:
        module_part = iri.module_name(invocation.module).replace(".", "_")
    else:
        module_part = "unknown"
    return f"{module_part}.{invocation.name}"


def invocation_iri(base_iri: str, module: ModuleRef, identifier: str, index: int) -> URIRef:
    return URIRef(f"{iri.for_module(base_iri, module)}/invocation/{iri.escape_name(identifier)}/{index}")


def _invocation_index(invocation: MacroInvocation, index: int | None) -> int:
    if index is not None:
        return index
    if invocation.invocation_index is not None:
        return invocation.invocation_index
    if invocation.location is not None and invocation.location.start_line:
        return invocation.location.start_line
    return 0


def build(
    invocation: MacroInvocation,
    context: Context,
    *,
    module: ModuleRef | None = None,
    index: int | None = None,
) -> BuildResult:
    """
    Build one macro invocation.

    Args:
        invocation: Extracted invocation record
        context: Build context
        module: Module containing the invocation; defaults to the record's
            ``metadata["module"]``, then the context module
        index: Explicit invocation index

    Returns:
        BuildResult with the invocation IRI and its triples
    """
    owner = module or invocation.metadata.get("module") or context.module_name() or _UNKNOWN_MODULE
    subject = invocation_iri(context.base_iri, owner, macro_id(invocation), _invocation_index(invocation, index))

    triples: list[Triple] = [
        type_triple(subject, STRUCTURE.MacroInvocation),
        datatype_property(subject, STRUCTURE.macroName, invocation.name, XSD.string),
        datatype_property(subject, STRUCTURE.macroArity, invocation.arity, XSD.nonNegativeInteger),
        datatype_property(subject, STRUCTURE.macroCategory, MacroCategory(invocation.category).value, XSD.string),
        datatype_property(
            subject,
            STRUCTURE.resolutionStatus,
            ResolutionStatus(invocation.resolution_status).value,
            XSD.string,
        ),
    ]
    if invocation.module:
        triples.append(
            datatype_property(subject, STRUCTURE.macroModule, iri.module_name(invocation.module), XSD.string)
        )

    location = invocation.location
    if location is not None and location.start_line and location.start_line > 0:
        triples.extend(line_range_triples(subject, STRUCTURE.invokedAt, location))

    return BuildResult(subject, deduplicate_triples(triples))


def build_all(
    invocations: Sequence[MacroInvocation], context: Context, *, module: ModuleRef | None = None
) -> BuildAllResult:
    """Build every invocation of a module, indexed in input order."""
    results = [
        build(invocation, context, module=module, index=position) for position, invocation in enumerate(invocations)
    ]
    logger.debug("Built %d macro invocations", len(results))
    return BuildAllResult(
        [result.iri for result in results],
        deduplicate_triples(result.triples for result in results),
    )
