"""
Builders module - Pure functions turning extracted Elixir records into RDF triples.

This package provides one builder per construct:
- Definitions: function, clause, anonymous_function, closure, capture
- Module level: attribute, behaviour, dependency (alias/import/require/use), macro
- Bodies: call_graph, control_flow, exception, expression
- History: evolution (PROV-O activities)

Architecture:
- helpers.py: Triple constructors, literals, RDF lists, deduplication
- context.py: Immutable Context threaded through every build call
- One .py file per construct

All builders follow the same pattern:
- Pure functions only (no I/O, no state)
- ``*_iri`` functions compute an entity's IRI from its naming coordinates
- ``build`` returns ``BuildResult(iri, triples)``; the expression builder
  returns an ``ExpressionResult`` carrying the advanced Context
- ``build_all`` helpers index records in input order and keep that order in
  the combined triples

Usage:
    from elixir_rdf.modules.builders import Context, function

    context = Context.new("https://example.org/code#").with_module("MyApp")
    result = function.build(Function(name="hello", arity=0), context)
"""

from __future__ import annotations

from . import (
    anonymous_function,
    attribute,
    behaviour,
    call_graph,
    capture,
    clause,
    closure,
    control_flow,
    dependency,
    evolution,
    exception,
    expression,
    function,
    helpers,
    macro,
)
from .context import Context
from .helpers import (
    blank_node,
    build_rdf_list,
    datatype_property,
    deduplicate_triples,
    filter_by_subject,
    in_namespace,
    object_property,
    to_literal,
    type_triple,
)

__all__ = [
    "Context",
    # Builders
    "anonymous_function",
    "attribute",
    "behaviour",
    "call_graph",
    "capture",
    "clause",
    "closure",
    "control_flow",
    "dependency",
    "evolution",
    "exception",
    "expression",
    "function",
    "helpers",
    "macro",
    # Primitives
    "blank_node",
    "build_rdf_list",
    "datatype_property",
    "deduplicate_triples",
    "filter_by_subject",
    "in_namespace",
    "object_property",
    "to_literal",
    "type_triple",
]
