"""
Graph service - turns settings into build contexts and triples into graphs.

Usage:
    settings = BuilderSettings()
    context = context_from_settings(settings, file_path="lib/my_app.ex")
    result = function.build(record, context.with_module("MyApp"))
    graph = assemble_graph(result.triples)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from rdflib import Graph

from elixir_rdf.common.namespaces import bind_namespaces
from elixir_rdf.common.types import Triple
from elixir_rdf.modules.builders.context import Context
from elixir_rdf.modules.builders.helpers import deduplicate_triples

from .config_models import BuilderSettings

logger = logging.getLogger(__name__)

__all__ = ["configure_logging", "context_from_settings", "assemble_graph"]

_PACKAGE_LOGGER = "elixir_rdf"


def configure_logging(settings: BuilderSettings) -> None:
    """Apply the configured level to the package logger; handlers stay with the application."""
    logging.getLogger(_PACKAGE_LOGGER).setLevel(settings.log_level)


def context_from_settings(
    settings: BuilderSettings,
    file_path: str | None = None,
    *,
    known_modules: Iterable[str] | None = None,
) -> Context:
    """
    Create a build context from settings.

    Args:
        settings: Loaded builder settings
        file_path: Source file the records come from
        known_modules: Dotted names of the project's modules

    Returns:
        Context carrying the settings' base IRI, feature flags and dependency roots
    """
    return Context.new(
        settings.base_iri,
        file_path=file_path,
        config=settings.builder_config(),
        known_modules=known_modules,
        dependency_roots=settings.dependency_roots,
    )


def assemble_graph(*triple_lists: Iterable[Triple], graph: Graph | None = None) -> Graph:
    """
    Add builder output to an rdflib graph with the ontology prefixes bound.

    Args:
        *triple_lists: Triple lists returned by builders
        graph: Existing graph to extend; a new one is created when omitted

    Returns:
        The graph holding every triple once
    """
    graph = bind_namespaces(graph if graph is not None else Graph())
    triples = deduplicate_triples(list(triples) for triples in triple_lists)
    for triple in triples:
        graph.add(triple)
    logger.debug("Assembled graph with %d triples", len(triples))
    return graph
