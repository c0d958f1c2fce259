"""
Services - configuration and graph assembly around the pure builders.

Modules:
- config_models.py: BuilderSettings (pydantic-settings, ``ELIXIR_RDF_`` env prefix)
- graph.py: Context from settings, rdflib Graph from triple lists
"""

from __future__ import annotations

from .config_models import BuilderSettings
from .graph import assemble_graph, configure_logging, context_from_settings

__all__ = [
    "BuilderSettings",
    "assemble_graph",
    "configure_logging",
    "context_from_settings",
]
