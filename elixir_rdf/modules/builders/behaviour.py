"""
Behaviour builder - behaviour declarations and implementations.

A behaviour is its defining module, so the behaviour IRI is the module IRI.
Callbacks are ``<behaviour_iri>/<name>/<arity>``.

Implementations link ``module implementsBehaviour behaviour`` for every
declared ``@behaviour``. Callback-level ``implementsCallback`` edges are only
derived for the behaviours in KNOWN_CALLBACKS, whose callback signatures are
fixed; user-defined behaviours get the module-level edge only.
"""

from __future__ import annotations

import logging

from rdflib import URIRef
from rdflib.namespace import XSD

from elixir_rdf.adapters.ast.models import Behaviour, BehaviourImplementation, Callback
from elixir_rdf.common import iri
from elixir_rdf.common.namespaces import STRUCTURE
from elixir_rdf.common.types import BuildResult, Triple

from .context import Context
from .helpers import (
    datatype_property,
    deduplicate_triples,
    location_triples,
    object_property,
    type_triple,
)

logger = logging.getLogger(__name__)

__all__ = [
    "KNOWN_CALLBACKS",
    "callback_class",
    "callback_iri",
    "build_behaviour",
    "build_implementation",
]

KNOWN_CALLBACKS: dict[str, tuple[tuple[str, int], ...]] = {
    "GenServer": (
        ("init", 1),
        ("handle_call", 3),
        ("handle_cast", 2),
        ("handle_info", 2),
        ("terminate", 2),
        ("code_change", 3),
        ("format_status", 1),
        ("format_status", 2),
    ),
    "Supervisor": (("init", 1),),
    "Agent": (),
    "Task": (),
    "Application": (("start", 2), ("stop", 1), ("config_change", 3)),
}


def callback_class(callback: Callback) -> URIRef:
    if callback.macro:
        return STRUCTURE.MacroCallback
    if callback.optional:
        return STRUCTURE.OptionalCallback
    return STRUCTURE.Callback


def callback_iri(behaviour_iri: URIRef, name: str, arity: int) -> URIRef:
    return URIRef(f"{behaviour_iri}/{iri.escape_name(name)}/{arity}")


# =============================================================================
# Declarations
# =============================================================================


def _callback_triples(behaviour_iri: URIRef, callback: Callback, context: Context) -> list[Triple]:
    subject = callback_iri(behaviour_iri, callback.name, callback.arity)
    triples = [
        type_triple(subject, callback_class(callback)),
        datatype_property(subject, STRUCTURE.functionName, callback.name, XSD.string),
        datatype_property(subject, STRUCTURE.arity, callback.arity, XSD.nonNegativeInteger),
        object_property(behaviour_iri, STRUCTURE.definesCallback, subject),
    ]
    if callback.doc:
        triples.append(datatype_property(subject, STRUCTURE.docstring, callback.doc, XSD.string))
    triples.extend(location_triples(subject, callback.location, context))
    return triples


def build_behaviour(behaviour: Behaviour, module_iri: URIRef, context: Context) -> BuildResult:
    """
    Build a behaviour declaration and its callbacks.

    Args:
        behaviour: Behaviour record with its callback specifications
        module_iri: IRI of the module declaring the callbacks
        context: Build context

    Returns:
        BuildResult whose IRI is ``module_iri``
    """
    subject = module_iri
    triples: list[Triple] = [
        type_triple(subject, STRUCTURE.Behaviour),
        object_property(subject, STRUCTURE.definesBehaviour, subject),
    ]
    for callback in behaviour.callbacks:
        triples.extend(_callback_triples(subject, callback, context))

    # @moduledoc false carries no text
    if isinstance(behaviour.doc, str) and behaviour.doc:
        triples.append(datatype_property(subject, STRUCTURE.docstring, behaviour.doc, XSD.string))

    return BuildResult(subject, deduplicate_triples(triples))


# =============================================================================
# Implementations
# =============================================================================


def build_implementation(
    implementation: BehaviourImplementation, module_iri: URIRef, context: Context
) -> BuildResult:
    """
    Build the links from an implementing module to its behaviours.

    Args:
        implementation: Declared behaviours and the module's ``(name, arity)`` pairs
        module_iri: IRI of the implementing module
        context: Build context

    Returns:
        BuildResult whose IRI is ``module_iri``
    """
    defined = set(implementation.functions)
    triples: list[Triple] = []

    for behaviour in implementation.behaviours:
        behaviour_name = iri.module_name(behaviour)
        behaviour_iri = iri.for_module(context.base_iri, behaviour_name)
        triples.append(object_property(module_iri, STRUCTURE.implementsBehaviour, behaviour_iri))

        callbacks = KNOWN_CALLBACKS.get(behaviour_name)
        if callbacks is None:
            logger.debug("No known callbacks for behaviour %s", behaviour_name)
            continue

        for name, arity in callbacks:
            if (name, arity) not in defined:
                continue
            function_iri = URIRef(f"{module_iri}/{iri.escape_name(name)}/{arity}")
            triples.append(
                object_property(function_iri, STRUCTURE.implementsCallback, callback_iri(behaviour_iri, name, arity))
            )

    return BuildResult(module_iri, deduplicate_triples(triples))
