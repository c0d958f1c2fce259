"""Vocabulary namespaces of the Elixir code ontology."""

from __future__ import annotations

from rdflib import Graph, Namespace
from rdflib.namespace import PROV, RDF, XSD

__all__ = [
    "STRUCTURE",
    "CORE",
    "OTP",
    "EVOLUTION",
    "PROV",
    "RDF",
    "XSD",
    "PREFIXES",
    "bind_namespaces",
]

STRUCTURE = Namespace("https://w3id.org/elixir-code/structure#")
CORE = Namespace("https://w3id.org/elixir-code/core#")
OTP = Namespace("https://w3id.org/elixir-code/otp#")
EVOLUTION = Namespace("https://w3id.org/elixir-code/evolution#")

PREFIXES: dict[str, Namespace] = {
    "struct": STRUCTURE,
    "core": CORE,
    "otp": OTP,
    "evo": EVOLUTION,
    "prov": PROV,
}


def bind_namespaces(graph: Graph) -> Graph:
    """Bind the ontology prefixes on a graph and return it."""
    for prefix, namespace in PREFIXES.items():
        graph.bind(prefix, namespace)
    return graph
