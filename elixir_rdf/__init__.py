"""
elixir_rdf - RDF triple builders for Elixir code.

Turns records extracted from Elixir ASTs (functions, clauses, attributes,
behaviours, calls, control flow, macros, directives, provenance activities)
into rdflib triples that follow the Elixir code ontology.

Layers:
- common: vocabulary namespaces, IRI minting, shared result types
- adapters.ast: records handed over by the extraction layer, quoted-form helpers
- modules.builders: pure builder functions and the immutable build Context
- services: settings and graph assembly
"""

__version__ = "0.1.0"
