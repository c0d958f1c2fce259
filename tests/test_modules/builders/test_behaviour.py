"""Tests for modules.builders.behaviour module."""

from __future__ import annotations

from rdflib import Literal, URIRef
from rdflib.namespace import RDF, XSD

from elixir_rdf.adapters.ast.models import Behaviour, BehaviourImplementation, Callback
from elixir_rdf.common.namespaces import STRUCTURE
from elixir_rdf.modules.builders import behaviour

MODULE = URIRef("https://example.org/code#MyApp.Worker")


class TestCallbackClass:
    """Tests for callback_class."""

    def test_classes(self):
        """Should prefer macro over optional."""
        assert behaviour.callback_class(Callback(name="a", arity=0)) == STRUCTURE.Callback
        assert behaviour.callback_class(Callback(name="a", arity=0, optional=True)) == STRUCTURE.OptionalCallback
        assert (
            behaviour.callback_class(Callback(name="a", arity=0, optional=True, macro=True))
            == STRUCTURE.MacroCallback
        )


class TestBuildBehaviour:
    """Tests for build_behaviour."""

    def test_declaration(self, module_context):
        """Should type the module and define each callback."""
        record = Behaviour(callbacks=[Callback(name="run", arity=1, doc="Runs the job.")], doc="A worker.")
        subject, triples = behaviour.build_behaviour(record, MODULE, module_context)

        callback = URIRef(f"{MODULE}/run/1")
        assert subject == MODULE
        assert (MODULE, RDF.type, STRUCTURE.Behaviour) in triples
        assert (MODULE, STRUCTURE.definesBehaviour, MODULE) in triples
        assert (MODULE, STRUCTURE.definesCallback, callback) in triples
        assert (callback, RDF.type, STRUCTURE.Callback) in triples
        assert (callback, STRUCTURE.arity, Literal(1, datatype=XSD.nonNegativeInteger)) in triples
        assert (callback, STRUCTURE.docstring, Literal("Runs the job.", datatype=XSD.string)) in triples
        assert (MODULE, STRUCTURE.docstring, Literal("A worker.", datatype=XSD.string)) in triples

    def test_hidden_doc(self, module_context):
        """Should skip @moduledoc false."""
        _, triples = behaviour.build_behaviour(Behaviour(doc=False), MODULE, module_context)
        assert len(triples) == 2


class TestBuildImplementation:
    """Tests for build_implementation."""

    def test_genserver_callbacks(self, module_context, base_iri):
        """Should link defined callbacks of a known behaviour."""
        record = BehaviourImplementation(
            behaviours=["GenServer"],
            functions=[("init", 1), ("handle_call", 3), ("helper", 0)],
        )
        subject, triples = behaviour.build_implementation(record, MODULE, module_context)

        genserver = URIRef(f"{base_iri}GenServer")
        assert subject == MODULE
        assert triples == [
            (MODULE, STRUCTURE.implementsBehaviour, genserver),
            (URIRef(f"{MODULE}/init/1"), STRUCTURE.implementsCallback, URIRef(f"{genserver}/init/1")),
            (
                URIRef(f"{MODULE}/handle_call/3"),
                STRUCTURE.implementsCallback,
                URIRef(f"{genserver}/handle_call/3"),
            ),
        ]

    def test_unknown_behaviour(self, module_context, base_iri):
        """Should only link the module for user-defined behaviours."""
        record = BehaviourImplementation(behaviours=[["MyApp", "Plugin"]], functions=[("init", 1)])
        _, triples = behaviour.build_implementation(record, MODULE, module_context)
        assert triples == [(MODULE, STRUCTURE.implementsBehaviour, URIRef(f"{base_iri}MyApp.Plugin"))]
