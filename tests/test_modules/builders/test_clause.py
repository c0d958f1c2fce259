"""Tests for modules.builders.clause module."""

from __future__ import annotations

import logging

from rdflib import BNode, Literal, URIRef
from rdflib.namespace import RDF, XSD

from conftest import call, var

from elixir_rdf.adapters.ast.models import Clause, ParameterKind
from elixir_rdf.adapters.ast.quoted import Atom
from elixir_rdf.common.namespaces import CORE, STRUCTURE
from elixir_rdf.modules.builders import clause

FUNCTION_IRI = URIRef("https://example.org/code#MyApp/greet/1")


def _objects(triples, subject, predicate):
    return [o for s, p, o in triples if s == subject and p == predicate]


def _single(triples, subject, predicate):
    objects = _objects(triples, subject, predicate)
    assert len(objects) == 1
    return objects[0]


class TestExtractParameter:
    """Tests for parameter classification."""

    def test_simple(self):
        """Should name plain variables."""
        parameter = clause.extract_parameter(var("name"), 0)
        assert parameter.kind == ParameterKind.SIMPLE
        assert parameter.name == "name"

    def test_default(self):
        """Should classify name \\\\ default."""
        parameter = clause.extract_parameter(call("\\\\", var("opts"), []), 1)
        assert parameter.kind == ParameterKind.DEFAULT
        assert parameter.name == "opts"
        assert parameter.default_value == []

    def test_pin(self):
        """Should classify ^name."""
        parameter = clause.extract_parameter(call("^", var("expected")), 0)
        assert parameter.kind == ParameterKind.PIN
        assert parameter.name == "expected"

    def test_patterns(self):
        """Should classify destructuring and literal patterns."""
        patterns = [
            call("{}", var("a"), var("b"), var("c")),
            (Atom("ok"), var("value")),
            [var("head")],
            call("%{}", (Atom("id"), var("id"))),
            0,
            Atom("error"),
        ]
        for node in patterns:
            assert clause.extract_parameter(node, 0).kind == ParameterKind.PATTERN

    def test_invalid(self):
        """Should reject values that are not quoted forms."""
        assert clause.extract_parameter({"a": 1}, 0) is None

    def test_parameter_classes(self):
        """Should share PatternParameter between patterns and pins."""
        pin = clause.extract_parameter(call("^", var("x")), 0)
        default = clause.extract_parameter(call("\\\\", var("x"), 1), 0)
        assert clause.parameter_class(pin) == STRUCTURE.PatternParameter
        assert clause.parameter_class(default) == STRUCTURE.DefaultParameter


class TestBuild:
    """Tests for clause.build."""

    def test_light_mode_structure(self, module_context):
        """Should emit clause, head, parameter list and body."""
        record = Clause(name="greet", arity=1, order=1, parameters=[var("name")], body=var("name"))
        subject, triples = clause.build(record, FUNCTION_IRI, module_context)

        assert subject == URIRef(f"{FUNCTION_IRI}/clause/0")
        assert (subject, RDF.type, STRUCTURE.FunctionClause) in triples
        assert (subject, STRUCTURE.clauseOrder, Literal(1, datatype=XSD.positiveInteger)) in triples
        assert (FUNCTION_IRI, STRUCTURE.hasClause, subject) in triples

        head = _single(triples, subject, STRUCTURE.hasHead)
        assert isinstance(head, BNode)
        assert (head, RDF.type, STRUCTURE.FunctionHead) in triples

        parameter = URIRef(f"{subject}/param/0")
        assert (parameter, RDF.type, STRUCTURE.Parameter) in triples
        assert (parameter, STRUCTURE.parameterPosition, Literal(1, datatype=XSD.positiveInteger)) in triples
        assert (parameter, STRUCTURE.parameterName, Literal("name", datatype=XSD.string)) in triples

        parameter_list = _single(triples, head, STRUCTURE.hasParameters)
        assert (parameter_list, RDF.first, parameter) in triples
        assert (parameter_list, RDF.rest, RDF.nil) in triples

        body = _single(triples, subject, STRUCTURE.hasBody)
        assert (body, RDF.type, STRUCTURE.FunctionBody) in triples
        assert _objects(triples, body, CORE.hasExpression) == []

    def test_zero_parameters_use_nil(self, module_context):
        """Should point hasParameters at rdf:nil."""
        record = Clause(name="hello", arity=0, order=1)
        subject, triples = clause.build(record, FUNCTION_IRI, module_context)
        head = _single(triples, subject, STRUCTURE.hasHead)
        assert (head, STRUCTURE.hasParameters, RDF.nil) in triples

    def test_second_clause(self, module_context):
        """Should map 1-based order to a 0-based IRI index."""
        subject, _ = clause.build(Clause(name="greet", arity=1, order=2), FUNCTION_IRI, module_context)
        assert subject == URIRef(f"{FUNCTION_IRI}/clause/1")

    def test_light_mode_guard_placeholder(self, module_context):
        """Should emit a GuardClause node without expressions."""
        record = Clause(
            name="greet", arity=1, order=1, parameters=[var("n")], guard=call("is_binary", var("n"))
        )
        subject, triples = clause.build(record, FUNCTION_IRI, module_context)
        head = _single(triples, subject, STRUCTURE.hasHead)
        guard = _single(triples, head, CORE.hasGuard)
        assert (guard, RDF.type, CORE.GuardClause) in triples

    def test_full_mode_expressions(self, full_context):
        """Should link guard and body expressions under the clause IRI."""
        record = Clause(
            name="greet",
            arity=1,
            order=1,
            parameters=[var("n")],
            guard=call("is_binary", var("n")),
            body=call("<>", "Hello ", var("n")),
        )
        subject, triples = clause.build(record, FUNCTION_IRI, full_context)

        head = _single(triples, subject, STRUCTURE.hasHead)
        assert (head, CORE.hasGuard, URIRef(f"{subject}/expr/guard")) in triples
        body = _single(triples, subject, STRUCTURE.hasBody)
        body_expression = URIRef(f"{subject}/expr/body")
        assert (body, CORE.hasExpression, body_expression) in triples
        assert (body_expression, RDF.type, CORE.StringConcatOperator) in triples

    def test_unknown_parameter_is_skipped(self, module_context, caplog):
        """Should log and skip parameters that cannot be classified."""
        caplog.set_level(logging.WARNING)
        record = Clause(name="bad", arity=2, order=1, parameters=[{"a": 1}, var("b")])
        subject, triples = clause.build(record, FUNCTION_IRI, module_context)
        assert "Failed to extract parameter" in caplog.text
        assert (URIRef(f"{subject}/param/1"), RDF.type, STRUCTURE.Parameter) in triples
        assert not any(s == URIRef(f"{subject}/param/0") for s, _, _ in triples)


class TestBuildAll:
    """Tests for clause.build_all."""

    def test_order(self, module_context):
        """Should keep clauses in order."""
        records = [Clause(name="f", arity=0, order=1), Clause(name="f", arity=0, order=2)]
        iris, _ = clause.build_all(records, FUNCTION_IRI, module_context)
        assert iris == [URIRef(f"{FUNCTION_IRI}/clause/0"), URIRef(f"{FUNCTION_IRI}/clause/1")]
