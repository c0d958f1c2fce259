"""Tests for modules.builders.closure module."""

from __future__ import annotations

from rdflib import Literal, URIRef
from rdflib.namespace import RDF, XSD

from conftest import call, var

from elixir_rdf.adapters.ast.models import AnonymousClause, AnonymousFunction
from elixir_rdf.common.namespaces import CORE
from elixir_rdf.modules.builders import closure

ANON = URIRef("https://example.org/code#MyApp/anon/0")


def _fn(*clauses: AnonymousClause) -> AnonymousFunction:
    return AnonymousFunction(clauses=list(clauses))


class TestFreeVariables:
    """Tests for free_variables."""

    def test_parameters_are_bound(self):
        """Should not report the fn's own parameters."""
        anonymous = _fn(AnonymousClause(parameters=[var("x")], body=call("+", var("x"), 1)))
        assert closure.free_variables(anonymous) == []
        assert not closure.is_closure(anonymous)

    def test_outer_variable_is_free(self):
        """Should report variables read from the enclosing scope."""
        anonymous = _fn(AnonymousClause(parameters=[var("y")], body=call("+", var("x"), var("y"))))
        assert closure.free_variables(anonymous) == ["x"]
        assert closure.is_closure(anonymous)

    def test_sorted_across_clauses(self):
        """Should merge and sort names from every clause."""
        anonymous = _fn(
            AnonymousClause(parameters=[0], body=var("zero")),
            AnonymousClause(parameters=[var("n")], body=call("*", var("n"), var("factor"))),
        )
        assert closure.free_variables(anonymous) == ["factor", "zero"]

    def test_guard_references(self):
        """Should count variables read in a guard."""
        anonymous = _fn(
            AnonymousClause(parameters=[var("n")], guard=call(">", var("n"), var("limit")), body=var("n"))
        )
        assert closure.free_variables(anonymous) == ["limit"]

    def test_extra_bound_variables(self):
        """Should honor bindings reported by extraction."""
        anonymous = _fn(AnonymousClause(body=var("acc"), bound_variables=["acc"]))
        assert closure.free_variables(anonymous) == []

    def test_ignored_names(self):
        """Should skip underscore-prefixed names."""
        assert closure.free_variables(_fn(AnonymousClause(body=var("_state")))) == []


class TestBuildClosureTriples:
    """Tests for build_closure_triples."""

    def test_three_triples_per_variable(self):
        """Should emit link, type and name for each captured variable."""
        anonymous = _fn(AnonymousClause(body=var("x")))
        captured = URIRef(f"{ANON}/capture/x")
        assert closure.build_closure_triples(anonymous, ANON) == [
            (ANON, CORE.capturesVariable, captured),
            (captured, RDF.type, CORE.Variable),
            (captured, CORE.name, Literal("x", datatype=XSD.string)),
        ]

    def test_not_a_closure(self):
        """Should emit nothing."""
        anonymous = _fn(AnonymousClause(parameters=[var("x")], body=var("x")))
        assert closure.build_closure_triples(anonymous, ANON) == []
