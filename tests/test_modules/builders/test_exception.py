"""Tests for modules.builders.exception module."""

from __future__ import annotations

from rdflib import Literal, URIRef
from rdflib.namespace import RDF, XSD

from elixir_rdf.adapters.ast.models import (
    ExitExpression,
    RaiseExpression,
    SourceLocation,
    ThrowExpression,
    TryExpression,
)
from elixir_rdf.common.namespaces import CORE
from elixir_rdf.modules.builders import exception

TRUE = Literal(True, datatype=XSD.boolean)


class TestBuildTry:
    """Tests for build_try."""

    def test_sections_present(self, context, base_iri):
        """Should mark rescue and after sections."""
        record = TryExpression(has_rescue=True, has_after=True, location=SourceLocation(start_line=10))
        subject, triples = exception.build_try(record, context, containing_function="MyApp/run/0", index=1)

        assert subject == URIRef(f"{base_iri}try/MyApp/run/0/1")
        assert triples == [
            (subject, RDF.type, CORE.TryExpression),
            (subject, CORE.hasRescueClause, TRUE),
            (subject, CORE.hasAfterClause, TRUE),
            (subject, CORE.startLine, Literal(10, datatype=XSD.positiveInteger)),
        ]

    def test_sections_absent(self, context):
        """Should emit only the type."""
        subject, triples = exception.build_try(TryExpression(), context)
        assert triples == [(subject, RDF.type, CORE.TryExpression)]


class TestRaiseThrowExit:
    """Tests for raise, throw and exit builders."""

    def test_raise(self, context, base_iri):
        """Should type raise expressions."""
        subject, triples = exception.build_raise(RaiseExpression(message="boom"), context)
        assert subject == URIRef(f"{base_iri}raise/unknown/0/0")
        assert triples == [(subject, RDF.type, CORE.RaiseExpression)]

    def test_throw(self, context, base_iri):
        """Should type throw expressions."""
        subject, triples = exception.build_throw(ThrowExpression(value=1), context, index=2)
        assert subject == URIRef(f"{base_iri}throw/unknown/0/2")
        assert triples == [(subject, RDF.type, CORE.ThrowExpression)]

    def test_exit(self, context):
        """Should type exit expressions with their line."""
        record = ExitExpression(location=SourceLocation(start_line=3))
        subject, triples = exception.build_exit(record, context)
        assert (subject, RDF.type, CORE.ExitExpression) in triples
        assert (subject, CORE.startLine, Literal(3, datatype=XSD.positiveInteger)) in triples
