"""Tests for modules.builders.dependency module."""

from __future__ import annotations

import logging

import pytest
from rdflib import Literal, URIRef
from rdflib.namespace import RDF, XSD

from elixir_rdf.adapters.ast.models import AliasDirective, ImportDirective, RequireDirective, UseDirective
from elixir_rdf.adapters.ast.quoted import Atom
from elixir_rdf.common.namespaces import STRUCTURE
from elixir_rdf.modules.builders import dependency

MODULE = URIRef("https://example.org/code#MyApp")


class TestAlias:
    """Tests for alias directives."""

    def test_default_alias_name(self, context, base_iri):
        """Should emit four triples using the last segment."""
        subject, triples = dependency.build_alias_dependency(
            AliasDirective(source=["MyApp", "Users"]), MODULE, context, 0
        )
        assert subject == URIRef(f"{MODULE}/alias/0")
        assert triples == [
            (subject, RDF.type, STRUCTURE.ModuleAlias),
            (subject, STRUCTURE.aliasName, Literal("Users", datatype=XSD.string)),
            (subject, STRUCTURE.aliasedModule, URIRef(f"{base_iri}MyApp.Users")),
            (MODULE, STRUCTURE.hasAlias, subject),
        ]

    def test_explicit_as(self):
        """Should prefer the as: name."""
        assert dependency.alias_name(AliasDirective(source=["MyApp", "Users"], as_name="U")) == "U"


class TestImport:
    """Tests for import directives."""

    def test_full_import(self, context):
        """Should mark imports without only/except as full."""
        subject, triples = dependency.build_import_dependency(ImportDirective(module="Enum"), MODULE, context, 0)
        assert (subject, STRUCTURE.isFullImport, Literal(True, datatype=XSD.boolean)) in triples
        assert len(triples) == 4

    def test_only_functions(self, context, base_iri):
        """Should link each imported function."""
        directive = ImportDirective(module="Enum", only=[("map", 2), ("filter", 2)])
        subject, triples = dependency.build_import_dependency(directive, MODULE, context, 1)

        assert subject == URIRef(f"{MODULE}/import/1")
        assert len(triples) == 6
        assert (subject, STRUCTURE.isFullImport, Literal(False, datatype=XSD.boolean)) in triples
        assert (subject, STRUCTURE.importsFunction, URIRef(f"{base_iri}Enum/map/2")) in triples
        assert (subject, STRUCTURE.importsFunction, URIRef(f"{base_iri}Enum/filter/2")) in triples

    @pytest.mark.parametrize("only", ["macros", Atom("sigils")])
    def test_only_category(self, context, only):
        """Should record bulk categories as importType."""
        directive = ImportDirective(module="Kernel", only=only)
        subject, triples = dependency.build_import_dependency(directive, MODULE, context, 0)
        assert (subject, STRUCTURE.importType, Literal(str(only), datatype=XSD.string)) in triples

    def test_unknown_category(self, context, caplog):
        """Should warn and skip unknown categories."""
        caplog.set_level(logging.WARNING)
        subject, triples = dependency.build_import_dependency(
            ImportDirective(module="Kernel", only="types"), MODULE, context, 0
        )
        assert "Unknown import category" in caplog.text
        assert not any(p == STRUCTURE.importType for _, p, _ in triples)

    def test_except(self, context, base_iri):
        """Should link excluded functions."""
        directive = ImportDirective(module="List", except_=[("first", 1)])
        subject, triples = dependency.build_import_dependency(directive, MODULE, context, 0)
        assert (subject, STRUCTURE.isFullImport, Literal(False, datatype=XSD.boolean)) in triples
        assert (subject, STRUCTURE.excludesFunction, URIRef(f"{base_iri}List/first/1")) in triples


class TestRequire:
    """Tests for require directives."""

    def test_require(self, context, base_iri):
        """Should emit three triples plus an optional alias."""
        subject, triples = dependency.build_require_dependency(RequireDirective(module="Logger"), MODULE, context, 0)
        assert triples == [
            (subject, RDF.type, STRUCTURE.Require),
            (subject, STRUCTURE.requireModule, URIRef(f"{base_iri}Logger")),
            (MODULE, STRUCTURE.hasRequire, subject),
        ]

        directive = RequireDirective(module="Logger", as_name="L")
        subject, triples = dependency.build_require_dependency(directive, MODULE, context, 1)
        assert (subject, STRUCTURE.requireAlias, Literal("L", datatype=XSD.string)) in triples


class TestUse:
    """Tests for use directives."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (True, "boolean"),
            (Atom("temporary"), "atom"),
            (None, "atom"),
            (3, "integer"),
            (1.5, "float"),
            ("text", "string"),
            ([1], "list"),
            ({"a": 1}, "other"),
        ],
    )
    def test_option_value_type(self, value, expected):
        """Should name the Elixir type of the value."""
        assert dependency.option_value_type(value) == expected

    def test_use_with_option(self, context, base_iri):
        """Should emit nine triples for use GenServer, restart: :temporary."""
        directive = UseDirective(module="GenServer", options=[(Atom("restart"), Atom("temporary"))])
        subject, triples = dependency.build_use_dependency(directive, MODULE, context, 0)

        option = URIRef(f"{subject}/option/0")
        assert subject == URIRef(f"{MODULE}/use/0")
        assert triples == [
            (subject, RDF.type, STRUCTURE.Use),
            (subject, STRUCTURE.useModule, URIRef(f"{base_iri}GenServer")),
            (MODULE, STRUCTURE.hasUse, subject),
            (subject, STRUCTURE.hasUseOption, option),
            (option, RDF.type, STRUCTURE.UseOption),
            (option, STRUCTURE.optionKey, Literal("restart", datatype=XSD.string)),
            (option, STRUCTURE.optionValue, Literal("temporary", datatype=XSD.string)),
            (option, STRUCTURE.optionValueType, Literal("atom", datatype=XSD.string)),
            (option, STRUCTURE.isDynamicOption, Literal(False, datatype=XSD.boolean)),
        ]


class TestAggregates:
    """Tests for the build_*_dependencies aggregates."""

    def test_alias_indexes(self, context):
        """Should number directives within the module."""
        directives = [AliasDirective(source=["A"]), AliasDirective(source=["B"])]
        iris, triples = dependency.build_alias_dependencies(directives, MODULE, context)
        assert iris == [URIRef(f"{MODULE}/alias/0"), URIRef(f"{MODULE}/alias/1")]
        assert len(triples) == 8

    def test_other_aggregates(self, context):
        """Should build every directive kind."""
        assert len(dependency.build_import_dependencies([ImportDirective(module="A")], MODULE, context).iris) == 1
        assert len(dependency.build_require_dependencies([RequireDirective(module="A")], MODULE, context).iris) == 1
        assert len(dependency.build_use_dependencies([UseDirective(module="A")], MODULE, context).triples) == 3
