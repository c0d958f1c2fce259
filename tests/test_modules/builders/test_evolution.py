"""Tests for modules.builders.evolution module."""

from __future__ import annotations

from datetime import datetime, timezone

from rdflib import Literal, URIRef
from rdflib.namespace import PROV, RDF, XSD

from elixir_rdf.adapters.ast.models import Activity, ActivityType
from elixir_rdf.common.namespaces import EVOLUTION
from elixir_rdf.modules.builders import evolution


class TestActivityClass:
    """Tests for activity_type_to_class."""

    def test_specific_classes(self):
        """Should map change kinds to evolution classes."""
        assert evolution.activity_type_to_class(ActivityType.FEATURE) == EVOLUTION.FeatureAddition
        assert evolution.activity_type_to_class(ActivityType.BUGFIX) == EVOLUTION.BugFix
        assert evolution.activity_type_to_class("refactor") == EVOLUTION.Refactoring

    def test_fallback(self):
        """Should use DevelopmentActivity for other kinds."""
        assert evolution.activity_type_to_class(ActivityType.DOCS) == EVOLUTION.DevelopmentActivity
        assert evolution.activity_type_to_class(ActivityType.UNKNOWN) == EVOLUTION.DevelopmentActivity


class TestIRIs:
    """Tests for activity, entity and agent IRIs."""

    def test_prefixes_are_stripped(self, base_iri):
        """Should drop the id prefixes."""
        assert evolution.activity_iri(base_iri, "activity:abc") == URIRef(f"{base_iri}activity/abc")
        assert evolution.agent_iri(base_iri, "agent:dev-1") == URIRef(f"{base_iri}agent/dev-1")

    def test_entity_is_percent_encoded(self, base_iri):
        """Should keep reserved characters and encode the rest."""
        assert evolution.entity_iri(base_iri, "entity:lib/my file.ex@v2") == URIRef(
            f"{base_iri}entity/lib/my%20file.ex@v2"
        )


class TestBuild:
    """Tests for evolution.build."""

    def test_full_activity(self, context, base_iri):
        """Should emit PROV-O links for every input."""
        started = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        record = Activity(
            activity_id="activity:abc",
            activity_type=ActivityType.BUGFIX,
            started_at=started,
            used_entities=["entity:lib/a.ex@v1"],
            generated_entities=["entity:lib/a.ex@v2"],
            informed_by=["activity:prev"],
            associated_agents=["agent:dev-1"],
        )
        subject, triples = evolution.build(record, context)

        assert subject == URIRef(f"{base_iri}activity/abc")
        assert triples == [
            (subject, RDF.type, PROV.Activity),
            (subject, RDF.type, EVOLUTION.BugFix),
            (subject, PROV.startedAtTime, Literal(started, datatype=XSD.dateTime)),
            (subject, PROV.used, URIRef(f"{base_iri}entity/lib/a.ex@v1")),
            (URIRef(f"{base_iri}entity/lib/a.ex@v2"), PROV.wasGeneratedBy, subject),
            (subject, PROV.wasInformedBy, URIRef(f"{base_iri}activity/prev")),
            (subject, PROV.wasAssociatedWith, URIRef(f"{base_iri}agent/dev-1")),
        ]

    def test_minimal_activity(self, context):
        """Should emit only the two type triples."""
        _, triples = evolution.build(Activity(activity_id="activity:x"), context)
        assert len(triples) == 2


class TestBuildAll:
    """Tests for build_all and build_all_triples."""

    def test_results_per_activity(self, context):
        """Should keep one result per activity."""
        records = [Activity(activity_id="activity:a"), Activity(activity_id="activity:b")]
        results = evolution.build_all(records, context)
        assert [result.iri for result in results] == [
            URIRef(f"{context.base_iri}activity/a"),
            URIRef(f"{context.base_iri}activity/b"),
        ]
        assert len(evolution.build_all_triples(records, context)) == 4

    def test_git_info_disabled(self, context):
        """Should build nothing when git info is turned off."""
        records = [Activity(activity_id="activity:a")]
        disabled = context.with_config({"include_git_info": False})
        assert evolution.build_all(records, disabled) == []
        assert evolution.build_all_triples(records, disabled) == []
        assert len(evolution.build_all(records, context.with_config({"include_git_info": True}))) == 1
