"""
Evolution builder - development activities as PROV-O activities.

IRI patterns (``activity:``, ``entity:`` and ``agent:`` prefixes stripped):
- ``<base>activity/<id>``
- ``<base>entity/<id>`` (percent-encoded)
- ``<base>agent/<id>``

Each activity is both a ``prov:Activity`` and an evolution class chosen by
its activity type.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from urllib.parse import quote

from rdflib import URIRef

from elixir_rdf.adapters.ast.models import Activity, ActivityType
from elixir_rdf.common.namespaces import EVOLUTION, PROV
from elixir_rdf.common.types import BuildResult, Triple

from .context import Context
from .helpers import dual_type_triples, finalize_triples, object_property, optional_datetime_property

logger = logging.getLogger(__name__)

__all__ = [
    "activity_type_to_class",
    "activity_iri",
    "entity_iri",
    "agent_iri",
    "build",
    "build_all",
    "build_all_triples",
]

_CLASSES: dict[ActivityType, URIRef] = {
    ActivityType.FEATURE: EVOLUTION.FeatureAddition,
    ActivityType.BUGFIX: EVOLUTION.BugFix,
    ActivityType.REFACTOR: EVOLUTION.Refactoring,
    ActivityType.DEPRECATION: EVOLUTION.Deprecation,
    ActivityType.DELETION: EVOLUTION.Deletion,
}

# Characters URI-reserved in entity ids stay literal
_ENTITY_SAFE = ":/?#[]@!$&'()*+,;="


def activity_type_to_class(activity_type: ActivityType) -> URIRef:
    """Evolution class of an activity type; types without a class are DevelopmentActivity."""
    return _CLASSES.get(ActivityType(activity_type), EVOLUTION.DevelopmentActivity)


def _strip(identifier: str, prefix: str) -> str:
    return identifier[len(prefix):] if identifier.startswith(prefix) else identifier


def activity_iri(base_iri: str, activity_id: str) -> URIRef:
    return URIRef(f"{base_iri}activity/{_strip(activity_id, 'activity:')}")


def entity_iri(base_iri: str, entity_id: str) -> URIRef:
    return URIRef(f"{base_iri}entity/{quote(_strip(entity_id, 'entity:'), safe=_ENTITY_SAFE)}")


def agent_iri(base_iri: str, agent_id: str) -> URIRef:
    return URIRef(f"{base_iri}agent/{_strip(agent_id, 'agent:')}")


def build(activity: Activity, context: Context) -> BuildResult:
    """
    Build one development activity.

    Args:
        activity: Activity record (commit-level change with its inputs and outputs)
        context: Build context

    Returns:
        BuildResult with the activity IRI and its triples
    """
    base = context.base_iri
    subject = activity_iri(base, activity.activity_id)

    triples: list[Triple | list[Triple]] = [
        dual_type_triples(subject, PROV.Activity, activity_type_to_class(activity.activity_type)),
        optional_datetime_property(subject, PROV.startedAtTime, activity.started_at),
        optional_datetime_property(subject, PROV.endedAtTime, activity.ended_at),
        [object_property(subject, PROV.used, entity_iri(base, entity)) for entity in activity.used_entities],
        [
            object_property(entity_iri(base, entity), PROV.wasGeneratedBy, subject)
            for entity in activity.generated_entities
        ],
        [object_property(subject, PROV.wasInformedBy, activity_iri(base, other)) for other in activity.informed_by],
        [
            object_property(subject, PROV.wasAssociatedWith, agent_iri(base, agent))
            for agent in activity.associated_agents
        ],
    ]

    return BuildResult(subject, finalize_triples(triples))


def build_all(activities: Sequence[Activity], context: Context) -> list[BuildResult]:
    """Build each activity separately, in input order; nothing when ``include_git_info`` is off."""
    if not context.get_config("include_git_info", True):
        logger.debug("Git info disabled, skipping %d activities", len(activities))
        return []
    return [build(activity, context) for activity in activities]


def build_all_triples(activities: Sequence[Activity], context: Context) -> list[Triple]:
    """All triples of all activities as one flat list."""
    return [triple for result in build_all(activities, context) for triple in result.triples]
