"""
Shared type definitions for builder modules.

This module provides the triple alias, the result containers returned by
builders and the errors raised for programmer mistakes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, NamedTuple, TypeAlias

from rdflib import BNode, Literal, URIRef

if TYPE_CHECKING:
    from elixir_rdf.modules.builders.context import Context

__all__ = [
    "Subject",
    "Object",
    "Triple",
    "RdfList",
    "BuildResult",
    "BuildAllResult",
    "ExpressionResult",
    "MissingBaseIRIError",
    "NoModuleContextError",
]

# =============================================================================
# Triple Types
# =============================================================================

Subject: TypeAlias = URIRef | BNode
Object: TypeAlias = URIRef | BNode | Literal
Triple: TypeAlias = tuple[Subject, URIRef, Object]


class RdfList(NamedTuple):
    """Head of an RDF list plus the cons-cell triples."""

    head: URIRef | BNode
    triples: list[Triple]


# =============================================================================
# Build Results
# =============================================================================


class BuildResult(NamedTuple):
    """Canonical IRI of a built entity and its triples."""

    iri: URIRef
    triples: list[Triple]


class BuildAllResult(NamedTuple):
    """IRIs of a batch of entities, in input order, and their combined triples."""

    iris: list[URIRef]
    triples: list[Triple]


@dataclass
class ExpressionResult:
    """Result of a (recursive) expression build.

    Three outcomes:
    - success: ``iri``, ``triples`` and the updated ``context`` are set
    - skipped: expression building is disabled for the file
    - failure: the node is not a quoted form; ``errors`` explains why
    """

    success: bool
    iri: URIRef | None = None
    triples: list[Triple] = field(default_factory=list)
    context: Context | None = None
    skipped: bool = False
    errors: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls, iri: URIRef, triples: list[Triple], context: Context) -> ExpressionResult:
        return cls(success=True, iri=iri, triples=triples, context=context)

    @classmethod
    def skip(cls) -> ExpressionResult:
        return cls(success=False, skipped=True)

    @classmethod
    def failure(cls, message: str) -> ExpressionResult:
        return cls(success=False, errors=[message])

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for reporting."""
        return {
            "success": self.success,
            "skipped": self.skipped,
            "iri": str(self.iri) if self.iri is not None else None,
            "triple_count": len(self.triples),
            "errors": self.errors,
        }


# =============================================================================
# Errors
# =============================================================================


class MissingBaseIRIError(ValueError):
    """Raised when a Context is constructed without a base IRI."""


class NoModuleContextError(ValueError):
    """Raised when a builder needs an enclosing module and none can be resolved."""
