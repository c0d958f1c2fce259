"""
Attribute builder - module attributes to RDF.

IRI pattern: ``<base><Module>/attribute/<name>`` with ``/<index>`` appended
when an index is given (see ``build_all``).

Every attribute records its name, serialized value and whether it
accumulates. Documentation, deprecation, ``@since`` and
``@external_resource`` attributes add kind-specific literals.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from rdflib import URIRef
from rdflib.namespace import XSD

from elixir_rdf.adapters.ast.models import Attribute, AttributeKind, ModuleRef
from elixir_rdf.adapters.ast.quoted import Atom
from elixir_rdf.common import iri
from elixir_rdf.common.namespaces import CORE, STRUCTURE
from elixir_rdf.common.types import BuildAllResult, BuildResult, Triple

from .context import Context
from .helpers import datatype_property, deduplicate_triples, line_range_triples, type_triple

logger = logging.getLogger(__name__)

__all__ = ["attribute_class", "attribute_iri", "serialize_value", "build", "build_all"]

_UNKNOWN_MODULE = "Unknown"

_CLASSES: dict[AttributeKind, URIRef] = {
    AttributeKind.DOC: STRUCTURE.FunctionDocAttribute,
    AttributeKind.MODULEDOC: STRUCTURE.ModuledocAttribute,
    AttributeKind.TYPEDOC: STRUCTURE.TypedocAttribute,
    AttributeKind.DEPRECATED: STRUCTURE.DeprecatedAttribute,
    AttributeKind.SINCE: STRUCTURE.SinceAttribute,
    AttributeKind.EXTERNAL_RESOURCE: STRUCTURE.ExternalResourceAttribute,
    AttributeKind.COMPILE: STRUCTURE.CompileAttribute,
    AttributeKind.ON_DEFINITION: STRUCTURE.OnDefinitionAttribute,
    AttributeKind.BEFORE_COMPILE: STRUCTURE.BeforeCompileAttribute,
    AttributeKind.AFTER_COMPILE: STRUCTURE.AfterCompileAttribute,
    AttributeKind.DERIVE: STRUCTURE.DeriveAttribute,
    AttributeKind.BEHAVIOUR: STRUCTURE.BehaviourDeclaration,
    AttributeKind.ATTRIBUTE: STRUCTURE.ModuleAttribute,
}

_DOC_KINDS = {AttributeKind.DOC, AttributeKind.MODULEDOC, AttributeKind.TYPEDOC}


def attribute_class(kind: AttributeKind) -> URIRef:
    return _CLASSES[AttributeKind(kind)]


def attribute_iri(base_iri: str, module: ModuleRef, name: str, index: int | None = None) -> URIRef:
    """IRI of an attribute; ``index`` distinguishes repeated declarations."""
    local = f"{iri.for_module(base_iri, module)}/attribute/{iri.escape_name(name)}"
    return URIRef(local if index is None else f"{local}/{index}")


def serialize_value(value: Any) -> str:
    """
    Render an attribute value as a string literal.

    ``nil`` becomes ``"nil"``, booleans ``"true"``/``"false"``, lists and
    maps JSON; values JSON cannot encode fall back to ``repr``.
    """
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Atom):
        return value.name
    if isinstance(value, (str, int, float)):
        return str(value)
    if isinstance(value, (list, dict)):
        try:
            return json.dumps(value)
        except (TypeError, ValueError):
            return repr(value)
    return repr(value)


def _module(module: ModuleRef | None, context: Context) -> ModuleRef:
    if module:
        return module
    return context.module_name() or _UNKNOWN_MODULE


# =============================================================================
# Kind-specific Triples
# =============================================================================


def _doc_triples(subject: URIRef, attribute: Attribute) -> list[Triple]:
    triples = []
    if isinstance(attribute.value, str) and not isinstance(attribute.value, Atom) and attribute.value:
        triples.append(datatype_property(subject, STRUCTURE.docstring, attribute.value, XSD.string))
    if attribute.hidden:
        triples.append(datatype_property(subject, STRUCTURE.isDocFalse, True, XSD.boolean))
    return triples


def _kind_triples(subject: URIRef, attribute: Attribute, kind: AttributeKind) -> list[Triple]:
    if kind in _DOC_KINDS:
        return _doc_triples(subject, attribute)
    if kind == AttributeKind.DEPRECATED and attribute.message:
        return [datatype_property(subject, STRUCTURE.deprecationMessage, attribute.message, XSD.string)]
    if kind == AttributeKind.SINCE and attribute.version:
        return [datatype_property(subject, STRUCTURE.sinceVersion, attribute.version, XSD.string)]
    if kind == AttributeKind.EXTERNAL_RESOURCE and attribute.path:
        return [datatype_property(subject, STRUCTURE.attributeValue, attribute.path, XSD.string)]
    return []


# =============================================================================
# Building
# =============================================================================


def build(
    attribute: Attribute,
    context: Context,
    *,
    module: ModuleRef | None = None,
    index: int | None = None,
) -> BuildResult:
    """
    Build one module attribute.

    Args:
        attribute: Extracted attribute record
        context: Build context
        module: Owning module; defaults to the context module, then ``Unknown``
        index: Position among repeated declarations of the same attribute

    Returns:
        BuildResult with the attribute IRI and its triples
    """
    kind = AttributeKind(attribute.kind)
    subject = attribute_iri(context.base_iri, _module(module, context), attribute.name, index)

    triples: list[Triple] = [
        type_triple(subject, attribute_class(kind)),
        datatype_property(subject, STRUCTURE.attributeName, attribute.name, XSD.string),
        datatype_property(subject, STRUCTURE.attributeValue, serialize_value(attribute.value), XSD.string),
        datatype_property(subject, STRUCTURE.isAccumulating, bool(attribute.accumulated), XSD.boolean),
    ]
    triples.extend(_kind_triples(subject, attribute, kind))
    triples.extend(line_range_triples(subject, CORE.hasSourceLocation, attribute.location))

    return BuildResult(subject, deduplicate_triples(triples))


def build_all(
    attributes: Sequence[Attribute], context: Context, *, module: ModuleRef | None = None
) -> BuildAllResult:
    """Build all attributes of a module, indexed by input position so repeated names stay distinct."""
    results = [
        build(attribute, context, module=module, index=position)
        for position, attribute in enumerate(attributes)
    ]
    logger.debug("Built %d attributes", len(results))
    return BuildAllResult(
        [result.iri for result in results],
        deduplicate_triples(result.triples for result in results),
    )
