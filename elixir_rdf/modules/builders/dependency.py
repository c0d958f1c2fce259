"""
Dependency builder - alias, import, require and use directives.

Each directive is numbered within its module: ``<module_iri>/alias/<i>``,
``/import/<i>``, ``/require/<i>`` and ``/use/<i>``; use options live under
``<use_iri>/option/<j>``.

Usage:
    result = build_import_dependency(directive, module_iri, context, 0)
    batch = build_use_dependencies(directives, module_iri, context)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from rdflib import URIRef
from rdflib.namespace import XSD

from elixir_rdf.adapters.ast.models import AliasDirective, ImportDirective, RequireDirective, UseDirective
from elixir_rdf.adapters.ast.quoted import Atom
from elixir_rdf.common import iri
from elixir_rdf.common.namespaces import STRUCTURE
from elixir_rdf.common.types import BuildAllResult, BuildResult, Triple

from .context import Context
from .helpers import datatype_property, deduplicate_triples, object_property, type_triple

logger = logging.getLogger(__name__)

__all__ = [
    "alias_name",
    "option_value_type",
    "build_alias_dependency",
    "build_import_dependency",
    "build_require_dependency",
    "build_use_dependency",
    "build_alias_dependencies",
    "build_import_dependencies",
    "build_require_dependencies",
    "build_use_dependencies",
]

D = TypeVar("D")

# ``import Mod, only: :functions`` and friends
_IMPORT_CATEGORIES = {"functions", "macros", "sigils"}


# =============================================================================
# Alias
# =============================================================================


def alias_name(directive: AliasDirective) -> str:
    """The ``as:`` name, defaulting to the last segment of the aliased module."""
    if directive.as_name:
        return str(directive.as_name)
    return str(directive.source[-1])


def build_alias_dependency(
    directive: AliasDirective, module_iri: URIRef, context: Context, index: int
) -> BuildResult:
    """
    Build one ``alias`` directive.

    Args:
        directive: Extracted alias record
        module_iri: IRI of the module containing the directive
        context: Build context
        index: Position among the module's aliases

    Returns:
        BuildResult with the alias IRI and its four triples
    """
    subject = iri.for_alias(module_iri, index)
    triples = [
        type_triple(subject, STRUCTURE.ModuleAlias),
        datatype_property(subject, STRUCTURE.aliasName, alias_name(directive), XSD.string),
        object_property(subject, STRUCTURE.aliasedModule, iri.for_module(context.base_iri, directive.source)),
        object_property(module_iri, STRUCTURE.hasAlias, subject),
    ]
    return BuildResult(subject, triples)


# =============================================================================
# Import
# =============================================================================


def _function_edges(
    subject: URIRef, predicate: URIRef, module: Any, pairs: Sequence[tuple[str, int]], context: Context
) -> list[Triple]:
    return [
        object_property(subject, predicate, iri.for_function(context.base_iri, module, name, arity))
        for name, arity in pairs
    ]


def build_import_dependency(
    directive: ImportDirective, module_iri: URIRef, context: Context, index: int
) -> BuildResult:
    """
    Build one ``import`` directive.

    An import without ``only:`` or ``except:`` is a full import. Explicit
    ``only:``/``except:`` pairs link to the imported or excluded functions;
    a bulk ``only:`` category (``:functions``, ``:macros``, ``:sigils``) is
    recorded as an ``importType`` literal.
    """
    subject = iri.for_import(module_iri, index)
    full_import = directive.only is None and directive.except_ is None

    triples: list[Triple] = [
        type_triple(subject, STRUCTURE.Import),
        object_property(subject, STRUCTURE.importsModule, iri.for_module(context.base_iri, directive.module)),
        datatype_property(subject, STRUCTURE.isFullImport, full_import, XSD.boolean),
        object_property(module_iri, STRUCTURE.hasImport, subject),
    ]

    only = directive.only
    if isinstance(only, str):
        category = only.name if isinstance(only, Atom) else only
        if category in _IMPORT_CATEGORIES:
            triples.append(datatype_property(subject, STRUCTURE.importType, category, XSD.string))
        else:
            logger.warning("Unknown import category %r for %s", only, iri.module_name(directive.module))
    elif only:
        triples.extend(_function_edges(subject, STRUCTURE.importsFunction, directive.module, only, context))

    if directive.except_:
        triples.extend(
            _function_edges(subject, STRUCTURE.excludesFunction, directive.module, directive.except_, context)
        )

    return BuildResult(subject, deduplicate_triples(triples))


# =============================================================================
# Require
# =============================================================================


def build_require_dependency(
    directive: RequireDirective, module_iri: URIRef, context: Context, index: int
) -> BuildResult:
    subject = iri.for_require(module_iri, index)
    triples = [
        type_triple(subject, STRUCTURE.Require),
        object_property(subject, STRUCTURE.requireModule, iri.for_module(context.base_iri, directive.module)),
        object_property(module_iri, STRUCTURE.hasRequire, subject),
    ]
    if directive.as_name:
        triples.append(datatype_property(subject, STRUCTURE.requireAlias, str(directive.as_name), XSD.string))
    return BuildResult(subject, triples)


# =============================================================================
# Use
# =============================================================================


def option_value_type(value: Any) -> str:
    """Name of the Elixir type of a literal ``use`` option value."""
    # bool before int, Atom before str
    if isinstance(value, bool):
        return "boolean"
    if value is None or isinstance(value, Atom):
        return "atom"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "list"
    return "other"


def _option_value(value: Any) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    return repr(value)


def _option_triples(use_iri: URIRef, position: int, key: Any, value: Any) -> list[Triple]:
    subject = iri.for_use_option(use_iri, position)
    return [
        object_property(use_iri, STRUCTURE.hasUseOption, subject),
        type_triple(subject, STRUCTURE.UseOption),
        datatype_property(subject, STRUCTURE.optionKey, str(key), XSD.string),
        datatype_property(subject, STRUCTURE.optionValue, _option_value(value), XSD.string),
        datatype_property(subject, STRUCTURE.optionValueType, option_value_type(value), XSD.string),
        datatype_property(subject, STRUCTURE.isDynamicOption, False, XSD.boolean),
    ]


def build_use_dependency(directive: UseDirective, module_iri: URIRef, context: Context, index: int) -> BuildResult:
    """
    Build one ``use`` directive and its keyword options.

    Every option becomes a UseOption node with six triples. Option values
    are taken as literals, so ``isDynamicOption`` is always false.
    """
    subject = iri.for_use(module_iri, index)
    triples: list[Triple] = [
        type_triple(subject, STRUCTURE.Use),
        object_property(subject, STRUCTURE.useModule, iri.for_module(context.base_iri, directive.module)),
        object_property(module_iri, STRUCTURE.hasUse, subject),
    ]
    for position, (key, value) in enumerate(directive.options):
        triples.extend(_option_triples(subject, position, key, value))
    return BuildResult(subject, deduplicate_triples(triples))


# =============================================================================
# Aggregates
# =============================================================================


def _build_dependencies(
    builder: Callable[[D, URIRef, Context, int], BuildResult],
    directives: Sequence[D],
    module_iri: URIRef,
    context: Context,
) -> BuildAllResult:
    results = [builder(directive, module_iri, context, index) for index, directive in enumerate(directives)]
    return BuildAllResult(
        [result.iri for result in results],
        deduplicate_triples(result.triples for result in results),
    )


def build_alias_dependencies(
    directives: Sequence[AliasDirective], module_iri: URIRef, context: Context
) -> BuildAllResult:
    return _build_dependencies(build_alias_dependency, directives, module_iri, context)


def build_import_dependencies(
    directives: Sequence[ImportDirective], module_iri: URIRef, context: Context
) -> BuildAllResult:
    return _build_dependencies(build_import_dependency, directives, module_iri, context)


def build_require_dependencies(
    directives: Sequence[RequireDirective], module_iri: URIRef, context: Context
) -> BuildAllResult:
    return _build_dependencies(build_require_dependency, directives, module_iri, context)


def build_use_dependencies(directives: Sequence[UseDirective], module_iri: URIRef, context: Context) -> BuildAllResult:
    return _build_dependencies(build_use_dependency, directives, module_iri, context)
