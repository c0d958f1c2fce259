"""
Immutable build context threaded through every builder call.

A Context carries the naming coordinates (base IRI, file path, parent module,
enclosing module) and feature flags. Every ``with_*`` method returns a new
Context and leaves the original untouched, so one context can be shared by
independent builds without locking.

Usage:
    ctx = Context.new("https://example.org/code#", file_path="lib/my_app.ex")
    ctx = ctx.with_module(["MyApp", "Users"]).with_config({"include_expressions": True})
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from rdflib import URIRef

from elixir_rdf.common import iri
from elixir_rdf.common.types import MissingBaseIRIError

logger = logging.getLogger(__name__)

__all__ = ["Context", "DEFAULT_DEPENDENCY_ROOTS"]

DEFAULT_DEPENDENCY_ROOTS: tuple[str, ...] = ("deps",)

_MODULE_KEY = "module"


def _freeze(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


def _segments(module: str | Sequence[str] | None) -> tuple[str, ...] | None:
    if module is None:
        return None
    if isinstance(module, str):
        parts = tuple(part for part in module.split(".") if part)
    else:
        parts = tuple(str(part) for part in module)
    return parts or None


@dataclass(frozen=True)
class Context:
    """Naming and configuration state for one build."""

    base_iri: str
    file_path: str | None = None
    parent_module: URIRef | None = None
    enclosing_module: tuple[str, ...] | None = None
    metadata: Mapping[str, Any] = field(default_factory=lambda: _freeze(None))
    config: Mapping[str, Any] = field(default_factory=lambda: _freeze(None))
    expression_counter: int | None = None
    known_modules: frozenset[str] | None = None
    dependency_roots: tuple[str, ...] = DEFAULT_DEPENDENCY_ROOTS

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def new(
        cls,
        base_iri: str | URIRef | None,
        *,
        file_path: str | None = None,
        parent_module: URIRef | None = None,
        metadata: Mapping[str, Any] | None = None,
        config: Mapping[str, Any] | None = None,
        expression_counter: int | None = None,
        known_modules: Iterable[str] | None = None,
        dependency_roots: Iterable[str] = DEFAULT_DEPENDENCY_ROOTS,
    ) -> Context:
        """
        Create a context.

        Args:
            base_iri: Namespace every entity IRI starts with (required)
            file_path: Source file the records come from
            parent_module: IRI of the enclosing module, if already built
            metadata: Free-form metadata; a ``module`` key sets the enclosing module
            config: Feature flags such as ``include_expressions``
            expression_counter: Starting value for expression IRIs
            known_modules: Dotted names of modules in the analyzed project
            dependency_roots: Top-level directories holding third-party code

        Raises:
            MissingBaseIRIError: If ``base_iri`` is missing or empty
        """
        if base_iri is None or str(base_iri) == "":
            raise MissingBaseIRIError("Context requires a non-empty base_iri")

        meta = dict(metadata or {})
        enclosing = _segments(meta.pop(_MODULE_KEY, None))
        return cls(
            base_iri=str(base_iri),
            file_path=file_path,
            parent_module=parent_module,
            enclosing_module=enclosing,
            metadata=_freeze(meta),
            config=_freeze(config),
            expression_counter=expression_counter,
            known_modules=frozenset(known_modules) if known_modules is not None else None,
            dependency_roots=tuple(dependency_roots),
        )

    # =========================================================================
    # Derived Copies
    # =========================================================================

    def with_parent_module(self, module_iri: URIRef | None) -> Context:
        return replace(self, parent_module=module_iri)

    def with_module(self, module: str | Sequence[str] | None) -> Context:
        """Set the enclosing module from a dotted name or segment list."""
        return replace(self, enclosing_module=_segments(module))

    def with_metadata(self, metadata: Mapping[str, Any]) -> Context:
        """Shallow-merge metadata; new keys win. A ``module`` key replaces the enclosing module."""
        merged = {**self.metadata, **metadata}
        enclosing = self.enclosing_module
        if _MODULE_KEY in merged:
            enclosing = _segments(merged.pop(_MODULE_KEY))
        return replace(self, metadata=_freeze(merged), enclosing_module=enclosing)

    def with_config(self, config: Mapping[str, Any]) -> Context:
        return replace(self, config=_freeze({**self.config, **config}))

    def with_file_path(self, file_path: str | None) -> Context:
        return replace(self, file_path=file_path)

    def with_expression_counter(self, value: int) -> Context:
        return replace(self, expression_counter=value)

    def next_expression_counter(self) -> tuple[int, Context]:
        """Return the current counter value and a context advanced past it."""
        current = self.expression_counter or 0
        return current, replace(self, expression_counter=current + 1)

    def with_known_modules(self, modules: Iterable[str]) -> Context:
        return replace(self, known_modules=frozenset(modules))

    # =========================================================================
    # Lookups
    # =========================================================================

    def get_config(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def get_metadata(self, key: str, default: Any = None) -> Any:
        if key == _MODULE_KEY:
            return list(self.enclosing_module) if self.enclosing_module else default
        return self.metadata.get(key, default)

    def module_name(self) -> str | None:
        """Dotted name of the enclosing module, falling back to the parent module IRI."""
        if self.enclosing_module:
            return ".".join(self.enclosing_module)
        if self.parent_module is not None:
            try:
                return iri.module_from_iri(self.parent_module)
            except ValueError:
                logger.debug("Parent module IRI has no module name: %s", self.parent_module)
        return None

    def module_iri(self) -> URIRef | None:
        if self.enclosing_module:
            return iri.for_module(self.base_iri, self.enclosing_module)
        return self.parent_module

    def context_iri(self, fallback: str) -> URIRef:
        """
        IRI that scopes entities without a name of their own.

        Priority: enclosing module, parent module, source file, then
        ``base_iri + fallback``.
        """
        module_iri = self.module_iri()
        if module_iri is not None:
            return module_iri
        if self.file_path:
            return iri.for_source_file(self.base_iri, self.file_path)
        return URIRef(f"{self.base_iri}{fallback}")

    def module_known(self, name: str) -> bool:
        return self.known_modules is not None and name in self.known_modules

    @property
    def cross_module_linking_enabled(self) -> bool:
        return self.known_modules is not None

    # =========================================================================
    # Modes
    # =========================================================================

    @property
    def full_mode(self) -> bool:
        return self.config.get("include_expressions") is True

    @property
    def light_mode(self) -> bool:
        return not self.full_mode

    def full_mode_for_file(self, file_path: str | None) -> bool:
        """Expressions are built only for project files, never for dependencies."""
        if not self.full_mode or file_path is None:
            return False
        return not self._is_dependency_path(file_path)

    def _is_dependency_path(self, file_path: str) -> bool:
        normalized = file_path.replace("\\", "/")
        for root in self.dependency_roots:
            pattern = rf"(^|/){re.escape(root)}/"
            if re.search(pattern, normalized):
                return True
        return False

    # =========================================================================
    # Validation
    # =========================================================================

    @staticmethod
    def validate(context: Any) -> str:
        """
        Re-check a context before building.

        Returns:
            ``"ok"``, ``"missing_base_iri"`` for a Context without base IRI,
            or ``"invalid_context"`` for anything that is not a Context
        """
        if not isinstance(context, Context):
            return "invalid_context"
        if not context.base_iri:
            return "missing_base_iri"
        return "ok"
