"""
Shared pytest fixtures for elixir_rdf tests.

Fixtures are organized by purpose:
- contexts: build contexts in light and full mode
- quoted forms: helpers for writing Elixir ASTs as Python values
"""

from typing import Any

import pytest

from elixir_rdf.adapters.ast.quoted import Atom
from elixir_rdf.modules.builders.context import Context

BASE_IRI = "https://example.org/code#"


# =============================================================================
# Quoted Form Helpers
# =============================================================================


def var(name: str) -> tuple:
    """Quoted variable ``name``."""
    return (Atom(name), [], None)


def call(name: str, *args: Any) -> tuple:
    """Quoted local call or operator ``name(args...)``."""
    return (Atom(name), [], list(args))


def remote(module: str, function: str, *args: Any) -> tuple:
    """Quoted remote call ``Module.function(args...)``."""
    aliases = (Atom("__aliases__"), [], [Atom(part) for part in module.split(".")])
    return ((Atom("."), [], [aliases, Atom(function)]), [], list(args))


# =============================================================================
# Context Fixtures
# =============================================================================


@pytest.fixture
def base_iri():
    """Base IRI used across builder tests."""
    return BASE_IRI


@pytest.fixture
def context():
    """Light-mode context without module or file."""
    return Context.new(BASE_IRI)


@pytest.fixture
def module_context():
    """Light-mode context inside MyApp with a project file."""
    return Context.new(BASE_IRI, file_path="lib/my_app.ex", metadata={"module": ["MyApp"]})


@pytest.fixture
def full_context():
    """Full-mode context for a project file inside MyApp."""
    return Context.new(
        BASE_IRI,
        file_path="lib/my_app.ex",
        metadata={"module": ["MyApp"]},
        config={"include_expressions": True},
    )
