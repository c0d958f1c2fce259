"""Tests for adapters.ast.models module."""

from __future__ import annotations

import dataclasses

import pytest

from conftest import var

from elixir_rdf.adapters.ast.models import (
    AnonymousClause,
    CaseClause,
    FunctionKind,
    SourceLocation,
    Visibility,
)


class TestSourceLocation:
    """Tests for SourceLocation dataclass."""

    def test_end_line_defaults_to_start(self):
        """Should use the start line when no end line is known."""
        location = SourceLocation(start_line=7)
        assert location.line == 7
        assert location.effective_end_line == 7

    def test_explicit_end_line(self):
        """Should prefer the recorded end line."""
        assert SourceLocation(start_line=7, end_line=12).effective_end_line == 12

    def test_is_frozen(self):
        """Should reject mutation."""
        location = SourceLocation(start_line=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            location.start_line = 2  # type: ignore[misc]


class TestClauseRecords:
    """Tests for clause helper properties."""

    def test_anonymous_clause_arity(self):
        """Should count parameters."""
        assert AnonymousClause(parameters=[var("a"), var("b")]).arity == 2
        assert AnonymousClause().arity == 0

    def test_case_clause_guard(self):
        """Should report whether a guard is present."""
        assert CaseClause(pattern=var("x"), guard=var("ok?")).has_guard
        assert not CaseClause(pattern=var("x")).has_guard


class TestEnums:
    """Tests for kind discriminators."""

    def test_enums_compare_to_strings(self):
        """Should accept plain strings from the extraction layer."""
        assert FunctionKind("delegate") is FunctionKind.DELEGATE
        assert Visibility.PRIVATE == "private"
