"""
AST adapter - records extracted from Elixir ASTs and quoted-form helpers.

Modules:
- models.py: dataclass records handed to builders (Function, Clause, ...)
- quoted.py: Atom type, node classification, variable binding analysis
"""

from __future__ import annotations

from .models import SourceLocation
from .quoted import Atom, pattern_variables, variable_references

__all__ = [
    "Atom",
    "SourceLocation",
    "pattern_variables",
    "variable_references",
]
