"""Python representation of Elixir quoted forms.

The extraction layer hands over Elixir ASTs converted to plain Python values:

- atoms are :class:`Atom` instances (``True``/``False``/``None`` stand for
  ``true``/``false``/``nil``)
- integers, floats, strings (binaries) and lists map to their Python types
- ``{a, b}`` two-tuples stay two-tuples
- calls and variables are ``(form, meta, args)`` three-tuples where ``meta``
  is a keyword list (list of pairs) or a dict; variables carry ``None`` or
  an atom context in place of ``args``

The helpers here classify nodes and compute variable references and
bindings, which the closure and clause builders need.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

__all__ = [
    "Atom",
    "is_atom",
    "is_meta",
    "is_quoted",
    "is_variable",
    "is_call",
    "is_remote_call",
    "variable_name",
    "meta_get",
    "alias_name",
    "is_keyword_list",
    "is_ignored_name",
    "is_special_form_name",
    "walk",
    "pattern_variables",
    "variable_references",
]


class Atom(str):
    """An Elixir atom, compared and hashed like its name."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Atom({str.__repr__(self)})"

    @property
    def name(self) -> str:
        return str.__str__(self)


# =============================================================================
# Node Classification
# =============================================================================


def is_atom(node: Any) -> bool:
    """True for atoms, including the ``true``/``false``/``nil`` singletons."""
    return isinstance(node, Atom) or node is None or isinstance(node, bool)


def is_meta(meta: Any) -> bool:
    return isinstance(meta, (list, dict))


def is_variable(node: Any) -> bool:
    """True for ``(name, meta, context)`` variable nodes."""
    return (
        isinstance(node, tuple)
        and len(node) == 3
        and isinstance(node[0], Atom)
        and is_meta(node[1])
        and (node[2] is None or isinstance(node[2], Atom))
    )


def is_call(node: Any) -> bool:
    """True for ``(form, meta, args)`` nodes whose args are a list."""
    return isinstance(node, tuple) and len(node) == 3 and is_meta(node[1]) and isinstance(node[2], list)


def is_remote_call(node: Any) -> bool:
    """True for ``Mod.fun(args)`` style calls."""
    if not is_call(node):
        return False
    form = node[0]
    return is_call(form) and isinstance(form[0], Atom) and form[0] == "." and len(form[2]) == 2


def is_quoted(node: Any) -> bool:
    """Check that a value is a well-formed quoted form, at any nesting depth."""
    pending = [node]
    while pending:
        item = pending.pop()
        if is_atom(item) or isinstance(item, (int, float, str)):
            continue
        if isinstance(item, list):
            pending.extend(item)
        elif isinstance(item, tuple) and len(item) == 2:
            pending.extend(item)
        elif is_variable(item):
            continue
        elif is_call(item):
            pending.append(item[0])
            pending.extend(item[2])
        else:
            return False
    return True


def variable_name(node: Any) -> str | None:
    """Return the name of a variable node, None for anything else."""
    if is_variable(node):
        return node[0].name
    return None


def meta_get(meta: Any, key: str, default: Any = None) -> Any:
    """Look up a key in node metadata given as keyword list or dict."""
    if isinstance(meta, dict):
        return meta.get(key, default)
    if isinstance(meta, list):
        for item in meta:
            if isinstance(item, tuple) and len(item) == 2 and item[0] == key:
                return item[1]
    return default


def alias_name(node: Any) -> str | None:
    """Return the dotted module name of an alias node or module atom.

    ``{:__aliases__, _, [:MyApp, :Users]}`` gives ``"MyApp.Users"``, a bare
    atom such as ``:lists`` gives ``"lists"``.
    """
    if isinstance(node, Atom):
        return node.name
    if is_call(node) and isinstance(node[0], Atom) and node[0] == "__aliases__":
        parts = node[2]
        if all(isinstance(part, Atom) for part in parts):
            return ".".join(part.name for part in parts)
    return None


def is_keyword_list(node: Any) -> bool:
    return (
        isinstance(node, list)
        and len(node) > 0
        and all(isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], Atom) for item in node)
    )


def is_ignored_name(name: str) -> bool:
    """Underscore-prefixed names (and ``_`` itself) are never captured."""
    return name.startswith("_")


def is_special_form_name(name: str) -> bool:
    """``__MODULE__``, ``__ENV__`` and friends look like variables but are not."""
    return name.startswith("__") and name.endswith("__") and len(name) > 4


def walk(node: Any) -> Iterator[Any]:
    """Yield every node of a quoted form in pre-order."""
    pending = [node]
    while pending:
        current = pending.pop()
        yield current
        if isinstance(current, list):
            children = current
        elif isinstance(current, tuple) and not is_variable(current):
            if is_call(current):
                children = [current[0], *current[2]]
            elif len(current) == 2:
                children = list(current)
            else:
                continue
        else:
            continue
        pending.extend(reversed(children))


# =============================================================================
# Bindings and References
# =============================================================================


def _form(node: Any) -> str | None:
    if is_call(node) and isinstance(node[0], Atom):
        return node[0].name
    return None


def pattern_variables(pattern: Any) -> list[str]:
    """Names bound by a pattern, in first-occurrence order.

    Pinned variables (``^x``) and module attributes do not bind.
    """
    names: list[str] = []

    def visit(node: Any) -> None:
        if is_variable(node):
            name = node[0].name
            if name not in names and not is_special_form_name(name):
                names.append(name)
            return
        form = _form(node)
        if form in ("^", "@"):
            return
        if form == "when":
            # Only the parameters before the guard bind.
            for arg in node[2][:-1]:
                visit(arg)
            return
        if isinstance(node, list):
            for item in node:
                visit(item)
        elif is_call(node):
            visit(node[0])
            for arg in node[2]:
                visit(arg)
        elif isinstance(node, tuple) and len(node) == 2:
            visit(node[0])
            visit(node[1])

    visit(pattern)
    return names


def _pinned_references(pattern: Any) -> list[str]:
    return [
        variable_name(node[2][0])
        for node in walk(pattern)
        if _form(node) == "^" and node[2] and is_variable(node[2][0])
    ]


def variable_references(body: Any, bound: Iterable[str] = ()) -> list[str]:
    """Names of variables a body reads that it does not bind itself.

    Local bindings (``=`` left sides, ``fn`` parameters, ``case``/``receive``
    clause patterns, ``with``/``for`` generators) shadow names for the code
    they scope over. Underscore-prefixed names, special forms and module
    attributes are never references.
    """
    found: list[str] = []

    def add(name: str, scope: frozenset[str]) -> None:
        if name in scope or is_ignored_name(name) or is_special_form_name(name):
            return
        if name not in found:
            found.append(name)

    def visit_arrow(clause: Any, scope: frozenset[str], patterns_bind: bool) -> None:
        if _form(clause) != "->" or len(clause[2]) != 2:
            visit(clause, scope)
            return
        left, right = clause[2]
        if not patterns_bind:
            visit(left, scope)
            visit(right, scope)
            return
        for name in _pinned_references(left):
            add(name, scope)
        guard = None
        if isinstance(left, list) and len(left) == 1 and _form(left[0]) == "when":
            guard = left[0][2][-1]
        inner = scope | frozenset(pattern_variables(left))
        if guard is not None:
            visit(guard, inner)
        visit(right, inner)

    def visit_clauses(block: Any, scope: frozenset[str], patterns_bind: bool = True) -> None:
        # ``do: [clause, ...]`` keyword blocks or a bare list of clauses.
        if is_keyword_list(block):
            for _key, value in block:
                visit_clauses(value, scope, patterns_bind)
        elif isinstance(block, list):
            for clause in block:
                visit_arrow(clause, scope, patterns_bind)
        else:
            visit(block, scope)

    def visit_sequential(args: list[Any], scope: frozenset[str]) -> frozenset[str]:
        for arg in args:
            if _form(arg) == "<-" and len(arg[2]) == 2:
                pattern, source = arg[2]
                visit(source, scope)
                for name in _pinned_references(pattern):
                    add(name, scope)
                scope = scope | frozenset(pattern_variables(pattern))
            elif _form(arg) == "=" and len(arg[2]) == 2:
                scope = visit_match(arg, scope)
            elif is_keyword_list(arg):
                visit_clauses(arg, scope)
            else:
                visit(arg, scope)
        return scope

    def visit_match(node: Any, scope: frozenset[str]) -> frozenset[str]:
        pattern, source = node[2]
        visit(source, scope)
        for name in _pinned_references(pattern):
            add(name, scope)
        return scope | frozenset(pattern_variables(pattern))

    def visit(node: Any, scope: frozenset[str]) -> None:
        if is_variable(node):
            add(node[0].name, scope)
            return
        if isinstance(node, list):
            for item in node:
                visit(item, scope)
            return
        if isinstance(node, tuple) and len(node) == 2:
            visit(node[0], scope)
            visit(node[1], scope)
            return
        if not is_call(node):
            return

        form = _form(node)
        args = node[2]
        if form == "@":
            return
        if form == "__block__":
            for expr in args:
                if _form(expr) == "=" and len(expr[2]) == 2:
                    scope = visit_match(expr, scope)
                else:
                    visit(expr, scope)
            return
        if form == "=" and len(args) == 2:
            visit_match(node, scope)
            return
        if form == "fn":
            for clause in args:
                visit_arrow(clause, scope, patterns_bind=True)
            return
        if form in ("case", "receive", "try") and args:
            head, rest = (args[0], args[1:]) if form == "case" else (None, args)
            if head is not None:
                visit(head, scope)
            for block in rest:
                visit_clauses(block, scope)
            return
        if form == "cond" and args:
            for block in args:
                visit_clauses(block, scope, patterns_bind=False)
            return
        if form in ("with", "for"):
            visit_sequential(args, scope)
            return

        visit(node[0], scope)
        for arg in args:
            visit(arg, scope)

    visit(body, frozenset(bound))
    return found
