"""
Expression builder - recursive translation of quoted expressions.

Only active in full mode for project files. Every node of the expression
tree gets its own IRI ``<base>expr/expr_<n>`` where ``n`` comes from the
context's expression counter. The counter is threaded through the recursion
and returned in the result, so callers must continue from
``result.context`` when building sibling expressions.

Return Format:
    ExpressionResult.ok(iri, triples, context)  # built
    ExpressionResult.skip()                     # light mode or dependency file
    ExpressionResult.failure(message)           # not a quoted form
"""

from __future__ import annotations

import base64
import logging
from typing import Any

from rdflib import URIRef
from rdflib.namespace import XSD

from elixir_rdf.adapters.ast.quoted import (
    Atom,
    alias_name,
    is_call,
    is_quoted,
    is_remote_call,
    is_variable,
    variable_name,
)
from elixir_rdf.common.namespaces import CORE
from elixir_rdf.common.types import ExpressionResult, Triple

from .context import Context
from .helpers import datatype_property, deduplicate_triples, object_property, type_triple

logger = logging.getLogger(__name__)

__all__ = ["BINARY_OPERATORS", "UNARY_OPERATORS", "expression_iri", "build"]

BINARY_OPERATORS: dict[str, URIRef] = {
    "==": CORE.ComparisonOperator,
    "!=": CORE.ComparisonOperator,
    "===": CORE.ComparisonOperator,
    "!==": CORE.ComparisonOperator,
    "<": CORE.ComparisonOperator,
    ">": CORE.ComparisonOperator,
    "<=": CORE.ComparisonOperator,
    ">=": CORE.ComparisonOperator,
    "and": CORE.LogicalOperator,
    "or": CORE.LogicalOperator,
    "&&": CORE.LogicalOperator,
    "||": CORE.LogicalOperator,
    "+": CORE.ArithmeticOperator,
    "-": CORE.ArithmeticOperator,
    "*": CORE.ArithmeticOperator,
    "/": CORE.ArithmeticOperator,
    "div": CORE.ArithmeticOperator,
    "rem": CORE.ArithmeticOperator,
    "|>": CORE.PipeOperator,
    "<>": CORE.StringConcatOperator,
    "++": CORE.ListOperator,
    "--": CORE.ListOperator,
    "=": CORE.MatchOperator,
    "in": CORE.InOperator,
}

UNARY_OPERATORS: dict[str, URIRef] = {
    "not": CORE.LogicalOperator,
    "!": CORE.LogicalOperator,
    "+": CORE.ArithmeticOperator,
    "-": CORE.ArithmeticOperator,
}

_MAX_CODEPOINT = 0x10FFFF


def expression_iri(
    base_iri: str, context: Context, suffix: str | None = None, counter: int | None = None
) -> tuple[URIRef, Context]:
    """
    Mint an expression IRI.

    A custom ``suffix`` or explicit ``counter`` leaves the context unchanged;
    otherwise the next counter value is consumed and the advanced context
    returned.
    """
    if suffix is not None:
        return URIRef(f"{base_iri}expr/{suffix}"), context
    if counter is not None:
        return URIRef(f"{base_iri}expr/expr_{counter}"), context
    value, context = context.next_expression_counter()
    return URIRef(f"{base_iri}expr/expr_{value}"), context


def build(
    ast: Any,
    context: Context,
    *,
    suffix: str | None = None,
    counter: int | None = None,
    base_iri: str | None = None,
) -> ExpressionResult:
    """
    Build the triples of an expression tree.

    Args:
        ast: Quoted expression
        context: Build context carrying the expression counter
        suffix: Fixed local name for the root IRI (``expr/<suffix>``)
        counter: Fixed counter value for the root IRI
        base_iri: Prefix for expression IRIs, defaults to the context base IRI

    Returns:
        ExpressionResult; on success ``context`` holds the advanced counter
    """
    if not context.full_mode_for_file(context.file_path):
        return ExpressionResult.skip()
    if not is_quoted(ast):
        logger.debug("Unrecognized expression node: %r", ast)
        return ExpressionResult.failure(f"Unrecognized expression node: {ast!r}")

    prefix = base_iri or context.base_iri
    subject, context = expression_iri(prefix, context, suffix=suffix, counter=counter)
    triples, context = _Walker(prefix).run(ast, subject, context)
    return ExpressionResult.ok(subject, deduplicate_triples(triples), context)


# Child links of a node: (predicate, child node)
_Children = list[tuple[URIRef, Any]]


class _Walker:
    """
    Depth-first node translation sharing one IRI prefix.

    Nodes are visited in pre-order from an explicit stack, so arbitrarily
    deep trees are handled. Each node's triples are followed by the links to
    its children, then by the children's subtrees in order.
    """

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix

    def run(self, ast: Any, subject: URIRef, context: Context) -> tuple[list[Triple], Context]:
        chunks: list[list[Triple]] = []
        pending: list[tuple[Any, URIRef | None, tuple[list[Triple], URIRef, URIRef] | None]] = [(ast, subject, None)]
        while pending:
            node, node_iri, parent = pending.pop()
            if node_iri is None:
                node_iri, context = expression_iri(self.prefix, context)
            if parent is not None:
                parent_triples, parent_iri, predicate = parent
                parent_triples.append(object_property(parent_iri, predicate, node_iri))
            triples, children = self.node(node, node_iri)
            chunks.append(triples)
            for predicate, child in reversed(children):
                pending.append((child, None, (triples, node_iri, predicate)))
        return [triple for chunk in chunks for triple in chunk], context

    def node(self, node: Any, subject: URIRef) -> tuple[list[Triple], _Children]:
        # bool and None before int/str: they are the true/false/nil atoms
        if isinstance(node, bool) or node is None or isinstance(node, Atom):
            return _atom_literal(node, subject), []
        if isinstance(node, int):
            return _literal(subject, CORE.IntegerLiteral, CORE.integerValue, node, XSD.integer), []
        if isinstance(node, float):
            return _literal(subject, CORE.FloatLiteral, CORE.floatValue, node, XSD.double), []
        if isinstance(node, str):
            return _literal(subject, CORE.StringLiteral, CORE.stringValue, node, XSD.string), []
        if isinstance(node, list):
            if node and all(_is_int_in(item, _MAX_CODEPOINT) for item in node):
                text = "".join(chr(item) for item in node)
                return _literal(subject, CORE.CharlistLiteral, CORE.charlistValue, text, XSD.string), []
            return [type_triple(subject, CORE.Expression)], []
        if is_variable(node):
            name = variable_name(node)
            if name == "_":
                return [type_triple(subject, CORE.WildcardPattern)], []
            return [
                type_triple(subject, CORE.Variable),
                datatype_property(subject, CORE.name, name, XSD.string),
            ], []
        if is_remote_call(node):
            return _remote_call(node, subject), []
        if is_call(node) and isinstance(node[0], Atom):
            return self.operator_or_call(node[0].name, node[2], subject)
        return [type_triple(subject, CORE.Expression)], []

    def operator_or_call(self, op: str, args: list[Any], subject: URIRef) -> tuple[list[Triple], _Children]:
        if op in BINARY_OPERATORS and len(args) == 2:
            return [
                type_triple(subject, BINARY_OPERATORS[op]),
                datatype_property(subject, CORE.operatorSymbol, op, XSD.string),
            ], [(CORE.hasLeftOperand, args[0]), (CORE.hasRightOperand, args[1])]
        if op in UNARY_OPERATORS and len(args) == 1:
            return [
                type_triple(subject, UNARY_OPERATORS[op]),
                datatype_property(subject, CORE.operatorSymbol, op, XSD.string),
            ], [(CORE.hasOperand, args[0])]
        if op == "&" and len(args) == 1:
            return self.capture(args[0], subject)
        if op == "<<>>" and all(_is_int_in(segment, 255) for segment in args):
            encoded = base64.b64encode(bytes(args)).decode("ascii")
            return _literal(subject, CORE.BinaryLiteral, CORE.binaryValue, encoded, XSD.base64Binary), []
        if op in ("__block__", "<<>>", "{}", "%{}", "%"):
            return [type_triple(subject, CORE.Expression)], []
        return [
            type_triple(subject, CORE.LocalCall),
            datatype_property(subject, CORE.name, op, XSD.string),
        ], []

    def capture(self, target: Any, subject: URIRef) -> tuple[list[Triple], _Children]:
        triples = [
            type_triple(subject, CORE.CaptureOperator),
            datatype_property(subject, CORE.operatorSymbol, "&", XSD.string),
        ]
        # &1
        if isinstance(target, int) and not isinstance(target, bool):
            triples.append(datatype_property(subject, CORE.captureIndex, target, XSD.positiveInteger))
            return triples, []

        # &Mod.fun/2 and &fun/2
        if is_call(target) and isinstance(target[0], Atom) and target[0] == "/" and len(target[2]) == 2:
            function_ref, arity = target[2]
            if isinstance(arity, int) and not isinstance(arity, bool):
                if is_remote_call(function_ref) and not function_ref[2]:
                    module, function = function_ref[0][2]
                    triples.append(
                        datatype_property(subject, CORE.captureModuleName, _module_label(module), XSD.string)
                    )
                    triples.append(datatype_property(subject, CORE.captureFunctionName, str(function), XSD.string))
                    triples.append(datatype_property(subject, CORE.captureArity, arity, XSD.nonNegativeInteger))
                    return triples, []
                if is_variable(function_ref):
                    triples.append(
                        datatype_property(subject, CORE.captureFunctionName, variable_name(function_ref), XSD.string)
                    )
                    triples.append(datatype_property(subject, CORE.captureArity, arity, XSD.nonNegativeInteger))
                    return triples, []

        # &(&1 + 1)
        return triples, [(CORE.hasOperand, target)]


def _is_int_in(value: Any, upper: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= upper


def _literal(subject: URIRef, cls: URIRef, predicate: URIRef, value: Any, datatype: URIRef) -> list[Triple]:
    return [type_triple(subject, cls), datatype_property(subject, predicate, value, datatype)]


def _atom_literal(value: Atom | bool | None, subject: URIRef) -> list[Triple]:
    if value is True or value is False:
        cls, text = CORE.BooleanLiteral, "true" if value else "false"
    elif value is None:
        cls, text = CORE.NilLiteral, "nil"
    else:
        cls, text = CORE.AtomLiteral, f":{value.name}"
    return _literal(subject, cls, CORE.atomValue, text, XSD.string)


def _module_label(module: Any) -> str:
    name = alias_name(module) or variable_name(module)
    return name if name is not None else repr(module)


def _remote_call(node: Any, subject: URIRef) -> list[Triple]:
    module, function = node[0][2]
    function_name = function.name if isinstance(function, Atom) else repr(function)
    return [
        type_triple(subject, CORE.RemoteCall),
        datatype_property(subject, CORE.name, f"{_module_label(module)}.{function_name}", XSD.string),
    ]
