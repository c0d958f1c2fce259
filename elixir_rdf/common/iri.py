"""
IRI minting and parsing for code entities.

Every entity IRI is the base IRI followed by ``/``-separated segments. Names
that appear in a segment are percent-encoded with a narrow escape table:
only ``[A-Za-z0-9_.-]`` pass through, so dots in module names survive while
``?``, ``!`` and ``/`` inside function names cannot break the path.

Examples:
    >>> str(for_function("https://example.org/code#", "MyApp", "valid?", 1))
    'https://example.org/code#MyApp/valid%3F/1'
    >>> str(for_clause(for_function("https://example.org/code#", "MyApp", "hello", 0), 0))
    'https://example.org/code#MyApp/hello/0/clause/0'
"""

from __future__ import annotations

import hashlib
import re
from collections.abc import Sequence
from dataclasses import dataclass
from urllib.parse import quote, unquote

from rdflib import URIRef

__all__ = [
    "escape_name",
    "unescape_name",
    "encode_path",
    "module_name",
    "for_module",
    "for_function",
    "for_clause",
    "for_parameter",
    "for_source_file",
    "for_source_location",
    "for_repository",
    "for_commit",
    "for_anonymous_function",
    "for_anonymous_clause",
    "for_captured_variable",
    "for_capture",
    "for_alias",
    "for_import",
    "for_require",
    "for_use",
    "for_use_option",
    "ParsedIRI",
    "parse",
    "module_from_iri",
    "function_from_iri",
]

ModuleRef = str | Sequence[str]

# Characters quote() never encodes on its own; "~" is not in our safe set.
_ALWAYS_SAFE_EXTRA = {"~": "%7E"}


# =============================================================================
# Name Encoding
# =============================================================================


def escape_name(name: object) -> str:
    """Percent-encode a name for use as a single IRI path segment."""
    encoded = quote(str(name), safe="")
    for char, replacement in _ALWAYS_SAFE_EXTRA.items():
        encoded = encoded.replace(char, replacement)
    return encoded


def unescape_name(name: str) -> str:
    return unquote(name)


def encode_path(path: str) -> str:
    """Encode a file path segment by segment, keeping the ``/`` separators."""
    normalized = path.replace("\\", "/")
    return "/".join(escape_name(segment) for segment in normalized.split("/"))


def module_name(module: ModuleRef) -> str:
    """Return the dotted name of a module given as string or segment list.

    A leading ``Elixir.`` prefix, as found on module atoms, is dropped.
    """
    if isinstance(module, str):
        name = module
    else:
        name = ".".join(str(segment) for segment in module)
    return name.removeprefix("Elixir.")


def _base(base_iri: object) -> str:
    return str(base_iri)


# =============================================================================
# Entity IRIs
# =============================================================================


def for_module(base_iri: object, module: ModuleRef) -> URIRef:
    return URIRef(_base(base_iri) + escape_name(module_name(module)))


def for_function(base_iri: object, module: ModuleRef, name: object, arity: int) -> URIRef:
    """IRI of a named function: ``<base><Module>/<name>/<arity>``."""
    return URIRef(f"{for_module(base_iri, module)}/{escape_name(name)}/{arity}")


def for_clause(function_iri: object, index: int) -> URIRef:
    """IRI of a function clause; ``index`` is 0-based."""
    return URIRef(f"{function_iri}/clause/{index}")


def for_parameter(clause_iri: object, position: int) -> URIRef:
    """IRI of a clause parameter; ``position`` is 0-based."""
    return URIRef(f"{clause_iri}/param/{position}")


def for_source_file(base_iri: object, path: str) -> URIRef:
    return URIRef(f"{_base(base_iri)}file/{encode_path(path)}")


def for_source_location(file_iri: object, start_line: int, end_line: int) -> URIRef:
    return URIRef(f"{file_iri}/L{start_line}-{end_line}")


def for_repository(base_iri: object, repo_url: str) -> URIRef:
    """IRI of a repository, keyed by the first 8 hex chars of the URL's SHA-256."""
    digest = hashlib.sha256(repo_url.encode("utf-8")).hexdigest()[:8]
    return URIRef(f"{_base(base_iri)}repo/{digest}")


def for_commit(repo_iri: object, sha: str) -> URIRef:
    return URIRef(f"{repo_iri}/commit/{sha}")


def for_anonymous_function(context_iri: object, index: int) -> URIRef:
    return URIRef(f"{context_iri}/anon/{index}")


def for_anonymous_clause(anon_iri: object, index: int) -> URIRef:
    return URIRef(f"{anon_iri}/clause/{index}")


def for_captured_variable(anon_iri: object, name: object) -> URIRef:
    return URIRef(f"{anon_iri}/capture/{escape_name(name)}")


def for_capture(context_iri: object, index: int) -> URIRef:
    return URIRef(f"{context_iri}/&/{index}")


def for_alias(module_iri: object, index: int) -> URIRef:
    return URIRef(f"{module_iri}/alias/{index}")


def for_import(module_iri: object, index: int) -> URIRef:
    return URIRef(f"{module_iri}/import/{index}")


def for_require(module_iri: object, index: int) -> URIRef:
    return URIRef(f"{module_iri}/require/{index}")


def for_use(module_iri: object, index: int) -> URIRef:
    return URIRef(f"{module_iri}/use/{index}")


def for_use_option(use_iri: object, index: int) -> URIRef:
    return URIRef(f"{use_iri}/option/{index}")


# =============================================================================
# Parsing
# =============================================================================


@dataclass(frozen=True)
class ParsedIRI:
    """Components recovered from an entity IRI."""

    kind: str
    base_iri: str | None = None
    module: str | None = None
    function: str | None = None
    arity: int | None = None
    clause: int | None = None
    parameter: int | None = None
    path: str | None = None
    start_line: int | None = None
    end_line: int | None = None
    repo_hash: str | None = None
    sha: str | None = None


_MODULE = r"([A-Z][A-Za-z0-9_.%]*)"
_PARAMETER_RE = re.compile(r"^(.+)/clause/(\d+)/param/(\d+)$")
_CLAUSE_RE = re.compile(r"^(.+)/clause/(\d+)$")
_LOCATION_RE = re.compile(r"^(.+)/L(\d+)-(\d+)$")
_COMMIT_RE = re.compile(r"^(.+#)repo/([a-f0-9]+)/commit/([a-f0-9]+)$")
_REPOSITORY_RE = re.compile(r"^(.+#)repo/([a-f0-9]+)$")
_FILE_RE = re.compile(r"^(.+#)file/(.+)$")
_FUNCTION_RE = re.compile(rf"^(.+#){_MODULE}/([^/]+)/(\d+)$")
_MODULE_RE = re.compile(rf"^(.+#){_MODULE}$")


def _parse_function(iri: str) -> ParsedIRI | None:
    match = _FUNCTION_RE.match(iri)
    if not match:
        return None
    base, module, function, arity = match.groups()
    return ParsedIRI(
        kind="function",
        base_iri=base,
        module=unquote(module),
        function=unquote(function),
        arity=int(arity),
    )


def parse(iri: object) -> ParsedIRI:
    """
    Recover the entity kind and naming coordinates from an IRI.

    Args:
        iri: IRI minted by one of the ``for_*`` functions

    Returns:
        ParsedIRI with ``kind`` one of module, function, clause, parameter,
        file, location, repository or commit

    Raises:
        ValueError: If the IRI matches none of the known shapes
    """
    text = str(iri)

    if match := _PARAMETER_RE.match(text):
        parent, clause, parameter = match.groups()
        function = _parse_function(parent)
        return ParsedIRI(
            kind="parameter",
            base_iri=function.base_iri if function else None,
            module=function.module if function else None,
            function=function.function if function else None,
            arity=function.arity if function else None,
            clause=int(clause),
            parameter=int(parameter),
        )

    if match := _CLAUSE_RE.match(text):
        parent, clause = match.groups()
        function = _parse_function(parent)
        return ParsedIRI(
            kind="clause",
            base_iri=function.base_iri if function else None,
            module=function.module if function else None,
            function=function.function if function else None,
            arity=function.arity if function else None,
            clause=int(clause),
        )

    if match := _LOCATION_RE.match(text):
        file_iri, start_line, end_line = match.groups()
        file_match = _FILE_RE.match(file_iri)
        return ParsedIRI(
            kind="location",
            base_iri=file_match.group(1) if file_match else None,
            path=unquote(file_match.group(2)) if file_match else None,
            start_line=int(start_line),
            end_line=int(end_line),
        )

    if match := _COMMIT_RE.match(text):
        base, repo_hash, sha = match.groups()
        return ParsedIRI(kind="commit", base_iri=base, repo_hash=repo_hash, sha=sha)

    if match := _REPOSITORY_RE.match(text):
        base, repo_hash = match.groups()
        return ParsedIRI(kind="repository", base_iri=base, repo_hash=repo_hash)

    if match := _FILE_RE.match(text):
        base, path = match.groups()
        return ParsedIRI(kind="file", base_iri=base, path=unquote(path))

    if function := _parse_function(text):
        return function

    if match := _MODULE_RE.match(text):
        base, module = match.groups()
        return ParsedIRI(kind="module", base_iri=base, module=unquote(module))

    raise ValueError(f"Unknown IRI pattern: {text}")


def module_from_iri(iri: object) -> str:
    """Return the module name of a module, function, clause or parameter IRI."""
    parsed = parse(iri)
    if parsed.module is None:
        raise ValueError(f"Not a module or function IRI: {iri}")
    return parsed.module


def function_from_iri(iri: object) -> tuple[str, str, int]:
    """Return ``(module, function, arity)`` of a function, clause or parameter IRI."""
    parsed = parse(iri)
    if parsed.function is None or parsed.module is None or parsed.arity is None:
        raise ValueError(f"Not a function IRI: {iri}")
    return parsed.module, parsed.function, parsed.arity
