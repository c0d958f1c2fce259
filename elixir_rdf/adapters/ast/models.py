"""Extraction records consumed by the builders.

The extraction layer turns Elixir source into these records; builders only
read them. Kind discriminators are closed ``str`` enums so every builder can
map them to ontology classes exhaustively.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

__all__ = [
    "SourceLocation",
    "FunctionKind",
    "Visibility",
    "Delegation",
    "Function",
    "Clause",
    "ParameterKind",
    "Parameter",
    "AnonymousClause",
    "AnonymousFunction",
    "CaptureKind",
    "Capture",
    "AttributeKind",
    "Attribute",
    "Callback",
    "Behaviour",
    "BehaviourImplementation",
    "CallKind",
    "FunctionCall",
    "ConditionalKind",
    "BranchKind",
    "Branch",
    "CondClause",
    "Conditional",
    "CaseClause",
    "CaseExpression",
    "WithClause",
    "WithExpression",
    "ReceiveExpression",
    "Comprehension",
    "TryExpression",
    "RaiseExpression",
    "ThrowExpression",
    "ExitExpression",
    "MacroCategory",
    "ResolutionStatus",
    "MacroInvocation",
    "AliasDirective",
    "ImportDirective",
    "RequireDirective",
    "UseDirective",
    "ActivityType",
    "Activity",
]

ModuleRef = str | list[str]


@dataclass(frozen=True)
class SourceLocation:
    """Start/end position of a construct in its source file."""

    start_line: int
    end_line: int | None = None
    start_column: int | None = None
    end_column: int | None = None

    @property
    def line(self) -> int:
        return self.start_line

    @property
    def effective_end_line(self) -> int:
        return self.end_line if self.end_line is not None else self.start_line


# =============================================================================
# Functions and Clauses
# =============================================================================


class FunctionKind(str, Enum):
    """How a named function was defined."""

    FUNCTION = "function"  # def / defp
    GUARD = "guard"  # defguard / defguardp
    DELEGATE = "delegate"  # defdelegate


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass
class Delegation:
    """Target of a ``defdelegate``."""

    module: ModuleRef
    function: str
    arity: int


@dataclass
class Function:
    """A named function definition."""

    name: str
    arity: int
    kind: FunctionKind = FunctionKind.FUNCTION
    visibility: Visibility = Visibility.PUBLIC
    min_arity: int | None = None
    docstring: str | bool | None = None  # False for @doc false
    module: ModuleRef | None = None
    delegates_to: Delegation | None = None
    location: SourceLocation | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Clause:
    """One clause of a named function; ``order`` is 1-based."""

    name: str
    arity: int
    order: int
    parameters: list[Any] = field(default_factory=list)  # quoted forms
    guard: Any = None
    body: Any = None
    location: SourceLocation | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class ParameterKind(str, Enum):
    SIMPLE = "simple"
    DEFAULT = "default"
    PATTERN = "pattern"
    PIN = "pin"


@dataclass
class Parameter:
    """A classified clause parameter; ``position`` is 0-based."""

    position: int
    kind: ParameterKind
    name: str | None = None
    expression: Any = None
    default_value: Any = None


# =============================================================================
# Anonymous Functions and Captures
# =============================================================================


@dataclass
class AnonymousClause:
    """One ``params -> body`` clause of an ``fn``."""

    parameters: list[Any] = field(default_factory=list)
    guard: Any = None
    body: Any = None
    bound_variables: list[str] = field(default_factory=list)

    @property
    def arity(self) -> int:
        return len(self.parameters)


@dataclass
class AnonymousFunction:
    clauses: list[AnonymousClause]
    arity: int = 0
    location: SourceLocation | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class CaptureKind(str, Enum):
    NAMED_LOCAL = "named_local"  # &foo/1
    NAMED_REMOTE = "named_remote"  # &Mod.foo/1
    SHORTHAND = "shorthand"  # &(&1 + 1)


@dataclass
class Capture:
    kind: CaptureKind
    arity: int
    function: str | None = None
    module: ModuleRef | None = None
    expression: Any = None
    location: SourceLocation | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


# =============================================================================
# Attributes and Behaviours
# =============================================================================


class AttributeKind(str, Enum):
    DOC = "doc"
    MODULEDOC = "moduledoc"
    TYPEDOC = "typedoc"
    DEPRECATED = "deprecated"
    SINCE = "since"
    EXTERNAL_RESOURCE = "external_resource"
    COMPILE = "compile"
    ON_DEFINITION = "on_definition"
    BEFORE_COMPILE = "before_compile"
    AFTER_COMPILE = "after_compile"
    DERIVE = "derive"
    BEHAVIOUR = "behaviour"
    ATTRIBUTE = "attribute"  # any other @name


@dataclass
class Attribute:
    """A module attribute such as ``@moduledoc`` or ``@timeout 5000``."""

    name: str
    kind: AttributeKind = AttributeKind.ATTRIBUTE
    value: Any = None
    accumulated: bool = False
    hidden: bool = False  # @doc false / @moduledoc false
    message: str | None = None  # @deprecated
    version: str | None = None  # @since
    path: str | None = None  # @external_resource
    location: SourceLocation | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Callback:
    """A ``@callback`` or ``@macrocallback`` specification."""

    name: str
    arity: int
    optional: bool = False
    macro: bool = False
    doc: str | None = None
    location: SourceLocation | None = None


@dataclass
class Behaviour:
    """Callbacks a module declares, making it a behaviour."""

    callbacks: list[Callback] = field(default_factory=list)
    doc: str | bool | None = None


@dataclass
class BehaviourImplementation:
    """Behaviours a module adopts and the functions it defines."""

    behaviours: list[ModuleRef] = field(default_factory=list)
    functions: list[tuple[str, int]] = field(default_factory=list)


# =============================================================================
# Calls
# =============================================================================


class CallKind(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"
    DYNAMIC = "dynamic"


@dataclass
class FunctionCall:
    kind: CallKind
    name: str
    arity: int
    module: ModuleRef | None = None
    location: SourceLocation | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


# =============================================================================
# Control Flow
# =============================================================================


class ConditionalKind(str, Enum):
    IF = "if"
    UNLESS = "unless"
    COND = "cond"


class BranchKind(str, Enum):
    THEN = "then"
    ELSE = "else"


@dataclass
class Branch:
    kind: BranchKind
    body: Any = None


@dataclass
class CondClause:
    index: int
    condition: Any = None
    body: Any = None


@dataclass
class Conditional:
    """An ``if``, ``unless`` or ``cond`` expression."""

    kind: ConditionalKind
    condition: Any = None
    branches: list[Branch] = field(default_factory=list)
    clauses: list[CondClause] = field(default_factory=list)
    location: SourceLocation | None = None


@dataclass
class CaseClause:
    pattern: Any = None
    body: Any = None
    guard: Any = None

    @property
    def has_guard(self) -> bool:
        return self.guard is not None


@dataclass
class CaseExpression:
    subject: Any = None
    clauses: list[CaseClause] = field(default_factory=list)
    location: SourceLocation | None = None


@dataclass
class WithClause:
    pattern: Any = None
    expression: Any = None


@dataclass
class WithExpression:
    clauses: list[WithClause] = field(default_factory=list)
    body: Any = None
    else_clauses: list[CaseClause] = field(default_factory=list)
    location: SourceLocation | None = None


@dataclass
class ReceiveExpression:
    clauses: list[CaseClause] = field(default_factory=list)
    has_after: bool = False
    after_timeout: Any = None
    location: SourceLocation | None = None


@dataclass
class Comprehension:
    """A ``for`` comprehension; ``None`` options were not given."""

    generators: list[Any] = field(default_factory=list)
    filters: list[Any] = field(default_factory=list)
    into: Any = None
    reduce: Any = None
    uniq: bool = False
    body: Any = None
    location: SourceLocation | None = None


# =============================================================================
# Exceptions
# =============================================================================


@dataclass
class TryExpression:
    has_rescue: bool = False
    has_catch: bool = False
    has_after: bool = False
    has_else: bool = False
    body: Any = None
    location: SourceLocation | None = None


@dataclass
class RaiseExpression:
    exception: Any = None
    message: Any = None
    location: SourceLocation | None = None


@dataclass
class ThrowExpression:
    value: Any = None
    location: SourceLocation | None = None


@dataclass
class ExitExpression:
    reason: Any = None
    location: SourceLocation | None = None


# =============================================================================
# Macros
# =============================================================================


class MacroCategory(str, Enum):
    DEFINITION = "definition"
    CONTROL_FLOW = "control_flow"
    IMPORT = "import"
    ATTRIBUTE = "attribute"
    QUOTE = "quote"
    LIBRARY = "library"
    CUSTOM = "custom"
    OTHER = "other"


class ResolutionStatus(str, Enum):
    KERNEL = "kernel"
    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"


@dataclass
class MacroInvocation:
    name: str
    arity: int = 0
    module: ModuleRef | None = None  # resolved macro module, e.g. "Kernel"
    category: MacroCategory = MacroCategory.OTHER
    resolution_status: ResolutionStatus = ResolutionStatus.KERNEL
    invocation_index: int | None = None
    location: SourceLocation | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


# =============================================================================
# Dependency Directives
# =============================================================================


@dataclass
class AliasDirective:
    source: list[str]
    as_name: str | None = None
    location: SourceLocation | None = None


@dataclass
class ImportDirective:
    """``import Mod, only: ..., except: ...``.

    ``only`` is a list of ``(name, arity)`` pairs or one of the bulk
    categories ``"functions"``, ``"macros"``, ``"sigils"``.
    """

    module: ModuleRef
    only: list[tuple[str, int]] | str | None = None
    except_: list[tuple[str, int]] | None = None
    location: SourceLocation | None = None


@dataclass
class RequireDirective:
    module: ModuleRef
    as_name: str | None = None
    location: SourceLocation | None = None


@dataclass
class UseDirective:
    module: ModuleRef
    options: list[tuple[str, Any]] = field(default_factory=list)
    location: SourceLocation | None = None


# =============================================================================
# Evolution
# =============================================================================


class ActivityType(str, Enum):
    FEATURE = "feature"
    BUGFIX = "bugfix"
    REFACTOR = "refactor"
    DEPRECATION = "deprecation"
    DELETION = "deletion"
    DOCS = "docs"
    TEST = "test"
    CHORE = "chore"
    PERF = "perf"
    STYLE = "style"
    BUILD = "build"
    CI = "ci"
    REVERT = "revert"
    UNKNOWN = "unknown"


@dataclass
class Activity:
    """A development activity derived from a commit."""

    activity_id: str
    activity_type: ActivityType = ActivityType.UNKNOWN
    started_at: datetime | None = None
    ended_at: datetime | None = None
    used_entities: list[str] = field(default_factory=list)
    generated_entities: list[str] = field(default_factory=list)
    informed_by: list[str] = field(default_factory=list)
    associated_agents: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
