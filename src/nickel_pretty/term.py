"""Typed AST nodes for terms.

All terms are frozen dataclasses with slots. A term tree is strictly
tree-shaped and never mutated by the printer.

Term Hierarchy:
Term (base)
├── literals: Null, Bool, Num, Str, StrChunks
├── binders: Fun, FunPattern, Let, LetPattern
├── App, Var, Enum
├── Record, RecRecord, Switch, Array
├── Op1, Op2, OpN
├── MetaValue
├── Import
└── internal only: Lbl, Sym, Wrapped, ResolvedImport, ParseError

Mappings (record fields, switch cases) are unordered; the printer imposes
its own order.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum as _Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from nickel_pretty.destruct import Destruct
    from nickel_pretty.operators import BinaryOp, NAryOp, UnaryOperator
    from nickel_pretty.types import Types


@dataclass(frozen=True, slots=True)
class Term:
    """Base class for all term nodes."""


# =============================================================================
# Literals
# =============================================================================


@dataclass(frozen=True, slots=True)
class Null(Term):
    pass


@dataclass(frozen=True, slots=True)
class Bool(Term):
    value: bool


@dataclass(frozen=True, slots=True)
class Num(Term):
    value: float


@dataclass(frozen=True, slots=True)
class Str(Term):
    """A string without interpolation."""

    value: str


@dataclass(frozen=True, slots=True)
class StrChunk:
    """Base class for the pieces of an interpolated string."""


@dataclass(frozen=True, slots=True)
class StrLiteral(StrChunk):
    text: str


@dataclass(frozen=True, slots=True)
class StrExpr(StrChunk):
    """An interpolated expression, with the indentation it appeared at."""

    term: Term
    indent: int = 0


@dataclass(frozen=True, slots=True)
class StrChunks(Term):
    """A string with interpolated expressions.

    Chunks are stored last-first, the way the parser accumulates them.
    Use ``StrChunks.of`` to build one from chunks in source order.

    """

    chunks: tuple[StrChunk, ...]

    @classmethod
    def of(cls, *chunks: StrChunk | str) -> StrChunks:
        """Build from chunks in source order; plain strings become literals."""
        converted = [StrLiteral(c) if isinstance(c, str) else c for c in chunks]
        return cls(tuple(reversed(converted)))


# =============================================================================
# Binders and references
# =============================================================================


@dataclass(frozen=True, slots=True)
class Fun(Term):
    param: str
    body: Term


@dataclass(frozen=True, slots=True)
class FunPattern(Term):
    """Function whose parameter is destructured: ``fun x@{a, b} => ...``."""

    param: str | None
    pattern: Destruct
    body: Term


@dataclass(frozen=True, slots=True)
class Let(Term):
    name: str
    bound: Term
    body: Term


@dataclass(frozen=True, slots=True)
class LetPattern(Term):
    """Destructuring let: ``let x@{a, b} = bound in body``."""

    name: str | None
    pattern: Destruct
    bound: Term
    body: Term


@dataclass(frozen=True, slots=True)
class App(Term):
    fun: Term
    arg: Term


@dataclass(frozen=True, slots=True)
class Var(Term):
    name: str


@dataclass(frozen=True, slots=True)
class Enum(Term):
    """An enum tag: ```tag``."""

    tag: str


# =============================================================================
# Containers
# =============================================================================


@dataclass(frozen=True, slots=True)
class RecordAttrs:
    """Record attributes.

    Attributes:
        open: Additional, unlisted fields are permitted (printed as ``..``)

    """

    open: bool = False


@dataclass(frozen=True, slots=True)
class Record(Term):
    fields: Mapping[str, Term]
    attrs: RecordAttrs = field(default_factory=RecordAttrs)


@dataclass(frozen=True, slots=True)
class RecRecord(Term):
    """Recursive record, before field values are closed.

    ``dyn_fields`` holds fields whose name is an expression, as
    ``(name term, value term)`` pairs. ``deps`` is the inter-field
    dependency data computed by the free-variable pass; it is never printed.

    """

    fields: Mapping[str, Term]
    dyn_fields: tuple[tuple[Term, Term], ...] = ()
    attrs: RecordAttrs = field(default_factory=RecordAttrs)
    deps: Mapping[str, frozenset[str]] | None = None


@dataclass(frozen=True, slots=True)
class Switch(Term):
    scrutinee: Term
    cases: Mapping[str, Term]
    default: Term | None = None


@dataclass(frozen=True, slots=True)
class Array(Term):
    items: tuple[Term, ...]


# =============================================================================
# Operators
# =============================================================================


@dataclass(frozen=True, slots=True)
class Op1(Term):
    op: UnaryOperator
    arg: Term


@dataclass(frozen=True, slots=True)
class Op2(Term):
    op: BinaryOp
    left: Term
    right: Term


@dataclass(frozen=True, slots=True)
class OpN(Term):
    op: NAryOp
    args: tuple[Term, ...]


# =============================================================================
# Metadata
# =============================================================================


class MergePriority(_Enum):
    """Merge priority of a value. Only ``DEFAULT`` has a concrete syntax."""

    DEFAULT = "default"
    NORMAL = "normal"


@dataclass(frozen=True, slots=True)
class MetaValue(Term):
    """A value together with its annotations.

    When ``value`` is None the node is a type-only placeholder, e.g. a
    record field that is declared but not yet defined.

    Attributes:
        value: The annotated value, if any
        types: Type annotation (``: T``)
        contracts: Contract annotations, in order (``| C``)
        priority: Merge priority; anything but ``MergePriority.DEFAULT``
            (including explicit numeric priorities) prints nothing
        doc: Documentation string

    """

    value: Term | None = None
    types: Types | None = None
    contracts: tuple[Types, ...] = ()
    priority: MergePriority | Any = MergePriority.NORMAL
    doc: str | None = None


# =============================================================================
# Imports
# =============================================================================


@dataclass(frozen=True, slots=True)
class Import(Term):
    path: str


# =============================================================================
# Internal only (never produced by parsing source text)
# =============================================================================


@dataclass(frozen=True, slots=True)
class ResolvedImport(Term):
    file_id: int


@dataclass(frozen=True, slots=True)
class Lbl(Term):
    """A blame label; the label data is opaque to the printer."""

    label: Any = None


@dataclass(frozen=True, slots=True)
class Sym(Term):
    id: int


@dataclass(frozen=True, slots=True)
class Wrapped(Term):
    id: int
    term: Term


@dataclass(frozen=True, slots=True)
class ParseError(Term):
    pass


__all__ = [
    "App",
    "Array",
    "Bool",
    "Enum",
    "Fun",
    "FunPattern",
    "Import",
    "Lbl",
    "Let",
    "LetPattern",
    "MergePriority",
    "MetaValue",
    "Null",
    "Num",
    "Op1",
    "Op2",
    "OpN",
    "ParseError",
    "RecRecord",
    "Record",
    "RecordAttrs",
    "ResolvedImport",
    "Str",
    "StrChunk",
    "StrChunks",
    "StrExpr",
    "StrLiteral",
    "Switch",
    "Sym",
    "Term",
    "Var",
    "Wrapped",
]
