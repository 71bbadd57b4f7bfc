"""Structural types, including the row algebra.

Types Hierarchy:
Types (base)
├── base types: DynType, NumType, BoolType, StrType, SymType
├── TypeVar
├── FlatType              a term used as a type (contract)
├── ArrayType
├── Forall                binder + body
├── Arrow                 domain -> codomain
├── EnumType              [| `a, `b |]
├── RecordType            {a: Num, b: Str}
├── DynRecordType         { _: T }
└── rows: RowEmpty, RowExtend(label, type or None, tail)

A row is a chain of ``RowExtend`` nodes terminated by ``RowEmpty``, a
``TypeVar`` (open, row-polymorphic) or ``DynType``.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nickel_pretty.term import Term


@dataclass(frozen=True, slots=True)
class Types:
    """Base class for all type nodes."""


@dataclass(frozen=True, slots=True)
class DynType(Types):
    pass


@dataclass(frozen=True, slots=True)
class NumType(Types):
    pass


@dataclass(frozen=True, slots=True)
class BoolType(Types):
    pass


@dataclass(frozen=True, slots=True)
class StrType(Types):
    pass


@dataclass(frozen=True, slots=True)
class SymType(Types):
    pass


@dataclass(frozen=True, slots=True)
class TypeVar(Types):
    name: str


@dataclass(frozen=True, slots=True)
class FlatType(Types):
    term: Term


@dataclass(frozen=True, slots=True)
class ArrayType(Types):
    element: Types


@dataclass(frozen=True, slots=True)
class Forall(Types):
    var: str
    body: Types


@dataclass(frozen=True, slots=True)
class Arrow(Types):
    domain: Types
    codomain: Types


@dataclass(frozen=True, slots=True)
class EnumType(Types):
    row: Types


@dataclass(frozen=True, slots=True)
class RecordType(Types):
    row: Types


@dataclass(frozen=True, slots=True)
class DynRecordType(Types):
    """Record whose fields all share one type."""

    value: Types


@dataclass(frozen=True, slots=True)
class RowEmpty(Types):
    pass


@dataclass(frozen=True, slots=True)
class RowExtend(Types):
    label: str
    type: Types | None
    tail: Types


def row(*entries: tuple[str, Types | None], tail: Types | None = None) -> Types:
    """Build a row from ``(label, type)`` entries, last entry innermost.

    Example:
        >>> row(("a", NumType()), ("b", None), tail=TypeVar("r"))
        RowExtend(label='a', type=NumType(), tail=RowExtend(label='b', type=None, tail=TypeVar(name='r')))

    """
    current: Types = tail if tail is not None else RowEmpty()
    for label, ty in reversed(entries):
        current = RowExtend(label, ty, current)
    return current


__all__ = [
    "ArrayType",
    "Arrow",
    "BoolType",
    "DynRecordType",
    "DynType",
    "EnumType",
    "FlatType",
    "Forall",
    "NumType",
    "RecordType",
    "RowEmpty",
    "RowExtend",
    "StrType",
    "SymType",
    "TypeVar",
    "Types",
    "row",
]
