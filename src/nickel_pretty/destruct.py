"""Destructuring patterns used by ``FunPattern`` and ``LetPattern``.

Pattern Hierarchy:
Destruct
├── EmptyPattern            no destructuring, only the binder
└── RecordPattern           {a, b : Num, c ? 1, ..rest}

Match
├── SimpleMatch             field bound to a variable of the same name
└── AssignMatch             field bound to a nested pattern (not printable)

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nickel_pretty.term import MetaValue


@dataclass(frozen=True, slots=True)
class Destruct:
    """Base class for destructuring patterns."""


@dataclass(frozen=True, slots=True)
class EmptyPattern(Destruct):
    pass


@dataclass(frozen=True, slots=True)
class Match:
    """Base class for a single field match inside a record pattern."""


@dataclass(frozen=True, slots=True)
class SimpleMatch(Match):
    """``name``, optionally annotated; ``meta.value`` is the default value."""

    name: str
    meta: MetaValue | None = None


@dataclass(frozen=True, slots=True)
class AssignMatch(Match):
    """``name = alias@{...}``: bind a field through a nested pattern."""

    name: str
    meta: MetaValue | None
    alias: str | None
    pattern: Destruct


@dataclass(frozen=True, slots=True)
class RecordPattern(Destruct):
    """Record destructuring.

    Attributes:
        matches: Field matches, in source order
        open: Extra fields are tolerated (``..``)
        rest: Binder capturing the remaining fields (``..rest``)

    """

    matches: tuple[Match, ...]
    open: bool = False
    rest: str | None = None


__all__ = [
    "AssignMatch",
    "Destruct",
    "EmptyPattern",
    "Match",
    "RecordPattern",
    "SimpleMatch",
]
