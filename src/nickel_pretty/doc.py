"""Document algebra for width-bounded layout.

Pretty printing proceeds in two phases:

1. Translate the thing you want to print into a ``Doc``.
2. Lay the ``Doc`` out against a target width (see ``nickel_pretty.layout``).

Constructors:

    text(s)          prints ``s``
    line()           a space when flat, a newline when broken
    linebreak()      nothing when flat, a newline when broken
    softline()       a ``line`` in its own group
    hardline()       always a newline; the enclosing groups can never be flat
    nest(n, d)       adds ``n`` columns of indentation after newlines in ``d``
    group(d)         prints ``d`` flat if it fits on the current line
    if_flat(a, b)    ``a`` in flat mode, ``b`` otherwise

Every doc precomputes a ``Measure`` so the layout step can decide each group
without scanning ahead:

- ``Measure.flat`` is the width of the doc printed flat.
- ``Measure.nonflat`` is the width up to the earliest possible newline, or
  -1 if the doc cannot contain one.

Docs are immutable and freely shared; the constant docs are module-level
singletons.

Example:
    >>> doc = (text("[") + (linebreak() + text("1")).nest(2) + linebreak() + text("]")).group()
    >>> from nickel_pretty.layout import render
    >>> render(doc, 80)
    '[1]'

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

# Flat width of anything holding a forced newline; no group containing it fits.
UNFLATTENABLE = 1 << 60


@dataclass(frozen=True, slots=True)
class Measure:
    flat: int
    nonflat: int


_EMPTY_MEASURE = Measure(0, -1)


def concat_measure(m1: Measure, m2: Measure) -> Measure:
    """Measure of two docs printed one after the other.

    Associative but not commutative.
    """
    if m1.nonflat != -1:
        return Measure(m1.flat + m2.flat, m1.nonflat)
    if m2.nonflat != -1:
        return Measure(m1.flat + m2.flat, m1.flat + m2.nonflat)
    return Measure(m1.flat + m2.flat, -1)


def flatten_measure(measure: Measure) -> Measure:
    """Measure of a doc forced into flat mode."""
    return Measure(measure.flat, -1)


def suffix_len(measure: Measure) -> int:
    """Width until the earliest possible newline, or end of document."""
    if measure.nonflat != -1:
        return measure.nonflat
    return measure.flat


# =============================================================================
# Doc nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Doc:
    """Base class for document nodes."""

    measure: Measure

    def __add__(self, other: Doc) -> Doc:
        return concat(self, other)

    def nest(self, indent: int) -> Doc:
        return nest(indent, self)

    def group(self) -> Doc:
        return group(self)

    def enclose(self, left: str, right: str) -> Doc:
        return enclose(left, self, right)

    def parens(self) -> Doc:
        return enclose("(", self, ")")

    def braces(self) -> Doc:
        return enclose("{", self, "}")

    def brackets(self) -> Doc:
        return enclose("[", self, "]")

    def double_quotes(self) -> Doc:
        return enclose('"', self, '"')


@dataclass(frozen=True, slots=True)
class Text(Doc):
    string: str


@dataclass(frozen=True, slots=True)
class Break(Doc):
    """Soft line break; ``string`` is what it prints in flat mode."""

    string: str


@dataclass(frozen=True, slots=True)
class HardBreak(Doc):
    pass


@dataclass(frozen=True, slots=True)
class Nest(Doc):
    indent: int
    doc: Doc


@dataclass(frozen=True, slots=True)
class Concat(Doc):
    docs: tuple[Doc, ...]


@dataclass(frozen=True, slots=True)
class Group(Doc):
    doc: Doc


@dataclass(frozen=True, slots=True)
class IfFlat(Doc):
    flat_doc: Doc
    broken_doc: Doc


# =============================================================================
# Constructors
# =============================================================================


def text(string: str) -> Doc:
    """Print ``string`` verbatim.

    Text spanning several lines is printed as-is (no indentation is added
    to its inner lines) and keeps every enclosing group broken.
    """
    if not string:
        return _NIL
    first, newline, _ = string.partition("\n")
    if newline:
        return Text(Measure(UNFLATTENABLE, len(first)), string)
    return Text(Measure(len(string), -1), string)


_NIL = Concat(_EMPTY_MEASURE, ())
_SPACE = Text(Measure(1, -1), " ")
_LINE = Break(Measure(1, 0), " ")
_LINEBREAK = Break(Measure(0, 0), "")
_HARDLINE = HardBreak(Measure(UNFLATTENABLE, 0))
_SOFTLINE = Group(_LINE.measure, _LINE)


def nil() -> Doc:
    """The empty document."""
    return _NIL


def space() -> Doc:
    """A space that never breaks."""
    return _SPACE


def line() -> Doc:
    """A space in flat mode, a newline otherwise."""
    return _LINE


def linebreak() -> Doc:
    """Nothing in flat mode, a newline otherwise."""
    return _LINEBREAK


def softline() -> Doc:
    """A ``line`` that breaks only if the rest of the line does not fit."""
    return _SOFTLINE


def hardline() -> Doc:
    """A newline in every mode."""
    return _HARDLINE


def concat(*docs: Doc) -> Doc:
    """Print ``docs`` in order, with nothing in between.

    Nested concatenations are spliced into one node.
    """
    parts: list[Doc] = []
    measure = _EMPTY_MEASURE
    for doc in docs:
        if isinstance(doc, Concat):
            parts.extend(doc.docs)
        else:
            parts.append(doc)
        measure = concat_measure(measure, doc.measure)
    if not parts:
        return _NIL
    if len(parts) == 1:
        return parts[0]
    return Concat(measure, tuple(parts))


def nest(indent: int, doc: Doc) -> Doc:
    """Add ``indent`` columns after every newline produced inside ``doc``."""
    if indent == 0 or doc is _NIL:
        return doc
    return Nest(doc.measure, indent, doc)


def group(doc: Doc) -> Doc:
    """Print ``doc`` flat when it fits on the current line."""
    if isinstance(doc, (Group, Text)) or doc is _NIL:
        return doc
    return Group(doc.measure, doc)


def if_flat(flat_doc: Doc, broken_doc: Doc) -> Doc:
    """Print ``flat_doc`` in flat mode, ``broken_doc`` otherwise."""
    return IfFlat(Measure(flat_doc.measure.flat, broken_doc.measure.nonflat), flat_doc, broken_doc)


def enclose(left: str, doc: Doc, right: str) -> Doc:
    return concat(text(left), doc, text(right))


def parens(doc: Doc) -> Doc:
    return enclose("(", doc, ")")


def braces(doc: Doc) -> Doc:
    return enclose("{", doc, "}")


def brackets(doc: Doc) -> Doc:
    return enclose("[", doc, "]")


def double_quotes(doc: Doc) -> Doc:
    return enclose('"', doc, '"')


def intersperse(docs: Iterable[Doc], separator: Doc) -> Doc:
    """Concatenate ``docs`` with ``separator`` between each pair."""
    parts: list[Doc] = []
    for doc in docs:
        if parts:
            parts.append(separator)
        parts.append(doc)
    return concat(*parts)


__all__ = [
    "Break",
    "Concat",
    "Doc",
    "Group",
    "HardBreak",
    "IfFlat",
    "Measure",
    "Nest",
    "Text",
    "braces",
    "brackets",
    "concat",
    "double_quotes",
    "enclose",
    "group",
    "hardline",
    "if_flat",
    "intersperse",
    "line",
    "linebreak",
    "nest",
    "nil",
    "parens",
    "softline",
    "space",
    "text",
]
