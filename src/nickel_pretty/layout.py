"""Width-bounded layout of documents.

Based on the algorithm from Wadler's "A Prettier Printer", using the
precomputed measures from ``nickel_pretty.doc`` so every group is decided
greedily without look-ahead: a group prints flat iff the text already on the
line, the group printed flat, and whatever follows it up to the next
possible newline all fit within the width.

The printer walks the document with an explicit stack of fragments, so the
depth of the document does not consume the call stack.

Example:
    >>> from nickel_pretty.doc import line, text
    >>> doc = (text("a") + line() + text("b")).group()
    >>> render(doc, 80)
    'a b'
    >>> render(doc, 2)
    'a\\nb'

"""

from __future__ import annotations

from dataclasses import dataclass

from nickel_pretty.doc import (
    Break,
    Concat,
    Doc,
    Group,
    HardBreak,
    IfFlat,
    Measure,
    Nest,
    Text,
    concat_measure,
    flatten_measure,
    group,
    suffix_len,
)
from nickel_pretty.stringbuilder import StringBuilder

_EMPTY_MEASURE = Measure(0, -1)


@dataclass(frozen=True, slots=True)
class _Fragment:
    """A doc waiting to be printed.

    ``suffix`` measures everything printed after this doc, to the end of
    the whole document.
    """

    doc: Doc
    indent: int
    is_flat: bool
    suffix: Measure


def _printed_measure(doc: Doc, is_flat: bool) -> Measure:
    """Measure of ``doc`` as it will print in the given mode.

    An ``IfFlat`` sibling prints only one of its branches, so the suffix
    seen by earlier siblings must use that branch.
    """
    if isinstance(doc, IfFlat):
        return doc.flat_doc.measure if is_flat else doc.broken_doc.measure
    return doc.measure


class DocPrinter:
    """Lays documents out against a target width.

    Stateless between calls; safe to share across threads.
    """

    __slots__ = ("_width",)

    def __init__(self, width: int) -> None:
        if width < 1:
            raise ValueError(f"width must be positive, got {width}")
        self._width = width

    @property
    def width(self) -> int:
        return self._width

    def _fits(self, column: int, doc: Doc, suffix: Measure) -> bool:
        """Will ``doc`` fit flat on the current line?"""
        measure = concat_measure(flatten_measure(doc.measure), suffix)
        return column + suffix_len(measure) <= self._width

    def render(self, document: Doc) -> str:
        """Render ``document`` to text."""
        sb = StringBuilder()
        fragments = [_Fragment(group(document), 0, False, _EMPTY_MEASURE)]

        while fragments:
            frag = fragments.pop()
            doc = frag.doc
            match doc:
                case Text():
                    sb.append(doc.string)
                case Break():
                    if frag.is_flat:
                        sb.append(doc.string)
                    else:
                        sb.newline(frag.indent)
                case HardBreak():
                    sb.newline(frag.indent)
                case Nest():
                    fragments.append(
                        _Fragment(doc.doc, frag.indent + doc.indent, frag.is_flat, frag.suffix)
                    )
                case Concat():
                    # Push children in reverse; each one's suffix covers its
                    # right siblings plus the parent's suffix.
                    suffix = frag.suffix
                    for child in reversed(doc.docs):
                        fragments.append(_Fragment(child, frag.indent, frag.is_flat, suffix))
                        suffix = concat_measure(_printed_measure(child, frag.is_flat), suffix)
                case Group():
                    is_flat = frag.is_flat or self._fits(sb.column, doc.doc, frag.suffix)
                    fragments.append(_Fragment(doc.doc, frag.indent, is_flat, frag.suffix))
                case IfFlat():
                    chosen = doc.flat_doc if frag.is_flat else doc.broken_doc
                    fragments.append(_Fragment(chosen, frag.indent, frag.is_flat, frag.suffix))
                case _:
                    raise TypeError(f"Not a document node: {type(doc).__name__}")

        return sb.build()


def render(doc: Doc, width: int) -> str:
    """Lay ``doc`` out at ``width`` columns and return the text."""
    return DocPrinter(width).render(doc)


__all__ = ["DocPrinter", "render"]
