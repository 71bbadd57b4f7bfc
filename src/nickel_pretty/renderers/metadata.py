"""Metadata clause printer.

Renders the annotations carried by a ``MetaValue``:

    : Type | Contract1 | Contract2 | doc "text" | default

Clauses are separated by breakable lines and grouped: the clause stays on
one line when it fits, otherwise each clause gets its own indented line.
Merge priorities other than ``MergePriority.DEFAULT`` have no syntax and
print nothing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nickel_pretty.doc import Doc, intersperse, line, nil, text
from nickel_pretty.escape import escape_string
from nickel_pretty.term import MergePriority, MetaValue

if TYPE_CHECKING:
    from nickel_pretty.renderers.context import RenderContext
    from nickel_pretty.renderers.types import TypesRenderer


def has_metadata(meta: MetaValue, *, with_doc: bool = False) -> bool:
    """True if ``metadata_doc`` would print at least one clause."""
    return (
        meta.types is not None
        or bool(meta.contracts)
        or meta.priority is MergePriority.DEFAULT
        or (with_doc and meta.doc is not None)
    )


def metadata_doc(
    meta: MetaValue,
    types: TypesRenderer,
    ctx: RenderContext,
    *,
    with_doc: bool = False,
) -> Doc:
    """Render the metadata clause of ``meta`` (its value is not printed).

    Args:
        meta: The annotated value
        types: Translator used for the annotation and contract types
        ctx: Translation state of the current render
        with_doc: Also print the documentation string (record fields only)
    """
    clauses: list[Doc] = []
    if meta.types is not None:
        clauses.append(text(": ") + types.types_doc(meta.types, ctx))
    for contract in meta.contracts:
        clauses.append(text("| ") + types.types_doc(contract, ctx))
    if with_doc and meta.doc is not None:
        clauses.append(text(f'| doc "{escape_string(meta.doc)}"'))
    if meta.priority is MergePriority.DEFAULT:
        clauses.append(text("| default"))
    if not clauses:
        return nil()
    return intersperse(clauses, line()).nest(ctx.indent).group()


__all__ = ["has_metadata", "metadata_doc"]
