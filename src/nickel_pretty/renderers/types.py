"""Types renderer.

Translates the structural type algebra into documents:

- nested ``Forall`` binders coalesce into one ``forall a b c.`` header
- arrows are right-associative; only arrow (and forall) domains get
  parentheses
- ``Array T`` parenthesizes a non-atomic element type
- a row's separator is decided by its tail: none before ``RowEmpty``,
  `` ; r`` before a variable, `` ; Dyn`` before ``Dyn``, ``,`` otherwise

Arrow chains and rows are walked iteratively.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nickel_pretty.atoms import is_type_atom
from nickel_pretty.config import PrettyConfig, get_pretty_config
from nickel_pretty.doc import Doc, concat, intersperse, line, linebreak, nil, text
from nickel_pretty.errors import RecursionDepthError, UnsupportedConstructError
from nickel_pretty.escape import quote_identifier
from nickel_pretty.layout import render
from nickel_pretty.renderers.context import RenderContext
from nickel_pretty.types import (
    ArrayType,
    Arrow,
    BoolType,
    DynRecordType,
    DynType,
    EnumType,
    FlatType,
    Forall,
    NumType,
    RecordType,
    RowEmpty,
    RowExtend,
    StrType,
    SymType,
    Types,
    TypeVar,
)
from nickel_pretty.utils.logger import get_logger

if TYPE_CHECKING:
    from nickel_pretty.renderers.term import TermRenderer

logger = get_logger(__name__)


class TypesRenderer:
    """Render types to source text.

    Flat types embed terms, so a ``TermRenderer`` is used for those; one is
    created on demand when none is supplied.
    """

    __slots__ = ("_config", "_terms")

    def __init__(
        self,
        terms: TermRenderer | None = None,
        *,
        config: PrettyConfig | None = None,
    ) -> None:
        self._terms = terms
        self._config = config or get_pretty_config()

    @property
    def config(self) -> PrettyConfig:
        return self._config

    def render(self, ty: Types) -> str:
        """Render ``ty`` at the configured width."""
        return render(self.to_doc(ty), self._config.width)

    def to_doc(self, ty: Types) -> Doc:
        """Translate ``ty`` into a document."""
        ctx = RenderContext(max_depth=self._config.max_depth, indent=self._config.indent)
        try:
            return self.types_doc(ty, ctx)
        except RecursionError as exc:
            logger.debug("Interpreter recursion limit hit at depth %d", ctx.depth)
            raise RecursionDepthError(self._config.max_depth) from exc

    def types_doc(self, ty: Types, ctx: RenderContext) -> Doc:
        """Translate ``ty`` within an ongoing render."""
        ctx.enter()
        try:
            return self._types(ty, ctx)
        finally:
            ctx.leave()

    def _types(self, ty: Types, ctx: RenderContext) -> Doc:
        match ty:
            case DynType():
                return text("Dyn")
            case NumType():
                return text("Num")
            case BoolType():
                return text("Bool")
            case StrType():
                return text("Str")
            case SymType():
                return text("Sym")
            case TypeVar(name=name):
                return text(name)
            case FlatType(term=term):
                return self._term_renderer().term_doc(term, ctx)
            case ArrayType(element=element):
                return text("Array ") + self._atom(element, ctx)
            case Forall():
                return self._forall(ty, ctx)
            case Arrow():
                return self._arrow(ty, ctx)
            case EnumType(row=row):
                if isinstance(row, RowEmpty):
                    return text("[| |]")
                return text("[| ") + self._row(row, ctx, enum=True) + text(" |]")
            case RecordType(row=row):
                return text("{") + self._row(row, ctx, enum=False) + text("}")
            case DynRecordType(value=value):
                return text("{ _: ") + self.types_doc(value, ctx) + text(" }")
            case RowEmpty() | RowExtend():
                return self._row(ty, ctx, enum=False)
            case _:
                logger.debug("No rendering for type node %r", ty)
                raise UnsupportedConstructError(type(ty).__name__)

    def _term_renderer(self) -> TermRenderer:
        if self._terms is None:
            from nickel_pretty.renderers.term import TermRenderer

            self._terms = TermRenderer(config=self._config, types=self)
        return self._terms

    def _atom(self, ty: Types, ctx: RenderContext) -> Doc:
        doc = self.types_doc(ty, ctx)
        if is_type_atom(ty):
            return doc
        return (linebreak() + doc).nest(ctx.indent).parens().group()

    def _forall(self, ty: Forall, ctx: RenderContext) -> Doc:
        names = []
        current: Types = ty
        while isinstance(current, Forall):
            names.append(current.var)
            current = current.body
        header = text("forall " + " ".join(names) + ".")
        return (header + (line() + self.types_doc(current, ctx)).nest(ctx.indent)).group()

    def _arrow(self, ty: Arrow, ctx: RenderContext) -> Doc:
        domains: list[Doc] = []
        current: Types = ty
        while isinstance(current, Arrow):
            domain = current.domain
            doc = self.types_doc(domain, ctx)
            if isinstance(domain, (Arrow, Forall)):
                doc = doc.parens()
            domains.append(doc)
            current = current.codomain
        domains.append(self.types_doc(current, ctx))
        first, *rest = domains
        tail = concat(*(line() + text("-> ") + doc for doc in rest))
        return (first + tail.nest(ctx.indent)).group()

    def _row(self, row: Types, ctx: RenderContext, *, enum: bool) -> Doc:
        """Render a row; ``enum`` rows print their labels as tags."""
        entries: list[Doc] = []
        current = row
        while isinstance(current, RowExtend):
            label = quote_identifier(current.label)
            entry = text(f"`{label}" if enum else label)
            if current.type is not None:
                entry = entry + text(": ") + self.types_doc(current.type, ctx)
            tail = current.tail
            match tail:
                case RowEmpty():
                    entries.append(entry)
                    break
                case TypeVar(name=name):
                    entries.append(entry + text(f" ; {name}"))
                    break
                case DynType():
                    entries.append(entry + text(" ; Dyn"))
                    break
                case RowExtend():
                    entries.append(entry)
                    current = tail
                case _:
                    entries.append(entry)
                    entries.append(self.types_doc(tail, ctx))
                    break
        else:
            if isinstance(current, RowEmpty):
                return nil()
            return self.types_doc(current, ctx)
        return intersperse(entries, text(",") + line()).nest(ctx.indent).group()


__all__ = ["TypesRenderer"]
