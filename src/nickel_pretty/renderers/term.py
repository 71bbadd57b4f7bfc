"""Term renderer.

Translates every term variant into a document. The rules that keep the
output re-parseable:

- Operands go through the atom rule (``nickel_pretty.atoms.is_atom``):
  anything that is not an atom is parenthesized.
- Curried functions collapse into one ``fun a b c =>`` header.
- The conditional, stored as an application of the ``ite`` primitive, is
  re-sugared into ``if c then t else e``.
- Record fields and switch cases print in sorted order, so output is
  reproducible whatever order the mapping was built in.
- ``0 - x`` prints as ``-x``.
- Internal-only nodes print as comments, never as valid syntax.

Thread Safety:
    Per-render state lives in a RenderContext created by ``to_doc()``.
    A TermRenderer can be shared across threads.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import Decimal

from nickel_pretty.atoms import is_atom
from nickel_pretty.config import PrettyConfig, get_pretty_config
from nickel_pretty.destruct import (
    Destruct,
    EmptyPattern,
    Match,
    RecordPattern,
    SimpleMatch,
)
from nickel_pretty.doc import (
    Doc,
    concat,
    hardline,
    if_flat,
    intersperse,
    line,
    linebreak,
    nil,
    text,
)
from nickel_pretty.errors import RecursionDepthError, UnsupportedConstructError
from nickel_pretty.escape import escape_string, interpolation_marker_length, quote_identifier
from nickel_pretty.layout import render
from nickel_pretty.operators import BinaryOp, OpPos, StaticAccess, UnaryOp
from nickel_pretty.renderers.context import RenderContext
from nickel_pretty.renderers.metadata import has_metadata, metadata_doc
from nickel_pretty.renderers.types import TypesRenderer
from nickel_pretty.term import (
    App,
    Array,
    Bool,
    Enum,
    Fun,
    FunPattern,
    Import,
    Lbl,
    Let,
    LetPattern,
    MetaValue,
    Null,
    Num,
    Op1,
    Op2,
    OpN,
    ParseError,
    RecRecord,
    Record,
    ResolvedImport,
    Str,
    StrChunks,
    StrExpr,
    StrLiteral,
    Switch,
    Sym,
    Term,
    Var,
    Wrapped,
)
from nickel_pretty.utils.logger import get_logger

logger = get_logger(__name__)

# Keys are rendered at this width when sorting dynamic fields.
_SORT_WIDTH = 1 << 30


def format_number(value: float) -> str:
    """Decimal notation without exponent; integral values drop ``.0``."""
    if isinstance(value, bool) or not math.isfinite(value):
        raise UnsupportedConstructError("Num", f"no literal syntax for {value!r}")
    if value == int(value):
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def _ite_parts(term: Term) -> tuple[Term, Term, Term] | None:
    """``(cond, then, else)`` if ``term`` is a fully applied conditional."""
    match term:
        case App(fun=App(fun=Op1(op=UnaryOp.ITE, arg=cond), arg=then_branch), arg=else_branch):
            return cond, then_branch, else_branch
    return None


def _is_bare_head(term: Term) -> bool:
    """Can ``term`` sit in function position without parentheses?"""
    if isinstance(term, App):
        return _ite_parts(term) is None
    return is_atom(term)


def _is_operator_section(term: Term) -> bool:
    """A postfix operator waiting for its right operand, e.g. ``a &&``."""
    return isinstance(term, Op1) and term.op.pos is OpPos.POSTFIX and not isinstance(term.op, StaticAccess)


def _is_negation(term: Op2) -> bool:
    return term.op is BinaryOp.SUB and term.left == Num(0)


def _is_chained_infix(term: Term) -> bool:
    """An infix node whose left operand may continue a left-nested chain."""
    return (
        isinstance(term, Op2)
        and term.op.is_infix
        and term.op is not BinaryOp.DYN_ACCESS
        and not _is_negation(term)
    )


class TermRenderer:
    """Render terms to source text.

    Usage:
        >>> from nickel_pretty.term import Record, Num
        >>> TermRenderer().render(Record({"b": Num(1), "a": Num(2)}))
        '{ a = 2, b = 1 }'

    """

    __slots__ = ("_config", "_types")

    def __init__(
        self,
        *,
        config: PrettyConfig | None = None,
        types: TypesRenderer | None = None,
    ) -> None:
        self._config = config or get_pretty_config()
        self._types = types or TypesRenderer(self, config=self._config)

    @property
    def config(self) -> PrettyConfig:
        return self._config

    @property
    def types(self) -> TypesRenderer:
        return self._types

    def render(self, term: Term) -> str:
        """Render ``term`` at the configured width."""
        return render(self.to_doc(term), self._config.width)

    def to_doc(self, term: Term) -> Doc:
        """Translate ``term`` into a document.

        Raises:
            UnsupportedConstructError: The term holds a construct with no
                concrete syntax
            RecursionDepthError: The term is nested deeper than allowed
        """
        ctx = RenderContext(max_depth=self._config.max_depth, indent=self._config.indent)
        try:
            return self.term_doc(term, ctx)
        except RecursionError as exc:
            logger.debug("Interpreter recursion limit hit at depth %d", ctx.depth)
            raise RecursionDepthError(self._config.max_depth) from exc

    def term_doc(self, term: Term, ctx: RenderContext) -> Doc:
        """Translate ``term`` within an ongoing render."""
        ctx.enter()
        try:
            return self._term(term, ctx)
        finally:
            ctx.leave()

    # -- Dispatch ---------------------------------------------------------------

    def _term(self, term: Term, ctx: RenderContext) -> Doc:
        match term:
            case Null():
                return text("null")
            case Bool(value=value):
                return text("true" if value else "false")
            case Num(value=value):
                return text(format_number(value))
            case Str(value=value):
                return text(escape_string(value)).double_quotes()
            case StrChunks():
                return self._str_chunks(term, ctx)
            case Fun() | FunPattern():
                return self._function(term, ctx)
            case Let() | LetPattern():
                return self._let(term, ctx)
            case App():
                return self._app(term, ctx)
            case Var(name=name):
                return text(name)
            case Enum(tag=tag):
                return text(f"`{quote_identifier(tag)}")
            case Record(fields=fields, attrs=attrs):
                return self._record(fields, (), attrs.open, ctx)
            case RecRecord(fields=fields, dyn_fields=dyn_fields, attrs=attrs):
                return self._record(fields, dyn_fields, attrs.open, ctx)
            case Switch():
                return self._switch(term, ctx)
            case Array(items=items):
                return self._array(items, ctx)
            case Op1():
                return self._op1(term, ctx)
            case Op2():
                return self._op2(term, ctx)
            case OpN(op=op, args=args):
                return self._prefix_call(op.symbol, args, ctx)
            case MetaValue():
                return self._meta_value(term, ctx)
            case Import(path=path):
                return text(f'import "{escape_string(path)}"')
            case ResolvedImport(file_id=file_id):
                return text(f"# <import: file {file_id}>") + hardline()
            case Lbl():
                return text("# <label>") + hardline()
            case Sym(id=sym_id):
                return text(f"# <symbol: {sym_id}>") + hardline()
            case Wrapped(id=wrapped_id):
                return text(f"# <wrapped: {wrapped_id}>") + hardline()
            case ParseError():
                return text("# <parse error>") + hardline()
            case _:
                logger.debug("No rendering for term node %r", term)
                raise UnsupportedConstructError(type(term).__name__)

    def _atom(self, term: Term, ctx: RenderContext) -> Doc:
        """Render ``term``, parenthesized unless it is an atom."""
        doc = self.term_doc(term, ctx)
        if is_atom(term):
            return doc
        return doc.parens()

    # -- Strings ------------------------------------------------------------------

    def _str_chunks(self, term: StrChunks, ctx: RenderContext) -> Doc:
        chunks = term.chunks[::-1]
        if not chunks:
            return text('""')
        if len(chunks) == 1:
            match chunks[0]:
                case StrLiteral(text=literal):
                    return text(escape_string(literal)).double_quotes()
                case StrExpr(term=expr):
                    return (text("%{") + self.term_doc(expr, ctx) + text("}")).double_quotes()

        marker = "%" * interpolation_marker_length(chunks)
        opener = text(marker + "{")
        parts: list[Doc] = []
        for chunk in chunks:
            match chunk:
                case StrLiteral(text=literal):
                    parts.append(text(literal))
                case StrExpr(term=expr):
                    parts.append(opener + self.term_doc(expr, ctx) + text("}"))
                case _:
                    raise UnsupportedConstructError(type(chunk).__name__)
        return concat(*parts).enclose(f'm{marker}"', f'"{marker}m')

    # -- Binders ------------------------------------------------------------------

    def _function(self, term: Term, ctx: RenderContext) -> Doc:
        params: list[Doc] = []
        body = term
        while True:
            match body:
                case Fun(param=param, body=inner):
                    params.append(text(param))
                    body = inner
                case FunPattern(param=param, pattern=pattern, body=inner):
                    params.append(self._binder(param, pattern, ctx))
                    body = inner
                case _:
                    break
        header = text("fun ") + intersperse(params, text(" ")) + text(" =>")
        return (header + (line() + self.term_doc(body, ctx)).nest(ctx.indent)).group()

    def _binder(self, name: str | None, pattern: Destruct, ctx: RenderContext) -> Doc:
        """``name``, ``{pattern}`` or ``name@{pattern}``."""
        if isinstance(pattern, EmptyPattern):
            if name is None:
                raise UnsupportedConstructError("binder", "neither a name nor a pattern")
            return text(name)
        pattern_doc = self._pattern(pattern, ctx)
        if name is None:
            return pattern_doc
        return text(f"{name}@") + pattern_doc

    def _pattern(self, pattern: Destruct, ctx: RenderContext) -> Doc:
        match pattern:
            case EmptyPattern():
                return nil()
            case RecordPattern(matches=matches, open=is_open, rest=rest):
                entries = [self._match(m, ctx) for m in matches]
                if rest is not None:
                    entries.append(text(f"..{rest}"))
                elif is_open:
                    entries.append(text(".."))
                if not entries:
                    return text("{}")
                body = intersperse(entries, text(",") + line())
                return (text("{") + (linebreak() + body).nest(ctx.indent) + linebreak() + text("}")).group()
            case _:
                logger.debug("No rendering for pattern %r", pattern)
                raise UnsupportedConstructError(type(pattern).__name__)

    def _match(self, field_match: Match, ctx: RenderContext) -> Doc:
        if not isinstance(field_match, SimpleMatch):
            logger.debug("No rendering for pattern match %r", field_match)
            raise UnsupportedConstructError(type(field_match).__name__, "only simple field matches are printable")
        doc = text(quote_identifier(field_match.name))
        meta = field_match.meta
        if meta is None:
            return doc
        if has_metadata(meta):
            doc = doc + text(" ") + metadata_doc(meta, self._types, ctx)
        if meta.value is not None:
            doc = doc + text(" ? ") + self._atom(meta.value, ctx)
        return doc

    def _let(self, term: Term, ctx: RenderContext) -> Doc:
        """Render a chain of lets; nested bodies are walked, not recursed into."""
        bindings: list[Doc] = []
        body = term
        while True:
            match body:
                case Let(name=name, bound=bound, body=inner):
                    bindings.append(self._binding(text(name), bound, ctx))
                case LetPattern(name=name, pattern=pattern, bound=bound, body=inner):
                    bindings.append(self._binding(self._binder(name, pattern, ctx), bound, ctx))
                case _:
                    break
            body = inner
        doc = self.term_doc(body, ctx)
        for binding in reversed(bindings):
            doc = (binding + line() + doc).group()
        return doc

    def _binding(self, binder: Doc, bound: Term, ctx: RenderContext) -> Doc:
        """``let binder [meta] = value in``."""
        head = text("let ") + binder
        value = bound
        if isinstance(bound, MetaValue):
            if bound.value is None:
                logger.debug("No rendering for let bound to %r", bound)
                raise UnsupportedConstructError("Let", "the bound annotation has no value")
            if has_metadata(bound):
                head = head + text(" ") + metadata_doc(bound, self._types, ctx)
            value = bound.value
        return (
            head
            + text(" =")
            + (line() + self.term_doc(value, ctx)).nest(ctx.indent)
            + line()
            + text("in")
        ).group()

    # -- Application --------------------------------------------------------------

    def _app(self, term: App, ctx: RenderContext) -> Doc:
        ite = _ite_parts(term)
        if ite is not None:
            cond, then_branch, else_branch = ite
            return (
                text("if ")
                + self.term_doc(cond, ctx)
                + text(" then")
                + (line() + self.term_doc(then_branch, ctx)).nest(ctx.indent)
                + line()
                + text("else")
                + (line() + self.term_doc(else_branch, ctx)).nest(ctx.indent)
            ).group()

        if isinstance(term.fun, Op1) and term.fun.op is UnaryOp.ITE:
            # Conditional still waiting for its else branch.
            return (
                self.term_doc(term.fun, ctx)
                + text(" then")
                + (line() + self.term_doc(term.arg, ctx)).nest(ctx.indent)
                + line()
                + text("else")
            ).group()

        args: list[Term] = []
        head: Term = term
        while isinstance(head, App) and _ite_parts(head) is None:
            if isinstance(head.fun, Op1) and head.fun.op is UnaryOp.ITE:
                break
            args.append(head.arg)
            head = head.fun
        args.reverse()

        if _is_operator_section(head):
            # `a && b` binds looser than application.
            section = (self.term_doc(head, ctx) + (line() + self._atom(args[0], ctx)).nest(ctx.indent)).group()
            if len(args) == 1:
                return section
            head_doc = section.parens()
            args = args[1:]
        elif _is_bare_head(head):
            head_doc = self.term_doc(head, ctx)
        else:
            head_doc = self._atom(head, ctx)
        arg_docs = concat(*(line() + self._atom(arg, ctx) for arg in args))
        return (head_doc + arg_docs.nest(ctx.indent)).group()

    # -- Records ------------------------------------------------------------------

    def _record(
        self,
        fields: Mapping[str, Term],
        dyn_fields: tuple[tuple[Term, Term], ...],
        is_open: bool,
        ctx: RenderContext,
    ) -> Doc:
        entries = [
            self._field(text(quote_identifier(name)), value, ctx)
            for name, value in sorted(fields.items(), key=lambda item: item[0])
        ]
        keyed = [(self.term_doc(key, ctx), value) for key, value in dyn_fields]
        keyed.sort(key=lambda item: render(item[0], _SORT_WIDTH))
        entries.extend(self._field(key_doc, value, ctx) for key_doc, value in keyed)
        if is_open:
            entries.append(text(".."))
        if not entries:
            return text("{}")

        trailing = nil() if is_open else if_flat(nil(), text(","))
        body = intersperse(entries, text(",") + line()) + trailing
        return (text("{") + (line() + body).nest(ctx.indent) + line() + text("}")).group()

    def _field(self, key: Doc, value: Term, ctx: RenderContext) -> Doc:
        if isinstance(value, MetaValue):
            head = key
            if has_metadata(value, with_doc=True):
                head = head + text(" ") + metadata_doc(value, self._types, ctx, with_doc=True)
            if value.value is None:
                return head.group()
            return self._definition(head, value.value, ctx)
        return self._definition(key, value, ctx)

    def _definition(self, head: Doc, value: Term, ctx: RenderContext) -> Doc:
        """``head = value``; atomic values stay on the ``=`` line."""
        value_doc = self.term_doc(value, ctx)
        if is_atom(value):
            return (head + text(" = ") + value_doc).group()
        return (head + text(" =") + (line() + value_doc).nest(ctx.indent)).group()

    # -- Switch and arrays --------------------------------------------------------

    def _switch(self, term: Switch, ctx: RenderContext) -> Doc:
        branches = [
            (text(f"`{quote_identifier(tag)} =>") + (line() + self.term_doc(body, ctx)).nest(ctx.indent)).group()
            for tag, body in sorted(term.cases.items(), key=lambda item: item[0])
        ]
        if term.default is not None:
            branches.append(
                (text("_ =>") + (line() + self.term_doc(term.default, ctx)).nest(ctx.indent)).group()
            )
        if branches:
            body = intersperse(branches, text(",") + line()) + if_flat(nil(), text(","))
            cases = (text("{") + (line() + body).nest(ctx.indent) + line() + text("}")).group()
        else:
            cases = text("{}")
        return text("switch ") + cases + text(" ") + self._atom(term.scrutinee, ctx)

    def _array(self, items: tuple[Term, ...], ctx: RenderContext) -> Doc:
        if not items:
            return text("[]")
        body = intersperse((self.term_doc(item, ctx) for item in items), text(",") + line())
        body = body + if_flat(nil(), text(","))
        return (text("[") + (linebreak() + body).nest(ctx.indent) + linebreak() + text("]")).group()

    # -- Operators ----------------------------------------------------------------

    def _op1(self, term: Op1, ctx: RenderContext) -> Doc:
        op = term.op
        match op.pos:
            case OpPos.PREFIX:
                symbol = op.symbol
                separator = " " if symbol.startswith("%") else ""
                return text(symbol + separator) + self._atom(term.arg, ctx)
            case OpPos.POSTFIX:
                if isinstance(op, StaticAccess):
                    return self._atom(term.arg, ctx) + text("." + quote_identifier(op.field))
                return self._atom(term.arg, ctx) + text(" " + op.symbol)
            case OpPos.SPECIAL if op is UnaryOp.ITE:
                return text("if ") + self.term_doc(term.arg, ctx)
            case _:
                logger.debug("No rendering for unary operator %r", op)
                raise UnsupportedConstructError(f"Op1({op!r})", f"{op.pos.value} operator has no concrete syntax")

    def _op2(self, term: Op2, ctx: RenderContext) -> Doc:
        op = term.op
        if op is BinaryOp.DYN_ACCESS:
            # Operands are stored field first, record second.
            if isinstance(term.left, (Str, StrChunks)):
                field = self.term_doc(term.left, ctx)
            else:
                field = (text("%{") + self.term_doc(term.left, ctx) + text("}")).double_quotes()
            return self._atom(term.right, ctx) + text(".") + field
        if not op.is_infix:
            return self._prefix_call(op.symbol, (term.left, term.right), ctx)
        if _is_negation(term):
            return text("-") + self._atom(term.right, ctx)
        return self._infix_chain(term, ctx)

    def _infix_chain(self, term: Op2, ctx: RenderContext) -> Doc:
        """Render ``((a + b) - c) * d`` walking the left spine iteratively."""
        links: list[Op2] = []
        current: Term = term
        while _is_chained_infix(current):
            links.append(current)
            current = current.left
        doc = self._atom(current, ctx)
        for index, link in enumerate(reversed(links)):
            if index:
                doc = doc.parens()
            doc = (
                doc
                + text(" " + link.op.symbol)
                + (line() + self._atom(link.right, ctx)).nest(ctx.indent)
            ).group()
        return doc

    def _prefix_call(self, symbol: str, args: tuple[Term, ...], ctx: RenderContext) -> Doc:
        arg_docs = concat(*(line() + self._atom(arg, ctx) for arg in args))
        return (text(symbol) + arg_docs.nest(ctx.indent)).group()

    def _meta_value(self, term: MetaValue, ctx: RenderContext) -> Doc:
        clause = metadata_doc(term, self._types, ctx)
        if term.value is None:
            return clause
        value_doc = self._atom(term.value, ctx)
        if not has_metadata(term):
            return value_doc
        return (value_doc + line() + clause).nest(ctx.indent).group()


__all__ = ["TermRenderer", "format_number"]
