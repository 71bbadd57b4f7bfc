"""
nickel_pretty: width-aware pretty printer for Nickel-style configuration terms

Renders an in-memory AST (terms, types, metadata, destructuring patterns)
back into readable, re-parseable source text. Layout is document based:
terms are translated to a width-agnostic document, which is then laid out
against a target line width.

Quick Start:
    >>> from nickel_pretty import pretty
    >>> from nickel_pretty.term import Num, Record
    >>> pretty(Record({"b": Num(1), "a": Num(2)}))
    '{ a = 2, b = 1 }'

    >>> print(pretty(Record({"b": Num(1), "a": Num(2)}), width=5))
    {
      a = 2,
      b = 1,
    }

    >>> # Types
    >>> from nickel_pretty import pretty_types
    >>> from nickel_pretty.types import Arrow, NumType, StrType
    >>> pretty_types(Arrow(Arrow(NumType(), NumType()), StrType()))
    '(Num -> Num) -> Str'

Installation:
    pip install nickel-pretty        # zero runtime dependencies
"""

import dataclasses

from nickel_pretty.config import (
    PrettyConfig,
    get_pretty_config,
    pretty_config_context,
    reset_pretty_config,
    set_pretty_config,
)
from nickel_pretty.doc import Doc
from nickel_pretty.errors import PrettyError, RecursionDepthError, UnsupportedConstructError
from nickel_pretty.layout import DocPrinter, render
from nickel_pretty.renderers.protocol import ASTRenderer
from nickel_pretty.renderers.term import TermRenderer
from nickel_pretty.renderers.types import TypesRenderer
from nickel_pretty.term import Term
from nickel_pretty.types import Types
from nickel_pretty.utils.logger import get_logger

__version__ = "0.1.0"

logger = get_logger(__name__)


def _config_for(width: int | None, indent: int | None, max_depth: int | None = None) -> PrettyConfig:
    """Active config with explicit arguments layered on top."""
    config = get_pretty_config()
    overrides = {
        key: value
        for key, value in (("width", width), ("indent", indent), ("max_depth", max_depth))
        if value is not None
    }
    if not overrides:
        return config
    return dataclasses.replace(config, **overrides)


def pretty(term: Term, *, width: int | None = None, indent: int | None = None) -> str:
    """Render a term as source text.

    Args:
        term: Term to print
        width: Target line width (defaults to the active PrettyConfig)
        indent: Columns per nesting level (defaults to the active PrettyConfig)

    Returns:
        The source text. Nothing is returned on failure; errors propagate.

    Raises:
        UnsupportedConstructError: The term has a construct without syntax
        RecursionDepthError: The term is nested too deeply

    Example:
        >>> from nickel_pretty.operators import BinaryOp
        >>> from nickel_pretty.term import Num, Op2, Var
        >>> pretty(Op2(BinaryOp.SUB, Num(0), Var("x")))
        '-x'
    """
    config = _config_for(width, indent)
    logger.debug("Printing %s at width %d", type(term).__name__, config.width)
    return TermRenderer(config=config).render(term)


def pretty_types(ty: Types, *, width: int | None = None, indent: int | None = None) -> str:
    """Render a type as source text.

    Example:
        >>> from nickel_pretty.types import Forall, TypeVar, Arrow
        >>> pretty_types(Forall("a", Forall("b", Arrow(TypeVar("a"), TypeVar("b")))))
        'forall a b. a -> b'
    """
    config = _config_for(width, indent)
    logger.debug("Printing %s at width %d", type(ty).__name__, config.width)
    return TypesRenderer(config=config).render(ty)


def to_doc(term: Term) -> Doc:
    """Translate a term into a document without laying it out."""
    return TermRenderer().to_doc(term)


class PrettyPrinter:
    """Reusable printer for terms and types.

    Usage:
        >>> from nickel_pretty.term import Array, Num
        >>> printer = PrettyPrinter(width=40)
        >>> printer(Array((Num(1), Num(2))))
        '[1, 2]'

    Thread Safety:
        Holds only an immutable PrettyConfig. Safe to share across threads.

    """

    __slots__ = ("_config", "_terms", "_types")

    def __init__(
        self,
        *,
        width: int | None = None,
        indent: int | None = None,
        max_depth: int | None = None,
    ) -> None:
        self._config = _config_for(width, indent, max_depth)
        self._terms = TermRenderer(config=self._config)
        self._types = self._terms.types

    @property
    def config(self) -> PrettyConfig:
        return self._config

    def __call__(self, value: Term | Types) -> str:
        """Render a term or a type at the printer's width."""
        return self.render(value)

    def render(self, value: Term | Types) -> str:
        return render(self.to_doc(value), self._config.width)

    def to_doc(self, value: Term | Types) -> Doc:
        """Translate a term or a type into a document."""
        if isinstance(value, Types):
            return self._types.to_doc(value)
        return self._terms.to_doc(value)


__all__ = [  # noqa: RUF022
    # Version
    "__version__",
    # Core API
    "pretty",
    "pretty_types",
    "to_doc",
    "render",
    # Renderers
    "ASTRenderer",
    "DocPrinter",
    "PrettyPrinter",
    "TermRenderer",
    "TypesRenderer",
    # Documents
    "Doc",
    # AST roots
    "Term",
    "Types",
    # Errors
    "PrettyError",
    "RecursionDepthError",
    "UnsupportedConstructError",
    # Configuration (ContextVar-based)
    "PrettyConfig",
    "get_pretty_config",
    "set_pretty_config",
    "reset_pretty_config",
    "pretty_config_context",
]
