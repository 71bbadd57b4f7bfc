"""String escaping and interpolation-safe quoting.

Strings interpolate with ``%{...}``. Multiline strings are delimited by
``m%"`` and ``"%m`` and may widen the marker (``m%%"``, ``%%{``, ``"%%m``)
so that their literal content cannot be mistaken for an interpolation or a
closing delimiter. ``min_interpolate_sign`` finds the smallest marker run
that is safe for a piece of literal text.

Standard (single-line) strings are escaped instead; see ``escape_string``.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Iterable, Iterator

from nickel_pretty.term import StrChunk, StrLiteral

KEYWORDS = frozenset(
    {
        "default",
        "doc",
        "else",
        "false",
        "forall",
        "fun",
        "if",
        "import",
        "in",
        "let",
        "null",
        "switch",
        "then",
        "true",
        "Array",
        "Bool",
        "Dyn",
        "Num",
        "Str",
    }
)

_IDENTIFIER_RE = re.compile(r"_?[a-zA-Z][_a-zA-Z0-9'-]*")

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_ESCAPE_RE = re.compile(r'[\\"\n\r\t]|%\{')


@functools.cache
def _interpolation_pattern() -> re.Pattern[str]:
    """Marker runs that collide with interpolation or the closing delimiter."""
    return re.compile(r'(%+\{)|("%+m)')


def min_interpolate_sign(text: str) -> int:
    """Minimum number of ``%`` a multiline string needs to contain ``text``.

    Every ``%...%{`` run needs a marker one longer than its ``%`` count,
    which is the length of the match. Every ``"%...%m`` run needs a marker
    other than its ``%`` count; the match length minus one (the quote)
    is used, which is safe though not always minimal.

    Example:
        >>> min_interpolate_sign("50%{")
        2
        >>> min_interpolate_sign('say "%%m')
        3
        >>> min_interpolate_sign("100%")
        0
    """
    needed = 0
    for match in _interpolation_pattern().finditer(text):
        length = match.end() - match.start()
        if not match.group().endswith("{"):
            length -= 1
        needed = max(needed, length)
    return needed


def _literal_runs(chunks: Iterable[StrChunk]) -> Iterator[str]:
    """Maximal runs of adjacent literal text, as they will be printed.

    A run followed by an interpolation gets that interpolation's ``{``
    appended, so a trailing ``%`` is counted as part of the opener.
    """
    run: list[str] = []
    for chunk in chunks:
        if isinstance(chunk, StrLiteral):
            run.append(chunk.text)
            continue
        if run:
            yield "".join(run) + "{"
            run = []
    if run:
        yield "".join(run)


def interpolation_marker_length(chunks: Iterable[StrChunk]) -> int:
    """One marker length serving every chunk of a string, at least 1.

    ``chunks`` are in source order. Adjacent literals are scanned as one
    text, since a marker-like run may span their boundary.

    Example:
        >>> from nickel_pretty.term import StrExpr, Var
        >>> interpolation_marker_length([StrLiteral("50%"), StrExpr(Var("x"))])
        2
    """
    needed = 1
    for text in _literal_runs(chunks):
        needed = max(needed, min_interpolate_sign(text))
    return needed


def escape_string(s: str) -> str:
    """Escape ``s`` for use between double quotes.

    Backslashes, double quotes, interpolation openers and line-breaking
    control characters are escaped.
    """
    return _ESCAPE_RE.sub(_escape_match, s)


def _escape_match(match: re.Match[str]) -> str:
    found = match.group()
    if found == "%{":
        return "\\%{"
    return _ESCAPES[found]


def is_identifier(name: str) -> bool:
    """True if ``name`` can be written bare as a field name."""
    return _IDENTIFIER_RE.fullmatch(name) is not None and name not in KEYWORDS


def quote_identifier(name: str) -> str:
    """``name`` as written in source: bare when possible, quoted otherwise."""
    if is_identifier(name):
        return name
    return f'"{escape_string(name)}"'


__all__ = [
    "KEYWORDS",
    "escape_string",
    "interpolation_marker_length",
    "is_identifier",
    "min_interpolate_sign",
    "quote_identifier",
]
