"""StringBuilder for O(n) output accumulation during layout.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated string concatenation.

Indentation after a newline is held back until the next non-empty append,
so lines that end up empty never carry trailing spaces.

Thread Safety:
StringBuilder instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator with column tracking.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("{").newline(2).append("a = 1").newline(0).append("}").build()
            '{\\n  a = 1\\n}'

    """

    __slots__ = ("_column", "_parts", "_pending_indent")

    def __init__(self) -> None:
        """Initialize empty StringBuilder."""
        self._parts: list[str] = []
        self._pending_indent = 0
        self._column = 0

    @property
    def column(self) -> int:
        """Width of the text on the current line, pending indentation included."""
        return self._column

    def append(self, s: str) -> StringBuilder:
        """Append a string to the builder.

        Args:
            s: String to append (empty strings are skipped)

        Returns:
            self for method chaining
        """
        if not s:
            return self
        if self._pending_indent:
            self._parts.append(" " * self._pending_indent)
            self._pending_indent = 0
        self._parts.append(s)
        last_newline = s.rfind("\n")
        if last_newline == -1:
            self._column += len(s)
        else:
            self._column = len(s) - last_newline - 1
        return self

    def newline(self, indent: int) -> StringBuilder:
        """Start a new line indented by ``indent`` columns.

        Returns:
            self for method chaining
        """
        self._parts.append("\n")
        self._pending_indent = indent
        self._column = indent
        return self

    def build(self) -> str:
        """Join all parts into final string."""
        return "".join(self._parts)
