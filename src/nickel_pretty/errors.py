"""Exception classes for nickel_pretty.

Provides standardized exceptions for error handling throughout the printer.
A failed print never yields partial output: every error propagates out of
the translation before the layout step runs.
"""

from __future__ import annotations


class PrettyError(Exception):
    """Base exception for all nickel_pretty errors.

    Subclass this for specific error categories.
    """

    pass


class UnsupportedConstructError(PrettyError):
    """A construct the translator has no rendering for.

    Raised for programmer-facing gaps (nested destructuring matches, unary
    special forms without a concrete syntax, non-finite numbers, objects
    that are not AST nodes). Printing something guessed instead would
    produce invalid or semantically wrong source text.
    """

    def __init__(self, construct: str, message: str | None = None) -> None:
        """Initialize unsupported construct error.

        Args:
            construct: Name of the construct (e.g., "AssignMatch", "Op1(SwitchOp)")
            message: Optional extra detail
        """
        self.construct = construct
        detail = f": {message}" if message else ""
        super().__init__(f"Pretty printing is not implemented for {construct}{detail}")


class RecursionDepthError(PrettyError):
    """Input nested too deeply to translate.

    Raised when term or type nesting exceeds the configured ``max_depth``,
    or when the interpreter's own recursion limit is hit on the way.
    """

    def __init__(self, max_depth: int) -> None:
        """Initialize depth error.

        Args:
            max_depth: The nesting bound that was exceeded
        """
        self.max_depth = max_depth
        super().__init__(f"Input is nested too deeply to pretty print (max depth {max_depth})")
