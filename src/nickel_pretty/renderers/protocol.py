"""Renderer protocol: stable interface for AST-to-text renderers.

Any renderer that implements ``render(node) -> str`` and
``to_doc(node) -> Doc`` conforms to this protocol. ``TermRenderer`` and
``TypesRenderer`` are the built-in implementations.

Example:
    from nickel_pretty.renderers.protocol import ASTRenderer

    def show(renderer: ASTRenderer, node) -> str:
        return renderer.render(node)

"""

from typing import Any, Protocol, runtime_checkable

from nickel_pretty.doc import Doc


@runtime_checkable
class ASTRenderer(Protocol):
    """Protocol for AST renderers."""

    def render(self, node: Any) -> str:
        """Render a node to source text at the configured width."""
        ...

    def to_doc(self, node: Any) -> Doc:
        """Translate a node into a width-agnostic document."""
        ...
