"""nickel_pretty renderers.

Renderers translate typed AST nodes into documents and lay them out.

Available Renderers:
- TermRenderer: Renders terms, including metadata and patterns
- TypesRenderer: Renders types and rows

Thread Safety:
All per-render state lives in a RenderContext local to each to_doc() call.
Safe for concurrent use from multiple threads.

"""

from nickel_pretty.renderers.term import TermRenderer
from nickel_pretty.renderers.types import TypesRenderer

__all__ = ["TermRenderer", "TypesRenderer"]
