"""Per-render translation state.

Thread Safety:
    Each ``to_doc()`` call creates its own RenderContext. Renderer
    instances hold only immutable configuration and can be shared.
"""

from dataclasses import dataclass

from nickel_pretty.errors import RecursionDepthError
from nickel_pretty.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class RenderContext:
    """Mutable state of one translation: the current nesting depth.

    Attributes:
        max_depth: Deepest nesting allowed before giving up
        indent: Columns added per nesting level
        depth: Current nesting depth

    """

    max_depth: int
    indent: int = 2
    depth: int = 0

    def enter(self) -> None:
        """Descend one level; raise once the bound is exceeded."""
        self.depth += 1
        if self.depth > self.max_depth:
            logger.debug("Nesting depth %d exceeds max_depth", self.depth)
            raise RecursionDepthError(self.max_depth)

    def leave(self) -> None:
        self.depth -= 1
