"""ContextVar-based printer configuration for nickel_pretty.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The only knob the layout engine needs is the target line width; indentation
step and the nesting bound ride along.

Usage:
    # One-off override
    from nickel_pretty import pretty
    text = pretty(term, width=40)

    # Direct config usage
    from nickel_pretty.config import set_pretty_config, reset_pretty_config, PrettyConfig

    set_pretty_config(PrettyConfig(width=40))
    try:
        text = pretty(term)
    finally:
        reset_pretty_config()

    # Or use the context manager
    with pretty_config_context(PrettyConfig(width=40)):
        text = pretty(term)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PrettyConfig:
    """Immutable printer configuration.

    Attributes:
        width: Target line width used for group-breaking decisions
        indent: Columns added per nesting level
        max_depth: Maximum term/type nesting depth before giving up

    """

    width: int = 80
    indent: int = 2
    max_depth: int = 200

    @classmethod
    def from_dict(cls, config_dict: dict) -> "PrettyConfig":
        """Create PrettyConfig from dictionary.

        Only includes keys that are valid PrettyConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = PrettyConfig.from_dict({"width": 40, "colour": "red"})
            >>> config.width
            40

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: PrettyConfig = PrettyConfig()

_pretty_config: ContextVar[PrettyConfig] = ContextVar(
    "pretty_config",
    default=_DEFAULT_CONFIG,
)


def get_pretty_config() -> PrettyConfig:
    """Get current printer configuration (thread-local)."""
    return _pretty_config.get()


def set_pretty_config(config: PrettyConfig) -> None:
    """Set printer configuration for current context.

    Only affects the current thread's context. Other threads are unaffected.
    """
    _pretty_config.set(config)


def reset_pretty_config() -> None:
    """Reset to default configuration."""
    _pretty_config.set(_DEFAULT_CONFIG)


@contextmanager
def pretty_config_context(config: PrettyConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with pretty_config_context(PrettyConfig(width=20)):
        ...     get_pretty_config().width
        20

    """
    previous = _pretty_config.get()
    _pretty_config.set(config)
    try:
        yield
    finally:
        _pretty_config.set(previous)


__all__ = [
    "PrettyConfig",
    "get_pretty_config",
    "set_pretty_config",
    "reset_pretty_config",
    "pretty_config_context",
]
