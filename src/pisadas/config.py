"""Render configuration for Pisadas.

RenderOptions is an immutable value handed to a renderer at construction.
Context-scoped defaults use Python's ContextVars (PEP 567), so a framework
can switch on safe mode for one request without touching other threads.

Usage:
    # Explicit options
    renderer = HtmlRenderer(RenderOptions(safe=True))

    # Context defaults, picked up by renderers built inside the block
    with render_options_context(RenderOptions(sourcepos=True)):
        html = render(doc)

"""

import dataclasses
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Immutable render configuration.

    Attributes:
        softbreak: Output for a soft line break. ``"\\n"`` keeps source
            wrapping, ``"<br />"`` turns it into hard breaks, ``" "``
            ignores it. An empty string renders as ``"\\n"``.
        safe: Replace raw HTML with a placeholder comment and drop
            ``javascript:``, ``vbscript:``, ``file:`` and ``data:``
            destinations (inline raster images excepted).
        sourcepos: Annotate block tags with ``data-sourcepos``.

    """

    softbreak: str = "\n"
    safe: bool = False
    sourcepos: bool = False

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "RenderOptions":
        """Create RenderOptions from a mapping.

        Useful when options come from a settings file or a framework's own
        configuration. Unknown keys are silently ignored.

        Example:
            >>> options = RenderOptions.from_dict({"safe": True, "theme": "dark"})
            >>> options.safe
            True

        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)

    def replace(self, **changes: Any) -> "RenderOptions":
        """Return a copy with ``changes`` applied."""
        return dataclasses.replace(self, **changes)


# Module-level default (reused, never recreated)
_DEFAULT_OPTIONS: RenderOptions = RenderOptions()

_render_options: ContextVar[RenderOptions] = ContextVar(
    "render_options",
    default=_DEFAULT_OPTIONS,
)


def get_render_options() -> RenderOptions:
    """Get the render options for the current context."""
    return _render_options.get()


def set_render_options(options: RenderOptions) -> None:
    """Set the render options for the current context.

    Only affects the current thread's context.
    """
    _render_options.set(options)


def reset_render_options() -> None:
    """Reset the current context to the default options."""
    _render_options.set(_DEFAULT_OPTIONS)


@contextmanager
def render_options_context(options: RenderOptions) -> Iterator[None]:
    """Use ``options`` as the context default inside a ``with`` block.

    The previous options are restored on exit, even when an exception is
    raised.

    Example:
        >>> with render_options_context(RenderOptions(safe=True)):
        ...     get_render_options().safe
        True

    """
    token = _render_options.set(options)
    try:
        yield
    finally:
        _render_options.reset(token)


__all__ = [
    "RenderOptions",
    "get_render_options",
    "set_render_options",
    "reset_render_options",
    "render_options_context",
]
