"""
Pisadas: tree-walking HTML renderer for CommonMark documents

Walks a CommonMark node tree depth-first and hands each (node, entering)
event to a per-kind handler. The render engine knows the node vocabulary;
renderers decide how each kind is written. Zero runtime dependencies.

Quick Start:
    >>> from pisadas import build, render
    >>> doc = build("document", [
    ...     build("paragraph", [build("text", literal="A & B")]),
    ... ])
    >>> render(doc)
    '<p>A &amp; B</p>\\n'

Safe Mode:
    >>> render(doc, safe=True)      # raw HTML and javascript: links dropped

Trees From Elsewhere:
    >>> from pisadas import from_json
    >>> doc = from_json(parser_output)
    >>> html = HtmlRenderer(sourcepos=True).render(doc)
"""

from pisadas.config import (
    RenderOptions,
    get_render_options,
    render_options_context,
    reset_render_options,
    set_render_options,
)
from pisadas.errors import (
    PisadasError,
    RenderError,
    SerializationError,
    TreeError,
    UnknownNodeTypeError,
)
from pisadas.location import SourceLocation
from pisadas.nodes import Node, NodeType, build
from pisadas.renderers.base import BaseRenderer, RenderContext
from pisadas.renderers.html import HtmlRenderer
from pisadas.renderers.protocol import ASTRenderer, Walkable
from pisadas.serialization import from_dict, from_json, to_dict, to_json
from pisadas.walker import NodeWalker, WalkEvent

__version__ = "0.1.0"


def render(
    tree: Walkable,
    *,
    softbreak: str | None = None,
    safe: bool | None = None,
    sourcepos: bool | None = None,
) -> str:
    """Render a node tree to HTML.

    Options left as None come from the context defaults
    (see ``render_options_context``).

    Args:
        tree: Root node to render
        softbreak: Output for soft line breaks
        safe: Omit raw HTML and unsafe link/image destinations
        sourcepos: Annotate block tags with ``data-sourcepos``

    Returns:
        HTML string

    Example:
        >>> render(build("heading", [build("text", literal="Hi")], level=2))
        '<h2>Hi</h2>\\n'
    """
    overrides = {
        name: value
        for name, value in (("softbreak", softbreak), ("safe", safe), ("sourcepos", sourcepos))
        if value is not None
    }
    return HtmlRenderer(**overrides).render(tree)


__all__ = [
    # Main API
    "render",
    "build",
    # Tree
    "Node",
    "NodeType",
    "NodeWalker",
    "SourceLocation",
    "WalkEvent",
    # Rendering
    "ASTRenderer",
    "BaseRenderer",
    "HtmlRenderer",
    "RenderContext",
    "Walkable",
    # Configuration
    "RenderOptions",
    "get_render_options",
    "render_options_context",
    "reset_render_options",
    "set_render_options",
    # Serialization
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
    # Errors
    "PisadasError",
    "RenderError",
    "SerializationError",
    "TreeError",
    "UnknownNodeTypeError",
]
