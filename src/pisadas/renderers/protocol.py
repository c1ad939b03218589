"""Renderer protocols: stable interfaces around the render engine.

``Walkable`` is what a renderer consumes: any tree whose ``walker()``
yields events with ``.node`` and ``.entering``. Pisadas' own ``Node``
conforms, and so can a third-party parser's tree with a thin adapter.

``ASTRenderer`` is what a renderer offers. ``HtmlRenderer`` is the
reference implementation.

Example:
    from pisadas.renderers.protocol import ASTRenderer

    def render_page(renderer: ASTRenderer, doc: Node) -> str:
        return renderer.render(doc)

"""

from collections.abc import Iterable
from typing import Any, Protocol


class WalkEventLike(Protocol):
    """A single (node, entering) step."""

    @property
    def node(self) -> Any: ...

    @property
    def entering(self) -> bool: ...


class Walkable(Protocol):
    """A tree that can be walked depth-first."""

    def walker(self) -> Iterable[WalkEventLike]: ...


class ASTRenderer(Protocol):
    """Protocol for tree renderers.

    Implementations accept a walkable tree and return the rendered string.

    """

    def render(self, tree: Walkable) -> str:
        """Render a tree to a string.

        Args:
            tree: Root of the tree to render.

        Returns:
            Rendered string output.

        """
        ...
