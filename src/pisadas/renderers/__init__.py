"""Pisadas renderers.

Renderers walk a node tree and convert each event into output fragments.

Available Renderers:
- BaseRenderer: Walk-and-dispatch engine with no-op handlers
- HtmlRenderer: Renders the tree to HTML

Thread Safety:
All renderers keep per-render state in a RenderContext local to each
render() call. Safe for concurrent use from multiple threads.

"""

from pisadas.renderers.base import BaseRenderer, RenderContext
from pisadas.renderers.html import HtmlRenderer

__all__ = ["BaseRenderer", "HtmlRenderer", "RenderContext"]
