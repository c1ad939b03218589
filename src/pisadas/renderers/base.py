"""Render engine: walk a tree and dispatch each event by node kind.

BaseRenderer owns the walk-and-dispatch loop. It declares one handler per
node kind, ``visit_<kind>(node, entering, ctx)``, each falling through to
``visit_default``, which contributes nothing. A concrete renderer overrides
the kinds it cares about and emits output through two primitives:

- ``lit(s, ctx)`` appends ``s`` unconditionally
- ``out(s, ctx)`` appends ``s`` through whatever filtering the subclass
  defines (none here)

Example, a renderer that only keeps text:

    class TextOnly(BaseRenderer):
        def visit_text(self, node, entering, ctx):
            self.out(node.literal or "", ctx)

    TextOnly().render(doc)

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for
each render() call. Renderer instances hold only immutable configuration,
so one instance can serve concurrent renders.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pisadas.errors import UnknownNodeTypeError
from pisadas.nodes import NodeType
from pisadas.renderers.protocol import Walkable
from pisadas.stringbuilder import StringBuilder
from pisadas.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Created fresh for each render() call and discarded when it returns.

    Attributes:
        sb: Output buffer
        last_out: Last string passed to ``out``; starts as a newline so a
            document does not open with a blank line
        disable_tags: Nesting depth of contexts where tags are stripped
            from output (image alt text)

    """

    sb: StringBuilder = field(default_factory=StringBuilder)
    last_out: str = "\n"
    disable_tags: int = 0


class BaseRenderer:
    """Type-dispatching tree renderer with no-op handlers.

    Subclass and override ``visit_*`` methods for the node kinds the output
    format needs. Unknown node kinds abort the render with
    UnknownNodeTypeError.

    """

    __slots__ = ()

    def render(self, tree: Walkable) -> str:
        """Render ``tree`` and return the output.

        Args:
            tree: Root node (anything exposing ``walker()``)

        Returns:
            Rendered string

        Raises:
            UnknownNodeTypeError: If the walk yields a node kind outside
                the NodeType vocabulary. No partial output is returned.
        """
        ctx = self.new_context()
        for event in tree.walker():
            self._dispatch(event.node, event.entering, ctx)
        return ctx.sb.build()

    def new_context(self) -> RenderContext:
        """Create the state for one render() call."""
        return RenderContext()

    # -- Buffer primitives -----------------------------------------------------

    def lit(self, s: str, ctx: RenderContext) -> None:
        """Append ``s`` to the output as is."""
        ctx.sb.append(s)

    def out(self, s: str, ctx: RenderContext) -> None:
        """Append ``s`` to the output, subject to subclass filtering."""
        self.lit(s, ctx)

    # -- Handlers --------------------------------------------------------------

    def visit_default(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        """Called for node kinds without an overriding handler."""
        return None

    def visit_document(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_text(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_softbreak(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_linebreak(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_emph(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_strong(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_html_inline(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_custom_inline(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_link(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_image(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_code(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_paragraph(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_block_quote(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_item(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_list(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_heading(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_code_block(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_html_block(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_custom_block(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    def visit_thematic_break(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.visit_default(node, entering, ctx)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        """Match-based dispatch to visit_* methods."""
        try:
            kind = NodeType.coerce(node.type)
        except UnknownNodeTypeError:
            logger.error("Unknown node type %r in render tree", node.type)
            raise

        match kind:
            case NodeType.DOCUMENT:
                self.visit_document(node, entering, ctx)
            case NodeType.TEXT:
                self.visit_text(node, entering, ctx)
            case NodeType.SOFTBREAK:
                self.visit_softbreak(node, entering, ctx)
            case NodeType.LINEBREAK:
                self.visit_linebreak(node, entering, ctx)
            case NodeType.EMPH:
                self.visit_emph(node, entering, ctx)
            case NodeType.STRONG:
                self.visit_strong(node, entering, ctx)
            case NodeType.HTML_INLINE:
                self.visit_html_inline(node, entering, ctx)
            case NodeType.CUSTOM_INLINE:
                self.visit_custom_inline(node, entering, ctx)
            case NodeType.LINK:
                self.visit_link(node, entering, ctx)
            case NodeType.IMAGE:
                self.visit_image(node, entering, ctx)
            case NodeType.CODE:
                self.visit_code(node, entering, ctx)
            case NodeType.PARAGRAPH:
                self.visit_paragraph(node, entering, ctx)
            case NodeType.BLOCK_QUOTE:
                self.visit_block_quote(node, entering, ctx)
            case NodeType.ITEM:
                self.visit_item(node, entering, ctx)
            case NodeType.LIST:
                self.visit_list(node, entering, ctx)
            case NodeType.HEADING:
                self.visit_heading(node, entering, ctx)
            case NodeType.CODE_BLOCK:
                self.visit_code_block(node, entering, ctx)
            case NodeType.HTML_BLOCK:
                self.visit_html_block(node, entering, ctx)
            case NodeType.CUSTOM_BLOCK:
                self.visit_custom_block(node, entering, ctx)
            case NodeType.THEMATIC_BREAK:
                self.visit_thematic_break(node, entering, ctx)
