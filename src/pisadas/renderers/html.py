"""HTML renderer for CommonMark node trees.

Renders one fragment per walk event into the RenderContext buffer, with
byte-stable whitespace: block constructs are separated by exactly one
newline via ``cr``, which only emits a newline when the last output was not
already one.

Image alt text is produced by the image's own descendants. While inside an
image, ``out`` strips every tag from what it appends, so the alt attribute
holds plain text whatever inline markup the image contains.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single HtmlRenderer instance
and call render() concurrently without synchronization.
"""

import re
from collections.abc import Sequence
from typing import Any

from pisadas.config import RenderOptions, get_render_options
from pisadas.location import SourceLocation
from pisadas.nodes import NodeType
from pisadas.renderers.base import BaseRenderer, RenderContext
from pisadas.utils.logger import get_logger
from pisadas.utils.text import escape_html, strip_tags

logger = get_logger(__name__)

RAW_HTML_OMITTED = "<!-- raw HTML omitted -->"

_UNSAFE_PROTOCOL = re.compile(r"^(?:javascript|vbscript|file|data):", re.IGNORECASE)
_SAFE_DATA_PROTOCOL = re.compile(r"^data:image/(?:png|gif|jpeg|webp)", re.IGNORECASE)


def potentially_unsafe(url: str) -> bool:
    """Check whether a destination uses a scheme safe mode drops.

    Inline PNG, GIF, JPEG and WebP data URIs are allowed through.

    Examples:
        >>> potentially_unsafe("javascript:alert(1)")
        True
        >>> potentially_unsafe("data:image/png;base64,AAAA")
        False
        >>> potentially_unsafe("https://example.com")
        False
    """
    return bool(_UNSAFE_PROTOCOL.match(url)) and not _SAFE_DATA_PROTOCOL.match(url)


def tag(name: str, attrs: Sequence[tuple[str, str]] = (), selfclosing: bool = False) -> str:
    """Build an HTML tag.

    Attribute values are inserted verbatim; escape them first.

    Examples:
        >>> tag("a", [("href", "/x")])
        '<a href="/x">'
        >>> tag("br", selfclosing=True)
        '<br />'
        >>> tag("/p")
        '</p>'
    """
    parts = [f"<{name}"]
    for key, value in attrs:
        parts.append(f' {key}="{value}"')
    if selfclosing:
        parts.append(" /")
    parts.append(">")
    return "".join(parts)


class HtmlRenderer(BaseRenderer):
    """Render a node tree to HTML.

    Usage:
        >>> renderer = HtmlRenderer(safe=True)
        >>> renderer.render(doc)
        '<p>A &amp; B</p>\\n'

    Options come from ``options`` when given, otherwise from the context
    defaults (see ``pisadas.config``) at construction time. Keyword
    overrides are applied on top.

    Thread Safety:
        Multiple threads can safely share a single HtmlRenderer instance.
        Each render() call creates an independent RenderContext.
    """

    __slots__ = ("_options",)

    def __init__(self, options: RenderOptions | None = None, **overrides: Any) -> None:
        """Initialize renderer.

        Args:
            options: Render options (context defaults if None)
            **overrides: Individual RenderOptions fields to override
        """
        options = options if options is not None else get_render_options()
        if overrides:
            options = options.replace(**overrides)
        self._options = options

    @property
    def options(self) -> RenderOptions:
        return self._options

    # =========================================================================
    # Emission helpers
    # =========================================================================

    def out(self, s: str, ctx: RenderContext) -> None:
        """Append ``s``, stripping tags while inside image alt text."""
        if ctx.disable_tags > 0:
            self.lit(strip_tags(s), ctx)
        else:
            self.lit(s, ctx)
        ctx.last_out = s

    def cr(self, ctx: RenderContext) -> None:
        """Append a newline unless the last output already was one."""
        if ctx.last_out != "\n":
            self.lit("\n", ctx)
            ctx.last_out = "\n"

    def attrs(self, node: Any) -> list[tuple[str, str]]:
        """Collect the attributes every tag of ``node`` carries."""
        if self._options.sourcepos:
            pos = SourceLocation.coerce(getattr(node, "sourcepos", None))
            if pos is not None:
                return [("data-sourcepos", pos.to_sourcepos())]
        return []

    def _is_unsafe(self, url: str) -> bool:
        return self._options.safe and potentially_unsafe(url)

    # =========================================================================
    # Inline nodes
    # =========================================================================

    def visit_text(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.out(escape_html(node.literal or "", quote=False), ctx)

    def visit_softbreak(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.out(self._options.softbreak or "\n", ctx)

    def visit_linebreak(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.out(tag("br", selfclosing=True), ctx)
        self.cr(ctx)

    def visit_emph(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.out(tag("em" if entering else "/em"), ctx)

    def visit_strong(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.out(tag("strong" if entering else "/strong"), ctx)

    def visit_link(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        if not entering:
            self.out(tag("/a"), ctx)
            return

        attrs = self.attrs(node)
        destination = node.destination or ""
        if self._is_unsafe(destination):
            logger.debug("Dropped unsafe link destination %r", destination)
        else:
            attrs.append(("href", escape_html(destination)))
        if node.title:
            attrs.append(("title", escape_html(node.title)))
        self.out(tag("a", attrs), ctx)

    def visit_image(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        if entering:
            if ctx.disable_tags == 0:
                destination = node.destination or ""
                if self._is_unsafe(destination):
                    logger.debug("Dropped unsafe image destination %r", destination)
                    self.out('<img src="" alt="', ctx)
                else:
                    self.out(f'<img src="{escape_html(destination)}" alt="', ctx)
            ctx.disable_tags += 1
        else:
            ctx.disable_tags -= 1
            if ctx.disable_tags == 0:
                if node.title:
                    self.out(f'" title="{escape_html(node.title)}', ctx)
                self.out('" />', ctx)

    def visit_code(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.out(tag("code") + escape_html(node.literal or "", quote=False) + tag("/code"), ctx)

    def visit_html_inline(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self._raw_html(node, ctx)

    def visit_custom_inline(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self._custom(node, entering, ctx)

    # =========================================================================
    # Block nodes
    # =========================================================================

    def visit_paragraph(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        # Paragraphs of tight list items render bare
        parent = node.parent
        grandparent = parent.parent if parent is not None else None
        if (
            grandparent is not None
            and NodeType.coerce(grandparent.type) is NodeType.LIST
            and grandparent.list_tight
        ):
            return

        if entering:
            self.cr(ctx)
            self.out(tag("p", self.attrs(node)), ctx)
        else:
            self.out(tag("/p"), ctx)
            self.cr(ctx)

    def visit_heading(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        tagname = f"h{node.level or 1}"
        if entering:
            self.cr(ctx)
            self.out(tag(tagname, self.attrs(node)), ctx)
        else:
            self.out(tag(f"/{tagname}"), ctx)
            self.cr(ctx)

    def visit_code_block(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        info_words = node.info.split() if node.info else []
        attrs = self.attrs(node)
        if info_words:
            attrs.append(("class", f"language-{escape_html(info_words[0])}"))
        self.cr(ctx)
        self.out(tag("pre") + tag("code", attrs), ctx)
        self.out(escape_html(node.literal or "", quote=False), ctx)
        self.out(tag("/code") + tag("/pre"), ctx)
        self.cr(ctx)

    def visit_thematic_break(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.cr(ctx)
        self.out(tag("hr", self.attrs(node), selfclosing=True), ctx)
        self.cr(ctx)

    def visit_block_quote(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.cr(ctx)
        if entering:
            self.out(tag("blockquote", self.attrs(node)), ctx)
        else:
            self.out(tag("/blockquote"), ctx)
        self.cr(ctx)

    def visit_list(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        ordered = node.list_type == "ordered"
        tagname = "ol" if ordered else "ul"
        self.cr(ctx)
        if entering:
            attrs = self.attrs(node)
            start = node.list_start
            if ordered and start is not None and start != 1:
                attrs.append(("start", str(start)))
            self.out(tag(tagname, attrs), ctx)
        else:
            self.out(tag(f"/{tagname}"), ctx)
        self.cr(ctx)

    def visit_item(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        if entering:
            self.out(tag("li", self.attrs(node)), ctx)
        else:
            self.out(tag("/li"), ctx)
            self.cr(ctx)

    def visit_html_block(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.cr(ctx)
        self._raw_html(node, ctx)
        self.cr(ctx)

    def visit_custom_block(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        self.cr(ctx)
        self._custom(node, entering, ctx)
        self.cr(ctx)

    # =========================================================================
    # Shared
    # =========================================================================

    def _raw_html(self, node: Any, ctx: RenderContext) -> None:
        if self._options.safe:
            logger.debug("Omitted raw HTML in safe mode")
            self.out(RAW_HTML_OMITTED, ctx)
        else:
            self.out(node.literal or "", ctx)

    def _custom(self, node: Any, entering: bool, ctx: RenderContext) -> None:
        if entering and node.on_enter:
            self.out(node.on_enter, ctx)
        elif not entering and node.on_exit:
            self.out(node.on_exit, ctx)
