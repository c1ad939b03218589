"""Node tree consumed by Pisadas renderers.

A parser builds the tree; renderers only read it. Every node carries a
``type`` from the closed NodeType vocabulary plus the attributes relevant
to that kind. Nodes are linked the way CommonMark parsers link them:
parent, first/last child, previous/next sibling.

Node Kinds:
Container (visited on enter and on exit)
├── document, block_quote, list, item, paragraph, heading
├── emph, strong, link, image
└── custom_inline, custom_block
Leaf (visited once)
├── text, softbreak, linebreak, code, html_inline
└── code_block, html_block, thematic_break

Thread Safety:
Building a tree is single-threaded. Once built, a tree that nobody edits
can be rendered from any number of threads.

"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Literal, TypeAlias

from pisadas.errors import TreeError, UnknownNodeTypeError
from pisadas.location import SourceLocation

if TYPE_CHECKING:
    from pisadas.walker import NodeWalker

ListType: TypeAlias = Literal["bullet", "ordered"]


class NodeType(Enum):
    """Closed vocabulary of node kinds."""

    DOCUMENT = "document"
    TEXT = "text"
    SOFTBREAK = "softbreak"
    LINEBREAK = "linebreak"
    EMPH = "emph"
    STRONG = "strong"
    HTML_INLINE = "html_inline"
    CUSTOM_INLINE = "custom_inline"
    LINK = "link"
    IMAGE = "image"
    CODE = "code"
    PARAGRAPH = "paragraph"
    BLOCK_QUOTE = "block_quote"
    ITEM = "item"
    LIST = "list"
    HEADING = "heading"
    CODE_BLOCK = "code_block"
    HTML_BLOCK = "html_block"
    CUSTOM_BLOCK = "custom_block"
    THEMATIC_BREAK = "thematic_break"

    @property
    def is_container(self) -> bool:
        """Whether nodes of this kind hold children."""
        return self in _CONTAINER_TYPES

    @classmethod
    def coerce(cls, value: NodeType | str) -> NodeType:
        """Resolve a kind name to its NodeType.

        Names match case-insensitively and with or without underscores, so
        ``"code_block"``, ``"CodeBlock"`` and ``"codeblock"`` are the same
        kind. ``"hardbreak"`` is accepted for ``linebreak``.

        Raises:
            UnknownNodeTypeError: If the name is not in the vocabulary
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            member = _BY_NAME.get(value.lower().replace("_", ""))
            if member is not None:
                return member
        raise UnknownNodeTypeError(value)


_CONTAINER_TYPES = frozenset((
    NodeType.DOCUMENT,
    NodeType.BLOCK_QUOTE,
    NodeType.LIST,
    NodeType.ITEM,
    NodeType.PARAGRAPH,
    NodeType.HEADING,
    NodeType.EMPH,
    NodeType.STRONG,
    NodeType.LINK,
    NodeType.IMAGE,
    NodeType.CUSTOM_INLINE,
    NodeType.CUSTOM_BLOCK,
))

_BY_NAME: dict[str, NodeType] = {
    member.value.replace("_", ""): member for member in NodeType
}
_BY_NAME["hardbreak"] = NodeType.LINEBREAK


@dataclass(slots=True, eq=False)
class Node:
    """One syntactic construct in a CommonMark document.

    Attributes only matter for the kinds that use them; the rest stay at
    their defaults. Nodes compare by identity.

    Attributes:
        type: Node kind (a NodeType, or a kind name resolved on construction)
        literal: Raw text payload (text, code, code_block, html_*)
        destination: Link or image target
        title: Link or image title
        level: Heading depth, 1-6
        info: Code block info string; its first word names the language
        list_type: ``"bullet"`` or ``"ordered"``
        list_start: First number of an ordered list
        list_tight: Whether the list's item paragraphs render unwrapped
        on_enter: Literal output of a custom node when entered
        on_exit: Literal output of a custom node when exited
        sourcepos: Span in the source (a SourceLocation or pair of pairs)

    Example:
        >>> doc = Node(NodeType.DOCUMENT)
        >>> para = Node("paragraph")
        >>> para.append_child(Node("text", literal="Hello"))
        >>> doc.append_child(para)
        >>> [child.type for child in doc.children()]
        [<NodeType.PARAGRAPH: 'paragraph'>]

    """

    type: NodeType
    literal: str | None = None
    destination: str | None = None
    title: str | None = None
    level: int | None = None
    info: str | None = None
    list_type: ListType | None = None
    list_start: int | None = None
    list_tight: bool = False
    on_enter: str | None = None
    on_exit: str | None = None
    sourcepos: SourceLocation | None = None

    parent: Node | None = field(default=None, init=False, repr=False)
    first_child: Node | None = field(default=None, init=False, repr=False)
    last_child: Node | None = field(default=None, init=False, repr=False)
    prev: Node | None = field(default=None, init=False, repr=False)
    next: Node | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.type = NodeType.coerce(self.type)
        self.sourcepos = SourceLocation.coerce(self.sourcepos)

    @property
    def is_container(self) -> bool:
        return self.type.is_container

    def children(self) -> Iterator[Node]:
        """Iterate over direct children, first to last."""
        child = self.first_child
        while child is not None:
            # Read ahead so callers may unlink the yielded child
            following = child.next
            yield child
            child = following

    def walker(self) -> NodeWalker:
        """Return a depth-first walker rooted at this node."""
        from pisadas.walker import NodeWalker

        return NodeWalker(self)

    # =========================================================================
    # Tree editing
    # =========================================================================

    def append_child(self, child: Node) -> None:
        """Make ``child`` the last child of this node."""
        self._check_adoptable(child)
        child.unlink()
        child.parent = self
        if self.last_child is not None:
            self.last_child.next = child
            child.prev = self.last_child
            self.last_child = child
        else:
            self.first_child = child
            self.last_child = child

    def prepend_child(self, child: Node) -> None:
        """Make ``child`` the first child of this node."""
        self._check_adoptable(child)
        child.unlink()
        child.parent = self
        if self.first_child is not None:
            self.first_child.prev = child
            child.next = self.first_child
            self.first_child = child
        else:
            self.first_child = child
            self.last_child = child

    def insert_after(self, sibling: Node) -> None:
        """Place ``sibling`` directly after this node."""
        parent = self._parent_for_sibling(sibling)
        sibling.unlink()
        sibling.next = self.next
        if sibling.next is not None:
            sibling.next.prev = sibling
        sibling.prev = self
        self.next = sibling
        sibling.parent = parent
        if sibling.next is None:
            parent.last_child = sibling

    def insert_before(self, sibling: Node) -> None:
        """Place ``sibling`` directly before this node."""
        parent = self._parent_for_sibling(sibling)
        sibling.unlink()
        sibling.prev = self.prev
        if sibling.prev is not None:
            sibling.prev.next = sibling
        sibling.next = self
        self.prev = sibling
        sibling.parent = parent
        if sibling.prev is None:
            parent.first_child = sibling

    def unlink(self) -> None:
        """Detach this node (and its subtree) from its parent and siblings."""
        if self.prev is not None:
            self.prev.next = self.next
        elif self.parent is not None:
            self.parent.first_child = self.next
        if self.next is not None:
            self.next.prev = self.prev
        elif self.parent is not None:
            self.parent.last_child = self.prev
        self.parent = None
        self.next = None
        self.prev = None

    def _check_adoptable(self, child: Node) -> None:
        if not self.is_container:
            msg = f"{self.type.value} nodes cannot contain children"
            raise TreeError(msg)
        ancestor: Node | None = self
        while ancestor is not None:
            if ancestor is child:
                msg = "Cannot insert a node into its own subtree"
                raise TreeError(msg)
            ancestor = ancestor.parent

    def _parent_for_sibling(self, sibling: Node) -> Node:
        if sibling is self:
            msg = "Cannot insert a node next to itself"
            raise TreeError(msg)
        if self.parent is None:
            msg = f"Cannot add a sibling to a {self.type.value} node without a parent"
            raise TreeError(msg)
        self.parent._check_adoptable(sibling)
        return self.parent


def build(
    node_type: NodeType | str,
    children: Sequence[Node] = (),
    **attributes: object,
) -> Node:
    """Create a node and append ``children`` to it in order.

    Convenience for tree builders and tests:

        >>> doc = build("document", [build("paragraph", [build("text", literal="Hi")])])

    """
    node = Node(node_type, **attributes)  # type: ignore[arg-type]
    for child in children:
        node.append_child(child)
    return node
