"""Tests for the depth-first NodeWalker."""

from hypothesis import given, settings
from hypothesis import strategies as st

from pisadas.nodes import Node, NodeType, build
from pisadas.walker import NodeWalker, WalkEvent


def _trace(root: Node) -> list[tuple[str, bool]]:
    return [(event.node.type.value, event.entering) for event in root.walker()]


class TestWalkOrder:
    def test_nested_document(self) -> None:
        doc = build("document", [
            build("paragraph", [
                build("text", literal="a"),
                build("emph", [build("text", literal="b")]),
            ]),
            build("thematic_break"),
        ])

        assert _trace(doc) == [
            ("document", True),
            ("paragraph", True),
            ("text", True),
            ("emph", True),
            ("text", True),
            ("emph", False),
            ("paragraph", False),
            ("thematic_break", True),
            ("document", False),
        ]

    def test_empty_container_visited_twice(self) -> None:
        assert _trace(Node(NodeType.DOCUMENT)) == [("document", True), ("document", False)]

    def test_leaf_root_visited_once(self) -> None:
        assert _trace(Node(NodeType.TEXT, literal="x")) == [("text", True)]

    def test_subtree_walk_stops_at_root(self) -> None:
        doc = build("document", [
            build("paragraph", [build("text", literal="a")]),
            build("paragraph", [build("text", literal="b")]),
        ])
        first = doc.first_child
        assert first is not None

        assert _trace(first) == [("paragraph", True), ("text", True), ("paragraph", False)]

    def test_leaf_subtree_with_siblings(self) -> None:
        para = build("paragraph", [build("text", literal="a"), build("text", literal="b")])
        first = para.first_child
        assert first is not None
        assert [e.node.literal for e in first.walker()] == ["a"]


class TestWalkerProtocol:
    def test_next_returns_none_when_done(self) -> None:
        walker = NodeWalker(Node(NodeType.TEXT))
        assert walker.next() == WalkEvent(walker.root, True)
        assert walker.next() is None
        assert walker.next() is None

    def test_events_are_tuples(self) -> None:
        text = Node(NodeType.TEXT)
        node, entering = next(iter(text.walker()))
        assert node is text
        assert entering is True

    def test_resume_at_skips_subtree(self) -> None:
        doc = build("document", [
            build("block_quote", [build("paragraph", [build("text", literal="hidden")])]),
            build("paragraph", [build("text", literal="shown")]),
        ])
        walker = doc.walker()
        seen: list[str] = []
        while (event := walker.next()) is not None:
            if event.node.type is NodeType.BLOCK_QUOTE and event.entering:
                walker.resume_at(event.node, entering=False)
                continue
            if event.node.type is NodeType.TEXT:
                seen.append(event.node.literal or "")

        assert seen == ["shown"]


# Random trees of containers and leaves
_leaf = st.sampled_from([NodeType.TEXT, NodeType.SOFTBREAK, NodeType.CODE]).map(Node)
_trees = st.recursive(
    _leaf,
    lambda children: st.builds(
        lambda kind, kids: build(kind, kids),
        st.sampled_from([NodeType.PARAGRAPH, NodeType.EMPH, NodeType.BLOCK_QUOTE]),
        st.lists(children, max_size=4),
    ),
    max_leaves=25,
)


class TestWalkProperties:
    @given(tree=_trees)
    @settings(max_examples=100)
    def test_events_are_well_nested(self, tree: Node) -> None:
        """Every exit closes the most recently entered open container."""
        stack: list[Node] = []
        for event in tree.walker():
            if not event.node.is_container:
                assert event.entering
                continue
            if event.entering:
                stack.append(event.node)
            else:
                assert stack.pop() is event.node
        assert stack == []

    @given(tree=_trees)
    @settings(max_examples=100)
    def test_every_node_entered_once(self, tree: Node) -> None:
        entered = [id(e.node) for e in tree.walker() if e.entering]
        assert len(entered) == len(set(entered))
