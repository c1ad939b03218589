"""Depth-first walker over a node tree.

Produces the (node, entering) event stream renderers consume. Container
nodes are reported twice, once on the way down (entering=True) and once on
the way back up (entering=False). Leaf nodes are reported once, with
entering=True. The events of any subtree sit between that subtree's own
entering and exiting events.

Example:
    >>> for event in doc.walker():
    ...     print(event.node.type.value, event.entering)
    document True
    paragraph True
    text True
    paragraph False
    document False

"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from pisadas.nodes import Node


class WalkEvent(NamedTuple):
    """One step of a depth-first walk."""

    node: Node
    entering: bool


class NodeWalker:
    """Iterative depth-first walker.

    Holds only a cursor, so walking is O(1) in extra memory regardless of
    tree depth. The walk may be repositioned with ``resume_at``.

    Thread Safety:
        A walker is a cursor over one tree. Do not share one walker
        between threads; create one per walk.

    """

    __slots__ = ("_root", "_current", "_entering")

    def __init__(self, root: Node) -> None:
        self._root = root
        self._current: Node | None = root
        self._entering = True

    @property
    def root(self) -> Node:
        return self._root

    def next(self) -> WalkEvent | None:
        """Return the next event, or None once the walk is finished."""
        current = self._current
        entering = self._entering
        if current is None:
            return None

        if entering and current.is_container:
            if current.first_child is not None:
                self._current = current.first_child
                self._entering = True
            else:
                # Empty container: exit it next
                self._entering = False
        elif current is self._root:
            self._current = None
        elif current.next is None:
            self._current = current.parent
            self._entering = False
        else:
            self._current = current.next
            self._entering = True

        return WalkEvent(current, entering)

    def resume_at(self, node: Node, entering: bool) -> None:
        """Continue the walk from ``node`` in the given phase."""
        self._current = node
        self._entering = entering

    def __iter__(self) -> NodeWalker:
        return self

    def __next__(self) -> WalkEvent:
        event = self.next()
        if event is None:
            raise StopIteration
        return event
