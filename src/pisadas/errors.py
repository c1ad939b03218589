"""Exception classes for Pisadas.

Provides standardized exceptions for error handling throughout Pisadas.
"""

from __future__ import annotations


class PisadasError(Exception):
    """Base exception for all Pisadas errors.

    Subclass this for specific error categories.
    """

    pass


class RenderError(PisadasError):
    """Error during rendering.

    Raised when the renderer receives a tree it cannot walk.
    """

    pass


class UnknownNodeTypeError(RenderError):
    """A node kind outside the closed vocabulary.

    Signals vocabulary drift between whatever produced the tree and the
    renderer. Never downgraded to a skip.
    """

    def __init__(self, node_type: object) -> None:
        """Initialize with the offending kind.

        Args:
            node_type: The kind as found on the node (usually a string)
        """
        self.node_type = node_type
        super().__init__(f"Unknown node type {node_type!r}")


class TreeError(PisadasError):
    """Invalid structural edit of a node tree.

    Raised when an edit would give a leaf node children, make a node its
    own ancestor, or add siblings to a node without a parent.
    """

    pass


class SerializationError(PisadasError, ValueError):
    """Malformed serialized tree.

    Subclasses ValueError so callers catching the usual decoding error
    keep working.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        """Initialize serialization error with optional location.

        Args:
            message: Error description
            path: Location inside the document, e.g. ``$.children[2]``
        """
        self.message = message
        self.path = path

        location = f"{path}: " if path else ""
        super().__init__(f"{location}{message}")
