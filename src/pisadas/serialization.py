"""Tree serialization: JSON round-trip for Pisadas node trees.

Converts node trees to/from JSON-compatible dicts. This is how a tree built
by an external parser (in this process or another) reaches the renderer,
and it is handy for fixtures and debugging.

Format:
    {"type": "paragraph",
     "sourcepos": [[1, 1], [1, 5]],
     "children": [{"type": "text", "literal": "Hello"}]}

Only attributes that differ from their defaults are written, and output is
deterministic (sorted keys) for cache-key stability.

Example:
    from pisadas.serialization import to_json, from_json

    restored = from_json(to_json(doc))

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from typing import Any

from pisadas.errors import SerializationError
from pisadas.location import SourceLocation
from pisadas.nodes import Node, NodeType

# Attribute name -> default value
_ATTRIBUTES: dict[str, Any] = {
    "literal": None,
    "destination": None,
    "title": None,
    "level": None,
    "info": None,
    "list_type": None,
    "list_start": None,
    "list_tight": False,
    "on_enter": None,
    "on_exit": None,
}

# Attribute name -> value type (None is accepted wherever the default is None)
_ATTRIBUTE_TYPES: dict[str, type] = {
    "literal": str,
    "destination": str,
    "title": str,
    "level": int,
    "info": str,
    "list_type": str,
    "list_start": int,
    "list_tight": bool,
    "on_enter": str,
    "on_exit": str,
}

_LIST_TYPES = frozenset({"bullet", "ordered"})


def _check_attribute(name: str, value: Any, path: str) -> None:
    """Raise SerializationError unless ``value`` fits attribute ``name``."""
    if value is None and _ATTRIBUTES[name] is None:
        return
    expected = _ATTRIBUTE_TYPES[name]
    # bool is an int subclass
    if not isinstance(value, expected) or (isinstance(value, bool) and expected is not bool):
        msg = f"Expected {expected.__name__}, got {type(value).__name__}"
        raise SerializationError(msg, f"{path}.{name}")
    if name == "list_type" and value not in _LIST_TYPES:
        msg = f"Expected 'bullet' or 'ordered', got {value!r}"
        raise SerializationError(msg, f"{path}.{name}")


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node and its subtree to a JSON-compatible dict.

    Args:
        node: Any node.

    Returns:
        Dict with ``type``, non-default attributes, ``sourcepos`` when
        known and ``children`` when the node has any.

    """
    result: dict[str, Any] = {"type": node.type.value}

    for name, default in _ATTRIBUTES.items():
        value = getattr(node, name)
        if value != default:
            result[name] = value

    if node.sourcepos is not None:
        start, end = node.sourcepos.to_pairs()
        result["sourcepos"] = [list(start), list(end)]

    children = [to_dict(child) for child in node.children()]
    if children:
        result["children"] = children

    return result


def from_dict(data: dict[str, Any], *, path: str = "$") -> Node:
    """Rebuild a node tree from a dict.

    Unknown keys are ignored. Attribute values must have the types to_dict
    writes; ``null`` is accepted wherever the default is None.

    Args:
        data: Dict as produced by to_dict.
        path: Location of ``data`` in the enclosing document, for errors.

    Returns:
        Root node of the rebuilt tree.

    Raises:
        SerializationError: If the dict is malformed.
        UnknownNodeTypeError: If a ``type`` is outside the vocabulary.

    """
    if not isinstance(data, dict):
        msg = f"Expected an object, got {type(data).__name__}"
        raise SerializationError(msg, path)

    type_name = data.get("type")
    if type_name is None:
        raise SerializationError("Missing 'type' field", path)

    attributes = {name: data[name] for name in _ATTRIBUTES if name in data}
    for name, value in attributes.items():
        _check_attribute(name, value, path)
    raw_pos = data.get("sourcepos")
    if raw_pos is not None:
        try:
            attributes["sourcepos"] = SourceLocation.from_pairs(raw_pos)
        except ValueError as exc:
            raise SerializationError(str(exc), f"{path}.sourcepos") from exc

    node = Node(NodeType.coerce(type_name), **attributes)

    children = data.get("children", [])
    if not isinstance(children, list):
        raise SerializationError("'children' must be a list", f"{path}.children")
    if children and not node.is_container:
        msg = f"{node.type.value} nodes cannot contain children"
        raise SerializationError(msg, f"{path}.children")

    for index, child in enumerate(children):
        node.append_child(from_dict(child, path=f"{path}.children[{index}]"))

    return node


def to_json(node: Node, *, indent: int | None = None) -> str:
    """Serialize a node tree to a JSON string.

    Args:
        node: Root node to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(node), sort_keys=True, indent=indent)


def from_json(data: str) -> Node:
    """Deserialize a node tree from a JSON string.

    Args:
        data: JSON string (as produced by to_json).

    Returns:
        Root node.

    Raises:
        SerializationError: If the text is not valid JSON or not a tree.

    """
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON: {exc.msg}"
        raise SerializationError(msg) from exc
    return from_dict(raw)
