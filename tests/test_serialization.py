"""Tests for node tree serialization."""

import json

import pytest

from pisadas import build
from pisadas.errors import SerializationError, UnknownNodeTypeError
from pisadas.location import SourceLocation
from pisadas.nodes import NodeType
from pisadas.renderers.html import HtmlRenderer
from pisadas.serialization import from_dict, from_json, to_dict, to_json


def _sample():
    return build("document", [
        build("heading", [build("text", literal="Title")], level=2, sourcepos=((1, 1), (1, 8))),
        build("list", [
            build("item", [build("paragraph", [
                build("link", [build("text", literal="x")], destination="/x", title="t"),
            ])]),
        ], list_type="ordered", list_start=3, list_tight=True),
        build("code_block", literal="print(1)\n", info="python"),
        build("custom_block", on_enter="<aside>", on_exit="</aside>"),
    ])


class TestToDict:
    def test_defaults_omitted(self) -> None:
        assert to_dict(build("thematic_break")) == {"type": "thematic_break"}

    def test_attributes_and_children(self) -> None:
        data = to_dict(build("paragraph", [build("text", literal="Hi")]))
        assert data == {
            "type": "paragraph",
            "children": [{"type": "text", "literal": "Hi"}],
        }

    def test_list_attributes(self) -> None:
        data = to_dict(build("list", list_type="ordered", list_start=3, list_tight=True))
        assert data == {
            "type": "list",
            "list_type": "ordered",
            "list_start": 3,
            "list_tight": True,
        }

    def test_sourcepos_pairs(self) -> None:
        data = to_dict(build("heading", level=1, sourcepos=((1, 1), (1, 6))))
        assert data["sourcepos"] == [[1, 1], [1, 6]]


class TestRoundTrip:
    def test_dict_round_trip(self) -> None:
        doc = _sample()
        assert to_dict(from_dict(to_dict(doc))) == to_dict(doc)

    def test_json_round_trip_renders_identically(self) -> None:
        doc = _sample()
        restored = from_json(to_json(doc))
        renderer = HtmlRenderer(sourcepos=True)
        assert renderer.render(restored) == renderer.render(doc)

    def test_restored_links(self) -> None:
        restored = from_dict(to_dict(_sample()))
        heading = restored.first_child
        assert heading is not None
        assert heading.parent is restored
        assert heading.sourcepos == SourceLocation(1, 1, 1, 8)
        assert heading.next is not None
        assert heading.next.type is NodeType.LIST

    def test_json_is_deterministic(self) -> None:
        assert to_json(_sample()) == to_json(_sample())
        assert list(json.loads(to_json(build("heading", level=1)))) == ["level", "type"]

    def test_indent(self) -> None:
        assert "\n" in to_json(_sample(), indent=2)
        assert "\n" not in to_json(_sample())


class TestFromDictErrors:
    def test_not_an_object(self) -> None:
        with pytest.raises(SerializationError, match=r"^\$: Expected an object, got list"):
            from_dict([])  # type: ignore[arg-type]

    def test_missing_type(self) -> None:
        with pytest.raises(SerializationError, match="Missing 'type'"):
            from_dict({"literal": "x"})

    def test_unknown_type(self) -> None:
        with pytest.raises(UnknownNodeTypeError):
            from_dict({"type": "document", "children": [{"type": "table"}]})

    def test_error_path_points_at_child(self) -> None:
        data = {"type": "document", "children": [
            {"type": "paragraph"},
            {"type": "paragraph", "children": ["oops"]},
        ]}
        with pytest.raises(SerializationError) as exc_info:
            from_dict(data)
        assert exc_info.value.path == "$.children[1].children[0]"

    def test_children_must_be_list(self) -> None:
        with pytest.raises(SerializationError) as exc_info:
            from_dict({"type": "paragraph", "children": {"type": "text"}})
        assert exc_info.value.path == "$.children"

    def test_leaf_with_children(self) -> None:
        with pytest.raises(SerializationError, match="text nodes cannot contain children"):
            from_dict({"type": "text", "children": [{"type": "text"}]})

    @pytest.mark.parametrize("sourcepos", [[1, 2], [[1, 1]], [["a", 1], [1, 2]], "1:1-1:2"])
    def test_bad_sourcepos(self, sourcepos: object) -> None:
        with pytest.raises(SerializationError) as exc_info:
            from_dict({"type": "heading", "sourcepos": sourcepos})
        assert exc_info.value.path == "$.sourcepos"

    @pytest.mark.parametrize(
        ("data", "field"),
        [
            ({"type": "text", "literal": 5}, "literal"),
            ({"type": "link", "destination": ["/x"]}, "destination"),
            ({"type": "image", "title": 1.5}, "title"),
            ({"type": "heading", "level": "2"}, "level"),
            ({"type": "heading", "level": True}, "level"),
            ({"type": "code_block", "info": {"lang": "py"}}, "info"),
            ({"type": "list", "list_type": 1}, "list_type"),
            ({"type": "list", "list_type": "numbered"}, "list_type"),
            ({"type": "list", "list_start": "3"}, "list_start"),
            ({"type": "list", "list_tight": "false"}, "list_tight"),
            ({"type": "list", "list_tight": 0}, "list_tight"),
            ({"type": "list", "list_tight": None}, "list_tight"),
            ({"type": "custom_block", "on_enter": 0}, "on_enter"),
            ({"type": "custom_inline", "on_exit": False}, "on_exit"),
        ],
    )
    def test_attribute_type_mismatch(self, data: dict, field: str) -> None:
        with pytest.raises(SerializationError) as exc_info:
            from_dict(data)
        assert exc_info.value.path == f"$.{field}"

    def test_bad_attribute_in_nested_child(self) -> None:
        data = {"type": "document", "children": [
            {"type": "paragraph", "children": [{"type": "text", "literal": 5}]},
        ]}
        with pytest.raises(SerializationError, match="Expected str, got int") as exc_info:
            from_dict(data)
        assert exc_info.value.path == "$.children[0].children[0].literal"

    def test_explicit_nulls_accepted(self) -> None:
        node = from_dict({"type": "link", "destination": None, "title": None, "level": None})
        assert node.destination is None
        assert node.title is None

    def test_valid_attribute_types(self) -> None:
        node = from_dict({
            "type": "list",
            "list_type": "ordered",
            "list_start": 0,
            "list_tight": False,
        })
        assert node.list_type == "ordered"
        assert node.list_start == 0
        assert node.list_tight is False

    def test_unknown_keys_ignored(self) -> None:
        node = from_dict({"type": "text", "literal": "x", "extra": 1})
        assert node.literal == "x"


class TestFromJsonErrors:
    def test_invalid_json(self) -> None:
        with pytest.raises(SerializationError, match="Invalid JSON"):
            from_json("{not json")

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            from_json("[1, 2]")
