# topmark:header:start
#
#   project      : NTKit
#   file         : test_tree.py
#   file_relpath : tests/test_tree.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Value tree tests: node semantics and conversion to and from plain values."""

from __future__ import annotations

import copy
import pickle

import pytest

from ntkit.tree import NULL, DictNode, ListNode, NullNode, TextNode, from_python, to_python
from tests.conftest import parametrize


def test_null_is_a_falsy_singleton() -> None:
    """`NullNode()` always returns the shared `NULL` instance."""
    assert NullNode() is NULL
    assert not NULL
    assert repr(NULL) == "NULL"
    assert copy.deepcopy(NULL) is NULL
    assert pickle.loads(pickle.dumps(NULL)) is NULL


def test_text_node_single_line_check() -> None:
    """Single-line detection depends on the terminator asked about."""
    assert TextNode("a b").is_single_line("\n")
    assert not TextNode("a\nb").is_single_line("\n")
    assert TextNode("a\nb").is_single_line("\r\n")


def test_list_node_sequence_protocol() -> None:
    """`ListNode` supports len, iteration and indexing."""
    node = ListNode((TextNode("a"), NULL))
    assert len(node) == 2
    assert list(node) == [TextNode("a"), NULL]
    assert node[0] == TextNode("a")


def test_dict_node_lookup_and_order() -> None:
    """`DictNode` keeps insertion order and supports lookups."""
    node = DictNode((("b", TextNode("1")), ("a", TextNode("2"))))
    assert node.keys() == ["b", "a"]
    assert list(node) == ["b", "a"]
    assert "a" in node
    assert "z" not in node
    assert node["a"] == TextNode("2")
    assert node.get("z") is None
    assert node.get("z", NULL) is NULL
    assert node.as_dict() == {"b": TextNode("1"), "a": TextNode("2")}
    with pytest.raises(KeyError):
        node["z"]


def test_dict_node_rejects_duplicate_keys() -> None:
    """Keys are unique within one dictionary."""
    with pytest.raises(ValueError, match="duplicate key: a"):
        DictNode((("a", NULL), ("a", NULL)))


def test_dict_node_equality_is_order_sensitive() -> None:
    """Two dictionaries with the same entries in another order differ."""
    first = DictNode((("a", NULL), ("b", NULL)))
    second = DictNode((("b", NULL), ("a", NULL)))
    assert first != second
    assert first == DictNode((("a", NULL), ("b", NULL)))


def test_nodes_are_immutable() -> None:
    """Nodes are frozen dataclasses."""
    node = TextNode("x")
    with pytest.raises(AttributeError):
        node.text = "y"  # type: ignore[misc]


def test_to_python() -> None:
    """Nodes convert to plain values recursively."""
    node = DictNode(
        (
            ("name", TextNode("x")),
            ("items", ListNode((TextNode("1"), NULL))),
        )
    )
    assert to_python(node) == {"name": "x", "items": ["1", None]}
    assert to_python(NULL) is None


def test_from_python() -> None:
    """Plain values build the matching nodes; nodes pass through."""
    assert from_python(None) is NULL
    assert from_python("x") == TextNode("x")
    assert from_python(("a", ["b"])) == ListNode((TextNode("a"), ListNode((TextNode("b"),))))
    assert from_python({"k": None}) == DictNode((("k", NULL),))
    node = TextNode("kept")
    assert from_python(node) is node


@parametrize("value", [1, {1: "a"}, {"a": object()}])
def test_from_python_rejects_other_types(value: object) -> None:
    """Only ``None``, text, lists and str-keyed dictionaries are accepted."""
    with pytest.raises(TypeError):
        from_python(value)
