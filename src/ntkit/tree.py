# topmark:header:start
#
#   project      : NTKit
#   file         : tree.py
#   file_relpath : src/ntkit/tree.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Value tree: the generic data model between text and typed values.

A document is one of four node kinds:

    - `NULL` (the only `NullNode`): an empty document or an absent value.
    - `TextNode`: a scalar; NestedText never coerces scalars, so this is always text.
    - `ListNode`: an ordered sequence of nodes.
    - `DictNode`: an ordered mapping from unique text keys to nodes.

Nodes are immutable. Equality is structural and sensitive to order, so two
`DictNode` instances with the same entries in a different order are not equal.

Use `to_python` / `from_python` to move between nodes and plain ``None``/``str``/
``list``/``dict`` values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from collections.abc import Iterator


class NullNode:
    """Singleton for an empty document or absent value."""

    _instance: NullNode | None = None
    __slots__ = ()

    def __new__(cls) -> NullNode:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NULL"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "NULL"


NULL = NullNode()


@dataclass(frozen=True, slots=True)
class TextNode:
    """A scalar value. Multi-line text uses ``\\n`` internally."""

    text: str

    def is_single_line(self, eol: str) -> bool:
        """Return True when the text does not contain ``eol``."""
        return eol not in self.text


@dataclass(frozen=True, slots=True)
class ListNode:
    """An ordered sequence of nodes."""

    items: tuple[Node, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Node:
        return self.items[index]


@dataclass(frozen=True, slots=True)
class DictNode:
    """An ordered mapping with unique text keys.

    Raises:
        ValueError: If a key appears more than once.
    """

    entries: tuple[tuple[str, Node], ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for key, _ in self.entries:
            if key in seen:
                raise ValueError(f"duplicate key: {key}")
            seen.add(key)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self.entries)

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self.entries)

    def __getitem__(self, key: str) -> Node:
        for k, value in self.entries:
            if k == key:
                return value
        raise KeyError(key)

    def get(self, key: str, default: Node | None = None) -> Node | None:
        """Return the node stored under ``key``, or ``default``."""
        for k, value in self.entries:
            if k == key:
                return value
        return default

    def keys(self) -> list[str]:
        """Return the keys in insertion order."""
        return [k for k, _ in self.entries]

    def as_dict(self) -> dict[str, Node]:
        """Return a shallow ``dict`` view of the entries (insertion order kept)."""
        return dict(self.entries)


Node = Union[NullNode, TextNode, ListNode, DictNode]

NODE_TYPES: tuple[type, ...] = (NullNode, TextNode, ListNode, DictNode)


def to_python(node: Node) -> Any:
    """Convert a node into plain Python values.

    Args:
        node (Node): The node to convert.

    Returns:
        Any: ``None``, ``str``, ``list`` or ``dict`` (recursively).
    """
    if isinstance(node, TextNode):
        return node.text
    if isinstance(node, ListNode):
        return [to_python(item) for item in node.items]
    if isinstance(node, DictNode):
        return {key: to_python(value) for key, value in node.entries}
    return None


def from_python(obj: Any) -> Node:
    """Build a node from plain Python values.

    Accepts ``None``, ``str``, ``list``/``tuple`` and ``dict`` with ``str`` keys;
    nodes are passed through unchanged. Use the introspector for anything richer.

    Args:
        obj (Any): Value to convert.

    Returns:
        Node: The equivalent node.

    Raises:
        TypeError: If ``obj`` (or a nested value) is not one of the accepted types.
    """
    if obj is None:
        return NULL
    if isinstance(obj, NODE_TYPES):
        return obj
    if isinstance(obj, str):
        return TextNode(obj)
    if isinstance(obj, (list, tuple)):
        return ListNode(tuple(from_python(item) for item in obj))
    if isinstance(obj, dict):
        entries: list[tuple[str, Node]] = []
        for key, value in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"dictionary keys must be str, got {type(key).__name__}")
            entries.append((key, from_python(value)))
        return DictNode(tuple(entries))
    raise TypeError(f"cannot build a value tree node from {type(obj).__name__}")
