# topmark:header:start
#
#   project      : NTKit
#   file         : render.py
#   file_relpath : src/ntkit/syntax/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render a value tree as NestedText.

Rules:
    - `NULL` renders nothing.
    - A single-line `TextNode` renders inline after ``key: `` or ``- ``; at the
      document root it renders as ``> text``.
    - A `TextNode` containing the configured ``eol`` renders as one ``>`` line per
      segment at the current indentation. A text ending with ``eol`` keeps its
      trailing empty segment so the blank last line survives a round trip.
    - Containers and multi-line text under a key or dash render on the following
      lines, indented by ``indent`` more spaces.
    - Text holding ``\\r`` or ``\\n`` that is not part of ``eol`` cannot be written
      and raises `DumpError`.

The output carries no line terminator after its last line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ntkit.config.logging import get_logger
from ntkit.constants import DEFAULT_EOL, DEFAULT_INDENT, RESERVED_KEY_STARTS
from ntkit.errors import DumpError
from ntkit.tree import DictNode, ListNode, NullNode, TextNode

if TYPE_CHECKING:
    from ntkit.config.logging import NtkitLogger
    from ntkit.tree import Node

logger: NtkitLogger = get_logger(__name__)


def check_key(key: str) -> None:
    """Ensure a key can be written as a key line and read back unchanged.

    Args:
        key (str): Dictionary key.

    Raises:
        DumpError: If the key cannot be represented in minimal NestedText.
    """
    problem: str | None = None
    if "\n" in key or "\r" in key:
        problem = "contains a line break"
    elif key[:1] in RESERVED_KEY_STARTS or key[:1] == "#":
        problem = f"starts with {key[:1]!r}"
    elif key[:2] in ("- ", "> "):
        problem = f"starts with {key[:1]!r} followed by a space"
    elif key[:1].isspace() or key != key.rstrip():
        problem = "has leading or trailing whitespace"
    elif ": " in key:
        problem = "contains a key terminator"
    if problem is not None:
        raise DumpError(f"key {key!r} cannot be rendered: {problem}")


class Renderer:
    """Render nodes with a fixed line terminator and indentation width.

    Args:
        eol (str): Line terminator written between lines.
        indent (int): Spaces added per nesting level.
    """

    def __init__(self, eol: str = DEFAULT_EOL, indent: int = DEFAULT_INDENT) -> None:
        self._eol: str = eol
        self._indent: int = indent

    def render(self, node: Node) -> str:
        """Render a document.

        Args:
            node (Node): Document root.

        Returns:
            str: NestedText without a trailing line terminator.

        Raises:
            DumpError: If a key cannot be represented, or a text holds a line break
                that differs from the configured line terminator.
        """
        out: list[str] = []
        self._render_node(node, out, 0)
        text: str = "".join(out)
        if text.endswith(self._eol):
            text = text[: -len(self._eol)]
        logger.debug("rendered %d character(s)", len(text))
        return text

    def _is_inline(self, node: Node) -> bool:
        return isinstance(node, TextNode) and node.is_single_line(self._eol)

    def _line(self, text: str) -> str:
        """Return one physical line of text, refusing stray line breaks."""
        if "\n" in text or "\r" in text:
            raise DumpError(
                f"text {text!r} cannot be rendered: contains a line break other than {self._eol!r}"
            )
        return text

    def _render_node(self, node: Node, out: list[str], depth: int) -> None:
        if isinstance(node, NullNode):
            return
        if isinstance(node, TextNode):
            self._render_text(node.text, out, depth)
        elif isinstance(node, DictNode):
            self._render_dict(node, out, depth)
        elif isinstance(node, ListNode):
            self._render_list(node, out, depth)
        else:
            raise DumpError(f"unsupported node type: {type(node).__name__}")

    def _render_text(self, text: str, out: list[str], depth: int) -> None:
        pad: str = " " * depth
        if self._eol not in text:
            # Only reached at the root; nested single-line text renders inline.
            out.append(f"{pad}> {self._line(text)}{self._eol}")
            return
        for segment in text.split(self._eol):
            if segment:
                out.append(f"{pad}> {self._line(segment)}{self._eol}")
            else:
                out.append(f"{pad}>{self._eol}")

    def _render_dict(self, node: DictNode, out: list[str], depth: int) -> None:
        pad: str = " " * depth
        for key, value in node.entries:
            check_key(key)
            if isinstance(value, TextNode) and self._is_inline(value):
                out.append(f"{pad}{key}: {self._line(value.text)}{self._eol}")
            else:
                out.append(f"{pad}{key}:{self._eol}")
                self._render_node(value, out, depth + self._indent)

    def _render_list(self, node: ListNode, out: list[str], depth: int) -> None:
        pad: str = " " * depth
        for item in node.items:
            if isinstance(item, TextNode) and self._is_inline(item):
                out.append(f"{pad}- {self._line(item.text)}{self._eol}")
            else:
                out.append(f"{pad}-{self._eol}")
                self._render_node(item, out, depth + self._indent)


def render(node: Node, *, eol: str = DEFAULT_EOL, indent: int = DEFAULT_INDENT) -> str:
    """Render a value tree with the given layout options.

    Args:
        node (Node): Document root.
        eol (str): Line terminator.
        indent (int): Spaces per nesting level.

    Returns:
        str: NestedText without a trailing line terminator.
    """
    return Renderer(eol=eol, indent=indent).render(node)
