# topmark:header:start
#
#   project      : NTKit
#   file         : test_render.py
#   file_relpath : tests/syntax/test_render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Renderer tests: layout of each node kind, options, and key validation."""

from __future__ import annotations

import pytest

from ntkit.errors import DumpError
from ntkit.syntax.render import Renderer, check_key, render
from ntkit.tree import NULL, DictNode, ListNode, TextNode
from tests.conftest import make_nt, parametrize, roundtrip


def d(*entries: tuple[str, object]) -> DictNode:
    """Shorthand for building a `DictNode` in tests."""
    return DictNode(tuple(entries))  # type: ignore[arg-type]


def test_null_renders_nothing() -> None:
    """An empty document renders as empty text."""
    assert render(NULL) == ""


def test_root_text_uses_multiline_marker() -> None:
    """A scalar at the root cannot be written inline."""
    assert render(TextNode("hello")) == "> hello"
    assert render(TextNode("")) == "> "


def test_flat_dictionary_renders_inline() -> None:
    """Single-line values follow the key on the same line."""
    node = d(("name", TextNode("John Doe")), ("age", TextNode("42")))
    assert render(node) == "name: John Doe\nage: 42"


def test_empty_text_under_key_keeps_separator() -> None:
    """An empty scalar still renders as ``key: ``."""
    assert render(d(("a", TextNode("")))) == "a: "


def test_null_under_key_renders_bare_key() -> None:
    """A NULL value renders the key with nothing after the colon."""
    assert render(d(("a", NULL), ("b", TextNode("1")))) == "a:\nb: 1"


def test_list_renders_dash_items() -> None:
    """List items render after ``- ``."""
    assert render(ListNode((TextNode("a"), TextNode("b")))) == "- a\n- b"


def test_nested_containers_are_indented() -> None:
    """Containers render on the following lines, one indent deeper."""
    node = d(
        ("server", d(("host", TextNode("example.org")))),
        ("ports", ListNode((TextNode("80"), d(("tls", TextNode("yes")))))),
    )
    assert render(node) == "\n".join(
        [
            "server:",
            "    host: example.org",
            "ports:",
            "    - 80",
            "    -",
            "        tls: yes",
        ]
    )


def test_multiline_text_renders_one_line_per_segment() -> None:
    """Multi-line text uses ``>`` lines and bare ``>`` for empty segments."""
    assert render(TextNode("a\n\nb")) == "> a\n>\n> b"
    assert render(d(("poem", TextNode("roses\nare red")))) == "poem:\n    > roses\n    > are red"


def test_trailing_line_break_in_text_survives() -> None:
    """A text ending with a line break keeps its final empty segment."""
    assert render(TextNode("a\n")) == "> a\n>"


def test_indent_option() -> None:
    """The indentation width is configurable."""
    node = d(("a", ListNode((TextNode("x"),))))
    assert render(node, indent=2) == "a:\n  - x"


def test_eol_option() -> None:
    """Lines are joined with the configured terminator; none is appended at the end."""
    node = d(("a", TextNode("1")), ("b", TextNode("2")))
    assert render(node, eol="\r\n") == "a: 1\r\nb: 2"


def test_multiline_text_is_split_on_configured_eol() -> None:
    """With CRLF output, text containing CRLF renders as a multiline string."""
    renderer = Renderer(eol="\r\n", indent=2)
    assert renderer.render(TextNode("a\r\nb")) == "> a\r\n> b"


@parametrize(
    "node, eol",
    [
        (d(("key", TextNode("line1\nline2"))), "\r\n"),
        (ListNode((TextNode("a\nb"),)), "\r\n"),
        (TextNode("a\nb"), "\r"),
        (d(("k", TextNode("a\rb"))), "\n"),
        (ListNode((TextNode("a\rb"),)), "\n"),
        (TextNode("a\r"), "\n"),
        (TextNode("one\ntwo\rthree"), "\n"),
    ],
)
def test_stray_line_breaks_in_text_are_refused(
    node: DictNode | ListNode | TextNode, eol: str
) -> None:
    """Text with a line break other than the configured terminator cannot be written."""
    with pytest.raises(DumpError, match="contains a line break"):
        render(node, eol=eol)


def test_crlf_document_with_lf_joined_text_is_refused() -> None:
    """Multiline text read from a CRLF document is joined with LF and cannot be dumped as CRLF."""
    nt = make_nt(eol="\r\n")
    value = nt.loads("key:\r\n    > line1\r\n    > line2\r\n")
    assert value == {"key": "line1\nline2"}
    with pytest.raises(DumpError):
        nt.dumps(value)
    assert make_nt().dumps(value) == "key:\n    > line1\n    > line2"


@parametrize(
    "key",
    ["a\nb", "a\rb", "[a", "{a", "#a", "- a", "> a", " a", "a ", "a: b"],
)
def test_check_key_rejects_unrepresentable_keys(key: str) -> None:
    """Keys that would not read back unchanged are refused."""
    with pytest.raises(DumpError) as info:
        check_key(key)
    assert repr(key) in info.value.message


@parametrize("key", ["a", "a:b", "-a", ">a", "a]", "url:http", "spaced key", "a#b", ""])
def test_check_key_accepts_plain_keys(key: str) -> None:
    """Other keys pass unchanged."""
    check_key(key)


def test_render_validates_keys() -> None:
    """Rendering a dictionary checks every key."""
    with pytest.raises(DumpError):
        render(d(("#comment", TextNode("x"))))


@parametrize(
    "node",
    [
        d(("name", TextNode("Alice")), ("tags", ListNode((TextNode("a"), TextNode("b"))))),
        ListNode((d(("k", TextNode("v"))), TextNode("multi\nline"), TextNode("x"))),
        d(("text", TextNode("\nstarts and ends blank\n"))),
        TextNode("root"),
    ],
)
def test_rendered_output_parses_back(node: DictNode | ListNode | TextNode) -> None:
    """Rendered trees read back equal to themselves."""
    assert roundtrip(node) == node
    assert roundtrip(node, indent=2) == node
