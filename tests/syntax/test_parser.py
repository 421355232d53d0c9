# topmark:header:start
#
#   project      : NTKit
#   file         : test_parser.py
#   file_relpath : tests/syntax/test_parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Parser tests: document shapes, nesting, and syntactic errors with locations."""

from __future__ import annotations

import pytest

from ntkit.errors import LexicalError, NestedTextError, ParseError
from ntkit.syntax.parser import Parser, parse_text
from ntkit.syntax.tokens import Token, TokenKind
from ntkit.tree import NULL, DictNode, ListNode, TextNode, to_python
from tests.conftest import parametrize


@parametrize("text", ["", "# just a comment\n", "\n\n   \n"])
def test_empty_documents_are_null(text: str) -> None:
    """Documents without content parse to NULL."""
    assert parse_text(text) is NULL


def test_empty_token_list_is_null() -> None:
    """A parser over no tokens at all yields NULL."""
    assert Parser([]).parse() is NULL


def test_flat_dictionary_keeps_order() -> None:
    """Key order is preserved and all scalars stay text."""
    node = parse_text("name: John Doe\nage: 42")
    assert node == DictNode((("name", TextNode("John Doe")), ("age", TextNode("42"))))
    assert node.keys() == ["name", "age"]  # type: ignore[union-attr]


def test_list_item_with_multiline_string() -> None:
    """A nested multiline string joins its segments with a line feed."""
    node = parse_text("-\n  > line1\n  > line2")
    assert node == ListNode((TextNode("line1\nline2"),))


def test_nested_structures() -> None:
    """Lists and dictionaries nest through indentation."""
    text = "\n".join(
        [
            "server:",
            "    host: example.org",
            "    ports:",
            "        - 80",
            "        - 443",
            "    tags:",
            "        -",
            "            name: a",
            "        - plain",
            "owner: ops",
        ]
    )
    assert to_python(parse_text(text)) == {
        "server": {
            "host": "example.org",
            "ports": ["80", "443"],
            "tags": [{"name": "a"}, "plain"],
        },
        "owner": "ops",
    }


def test_empty_values_are_empty_text() -> None:
    """Markers without text and without nested block hold empty text."""
    assert to_python(parse_text("a:\nb: ")) == {"a": "", "b": ""}
    assert to_python(parse_text("-\n-\n- x")) == ["", "", "x"]


def test_multiline_string_blank_segments() -> None:
    """Bare ``>`` lines contribute empty segments, including a trailing one."""
    assert parse_text(">\n> middle\n>") == TextNode("\nmiddle\n")
    assert parse_text("> ") == TextNode("")


def test_multiline_string_under_key() -> None:
    """A key may hold a multiline string."""
    node = parse_text("poem:\n  > roses\n  >   are red")
    assert to_python(node) == {"poem": "roses\n  are red"}


def test_comments_inside_blocks_are_ignored() -> None:
    """Comment lines may appear at any indentation inside a block."""
    node = parse_text("a:\n  # note\n  b: 1\n# top\nc: 2")
    assert to_python(node) == {"a": {"b": "1"}, "c": "2"}


def test_inline_flow_syntax_stays_text() -> None:
    """Bracketed values are text; only keys may not start with a bracket."""
    node = parse_text("list: [1, 2]\nmap: {a: 1}")
    assert to_python(node) == {"list": "[1, 2]", "map": "{a: 1}"}


def test_duplicate_key_is_reported_at_second_occurrence() -> None:
    """A repeated key in one dictionary is an error located at its line."""
    with pytest.raises(ParseError) as info:
        parse_text("a: 1\na: 2")
    err: ParseError = info.value
    assert err.message == "duplicate key: a."
    assert err.lineno == 1
    assert err.colno == 0
    assert err.line == "a: 2"


def test_same_key_in_different_dictionaries_is_fine() -> None:
    """Uniqueness is per dictionary."""
    node = parse_text("x:\n  a: 1\ny:\n  a: 2")
    assert to_python(node) == {"x": {"a": "1"}, "y": {"a": "2"}}


def test_partial_dedent_is_reported_at_offending_line() -> None:
    """Dedenting between two open levels fails at the dedented line."""
    with pytest.raises(NestedTextError) as info:
        parse_text("key1:\n    key2: value\n  key3: value")
    assert isinstance(info.value, LexicalError)
    assert info.value.lineno == 2


def test_top_level_indentation_is_rejected() -> None:
    """The first content line must start in column 1."""
    with pytest.raises(ParseError) as info:
        parse_text("  a: 1")
    assert info.value.message == "top-level content must start in column 1."
    assert (info.value.lineno, info.value.colno) == (0, 2)


@parametrize(
    "text, message, lineno",
    [
        ("- a\nb: 1", "expected list item.", 1),
        ("- a\n> b", "expected list item.", 1),
        ("a: 1\n- b", "expected dictionary item.", 1),
        ("a: 1\n> b", "expected dictionary item.", 1),
        ("> a\n- b", "expected string.", 1),
        ("> a\nb: 1", "expected string.", 1),
    ],
)
def test_mixed_sibling_kinds(text: str, message: str, lineno: int) -> None:
    """Siblings at one level must all be of the same kind."""
    with pytest.raises(ParseError) as info:
        parse_text(text)
    assert info.value.message == message
    assert info.value.lineno == lineno


def test_indent_after_inline_value_is_invalid() -> None:
    """An indented line after a value given on the key line is an error."""
    with pytest.raises(ParseError) as info:
        parse_text("a: 1\n  b: 2")
    assert info.value.message == "invalid indentation."
    assert info.value.lineno == 1
    assert info.value.colno == 0


def test_unexpected_token_at_object_start() -> None:
    """A parser fed a stream starting with a stray token reports what it expected."""
    tokens = [
        Token(TokenKind.STRING, "oops", 0, 0),
        Token(TokenKind.EOF, None, 1, 0),
    ]
    with pytest.raises(ParseError) as info:
        Parser(tokens, ["oops"]).parse()
    assert info.value.message == (
        "expected a list ('-'), dictionary ('key:'), or multiline string ('>')."
    )
    assert info.value.line == "oops"


def test_error_message_is_one_based() -> None:
    """The rendered message shows 1-based line and column numbers."""
    with pytest.raises(ParseError) as info:
        parse_text("a: 1\na: 2")
    assert str(info.value) == "line 2, column 1: duplicate key: a."
