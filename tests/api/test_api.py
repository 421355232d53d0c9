# topmark:header:start
#
#   project      : NTKit
#   file         : test_api.py
#   file_relpath : tests/api/test_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public API tests: the `NestedText` facade and module-level helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

import pytest

import ntkit
from ntkit import (
    BindingError,
    ConfigError,
    DecodeError,
    DumpError,
    LexicalError,
    NestedText,
    NestedTextError,
    ParseError,
    TypeMappingRules,
)
from ntkit.tree import NULL, DictNode, ListNode, TextNode
from tests.conftest import make_config, make_nt, parametrize

if TYPE_CHECKING:
    from pathlib import Path


@dataclass
class Person:
    name: str
    address: Optional[str] = None


@dataclass
class Server:
    host: str
    port: int = 80
    aliases: list[str] = field(default_factory=list)


# --- scenarios ---


def test_flat_dictionary_loads_as_text() -> None:
    """Scalars are text and keys keep their order."""
    data = ntkit.loads("name: John Doe\nage: 42")
    assert data == {"name": "John Doe", "age": "42"}
    assert list(data) == ["name", "age"]


def test_list_with_multiline_item() -> None:
    """A multiline string inside a list item joins with line feeds."""
    assert ntkit.loads("-\n  > line1\n  > line2") == ["line1\nline2"]


def test_ignore_when_null_leaves_no_trailing_separator() -> None:
    """A skipped null member leaves no trace in the output."""
    cfg = make_nt().config.with_rules(Person, TypeMappingRules(ignore_when_null={"address"}))
    assert NestedText(cfg).dumps(Person("Alice")) == "name: Alice"
    assert ntkit.dumps(Person("Alice")) == "name: Alice\naddress:"


def test_partial_dedent_fails_at_offending_line() -> None:
    """The indentation error is located at the dedented line."""
    with pytest.raises(LexicalError) as info:
        ntkit.loads("key1:\n    key2: value\n  key3: value")
    assert info.value.lineno == 2
    assert info.value.line == "  key3: value"


def test_duplicate_key_fails_at_second_occurrence() -> None:
    """The duplicate key error is located at the repeated key."""
    with pytest.raises(ParseError) as info:
        ntkit.loads("a: 1\na: 2")
    assert info.value.lineno == 1


# --- loading ---


def test_loads_with_target() -> None:
    """A target type binds the document."""
    server: Server = ntkit.loads("host: example.org\naliases:\n  - www", Server)
    assert server == Server("example.org", 80, ["www"])


def test_loads_empty_document() -> None:
    """An empty document is ``None`` with or without a target."""
    assert ntkit.loads("") is None
    assert ntkit.loads("# only a comment", Server) is None


def test_loads_bytes() -> None:
    """Encoded documents are decoded strictly; a BOM is dropped."""
    assert ntkit.loads(b"\xef\xbb\xbfa: 1") == {"a": "1"}
    with pytest.raises(DecodeError) as info:
        ntkit.loads(b"a: \xc3")
    assert info.value.offset == 3


def test_load_from_path_and_bytes(tmp_path: Path) -> None:
    """``load`` accepts paths (as ``str`` or path-like) and bytes."""
    path: Path = tmp_path / "server.nt"
    path.write_bytes(b"host: db\r\nport: 5432\r\n")
    assert ntkit.load(path, Server) == Server("db", 5432)
    assert ntkit.load(str(path)) == {"host": "db", "port": "5432"}
    assert ntkit.load(b"- x") == ["x"]


def test_load_missing_file(tmp_path: Path) -> None:
    """Missing files raise ``OSError``."""
    with pytest.raises(OSError):
        ntkit.load(tmp_path / "absent.nt")


def test_parse_tree_and_convert() -> None:
    """The two forward stages can be run separately."""
    nt = make_nt()
    node = nt.parse_tree("port: 8080\nhost: h")
    assert node == DictNode((("port", TextNode("8080")), ("host", TextNode("h"))))
    assert nt.convert(node, Server) == Server("h", 8080)
    assert ntkit.parse_tree("") is NULL


def test_binding_errors_surface() -> None:
    """Binding failures name the member."""
    with pytest.raises(BindingError) as info:
        ntkit.loads("host: h\nport: eighty", Server)
    assert info.value.member == "port"


# --- dumping ---


def test_dumps_layout_options() -> None:
    """Line terminator and indentation come from the configuration."""
    nt = make_nt(eol="\r\n", indent=2)
    assert nt.dumps({"a": ["1", "2"]}) == "a:\r\n  - 1\r\n  - 2"


def test_to_tree_and_render() -> None:
    """The two reverse stages can be run separately."""
    nt = make_nt()
    node = nt.to_tree(["x", {"k": None}])
    assert node == ListNode((TextNode("x"), DictNode((("k", NULL),))))
    assert nt.render(node) == "- x\n-\n    k:"


def test_dump_writes_final_line_terminator(tmp_path: Path) -> None:
    """Files end with the configured terminator."""
    path: Path = tmp_path / "out.nt"
    make_nt(eol="\r\n").dump(Server("h"), path)
    assert path.read_bytes() == b"host: h\r\nport: 80\r\naliases:\r\n"
    assert ntkit.load(path, Server) == Server("h", 80, [])


def test_dump_empty_value_writes_empty_file(tmp_path: Path) -> None:
    """``None`` dumps to an empty file."""
    path: Path = tmp_path / "empty.nt"
    ntkit.dump(None, path)
    assert path.read_bytes() == b""


def test_failed_dump_leaves_file_untouched(tmp_path: Path) -> None:
    """Rendering happens before the file is opened."""
    path: Path = tmp_path / "keep.nt"
    path.write_text("old", encoding="utf-8")
    with pytest.raises(DumpError):
        ntkit.dump({"bad": object()}, path)
    assert path.read_text(encoding="utf-8") == "old"


def test_unrepresentable_key() -> None:
    """Keys that would not read back are refused."""
    with pytest.raises(DumpError):
        ntkit.dumps({"- a": "1"})


def test_colliding_rename_fails_both_ways() -> None:
    """A rename onto another member's key is a library error on dump and load."""
    cfg = make_config().with_rules(Person, TypeMappingRules(rename={"name": "address"}))
    nt = NestedText(cfg)
    with pytest.raises(NestedTextError):
        nt.dumps(Person("Ann", "Elm St"))
    with pytest.raises(BindingError):
        nt.loads("address: Elm St", Person)


@parametrize(
    "value",
    [
        {"name": "Alice", "tags": ["a", "b"], "bio": "line one\nline two\n"},
        ["x", ["y", {"z": ""}]],
        "just text",
    ],
)
def test_plain_round_trip(value: object) -> None:
    """Plain values survive a dump and load."""
    assert ntkit.loads(ntkit.dumps(value)) == value


def test_typed_round_trip() -> None:
    """Structured values survive a dump and load with their target type."""
    server = Server("example.org", 8443, ["a", "b"])
    nt = make_nt(indent=2)
    assert nt.loads(nt.dumps(server), Server) == server


# --- configuration ---


def test_mapping_config() -> None:
    """A plain mapping is read like the TOML settings table."""
    nt = NestedText({"eol": "crlf", "indent": 2})
    assert nt.config == make_config(eol="\r\n", indent=2)
    assert "NestedText(" in repr(nt)


@parametrize("config", [{"indent": 0}, {"eol": "tab"}, 42])
def test_invalid_config(config: object) -> None:
    """Invalid configuration fails at construction."""
    with pytest.raises(ConfigError):
        NestedText(config)  # type: ignore[arg-type]


def test_config_instance_is_used_as_is() -> None:
    """A `Config` instance is not copied."""
    cfg = make_config(indent=3)
    assert NestedText(cfg).config is cfg


# --- package surface ---


def test_public_names() -> None:
    """Everything in ``__all__`` is importable from the package."""
    for name in ntkit.__all__:
        assert hasattr(ntkit, name), name
    assert isinstance(ntkit.__version__, str)


def test_all_errors_are_nestedtext_errors() -> None:
    """Callers can catch one base class."""
    for cls in (BindingError, ConfigError, DecodeError, DumpError, LexicalError, ParseError):
        assert issubclass(cls, NestedTextError)
