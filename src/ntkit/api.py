# topmark:header:start
#
#   project      : NTKit
#   file         : api.py
#   file_relpath : src/ntkit/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public NTKit API (stable surface).

`NestedText` bundles a frozen `Config` with the engines that use it:

```python
from dataclasses import dataclass

from ntkit import NestedText, TypeMappingRules


@dataclass
class User:
    name: str
    email: str | None = None


nt = NestedText({"indent": 2})
user = nt.loads("name: Alice", User)
assert nt.dumps(user) == "name: Alice\\nemail:"

quiet = NestedText().config.with_rules(User, TypeMappingRules(ignore_when_null={"email"}))
assert NestedText(quiet).dumps(User("Bob")) == "name: Bob"
```

Forward direction: source -> lines -> tokens -> value tree -> typed value.
Reverse direction: value -> value tree -> text.

Without a target type, loading returns plain ``None``/``str``/``list``/``dict``
values and no type rules apply.

Configuration contract
----------------------
- ``config`` accepts a frozen `Config`, a plain mapping mirroring the TOML
  settings table (``{"eol": "crlf", "indent": 2}``), or ``None`` for defaults.
- Instances hold no mutable state and may be shared between threads.

The module-level `loads`, `load`, `parse_tree`, `dumps` and `dump` functions use
a shared default instance.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Union

from ntkit.binding.deserializer import Deserializer
from ntkit.binding.introspector import Introspector
from ntkit.config.io import config_from_table
from ntkit.config.logging import get_logger
from ntkit.config.model import DEFAULT_CONFIG, Config
from ntkit.errors import ConfigError
from ntkit.reader import read_lines
from ntkit.syntax.parser import Parser
from ntkit.syntax.render import Renderer
from ntkit.syntax.scanner import Scanner
from ntkit.tree import to_python

if TYPE_CHECKING:
    from ntkit.config.logging import NtkitLogger
    from ntkit.syntax.tokens import Token
    from ntkit.tree import Node

logger: NtkitLogger = get_logger(__name__)

# Documents given as text, encoded bytes, or a path to a file
TextSource = Union[str, bytes, bytearray, Path]
FileSource = Union[bytes, bytearray, str, "os.PathLike[str]"]


def _coerce_config(config: Config | Mapping[str, Any] | None) -> Config:
    if config is None:
        return DEFAULT_CONFIG
    if isinstance(config, Config):
        return config
    if isinstance(config, Mapping):
        return config_from_table(dict(config), where="config")
    raise ConfigError(f"config must be a Config or a mapping, got {type(config).__name__}")


class NestedText:
    """Load and dump NestedText with one configuration.

    Args:
        config (Config | Mapping[str, Any] | None): Engine configuration.

    Raises:
        ConfigError: If ``config`` is invalid.
    """

    __slots__ = ("_config", "_deserializer", "_introspector", "_renderer")

    def __init__(self, config: Config | Mapping[str, Any] | None = None) -> None:
        self._config: Config = _coerce_config(config)
        self._deserializer = Deserializer(self._config.registry)
        self._introspector = Introspector(self._config.registry)
        self._renderer = Renderer(eol=self._config.eol, indent=self._config.indent)

    def __repr__(self) -> str:
        return f"NestedText({self._config!r})"

    @property
    def config(self) -> Config:
        """The frozen configuration of this instance."""
        return self._config

    # --- forward direction ---

    def parse_tree(self, source: TextSource) -> Node:
        """Parse a document into its value tree.

        Args:
            source (TextSource): Text, encoded bytes, or a `Path` to read.

        Returns:
            Node: The document root (`NULL` for an empty document).

        Raises:
            DecodeError: If bytes cannot be decoded.
            LexicalError: For malformed lines or indentation.
            ParseError: For misplaced structure or duplicate keys.
        """
        lines: list[str] = read_lines(source)
        tokens: list[Token] = Scanner(lines).scan()
        return Parser(tokens, lines).parse()

    def convert(self, node: Node, target: Any) -> Any:
        """Bind a value tree to ``target`` (a class or a type hint).

        Raises:
            BindingError: If the tree does not fit the target.
        """
        return self._deserializer.convert(node, target)

    def loads(self, text: str | bytes | bytearray, target: Any = None) -> Any:
        """Load a document from text or encoded bytes.

        Args:
            text (str | bytes | bytearray): The document.
            target (Any): Class or type hint to bind to; ``None`` for plain values.

        Returns:
            Any: The bound value, or plain ``None``/``str``/``list``/``dict`` values.
        """
        tree: Node = self.parse_tree(text)
        return to_python(tree) if target is None else self.convert(tree, target)

    def load(self, source: FileSource, target: Any = None) -> Any:
        """Load a document from a file path or encoded bytes.

        Args:
            source (FileSource): A path (``str`` or path-like) or encoded bytes.
            target (Any): Class or type hint to bind to; ``None`` for plain values.

        Returns:
            Any: The bound value, or plain values.

        Raises:
            OSError: If the file cannot be read.
        """
        if isinstance(source, (bytes, bytearray)):
            return self.loads(source, target)
        path = Path(os.fspath(source))
        tree: Node = self.parse_tree(path)
        return to_python(tree) if target is None else self.convert(tree, target)

    # --- reverse direction ---

    def to_tree(self, obj: Any) -> Node:
        """Introspect a value into its value tree.

        Raises:
            DumpError: If the value cannot be represented.
        """
        return self._introspector.introspect(obj)

    def render(self, node: Node) -> str:
        """Render a value tree with this instance's line terminator and indentation.

        Raises:
            DumpError: If a key cannot be written as a key line.
        """
        return self._renderer.render(node)

    def dumps(self, obj: Any) -> str:
        """Dump a value as NestedText text (no trailing line terminator).

        Raises:
            DumpError: If the value cannot be represented.
        """
        return self.render(self.to_tree(obj))

    def dump(self, obj: Any, path: str | os.PathLike[str]) -> None:
        """Write a value to a UTF-8 file, ending with the configured line terminator.

        The text is rendered before the file is opened, so a failing dump leaves
        an existing file untouched.

        Raises:
            DumpError: If the value cannot be represented.
            OSError: If the file cannot be written.
        """
        text: str = self.dumps(obj)
        if text:
            text += self._config.eol
        target = Path(os.fspath(path))
        target.write_text(text, encoding="utf-8", newline="")
        logger.info("wrote %d character(s) to %s", len(text), target)


_DEFAULT = NestedText()


def parse_tree(source: TextSource) -> Node:
    """Parse a document with the default configuration. See `NestedText.parse_tree`."""
    return _DEFAULT.parse_tree(source)


def loads(text: str | bytes | bytearray, target: Any = None) -> Any:
    """Load a document with the default configuration. See `NestedText.loads`."""
    return _DEFAULT.loads(text, target)


def load(source: FileSource, target: Any = None) -> Any:
    """Load a file with the default configuration. See `NestedText.load`."""
    return _DEFAULT.load(source, target)


def dumps(obj: Any) -> str:
    """Dump a value with the default configuration. See `NestedText.dumps`."""
    return _DEFAULT.dumps(obj)


def dump(obj: Any, path: str | os.PathLike[str]) -> None:
    """Write a value with the default configuration. See `NestedText.dump`."""
    _DEFAULT.dump(obj, path)
