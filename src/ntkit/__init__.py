# topmark:header:start
#
#   project      : NTKit
#   file         : __init__.py
#   file_relpath : src/ntkit/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""NTKit package.

NTKit reads and writes NestedText, an indentation-structured text format with
three kinds of values (text, lists and dictionaries) and no implicit typing. It
binds documents to dataclasses, named tuples, containers and primitives
described by ordinary type hints, and dumps such values back to text.
"""

from __future__ import annotations

from ntkit.api import NestedText, dump, dumps, load, loads, parse_tree
from ntkit.binding import BindingContext, Converter, TypeMappingRules
from ntkit.config.io import config_from_toml_text, load_config_toml
from ntkit.config.model import Config, LineEnding
from ntkit.constants import NTKIT_VERSION
from ntkit.errors import (
    BindingError,
    ConfigError,
    DecodeError,
    DumpError,
    LexicalError,
    NestedTextError,
    ParseError,
)
from ntkit.tree import NULL, DictNode, ListNode, Node, NullNode, TextNode, from_python, to_python

__version__: str = NTKIT_VERSION

__all__: list[str] = [
    "NULL",
    "BindingContext",
    "BindingError",
    "Config",
    "ConfigError",
    "Converter",
    "DecodeError",
    "DictNode",
    "DumpError",
    "LexicalError",
    "LineEnding",
    "ListNode",
    "NestedText",
    "NestedTextError",
    "Node",
    "NullNode",
    "ParseError",
    "TextNode",
    "TypeMappingRules",
    "__version__",
    "config_from_toml_text",
    "dump",
    "dumps",
    "from_python",
    "load",
    "load_config_toml",
    "loads",
    "parse_tree",
    "to_python",
]
