# topmark:header:start
#
#   project      : NTKit
#   file         : __init__.py
#   file_relpath : src/ntkit/syntax/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""NestedText syntax: tokens, tokenizer, parser and renderer.

Forward direction: `split_lines` -> `Scanner` -> `Parser` -> value tree.
Reverse direction: value tree -> `Renderer` -> text.
"""

from __future__ import annotations

from ntkit.syntax.parser import Parser, parse_lines, parse_text
from ntkit.syntax.render import Renderer, check_key, render
from ntkit.syntax.scanner import Scanner, scan_lines, scan_text, split_lines
from ntkit.syntax.tokens import Token, TokenKind

__all__: list[str] = [
    "Parser",
    "Renderer",
    "Scanner",
    "Token",
    "TokenKind",
    "check_key",
    "parse_lines",
    "parse_text",
    "render",
    "scan_lines",
    "scan_text",
    "split_lines",
]
