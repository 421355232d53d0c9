# topmark:header:start
#
#   project      : NTKit
#   file         : tokens.py
#   file_relpath : src/ntkit/syntax/tokens.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Token types produced by the scanner and consumed by the parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Kinds of tokens in a NestedText token stream.

    DASH, GREATER and KEY open a list item, a multiline string segment and a
    dictionary item respectively. STRING carries the text that follows them on the
    same line. INDENT, DEDENT and NEWLINE are structural markers.
    """

    DASH = "dash"
    GREATER = "greater"
    KEY = "key"
    STRING = "string"
    INDENT = "indent"
    DEDENT = "dedent"
    NEWLINE = "newline"
    EOF = "eof"


@dataclass(frozen=True, slots=True)
class Token:
    """A single immutable token.

    Attributes:
        kind (TokenKind): The token kind.
        literal (str | int | None): Key text for KEY, value text for STRING, the new
            indentation width for INDENT and DEDENT, otherwise None.
        lineno (int): 0-based source line number.
        colno (int): 0-based column where the token starts.
    """

    kind: TokenKind
    literal: str | int | None
    lineno: int
    colno: int

    def __str__(self) -> str:
        if self.literal is None:
            return f"{self.kind.name}@{self.lineno}:{self.colno}"
        return f"{self.kind.name}({self.literal!r})@{self.lineno}:{self.colno}"
