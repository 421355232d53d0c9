# topmark:header:start
#
#   project      : NTKit
#   file         : scanner.py
#   file_relpath : src/ntkit/syntax/scanner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Line scanner: turns decoded text lines into a flat token stream.

Each significant line yields, in order:

    [INDENT | DEDENT...] (DASH | GREATER | KEY) [STRING] NEWLINE

Blank lines and comment lines (first non-space character ``#``) yield nothing
and leave the indentation state untouched. At end of input the final NEWLINE is
dropped, one DEDENT is emitted per open indentation level, and a single EOF
closes the stream.

Indentation is tracked with a strictly increasing stack of columns that starts at
``[0]``. A dedent must land exactly on a column already on the stack; anything else
is a partial dedent.

Error columns:
    Indentation errors report the *actual* indentation of the offending line, not
    the column the scanner expected.
"""

from __future__ import annotations

import re
import unicodedata
from typing import TYPE_CHECKING, Final

from ntkit.config.logging import get_logger
from ntkit.constants import (
    COMMENT_CHAR,
    DASH_CHAR,
    GREATER_CHAR,
    KEY_TERMINATOR,
    RESERVED_KEY_STARTS,
)
from ntkit.errors import LexicalError
from ntkit.syntax.tokens import Token, TokenKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ntkit.config.logging import NtkitLogger

logger: NtkitLogger = get_logger(__name__)

# Only the three classic line terminators split lines; U+2028 and friends are content.
_LINE_BREAK_RE: Final[re.Pattern[str]] = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> list[str]:
    r"""Split text into lines on ``\r\n``, ``\r`` and ``\n``.

    A trailing terminator does not produce an extra empty line.

    Args:
        text (str): Decoded document text.

    Returns:
        list[str]: Lines without their terminators.
    """
    if not text:
        return []
    lines: list[str] = _LINE_BREAK_RE.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def _describe_indent_char(ch: str) -> str:
    """Return the error message for a forbidden indentation character."""
    if ch.isascii():
        return f"invalid character in indentation: {ch!r}."
    name: str = unicodedata.name(ch, "UNKNOWN")
    return f"invalid character in indentation: {ch!r} ({name})."


class Scanner:
    """Single-use tokenizer over a sequence of text lines.

    Args:
        lines (Iterable[str]): Decoded lines without line terminators.
    """

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines: Iterable[str] = lines
        self._indents: list[int] = [0]
        self._tokens: list[Token] = []
        self._line_count: int = 0
        self._done: bool = False

    def scan(self) -> list[Token]:
        """Tokenize all lines.

        Returns:
            list[Token]: The token stream, terminated by exactly one EOF token.

        Raises:
            LexicalError: On forbidden indentation characters, partial dedents,
                reserved key characters or lines without a key terminator.
            RuntimeError: If called twice on the same scanner.
        """
        if self._done:
            raise RuntimeError("Scanner instances are single-use")
        self._done = True

        for lineno, line in enumerate(self._lines):
            self._scan_line(line, lineno)
            self._line_count = lineno + 1

        if self._tokens and self._tokens[-1].kind is TokenKind.NEWLINE:
            self._tokens.pop()

        while len(self._indents) > 1:
            self._indents.pop()
            self._emit(TokenKind.DEDENT, self._line_count, self._indents[-1], self._indents[-1])
        self._emit(TokenKind.EOF, self._line_count, 0)

        logger.debug("scanned %d line(s) into %d token(s)", self._line_count, len(self._tokens))
        return self._tokens

    def _emit(
        self,
        kind: TokenKind,
        lineno: int,
        colno: int,
        literal: str | int | None = None,
    ) -> None:
        token = Token(kind=kind, literal=literal, lineno=lineno, colno=colno)
        logger.trace("token %s", token)
        self._tokens.append(token)

    def _scan_line(self, line: str, lineno: int) -> None:
        indent: int = len(line) - len(line.lstrip(" "))
        rest: str = line[indent:]

        if rest and rest[0].isspace():
            raise LexicalError(
                _describe_indent_char(rest[0]),
                lineno=lineno,
                colno=indent,
                line=line,
            )

        if not rest or rest[0] == COMMENT_CHAR:
            return

        self._scan_indentation(line, lineno, indent)

        head: str = rest[0]
        follower: str = rest[1:2]
        if head == DASH_CHAR and follower in ("", " "):
            self._scan_marker(TokenKind.DASH, line, lineno, indent)
        elif head == GREATER_CHAR and follower in ("", " "):
            self._scan_marker(TokenKind.GREATER, line, lineno, indent)
        else:
            self._scan_key(line, lineno, indent)

        self._emit(TokenKind.NEWLINE, lineno, len(line))

    def _scan_indentation(self, line: str, lineno: int, indent: int) -> None:
        top: int = self._indents[-1]
        if indent > top:
            self._indents.append(indent)
            self._emit(TokenKind.INDENT, lineno, indent, indent)
        elif indent < top:
            if indent not in self._indents:
                raise LexicalError(
                    "invalid indentation, partial dedent.",
                    lineno=lineno,
                    colno=indent,
                    line=line,
                )
            while self._indents[-1] > indent:
                self._indents.pop()
                self._emit(TokenKind.DEDENT, lineno, indent, self._indents[-1])

    def _scan_marker(self, kind: TokenKind, line: str, lineno: int, indent: int) -> None:
        """Emit a DASH or GREATER token plus the remainder of the line, if any."""
        self._emit(kind, lineno, indent)
        # Skip the marker and the single space that separates it from its text
        text_start: int = indent + 2
        if text_start < len(line):
            self._emit(TokenKind.STRING, lineno, text_start, line[text_start:])

    def _scan_key(self, line: str, lineno: int, indent: int) -> None:
        head: str = line[indent]
        if head in RESERVED_KEY_STARTS:
            raise LexicalError(
                f"key may not start with '{head}'.",
                lineno=lineno,
                colno=indent,
                line=line,
            )

        # A colon only terminates the key when followed by a space or end of line
        pos: int = line.find(KEY_TERMINATOR, indent)
        while pos != -1:
            after: int = pos + 1
            if after == len(line) or line[after] == " ":
                break
            pos = line.find(KEY_TERMINATOR, after)

        if pos == -1:
            raise LexicalError("unrecognized line.", lineno=lineno, colno=indent, line=line)

        self._emit(TokenKind.KEY, lineno, indent, line[indent:pos].rstrip())
        value_start: int = pos + 2
        if value_start < len(line):
            self._emit(TokenKind.STRING, lineno, value_start, line[value_start:])


def scan_lines(lines: Iterable[str]) -> list[Token]:
    """Tokenize a sequence of decoded lines.

    Args:
        lines (Iterable[str]): Lines without line terminators.

    Returns:
        list[Token]: Token stream terminated by EOF.
    """
    return Scanner(lines).scan()


def scan_text(text: str) -> list[Token]:
    """Tokenize a decoded document.

    Args:
        text (str): Whole document text.

    Returns:
        list[Token]: Token stream terminated by EOF.
    """
    return scan_lines(split_lines(text))
