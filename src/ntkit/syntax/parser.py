# topmark:header:start
#
#   project      : NTKit
#   file         : parser.py
#   file_relpath : src/ntkit/syntax/parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Recursive-descent parser from tokens to a value tree.

Grammar (one production per structural marker):

    document   := EOF | object EOF
    object     := list | dictionary | multiline
    list       := (DASH item)+
    dictionary := (KEY item)+
    item       := NEWLINE INDENT object DEDENT | STRING [NEWLINE] | [NEWLINE]
    multiline  := (GREATER [STRING] [NEWLINE])+

Siblings must all be of the same kind: a KEY among list items, a DASH among
dictionary items, and so on are errors. An INDENT that does not follow an empty
item is an indentation error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ntkit.config.logging import get_logger
from ntkit.errors import ParseError
from ntkit.syntax.scanner import scan_lines, split_lines
from ntkit.syntax.tokens import Token, TokenKind
from ntkit.tree import NULL, DictNode, ListNode, TextNode

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ntkit.config.logging import NtkitLogger
    from ntkit.tree import Node

logger: NtkitLogger = get_logger(__name__)

_EXPECTED_OBJECT = "expected a list ('-'), dictionary ('key:'), or multiline string ('>')."


class Parser:
    """Parse a token stream into a value tree.

    Args:
        tokens (Sequence[Token]): Token stream as produced by the scanner.
        lines (Sequence[str] | None): Source lines, used only to enrich error messages.
    """

    def __init__(self, tokens: Sequence[Token], lines: Sequence[str] | None = None) -> None:
        self._tokens: Sequence[Token] = tokens
        self._lines: Sequence[str] | None = lines
        self._pos: int = 0

    # --- entry point ---

    def parse(self) -> Node:
        """Parse the whole token stream.

        Returns:
            Node: The document node; `NULL` for an empty document.

        Raises:
            ParseError: On any grammar violation.
        """
        if not self._tokens or self._peek().kind is TokenKind.EOF:
            return NULL
        if self._check(TokenKind.INDENT):
            raise self._error(self._peek(), "top-level content must start in column 1.")

        root: Node = self._parse_object()
        if not self._check(TokenKind.EOF):
            raise self._error(self._peek(), "expected end of input.")
        logger.debug("parsed document root: %s", type(root).__name__)
        return root

    # --- productions ---

    def _parse_object(self) -> Node:
        kind: TokenKind = self._peek().kind
        if kind is TokenKind.DASH:
            return self._parse_list()
        if kind is TokenKind.GREATER:
            return self._parse_multiline()
        if kind is TokenKind.KEY:
            return self._parse_dictionary()
        raise self._error(self._peek(), _EXPECTED_OBJECT)

    def _parse_list(self) -> ListNode:
        first: Token = self._peek()
        items: list[Node] = []
        while self._match(TokenKind.DASH):
            items.append(self._parse_item())

        self._check_siblings(
            first,
            unexpected=(TokenKind.KEY, TokenKind.GREATER),
            message="expected list item.",
        )
        return ListNode(tuple(items))

    def _parse_dictionary(self) -> DictNode:
        first: Token = self._peek()
        entries: list[tuple[str, Node]] = []
        seen: set[str] = set()
        while self._check(TokenKind.KEY):
            key_token: Token = self._advance()
            key = str(key_token.literal)
            if key in seen:
                raise self._error(key_token, f"duplicate key: {key}.")
            seen.add(key)
            entries.append((key, self._parse_item()))

        self._check_siblings(
            first,
            unexpected=(TokenKind.DASH, TokenKind.GREATER),
            message="expected dictionary item.",
        )
        return DictNode(tuple(entries))

    def _parse_multiline(self) -> TextNode:
        first: Token = self._peek()
        parts: list[str] = []
        while self._match(TokenKind.GREATER):
            if self._check(TokenKind.STRING):
                parts.append(str(self._advance().literal))
            else:
                parts.append("")
            if not self._match(TokenKind.NEWLINE):
                break

        self._check_siblings(
            first,
            unexpected=(TokenKind.DASH, TokenKind.KEY),
            message="expected string.",
        )
        return TextNode("\n".join(parts))

    def _parse_item(self) -> Node:
        """Parse the value after a DASH or KEY marker."""
        if self._check(TokenKind.NEWLINE) and self._check_next(TokenKind.INDENT):
            self._advance()
            self._advance()
            value: Node = self._parse_object()
            self._consume(TokenKind.DEDENT, "invalid indentation.")
            return value
        if self._check(TokenKind.STRING):
            value = TextNode(str(self._advance().literal))
        else:
            value = TextNode("")
        self._match(TokenKind.NEWLINE)
        return value

    def _check_siblings(
        self,
        first: Token,
        *,
        unexpected: tuple[TokenKind, ...],
        message: str,
    ) -> None:
        """Reject a sibling of the wrong kind or a stray indent after a block.

        Stray indents are reported at the block's own column, on the indented line.
        """
        token: Token = self._peek()
        if token.kind in unexpected:
            raise self._error(token, message)
        if token.kind is TokenKind.INDENT:
            raise self._error(token, "invalid indentation.", colno=first.colno)

    # --- token helpers ---

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _check(self, kind: TokenKind) -> bool:
        return self._pos < len(self._tokens) and self._tokens[self._pos].kind is kind

    def _check_next(self, kind: TokenKind) -> bool:
        nxt: int = self._pos + 1
        return nxt < len(self._tokens) and self._tokens[nxt].kind is kind

    def _advance(self) -> Token:
        token: Token = self._tokens[self._pos]
        if token.kind is not TokenKind.EOF:
            self._pos += 1
        return token

    def _match(self, kind: TokenKind) -> bool:
        if self._check(kind):
            self._advance()
            return True
        return False

    def _consume(self, kind: TokenKind, message: str) -> Token:
        if self._check(kind):
            return self._advance()
        raise self._error(self._peek(), message)

    def _error(self, token: Token, message: str, *, colno: int | None = None) -> ParseError:
        line: str | None = None
        if self._lines is not None and 0 <= token.lineno < len(self._lines):
            line = self._lines[token.lineno]
        return ParseError(
            message,
            lineno=token.lineno,
            colno=token.colno if colno is None else colno,
            line=line,
        )


def parse_lines(lines: Iterable[str]) -> Node:
    """Scan and parse decoded lines.

    Args:
        lines (Iterable[str]): Lines without terminators.

    Returns:
        Node: The document node.
    """
    materialized: list[str] = list(lines)
    return Parser(scan_lines(materialized), materialized).parse()


def parse_text(text: str) -> Node:
    """Scan and parse a decoded document.

    Args:
        text (str): Whole document text.

    Returns:
        Node: The document node.
    """
    return parse_lines(split_lines(text))
