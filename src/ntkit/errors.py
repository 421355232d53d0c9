# topmark:header:start
#
#   project      : NTKit
#   file         : errors.py
#   file_relpath : src/ntkit/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for NTKit.

All errors raised by NTKit derive from `NestedTextError`, so callers can catch a
single type around any load/dump call. Subclasses narrow the failing stage:

    - `LexicalError`: forbidden indentation whitespace, partial dedent, reserved key
      characters, unterminated keys.
    - `ParseError`: misplaced structural markers, duplicate keys, top-level indentation.
    - `BindingError`: text-to-value conversion and structured construction failures.
    - `DumpError`: introspection and rendering failures.
    - `DecodeError`: malformed encoded input, raised before tokenization starts.
    - `ConfigError`: invalid configuration values or TOML sources.

Location:
    ``lineno`` and ``colno`` are 0-based; ``None`` when the error is not tied to a
    source position. The rendered message shows them 1-based.
"""

from __future__ import annotations


class NestedTextError(Exception):
    """Base class for all NTKit errors.

    Attributes:
        message (str): Bare error message without location prefix.
        lineno (int | None): 0-based line number of the offending line, if known.
        colno (int | None): 0-based column of the offending character, if known.
        line (str | None): Text of the offending source line, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        lineno: int | None = None,
        colno: int | None = None,
        line: str | None = None,
    ) -> None:
        self.message: str = message
        self.lineno: int | None = lineno
        self.colno: int | None = colno
        self.line: str | None = line
        super().__init__(self._render())

    def _render(self) -> str:
        if self.lineno is None:
            return self.message
        if self.colno is None:
            return f"line {self.lineno + 1}: {self.message}"
        return f"line {self.lineno + 1}, column {self.colno + 1}: {self.message}"


class LexicalError(NestedTextError):
    """Error raised by the tokenizer."""


class ParseError(NestedTextError):
    """Error raised by the parser for well-formed tokens in an invalid arrangement."""


class BindingError(NestedTextError):
    """Error converting a value tree node into a typed value.

    Attributes:
        member (str | None): Name of the member being bound when the error occurred.
        target (str | None): Display name of the target type.
    """

    def __init__(
        self,
        message: str,
        *,
        member: str | None = None,
        target: str | None = None,
    ) -> None:
        self.member: str | None = member
        self.target: str | None = target
        super().__init__(message)


class DumpError(NestedTextError):
    """Error converting a typed value into a value tree or rendering it.

    Attributes:
        member (str | None): Name of the member being read when the error occurred.
        target (str | None): Display name of the source type.
    """

    def __init__(
        self,
        message: str,
        *,
        member: str | None = None,
        target: str | None = None,
    ) -> None:
        self.member: str | None = member
        self.target: str | None = target
        super().__init__(message)


class DecodeError(NestedTextError):
    """Error decoding raw bytes into text lines.

    Attributes:
        offset (int): Best-effort byte offset of the first undecodable byte.
        encoding (str): Encoding that was attempted.
    """

    def __init__(self, message: str, *, offset: int, encoding: str) -> None:
        self.offset: int = offset
        self.encoding: str = encoding
        super().__init__(message)


class ConfigError(NestedTextError):
    """Error for invalid configuration (bad values, malformed TOML, unknown types)."""
